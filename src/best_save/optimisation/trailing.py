"""Carry the end of the previous period into feasibility checks."""

from __future__ import annotations

from typing import TypeVar

from best_save.config.schema import TrailingConfig

T = TypeVar("T")


def fill(value: T | None, count: int) -> list[T]:
    """Repeat ``value`` ``count`` times. Empty when value is None or count <= 0."""
    if value is None or count <= 0:
        return []
    return [value] * count


def build_trailing(value: object | None, count: int) -> tuple[bool, ...]:
    """Build the trailing on/off context from the previous period's last state."""
    return tuple(bool(v) for v in fill(value, count))


def trailing_from_config(config: TrailingConfig) -> tuple[bool, ...]:
    return build_trailing(config.last_value, config.last_count)
