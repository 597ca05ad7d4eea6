"""Log context enrichment for planner runs."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog


def bind_context(**kwargs: object) -> None:
    """Bind key-value pairs to the current run's log records."""
    structlog.contextvars.bind_contextvars(**kwargs)


@contextmanager
def run_context(**fields: object) -> Iterator[None]:
    """Scope bound fields (command, slot count, ...) to a single planner run.

    Anything bound inside the block, including later bind_context() calls,
    is dropped when the block exits.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**fields)
    try:
        yield
    finally:
        structlog.contextvars.clear_contextvars()
