"""Plan summary for a computed on/off schedule."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass
class OffPeriod:
    """A maximal run of off slots."""

    start: int
    length: int
    saving: float | None  # None when the run reaches the end of the horizon

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass
class SchedulePlan:
    """Prices, the chosen on/off state per slot, and what it is expected to save."""

    prices: list[float]
    on_off: list[bool]
    slot_savings: list[float | None]
    off_periods: list[OffPeriod] = field(default_factory=list)

    @property
    def total_slots(self) -> int:
        return len(self.on_off)

    @property
    def off_slots(self) -> int:
        return sum(1 for on in self.on_off if not on)

    @property
    def total_saving(self) -> float:
        return sum(s for s in self.slot_savings if s is not None)

    def to_dict(self) -> dict:
        """Serialise for JSON output."""
        return {
            "schedule": [
                {"index": i, "price": p, "on": on, "saving": s}
                for i, (p, on, s) in enumerate(zip(self.prices, self.on_off, self.slot_savings))
            ],
            "off_periods": [
                {"start": op.start, "length": op.length, "saving": op.saving}
                for op in self.off_periods
            ],
            "metrics": {
                "total_slots": self.total_slots,
                "off_slots": self.off_slots,
                "total_saving": self.total_saving,
            },
        }


def build_plan(prices: Sequence[float], on_off: Sequence[bool]) -> SchedulePlan:
    """Summarise a schedule.

    Each off slot saves its price minus the price of the slot where the load
    turns back on. Off runs that reach the end of the horizon have no known
    turn-on price and report no saving.
    """
    if len(prices) != len(on_off):
        raise ValueError(
            f"prices and on_off differ in length ({len(prices)} != {len(on_off)})"
        )

    n = len(prices)
    slot_savings: list[float | None] = [None] * n
    periods: list[OffPeriod] = []
    i = 0
    while i < n:
        if on_off[i]:
            i += 1
            continue
        start = i
        while i < n and not on_off[i]:
            i += 1
        run_saving: float | None = None
        if i < n:
            turn_on_price = prices[i]
            run_saving = 0.0
            for j in range(start, i):
                slot_savings[j] = prices[j] - turn_on_price
                run_saving += slot_savings[j]
        periods.append(OffPeriod(start=start, length=i - start, saving=run_saving))

    return SchedulePlan(
        prices=list(prices),
        on_off=list(on_off),
        slot_savings=slot_savings,
        off_periods=periods,
    )
