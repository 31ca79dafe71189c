"""Period comparator.

Percent change between the current reporting window and the window of
the same length immediately before it. Applied independently per metric.

Conventions:
- previous == 0 and current == 0 -> 0.0, and the comparison is marked as
  not displayable (``percent_change is None`` on ``PeriodComparison``).
- previous == 0 and current > 0 -> exactly 100.0 ("any growth from zero").
- previous > 0 -> ordinary relative change, may be negative.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from salesops.metrics.reducer import Number, Totals
from salesops.models.common import SalesOpsBase


class PeriodComparison(SalesOpsBase, frozen=True):
    """Current vs previous value of one metric."""

    metric_name: str
    current: float
    previous: float
    percent_change: float | None = None


def percent_change(current: Number, previous: Number) -> float:
    """Percent change from ``previous`` to ``current``."""
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def compare(metric_name: str, current: Number, previous: Number) -> PeriodComparison:
    """Compare one metric; change is None when both values are zero."""
    change = None if current == 0 and previous == 0 else percent_change(current, previous)
    return PeriodComparison(
        metric_name=metric_name,
        current=current,
        previous=previous,
        percent_change=change,
    )


def compare_totals(
    current: Totals,
    previous: Totals,
    metrics: Iterable[str] | None = None,
) -> dict[str, PeriodComparison]:
    """Compare each metric of two Totals (default: all metrics of ``current``).

    Optional metrics absent from either side are skipped.
    """
    names = list(current) if metrics is None else list(metrics)
    comparisons: dict[str, PeriodComparison] = {}
    for name in names:
        if (name in current and current[name] is None) or (
            name in previous and previous[name] is None
        ):
            continue
        comparisons[name] = compare(name, current.value(name), previous.value(name))
    return comparisons


def is_improvement(change: float, lower_is_better: bool = False) -> bool:
    """Whether a change reads as good news (a falling CPA is an improvement)."""
    if lower_is_better:
        return change < 0
    return change >= 0


def previous_period(date_from: date, date_to: date) -> tuple[date, date]:
    """Window of the same length ending the day before ``date_from``.

    Raises:
        ValueError: If ``date_to`` is before ``date_from``.
    """
    if date_to < date_from:
        msg = f"date_to {date_to} is before date_from {date_from}."
        raise ValueError(msg)
    span = date_to - date_from
    prev_to = date_from - timedelta(days=1)
    return prev_to - span, prev_to
