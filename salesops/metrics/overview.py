"""Team overview snapshots: yesterday, week to date and the whole window.

Weekly targets are passed in by the caller; defaults live in the
benchmark configuration.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from salesops.metrics.pacing import week_start
from salesops.metrics.rates import Rates, closer_rates, setter_rates
from salesops.metrics.reducer import (
    CLOSER_FIELDS,
    SETTER_FIELDS,
    Number,
    Totals,
    reduce_rows,
    row_values,
)

SETTER_COMBINED: dict[str, tuple[str, ...]] = {
    "calls_booked": ("calls_booked_dials", "calls_booked_dms"),
    "responses": ("text_responses", "outbound_dm_responses"),
}


@dataclass(frozen=True)
class TeamOverview:
    """Snapshot of one role's reports over a window."""

    yesterday: Totals
    week_to_date: Totals
    period: Totals
    rates: Rates
    weekly_metric: str
    weekly_value: Number
    weekly_target: int
    weekly_progress: float


def yesterday(today: date) -> date:
    return today - timedelta(days=1)


def report_day(row: Any) -> date:
    """Report date of ``row``, accepting ISO strings."""
    value = row_values(row)["report_date"]
    return date.fromisoformat(value) if isinstance(value, str) else value


def target_progress(value: Number, target: Number) -> float:
    """Percent of ``target`` reached, capped at 100; 0 for a non-positive target."""
    if target <= 0:
        return 0.0
    return min(value / target * 100, 100.0)


def _windows(
    rows: Sequence[Any], today: date,
) -> tuple[list[Any], list[Any]]:
    day_before = yesterday(today)
    monday = week_start(today)
    yesterday_rows = [r for r in rows if report_day(r) == day_before]
    week_rows = [r for r in rows if report_day(r) >= monday]
    return yesterday_rows, week_rows


def setter_overview(
    rows: Iterable[Any],
    today: date,
    booked_target: int,
) -> TeamOverview:
    """Setter snapshot; weekly progress tracks calls booked against ``booked_target``."""
    rows = list(rows)
    yesterday_rows, week_rows = _windows(rows, today)

    def totals(subset: list[Any]) -> Totals:
        return reduce_rows(subset, fields=SETTER_FIELDS).with_sums(SETTER_COMBINED)

    week = totals(week_rows)
    period = totals(rows)
    booked = week.value("calls_booked")
    return TeamOverview(
        yesterday=totals(yesterday_rows),
        week_to_date=week,
        period=period,
        rates=setter_rates(period),
        weekly_metric="calls_booked",
        weekly_value=booked,
        weekly_target=booked_target,
        weekly_progress=target_progress(booked, booked_target),
    )


def closer_overview(
    rows: Iterable[Any],
    today: date,
    deals_target: int,
) -> TeamOverview:
    """Closer snapshot; weekly progress tracks deals closed against ``deals_target``."""
    rows = list(rows)
    yesterday_rows, week_rows = _windows(rows, today)

    week = reduce_rows(week_rows, fields=CLOSER_FIELDS)
    period = reduce_rows(rows, fields=CLOSER_FIELDS)
    deals = week.value("deals_closed")
    return TeamOverview(
        yesterday=reduce_rows(yesterday_rows, fields=CLOSER_FIELDS),
        week_to_date=week,
        period=period,
        rates=closer_rates(period),
        weekly_metric="deals_closed",
        weekly_value=deals,
        weekly_target=deals_target,
        weekly_progress=target_progress(deals, deals_target),
    )
