"""Goal pacing calculator.

Given cumulative cash against a goal and how far into the goal period we
are, computes progress, the amount expected by now, whether the member is
ahead or behind, and the daily amount still needed. Reverse funnel sizing
then works back from the remaining gap through the member's target rates
to the volumes (deals, shows, bookings / conversations, responses, DMs)
needed to close it.

All "needed" volumes round UP; under-provisioning the funnel is never
acceptable. Divisions use exact decimal arithmetic so that, for example,
3 conversations at a 30% rate need exactly 10 responses, not 11.

Target rates must be strictly positive. A zero or negative target is a
configuration error and raises ``InvalidAssumptionError``; contrast the
rate calculator, where a zero denominator is a normal "no data" state.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import StrEnum

from salesops.metrics.reducer import Number
from salesops.models.common import GoalType, TeamRole
from salesops.models.goals import GoalAssumptions


class PaceStatus(StrEnum):
    AHEAD = "ahead"
    BEHIND = "behind"


class InvalidAssumptionError(ValueError):
    """A target used for reverse funnel sizing is zero or negative."""

    def __init__(self, field: str, value: float) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} must be greater than 0 (got {value}).")


# Targets each role's reverse funnel divides by, in evaluation order.
ROLE_TARGETS: dict[TeamRole, tuple[str, ...]] = {
    TeamRole.CLOSER: ("target_aov", "target_close_rate", "target_show_rate"),
    TeamRole.SETTER: (
        "target_cash_per_booking",
        "target_booking_rate",
        "target_convo_rate",
        "target_response_rate",
    ),
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PaceResult:
    """Progress of ``current`` against ``goal`` at a point in the period."""

    current: float
    goal: float
    progress_percent: float
    expected_at_this_point: float
    pace_status: PaceStatus
    pace_diff_percent: float
    remaining: float
    days_remaining: int
    daily_amount_needed: float


@dataclass(frozen=True)
class CloserFunnelNeeds:
    deals_needed: int
    shows_needed: int
    bookings_needed: int


@dataclass(frozen=True)
class SetterFunnelNeeds:
    bookings_needed: int
    conversations_needed: int
    responses_needed: int
    dms_needed: int


@dataclass(frozen=True)
class GoalPlan:
    """Pacing plus the reverse funnel for one role."""

    role: TeamRole
    pace: PaceResult
    closer_needs: CloserFunnelNeeds | None = None
    setter_needs: SetterFunnelNeeds | None = None


@dataclass(frozen=True)
class PeriodWindow:
    """Calendar window of a goal and how much of it has elapsed."""

    start: date
    end: date
    days_in_period: int
    days_elapsed: int


# ---------------------------------------------------------------------------
# Pacing
# ---------------------------------------------------------------------------


def pace(
    current: Number,
    goal: Number,
    days_in_period: int,
    days_elapsed: int,
) -> PaceResult:
    """Compute pacing of ``current`` toward ``goal``.

    Raises:
        ValueError: If ``days_in_period`` is not positive or
            ``days_elapsed`` is negative.
    """
    if days_in_period <= 0:
        msg = f"days_in_period must be positive (got {days_in_period})."
        raise ValueError(msg)
    if days_elapsed < 0:
        msg = f"days_elapsed must not be negative (got {days_elapsed})."
        raise ValueError(msg)

    progress = min(current / goal * 100, 100.0) if goal > 0 else 0.0
    expected = goal / days_in_period * days_elapsed
    status = PaceStatus.AHEAD if current >= expected else PaceStatus.BEHIND
    diff = abs(current - expected) / expected * 100 if expected > 0 else 0.0
    days_remaining = max(days_in_period - days_elapsed, 0)
    daily = (goal - current) / days_remaining if days_remaining > 0 else 0.0

    return PaceResult(
        current=float(current),
        goal=float(goal),
        progress_percent=float(progress),
        expected_at_this_point=float(expected),
        pace_status=status,
        pace_diff_percent=float(diff),
        remaining=float(max(goal - current, 0)),
        days_remaining=days_remaining,
        daily_amount_needed=float(daily),
    )


# ---------------------------------------------------------------------------
# Reverse funnel sizing
# ---------------------------------------------------------------------------


def validate_assumptions(assumptions: GoalAssumptions, role: TeamRole) -> None:
    """Reject non-positive targets used by ``role``'s reverse funnel.

    Raises:
        InvalidAssumptionError: Naming the first offending target.
    """
    for field in ROLE_TARGETS[role]:
        value = getattr(assumptions, field)
        if value <= 0:
            raise InvalidAssumptionError(field, value)


def _ceil_div(numerator: Number, denominator: Number) -> int:
    return math.ceil(Decimal(str(numerator)) / Decimal(str(denominator)))


def closer_funnel_needs(
    remaining: Number, assumptions: GoalAssumptions,
) -> CloserFunnelNeeds:
    """Deals, shows and bookings needed to close ``remaining``."""
    validate_assumptions(assumptions, TeamRole.CLOSER)
    gap = max(remaining, 0)
    deals = _ceil_div(gap, assumptions.target_aov)
    shows = _ceil_div(deals, assumptions.target_close_rate)
    bookings = _ceil_div(shows, assumptions.target_show_rate)
    return CloserFunnelNeeds(
        deals_needed=deals, shows_needed=shows, bookings_needed=bookings,
    )


def setter_funnel_needs(
    remaining: Number, assumptions: GoalAssumptions,
) -> SetterFunnelNeeds:
    """Bookings, conversations, responses and DMs needed to close ``remaining``."""
    validate_assumptions(assumptions, TeamRole.SETTER)
    gap = max(remaining, 0)
    bookings = _ceil_div(gap, assumptions.target_cash_per_booking)
    conversations = _ceil_div(bookings, assumptions.target_booking_rate)
    responses = _ceil_div(conversations, assumptions.target_convo_rate)
    dms = _ceil_div(responses, assumptions.target_response_rate)
    return SetterFunnelNeeds(
        bookings_needed=bookings,
        conversations_needed=conversations,
        responses_needed=responses,
        dms_needed=dms,
    )


def plan_goal(
    current: Number,
    assumptions: GoalAssumptions,
    role: TeamRole,
    days_in_period: int,
    days_elapsed: int,
) -> GoalPlan:
    """Validate targets, then pace ``current`` and size the role's funnel."""
    validate_assumptions(assumptions, role)
    result = pace(current, assumptions.goal_amount, days_in_period, days_elapsed)
    if role == TeamRole.CLOSER:
        return GoalPlan(
            role=role,
            pace=result,
            closer_needs=closer_funnel_needs(result.remaining, assumptions),
        )
    return GoalPlan(
        role=role,
        pace=result,
        setter_needs=setter_funnel_needs(result.remaining, assumptions),
    )


# ---------------------------------------------------------------------------
# Goal periods
# ---------------------------------------------------------------------------


def week_start(today: date) -> date:
    """Monday of the week containing ``today``."""
    return today - timedelta(days=today.weekday())


def period_window(
    goal_type: GoalType,
    today: date,
    start: date | None = None,
    end: date | None = None,
) -> PeriodWindow:
    """Window for a goal type; today counts as an elapsed day.

    MONTHLY is the calendar month, WEEKLY the Monday-start week, and
    CUSTOM requires explicit ``start`` and ``end`` dates.

    Raises:
        ValueError: For a CUSTOM goal without a valid start/end.
    """
    if goal_type == GoalType.MONTHLY:
        start = today.replace(day=1)
        end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    elif goal_type == GoalType.WEEKLY:
        start = week_start(today)
        end = start + timedelta(days=6)
    elif start is None or end is None or end < start:
        msg = "custom goals need a start date on or before the end date."
        raise ValueError(msg)

    days_in_period = (end - start).days + 1
    elapsed = min(max((today - start).days + 1, 0), days_in_period)
    return PeriodWindow(
        start=start, end=end, days_in_period=days_in_period, days_elapsed=elapsed,
    )
