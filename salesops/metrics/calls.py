"""Scheduled-call and outcome arithmetic.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from salesops.models.common import CallStatus, OutcomeType, PaymentType
from salesops.models.reports import Outcome, ScheduledCall

_STATUS_FOR_OUTCOME: dict[OutcomeType, CallStatus] = {
    OutcomeType.CLOSE: CallStatus.COMPLETED,
    OutcomeType.NO_SHOW: CallStatus.NO_SHOW,
    OutcomeType.FOLLOW_UP: CallStatus.RESCHEDULED,
    OutcomeType.DEAL_LOST: CallStatus.COMPLETED,
}


@dataclass(frozen=True)
class CallDaySummary:
    """Calendar summary for one day of calls."""

    total_calls: int
    total_potential: float
    calls_per_closer: dict[str, int] = field(default_factory=dict)
    confirmed: int = 0
    pending: int = 0
    declined: int = 0


@dataclass(frozen=True)
class OutcomeStats:
    closes: int = 0
    no_shows: int = 0
    follow_ups: int = 0
    deals_lost: int = 0
    total_cash: float = 0.0
    total_revenue: float = 0.0


def call_potential(call: ScheduledCall) -> float:
    """Midpoint of the lead's stated investment range, or whichever bound exists."""
    low, high = call.investment_min, call.investment_max
    if low and high:
        return (low + high) / 2
    return low or high or 0.0


def summarize_calls(calls: Iterable[ScheduledCall]) -> CallDaySummary:
    calls = list(calls)
    per_closer: dict[str, int] = {}
    for call in calls:
        per_closer[call.closer_name] = per_closer.get(call.closer_name, 0) + 1
    return CallDaySummary(
        total_calls=len(calls),
        total_potential=sum(call_potential(c) for c in calls),
        calls_per_closer=per_closer,
        confirmed=sum(1 for c in calls if c.confirmed is True),
        pending=sum(1 for c in calls if c.confirmed is None),
        declined=sum(1 for c in calls if c.confirmed is False),
    )


def call_status_for_outcome(outcome_type: OutcomeType) -> CallStatus:
    """Status a linked call moves to once an outcome is recorded."""
    return _STATUS_FOR_OUTCOME[outcome_type]


def outcome_label(outcome: Outcome) -> str:
    """One-line outcome text written onto the linked call."""
    if outcome.outcome_type == OutcomeType.CLOSE:
        plan = "PIF" if outcome.payment_type == PaymentType.PIF else "Payment Plan"
        cash = outcome.cash_collected
        amount = str(int(cash)) if float(cash).is_integer() else str(cash)
        return f"Closed - {plan} - ${amount}"
    if outcome.outcome_type == OutcomeType.NO_SHOW:
        return f"No Show - {outcome.reason or 'No reason provided'}"
    if outcome.outcome_type == OutcomeType.FOLLOW_UP:
        when = outcome.follow_up_date.isoformat() if outcome.follow_up_date else "TBD"
        return f"Follow Up - {when}"
    return f"Deal Lost - {outcome.reason or 'No reason provided'}"


def outcome_stats(outcomes: Iterable[Outcome]) -> OutcomeStats:
    """Counts per outcome type; cash and revenue come from closes only."""
    counts = {t: 0 for t in OutcomeType}
    cash = 0.0
    revenue = 0.0
    for outcome in outcomes:
        counts[outcome.outcome_type] += 1
        if outcome.outcome_type == OutcomeType.CLOSE:
            cash += outcome.cash_collected
            revenue += outcome.package_total
    return OutcomeStats(
        closes=counts[OutcomeType.CLOSE],
        no_shows=counts[OutcomeType.NO_SHOW],
        follow_ups=counts[OutcomeType.FOLLOW_UP],
        deals_lost=counts[OutcomeType.DEAL_LOST],
        total_cash=cash,
        total_revenue=revenue,
    )


def deals_lost(shows: int, closes: int, follow_ups: int, *, clamp: bool) -> int:
    """Shows that neither closed nor went to follow-up.

    The result can be negative when ``closes + follow_ups > shows``. Each
    caller decides explicitly whether to clamp it at 0.
    """
    lost = shows - closes - follow_ups
    return max(0, lost) if clamp else lost
