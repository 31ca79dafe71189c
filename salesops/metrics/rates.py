"""Rate calculator.

Derives conversion rates, cost metrics and financial ratios from a
``Totals`` instance. Every ratio is declared once as a ``RateSpec``
(name, numerator, denominator) and grouped into per-role tables, so the
setter, closer and funnel views share one engine instead of repeating
the same arithmetic.

Zero-denominator policy: a ratio whose denominator is not strictly
positive is exactly ``0.0``. This is the normal "no data yet" state and
never raises, and never yields NaN or infinity.

Rates are decimal fractions (0.24 for 24%); ROAS-style ratios are
unbounded above 1.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from salesops.metrics.reducer import Number, Totals


@dataclass(frozen=True)
class RateSpec:
    """One derived ratio: ``name = numerator / denominator``."""

    name: str
    numerator: str
    denominator: str


class Rates(Mapping[str, float]):
    """Immutable mapping of rate name to decimal value."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, float] | None = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, name: str) -> float:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Rates({dict(self._values)!r})"

    def merged(self, other: Mapping[str, float]) -> Rates:
        """Return a new Rates holding both sets; ``other`` wins on clashes."""
        return Rates({**self._values, **other})

    def as_dict(self) -> dict[str, float]:
        return dict(self._values)


# ---------------------------------------------------------------------------
# Declarative rate tables
# ---------------------------------------------------------------------------

FUNNEL_STAGE_RATES: tuple[RateSpec, ...] = (
    RateSpec("view_to_app", "applications", "page_views"),
    RateSpec("app_to_qualified", "qualified", "applications"),
    RateSpec("qualified_to_booking", "bookings", "qualified"),
    RateSpec("booking_to_show", "shows", "bookings"),
    RateSpec("show_to_close", "closes", "shows"),
)

FUNNEL_FINANCIAL_RATES: tuple[RateSpec, ...] = (
    RateSpec("aov", "cash_collected", "closes"),
)

ORGANIC_RATES: tuple[RateSpec, ...] = (
    RateSpec("overall_conversion", "closes", "page_views"),
)

PAID_RATES: tuple[RateSpec, ...] = (
    RateSpec("cash_roas", "cash_collected", "ad_spend"),
    RateSpec("revenue_roas", "revenue", "ad_spend"),
    RateSpec("cost_per_view", "ad_spend", "page_views"),
    RateSpec("cost_per_app", "ad_spend", "applications"),
    RateSpec("cost_per_qualified", "ad_spend", "qualified"),
    RateSpec("cost_per_booking", "ad_spend", "bookings"),
    RateSpec("cost_per_show", "ad_spend", "shows"),
    RateSpec("cost_per_close", "ad_spend", "closes"),
)

CLOSER_RATES: tuple[RateSpec, ...] = (
    RateSpec("show_rate", "shows", "calls_on_calendar"),
    RateSpec("close_rate", "deals_closed", "shows"),
    RateSpec("no_show_rate", "no_shows", "calls_on_calendar"),
    RateSpec("overall_close_rate", "deals_closed", "calls_on_calendar"),
    RateSpec("aov", "cash_collected", "deals_closed"),
    RateSpec("cash_per_booked_call", "cash_collected", "calls_on_calendar"),
)

SETTER_DM_RATES: tuple[RateSpec, ...] = (
    RateSpec("response_rate", "outbound_dm_responses", "outbound_dms_sent"),
    RateSpec("convo_rate", "conversations", "outbound_dm_responses"),
    RateSpec("booking_rate", "calls_booked_dms", "conversations"),
    RateSpec("overall_rate", "calls_booked_dms", "outbound_dms_sent"),
)

DM_FUNNEL_RATES: tuple[RateSpec, ...] = (
    RateSpec("response_rate", "responses", "dms_sent"),
    RateSpec("convo_rate", "conversations", "responses"),
    RateSpec("booking_rate", "bookings", "conversations"),
    RateSpec("show_rate", "shows", "bookings"),
    RateSpec("close_rate", "closes", "shows"),
    RateSpec("aov", "cash_collected", "closes"),
)


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------


def safe_ratio(numerator: Number | None, denominator: Number | None) -> float:
    """``numerator / denominator``, or exactly 0.0 when the denominator is not positive."""
    if denominator is None or denominator <= 0:
        return 0.0
    return float(numerator or 0) / float(denominator)


def derive_rates(totals: Totals, specs: Iterable[RateSpec]) -> Rates:
    """Compute every spec independently from ``totals``.

    A spec whose numerator or denominator is an optional metric that was
    never observed (``None`` in totals) is left out of the result rather
    than reported as 0, so cost metrics disappear for organic data.
    """
    values: dict[str, float] = {}
    for spec in specs:
        if _absent_optional(totals, spec.numerator) or _absent_optional(
            totals, spec.denominator
        ):
            continue
        values[spec.name] = safe_ratio(
            totals.value(spec.numerator), totals.value(spec.denominator)
        )
    return Rates(values)


def _absent_optional(totals: Totals, name: str) -> bool:
    return name in totals and totals[name] is None


def is_paid(totals: Totals) -> bool:
    """Funnel totals carry a cost dimension."""
    return totals.has("ad_spend")


def funnel_rates(totals: Totals) -> Rates:
    """Stage rates and AOV, plus cost/ROAS (paid) or overall conversion (organic)."""
    variant = PAID_RATES if is_paid(totals) else ORGANIC_RATES
    return derive_rates(
        totals, FUNNEL_STAGE_RATES + FUNNEL_FINANCIAL_RATES + variant
    )


def closer_rates(totals: Totals) -> Rates:
    return derive_rates(totals, CLOSER_RATES)


def setter_rates(totals: Totals) -> Rates:
    return derive_rates(totals, SETTER_DM_RATES)


def dm_funnel_rates(totals: Totals) -> Rates:
    return derive_rates(totals, DM_FUNNEL_RATES)
