"""Record totals reducer.

Folds an ordered sequence of same-shaped report rows into a single
``Totals`` mapping. Absent, ``None`` and zero are equivalent for
summation, with one exception: optional metrics (ad spend by default)
stay ``None`` unless at least one row carries a value, so downstream
code can tell organic data from paid data with zero spend.

Summation is order-independent: integer counters are summed exactly and
anything fractional goes through ``math.fsum``, so every permutation of
the same rows reduces to identical totals.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from decimal import Decimal
from types import MappingProxyType
from typing import Any

Number = int | float

# ---------------------------------------------------------------------------
# Metric fields per row kind
# ---------------------------------------------------------------------------

FUNNEL_FIELDS: tuple[str, ...] = (
    "page_views",
    "applications",
    "qualified",
    "bookings",
    "shows",
    "no_shows",
    "closes",
    "deals_lost",
    "follow_ups",
    "cash_collected",
    "revenue",
    "ad_spend",
)

SETTER_FIELDS: tuple[str, ...] = (
    "dials",
    "leads_texted",
    "outbound_dms_sent",
    "pickups",
    "text_responses",
    "outbound_dm_responses",
    "inbound_dms",
    "conversations",
    "followups_sent",
    "calls_booked_dials",
    "calls_booked_dms",
    "live_transfers",
    "noshows_reached",
    "noshows_rebooked",
    "old_applicants_called",
    "old_applicants_rebooked",
    "cancellations_called",
    "cancellations_rebooked",
    "cash_collected",
    "revenue_generated",
)

CLOSER_FIELDS: tuple[str, ...] = (
    "calls_on_calendar",
    "shows",
    "no_shows",
    "reschedules",
    "followups_booked",
    "deals_dqd",
    "hot_prospects",
    "warm_prospects",
    "deals_closed",
    "cash_collected",
    "revenue_generated",
)

DM_SETTER_FIELDS: tuple[str, ...] = (
    "dms_sent",
    "responses",
    "conversations",
    "bookings",
    "shows",
    "no_shows",
    "closes",
    "deals_lost",
    "cash_collected",
    "revenue",
)

AD_FIELDS: tuple[str, ...] = (
    "ad_spend",
    "page_views",
    "applications",
    "qualified",
    "bookings",
    "shows",
    "closes",
    "cash_collected",
    "revenue",
)

CONTENT_FIELDS: tuple[str, ...] = (
    "page_views",
    "applications",
    "qualified",
    "bookings",
    "shows",
    "closes",
    "cash_collected",
    "revenue",
)

DEFAULT_OPTIONAL_FIELDS: tuple[str, ...] = ("ad_spend",)


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


class Totals(Mapping[str, Number | None]):
    """Immutable mapping of metric name to summed value.

    Optional metrics may map to ``None`` (never observed). ``value()``
    reads any metric as a number, treating missing and ``None`` as 0.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Number | None] | None = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, name: str) -> Number | None:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Totals({dict(self._values)!r})"

    def value(self, name: str) -> Number:
        """Numeric value of ``name``; missing or ``None`` reads as 0."""
        found = self._values.get(name)
        return 0 if found is None else found

    def has(self, name: str) -> bool:
        """True when ``name`` is present with a non-None value."""
        return self._values.get(name) is not None

    def with_sums(self, combined: Mapping[str, Sequence[str]]) -> Totals:
        """Return a new Totals with extra metrics summed from existing ones.

        ``{"calls_booked": ("calls_booked_dials", "calls_booked_dms")}``
        adds ``calls_booked``; the receiver is left untouched.
        """
        values = dict(self._values)
        for name, parts in combined.items():
            values[name] = _sum([self.value(part) for part in parts])
        return Totals(values)

    def as_dict(self) -> dict[str, Number | None]:
        """Plain-dict copy, e.g. for JSON responses."""
        return dict(self._values)


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------


def row_values(row: Any) -> Mapping[str, Any]:
    """Read a row as a field mapping.

    Accepts mappings, Pydantic models and dataclass instances.
    """
    if isinstance(row, Mapping):
        return row
    dump = getattr(row, "model_dump", None)
    if callable(dump):
        return dump()
    if dataclasses.is_dataclass(row) and not isinstance(row, type):
        return dataclasses.asdict(row)
    msg = f"cannot read metrics from a {type(row).__name__} row"
    raise TypeError(msg)


def is_metric(value: Any) -> bool:
    """True for numeric values that can be summed (bool is not a metric)."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _sum(values: list[Any]) -> Number:
    if all(isinstance(v, int) for v in values):
        return sum(values)
    return math.fsum(float(v) for v in values)


def reduce_rows(
    rows: Iterable[Any],
    fields: Sequence[str] = (),
    optional_fields: Sequence[str] = DEFAULT_OPTIONAL_FIELDS,
) -> Totals:
    """Fold ``rows`` into a single Totals.

    Args:
        rows: Report rows of the same kind, already filtered upstream.
        fields: Metrics that must always appear in the result, so that
            empty input still yields an all-zero Totals for the row kind.
        optional_fields: Metrics whose presence is tracked; they total to
            ``None`` when no row carries a value.

    Returns:
        Totals containing every declared field and every numeric field
        seen in at least one row.
    """
    optional = set(optional_fields)
    collected: dict[str, list[Any]] = {name: [] for name in fields}

    for row in rows:
        for name, value in row_values(row).items():
            if value is None:
                if name in optional:
                    collected.setdefault(name, [])
                continue
            if not is_metric(value):
                continue
            collected.setdefault(name, []).append(value)

    totals: dict[str, Number | None] = {}
    for name, values in collected.items():
        if name in optional and not values:
            totals[name] = None
        else:
            totals[name] = _sum(values)
    return Totals(totals)
