"""Grouped performance tables for ads and organic content.

Ad rows roll up to campaign, ad set or ad level; organic content rows
roll up by platform, placement or content name. Each group is reduced
with the record totals reducer and gets its own ratios under the same
zero-denominator policy as the rate calculator.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeVar

from salesops.metrics.rates import safe_ratio
from salesops.metrics.reducer import AD_FIELDS, CONTENT_FIELDS, reduce_rows, row_values

MISSING_AD_PART = "—"
UNKNOWN_CONTENT = "Unknown"

T = TypeVar("T")


class AdLevel(StrEnum):
    CAMPAIGN = "campaign"
    ADSET = "adset"
    AD = "ad"


class ContentField(StrEnum):
    SOURCE = "source"
    MEDIUM = "medium"
    CONTENT_NAME = "content_name"


@dataclass(frozen=True)
class AdBreakdown:
    """One campaign / ad set / ad with its totals, ROAS and CPA."""

    source: str
    ad_spend: float
    page_views: int
    applications: int
    bookings: int
    shows: int
    closes: int
    cash_collected: float
    roas: float
    cpa: float


@dataclass(frozen=True)
class ContentBreakdown:
    """One platform / placement / piece of content with its conversion rate."""

    name: str
    page_views: int
    applications: int
    bookings: int
    shows: int
    closes: int
    cash_collected: float
    conversion_rate: float


def ad_group_key(row: Any, level: AdLevel) -> str:
    """Display key of ``row`` at ``level``; a missing ad set or ad shows as an em dash."""
    values = row_values(row)
    campaign = values.get("campaign_name") or ""
    if level == AdLevel.CAMPAIGN:
        return campaign
    adset = values.get("adset_name") or MISSING_AD_PART
    if level == AdLevel.ADSET:
        return f"{campaign} / {adset}"
    ad = values.get("ad_name") or MISSING_AD_PART
    return f"{campaign} / {adset} / {ad}"


def _group(rows: Iterable[T], key: Callable[[T], str]) -> dict[str, list[T]]:
    groups: dict[str, list[T]] = {}
    for row in rows:
        groups.setdefault(key(row), []).append(row)
    return groups


def aggregate_ads(rows: Iterable[Any], level: AdLevel) -> list[AdBreakdown]:
    """Roll ad rows up to ``level``; groups keep first-seen order."""
    result: list[AdBreakdown] = []
    for key, members in _group(rows, lambda r: ad_group_key(r, level)).items():
        totals = reduce_rows(members, fields=AD_FIELDS, optional_fields=())
        result.append(
            AdBreakdown(
                source=key,
                ad_spend=totals.value("ad_spend"),
                page_views=totals.value("page_views"),
                applications=totals.value("applications"),
                bookings=totals.value("bookings"),
                shows=totals.value("shows"),
                closes=totals.value("closes"),
                cash_collected=totals.value("cash_collected"),
                roas=safe_ratio(totals.value("cash_collected"), totals.value("ad_spend")),
                cpa=safe_ratio(totals.value("ad_spend"), totals.value("closes")),
            )
        )
    return result


def aggregate_content(
    rows: Iterable[Any], field: ContentField,
) -> list[ContentBreakdown]:
    """Roll content rows up by ``field``, highest cash collected first."""

    def key(row: Any) -> str:
        return row_values(row).get(field.value) or UNKNOWN_CONTENT

    result: list[ContentBreakdown] = []
    for name, members in _group(rows, key).items():
        totals = reduce_rows(members, fields=CONTENT_FIELDS, optional_fields=())
        result.append(
            ContentBreakdown(
                name=name,
                page_views=totals.value("page_views"),
                applications=totals.value("applications"),
                bookings=totals.value("bookings"),
                shows=totals.value("shows"),
                closes=totals.value("closes"),
                cash_collected=totals.value("cash_collected"),
                conversion_rate=safe_ratio(totals.value("closes"), totals.value("page_views")),
            )
        )
    return sort_breakdown(result, "cash_collected")


def sort_breakdown(
    items: Sequence[T], key: str, descending: bool = True,
) -> list[T]:
    """Stable sort of breakdown rows by any column.

    Raises:
        AttributeError: If ``key`` is not a column of the rows.
    """
    return sorted(items, key=lambda item: getattr(item, key), reverse=descending)
