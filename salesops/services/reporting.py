"""ReportingService — dashboard summaries for a client and date window.

Every summary follows the same pipeline: fetch rows for the window and
for the previous window of equal length, reduce each to totals, derive
rates, classify them against benchmarks and compare the two windows.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from salesops.config.benchmarks import BenchmarkConfig
from salesops.db.session import Base
from salesops.db.tables import (
    AdPerformanceRow,
    CloserReportRow,
    DMSetterReportRow,
    OrganicContentRow,
    SetterReportRow,
    VSLFunnelReportRow,
)
from salesops.metrics.benchmarks import (
    HealthStatus,
    RoasStatus,
    classify_rates,
    classify_tiered,
    roas_status,
)
from salesops.metrics.breakdown import (
    AdBreakdown,
    AdLevel,
    ContentBreakdown,
    ContentField,
    aggregate_ads,
    aggregate_content,
)
from salesops.metrics.comparison import (
    PeriodComparison,
    compare,
    compare_totals,
    previous_period,
)
from salesops.metrics.leaderboard import LeaderboardEntry, build_leaderboard
from salesops.metrics.overview import (
    SETTER_COMBINED,
    TeamOverview,
    closer_overview,
    setter_overview,
)
from salesops.metrics.rates import (
    Rates,
    closer_rates,
    dm_funnel_rates,
    funnel_rates,
    setter_rates,
)
from salesops.metrics.reducer import (
    CLOSER_FIELDS,
    DM_SETTER_FIELDS,
    FUNNEL_FIELDS,
    SETTER_FIELDS,
    Totals,
    reduce_rows,
)
from salesops.models.common import FunnelType, TeamRole
from salesops.repositories.reports import ReportRepository, to_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSummary:
    """Totals, rates, statuses and window-over-window changes."""

    date_from: date
    date_to: date
    previous_from: date
    previous_to: date
    row_count: int
    totals: Totals
    previous_totals: Totals
    rates: Rates
    previous_rates: Rates
    statuses: dict[str, HealthStatus] = field(default_factory=dict)
    comparisons: dict[str, PeriodComparison] = field(default_factory=dict)


@dataclass(frozen=True)
class AdRow:
    """Ad breakdown line with its profitability band."""

    breakdown: AdBreakdown
    status: RoasStatus


def _rate_comparisons(current: Rates, previous: Rates) -> dict[str, PeriodComparison]:
    # Cost rates are absent for a window without ad spend; no baseline, no change.
    return {
        name: compare(name, value, previous[name])
        for name, value in current.items()
        if name in previous
    }


class ReportingService:
    """Builds dashboard summaries from the report repositories."""

    def __init__(self, session: AsyncSession, benchmarks: BenchmarkConfig) -> None:
        self._session = session
        self._benchmarks = benchmarks

    async def _records(
        self,
        table: type[Base],
        client_id: UUID,
        date_from: date,
        date_to: date,
        member: UUID | None = None,
        **filters: Any,
    ) -> list[dict[str, Any]]:
        repo = ReportRepository(self._session, table)
        rows = await repo.query(client_id, date_from, date_to, member, **filters)
        return [to_record(row) for row in rows]

    async def _summarize(
        self,
        table: type[Base],
        client_id: UUID,
        date_from: date,
        date_to: date,
        *,
        fields: Sequence[str],
        derive: Callable[[Totals], Rates],
        classify: Callable[[Rates], dict[str, HealthStatus]],
        member: UUID | None = None,
        combined: Mapping[str, Sequence[str]] | None = None,
        **filters: Any,
    ) -> MetricSummary:
        prev_from, prev_to = previous_period(date_from, date_to)
        current_rows = await self._records(
            table, client_id, date_from, date_to, member, **filters,
        )
        previous_rows = await self._records(
            table, client_id, prev_from, prev_to, member, **filters,
        )

        totals = reduce_rows(current_rows, fields=fields)
        previous = reduce_rows(previous_rows, fields=fields)
        if combined:
            totals = totals.with_sums(combined)
            previous = previous.with_sums(combined)
        rates = derive(totals)
        previous_rates = derive(previous)

        comparisons = compare_totals(totals, previous)
        comparisons.update(_rate_comparisons(rates, previous_rates))

        logger.debug(
            "Summarized %d %s rows for client %s (%s..%s)",
            len(current_rows),
            table.__tablename__,
            client_id,
            date_from,
            date_to,
        )
        return MetricSummary(
            date_from=date_from,
            date_to=date_to,
            previous_from=prev_from,
            previous_to=prev_to,
            row_count=len(current_rows),
            totals=totals,
            previous_totals=previous,
            rates=rates,
            previous_rates=previous_rates,
            statuses=classify(rates),
            comparisons=comparisons,
        )

    def _classify_tiered(self, rates: Rates) -> dict[str, HealthStatus]:
        tiers = self._benchmarks.dm_benchmarks()
        return {
            name: classify_tiered(value, tiers[name])
            for name, value in rates.items()
            if name in tiers
        }

    # ------------------------------------------------------------------
    # Summaries
    # ------------------------------------------------------------------

    async def funnel_summary(
        self,
        client_id: UUID,
        funnel_type: FunnelType,
        date_from: date,
        date_to: date,
    ) -> MetricSummary:
        """Paid or organic VSL funnel summary."""
        funnel_benchmarks = self._benchmarks.funnel_benchmarks()
        return await self._summarize(
            VSLFunnelReportRow,
            client_id,
            date_from,
            date_to,
            fields=FUNNEL_FIELDS,
            derive=funnel_rates,
            classify=lambda rates: classify_rates(rates, funnel_benchmarks),
            funnel_type=funnel_type.value,
        )

    async def closer_summary(
        self,
        client_id: UUID,
        date_from: date,
        date_to: date,
        member: UUID | None = None,
    ) -> MetricSummary:
        closer_benchmarks = self._benchmarks.closer_benchmarks()
        return await self._summarize(
            CloserReportRow,
            client_id,
            date_from,
            date_to,
            fields=CLOSER_FIELDS,
            derive=closer_rates,
            classify=lambda rates: classify_rates(rates, closer_benchmarks),
            member=member,
        )

    async def setter_summary(
        self,
        client_id: UUID,
        date_from: date,
        date_to: date,
        member: UUID | None = None,
    ) -> MetricSummary:
        """Setter activity; DM rates are classified against the tiered benchmarks."""
        return await self._summarize(
            SetterReportRow,
            client_id,
            date_from,
            date_to,
            fields=SETTER_FIELDS,
            derive=setter_rates,
            classify=self._classify_tiered,
            member=member,
            combined=SETTER_COMBINED,
        )

    async def dm_summary(
        self,
        client_id: UUID,
        date_from: date,
        date_to: date,
        member: UUID | None = None,
    ) -> MetricSummary:
        return await self._summarize(
            DMSetterReportRow,
            client_id,
            date_from,
            date_to,
            fields=DM_SETTER_FIELDS,
            derive=dm_funnel_rates,
            classify=self._classify_tiered,
            member=member,
        )

    # ------------------------------------------------------------------
    # Team views
    # ------------------------------------------------------------------

    async def leaderboard(
        self,
        client_id: UUID,
        role: TeamRole,
        date_from: date,
        date_to: date,
    ) -> list[LeaderboardEntry]:
        table = SetterReportRow if role == TeamRole.SETTER else CloserReportRow
        prev_from, prev_to = previous_period(date_from, date_to)
        current = await self._records(table, client_id, date_from, date_to)
        previous = await self._records(table, client_id, prev_from, prev_to)
        return build_leaderboard(current, previous, role)

    async def team_overview(
        self,
        client_id: UUID,
        role: TeamRole,
        date_from: date,
        date_to: date,
        today: date,
    ) -> TeamOverview:
        """Yesterday, week-to-date and whole-window snapshot for a role."""
        targets = self._benchmarks.weekly_targets
        if role == TeamRole.SETTER:
            rows = await self._records(SetterReportRow, client_id, date_from, date_to)
            return setter_overview(rows, today, targets.booked)
        rows = await self._records(CloserReportRow, client_id, date_from, date_to)
        return closer_overview(rows, today, targets.deals)

    # ------------------------------------------------------------------
    # Breakdowns
    # ------------------------------------------------------------------

    async def ad_breakdown(
        self,
        client_id: UUID,
        level: AdLevel,
        date_from: date,
        date_to: date,
    ) -> list[AdRow]:
        rows = await self._records(AdPerformanceRow, client_id, date_from, date_to)
        breakeven = self._benchmarks.roas
        return [
            AdRow(breakdown=item, status=roas_status(item.roas, breakeven))
            for item in aggregate_ads(rows, level)
        ]

    async def content_breakdown(
        self,
        client_id: UUID,
        field_name: ContentField,
        date_from: date,
        date_to: date,
    ) -> list[ContentBreakdown]:
        rows = await self._records(OrganicContentRow, client_id, date_from, date_to)
        return aggregate_content(rows, field_name)
