"""FastAPI report endpoints — funnels, team summaries, EOD, breakdowns.

GET  /v1/clients/{client_id}/funnels/{funnel_type}  — paid/organic funnel summary
PUT  /v1/clients/{client_id}/funnels                — upsert daily funnel rows
PUT  /v1/clients/{client_id}/ads                    — upsert daily ad rows
PUT  /v1/clients/{client_id}/content                — upsert daily content rows
GET  /v1/clients/{client_id}/closers                — closer summary
GET  /v1/clients/{client_id}/setters                — setter summary
GET  /v1/clients/{client_id}/dm-setters             — DM funnel summary
POST /v1/clients/{client_id}/eod/setter             — submit setter EOD
POST /v1/clients/{client_id}/eod/closer             — submit closer EOD
GET  /v1/clients/{client_id}/leaderboard            — team ranking by cash
GET  /v1/clients/{client_id}/overview               — yesterday / week / window
GET  /v1/clients/{client_id}/ads                    — ad breakdown
GET  /v1/clients/{client_id}/content                — organic content breakdown

Windows default to the last 30 days ending today (UTC).
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.api.dependencies import (
    get_eod_service,
    get_funnel_repo,
    get_reporting_service,
)
from salesops.db.session import get_async_session
from salesops.db.tables import AdPerformanceRow, OrganicContentRow
from salesops.metrics.breakdown import AdLevel, ContentField
from salesops.metrics.comparison import PeriodComparison
from salesops.models.common import FunnelType, TeamRole, days_ago, utc_today
from salesops.models.reports import (
    AdPerformanceReport,
    CloserReport,
    FunnelReport,
    OrganicContentReport,
    SetterReport,
)
from salesops.repositories.reports import (
    AD_CONFLICT_KEYS,
    CONTENT_CONFLICT_KEYS,
    FUNNEL_CONFLICT_KEYS,
    ReportRepository,
)
from salesops.services.eod import EODService
from salesops.services.reporting import MetricSummary, ReportingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/clients", tags=["reports"])

DEFAULT_WINDOW_DAYS = 30


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class SummaryResponse(BaseModel):
    date_from: date
    date_to: date
    previous_from: date
    previous_to: date
    row_count: int
    totals: dict[str, float | None]
    previous_totals: dict[str, float | None]
    rates: dict[str, float]
    statuses: dict[str, str]
    comparisons: dict[str, PeriodComparison]


class UpsertResponse(BaseModel):
    saved: int


class CreatedResponse(BaseModel):
    id: str


class LeaderboardEntryResponse(BaseModel):
    rank: int
    member_id: str
    name: str
    cash: float
    previous_cash: float
    cash_change: PeriodComparison
    volumes: dict[str, int]


class OverviewResponse(BaseModel):
    role: TeamRole
    yesterday: dict[str, float | None]
    week_to_date: dict[str, float | None]
    period: dict[str, float | None]
    rates: dict[str, float]
    weekly_metric: str
    weekly_value: float
    weekly_target: int
    weekly_progress: float


class AdBreakdownResponse(BaseModel):
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
    status: str


class ContentBreakdownResponse(BaseModel):
    name: str
    page_views: int
    applications: int
    bookings: int
    shows: int
    closes: int
    cash_collected: float
    conversion_rate: float


def _window(date_from: date | None, date_to: date | None) -> tuple[date, date]:
    date_to = date_to or utc_today()
    date_from = date_from or days_ago(DEFAULT_WINDOW_DAYS, date_to)
    if date_to < date_from:
        raise HTTPException(
            status_code=422,
            detail=f"date_to {date_to} is before date_from {date_from}.",
        )
    return date_from, date_to


def _summary_response(summary: MetricSummary) -> SummaryResponse:
    return SummaryResponse(
        date_from=summary.date_from,
        date_to=summary.date_to,
        previous_from=summary.previous_from,
        previous_to=summary.previous_to,
        row_count=summary.row_count,
        totals=summary.totals.as_dict(),
        previous_totals=summary.previous_totals.as_dict(),
        rates=summary.rates.as_dict(),
        statuses={name: status.value for name, status in summary.statuses.items()},
        comparisons=summary.comparisons,
    )


def _check_client(client_id: UUID, rows: list) -> None:
    mismatched = [r for r in rows if r.client_id != client_id]
    if mismatched:
        raise HTTPException(
            status_code=422,
            detail=f"{len(mismatched)} row(s) belong to a different client than {client_id}.",
        )


# ---------------------------------------------------------------------------
# Funnels
# ---------------------------------------------------------------------------


@router.get("/{client_id}/funnels/{funnel_type}", response_model=SummaryResponse)
async def get_funnel_summary(
    client_id: UUID,
    funnel_type: FunnelType,
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> SummaryResponse:
    start, end = _window(date_from, date_to)
    summary = await service.funnel_summary(client_id, funnel_type, start, end)
    return _summary_response(summary)


@router.put("/{client_id}/funnels", response_model=UpsertResponse)
async def upsert_funnels(
    client_id: UUID,
    body: list[FunnelReport] = Body(...),
    repo: ReportRepository = Depends(get_funnel_repo),
) -> UpsertResponse:
    """Insert or replace daily funnel rows keyed on (date, funnel type)."""
    _check_client(client_id, body)
    saved = await repo.upsert(body, FUNNEL_CONFLICT_KEYS)
    logger.info("Upserted %d funnel rows for client %s", len(saved), client_id)
    return UpsertResponse(saved=len(saved))


@router.put("/{client_id}/ads", response_model=UpsertResponse)
async def upsert_ads(
    client_id: UUID,
    body: list[AdPerformanceReport] = Body(...),
    session: AsyncSession = Depends(get_async_session),
) -> UpsertResponse:
    _check_client(client_id, body)
    saved = await ReportRepository(session, AdPerformanceRow).upsert(body, AD_CONFLICT_KEYS)
    return UpsertResponse(saved=len(saved))


@router.put("/{client_id}/content", response_model=UpsertResponse)
async def upsert_content(
    client_id: UUID,
    body: list[OrganicContentReport] = Body(...),
    session: AsyncSession = Depends(get_async_session),
) -> UpsertResponse:
    _check_client(client_id, body)
    saved = await ReportRepository(session, OrganicContentRow).upsert(
        body, CONTENT_CONFLICT_KEYS,
    )
    return UpsertResponse(saved=len(saved))


# ---------------------------------------------------------------------------
# Team summaries
# ---------------------------------------------------------------------------


@router.get("/{client_id}/closers", response_model=SummaryResponse)
async def get_closer_summary(
    client_id: UUID,
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    member: UUID | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> SummaryResponse:
    start, end = _window(date_from, date_to)
    return _summary_response(await service.closer_summary(client_id, start, end, member))


@router.get("/{client_id}/setters", response_model=SummaryResponse)
async def get_setter_summary(
    client_id: UUID,
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    member: UUID | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> SummaryResponse:
    start, end = _window(date_from, date_to)
    return _summary_response(await service.setter_summary(client_id, start, end, member))


@router.get("/{client_id}/dm-setters", response_model=SummaryResponse)
async def get_dm_summary(
    client_id: UUID,
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    member: UUID | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> SummaryResponse:
    start, end = _window(date_from, date_to)
    return _summary_response(await service.dm_summary(client_id, start, end, member))


@router.get("/{client_id}/leaderboard", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(
    client_id: UUID,
    role: TeamRole = Query(default=TeamRole.CLOSER),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> list[LeaderboardEntryResponse]:
    start, end = _window(date_from, date_to)
    entries = await service.leaderboard(client_id, role, start, end)
    return [
        LeaderboardEntryResponse(
            rank=e.rank,
            member_id=e.member_id,
            name=e.name,
            cash=e.cash,
            previous_cash=e.previous_cash,
            cash_change=e.cash_change,
            volumes=e.volumes,
        )
        for e in entries
    ]


@router.get("/{client_id}/overview", response_model=OverviewResponse)
async def get_overview(
    client_id: UUID,
    role: TeamRole = Query(default=TeamRole.SETTER),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> OverviewResponse:
    start, end = _window(date_from, date_to)
    overview = await service.team_overview(client_id, role, start, end, today=end)
    return OverviewResponse(
        role=role,
        yesterday=overview.yesterday.as_dict(),
        week_to_date=overview.week_to_date.as_dict(),
        period=overview.period.as_dict(),
        rates=overview.rates.as_dict(),
        weekly_metric=overview.weekly_metric,
        weekly_value=overview.weekly_value,
        weekly_target=overview.weekly_target,
        weekly_progress=overview.weekly_progress,
    )


# ---------------------------------------------------------------------------
# EOD submission
# ---------------------------------------------------------------------------


@router.post("/{client_id}/eod/setter", status_code=201, response_model=CreatedResponse)
async def submit_setter_eod(
    client_id: UUID,
    body: SetterReport,
    service: EODService = Depends(get_eod_service),
) -> CreatedResponse:
    _check_client(client_id, [body])
    row = await service.submit_setter_report(body)
    return CreatedResponse(id=str(row.id))


@router.post("/{client_id}/eod/closer", status_code=201, response_model=CreatedResponse)
async def submit_closer_eod(
    client_id: UUID,
    body: CloserReport,
    service: EODService = Depends(get_eod_service),
) -> CreatedResponse:
    _check_client(client_id, [body])
    row = await service.submit_closer_report(body)
    return CreatedResponse(id=str(row.id))


# ---------------------------------------------------------------------------
# Breakdowns
# ---------------------------------------------------------------------------


@router.get("/{client_id}/ads", response_model=list[AdBreakdownResponse])
async def get_ad_breakdown(
    client_id: UUID,
    level: AdLevel = Query(default=AdLevel.CAMPAIGN),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> list[AdBreakdownResponse]:
    start, end = _window(date_from, date_to)
    rows = await service.ad_breakdown(client_id, level, start, end)
    return [
        AdBreakdownResponse(
            source=r.breakdown.source,
            ad_spend=r.breakdown.ad_spend,
            page_views=r.breakdown.page_views,
            applications=r.breakdown.applications,
            bookings=r.breakdown.bookings,
            shows=r.breakdown.shows,
            closes=r.breakdown.closes,
            cash_collected=r.breakdown.cash_collected,
            roas=r.breakdown.roas,
            cpa=r.breakdown.cpa,
            status=r.status.value,
        )
        for r in rows
    ]


@router.get("/{client_id}/content", response_model=list[ContentBreakdownResponse])
async def get_content_breakdown(
    client_id: UUID,
    group_by: ContentField = Query(default=ContentField.SOURCE),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    service: ReportingService = Depends(get_reporting_service),
) -> list[ContentBreakdownResponse]:
    start, end = _window(date_from, date_to)
    items = await service.content_breakdown(client_id, group_by, start, end)
    return [
        ContentBreakdownResponse(
            name=i.name,
            page_views=i.page_views,
            applications=i.applications,
            bookings=i.bookings,
            shows=i.shows,
            closes=i.closes,
            cash_collected=i.cash_collected,
            conversion_rate=i.conversion_rate,
        )
        for i in items
    ]
