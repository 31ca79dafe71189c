"""FastAPI call endpoints.

POST /v1/clients/{client_id}/calls            — book a call
GET  /v1/clients/{client_id}/calls            — calls for a day with summary
POST /v1/clients/{client_id}/outcomes         — record a call outcome
GET  /v1/clients/{client_id}/outcomes/stats   — outcome counts for a window
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from salesops.api.dependencies import get_call_repo
from salesops.metrics.calls import outcome_stats, summarize_calls
from salesops.models.common import days_ago, utc_today
from salesops.models.reports import Outcome, ScheduledCall
from salesops.repositories.calls import CallRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/clients", tags=["calls"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class CallResponse(BaseModel):
    id: str
    call_date: date
    call_time: str
    lead_name: str
    closer_name: str
    investment_min: float | None = None
    investment_max: float | None = None
    confirmed: bool | None = None
    status: str
    outcome: str | None = None


class CallDayResponse(BaseModel):
    day: date
    total_calls: int
    total_potential: float
    calls_per_closer: dict[str, int]
    confirmed: int
    pending: int
    declined: int
    calls: list[CallResponse]


class OutcomeCreatedResponse(BaseModel):
    id: str
    outcome_type: str
    scheduled_call_id: str | None = None


class OutcomeStatsResponse(BaseModel):
    closes: int
    no_shows: int
    follow_ups: int
    deals_lost: int
    total_cash: float
    total_revenue: float


def _call_model(row) -> ScheduledCall:
    return ScheduledCall(
        call_id=row.id,
        client_id=row.client_id,
        call_date=row.call_date,
        call_time=row.call_time,
        lead_name=row.lead_name,
        closer_name=row.closer_name,
        investment_min=row.investment_min,
        investment_max=row.investment_max,
        confirmed=row.confirmed,
        status=row.status,
        outcome=row.outcome,
    )


def _call_response(row) -> CallResponse:
    return CallResponse(
        id=str(row.id),
        call_date=row.call_date,
        call_time=row.call_time,
        lead_name=row.lead_name,
        closer_name=row.closer_name,
        investment_min=row.investment_min,
        investment_max=row.investment_max,
        confirmed=row.confirmed,
        status=row.status,
        outcome=row.outcome,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/{client_id}/calls", status_code=201, response_model=CallResponse)
async def create_call(
    client_id: UUID,
    body: ScheduledCall,
    repo: CallRepository = Depends(get_call_repo),
) -> CallResponse:
    if body.client_id != client_id:
        raise HTTPException(status_code=422, detail="Call belongs to a different client.")
    row = await repo.create_call(body)
    return _call_response(row)


@router.get("/{client_id}/calls", response_model=CallDayResponse)
async def get_calls_for_day(
    client_id: UUID,
    day: date | None = Query(default=None),
    repo: CallRepository = Depends(get_call_repo),
) -> CallDayResponse:
    """Calls for ``day`` (default today) with potential and confirmation counts."""
    day = day or utc_today()
    rows = await repo.calls_for_day(client_id, day)
    summary = summarize_calls(_call_model(r) for r in rows)
    return CallDayResponse(
        day=day,
        total_calls=summary.total_calls,
        total_potential=summary.total_potential,
        calls_per_closer=summary.calls_per_closer,
        confirmed=summary.confirmed,
        pending=summary.pending,
        declined=summary.declined,
        calls=[_call_response(r) for r in rows],
    )


@router.post("/{client_id}/outcomes", status_code=201, response_model=OutcomeCreatedResponse)
async def create_outcome(
    client_id: UUID,
    body: Outcome,
    repo: CallRepository = Depends(get_call_repo),
) -> OutcomeCreatedResponse:
    if body.client_id != client_id:
        raise HTTPException(status_code=422, detail="Outcome belongs to a different client.")
    row = await repo.save_outcome(body)
    logger.info("Recorded %s outcome %s for %s", body.outcome_type.value, row.id, body.lead_name)
    return OutcomeCreatedResponse(
        id=str(row.id),
        outcome_type=row.outcome_type,
        scheduled_call_id=str(row.scheduled_call_id) if row.scheduled_call_id else None,
    )


@router.get("/{client_id}/outcomes/stats", response_model=OutcomeStatsResponse)
async def get_outcome_stats(
    client_id: UUID,
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    repo: CallRepository = Depends(get_call_repo),
) -> OutcomeStatsResponse:
    date_to = date_to or utc_today()
    date_from = date_from or days_ago(30, date_to)
    rows = await repo.outcomes_between(client_id, date_from, date_to)
    stats = outcome_stats(
        Outcome(
            client_id=r.client_id,
            lead_name=r.lead_name,
            outcome_type=r.outcome_type,
            outcome_date=r.outcome_date,
            cash_collected=r.cash_collected,
            package_total=r.package_total,
        )
        for r in rows
    )
    return OutcomeStatsResponse(
        closes=stats.closes,
        no_shows=stats.no_shows,
        follow_ups=stats.follow_ups,
        deals_lost=stats.deals_lost,
        total_cash=stats.total_cash,
        total_revenue=stats.total_revenue,
    )
