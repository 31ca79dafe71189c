"""FastAPI goal endpoints.

GET /v1/users/{user_id}/goals/{goal_type}        — stored or default assumptions
PUT /v1/users/{user_id}/goals/{goal_type}        — save assumptions
GET /v1/users/{user_id}/goals/{goal_type}/pace   — pacing and reverse funnel

Non-positive targets are rejected with 422 when pacing, never stored
silently as a divide-by-zero.
"""

from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from salesops.api.dependencies import get_goal_service
from salesops.metrics.pacing import InvalidAssumptionError
from salesops.models.common import GoalType, TeamRole, utc_today
from salesops.models.goals import GoalAssumptions
from salesops.services.goals import GoalService

router = APIRouter(prefix="/v1/users", tags=["goals"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class GoalResponse(BaseModel):
    user_id: str
    goal_type: GoalType
    is_default: bool
    assumptions: GoalAssumptions


class PaceResponse(BaseModel):
    current: float
    goal: float
    progress_percent: float
    expected_at_this_point: float
    pace_status: str
    pace_diff_percent: float
    remaining: float
    days_remaining: int
    daily_amount_needed: float


class GoalPaceResponse(BaseModel):
    user_id: str
    goal_type: GoalType
    role: TeamRole
    is_default: bool
    period_start: date
    period_end: date
    days_in_period: int
    days_elapsed: int
    pace: PaceResponse
    needs: dict[str, int]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/{user_id}/goals/{goal_type}", response_model=GoalResponse)
async def get_goal(
    user_id: UUID,
    goal_type: GoalType,
    service: GoalService = Depends(get_goal_service),
) -> GoalResponse:
    assumptions, is_default = await service.get_goal(user_id, goal_type)
    return GoalResponse(
        user_id=str(user_id),
        goal_type=goal_type,
        is_default=is_default,
        assumptions=assumptions,
    )


@router.put("/{user_id}/goals/{goal_type}", response_model=GoalResponse)
async def put_goal(
    user_id: UUID,
    goal_type: GoalType,
    body: GoalAssumptions,
    service: GoalService = Depends(get_goal_service),
) -> GoalResponse:
    saved = await service.save_goal(user_id, goal_type, body)
    return GoalResponse(
        user_id=str(user_id), goal_type=goal_type, is_default=False, assumptions=saved,
    )


@router.get("/{user_id}/goals/{goal_type}/pace", response_model=GoalPaceResponse)
async def get_goal_pace(
    user_id: UUID,
    goal_type: GoalType,
    client_id: UUID = Query(...),
    member_id: UUID = Query(...),
    role: TeamRole = Query(default=TeamRole.CLOSER),
    today: date | None = Query(default=None),
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    service: GoalService = Depends(get_goal_service),
) -> GoalPaceResponse:
    """Pace the member's cash toward the goal and size the remaining funnel."""
    try:
        result = await service.pace(
            user_id,
            goal_type,
            role,
            client_id=client_id,
            member_id=member_id,
            today=today or utc_today(),
            start=start,
            end=end,
        )
    except InvalidAssumptionError as exc:
        raise HTTPException(
            status_code=422,
            detail={"field": exc.field, "value": exc.value, "message": str(exc)},
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    plan = result.plan
    needs_obj = plan.closer_needs if role == TeamRole.CLOSER else plan.setter_needs
    return GoalPaceResponse(
        user_id=str(user_id),
        goal_type=goal_type,
        role=role,
        is_default=result.is_default,
        period_start=result.window.start,
        period_end=result.window.end,
        days_in_period=result.window.days_in_period,
        days_elapsed=result.window.days_elapsed,
        pace=PaceResponse(
            current=plan.pace.current,
            goal=plan.pace.goal,
            progress_percent=plan.pace.progress_percent,
            expected_at_this_point=plan.pace.expected_at_this_point,
            pace_status=plan.pace.pace_status.value,
            pace_diff_percent=plan.pace.pace_diff_percent,
            remaining=plan.pace.remaining,
            days_remaining=plan.pace.days_remaining,
            daily_amount_needed=plan.pace.daily_amount_needed,
        ),
        needs=asdict(needs_obj) if needs_obj is not None else {},
    )
