"""GoalService — stored goals and their pacing plan.

A user without a stored goal gets the default assumptions. Current cash
for pacing is summed from the member's EOD reports inside the goal
window, up to and including today.
"""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db.tables import CloserReportRow, SetterReportRow
from salesops.metrics.pacing import GoalPlan, PeriodWindow, period_window, plan_goal
from salesops.metrics.reducer import reduce_rows
from salesops.models.common import GoalType, TeamRole
from salesops.models.goals import GoalAssumptions
from salesops.repositories.goals import GoalRepository
from salesops.repositories.reports import ReportRepository, to_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalPace:
    """Goal assumptions, the window they apply to and the resulting plan."""

    assumptions: GoalAssumptions
    is_default: bool
    window: PeriodWindow
    plan: GoalPlan


class GoalService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._goals = GoalRepository(session)

    async def get_goal(
        self, user_id: UUID, goal_type: GoalType,
    ) -> tuple[GoalAssumptions, bool]:
        """Stored assumptions and whether the defaults were substituted."""
        stored = await self._goals.get(user_id, goal_type)
        if stored is None:
            return GoalAssumptions(), True
        return stored, False

    async def save_goal(
        self, user_id: UUID, goal_type: GoalType, assumptions: GoalAssumptions,
    ) -> GoalAssumptions:
        await self._goals.upsert(user_id, goal_type, assumptions)
        logger.info("Saved %s goal for user %s", goal_type.value, user_id)
        return assumptions

    async def current_cash(
        self,
        client_id: UUID,
        member_id: UUID,
        role: TeamRole,
        date_from: date,
        date_to: date,
    ) -> float:
        table = SetterReportRow if role == TeamRole.SETTER else CloserReportRow
        rows = await ReportRepository(self._session, table).query(
            client_id, date_from, date_to, member_id,
        )
        totals = reduce_rows((to_record(r) for r in rows), fields=("cash_collected",))
        return float(totals.value("cash_collected"))

    async def pace(
        self,
        user_id: UUID,
        goal_type: GoalType,
        role: TeamRole,
        *,
        client_id: UUID,
        member_id: UUID,
        today: date,
        start: date | None = None,
        end: date | None = None,
    ) -> GoalPace:
        """Pace the member's cash against the user's goal for the current window.

        Raises:
            InvalidAssumptionError: If a target the role divides by is not positive.
            ValueError: For a custom goal without a valid start and end.
        """
        assumptions, is_default = await self.get_goal(user_id, goal_type)
        window = period_window(goal_type, today, start, end)
        cash = await self.current_cash(
            client_id, member_id, role, window.start, min(today, window.end),
        )
        plan = plan_goal(
            cash, assumptions, role, window.days_in_period, window.days_elapsed,
        )
        return GoalPace(
            assumptions=assumptions, is_default=is_default, window=window, plan=plan,
        )
