"""User goal repository.

One row per (user_id, goal_type). upsert replaces the stored assumptions.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db.tables import UserGoalRow
from salesops.models.common import GoalType, utc_now
from salesops.models.goals import GoalAssumptions

_ASSUMPTION_FIELDS = tuple(GoalAssumptions.model_fields)


class GoalRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _row(self, user_id: UUID, goal_type: GoalType) -> UserGoalRow | None:
        result = await self._session.execute(
            select(UserGoalRow).where(
                UserGoalRow.user_id == user_id,
                UserGoalRow.goal_type == goal_type.value,
            )
        )
        return result.scalar_one_or_none()

    async def get(self, user_id: UUID, goal_type: GoalType) -> GoalAssumptions | None:
        """Stored assumptions, or None when the user never saved this goal."""
        row = await self._row(user_id, goal_type)
        if row is None:
            return None
        return GoalAssumptions(**{f: getattr(row, f) for f in _ASSUMPTION_FIELDS})

    async def upsert(
        self,
        user_id: UUID,
        goal_type: GoalType,
        assumptions: GoalAssumptions,
    ) -> UserGoalRow:
        row = await self._row(user_id, goal_type)
        if row is None:
            row = UserGoalRow(user_id=user_id, goal_type=goal_type.value)
            self._session.add(row)
        for field in _ASSUMPTION_FIELDS:
            setattr(row, field, getattr(assumptions, field))
        row.updated_at = utc_now()
        await self._session.flush()
        await self._session.refresh(row)
        return row
