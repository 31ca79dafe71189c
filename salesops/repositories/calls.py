"""Scheduled call and outcome repository.

Saving an outcome is the primary write. Moving the linked call to its new
status is secondary: if that update fails, the failure is logged and the
outcome is still saved.
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db.tables import OutcomeRow, ScheduledCallRow
from salesops.metrics.calls import call_status_for_outcome, outcome_label
from salesops.models.common import OutcomeType
from salesops.models.reports import Outcome, ScheduledCall

logger = logging.getLogger(__name__)


class CallRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_call(self, call: ScheduledCall) -> ScheduledCallRow:
        row = ScheduledCallRow(**call.model_dump(exclude={"call_id"}, exclude_none=True))
        if call.call_id is not None:
            row.id = call.call_id
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)
        return row

    async def calls_for_day(self, client_id: UUID, day: date) -> list[ScheduledCallRow]:
        """Calls on ``day`` ordered by call time."""
        result = await self._session.execute(
            select(ScheduledCallRow)
            .where(
                ScheduledCallRow.client_id == client_id,
                ScheduledCallRow.call_date == day,
            )
            .order_by(ScheduledCallRow.call_time)
        )
        return list(result.scalars().all())

    async def outcomes_between(
        self, client_id: UUID, date_from: date, date_to: date,
    ) -> list[OutcomeRow]:
        result = await self._session.execute(
            select(OutcomeRow)
            .where(
                OutcomeRow.client_id == client_id,
                OutcomeRow.outcome_date >= date_from,
                OutcomeRow.outcome_date <= date_to,
            )
            .order_by(OutcomeRow.outcome_date.desc())
        )
        return list(result.scalars().all())

    async def save_outcome(
        self, outcome: Outcome, created_by: UUID | None = None,
    ) -> OutcomeRow:
        """Insert ``outcome`` and move its linked call to the matching status."""
        row = OutcomeRow(**outcome.model_dump(), created_by=created_by)
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)

        if outcome.scheduled_call_id is not None:
            try:
                await self._update_call(outcome)
            except SQLAlchemyError:
                logger.exception(
                    "Failed to update call %s for outcome %s",
                    outcome.scheduled_call_id,
                    row.id,
                )
        return row

    async def _update_call(self, outcome: Outcome) -> None:
        # Nested transaction so a failed update leaves the outcome insert intact.
        async with self._session.begin_nested():
            call = await self._session.get(ScheduledCallRow, outcome.scheduled_call_id)
            if call is None:
                logger.warning("Outcome references unknown call %s", outcome.scheduled_call_id)
                return
            call.status = call_status_for_outcome(outcome.outcome_type).value
            call.outcome = outcome_label(outcome)
            call.closed = outcome.outcome_type == OutcomeType.CLOSE
            if call.closed:
                call.cash_amount = outcome.cash_collected
