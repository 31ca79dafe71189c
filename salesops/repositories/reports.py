"""Report repository — daily rows for every report table.

Repos take AsyncSession, call add()/flush() only — never commit().
The session dependency handles commit/rollback (Unit-of-Work).

One repository class serves all report tables; the table is chosen at
construction. Funnel, content and ad rows are upserted on their composite
keys so that re-importing a day replaces it instead of duplicating it.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db.session import Base

FUNNEL_CONFLICT_KEYS = ("client_id", "report_date", "funnel_type")
CONTENT_CONFLICT_KEYS = ("client_id", "report_date", "source", "medium", "content_name")
AD_CONFLICT_KEYS = ("client_id", "report_date", "campaign_name", "adset_name", "ad_name")


def to_record(row: Base) -> dict[str, Any]:
    """Column values of an ORM row as a plain dict."""
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


def _payload(row: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(row, BaseModel):
        return row.model_dump(exclude={"call_id"})
    return dict(row)


class ReportRepository:
    """CRUD for one report table."""

    def __init__(self, session: AsyncSession, table: type[Base]) -> None:
        self._session = session
        self._table = table

    async def query(
        self,
        client_id: UUID,
        date_from: date,
        date_to: date,
        member: UUID | None = None,
        **filters: Any,
    ) -> list[Any]:
        """Rows for a client in [date_from, date_to], newest first.

        ``member`` narrows to one team member; extra keyword filters are
        equality matches on columns of the table.
        """
        table = self._table
        stmt = select(table).where(
            table.client_id == client_id,
            table.report_date >= date_from,
            table.report_date <= date_to,
        )
        if member is not None:
            stmt = stmt.where(table.team_member_id == member)
        for column, value in filters.items():
            stmt = stmt.where(getattr(table, column) == value)
        stmt = stmt.order_by(table.report_date.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def insert(self, row: BaseModel | Mapping[str, Any]) -> Any:
        obj = self._table(**_payload(row))
        self._session.add(obj)
        await self._session.flush()
        await self._session.refresh(obj)
        return obj

    async def upsert(
        self,
        rows: Iterable[BaseModel | Mapping[str, Any]],
        conflict_keys: tuple[str, ...],
    ) -> list[Any]:
        """Update the row matching ``conflict_keys``, else insert it.

        A NULL key column matches NULL, so an ad row without an adset name
        replaces the previous one for the same day.
        """
        table = self._table
        saved = []
        for row in rows:
            values = _payload(row)
            stmt = select(table)
            for key in conflict_keys:
                column = getattr(table, key)
                value = values.get(key)
                stmt = stmt.where(column.is_(None) if value is None else column == value)
            existing = (await self._session.execute(stmt)).scalar_one_or_none()
            if existing is None:
                existing = table(**values)
                self._session.add(existing)
            else:
                for key, value in values.items():
                    setattr(existing, key, value)
            saved.append(existing)
        await self._session.flush()
        for obj in saved:
            await self._session.refresh(obj)
        return saved
