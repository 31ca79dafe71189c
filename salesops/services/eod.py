"""EODService — end-of-day report submission.

Inserts the report, then announces it on Slack. The announcement is
best-effort; see SlackNotifier.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db.tables import CloserReportRow, SetterReportRow
from salesops.models.common import TeamRole
from salesops.models.reports import CloserReport, SetterReport
from salesops.notifications.slack import ReportNotification, SlackNotifier
from salesops.repositories.reports import ReportRepository

logger = logging.getLogger(__name__)


class EODService:
    def __init__(self, session: AsyncSession, notifier: SlackNotifier) -> None:
        self._session = session
        self._notifier = notifier

    async def submit_setter_report(self, report: SetterReport) -> SetterReportRow:
        row = await ReportRepository(self._session, SetterReportRow).insert(report)
        logger.info(
            "Setter report %s saved for %s on %s",
            row.id,
            report.member_name,
            report.report_date,
        )
        await self._notifier.notify_report(
            ReportNotification(
                role=TeamRole.SETTER,
                member_name=report.member_name,
                report_date=report.report_date,
                cash_collected=report.cash_collected,
                key_metric_label="Calls Booked",
                key_metric_value=report.calls_booked,
            )
        )
        return row

    async def submit_closer_report(self, report: CloserReport) -> CloserReportRow:
        row = await ReportRepository(self._session, CloserReportRow).insert(report)
        logger.info(
            "Closer report %s saved for %s on %s",
            row.id,
            report.member_name,
            report.report_date,
        )
        await self._notifier.notify_report(
            ReportNotification(
                role=TeamRole.CLOSER,
                member_name=report.member_name,
                report_date=report.report_date,
                cash_collected=report.cash_collected,
                key_metric_label="Deals Closed",
                key_metric_value=report.deals_closed,
            )
        )
        return row
