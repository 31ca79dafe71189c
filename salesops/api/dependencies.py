"""FastAPI dependency injection factories for repositories and services.

Each factory takes AsyncSession via Depends(get_async_session) and returns
a repository or service instance. API endpoints use these via Depends().
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.config.benchmarks import BenchmarkConfig, get_benchmark_config
from salesops.config.settings import Settings, get_settings
from salesops.db.session import get_async_session
from salesops.db.tables import VSLFunnelReportRow
from salesops.notifications.slack import SlackNotifier
from salesops.repositories.calls import CallRepository
from salesops.repositories.reports import ReportRepository
from salesops.services.eod import EODService
from salesops.services.goals import GoalService
from salesops.services.reporting import ReportingService

# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


async def get_funnel_repo(
    session: AsyncSession = Depends(get_async_session),
) -> ReportRepository:
    return ReportRepository(session, VSLFunnelReportRow)


async def get_call_repo(
    session: AsyncSession = Depends(get_async_session),
) -> CallRepository:
    return CallRepository(session)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


def get_notifier(settings: Settings = Depends(get_settings)) -> SlackNotifier:
    return SlackNotifier(settings.SLACK_WEBHOOK_URL, timeout=settings.NOTIFY_TIMEOUT_S)


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


async def get_reporting_service(
    session: AsyncSession = Depends(get_async_session),
    benchmarks: BenchmarkConfig = Depends(get_benchmark_config),
) -> ReportingService:
    return ReportingService(session, benchmarks)


async def get_eod_service(
    session: AsyncSession = Depends(get_async_session),
    notifier: SlackNotifier = Depends(get_notifier),
) -> EODService:
    return EODService(session, notifier)


async def get_goal_service(
    session: AsyncSession = Depends(get_async_session),
) -> GoalService:
    return GoalService(session)
