"""FastAPI application entry point for SalesOps.

Client-scoped report and call routers, user-scoped goal routers, and
global health/version endpoints.
"""

import logging

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from salesops.api.calls import router as calls_router
from salesops.api.goals import router as goals_router
from salesops.api.reports import router as reports_router
from salesops.config.settings import get_settings
from salesops.db.session import get_session_factory

APP_VERSION = "0.1.0"

settings = get_settings()

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# --- Structured logging ---
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == "dev"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value],
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

# --- FastAPI app ---
app = FastAPI(
    title="SalesOps API",
    description="Sales funnel reporting, team performance and goal pacing.",
    version=APP_VERSION,
)

# --- CORS middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.ENVIRONMENT == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Routers ---
# Client-scoped (all under /v1/clients/{client_id}/...)
app.include_router(reports_router)
app.include_router(calls_router)

# User-scoped (under /v1/users/{user_id}/...)
app.include_router(goals_router)


# --- Infrastructure Endpoints (global) ---


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe with a database connectivity check.

    Returns 200 always (degraded status if components are down). The
    EOD webhook is reported separately and never degrades the status.
    """
    checks: dict[str, bool] = {"api": True}

    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = True
    except (SQLAlchemyError, OSError):
        logger.warning("health_check_database_unavailable")
        checks["database"] = False

    all_ok = all(checks.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "checks": checks,
        "notifications": "enabled" if settings.SLACK_WEBHOOK_URL else "disabled",
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": "SalesOps",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
