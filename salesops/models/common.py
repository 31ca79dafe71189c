"""Shared types, enums, and base models used across SalesOps domain models."""

from datetime import date, datetime, timedelta, timezone
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def utc_today() -> date:
    """Return the current UTC calendar date."""
    return utc_now().date()


def days_ago(days: int, today: date | None = None) -> date:
    """Return the date ``days`` days before ``today`` (default: UTC today)."""
    return (today or utc_today()) - timedelta(days=days)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# --- Reusable annotated types ---

UUIDv7 = Annotated[UUID, Field(description="Time-sortable UUID v7.")]
UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]
Count = Annotated[int, Field(ge=0, description="Non-negative activity counter.")]
Money = Annotated[float, Field(ge=0.0, description="Non-negative currency amount.")]


# --- Shared enums ---


class UserRole(StrEnum):
    """Dashboard role used for view routing."""

    EXECUTIVE = "executive"
    CLIENT = "client"
    SETTER = "setter"
    CLOSER = "closer"


class TeamRole(StrEnum):
    """Role of a team member submitting EOD reports."""

    SETTER = "setter"
    CLOSER = "closer"


class FunnelType(StrEnum):
    """Traffic source of a VSL funnel report."""

    PAID = "paid"
    ORGANIC = "organic"


class GoalType(StrEnum):
    """Period a personal goal is measured over."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class CallStatus(StrEnum):
    """Lifecycle status of a scheduled sales call."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"
    RESCHEDULED = "rescheduled"
    CANCELLED = "cancelled"


class OutcomeType(StrEnum):
    """Result recorded by a closer after a call."""

    CLOSE = "close"
    NO_SHOW = "no_show"
    FOLLOW_UP = "follow_up"
    DEAL_LOST = "deal_lost"


class PaymentType(StrEnum):
    """How a closed deal is paid."""

    PIF = "pif"
    PAYMENT_PLAN = "payment_plan"


# --- Base model ---


class SalesOpsBase(BaseModel):
    """Base model with common configuration for all SalesOps Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "ser_json_timedelta": "iso8601",
        "protected_namespaces": (),
    }
