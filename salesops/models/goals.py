"""Personal goal and target-assumption models."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from salesops.models.common import GoalType, Money, SalesOpsBase, UTCTimestamp, utc_now

# Defaults applied when a user has not stored their own targets.
DEFAULT_GOAL_AMOUNT = 50_000.0
DEFAULT_TARGET_AOV = 3_000.0
DEFAULT_TARGET_CASH_PER_BOOKING = 585.0


class GoalAssumptions(SalesOpsBase):
    """Goal amount plus the conversion targets used to size the funnel.

    Target rates are decimal fractions (0.65 for 65%). Storage accepts 0 so
    that a cleared form field round-trips; the pacing calculator rejects
    non-positive targets before dividing by them.
    """

    goal_amount: Money = DEFAULT_GOAL_AMOUNT
    target_aov: Money = DEFAULT_TARGET_AOV
    target_show_rate: float = Field(default=0.65, ge=0.0, le=1.0)
    target_close_rate: float = Field(default=0.30, ge=0.0, le=1.0)
    target_response_rate: float = Field(default=0.05, ge=0.0, le=1.0)
    target_convo_rate: float = Field(default=0.50, ge=0.0, le=1.0)
    target_booking_rate: float = Field(default=0.30, ge=0.0, le=1.0)
    target_cash_per_booking: Money = DEFAULT_TARGET_CASH_PER_BOOKING


class UserGoal(SalesOpsBase):
    """A stored goal keyed on (user_id, goal_type)."""

    user_id: UUID
    goal_type: GoalType = GoalType.MONTHLY
    assumptions: GoalAssumptions = Field(default_factory=GoalAssumptions)
    updated_at: UTCTimestamp = Field(default_factory=utc_now)
