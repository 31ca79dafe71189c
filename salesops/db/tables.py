"""SQLAlchemy ORM table models for SalesOps.

All tables defined in a single file. Every row is scoped to a client
(tenant) except user goals, which are scoped to a user.

Categories:
- TENANCY: Client, TeamMember
- REPORTS (upserted or appended daily): SetterReport, CloserReport,
  VSLFunnelReport, DMSetterReport, AdPerformance, OrganicContent
- CALLS (status updates allowed): ScheduledCall, Outcome
- GOALS: UserGoal (one row per user and goal type)
"""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from salesops.db.session import Base
from salesops.models.common import new_uuid7, utc_now


def _count() -> Mapped[int]:
    return mapped_column(Integer, nullable=False, default=0)


def _money() -> Mapped[float]:
    return mapped_column(Float, nullable=False, default=0.0)


def _id() -> Mapped[UUID]:
    return mapped_column(primary_key=True, default=new_uuid7)


def _client_fk() -> Mapped[UUID]:
    return mapped_column(ForeignKey("clients.id"), nullable=False, index=True)


def _created_at() -> Mapped[datetime]:
    return mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)


# ---------------------------------------------------------------------------
# Tenancy
# ---------------------------------------------------------------------------


class ClientRow(Base):
    __tablename__ = "clients"

    id: Mapped[UUID] = _id()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = _created_at()


class TeamMemberRow(Base):
    __tablename__ = "team_members"

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = _created_at()


# ---------------------------------------------------------------------------
# EOD reports — append-only
# ---------------------------------------------------------------------------


class SetterReportRow(Base):
    __tablename__ = "setter_reports"

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    team_member_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("team_members.id"), nullable=True, index=True,
    )
    member_name: Mapped[str] = mapped_column(String(255), nullable=False)
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    dials: Mapped[int] = _count()
    leads_texted: Mapped[int] = _count()
    outbound_dms_sent: Mapped[int] = _count()
    pickups: Mapped[int] = _count()
    text_responses: Mapped[int] = _count()
    outbound_dm_responses: Mapped[int] = _count()
    inbound_dms: Mapped[int] = _count()
    conversations: Mapped[int] = _count()
    followups_sent: Mapped[int] = _count()
    calls_booked_dials: Mapped[int] = _count()
    calls_booked_dms: Mapped[int] = _count()
    live_transfers: Mapped[int] = _count()
    noshows_reached: Mapped[int] = _count()
    noshows_rebooked: Mapped[int] = _count()
    old_applicants_called: Mapped[int] = _count()
    old_applicants_rebooked: Mapped[int] = _count()
    cancellations_called: Mapped[int] = _count()
    cancellations_rebooked: Mapped[int] = _count()
    cash_collected: Mapped[float] = _money()
    revenue_generated: Mapped[float] = _money()
    key_wins: Mapped[str | None] = mapped_column(Text, nullable=True)
    main_challenges: Mapped[str | None] = mapped_column(Text, nullable=True)
    improvements: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at()


class CloserReportRow(Base):
    __tablename__ = "closer_reports"

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    team_member_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("team_members.id"), nullable=True, index=True,
    )
    member_name: Mapped[str] = mapped_column(String(255), nullable=False)
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    calls_on_calendar: Mapped[int] = _count()
    shows: Mapped[int] = _count()
    no_shows: Mapped[int] = _count()
    reschedules: Mapped[int] = _count()
    followups_booked: Mapped[int] = _count()
    deals_dqd: Mapped[int] = _count()
    hot_prospects: Mapped[int] = _count()
    warm_prospects: Mapped[int] = _count()
    primary_objections: Mapped[str | None] = mapped_column(Text, nullable=True)
    call_types: Mapped[str | None] = mapped_column(Text, nullable=True)
    deals_closed: Mapped[int] = _count()
    cash_collected: Mapped[float] = _money()
    revenue_generated: Mapped[float] = _money()
    key_wins: Mapped[str | None] = mapped_column(Text, nullable=True)
    main_challenges: Mapped[str | None] = mapped_column(Text, nullable=True)
    improvements: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at()


class DMSetterReportRow(Base):
    __tablename__ = "dm_setter_reports"

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    team_member_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("team_members.id"), nullable=True, index=True,
    )
    member_name: Mapped[str] = mapped_column(String(255), nullable=False)
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    dms_sent: Mapped[int] = _count()
    responses: Mapped[int] = _count()
    conversations: Mapped[int] = _count()
    bookings: Mapped[int] = _count()
    shows: Mapped[int] = _count()
    no_shows: Mapped[int] = _count()
    closes: Mapped[int] = _count()
    deals_lost: Mapped[int] = _count()
    cash_collected: Mapped[float] = _money()
    revenue: Mapped[float] = _money()
    created_at: Mapped[datetime] = _created_at()


# ---------------------------------------------------------------------------
# Funnel reports — upserted on composite keys
# ---------------------------------------------------------------------------


class VSLFunnelReportRow(Base):
    """Daily paid or organic funnel. ad_spend is NULL for organic rows."""

    __tablename__ = "vsl_funnel_reports"
    __table_args__ = (
        UniqueConstraint(
            "client_id", "report_date", "funnel_type", name="uq_vsl_funnel_day",
        ),
    )

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    funnel_type: Mapped[str] = mapped_column(String(20), nullable=False)
    page_views: Mapped[int] = _count()
    applications: Mapped[int] = _count()
    qualified: Mapped[int] = _count()
    bookings: Mapped[int] = _count()
    shows: Mapped[int] = _count()
    no_shows: Mapped[int] = _count()
    closes: Mapped[int] = _count()
    deals_lost: Mapped[int] = _count()
    follow_ups: Mapped[int] = _count()
    cash_collected: Mapped[float] = _money()
    revenue: Mapped[float] = _money()
    ad_spend: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = _created_at()


class AdPerformanceRow(Base):
    __tablename__ = "vsl_ad_performance"
    __table_args__ = (
        UniqueConstraint(
            "client_id",
            "report_date",
            "campaign_name",
            "adset_name",
            "ad_name",
            name="uq_ad_performance_day",
        ),
    )

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    campaign_name: Mapped[str] = mapped_column(String(255), nullable=False)
    adset_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ad_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ad_spend: Mapped[float] = _money()
    page_views: Mapped[int] = _count()
    applications: Mapped[int] = _count()
    qualified: Mapped[int] = _count()
    bookings: Mapped[int] = _count()
    shows: Mapped[int] = _count()
    closes: Mapped[int] = _count()
    cash_collected: Mapped[float] = _money()
    revenue: Mapped[float] = _money()
    created_at: Mapped[datetime] = _created_at()


class OrganicContentRow(Base):
    __tablename__ = "organic_content"
    __table_args__ = (
        UniqueConstraint(
            "client_id",
            "report_date",
            "source",
            "medium",
            "content_name",
            name="uq_organic_content_day",
        ),
    )

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    source: Mapped[str] = mapped_column(String(100), nullable=False)
    medium: Mapped[str | None] = mapped_column(String(100), nullable=True)
    content_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    page_views: Mapped[int] = _count()
    applications: Mapped[int] = _count()
    qualified: Mapped[int] = _count()
    bookings: Mapped[int] = _count()
    shows: Mapped[int] = _count()
    closes: Mapped[int] = _count()
    cash_collected: Mapped[float] = _money()
    revenue: Mapped[float] = _money()
    created_at: Mapped[datetime] = _created_at()


# ---------------------------------------------------------------------------
# Calls — OPERATIONAL (status updates allowed)
# ---------------------------------------------------------------------------


class ScheduledCallRow(Base):
    __tablename__ = "scheduled_calls"

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    call_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    call_time: Mapped[str] = mapped_column(String(20), nullable=False)
    lead_name: Mapped[str] = mapped_column(String(255), nullable=False)
    lead_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lead_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    closer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    investment_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    investment_max: Mapped[float | None] = mapped_column(Float, nullable=True)
    investment_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    confirmed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="scheduled")
    outcome: Mapped[str | None] = mapped_column(Text, nullable=True)
    closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cash_amount: Mapped[float] = _money()
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now,
    )


class OutcomeRow(Base):
    __tablename__ = "outcomes"

    id: Mapped[UUID] = _id()
    client_id: Mapped[UUID] = _client_fk()
    scheduled_call_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("scheduled_calls.id"), nullable=True, index=True,
    )
    lead_name: Mapped[str] = mapped_column(String(255), nullable=False)
    lead_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lead_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    outcome_type: Mapped[str] = mapped_column(String(20), nullable=False)
    outcome_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    closer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    setter_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cash_collected: Mapped[float] = _money()
    package_total: Mapped[float] = _money()
    payment_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    payment_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    amount_per_period: Mapped[float | None] = mapped_column(Float, nullable=True)
    current_situation: Mapped[str | None] = mapped_column(Text, nullable=True)
    desired_situation: Mapped[str | None] = mapped_column(Text, nullable=True)
    obstacles: Mapped[str | None] = mapped_column(Text, nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    follow_up_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    follow_up_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    deposit_amount: Mapped[float] = _money()
    created_by: Mapped[UUID | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = _created_at()


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


class UserGoalRow(Base):
    __tablename__ = "user_goals"
    __table_args__ = (
        UniqueConstraint("user_id", "goal_type", name="uq_user_goal_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    goal_type: Mapped[str] = mapped_column(String(20), nullable=False)
    goal_amount: Mapped[float] = _money()
    target_aov: Mapped[float] = _money()
    target_show_rate: Mapped[float] = _money()
    target_close_rate: Mapped[float] = _money()
    target_response_rate: Mapped[float] = _money()
    target_convo_rate: Mapped[float] = _money()
    target_booking_rate: Mapped[float] = _money()
    target_cash_per_booking: Mapped[float] = _money()
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now,
    )
