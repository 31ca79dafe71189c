"""Initial schema — all 11 tables.

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _count(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer, nullable=False, server_default="0")


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Float, nullable=False, server_default="0")


def _text(name: str) -> sa.Column:
    return sa.Column(name, sa.Text, nullable=True)


def _id() -> sa.Column:
    return sa.Column("id", UUID(as_uuid=True), primary_key=True)


def _client_fk() -> sa.Column:
    return sa.Column(
        "client_id", UUID(as_uuid=True), sa.ForeignKey("clients.id"),
        nullable=False, index=True,
    )


def _member_fk() -> sa.Column:
    return sa.Column(
        "team_member_id", UUID(as_uuid=True), sa.ForeignKey("team_members.id"),
        nullable=True, index=True,
    )


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _report_date() -> sa.Column:
    return sa.Column("report_date", sa.Date, nullable=False, index=True)


_STAGES = ("page_views", "applications", "qualified", "bookings", "shows")


def upgrade() -> None:
    # -- Tenancy --
    op.create_table(
        "clients",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        _created_at(),
    )
    op.create_table(
        "team_members",
        _id(),
        _client_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
    )

    # -- EOD reports (append-only) --
    op.create_table(
        "setter_reports",
        _id(),
        _client_fk(),
        _member_fk(),
        sa.Column("member_name", sa.String(255), nullable=False),
        _report_date(),
        *[
            _count(name)
            for name in (
                "dials", "leads_texted", "outbound_dms_sent", "pickups",
                "text_responses", "outbound_dm_responses", "inbound_dms",
                "conversations", "followups_sent", "calls_booked_dials",
                "calls_booked_dms", "live_transfers", "noshows_reached",
                "noshows_rebooked", "old_applicants_called",
                "old_applicants_rebooked", "cancellations_called",
                "cancellations_rebooked",
            )
        ],
        _money("cash_collected"),
        _money("revenue_generated"),
        _text("key_wins"),
        _text("main_challenges"),
        _text("improvements"),
        _created_at(),
    )
    op.create_table(
        "closer_reports",
        _id(),
        _client_fk(),
        _member_fk(),
        sa.Column("member_name", sa.String(255), nullable=False),
        _report_date(),
        *[
            _count(name)
            for name in (
                "calls_on_calendar", "shows", "no_shows", "reschedules",
                "followups_booked", "deals_dqd", "hot_prospects",
                "warm_prospects",
            )
        ],
        _text("primary_objections"),
        _text("call_types"),
        _count("deals_closed"),
        _money("cash_collected"),
        _money("revenue_generated"),
        _text("key_wins"),
        _text("main_challenges"),
        _text("improvements"),
        _created_at(),
    )
    op.create_table(
        "dm_setter_reports",
        _id(),
        _client_fk(),
        _member_fk(),
        sa.Column("member_name", sa.String(255), nullable=False),
        _report_date(),
        *[
            _count(name)
            for name in (
                "dms_sent", "responses", "conversations", "bookings", "shows",
                "no_shows", "closes", "deals_lost",
            )
        ],
        _money("cash_collected"),
        _money("revenue"),
        _created_at(),
    )

    # -- Funnel reports (upserted on composite keys) --
    op.create_table(
        "vsl_funnel_reports",
        _id(),
        _client_fk(),
        _report_date(),
        sa.Column("funnel_type", sa.String(20), nullable=False),
        *[_count(name) for name in _STAGES],
        _count("no_shows"),
        _count("closes"),
        _count("deals_lost"),
        _count("follow_ups"),
        _money("cash_collected"),
        _money("revenue"),
        sa.Column("ad_spend", sa.Float, nullable=True),
        _created_at(),
        sa.UniqueConstraint(
            "client_id", "report_date", "funnel_type", name="uq_vsl_funnel_day",
        ),
    )
    op.create_table(
        "vsl_ad_performance",
        _id(),
        _client_fk(),
        _report_date(),
        sa.Column("campaign_name", sa.String(255), nullable=False),
        sa.Column("adset_name", sa.String(255), nullable=True),
        sa.Column("ad_name", sa.String(255), nullable=True),
        _money("ad_spend"),
        *[_count(name) for name in _STAGES],
        _count("closes"),
        _money("cash_collected"),
        _money("revenue"),
        _created_at(),
        sa.UniqueConstraint(
            "client_id", "report_date", "campaign_name", "adset_name", "ad_name",
            name="uq_ad_performance_day",
        ),
    )
    op.create_table(
        "organic_content",
        _id(),
        _client_fk(),
        _report_date(),
        sa.Column("source", sa.String(100), nullable=False),
        sa.Column("medium", sa.String(100), nullable=True),
        sa.Column("content_name", sa.String(255), nullable=True),
        *[_count(name) for name in _STAGES],
        _count("closes"),
        _money("cash_collected"),
        _money("revenue"),
        _created_at(),
        sa.UniqueConstraint(
            "client_id", "report_date", "source", "medium", "content_name",
            name="uq_organic_content_day",
        ),
    )

    # -- Calls (status updates allowed) --
    op.create_table(
        "scheduled_calls",
        _id(),
        _client_fk(),
        sa.Column("call_date", sa.Date, nullable=False, index=True),
        sa.Column("call_time", sa.String(20), nullable=False),
        sa.Column("lead_name", sa.String(255), nullable=False),
        sa.Column("lead_email", sa.String(255), nullable=True),
        sa.Column("lead_phone", sa.String(50), nullable=True),
        sa.Column("closer_name", sa.String(255), nullable=False),
        sa.Column("investment_min", sa.Float, nullable=True),
        sa.Column("investment_max", sa.Float, nullable=True),
        _text("investment_notes"),
        sa.Column("confirmed", sa.Boolean, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="scheduled"),
        _text("outcome"),
        sa.Column("closed", sa.Boolean, nullable=False, server_default=sa.false()),
        _money("cash_amount"),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "outcomes",
        _id(),
        _client_fk(),
        sa.Column(
            "scheduled_call_id", UUID(as_uuid=True), sa.ForeignKey("scheduled_calls.id"),
            nullable=True, index=True,
        ),
        sa.Column("lead_name", sa.String(255), nullable=False),
        sa.Column("lead_email", sa.String(255), nullable=True),
        sa.Column("lead_phone", sa.String(50), nullable=True),
        sa.Column("outcome_type", sa.String(20), nullable=False),
        sa.Column("outcome_date", sa.Date, nullable=False, index=True),
        sa.Column("closer_name", sa.String(255), nullable=True),
        sa.Column("setter_name", sa.String(255), nullable=True),
        _money("cash_collected"),
        _money("package_total"),
        sa.Column("payment_type", sa.String(20), nullable=True),
        sa.Column("payment_months", sa.Integer, nullable=True),
        sa.Column("amount_per_period", sa.Float, nullable=True),
        _text("current_situation"),
        _text("desired_situation"),
        _text("obstacles"),
        _text("reason"),
        sa.Column("follow_up_date", sa.Date, nullable=True),
        _text("follow_up_reason"),
        _money("deposit_amount"),
        sa.Column("created_by", UUID(as_uuid=True), nullable=True),
        _created_at(),
    )

    # -- Goals --
    op.create_table(
        "user_goals",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("goal_type", sa.String(20), nullable=False),
        *[
            _money(name)
            for name in (
                "goal_amount", "target_aov", "target_show_rate",
                "target_close_rate", "target_response_rate", "target_convo_rate",
                "target_booking_rate", "target_cash_per_booking",
            )
        ],
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "goal_type", name="uq_user_goal_type"),
    )


def downgrade() -> None:
    for table in (
        "user_goals",
        "outcomes",
        "scheduled_calls",
        "organic_content",
        "vsl_ad_performance",
        "vsl_funnel_reports",
        "dm_setter_reports",
        "closer_reports",
        "setter_reports",
        "team_members",
        "clients",
    ):
        op.drop_table(table)
