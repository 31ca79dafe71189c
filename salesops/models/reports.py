"""Daily report rows submitted by staff or imported from ad platforms.

Every row is a value type: it is validated on the way in and then only
read by the metrics engine. Paid and organic funnel rows are distinct
variants so that an organic row can never carry an ad-spend value.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal
from uuid import UUID

from pydantic import Field

from salesops.models.common import (
    CallStatus,
    Count,
    Money,
    OutcomeType,
    PaymentType,
    SalesOpsBase,
)


# ---------------------------------------------------------------------------
# VSL funnel rows
# ---------------------------------------------------------------------------


class _FunnelReportBase(SalesOpsBase):
    """Stage counters shared by paid and organic funnel rows."""

    client_id: UUID
    report_date: date
    page_views: Count = 0
    applications: Count = 0
    qualified: Count = 0
    bookings: Count = 0
    shows: Count = 0
    no_shows: Count = 0
    closes: Count = 0
    deals_lost: Count = 0
    follow_ups: Count = 0
    cash_collected: Money = 0.0
    revenue: Money = 0.0


class PaidFunnelReport(_FunnelReportBase):
    """Funnel row for paid traffic. Always carries an ad spend."""

    funnel_type: Literal["paid"] = "paid"
    ad_spend: Money


class OrganicFunnelReport(_FunnelReportBase):
    """Funnel row for organic traffic. Has no cost dimension."""

    funnel_type: Literal["organic"] = "organic"


FunnelReport = Annotated[
    PaidFunnelReport | OrganicFunnelReport,
    Field(discriminator="funnel_type"),
]


class AdPerformanceReport(SalesOpsBase):
    """Per-ad daily breakdown for paid traffic."""

    client_id: UUID
    report_date: date
    campaign_name: str
    adset_name: str | None = None
    ad_name: str | None = None
    ad_spend: Money = 0.0
    page_views: Count = 0
    applications: Count = 0
    qualified: Count = 0
    bookings: Count = 0
    shows: Count = 0
    closes: Count = 0
    cash_collected: Money = 0.0
    revenue: Money = 0.0


class OrganicContentReport(SalesOpsBase):
    """Per-content daily breakdown for organic traffic."""

    client_id: UUID
    report_date: date
    source: str
    medium: str | None = None
    content_name: str | None = None
    page_views: Count = 0
    applications: Count = 0
    qualified: Count = 0
    bookings: Count = 0
    shows: Count = 0
    closes: Count = 0
    cash_collected: Money = 0.0
    revenue: Money = 0.0


# ---------------------------------------------------------------------------
# EOD activity rows
# ---------------------------------------------------------------------------


class _EODReportBase(SalesOpsBase):
    client_id: UUID
    team_member_id: UUID | None = None
    member_name: str
    report_date: date
    cash_collected: Money = 0.0
    revenue_generated: Money = 0.0
    key_wins: str | None = None
    main_challenges: str | None = None
    improvements: str | None = None


class SetterReport(_EODReportBase):
    """End-of-day activity report from a setter."""

    # Activity
    dials: Count = 0
    leads_texted: Count = 0
    outbound_dms_sent: Count = 0
    pickups: Count = 0
    text_responses: Count = 0
    outbound_dm_responses: Count = 0
    inbound_dms: Count = 0
    conversations: Count = 0
    followups_sent: Count = 0
    # Bookings
    calls_booked_dials: Count = 0
    calls_booked_dms: Count = 0
    live_transfers: Count = 0
    # Recovery
    noshows_reached: Count = 0
    noshows_rebooked: Count = 0
    old_applicants_called: Count = 0
    old_applicants_rebooked: Count = 0
    cancellations_called: Count = 0
    cancellations_rebooked: Count = 0

    @property
    def calls_booked(self) -> int:
        """Bookings from both dials and DMs."""
        return self.calls_booked_dials + self.calls_booked_dms


class CloserReport(_EODReportBase):
    """End-of-day activity report from a closer."""

    calls_on_calendar: Count = 0
    shows: Count = 0
    no_shows: Count = 0
    reschedules: Count = 0
    followups_booked: Count = 0
    deals_dqd: Count = 0
    hot_prospects: Count = 0
    warm_prospects: Count = 0
    deals_closed: Count = 0
    primary_objections: str | None = None
    call_types: str | None = None


class DMSetterReport(SalesOpsBase):
    """Daily DM outreach funnel for one setter."""

    client_id: UUID
    team_member_id: UUID | None = None
    member_name: str
    report_date: date
    dms_sent: Count = 0
    responses: Count = 0
    conversations: Count = 0
    bookings: Count = 0
    shows: Count = 0
    no_shows: Count = 0
    closes: Count = 0
    deals_lost: Count = 0
    cash_collected: Money = 0.0
    revenue: Money = 0.0


# ---------------------------------------------------------------------------
# Calls and outcomes
# ---------------------------------------------------------------------------


class ScheduledCall(SalesOpsBase):
    """A booked sales call on a closer's calendar."""

    call_id: UUID | None = None
    client_id: UUID
    call_date: date
    call_time: str
    lead_name: str
    lead_email: str | None = None
    lead_phone: str | None = None
    closer_name: str
    investment_min: float | None = None
    investment_max: float | None = None
    investment_notes: str | None = None
    confirmed: bool | None = None  # None = pending
    status: CallStatus = CallStatus.SCHEDULED
    outcome: str | None = None


class Outcome(SalesOpsBase):
    """Result a closer records after a call."""

    client_id: UUID
    scheduled_call_id: UUID | None = None
    lead_name: str
    lead_email: str | None = None
    lead_phone: str | None = None
    outcome_type: OutcomeType
    outcome_date: date
    closer_name: str | None = None
    setter_name: str | None = None
    # Close
    cash_collected: Money = 0.0
    package_total: Money = 0.0
    payment_type: PaymentType | None = None
    payment_months: int | None = None
    amount_per_period: float | None = None
    current_situation: str | None = None
    desired_situation: str | None = None
    obstacles: str | None = None
    # No show / deal lost
    reason: str | None = None
    # Follow up
    follow_up_date: date | None = None
    follow_up_reason: str | None = None
    deposit_amount: Money = 0.0
