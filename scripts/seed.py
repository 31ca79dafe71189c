"""Seed script — load sample data into the SalesOps database.

Creates:
1. A demo client with two setters and two closers
2. 30 days of paid and organic VSL funnel rows
3. 30 days of per-ad and per-content breakdown rows
4. 30 days of setter and closer EOD reports

Deterministic (fixed random seed) and idempotent: skips if the demo
client already exists. Funnel, ad and content rows go through the
repository upsert, so re-running a day replaces it.

Usage:
    python -m scripts.seed          # against DATABASE_URL from .env
    python -m scripts.seed --paid-history <client-id>
"""

import argparse
import asyncio
import random
import sys
from datetime import date, timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesops.db.tables import (
    AdPerformanceRow,
    ClientRow,
    CloserReportRow,
    OrganicContentRow,
    SetterReportRow,
    TeamMemberRow,
    VSLFunnelReportRow,
)
from salesops.metrics.calls import deals_lost
from salesops.models.common import TeamRole, new_uuid7, utc_today
from salesops.models.reports import (
    AdPerformanceReport,
    CloserReport,
    OrganicContentReport,
    OrganicFunnelReport,
    PaidFunnelReport,
    SetterReport,
)
from salesops.repositories.reports import (
    AD_CONFLICT_KEYS,
    CONTENT_CONFLICT_KEYS,
    FUNNEL_CONFLICT_KEYS,
    ReportRepository,
)

DEMO_CLIENT_NAME = "SalesOps Demo Co"
DEMO_DAYS = 30
DEMO_SEED = 2026

DEMO_MEMBERS = [
    ("Avery Setter", TeamRole.SETTER),
    ("Jordan Setter", TeamRole.SETTER),
    ("Riley Closer", TeamRole.CLOSER),
    ("Sam Closer", TeamRole.CLOSER),
]

DEMO_CAMPAIGNS = {
    "Evergreen VSL": ("Lookalike - Buyers", "Interest - Entrepreneurs"),
    "Retargeting": ("Warm - Engagers",),
}
DEMO_ADS = ("Video 1 - Testimonial", "Image 1 - Results")

DEMO_CONTENT = [
    ("youtube", "video", "How we scaled to 50k/mo"),
    ("instagram", "reel", "Client win breakdown"),
    ("instagram", "story", None),
]


# ---------------------------------------------------------------------------
# Row generators
# ---------------------------------------------------------------------------


def paid_funnel_day(rng: random.Random, client_id: UUID, day: date) -> PaidFunnelReport:
    page_views = rng.randint(800, 1200)
    applications = int(page_views * rng.uniform(0.04, 0.06))
    qualified = int(applications * rng.uniform(0.55, 0.70))
    bookings = int(qualified * rng.uniform(0.60, 0.75))
    shows = int(bookings * rng.uniform(0.70, 0.85))
    closes = int(shows * rng.uniform(0.40, 0.60))
    follow_ups = int(shows * rng.uniform(0.20, 0.35))
    cash = round(closes * rng.uniform(4000, 6000))
    return PaidFunnelReport(
        client_id=client_id,
        report_date=day,
        page_views=page_views,
        applications=applications,
        qualified=qualified,
        bookings=bookings,
        shows=shows,
        no_shows=bookings - shows,
        closes=closes,
        deals_lost=deals_lost(shows, closes, follow_ups, clamp=True),
        follow_ups=follow_ups,
        cash_collected=cash,
        revenue=round(cash * 1.5),
        ad_spend=round(rng.uniform(3500, 5500)),
    )


def organic_funnel_day(
    rng: random.Random, client_id: UUID, day: date,
) -> OrganicFunnelReport:
    page_views = rng.randint(300, 600)
    applications = int(page_views * rng.uniform(0.03, 0.05))
    qualified = int(applications * rng.uniform(0.50, 0.65))
    bookings = int(qualified * rng.uniform(0.55, 0.70))
    shows = int(bookings * rng.uniform(0.65, 0.80))
    closes = int(shows * rng.uniform(0.35, 0.55))
    follow_ups = int(shows * rng.uniform(0.15, 0.30))
    cash = round(closes * rng.uniform(3500, 5500))
    return OrganicFunnelReport(
        client_id=client_id,
        report_date=day,
        page_views=page_views,
        applications=applications,
        qualified=qualified,
        bookings=bookings,
        shows=shows,
        no_shows=bookings - shows,
        closes=closes,
        deals_lost=deals_lost(shows, closes, follow_ups, clamp=True),
        follow_ups=follow_ups,
        cash_collected=cash,
        revenue=round(cash * 1.5),
    )


def paid_history_day(rng: random.Random, client_id: UUID, day: date) -> PaidFunnelReport:
    """Paid funnel day for backfilling an existing client.

    No follow-ups are tracked, so every show that did not close counts as
    lost; the value is left unclamped.
    """
    page_views = rng.randint(800, 1200)
    applications = int(page_views * rng.uniform(0.04, 0.06))
    qualified = int(applications * rng.uniform(0.55, 0.70))
    bookings = int(qualified * rng.uniform(0.60, 0.75))
    shows = int(bookings * rng.uniform(0.70, 0.85))
    closes = int(shows * rng.uniform(0.40, 0.60))
    cash = round(closes * rng.uniform(4000, 6000))
    return PaidFunnelReport(
        client_id=client_id,
        report_date=day,
        page_views=page_views,
        applications=applications,
        qualified=qualified,
        bookings=bookings,
        shows=shows,
        no_shows=bookings - shows,
        closes=closes,
        deals_lost=deals_lost(shows, closes, 0, clamp=False),
        cash_collected=cash,
        revenue=round(cash * 1.5),
        ad_spend=round(rng.uniform(3500, 5500)),
    )


def ad_rows_day(
    rng: random.Random, client_id: UUID, day: date,
) -> list[AdPerformanceReport]:
    rows = []
    for campaign, adsets in DEMO_CAMPAIGNS.items():
        for adset in adsets:
            for ad in DEMO_ADS:
                spend = rng.uniform(50, 150)
                page_views = int(spend * rng.uniform(8, 12))
                applications = int(page_views * rng.uniform(0.04, 0.06))
                bookings = int(applications * rng.uniform(0.25, 0.45))
                shows = int(bookings * rng.uniform(0.70, 0.85))
                closes = int(shows * rng.uniform(0.30, 0.50))
                cash = round(closes * rng.uniform(4000, 6000))
                rows.append(
                    AdPerformanceReport(
                        client_id=client_id,
                        report_date=day,
                        campaign_name=campaign,
                        adset_name=adset,
                        ad_name=ad,
                        ad_spend=round(spend, 2),
                        page_views=page_views,
                        applications=applications,
                        qualified=int(applications * 0.6),
                        bookings=bookings,
                        shows=shows,
                        closes=closes,
                        cash_collected=cash,
                        revenue=round(cash * 1.5),
                    )
                )
    return rows


def content_rows_day(
    rng: random.Random, client_id: UUID, day: date,
) -> list[OrganicContentReport]:
    rows = []
    for source, medium, name in DEMO_CONTENT:
        page_views = rng.randint(50, 250)
        applications = int(page_views * rng.uniform(0.03, 0.06))
        bookings = int(applications * rng.uniform(0.3, 0.5))
        shows = int(bookings * rng.uniform(0.6, 0.8))
        closes = int(shows * rng.uniform(0.3, 0.5))
        cash = round(closes * rng.uniform(3500, 5500))
        rows.append(
            OrganicContentReport(
                client_id=client_id,
                report_date=day,
                source=source,
                medium=medium,
                content_name=name,
                page_views=page_views,
                applications=applications,
                qualified=int(applications * 0.6),
                bookings=bookings,
                shows=shows,
                closes=closes,
                cash_collected=cash,
                revenue=round(cash * 1.5),
            )
        )
    return rows


def setter_day(
    rng: random.Random, client_id: UUID, member: TeamMemberRow, day: date,
) -> SetterReport:
    dms = rng.randint(60, 120)
    responses = int(dms * rng.uniform(0.08, 0.20))
    conversations = int(responses * rng.uniform(0.4, 0.7))
    return SetterReport(
        client_id=client_id,
        team_member_id=member.id,
        member_name=member.name,
        report_date=day,
        dials=rng.randint(40, 90),
        pickups=rng.randint(8, 20),
        outbound_dms_sent=dms,
        outbound_dm_responses=responses,
        conversations=conversations,
        calls_booked_dials=rng.randint(0, 3),
        calls_booked_dms=int(conversations * rng.uniform(0.1, 0.3)),
        cash_collected=float(rng.choice((0, 0, 500, 1000))),
    )


def closer_day(
    rng: random.Random, client_id: UUID, member: TeamMemberRow, day: date,
) -> CloserReport:
    on_calendar = rng.randint(3, 8)
    shows = rng.randint(1, on_calendar)
    deals = rng.randint(0, shows)
    cash = round(deals * rng.uniform(2500, 5000))
    return CloserReport(
        client_id=client_id,
        team_member_id=member.id,
        member_name=member.name,
        report_date=day,
        calls_on_calendar=on_calendar,
        shows=shows,
        no_shows=on_calendar - shows,
        deals_closed=deals,
        cash_collected=cash,
        revenue_generated=round(cash * 1.5),
    )


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


async def seed_demo(
    session: AsyncSession, today: date | None = None, days: int = DEMO_DAYS,
) -> dict:
    """Idempotent demo seed.

    Returns dict with keys: created (bool), client_id and row counts.
    If the demo client already exists, returns created=False and skips.
    """
    result = await session.execute(
        select(ClientRow).where(ClientRow.name == DEMO_CLIENT_NAME),
    )
    existing = result.scalar_one_or_none()
    if existing is not None:
        return {"created": False, "client_id": existing.id}

    today = today or utc_today()
    rng = random.Random(DEMO_SEED)

    client = ClientRow(id=new_uuid7(), name=DEMO_CLIENT_NAME)
    session.add(client)
    members = [
        TeamMemberRow(id=new_uuid7(), client_id=client.id, name=name, role=role.value)
        for name, role in DEMO_MEMBERS
    ]
    session.add_all(members)
    await session.flush()

    funnels, ads, content, setters, closers = [], [], [], [], []
    for offset in range(days):
        day = today - timedelta(days=offset)
        funnels.append(paid_funnel_day(rng, client.id, day))
        funnels.append(organic_funnel_day(rng, client.id, day))
        ads.extend(ad_rows_day(rng, client.id, day))
        content.extend(content_rows_day(rng, client.id, day))
        for member in members:
            if member.role == TeamRole.SETTER:
                setters.append(setter_day(rng, client.id, member, day))
            else:
                closers.append(closer_day(rng, client.id, member, day))

    await ReportRepository(session, VSLFunnelReportRow).upsert(funnels, FUNNEL_CONFLICT_KEYS)
    await ReportRepository(session, AdPerformanceRow).upsert(ads, AD_CONFLICT_KEYS)
    await ReportRepository(session, OrganicContentRow).upsert(content, CONTENT_CONFLICT_KEYS)
    setter_repo = ReportRepository(session, SetterReportRow)
    for report in setters:
        await setter_repo.insert(report)
    closer_repo = ReportRepository(session, CloserReportRow)
    for report in closers:
        await closer_repo.insert(report)

    return {
        "created": True,
        "client_id": client.id,
        "member_count": len(members),
        "funnel_count": len(funnels),
        "ad_count": len(ads),
        "content_count": len(content),
        "eod_count": len(setters) + len(closers),
    }


async def seed_paid_history(
    session: AsyncSession,
    client_id: UUID,
    today: date | None = None,
    days: int = DEMO_DAYS,
) -> int:
    """Backfill paid funnel rows for an existing client; returns the row count.

    Upserts on the funnel day, so existing paid rows in the window are
    replaced.
    """
    today = today or utc_today()
    rng = random.Random(DEMO_SEED)
    rows = [
        paid_history_day(rng, client_id, today - timedelta(days=offset))
        for offset in range(days)
    ]
    await ReportRepository(session, VSLFunnelReportRow).upsert(rows, FUNNEL_CONFLICT_KEYS)
    return len(rows)


# ---------------------------------------------------------------------------
# CLI entry point: python -m scripts.seed
# ---------------------------------------------------------------------------


async def _run_seed(paid_history: UUID | None = None) -> None:
    """Run the seed against the real database (idempotent)."""
    from salesops.db.session import get_session_factory

    async with get_session_factory()() as session:
        if paid_history is not None:
            count = await seed_paid_history(session, paid_history)
            await session.commit()
            print(f"Backfilled {count} paid funnel days for client {paid_history}.")
            return

        result = await seed_demo(session)

        if not result["created"]:
            print(f"Demo data already seeded ({DEMO_CLIENT_NAME} exists). Skipping.")
            print(f"  Client: {result['client_id']}")
            return

        await session.commit()

        print("Seed complete.")
        print(f"  Client:       {result['client_id']}")
        print(f"  Members:      {result['member_count']}")
        print(f"  Funnel rows:  {result['funnel_count']}")
        print(f"  Ad rows:      {result['ad_count']}")
        print(f"  Content rows: {result['content_count']}")
        print(f"  EOD reports:  {result['eod_count']}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load sample SalesOps data.")
    parser.add_argument(
        "--paid-history",
        type=UUID,
        metavar="CLIENT_ID",
        help="Only backfill paid funnel days for an existing client.",
    )
    args = parser.parse_args(argv)
    asyncio.run(_run_seed(args.paid_history))
    return 0


if __name__ == "__main__":
    sys.exit(main())
