"""Tests for team overview snapshots."""

from datetime import date

import pytest

from salesops.metrics.overview import (
    closer_overview,
    report_day,
    setter_overview,
    target_progress,
    yesterday,
)

# Thursday
TODAY = date(2026, 3, 12)
BOOKED_TARGET = 20
DEALS_TARGET = 10


def _setter(day: date, dials_booked: int, dm_booked: int, **extra: int) -> dict:
    return {
        "report_date": day,
        "calls_booked_dials": dials_booked,
        "calls_booked_dms": dm_booked,
        **extra,
    }


class TestTargetProgress:
    def test_partial(self) -> None:
        assert target_progress(5, 20) == 25

    def test_capped(self) -> None:
        assert target_progress(30, 20) == 100

    def test_non_positive_target(self) -> None:
        assert target_progress(5, 0) == 0


class TestSetterOverview:
    def test_windows(self) -> None:
        rows = [
            _setter(date(2026, 3, 11), 1, 2),  # yesterday, this week
            _setter(date(2026, 3, 9), 2, 0),   # Monday
            _setter(date(2026, 3, 6), 4, 4),   # last week
        ]
        overview = setter_overview(rows, TODAY, BOOKED_TARGET)
        assert overview.yesterday["calls_booked"] == 3
        assert overview.week_to_date["calls_booked"] == 5
        assert overview.period["calls_booked"] == 13

    def test_weekly_progress(self) -> None:
        rows = [_setter(date(2026, 3, 10), 3, 2)]
        overview = setter_overview(rows, TODAY, booked_target=10)
        assert overview.weekly_metric == "calls_booked"
        assert overview.weekly_value == 5
        assert overview.weekly_target == 10
        assert overview.weekly_progress == 50

    def test_combined_responses(self) -> None:
        rows = [_setter(TODAY, 0, 0, text_responses=3, outbound_dm_responses=4)]
        assert setter_overview(rows, TODAY, BOOKED_TARGET).period["responses"] == 7

    def test_rates(self) -> None:
        rows = [_setter(TODAY, 0, 2, outbound_dms_sent=100, outbound_dm_responses=10,
                        conversations=5)]
        rates = setter_overview(rows, TODAY, BOOKED_TARGET).rates
        assert rates["response_rate"] == pytest.approx(0.1)
        assert rates["booking_rate"] == pytest.approx(0.4)

    def test_iso_string_dates(self) -> None:
        rows = [_setter("2026-03-11", 1, 0)]  # type: ignore[arg-type]
        assert setter_overview(rows, TODAY, BOOKED_TARGET).yesterday["calls_booked"] == 1

    def test_empty(self) -> None:
        overview = setter_overview([], TODAY, BOOKED_TARGET)
        assert overview.weekly_value == 0
        assert overview.weekly_progress == 0


class TestCloserOverview:
    def test_deals_progress(self) -> None:
        rows = [
            {"report_date": date(2026, 3, 11), "deals_closed": 2, "shows": 4,
             "calls_on_calendar": 5, "cash_collected": 8000.0},
            {"report_date": date(2026, 3, 2), "deals_closed": 3, "shows": 3,
             "calls_on_calendar": 3, "cash_collected": 9000.0},
        ]
        overview = closer_overview(rows, TODAY, DEALS_TARGET)
        assert overview.yesterday["deals_closed"] == 2
        assert overview.week_to_date["deals_closed"] == 2
        assert overview.period["deals_closed"] == 5
        assert overview.weekly_metric == "deals_closed"
        assert overview.weekly_progress == 20
        assert overview.rates["show_rate"] == pytest.approx(7 / 8)


class TestHelpers:
    def test_yesterday(self) -> None:
        assert yesterday(date(2026, 3, 1)) == date(2026, 2, 28)

    def test_report_day(self) -> None:
        assert report_day({"report_date": "2026-03-01"}) == date(2026, 3, 1)


class TestTargetsFromCaller:
    def test_setter_target_is_used_as_given(self) -> None:
        rows = [_setter(date(2026, 3, 10), 2, 2)]
        overview = setter_overview(rows, TODAY, booked_target=8)
        assert overview.weekly_target == 8
        assert overview.weekly_progress == 50

    def test_closer_non_positive_target(self) -> None:
        rows = [{"report_date": TODAY, "deals_closed": 3}]
        overview = closer_overview(rows, TODAY, deals_target=0)
        assert overview.weekly_progress == 0

    def test_target_is_required(self) -> None:
        with pytest.raises(TypeError):
            closer_overview([], TODAY)  # type: ignore[call-arg]
