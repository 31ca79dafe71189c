"""Tests for the rate calculator.

Covers: zero-denominator policy, each per-role rate table, paid vs organic
selection and idempotence.
"""

from __future__ import annotations

import math

import pytest

from salesops.metrics.rates import (
    FUNNEL_STAGE_RATES,
    RateSpec,
    Rates,
    closer_rates,
    derive_rates,
    dm_funnel_rates,
    funnel_rates,
    safe_ratio,
    setter_rates,
)
from salesops.metrics.reducer import FUNNEL_FIELDS, Totals, reduce_rows


@pytest.fixture
def paid_totals() -> Totals:
    rows = [
        {
            "page_views": 1000, "applications": 40, "bookings": 20, "shows": 14,
            "closes": 5, "cash_collected": 20000, "ad_spend": 4000,
        },
        {
            "page_views": 1000, "applications": 45, "bookings": 22, "shows": 15,
            "closes": 6, "cash_collected": 22000, "ad_spend": 4200,
        },
        {
            "page_views": 1000, "applications": 38, "bookings": 18, "shows": 13,
            "closes": 4, "cash_collected": 18000, "ad_spend": 3800,
        },
    ]
    return reduce_rows(rows, fields=FUNNEL_FIELDS)


# ===================================================================
# safe_ratio
# ===================================================================


class TestSafeRatio:
    """Zero or negative denominators give exactly 0.0."""

    def test_plain_division(self) -> None:
        assert safe_ratio(14, 20) == 0.7

    def test_zero_denominator(self) -> None:
        assert safe_ratio(5, 0) == 0.0

    def test_zero_over_zero(self) -> None:
        result = safe_ratio(0, 0)
        assert result == 0.0
        assert not math.isnan(result)

    def test_negative_denominator(self) -> None:
        assert safe_ratio(5, -1) == 0.0

    def test_none_values(self) -> None:
        assert safe_ratio(None, 10) == 0.0
        assert safe_ratio(10, None) == 0.0

    def test_always_float(self) -> None:
        assert isinstance(safe_ratio(4, 2), float)


# ===================================================================
# Funnel rates
# ===================================================================


class TestFunnelRates:
    """Stage rates plus paid or organic extras."""

    def test_booking_to_show_zero_bookings(self) -> None:
        rates = funnel_rates(Totals({"bookings": 0, "shows": 5}))
        assert rates["booking_to_show"] == 0

    def test_stage_rates(self) -> None:
        totals = Totals({
            "page_views": 1000, "applications": 50, "qualified": 25,
            "bookings": 20, "shows": 15, "closes": 6,
        })
        rates = funnel_rates(totals)
        assert rates["view_to_app"] == pytest.approx(0.05)
        assert rates["app_to_qualified"] == pytest.approx(0.5)
        assert rates["qualified_to_booking"] == pytest.approx(0.8)
        assert rates["booking_to_show"] == pytest.approx(0.75)
        assert rates["show_to_close"] == pytest.approx(0.4)

    def test_paid_roas_and_cpa(self, paid_totals: Totals) -> None:
        rates = funnel_rates(paid_totals)
        assert rates["cash_roas"] == 5.0
        assert rates["cost_per_close"] == 800.0

    def test_paid_cost_per_stage(self, paid_totals: Totals) -> None:
        rates = funnel_rates(paid_totals)
        assert rates["cost_per_view"] == pytest.approx(4.0)
        assert rates["cost_per_booking"] == pytest.approx(200.0)
        assert rates["cost_per_show"] == pytest.approx(12000 / 42)
        # qualified was never reported
        assert rates["cost_per_qualified"] == 0.0

    def test_paid_has_no_overall_conversion(self, paid_totals: Totals) -> None:
        assert "overall_conversion" not in funnel_rates(paid_totals)

    def test_revenue_roas(self) -> None:
        rates = funnel_rates(Totals({"revenue": 9000, "ad_spend": 3000}))
        assert rates["revenue_roas"] == 3.0

    def test_aov(self, paid_totals: Totals) -> None:
        assert funnel_rates(paid_totals)["aov"] == 4000.0

    def test_organic_has_overall_conversion(self) -> None:
        totals = reduce_rows(
            [{"page_views": 500, "closes": 5}], fields=FUNNEL_FIELDS,
        )
        rates = funnel_rates(totals)
        assert rates["overall_conversion"] == pytest.approx(0.01)

    def test_organic_suppresses_cost_metrics(self) -> None:
        totals = reduce_rows([{"page_views": 500, "closes": 5}], fields=FUNNEL_FIELDS)
        rates = funnel_rates(totals)
        assert "cash_roas" not in rates
        assert "cost_per_close" not in rates

    def test_zero_spend_is_still_paid(self) -> None:
        totals = reduce_rows([{"ad_spend": 0, "closes": 2}], fields=FUNNEL_FIELDS)
        rates = funnel_rates(totals)
        assert rates["cash_roas"] == 0.0
        assert rates["cost_per_close"] == 0.0

    def test_empty_totals_all_zero(self) -> None:
        rates = funnel_rates(reduce_rows([], fields=FUNNEL_FIELDS))
        assert all(value == 0.0 for value in rates.values())

    def test_idempotent(self, paid_totals: Totals) -> None:
        assert funnel_rates(paid_totals) == funnel_rates(paid_totals)


# ===================================================================
# Role rates
# ===================================================================


class TestCloserRates:
    def test_rates(self) -> None:
        totals = Totals({
            "calls_on_calendar": 10, "shows": 8, "no_shows": 2,
            "deals_closed": 2, "cash_collected": 9000,
        })
        rates = closer_rates(totals)
        assert rates["show_rate"] == pytest.approx(0.8)
        assert rates["close_rate"] == pytest.approx(0.25)
        assert rates["no_show_rate"] == pytest.approx(0.2)
        assert rates["overall_close_rate"] == pytest.approx(0.2)
        assert rates["aov"] == 4500.0
        assert rates["cash_per_booked_call"] == 900.0

    def test_no_calls(self) -> None:
        rates = closer_rates(Totals({"shows": 0, "deals_closed": 0}))
        assert rates["show_rate"] == 0.0
        assert rates["close_rate"] == 0.0


class TestSetterRates:
    def test_dm_rates(self) -> None:
        totals = Totals({
            "outbound_dms_sent": 200, "outbound_dm_responses": 30,
            "conversations": 15, "calls_booked_dms": 3,
        })
        rates = setter_rates(totals)
        assert rates["response_rate"] == pytest.approx(0.15)
        assert rates["convo_rate"] == pytest.approx(0.5)
        assert rates["booking_rate"] == pytest.approx(0.2)
        assert rates["overall_rate"] == pytest.approx(0.015)


class TestDMFunnelRates:
    def test_rates(self) -> None:
        totals = Totals({
            "dms_sent": 100, "responses": 20, "conversations": 10,
            "bookings": 4, "shows": 3, "closes": 1, "cash_collected": 3000,
        })
        rates = dm_funnel_rates(totals)
        assert rates["response_rate"] == pytest.approx(0.2)
        assert rates["convo_rate"] == pytest.approx(0.5)
        assert rates["booking_rate"] == pytest.approx(0.4)
        assert rates["show_rate"] == pytest.approx(0.75)
        assert rates["close_rate"] == pytest.approx(1 / 3)
        assert rates["aov"] == 3000.0


# ===================================================================
# derive_rates
# ===================================================================


class TestDeriveRates:
    def test_custom_spec(self) -> None:
        rates = derive_rates(Totals({"a": 3, "b": 4}), [RateSpec("a_per_b", "a", "b")])
        assert rates == {"a_per_b": 0.75}

    def test_missing_fields_are_zero(self) -> None:
        rates = derive_rates(Totals(), FUNNEL_STAGE_RATES)
        assert set(rates) == {spec.name for spec in FUNNEL_STAGE_RATES}
        assert all(value == 0.0 for value in rates.values())

    def test_rates_merged(self) -> None:
        merged = Rates({"a": 1.0, "b": 2.0}).merged({"b": 3.0})
        assert merged.as_dict() == {"a": 1.0, "b": 3.0}
