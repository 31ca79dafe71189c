"""Tests for ad and organic content breakdown tables."""

import pytest

from salesops.metrics.breakdown import (
    MISSING_AD_PART,
    UNKNOWN_CONTENT,
    AdLevel,
    ContentField,
    ad_group_key,
    aggregate_ads,
    aggregate_content,
    sort_breakdown,
)


@pytest.fixture
def ad_rows() -> list[dict]:
    return [
        {
            "campaign_name": "Evergreen", "adset_name": "Lookalike", "ad_name": "Video 1",
            "ad_spend": 100.0, "page_views": 1000, "closes": 1, "cash_collected": 5000.0,
        },
        {
            "campaign_name": "Evergreen", "adset_name": "Lookalike", "ad_name": "Image 1",
            "ad_spend": 200.0, "page_views": 1500, "closes": 0, "cash_collected": 0.0,
        },
        {
            "campaign_name": "Retargeting", "adset_name": None, "ad_name": None,
            "ad_spend": 50.0, "page_views": 300, "closes": 1, "cash_collected": 3000.0,
        },
        {
            "campaign_name": "Evergreen", "adset_name": "Interest", "ad_name": "Video 1",
            "ad_spend": 300.0, "page_views": 2000, "closes": 2, "cash_collected": 9000.0,
        },
    ]


class TestAdGroupKey:
    def test_campaign(self) -> None:
        row = {"campaign_name": "Evergreen", "adset_name": "A", "ad_name": "B"}
        assert ad_group_key(row, AdLevel.CAMPAIGN) == "Evergreen"

    def test_adset(self) -> None:
        row = {"campaign_name": "Evergreen", "adset_name": "A", "ad_name": "B"}
        assert ad_group_key(row, AdLevel.ADSET) == "Evergreen / A"

    def test_missing_parts_dash(self) -> None:
        row = {"campaign_name": "Retargeting", "adset_name": None}
        assert ad_group_key(row, AdLevel.AD) == (
            f"Retargeting / {MISSING_AD_PART} / {MISSING_AD_PART}"
        )


class TestAggregateAds:
    def test_campaign_level(self, ad_rows: list[dict]) -> None:
        result = aggregate_ads(ad_rows, AdLevel.CAMPAIGN)
        assert [r.source for r in result] == ["Evergreen", "Retargeting"]
        evergreen = result[0]
        assert evergreen.ad_spend == 600.0
        assert evergreen.closes == 3
        assert evergreen.cash_collected == 14000.0
        assert evergreen.roas == pytest.approx(14000 / 600)
        assert evergreen.cpa == 200.0

    def test_adset_level_first_seen_order(self, ad_rows: list[dict]) -> None:
        result = aggregate_ads(ad_rows, AdLevel.ADSET)
        assert [r.source for r in result] == [
            "Evergreen / Lookalike",
            f"Retargeting / {MISSING_AD_PART}",
            "Evergreen / Interest",
        ]

    def test_ad_level(self, ad_rows: list[dict]) -> None:
        result = aggregate_ads(ad_rows, AdLevel.AD)
        assert len(result) == 4

    def test_no_closes_cpa_zero(self, ad_rows: list[dict]) -> None:
        result = aggregate_ads(ad_rows, AdLevel.AD)
        image = next(r for r in result if r.source.endswith("Image 1"))
        assert image.cpa == 0.0
        assert image.roas == 0.0

    def test_empty(self) -> None:
        assert aggregate_ads([], AdLevel.CAMPAIGN) == []


class TestAggregateContent:
    def test_sorted_by_cash(self) -> None:
        rows = [
            {"source": "youtube", "page_views": 100, "closes": 1, "cash_collected": 3000.0},
            {"source": "instagram", "page_views": 200, "closes": 2, "cash_collected": 8000.0},
            {"source": "youtube", "page_views": 100, "closes": 0, "cash_collected": 0.0},
        ]
        result = aggregate_content(rows, ContentField.SOURCE)
        assert [r.name for r in result] == ["instagram", "youtube"]
        youtube = result[1]
        assert youtube.page_views == 200
        assert youtube.conversion_rate == pytest.approx(0.005)

    def test_missing_value_is_unknown(self) -> None:
        rows = [{"source": "instagram", "medium": None, "page_views": 10}]
        result = aggregate_content(rows, ContentField.MEDIUM)
        assert result[0].name == UNKNOWN_CONTENT

    def test_no_views_conversion_zero(self) -> None:
        rows = [{"source": "tiktok", "closes": 1}]
        assert aggregate_content(rows, ContentField.SOURCE)[0].conversion_rate == 0.0


class TestSortBreakdown:
    def test_ascending(self, ad_rows: list[dict]) -> None:
        result = sort_breakdown(
            aggregate_ads(ad_rows, AdLevel.AD), "ad_spend", descending=False,
        )
        assert [r.ad_spend for r in result] == [50.0, 100.0, 200.0, 300.0]

    def test_by_name(self, ad_rows: list[dict]) -> None:
        result = sort_breakdown(aggregate_ads(ad_rows, AdLevel.CAMPAIGN), "source")
        assert result[0].source == "Retargeting"

    def test_unknown_column(self, ad_rows: list[dict]) -> None:
        with pytest.raises(AttributeError):
            sort_breakdown(aggregate_ads(ad_rows, AdLevel.AD), "nope")
