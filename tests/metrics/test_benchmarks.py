"""Tests for the benchmark classifier."""

import pytest
from pydantic import ValidationError

from salesops.metrics.benchmarks import (
    Benchmark,
    HealthStatus,
    RoasStatus,
    TieredBenchmark,
    classify,
    classify_rates,
    classify_tiered,
    roas_status,
)

SHOW_RATE = Benchmark(metric_name="show_rate", threshold=0.24)
CPA = Benchmark(metric_name="cost_per_close", threshold=1389.0, lower_is_better=True)


class TestClassify:
    """classify: tri-state against a single threshold."""

    def test_zero_is_neutral(self) -> None:
        assert classify(0, SHOW_RATE) == HealthStatus.NEUTRAL

    def test_zero_is_neutral_lower_is_better(self) -> None:
        assert classify(0, CPA) == HealthStatus.NEUTRAL

    @pytest.mark.parametrize("threshold", [-1.0, 0.0, 0.24, 100.0])
    def test_zero_is_neutral_whatever_threshold(self, threshold: float) -> None:
        benchmark = Benchmark(metric_name="x", threshold=threshold)
        assert classify(0.0, benchmark) == HealthStatus.NEUTRAL

    def test_at_threshold_is_green(self) -> None:
        assert classify(0.24, SHOW_RATE) == HealthStatus.GREEN

    def test_just_below_threshold_is_red(self) -> None:
        assert classify(0.2399, SHOW_RATE) == HealthStatus.RED

    def test_above_threshold_is_green(self) -> None:
        assert classify(0.5, SHOW_RATE) == HealthStatus.GREEN

    def test_lower_is_better_at_threshold_is_green(self) -> None:
        assert classify(1389.0, CPA) == HealthStatus.GREEN

    def test_lower_is_better_below_is_green(self) -> None:
        assert classify(800.0, CPA) == HealthStatus.GREEN

    def test_lower_is_better_above_is_red(self) -> None:
        assert classify(1389.01, CPA) == HealthStatus.RED

    def test_negative_value_not_neutral(self) -> None:
        assert classify(-0.1, SHOW_RATE) == HealthStatus.RED


class TestClassifyRates:
    def test_only_benchmarked_rates(self) -> None:
        statuses = classify_rates(
            {"show_rate": 0.3, "close_rate": 0.1, "aov": 4000.0},
            {"show_rate": SHOW_RATE},
        )
        assert statuses == {"show_rate": HealthStatus.GREEN}

    def test_empty(self) -> None:
        assert classify_rates({}, {"show_rate": SHOW_RATE}) == {}


class TestClassifyTiered:
    """Good / warning tiers for DM rates."""

    TIER = TieredBenchmark(metric_name="response_rate", good=0.15, warning=0.10)

    def test_good(self) -> None:
        assert classify_tiered(0.15, self.TIER) == HealthStatus.GREEN

    def test_warning(self) -> None:
        assert classify_tiered(0.12, self.TIER) == HealthStatus.YELLOW

    def test_at_warning(self) -> None:
        assert classify_tiered(0.10, self.TIER) == HealthStatus.YELLOW

    def test_bad(self) -> None:
        assert classify_tiered(0.05, self.TIER) == HealthStatus.RED

    def test_zero_is_red(self) -> None:
        assert classify_tiered(0.0, self.TIER) == HealthStatus.RED


class TestRoasStatus:
    def test_profitable(self) -> None:
        assert roas_status(2.52, 2.52) == RoasStatus.PROFITABLE

    def test_break_even(self) -> None:
        assert roas_status(1.0, 2.52) == RoasStatus.BREAK_EVEN

    def test_unprofitable(self) -> None:
        assert roas_status(0.99, 2.52) == RoasStatus.UNPROFITABLE


class TestBenchmarkModel:
    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            SHOW_RATE.threshold = 0.5  # type: ignore[misc]

    def test_defaults_higher_is_better(self) -> None:
        assert Benchmark(metric_name="x", threshold=1.0).lower_is_better is False
