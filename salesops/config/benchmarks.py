"""Benchmark threshold configuration.

Default thresholds are the break-even values for a high-ticket VSL
funnel and DM outreach. Every value can be overridden per deployment
through a JSON file (``Settings.BENCHMARKS_FILE``); the metrics engine
only ever receives the resulting ``Benchmark`` objects.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field

from salesops.config.settings import get_settings
from salesops.metrics.benchmarks import Benchmark, TieredBenchmark
from salesops.models.common import SalesOpsBase

logger = logging.getLogger(__name__)


class WeeklyTargets(SalesOpsBase):
    """Team-wide weekly volume targets shown on the overview."""

    booked: int = Field(default=20, gt=0)
    deals: int = Field(default=10, gt=0)


class BenchmarkConfig(SalesOpsBase):
    """Thresholds for funnel, closer and DM metrics.

    Rates are decimal fractions; costs are currency amounts.
    """

    # Financial
    roas: float = 2.52
    cpa: float = 1389.0
    cash_per_sale: float = 3500.0

    # Conversion
    show_rate: float = 0.24
    close_rate: float = 0.30

    # Cost per stage
    cost_per_booking: float = 100.0
    cost_per_show: float = 150.0
    cost_per_app: float = 50.0

    min_ad_spend: float = 7500.0

    # DM outreach (good, warning)
    dm_response_rate: tuple[float, float] = (0.15, 0.10)
    dm_convo_rate: tuple[float, float] = (0.50, 0.30)
    dm_booking_rate: tuple[float, float] = (0.20, 0.10)
    dm_overall_rate: tuple[float, float] = (0.015, 0.008)

    weekly_targets: WeeklyTargets = Field(default_factory=WeeklyTargets)

    def funnel_benchmarks(self) -> dict[str, Benchmark]:
        """Benchmarks keyed by the funnel rate names they apply to."""
        return _keyed(
            Benchmark(metric_name="cash_roas", threshold=self.roas),
            Benchmark(metric_name="cost_per_close", threshold=self.cpa, lower_is_better=True),
            Benchmark(metric_name="aov", threshold=self.cash_per_sale),
            Benchmark(metric_name="booking_to_show", threshold=self.show_rate),
            Benchmark(metric_name="show_to_close", threshold=self.close_rate),
            Benchmark(
                metric_name="cost_per_booking",
                threshold=self.cost_per_booking,
                lower_is_better=True,
            ),
            Benchmark(
                metric_name="cost_per_show",
                threshold=self.cost_per_show,
                lower_is_better=True,
            ),
            Benchmark(
                metric_name="cost_per_app",
                threshold=self.cost_per_app,
                lower_is_better=True,
            ),
        )

    def closer_benchmarks(self) -> dict[str, Benchmark]:
        """Benchmarks keyed by closer rate names."""
        return _keyed(
            Benchmark(metric_name="show_rate", threshold=self.show_rate),
            Benchmark(metric_name="close_rate", threshold=self.close_rate),
            Benchmark(metric_name="aov", threshold=self.cash_per_sale),
        )

    def dm_benchmarks(self) -> dict[str, TieredBenchmark]:
        """Tiered benchmarks keyed by DM rate names."""
        tiers = {
            "response_rate": self.dm_response_rate,
            "convo_rate": self.dm_convo_rate,
            "booking_rate": self.dm_booking_rate,
            "overall_rate": self.dm_overall_rate,
        }
        return {
            name: TieredBenchmark(metric_name=name, good=good, warning=warning)
            for name, (good, warning) in tiers.items()
        }


def _keyed(*benchmarks: Benchmark) -> dict[str, Benchmark]:
    return {b.metric_name: b for b in benchmarks}


def load_benchmark_config(path: str | Path | None = None) -> BenchmarkConfig:
    """Load thresholds from a JSON file, or the defaults when no file is set.

    Raises:
        FileNotFoundError: If ``path`` is given but does not exist.
        pydantic.ValidationError: If the file does not match the schema.
    """
    if not path:
        return BenchmarkConfig()
    text = Path(path).read_text(encoding="utf-8")
    config = BenchmarkConfig.model_validate_json(text)
    logger.info("Loaded benchmark overrides from %s", path)
    return config


@lru_cache(maxsize=1)
def get_benchmark_config() -> BenchmarkConfig:
    """Process-wide benchmark config for FastAPI Depends."""
    return load_benchmark_config(get_settings().BENCHMARKS_FILE)
