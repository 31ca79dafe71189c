"""Benchmark classifier.

Compares a derived rate against a configured threshold and returns a
health status for display. Thresholds are passed in at call time; the
defaults live in ``salesops.config.benchmarks`` and are loaded by the
caller.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from pydantic import Field

from salesops.models.common import SalesOpsBase


class HealthStatus(StrEnum):
    """Display health of a metric."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    NEUTRAL = "neutral"


class RoasStatus(StrEnum):
    """Profitability band of an ad, ad set or campaign."""

    PROFITABLE = "Profitable"
    BREAK_EVEN = "Break-even"
    UNPROFITABLE = "Unprofitable"


class Benchmark(SalesOpsBase, frozen=True):
    """Single threshold for one metric."""

    metric_name: str
    threshold: float
    lower_is_better: bool = False


class TieredBenchmark(SalesOpsBase, frozen=True):
    """Good / warning thresholds for a higher-is-better metric."""

    metric_name: str
    good: float
    warning: float = Field(description="Below this the metric is red.")


def classify(value: float, benchmark: Benchmark) -> HealthStatus:
    """Classify ``value`` against ``benchmark``.

    A value of exactly 0 is NEUTRAL whatever the threshold: zero means
    "no data yet" on the dashboards, even when a real zero would be bad.
    The threshold itself counts as healthy in both directions.
    """
    if value == 0:
        return HealthStatus.NEUTRAL
    if benchmark.lower_is_better:
        return HealthStatus.GREEN if value <= benchmark.threshold else HealthStatus.RED
    return HealthStatus.GREEN if value >= benchmark.threshold else HealthStatus.RED


def classify_rates(
    rates: Mapping[str, float],
    benchmarks: Mapping[str, Benchmark],
) -> dict[str, HealthStatus]:
    """Classify every rate that has a benchmark; others are skipped."""
    return {
        name: classify(value, benchmarks[name])
        for name, value in rates.items()
        if name in benchmarks
    }


def classify_tiered(value: float, tiered: TieredBenchmark) -> HealthStatus:
    """GREEN at or above ``good``, YELLOW at or above ``warning``, else RED.

    Unlike ``classify`` there is no neutral case: a zero rate is RED.
    """
    if value >= tiered.good:
        return HealthStatus.GREEN
    if value >= tiered.warning:
        return HealthStatus.YELLOW
    return HealthStatus.RED


def roas_status(roas: float, breakeven_roas: float) -> RoasStatus:
    """Profitability band used by the ad performance table."""
    if roas >= breakeven_roas:
        return RoasStatus.PROFITABLE
    if roas >= 1:
        return RoasStatus.BREAK_EVEN
    return RoasStatus.UNPROFITABLE
