"""Tests for benchmark configuration and settings."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from salesops.config.benchmarks import BenchmarkConfig, load_benchmark_config
from salesops.config.settings import Environment, Settings
from salesops.metrics.benchmarks import HealthStatus, classify


class TestBenchmarkDefaults:
    def test_defaults(self) -> None:
        config = BenchmarkConfig()
        assert config.roas == 2.52
        assert config.cpa == 1389.0
        assert config.show_rate == 0.24
        assert config.close_rate == 0.30

    def test_funnel_benchmarks_keyed_by_rate(self) -> None:
        benchmarks = BenchmarkConfig().funnel_benchmarks()
        assert benchmarks["booking_to_show"].threshold == 0.24
        assert benchmarks["cost_per_close"].lower_is_better is True
        assert benchmarks["cash_roas"].lower_is_better is False

    def test_closer_benchmarks(self) -> None:
        benchmarks = BenchmarkConfig().closer_benchmarks()
        assert set(benchmarks) == {"show_rate", "close_rate", "aov"}

    def test_dm_tiers(self) -> None:
        tiers = BenchmarkConfig().dm_benchmarks()
        assert tiers["response_rate"].good == 0.15
        assert tiers["response_rate"].warning == 0.10

    def test_injected_threshold_changes_classification(self) -> None:
        strict = BenchmarkConfig(show_rate=0.5).funnel_benchmarks()
        assert classify(0.3, strict["booking_to_show"]) == HealthStatus.RED
        default = BenchmarkConfig().funnel_benchmarks()
        assert classify(0.3, default["booking_to_show"]) == HealthStatus.GREEN

    def test_weekly_targets_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            BenchmarkConfig(weekly_targets={"booked": 0, "deals": 10})


class TestLoadBenchmarkConfig:
    def test_no_path_gives_defaults(self) -> None:
        assert load_benchmark_config("") == BenchmarkConfig()
        assert load_benchmark_config(None) == BenchmarkConfig()

    def test_file_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "benchmarks.json"
        path.write_text(json.dumps({"roas": 3.0, "weekly_targets": {"booked": 25}}))
        config = load_benchmark_config(path)
        assert config.roas == 3.0
        assert config.cpa == 1389.0
        assert config.weekly_targets.booked == 25
        assert config.weekly_targets.deals == 10

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_benchmark_config(tmp_path / "missing.json")

    def test_invalid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "benchmarks.json"
        path.write_text(json.dumps({"roas": "lots"}))
        with pytest.raises(ValidationError):
            load_benchmark_config(path)


class TestSettings:
    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.example.com/x")
        settings = Settings()
        assert settings.ENVIRONMENT == Environment.PROD
        assert settings.is_production is True
        assert settings.SLACK_WEBHOOK_URL == "https://hooks.example.com/x"

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("NOTIFY_TIMEOUT_S", raising=False)
        settings = Settings(_env_file=None)
        assert settings.ENVIRONMENT == Environment.DEV
        assert settings.NOTIFY_TIMEOUT_S == 5.0
