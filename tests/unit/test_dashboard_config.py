"""
Test configuration models and loading for the KPI dashboard.
"""

import json

import pytest
from pydantic import ValidationError

from kpi_dashboard.config.models import (
    ApiConfig,
    DashboardConfig,
    GenerationConfig,
    KpiConfig,
)
from kpi_dashboard.config.settings import (
    get_config_from_env,
    load_config,
    load_config_with_fallback,
)
from kpi_dashboard.shared.exceptions import ConfigurationError


class TestDashboardConfig:
    """Test configuration model validation."""

    def test_defaults(self):
        """Test that an empty config yields the demo settings."""
        config = DashboardConfig()
        assert config.seed == 42
        assert config.generation.order_count == 2000
        assert config.generation.lookback_days == 90
        assert config.kpi.growth_multiplier == 1.0
        assert config.kpi.current_conversion_rate == 2.4
        assert config.kpi.previous_conversion_rate == 2.1
        assert config.api.default_page_size == 10
        assert config.api.export_rate_limit == 10
        assert config.log_level == "INFO"

    def test_log_level_normalized(self):
        """Test that the log level is upper-cased."""
        assert DashboardConfig(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        """Test that an unknown log level fails validation."""
        with pytest.raises(ValidationError):
            DashboardConfig(log_level="chatty")

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: GenerationConfig(order_count=0),
            lambda: GenerationConfig(lookback_days=0),
            lambda: KpiConfig(growth_multiplier=0),
            lambda: ApiConfig(default_page_size=0),
            lambda: DashboardConfig(seed=-1),
        ],
    )
    def test_invalid_values_rejected(self, factory):
        """Test range validation on each section."""
        with pytest.raises(ValidationError):
            factory()

    def test_file_round_trip(self, tmp_path):
        """Test saving and loading a configuration file."""
        path = tmp_path / "nested" / "config.json"
        original = DashboardConfig(seed=7, kpi=KpiConfig(growth_multiplier=1.2))
        original.to_file(path)
        assert DashboardConfig.from_file(path) == original

    def test_from_file_missing(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DashboardConfig.from_file(tmp_path / "absent.json")

    def test_from_file_invalid_json(self, tmp_path):
        """Test that malformed JSON raises ValueError."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            DashboardConfig.from_file(path)


class TestConfigLoading:
    """Test file and environment configuration loading."""

    def test_load_config_from_directory(self, tmp_path):
        """Test that a directory path resolves to its config.json."""
        (tmp_path / "config.json").write_text(json.dumps({"seed": 99}))
        assert load_config(tmp_path).seed == 99

    def test_env_returns_none_when_unset(self):
        """Test that no dashboard variables means no environment config."""
        assert get_config_from_env() is None

    def test_env_overrides(self, monkeypatch):
        """Test that individual variables populate their sections."""
        monkeypatch.setenv("DASHBOARD_SEED", "123")
        monkeypatch.setenv("DASHBOARD_ORDER_COUNT", "500")
        monkeypatch.setenv("DASHBOARD_GROWTH_MULTIPLIER", "1.1")

        config = get_config_from_env()

        assert config.seed == 123
        assert config.generation.order_count == 500
        assert config.generation.lookback_days == 90
        assert config.kpi.growth_multiplier == pytest.approx(1.1)

    def test_env_invalid_value_raises(self, monkeypatch):
        """Test that invalid environment values raise ConfigurationError."""
        monkeypatch.setenv("DASHBOARD_ORDER_COUNT", "lots")
        with pytest.raises(ConfigurationError):
            get_config_from_env()

    def test_env_config_file(self, monkeypatch, tmp_path):
        """Test that DASHBOARD_CONFIG_FILE points at a config file."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"seed": 5}))
        monkeypatch.setenv("DASHBOARD_CONFIG_FILE", str(path))
        assert get_config_from_env().seed == 5

    def test_fallback_to_defaults(self, monkeypatch, tmp_path):
        """Test that nothing configured yields built-in defaults."""
        monkeypatch.chdir(tmp_path)
        assert load_config_with_fallback() == DashboardConfig()

    def test_fallback_ignores_invalid_env(self, monkeypatch, tmp_path):
        """Test that invalid environment values fall through to defaults."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DASHBOARD_SEED", "not-a-number")
        assert load_config_with_fallback().seed == 42

    def test_fallback_finds_cwd_config(self, monkeypatch, tmp_path):
        """Test that config.json in the working directory is picked up."""
        (tmp_path / "config.json").write_text(json.dumps({"seed": 11}))
        monkeypatch.chdir(tmp_path)
        assert load_config_with_fallback().seed == 11
