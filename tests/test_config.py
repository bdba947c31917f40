"""Tests for settings and logging configuration."""

import pytest
import structlog
from pydantic import ValidationError

from py_encounter_map.config import Settings
from py_encounter_map.logging_config import configure_logging


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("SEA_LEVEL", "RANGE_MAX_SCANS", "KEY_PRECISION"):
            monkeypatch.delenv(f"ENCOUNTER_MAP_{name}", raising=False)
        settings = Settings(_env_file=None)

        assert settings.sea_level == 2.0
        assert settings.unit_divisor == 20.0
        assert settings.key_precision == 6
        assert settings.range_max_scans == 1000
        assert settings.range_accept_probability == 0.1
        assert settings.default_seed is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("ENCOUNTER_MAP_SEA_LEVEL", "3.5")
        monkeypatch.setenv("ENCOUNTER_MAP_RANGE_MAX_SCANS", "50")
        settings = Settings(_env_file=None)

        assert settings.sea_level == 3.5
        assert settings.range_max_scans == 50

    def test_invalid_probability(self, monkeypatch):
        monkeypatch.setenv("ENCOUNTER_MAP_RANGE_ACCEPT_PROBABILITY", "1.5")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestLogging:
    """Test structlog configuration."""

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_configure_logging(self, fmt):
        configure_logging("DEBUG", fmt)
        logger = structlog.get_logger("test")
        logger.info("Logging configured", fmt=fmt)
        structlog.reset_defaults()
