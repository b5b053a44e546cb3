"""
Unit tests for application/settings.py
"""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from application.settings import LOG_FORMAT, Settings, configure_logging, get_settings
from domain.models import WeightUnit


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "LOG_LEVEL",
    "DEFAULT_TOTAL_WEEKS",
    "DEFAULT_WEIGHT_UNIT",
    "DEFAULT_TRAINING_MAX",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        """Default environment should be development."""
        settings = Settings(_env_file=None)
        assert settings.environment == "development"

    def test_log_level_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"

    def test_program_defaults(self, clean_env):
        """New programs default to the full 21 weeks in kilograms."""
        settings = Settings(_env_file=None)
        assert settings.default_total_weeks == 21
        assert settings.default_weight_unit == WeightUnit.KILOGRAMS
        assert settings.default_training_max == 100.0


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings validation behavior."""

    def test_valid_environments_accepted(self):
        """Valid environment values should be accepted."""
        for env in ["development", "staging", "production", "test"]:
            settings = Settings(_env_file=None, environment=env)
            assert settings.environment == env

    def test_environment_case_insensitive(self):
        """Environment validation should be case-insensitive."""
        settings = Settings(_env_file=None, environment="PRODUCTION")
        assert settings.environment == "production"

    def test_invalid_environment_raises_error(self):
        """Invalid environment should raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, environment="invalid")
        assert "Invalid environment" in str(exc_info.value)

    def test_log_level_is_uppercased(self):
        settings = Settings(_env_file=None, log_level="debug")
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, log_level="verbose")
        assert "Invalid log level" in str(exc_info.value)

    @pytest.mark.parametrize("weeks", [0, 22])
    def test_total_weeks_bounds(self, weeks):
        """Programs cannot be longer than the 21-week table."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_total_weeks=weeks)

    def test_training_max_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_training_max=0)


@pytest.mark.unit
class TestSettingsProperties:
    """Test the environment helper properties."""

    @pytest.mark.parametrize(
        "environment,production,development,test",
        [
            ("production", True, False, False),
            ("development", False, True, False),
            ("test", False, False, True),
            ("staging", False, False, False),
        ],
    )
    def test_environment_flags(self, environment, production, development, test):
        settings = Settings(_env_file=None, environment=environment)
        assert settings.is_production is production
        assert settings.is_development is development
        assert settings.is_test is test


@pytest.mark.unit
class TestGetSettings:
    """Test the cached get_settings() accessor."""

    @pytest.fixture(autouse=True)
    def fresh_cache(self, clean_env):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_returns_cached_instance(self):
        first = get_settings()
        assert isinstance(first, Settings)
        assert get_settings() is first

    def test_cache_clear_reloads_environment(self, monkeypatch):
        before = get_settings()
        monkeypatch.setenv("DEFAULT_TOTAL_WEEKS", "7")
        assert get_settings().default_total_weeks == before.default_total_weeks

        get_settings.cache_clear()
        assert get_settings().default_total_weeks == 7

@pytest.mark.unit
class TestSettingsFromEnv:
    """Test Settings loading from environment variables."""

    def test_settings_loads_from_env(self, clean_env, monkeypatch):
        """Settings should load values from environment variables."""
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("DEFAULT_TOTAL_WEEKS", "14")
        monkeypatch.setenv("DEFAULT_WEIGHT_UNIT", "lb")
        monkeypatch.setenv("DEFAULT_TRAINING_MAX", "225")

        settings = Settings(_env_file=None)

        assert settings.environment == "staging"
        assert settings.default_total_weeks == 14
        assert settings.default_weight_unit == WeightUnit.POUNDS
        assert settings.default_training_max == 225.0

    def test_env_names_are_case_insensitive(self, clean_env, monkeypatch):
        monkeypatch.setenv("log_level", "warning")

        settings = Settings(_env_file=None)

        assert settings.log_level == "WARNING"


@pytest.mark.unit
class TestConfigureLogging:
    """Test configure_logging()."""

    def test_configures_root_logger(self):
        with patch("application.settings.logging.basicConfig") as basic_config:
            configure_logging(Settings(_env_file=None, log_level="debug"))

        basic_config.assert_called_once_with(
            level=logging.DEBUG, format=LOG_FORMAT, force=True
        )

    def test_uses_validated_level(self):
        with patch("application.settings.logging.basicConfig") as basic_config:
            configure_logging(Settings(_env_file=None, log_level="ERROR"))

        assert basic_config.call_args.kwargs["level"] == logging.ERROR
