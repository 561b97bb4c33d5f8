"""Unit tests for config/settings.py"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_settings_import():
    """Test that settings module imports successfully."""
    from config.settings import FetcherSettings, settings

    assert settings is not None
    assert isinstance(settings, FetcherSettings)


def test_settings_defaults():
    """Test default settings values."""
    from config.settings import FetcherSettings

    defaults = FetcherSettings(_env_file=None)

    assert defaults.timeout_ms == 1000
    assert defaults.max_retries == 2
    assert defaults.retry_delay_ms == 200
    assert defaults.verbose_logging is False
    assert defaults.default_scheme == "https"
    assert defaults.log_level == "INFO"
    assert defaults.log_to_file is False


def test_settings_env_var_override(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("FETCHER_TIMEOUT_MS", "2500")
    monkeypatch.setenv("FETCHER_MAX_RETRIES", "5")
    monkeypatch.setenv("FETCHER_VERBOSE_LOGGING", "true")
    monkeypatch.setenv("FETCHER_LOG_LEVEL", "debug")

    from config.settings import reload_settings

    settings = reload_settings()

    assert settings.timeout_ms == 2500
    assert settings.max_retries == 5
    assert settings.verbose_logging is True
    assert settings.log_level == "DEBUG"

    monkeypatch.undo()
    reload_settings()


def test_request_config_follows_settings(monkeypatch):
    """RequestConfig.from_settings() picks up the reloaded global settings."""
    monkeypatch.setenv("FETCHER_RETRY_DELAY_MS", "0")

    from config.settings import reload_settings
    from net.fetcher import RequestConfig

    reload_settings()
    config = RequestConfig.from_settings()

    assert config.retry_delay_ms == 0

    monkeypatch.undo()
    reload_settings()


def test_settings_validation():
    """Test that settings validation works."""
    from config.settings import FetcherSettings

    valid_settings = FetcherSettings(timeout_ms=50, max_retries=0, log_level="WARNING")
    assert valid_settings.timeout_ms == 50
    assert valid_settings.max_retries == 0

    with pytest.raises(Exception):  # Pydantic ValidationError
        FetcherSettings(timeout_ms=0)

    with pytest.raises(Exception):  # Pydantic ValidationError
        FetcherSettings(max_retries=-1)

    with pytest.raises(Exception):  # Pydantic ValidationError
        FetcherSettings(retry_delay_ms=-10)

    with pytest.raises(Exception):  # Pydantic ValidationError
        FetcherSettings(log_level="INVALID")

    with pytest.raises(Exception):  # Pydantic ValidationError
        FetcherSettings(default_scheme="ftp")


def test_settings_repr():
    """Test that settings has a useful repr."""
    from config.settings import settings

    repr_str = repr(settings)
    assert "FetcherSettings" in repr_str
    assert "timeout_ms" in repr_str
