"""
Tests for configuration management in `vitalcore/config.py`.

Covers:
- Environment parsing, debug defaults and the DEBUG override
- Logging level and format coercion to the expected Literals
- IoT source tag override and validation
- get_config cache behavior
- AppConfig validation (debug only allowed in development)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from vitalcore.config import AppConfig, IoTConfig, LoggingConfig, get_config, load_config_from_env
from vitalcore.observability import configure_logging


@pytest.fixture(autouse=True)
def clear_config_cache() -> Iterator[None]:
    """Ensure get_config cache is cleared before and after each test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_load_config_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "dev")
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.delenv("IOT_SOURCE_TAG", raising=False)

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is True
    assert config.logging.format == "console"
    assert config.logging.level == "INFO"
    assert config.iot.source_tag == "iot_device"


def test_production_defaults_to_json_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)

    config = load_config_from_env()

    assert config.environment == "production"
    assert config.debug is False
    assert config.logging.format == "json"


def test_debug_env_overrides_development_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.setenv("DEBUG", "false")

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is False
    assert config.logging.format == "json"


@pytest.mark.parametrize("value", ["1", "true", "Yes", " on "])
def test_debug_env_truthy_values(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", value)

    assert load_config_from_env().debug is True


def test_debug_env_rejected_outside_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DEBUG", "true")

    with pytest.raises(ValueError, match="debug mode is only allowed"):
        load_config_from_env()


def test_log_format_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_FORMAT", "Console")

    assert load_config_from_env().logging.format == "console"

    # Unknown formats fall back to the environment default
    monkeypatch.setenv("LOG_FORMAT", "xml")
    assert load_config_from_env().logging.format == "json"


def test_logging_level_literal_coercion(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")

    # Unknown level should coerce to INFO
    monkeypatch.setenv("LOG_LEVEL", "unknown")
    config = load_config_from_env()
    assert config.logging.level == "INFO"

    # Known level should pass through
    monkeypatch.setenv("LOG_LEVEL", "error")
    config = load_config_from_env()
    assert config.logging.level == "ERROR"


def test_iot_source_tag_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IOT_SOURCE_TAG", " wristband ")

    assert load_config_from_env().iot.source_tag == "wristband"


def test_blank_iot_source_tag_is_rejected() -> None:
    with pytest.raises(ValueError, match="must not be blank"):
        IoTConfig(source_tag="   ")


def test_get_config_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2  # same object due to lru_cache


def test_app_config_debug_only_in_dev_validation() -> None:
    with pytest.raises(ValueError, match="debug mode is only allowed"):
        AppConfig(environment="production", debug=True)


@pytest.mark.parametrize("log_format", ["json", "console"])
def test_configure_logging_accepts_both_formats(log_format: str) -> None:
    configure_logging(LoggingConfig(level="DEBUG", format=log_format))  # type: ignore[arg-type]
