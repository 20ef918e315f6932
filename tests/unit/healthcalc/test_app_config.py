"""
Tests for configuration management in `healthcalc/config.py`.

Covers:
- Environment parsing and debug defaults
- Logging level coercion to the expected Literal
- Email provider settings and blank API keys
- Allowed origins parsing
- get_config cache behavior
- AppConfig validation (debug only allowed in development)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from healthcalc.config import (
    DEFAULT_EMAIL_API_URL,
    APIConfig,
    AppConfig,
    EmailProviderConfig,
    LoggingConfig,
    get_config,
    load_config_from_env,
)


@pytest.fixture(autouse=True)
def clear_config_cache() -> Iterator[None]:
    """Ensure get_config cache is cleared before and after each test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_load_config_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("API_RELOAD", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is True
    assert config.api.reload is True
    assert config.logging.level == "INFO"
    assert config.logging.format == "console"


def test_load_config_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")
    monkeypatch.delenv("API_RELOAD", raising=False)

    config = load_config_from_env()

    assert config.environment == "production"
    assert config.debug is False
    assert config.api.reload is False
    assert config.logging.format == "json"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("debug", "DEBUG"), ("Warning", "WARNING"), ("verbose", "INFO")],
)
def test_log_level_is_coerced(monkeypatch: pytest.MonkeyPatch, raw: str, expected: str) -> None:
    monkeypatch.setenv("LOG_LEVEL", raw)
    assert load_config_from_env().logging.level == expected


def test_email_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMAIL_API_KEY", "re_test_key")
    monkeypatch.setenv("EMAIL_TO_ADDRESS", "inbox@example.org")
    monkeypatch.delenv("EMAIL_API_URL", raising=False)

    email = load_config_from_env().email

    assert email.api_key == "re_test_key"
    assert email.is_configured
    assert email.to_address == "inbox@example.org"
    assert email.api_url == DEFAULT_EMAIL_API_URL


def test_blank_api_key_is_not_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EMAIL_API_KEY", "   ")
    email = load_config_from_env().email
    assert email.api_key is None
    assert not email.is_configured


def test_allowed_origins_are_split_and_stripped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_ALLOWED_ORIGINS", "https://a.example, https://b.example ,")
    config = load_config_from_env()
    assert config.api.allowed_origins == ["https://a.example", "https://b.example"]


def test_get_config_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_PORT", "8100")
    first = get_config()
    monkeypatch.setenv("API_PORT", "8200")
    assert get_config() is first
    assert get_config().api.port == 8100


def test_debug_outside_development_is_rejected() -> None:
    with pytest.raises(ValueError, match="debug mode"):
        AppConfig(
            environment="production",
            debug=True,
            email=EmailProviderConfig(),
            api=APIConfig(),
            logging=LoggingConfig(),
        )
