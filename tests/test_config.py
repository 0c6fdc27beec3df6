"""Tests for configuration validation."""

import pytest

from taskflow.config import DEFAULT_JWT_SECRET, ConfigError, config_problems, validate_config


def test_development_needs_nothing():
    assert config_problems(environment="development", jwt_secret=DEFAULT_JWT_SECRET, openai_api_key="") == []


def test_production_rejects_default_secret():
    problems = config_problems(environment="production", jwt_secret=DEFAULT_JWT_SECRET, openai_api_key="sk-test")
    assert any("JWT_SECRET_KEY" in p for p in problems)


def test_production_requires_openai_key():
    problems = config_problems(environment="production", jwt_secret="a-real-secret", openai_api_key="")
    assert any("OPENAI_API_KEY" in p for p in problems)


def test_production_with_secrets_is_valid():
    assert config_problems(environment="production", jwt_secret="a-real-secret", openai_api_key="sk-test") == []


def test_validate_config_raises():
    with pytest.raises(ConfigError, match="Configuration validation failed"):
        validate_config(environment="production", jwt_secret="", openai_api_key="")


@pytest.mark.parametrize("overrides,setting", [
    ({"db_pool_size": 0}, "DB_POOL_SIZE"),
    ({"db_pool_size": -3}, "DB_POOL_SIZE"),
    ({"db_pool_timeout_sec": 0}, "DB_POOL_TIMEOUT_SEC"),
    ({"db_max_overflow": -1}, "DB_MAX_OVERFLOW"),
])
def test_bad_pool_settings_are_reported(overrides, setting):
    problems = config_problems(environment="development", **overrides)
    assert any(setting in p for p in problems)


def test_zero_max_overflow_is_allowed():
    assert config_problems(environment="development", db_max_overflow=0) == []


def test_pool_settings_feed_engine_kwargs(monkeypatch):
    from taskflow.database import database as db

    monkeypatch.setattr(db, "DB_POOL_SIZE", 12)
    kwargs = db.get_engine_kwargs("postgresql+psycopg://u:p@localhost:5432/db")
    assert kwargs["pool_size"] == 12
