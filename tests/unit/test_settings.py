from __future__ import annotations

import pydantic
import pytest

from config import Settings, load_settings, route_from_settings

SECRET = "unit-test-secret-0123456789-abcdefgh"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("JWT_SECRET", "OPENAI_API_KEY", "AI_PROVIDER", "ENVIRONMENT", "CLIENT_URL"):
        monkeypatch.delenv(name, raising=False)


def test_missing_jwt_secret_fails_fast():
    with pytest.raises(pydantic.ValidationError):
        Settings()


def test_short_jwt_secret_is_rejected():
    with pytest.raises(pydantic.ValidationError):
        load_settings(JWT_SECRET="short")
    with pytest.raises(pydantic.ValidationError, match="at least 32 characters"):
        load_settings(JWT_SECRET="x" * 31)
    assert load_settings(JWT_SECRET="x" * 32).JWT_SECRET.get_secret_value() == "x" * 32


def test_secret_read_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("JWT_SECRET", SECRET)
    settings = load_settings()
    assert settings.JWT_SECRET.get_secret_value() == SECRET
    assert SECRET not in repr(settings)
    assert settings.ACCESS_TOKEN_TTL_MINUTES == 15
    assert settings.REFRESH_TOKEN_TTL_DAYS == 7


def test_placeholder_key_selects_stub_provider():
    settings = load_settings(JWT_SECRET=SECRET, OPENAI_API_KEY="your_openai_api_key_here")
    assert settings.openai_key() is None
    assert settings.wants_stub_provider() is True


def test_real_key_selects_llm_provider():
    settings = load_settings(JWT_SECRET=SECRET, OPENAI_API_KEY="sk-live")
    assert settings.wants_stub_provider() is False
    assert load_settings(JWT_SECRET=SECRET, OPENAI_API_KEY="sk-live", AI_PROVIDER="stub").wants_stub_provider()


def test_forced_openai_without_key_is_unconfigured_route():
    settings = load_settings(JWT_SECRET=SECRET, AI_PROVIDER="openai")
    assert settings.wants_stub_provider() is False
    route = route_from_settings(settings)
    assert route.configured is False


def test_route_and_origins_derived_from_settings():
    settings = load_settings(
        JWT_SECRET=SECRET,
        OPENAI_API_KEY="sk-live",
        OPENAI_BASE_URL="https://llm.internal/",
        CLIENT_URL="http://a.test, http://b.test",
        ENVIRONMENT="production",
    )
    route = route_from_settings(settings)
    assert route.base_url == "https://llm.internal"
    assert route.configured
    assert "sk-live" not in repr(route)
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.is_production
