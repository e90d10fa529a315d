import pytest

from contact_manager.utils.settings import get_settings, refresh_settings_cache

_ENV_VARS = ("LOG_LEVEL", "AUTH_COOKIE_NAME", "AUTH_COOKIE_VALUE", "CORS_ORIGINS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear env + cached values for each test to avoid cross-contamination."""
    for env_name in _ENV_VARS:
        monkeypatch.delenv(env_name, raising=False)
    refresh_settings_cache()
    yield
    refresh_settings_cache()


def test_defaults():
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.auth_cookie_name == "Auth-key"
    assert settings.auth_cookie_value == "A100"
    assert "http://localhost:3000" in settings.cors_origins


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("AUTH_COOKIE_VALUE", "B200")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, ,https://b.example")
    refresh_settings_cache()

    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.auth_cookie_value == "B200"
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_blank_cors_origins_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " , ")
    refresh_settings_cache()
    assert get_settings().cors_origins == ("http://localhost", "http://localhost:3000", "http://localhost:8000")


def test_settings_are_cached_until_refreshed(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("AUTH_COOKIE_NAME", "Other-key")
    assert get_settings() is first

    refresh_settings_cache()
    assert get_settings().auth_cookie_name == "Other-key"
