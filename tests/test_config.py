"""Tests for settings loading and startup failure."""

import pytest

from tavilysearch import config
from tavilysearch.config import Settings, get_settings, reset_settings_cache
from tavilysearch.errors import ConfigurationError

ENV_VARS = [
    "TAVILY_API_KEY",
    "TAVILY_API_URL",
    "TAVILY_TIMEOUT",
    "TAVILY_STRICT_VALIDATION",
    "TAVILY_INCLUDE_DOMAINS",
    "TAVILY_EXCLUDE_DOMAINS",
    "LOG_LEVEL",
    "HOST",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the real environment and any local .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_missing_api_key_is_fatal():
    with pytest.raises(ConfigurationError, match="TAVILY_API_KEY"):
        get_settings()


def test_blank_api_key_is_fatal(monkeypatch):
    monkeypatch.setenv("TAVILY_API_KEY", "   ")
    with pytest.raises(ConfigurationError):
        get_settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv("TAVILY_API_KEY", "tvly-abc")

    settings = get_settings()

    assert settings.tavily_api_key == "tvly-abc"
    assert settings.tavily_api_url == "https://api.tavily.com/search"
    assert settings.request_timeout is None
    assert settings.strict_validation is False
    assert settings.include_domains == []
    assert settings.exclude_domains == []
    assert settings.domain_defaults() == {}
    assert settings.log_level == "INFO"
    assert settings.port == 8000


def test_overrides(monkeypatch):
    monkeypatch.setenv("TAVILY_API_KEY", "tvly-abc")
    monkeypatch.setenv("TAVILY_TIMEOUT", "15")
    monkeypatch.setenv("TAVILY_STRICT_VALIDATION", "yes")
    monkeypatch.setenv("TAVILY_INCLUDE_DOMAINS", "python.org, docs.rs ,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "9001")

    settings = get_settings()

    assert settings.request_timeout == 15.0
    assert settings.strict_validation is True
    assert settings.include_domains == ["python.org", "docs.rs"]
    assert settings.domain_defaults() == {"include_domains": ["python.org", "docs.rs"]}
    assert settings.log_level == "DEBUG"
    assert settings.port == 9001


def test_bad_timeout_is_fatal(monkeypatch):
    monkeypatch.setenv("TAVILY_API_KEY", "tvly-abc")
    monkeypatch.setenv("TAVILY_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError, match="TAVILY_TIMEOUT"):
        get_settings()


def test_settings_are_cached(monkeypatch):
    monkeypatch.setenv("TAVILY_API_KEY", "first")
    first = get_settings()
    monkeypatch.setenv("TAVILY_API_KEY", "second")
    assert get_settings() is first


def test_mcp_server_exits_without_api_key():
    from tavilysearch.mcp_server import main

    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1


def test_domain_defaults_are_copies():
    settings = Settings(tavily_api_key="k", exclude_domains=["a.test"])
    settings.domain_defaults()["exclude_domains"].append("b.test")
    assert settings.exclude_domains == ["a.test"]


def test_http_api_exits_without_api_key():
    from tavilysearch.main import run

    with pytest.raises(SystemExit) as exc_info:
        run()
    assert exc_info.value.code == 1


def test_app_wired_from_environment_configures_logging(monkeypatch):
    from fastapi.testclient import TestClient

    from tavilysearch import main

    monkeypatch.setenv("TAVILY_API_KEY", "tvly-abc")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    levels = []
    monkeypatch.setattr(main, "configure_logging", levels.append)

    with TestClient(main.create_app()) as client:
        assert client.get("/health").json() == {"status": "healthy"}
    assert levels == ["DEBUG"]
