"""
Runtime configuration for the Tavily Search MCP server.

Everything is read from the process environment (a local .env file is
loaded first). The API key is the only required value.
"""
import logging
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

SERVER_NAME = "tavily-search-mcp"
SERVER_VERSION = "0.1.0"

DEFAULT_API_URL = "https://api.tavily.com/search"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    """Deployment settings."""

    tavily_api_key: str
    tavily_api_url: str = DEFAULT_API_URL
    # None means the gateway never times out on its own
    request_timeout: Optional[float] = None
    strict_validation: bool = False
    include_domains: list[str] = field(default_factory=list)
    exclude_domains: list[str] = field(default_factory=list)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def domain_defaults(self) -> dict[str, list[str]]:
        """Deployment-level domain lists, used when a call omits them."""
        defaults = {}
        if self.include_domains:
            defaults["include_domains"] = list(self.include_domains)
        if self.exclude_domains:
            defaults["exclude_domains"] = list(self.exclude_domains)
        return defaults


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _env_bool(key: str, default: bool = False) -> bool:
    value = _env(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _env_list(key: str) -> list[str]:
    value = _env(key)
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Read the environment and return Settings.

    Raises:
        ConfigurationError: If TAVILY_API_KEY is not set
    """
    load_dotenv()

    api_key = _env("TAVILY_API_KEY")
    if not api_key:
        raise ConfigurationError("TAVILY_API_KEY environment variable is required")

    timeout = _env("TAVILY_TIMEOUT")
    try:
        request_timeout = float(timeout) if timeout else None
    except ValueError as e:
        raise ConfigurationError(f"TAVILY_TIMEOUT must be a number, got {timeout!r}") from e

    port = _env("PORT", "8000")
    try:
        port_number = int(port)
    except ValueError as e:
        raise ConfigurationError(f"PORT must be an integer, got {port!r}") from e

    return Settings(
        tavily_api_key=api_key,
        tavily_api_url=_env("TAVILY_API_URL", DEFAULT_API_URL),
        request_timeout=request_timeout,
        strict_validation=_env_bool("TAVILY_STRICT_VALIDATION"),
        include_domains=_env_list("TAVILY_INCLUDE_DOMAINS"),
        exclude_domains=_env_list("TAVILY_EXCLUDE_DOMAINS"),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        host=_env("HOST", "0.0.0.0"),
        port=port_number,
    )


def reset_settings_cache() -> None:
    """Clear the cached settings (tests)."""
    get_settings.cache_clear()


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
