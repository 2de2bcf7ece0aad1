"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import voluptuous as vol

from .const import (
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_MAX_AGE_SECONDS,
    DEFAULT_THROTTLE_SECONDS,
    ENV_API_URL,
    ENV_CACHE_MAX_AGE,
    ENV_REQUEST_INTERVAL,
    ENV_TIMEZONE,
)
from .exceptions import ConfigError

CONF_BASE_URL = "base_url"
CONF_REQUEST_INTERVAL = "request_interval"
CONF_DISPLAY_TIMEZONE = "display_timezone"
CONF_CACHE_MAX_AGE = "cache_max_age"


def _http_url(value: Any) -> str:
    url = vol.Coerce(str)(value).strip().rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise vol.Invalid(f"expected an http(s) URL, got {value!r}")
    return url


def _timezone_name(value: Any) -> str:
    name = vol.Coerce(str)(value).strip()
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise vol.Invalid(f"unknown time zone: {name!r}") from err
    return name


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_BASE_URL): _http_url,
        vol.Optional(CONF_REQUEST_INTERVAL, default=DEFAULT_THROTTLE_SECONDS): vol.All(
            vol.Coerce(float), vol.Range(min=0)
        ),
        vol.Optional(CONF_DISPLAY_TIMEZONE, default=None): vol.Any(None, _timezone_name),
        vol.Optional(CONF_CACHE_MAX_AGE, default=DEFAULT_CACHE_MAX_AGE_SECONDS): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
    }
)


@dataclass(frozen=True)
class CalendarConfig:
    """Validated settings for the API client and event store."""

    base_url: str = DEFAULT_BASE_URL
    request_interval: float = DEFAULT_THROTTLE_SECONDS
    display_timezone: str | None = None
    cache_max_age: float = DEFAULT_CACHE_MAX_AGE_SECONDS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CalendarConfig:
        """Validate ``data`` against ``CONFIG_SCHEMA``.

        Raises:
            ConfigError: If a value is missing or invalid.
        """
        try:
            valid = CONFIG_SCHEMA(dict(data))
        except vol.Invalid as err:
            raise ConfigError(f"Invalid configuration: {err}") from err
        return cls(
            base_url=valid[CONF_BASE_URL],
            request_interval=valid[CONF_REQUEST_INTERVAL],
            display_timezone=valid[CONF_DISPLAY_TIMEZONE],
            cache_max_age=valid[CONF_CACHE_MAX_AGE],
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CalendarConfig:
        """Build a config from ``HILL_COUNTRY_*`` environment variables."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {CONF_BASE_URL: env.get(ENV_API_URL, DEFAULT_BASE_URL)}
        if env.get(ENV_REQUEST_INTERVAL):
            data[CONF_REQUEST_INTERVAL] = env[ENV_REQUEST_INTERVAL]
        if env.get(ENV_TIMEZONE):
            data[CONF_DISPLAY_TIMEZONE] = env[ENV_TIMEZONE]
        if env.get(ENV_CACHE_MAX_AGE):
            data[CONF_CACHE_MAX_AGE] = env[ENV_CACHE_MAX_AGE]
        return cls.from_dict(data)
