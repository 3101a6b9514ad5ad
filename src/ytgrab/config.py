"""Runtime settings read from the process environment.

Settings are resolved once at startup and passed explicitly to the
layers that need them; the core extraction and selection functions take
no configuration at all.

Environment variables
---------------------
``YTGRAB_HOST``             bind address (default ``0.0.0.0``)
``PORT``                    listen port (default ``3000``)
``YTGRAB_BASE_URL``         absolute prefix for download links
                            (default ``http://localhost:<port>``)
``YTGRAB_REQUEST_TIMEOUT``  upstream timeout in seconds (default ``10``)
``YTGRAB_LOG_LEVEL``        logging level name (default ``INFO``)
``YTGRAB_USER_AGENT``       browser User-Agent sent to YouTube
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from ytgrab.exceptions import InvalidParameterError

DEFAULT_USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE: str = "en-US,en;q=0.9"
DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 3000
DEFAULT_TIMEOUT: float = 10.0
DEFAULT_LOG_LEVEL: str = "INFO"


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable service configuration."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    base_url: str = ""
    """Prefix for absolute links in responses; empty means derive from *port*."""

    request_timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE

    @property
    def public_url(self) -> str:
        """Base URL without a trailing slash."""
        base = self.base_url or f"http://localhost:{self.port}"
        return base.rstrip("/")

    def with_overrides(self, **changes: object) -> Settings:
        """Return a copy with the non-``None`` *changes* applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to :data:`os.environ`).

        Raises
        ------
        InvalidParameterError
            If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("YTGRAB_HOST", DEFAULT_HOST),
            port=_parse_number(env, "PORT", DEFAULT_PORT, int),
            base_url=env.get("YTGRAB_BASE_URL", ""),
            request_timeout=_parse_number(
                env, "YTGRAB_REQUEST_TIMEOUT", DEFAULT_TIMEOUT, float,
            ),
            log_level=env.get("YTGRAB_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            user_agent=env.get("YTGRAB_USER_AGENT", DEFAULT_USER_AGENT),
        )


def _parse_number(
    env: Mapping[str, str],
    name: str,
    default: Any,
    cast: Callable[[str], Any],
) -> Any:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise InvalidParameterError(
            f"{name} must be a number, got {raw!r}",
        ) from exc
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {raw!r}")
    return value
