"""Dashboard configuration from environment variables.

Env vars:
    SOCIALCHARTS_CSV: source CSV path or URL (default: bundled data/socialMedia.csv)
    SOCIALCHARTS_DATE_FORMAT: strptime format for the Date column (default: flexible)
    SOCIALCHARTS_ON_ERROR: "raise" or "skip" for malformed rows (default raise)
    SOCIALCHARTS_GUI_NATIVE: 1/0 (default 0)
    SOCIALCHARTS_GUI_RELOAD: 1/0 (default 0)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default 8080)
    SOCIALCHARTS_LOG_LEVEL: log level (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from socialcharts.data.loader import default_source
from socialcharts.data.normalize import ON_ERROR_CHOICES
from socialcharts.utils.logging import LOG_LEVEL_ENV, get_logger

logger = get_logger(__name__)

DEFAULT_PORT = 8080

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _env_bool(name: str, default: bool) -> bool:
    """1/true/yes/on or 0/false/no/off, any case; anything else gives default."""
    word = os.getenv(name, "").strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Integer env var; default when unset or not an integer."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    """Env var with surrounding whitespace stripped; unset or blank returns default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class DashboardConfig:
    """Settings for one dashboard process."""
    csv_source: str
    date_format: Optional[str] = None
    on_error: str = "raise"
    native: bool = False
    reload: bool = False
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "DashboardConfig":
        """Build config from environment variables (see module docstring).

        An unknown SOCIALCHARTS_ON_ERROR value falls back to "raise" with a warning.
        """
        native = _env_bool("SOCIALCHARTS_GUI_NATIVE", False)
        on_error = _env_str("SOCIALCHARTS_ON_ERROR", "raise").lower()
        if on_error not in ON_ERROR_CHOICES:
            logger.warning(
                f"Unknown SOCIALCHARTS_ON_ERROR={on_error!r}, expected one of {ON_ERROR_CHOICES}; using 'raise'"
            )
            on_error = "raise"
        return cls(
            csv_source=_env_str("SOCIALCHARTS_CSV", str(default_source())),
            date_format=_env_str("SOCIALCHARTS_DATE_FORMAT", None),
            on_error=on_error,
            native=native,
            reload=_env_bool("SOCIALCHARTS_GUI_RELOAD", False),
            host=_env_str("HOST", "127.0.0.1" if native else "0.0.0.0"),
            port=_env_int("PORT", DEFAULT_PORT),
            log_level=_env_str(LOG_LEVEL_ENV, "INFO").upper(),
        )
