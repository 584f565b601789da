"""Runtime settings, read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

PAGE_SIZE = 10
CHART_MAX_POINTS = 500

DEFAULT_FEED = "month"
DEFAULT_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class Settings:
    """Dashboard configuration.

    ``feed`` is a USGS period name (see ``quake_dash.feed.FEEDS``), an
    http(s) URL, or a path to a local CSV file.
    """

    feed: str = DEFAULT_FEED
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        return level

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``QUAKE_DASH_*`` variables.

        Raises:
            ValueError: ``QUAKE_DASH_TIMEOUT`` is not a positive number.
        """
        raw_timeout = os.environ.get("QUAKE_DASH_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"QUAKE_DASH_TIMEOUT must be a number, got '{raw_timeout}'") from None
        if not timeout > 0:
            raise ValueError(f"QUAKE_DASH_TIMEOUT must be positive, got '{raw_timeout}'")
        return cls(
            feed=os.environ.get("QUAKE_DASH_FEED", DEFAULT_FEED),
            timeout_seconds=timeout,
            log_level=os.environ.get("QUAKE_DASH_LOG_LEVEL", "INFO"),
        )
