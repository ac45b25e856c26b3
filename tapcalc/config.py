"""Runtime settings and logging setup for tapcalc.

Settings come from the environment:
    TAPCALC_LOG_LEVEL   logging level name (default WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """Environment-derived settings."""

    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Optional[dict[str, str]] = None) -> Settings:
        """Read settings from ``env`` (defaults to ``os.environ``).

        Unknown level names fall back to the default.
        """
        env = os.environ if env is None else env
        level = env.get("TAPCALC_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            level = DEFAULT_LOG_LEVEL
        return cls(log_level=level)


def configure_logging(level: str, console: Optional[Console] = None) -> None:
    """Send tapcalc's log records to a Rich handler on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger("tapcalc")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
