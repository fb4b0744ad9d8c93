"""Runtime logging helpers."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Literal

from loguru import logger

LogProfile = Literal["default", "tui"]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "tui": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}",
    "default": "{level:<7} | {message}",
}
_LOG_FILE_NAME = "jk.log"
_CONFIGURED_PROFILE: LogProfile | None = None


def configure_logging(*, profile: LogProfile = "default", level: str = "INFO", home: Path | None = None) -> None:
    """Configure process-level logging once.

    The `tui` profile writes to `<home>/jk.log` because the full-screen UI owns the terminal.
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    logger.remove()
    if profile == "tui" and home is not None:
        home.mkdir(parents=True, exist_ok=True)
        logger.add(
            home / _LOG_FILE_NAME,
            level=level.upper(),
            format=_PROFILE_FORMATS[profile],
            rotation="1 MB",
            retention=3,
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=level.upper(),
            format=_PROFILE_FORMATS["default"],
            backtrace=False,
            diagnose=False,
        )
    _CONFIGURED_PROFILE = profile
