"""Periodic reminder that the toolchain is being wrapped."""

from __future__ import annotations

from pathlib import Path
import time
from typing import Callable

from .config import NoticeConfig
from .logging import get_logger

NOTICE_MESSAGE = "your compiler executable is being wrapped by eyec."

_LOGGER = get_logger("notice")


def should_warn(
    stamp_file: Path, interval_seconds: float, *, clock: Callable[[], float] = time.time
) -> bool:
    """Return True when the last notice is older than ``interval_seconds``.

    The stamp is refreshed whenever a notice is due. A missing or garbled
    stamp counts as stale.
    """
    now = clock()
    try:
        last = float(stamp_file.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        last = None
    # A stamp from the future (clock skew) counts as stale.
    if last is not None and 0 <= now - last <= interval_seconds:
        return False
    try:
        stamp_file.write_text(f"{now:.3f}", encoding="utf-8")
    except OSError as exc:
        _LOGGER.debug("Could not refresh notice stamp %s: %s", stamp_file, exc)
    return True


def maybe_warn(config: NoticeConfig) -> bool:
    if not config.enabled:
        return False
    if should_warn(config.stamp_file, config.interval_seconds):
        _LOGGER.warning(NOTICE_MESSAGE)
        return True
    return False


__all__ = ["NOTICE_MESSAGE", "maybe_warn", "should_warn"]
