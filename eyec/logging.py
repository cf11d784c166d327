"""Logging for the compiler wrapper and the eyec CLI.

The wrapper shares stdout with the compiler it stands in for, so eyec only
ever writes diagnostics to stderr or to an optional log file. Parallel builds
append to the same log file, hence the pid in every file record.
"""

from __future__ import annotations

import logging
from pathlib import Path
import sys

_LOGGER_NAME = "eyec"
_CONSOLE_HANDLER = "eyec.console"
_FILE_HANDLER = "eyec.file"

_CONSOLE_FORMAT = "[eyec] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s pid=%(process)d %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the eyec hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install eyec's stderr handler and, when asked, a file handler.

    Only handlers installed by eyec are replaced. A log file that cannot be
    opened is reported on stderr and skipped; logging must not stop the
    wrapped tool from running.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    _install(logger, _CONSOLE_HANDLER, console)
    _install(logger, _FILE_HANDLER, None)

    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            logger.warning("cannot write log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            _install(logger, _FILE_HANDLER, file_handler)

    return logger


def _install(logger: logging.Logger, name: str, handler: logging.Handler | None) -> None:
    for existing in list(logger.handlers):
        if existing.get_name() == name:
            logger.removeHandler(existing)
            existing.close()
    if handler is not None:
        handler.set_name(name)
        logger.addHandler(handler)


__all__ = ["configure_logging", "get_logger"]
