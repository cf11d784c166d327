"""The PATH wrapper: run the real tool, time it and record what it did."""

from __future__ import annotations

import os
from pathlib import Path
import signal
import subprocess
import sys
import time
from typing import List, Optional, Sequence

from .classifier import classify
from .config import ConfigError, EyecConfig, load_config
from .ids import IdentifierError
from .logging import configure_logging, get_logger
from .matchers import MatcherError, builtin_matchers, discover_matchers
from .notice import maybe_warn
from .stores import ReportStore, ReportStoreError

EXIT_NOT_FOUND = 127
EXIT_OSERR = 71
EXIT_IOERR = 74
EXIT_CONFIG = 78

_LOGGER = get_logger("driver")


class ToolNotFoundError(RuntimeError):
    """Raised when no real tool with the wrapped name exists on PATH."""


def resolve_real_program(
    argv0: str,
    *,
    search_path: Optional[str] = None,
    self_path: Optional[Path] = None,
) -> Path:
    """Find the executable ``argv0`` would name if eyec were not on PATH.

    Every PATH entry holding an executable of that name is canonicalised; the
    first candidate that is not the wrapper itself wins.
    """
    program = Path(argv0).name
    if not program:
        raise ToolNotFoundError(f"cannot derive a program name from {argv0!r}")
    wrapper = (self_path or Path(sys.argv[0])).resolve()
    search = os.environ.get("PATH", os.defpath) if search_path is None else search_path
    for directory in search.split(os.pathsep):
        if not directory:
            continue
        candidate = Path(directory) / program
        if not candidate.is_file() or not os.access(candidate, os.X_OK):
            continue
        resolved = candidate.resolve()
        if resolved == wrapper:
            continue
        return resolved
    raise ToolNotFoundError(f"Could not find {program} in the PATH")


def run_wrapped(argv: Sequence[str], *, config: Optional[EyecConfig] = None) -> int:
    """Run the real tool behind ``argv[0]`` and record the invocation."""
    config = config or load_config()
    try:
        matchers = discover_matchers(config.matchers)
    except MatcherError as exc:
        _LOGGER.error("%s; using the built-in matchers", exc)
        matchers = builtin_matchers()
    maybe_warn(config.notice)

    try:
        real_program = resolve_real_program(argv[0])
    except ToolNotFoundError as exc:
        _LOGGER.error("%s", exc)
        return EXIT_NOT_FOUND
    _LOGGER.debug("%s -> %s", list(argv), real_program)

    started = time.monotonic()
    try:
        completed = subprocess.run([str(real_program), *argv[1:]], check=False)
    except OSError as exc:
        _LOGGER.error("%s failed to start: %s", real_program, exc)
        return EXIT_NOT_FOUND
    duration = int((time.monotonic() - started) * 1000)

    returncode = completed.returncode
    if returncode < 0:
        # Killed by a signal: nothing is recorded for an interrupted tool.
        _LOGGER.debug("%s terminated by signal %d", real_program, -returncode)
        return 128 - returncode

    try:
        with ReportStore(config.report_path).update() as report:
            classify(str(real_program), list(argv), report, duration, matchers=matchers)
    except ReportStoreError as exc:
        _LOGGER.error("report not saved: %s", exc)
        return returncode or EXIT_IOERR
    except IdentifierError as exc:
        _LOGGER.error("report not saved: %s", exc)
        return returncode or EXIT_OSERR
    return returncode


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``eyec-wrap`` console script."""
    argv = list(sys.argv if argv is None else argv)
    try:
        config = load_config()
    except ConfigError as exc:
        configure_logging()
        _LOGGER.error("%s", exc)
        sys.exit(EXIT_CONFIG)
    configure_logging(verbose=config.verbose, log_file=config.log_file)
    try:
        code = run_wrapped(argv, config=config)
    except KeyboardInterrupt:
        code = 128 + signal.SIGINT
    sys.exit(code)


if __name__ == "__main__":
    main()
