"""Persistent report document shared by every wrapper invocation."""

from __future__ import annotations

from contextlib import contextmanager
import fcntl
import json
import os
from pathlib import Path
import stat
import tempfile
from typing import Iterator

from ..logging import get_logger
from ..models import Report, ReportFormatError

_LOGGER = get_logger("stores")

LOCK_SUFFIX = ".lock"


class ReportStoreError(RuntimeError):
    """Raised when the report cannot be persisted."""


def load_report(path: Path) -> Report:
    """Read the report at ``path``; anything unreadable yields an empty report."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Report()
    except (OSError, ValueError, RecursionError) as exc:
        _LOGGER.debug("Discarding unreadable report %s: %s", path, exc)
        return Report()
    try:
        return Report.from_dict(data)
    except ReportFormatError as exc:
        _LOGGER.debug("Discarding malformed report %s: %s", path, exc)
        return Report()


def save_report(path: Path, report: Report) -> None:
    """Overwrite ``path`` with ``report``.

    The document is written to a temporary sibling and renamed into place so
    a concurrent reader sees either the previous or the new report.
    """
    path = Path(path)
    payload = json.dumps(report.to_dict())
    try:
        fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise ReportStoreError(f"could not open {path} for writing: {exc}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            os.fchmod(handle.fileno(), _report_mode(path))
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, str(path))
    except OSError as exc:
        _remove_quietly(tmp)
        raise ReportStoreError(f"could not write {path}: {exc}") from exc


class ReportStore:
    """Serialises load/mutate/save cycles on one report path across processes."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + LOCK_SUFFIX)

    def load(self) -> Report:
        return load_report(self.path)

    @contextmanager
    def update(self) -> Iterator[Report]:
        """Yield the current report under an exclusive lock and save it on exit.

        If the block raises, nothing is written.
        """
        with self._locked():
            report = load_report(self.path)
            yield report
            save_report(self.path, report)

    def reset(self) -> None:
        with self._locked():
            save_report(self.path, Report())

    @contextmanager
    def _locked(self) -> Iterator[None]:
        try:
            handle = open(self.lock_path, "a+")
        except OSError as exc:
            raise ReportStoreError(f"could not open lock file {self.lock_path}: {exc}") from exc
        with handle:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            except OSError as exc:
                raise ReportStoreError(f"could not lock {self.lock_path}: {exc}") from exc
            _LOGGER.debug("Acquired %s", self.lock_path)
            try:
                yield
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def _remove_quietly(path: str) -> None:
    try:
        os.unlink(path)
    except OSError:
        pass


def _report_mode(path: Path) -> int:
    """Keep an existing report's permissions; new reports honour the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except OSError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
