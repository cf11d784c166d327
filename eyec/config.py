"""Configuration loading for eyec (.eyec.yml plus environment overrides)."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import tempfile
from typing import Any, Dict, List, Mapping, Optional

import yaml

CONFIG_FILENAME = ".eyec.yml"
DEFAULT_REPORT_FILENAME = "eyec-report.json"
DEFAULT_NOTICE_INTERVAL = 300.0

ENV_CONFIG = "EYEC_CONFIG"
ENV_REPORT = "EYEC_REPORT"
ENV_QUIET = "EYEC_QUIET"
ENV_VERBOSE = "EYEC_VERBOSE"
ENV_LOG_FILE = "EYEC_LOG_FILE"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class NoticeConfig:
    """Settings for the periodic 'compiler is wrapped' warning."""

    enabled: bool = True
    interval_seconds: float = DEFAULT_NOTICE_INTERVAL
    stamp_file: Path = field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "eyec.timestamp"
    )


@dataclass
class EyecConfig:
    """Effective settings for one wrapper or CLI invocation."""

    report_path: Path
    notice: NoticeConfig = field(default_factory=NoticeConfig)
    matchers: Optional[List[str]] = None
    verbose: bool = False
    log_file: Optional[Path] = None


def load_config(
    cwd: Path | None = None, environ: Mapping[str, str] | None = None
) -> EyecConfig:
    """Load configuration for ``cwd``, applying environment overrides last."""
    cwd = (cwd or Path.cwd()).resolve()
    env = os.environ if environ is None else environ

    config_file = Path(env[ENV_CONFIG]).expanduser() if env.get(ENV_CONFIG) else cwd / CONFIG_FILENAME
    data: Dict[str, Any] = {}
    base = cwd
    if config_file.exists():
        data = _read_config(config_file)
        base = config_file.parent.resolve()

    report = _as_str(data.get("report"), "report")
    report_path = base / report if report else cwd / DEFAULT_REPORT_FILENAME

    notice = NoticeConfig()
    notice_data = data.get("notice")
    if notice_data is not None:
        if not isinstance(notice_data, dict):
            raise ConfigError("'notice' must be a mapping")
        enabled = _as_bool(notice_data.get("enabled"), "notice.enabled")
        if enabled is not None:
            notice.enabled = enabled
        interval = notice_data.get("interval_seconds")
        if interval is not None:
            if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval < 0:
                raise ConfigError("'notice.interval_seconds' must be a non-negative number")
            notice.interval_seconds = float(interval)
        stamp = _as_str(notice_data.get("stamp_file"), "notice.stamp_file")
        if stamp:
            notice.stamp_file = base / Path(stamp).expanduser()

    matchers = data.get("matchers")
    if matchers is not None:
        if not isinstance(matchers, list) or not all(isinstance(item, str) for item in matchers):
            raise ConfigError("'matchers' must be a list of matcher names")

    verbose = bool(_as_bool(data.get("verbose"), "verbose"))
    log_file_value = _as_str(data.get("log_file"), "log_file")
    log_file = base / log_file_value if log_file_value else None

    if env.get(ENV_REPORT):
        report_path = Path(env[ENV_REPORT]).expanduser()
    if _truthy(env.get(ENV_QUIET)):
        notice.enabled = False
    if _truthy(env.get(ENV_VERBOSE)):
        verbose = True
    if env.get(ENV_LOG_FILE):
        log_file = Path(env[ENV_LOG_FILE]).expanduser()

    return EyecConfig(
        report_path=report_path,
        notice=notice,
        matchers=matchers,
        verbose=verbose,
        log_file=log_file,
    )


def _read_config(config_file: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read {config_file}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")
    return data


def _as_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def _as_bool(value: Any, key: str) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return value


def _truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in {"1", "true", "yes", "on"}


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_REPORT_FILENAME",
    "EyecConfig",
    "NoticeConfig",
    "load_config",
]
