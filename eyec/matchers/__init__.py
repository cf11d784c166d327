"""Toolchain matchers: built-in families plus ``eyec.matchers`` plugins.

A plugin entry point names either a ``ToolMatcher`` subclass or an instance.
Matchers are consulted by family (compilers before archivers) and, within a
family, built-ins before plugins.
"""

from __future__ import annotations

from importlib import metadata
from typing import Dict, Iterable, List, Sequence

from .base import ToolFamily, ToolMatcher
from .builtin import ArchiverMatcher, CompilerMatcher

ENTRY_POINT_GROUP = "eyec.matchers"

_FAMILY_ORDER = (ToolFamily.COMPILER, ToolFamily.ARCHIVER, ToolFamily.UNKNOWN)

_BUILTINS: Dict[str, type[ToolMatcher]] = {
    "compiler": CompilerMatcher,
    "archiver": ArchiverMatcher,
}


class MatcherError(RuntimeError):
    """Raised when a matcher plugin cannot be loaded or an unknown one is named."""


def builtin_matchers() -> List[ToolMatcher]:
    """Return the GNU toolchain matchers without consulting installed plugins."""
    return [factory() for factory in _BUILTINS.values()]


def discover_matchers(enabled: Sequence[str] | None = None) -> List[ToolMatcher]:
    """Return built-in and plugin matchers, restricted to ``enabled`` names."""
    available: Dict[str, ToolMatcher] = {
        name: factory() for name, factory in _BUILTINS.items()
    }
    for entry in metadata.entry_points(group=ENTRY_POINT_GROUP):
        name = entry.name.lower()
        if name in available:
            continue
        available[name] = _load_plugin(entry)

    if enabled is None:
        selected = list(available.values())
    else:
        wanted = [name.lower() for name in enabled]
        missing = sorted(set(wanted) - set(available))
        if missing:
            raise MatcherError(f"Unknown matchers requested: {', '.join(missing)}")
        selected = [matcher for name, matcher in available.items() if name in wanted]

    return sorted(selected, key=lambda matcher: _FAMILY_ORDER.index(matcher.family))


def identify(program: str, matchers: Iterable[ToolMatcher]) -> ToolFamily:
    """Return the family of the first matcher that recognises ``program``."""
    for matcher in matchers:
        if matcher.matches(program):
            return matcher.family
    return ToolFamily.UNKNOWN


def _load_plugin(entry: metadata.EntryPoint) -> ToolMatcher:
    try:
        loaded = entry.load()
        if isinstance(loaded, type) and issubclass(loaded, ToolMatcher):
            loaded = loaded()
    except Exception as exc:
        raise MatcherError(f"Failed to load matcher plugin '{entry.name}': {exc}") from exc
    if not isinstance(loaded, ToolMatcher):
        raise MatcherError(f"Matcher plugin '{entry.name}' is not a ToolMatcher")
    return loaded


__all__ = [
    "ArchiverMatcher",
    "CompilerMatcher",
    "ENTRY_POINT_GROUP",
    "MatcherError",
    "ToolFamily",
    "ToolMatcher",
    "builtin_matchers",
    "discover_matchers",
    "identify",
]
