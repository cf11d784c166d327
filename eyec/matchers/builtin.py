"""Substring matchers for the GNU-style C/C++ toolchain."""

from __future__ import annotations

from typing import Sequence

from .base import ToolFamily, ToolMatcher


class SubstringMatcher(ToolMatcher):
    """Matches when any of ``needles`` occurs in the resolved program path."""

    needles: Sequence[str] = ()

    def matches(self, program: str) -> bool:
        return any(needle in program for needle in self.needles)


class CompilerMatcher(SubstringMatcher):
    family = ToolFamily.COMPILER
    needles = ("cc", "c++", "gcc", "g++")


class ArchiverMatcher(SubstringMatcher):
    family = ToolFamily.ARCHIVER
    needles = ("ar",)
