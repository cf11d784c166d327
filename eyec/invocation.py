"""Argument-shape parsing for toolchain command lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

SOURCE_EXTENSIONS = (".c", ".cc", ".cpp", ".cxx", ".cx", ".c++")
OBJECT_EXTENSION = ".o"
ARCHIVE_EXTENSION = ".a"


@dataclass
class ParsedInvocation:
    """What a single scan of the argument vector found."""

    compile_only: bool = False
    output: Optional[str] = None
    has_output_flag: bool = False
    sources: List[str] = field(default_factory=list)
    objects: List[str] = field(default_factory=list)
    libraries: List[str] = field(default_factory=list)
    implicit_libraries: List[str] = field(default_factory=list)


def parse_invocation(args: Sequence[str]) -> ParsedInvocation:
    """Scan ``args`` once and collect the pieces the classifier cares about.

    ``args[0]`` is the program name as invoked and is not inspected. Only the
    first ``-o`` is honoured; its operand is still examined for extensions,
    so ``-o a.o`` also lists ``a.o`` among the objects.
    """
    parsed = ParsedInvocation()
    operands = list(args[1:])
    for index, arg in enumerate(operands):
        if arg == "-c":
            parsed.compile_only = True
        elif arg == "-o":
            if not parsed.has_output_flag:
                parsed.has_output_flag = True
                if index + 1 < len(operands):
                    parsed.output = operands[index + 1]
        elif _is_implicit_library(arg):
            parsed.implicit_libraries.append(f"lib{arg[2:]}{ARCHIVE_EXTENSION}")

        if arg.endswith(SOURCE_EXTENSIONS):
            parsed.sources.append(arg)
        if arg.endswith(ARCHIVE_EXTENSION):
            parsed.libraries.append(arg)
        if arg.endswith(OBJECT_EXTENSION):
            parsed.objects.append(arg)
    return parsed


def _is_implicit_library(arg: str) -> bool:
    return len(arg) > 2 and arg.startswith("-l") and arg[2].isalnum()


__all__ = [
    "ARCHIVE_EXTENSION",
    "OBJECT_EXTENSION",
    "ParsedInvocation",
    "SOURCE_EXTENSIONS",
    "parse_invocation",
]
