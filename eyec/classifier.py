"""Turns an observed toolchain invocation into report records."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from .ids import new_id
from .invocation import ParsedInvocation, parse_invocation
from .logging import get_logger
from .matchers import ToolFamily, ToolMatcher, discover_matchers, identify
from .models import FileKind, FileRecord, Report, Stage, StageKind

IdFactory = Callable[[], str]

_LOGGER = get_logger("classifier")


def classify(
    program: str,
    args: Sequence[str],
    report: Report,
    duration: int,
    *,
    matchers: Optional[Iterable[ToolMatcher]] = None,
    id_factory: Optional[IdFactory] = None,
) -> Optional[Stage]:
    """Append the stage described by ``program args`` to ``report``.

    ``program`` is the resolved path of the real tool and decides the tool
    family; ``args`` is the full argument vector including argv[0]. Returns the
    appended stage, or None when the invocation is outside the model.
    """
    make_id = id_factory or new_id
    family = identify(program, matchers if matchers is not None else discover_matchers())
    parsed = parse_invocation(args)

    if family is ToolFamily.COMPILER:
        if parsed.compile_only:
            return _record_compilation(parsed, report, duration, make_id)
        if parsed.output is not None:
            return _record_link(parsed, parsed.output, report, duration, make_id)
        _LOGGER.debug("No output for %s; nothing recorded", program)
        return None
    if family is ToolFamily.ARCHIVER:
        return _record_archiving(parsed, report, duration, make_id)
    _LOGGER.debug("Unrecognised program %s; nothing recorded", program)
    return None


def _record_compilation(
    parsed: ParsedInvocation, report: Report, duration: int, make_id: IdFactory
) -> Stage:
    inputs = _files(parsed.sources, FileKind.SOURCE, make_id)
    outputs: List[FileRecord] = []
    # The object name is only attributable when a single source is compiled.
    if len(parsed.sources) == 1 and parsed.output is not None:
        outputs = _files([parsed.output], FileKind.OBJECT, make_id)
    return _append(report, StageKind.COMPILATION, inputs, outputs, duration, make_id)


def _record_link(
    parsed: ParsedInvocation, output: str, report: Report, duration: int, make_id: IdFactory
) -> Stage:
    executable = _files([output], FileKind.EXECUTABLE, make_id)
    inputs = (
        _files(parsed.implicit_libraries, FileKind.LIBRARY, make_id)
        + _files(parsed.libraries, FileKind.LIBRARY, make_id)
        + _files(parsed.objects, FileKind.OBJECT, make_id)
    )
    return _append(
        report, StageKind.LINK, inputs, executable, duration, make_id, outputs_first=True
    )


def _record_archiving(
    parsed: ParsedInvocation, report: Report, duration: int, make_id: IdFactory
) -> Stage:
    libraries = _files(parsed.libraries, FileKind.LIBRARY, make_id)
    objects = _files(parsed.objects, FileKind.OBJECT, make_id)
    return _append(
        report, StageKind.ARCHIVING, objects, libraries, duration, make_id, outputs_first=True
    )


def _append(
    report: Report,
    kind: StageKind,
    inputs: List[FileRecord],
    outputs: List[FileRecord],
    duration: int,
    make_id: IdFactory,
    *,
    outputs_first: bool = False,
) -> Stage:
    stage = Stage(
        id=make_id(),
        kind=kind,
        duration=duration,
        inputs=[record.id for record in inputs],
        outputs=[record.id for record in outputs],
    )
    report.add_stage(stage, outputs + inputs if outputs_first else inputs + outputs)
    return stage


def _files(names: Sequence[str], kind: FileKind, make_id: IdFactory) -> List[FileRecord]:
    return [FileRecord(id=make_id(), kind=kind, name=name) for name in names]


__all__ = ["IdFactory", "classify"]
