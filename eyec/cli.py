"""CLI entrypoints for eyec commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, EyecConfig, load_config
from .driver import run_wrapped
from .logging import configure_logging
from .render import render_dot, summarize
from .stores import ReportStore, ReportStoreError, load_report


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_report_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "report",
        nargs="?",
        default=None,
        help="Path to the report (defaults to $EYEC_REPORT or ./eyec-report.json).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eyec",
        description="Record and inspect the build actions of a wrapped C/C++ toolchain.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        help="Run a toolchain command and record it in the report.",
    )
    _add_verbose_option(run_parser, suppress_default=True)
    run_parser.add_argument(
        "tool_argv",
        nargs=argparse.REMAINDER,
        help="Tool and arguments, e.g. `eyec run -- gcc -c a.c -o a.o`.",
    )

    graph_parser = subparsers.add_parser(
        "graph",
        help="Render the report as a Graphviz digraph.",
    )
    _add_verbose_option(graph_parser, suppress_default=True)
    _add_report_argument(graph_parser)
    graph_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the DOT document to this file instead of stdout.",
    )

    summary_parser = subparsers.add_parser(
        "summary",
        help="Print stage counts and the slowest build actions.",
    )
    _add_verbose_option(summary_parser, suppress_default=True)
    _add_report_argument(summary_parser)
    summary_parser.add_argument(
        "--top",
        type=int,
        default=5,
        help="Number of slowest stages to list.",
    )

    reset_parser = subparsers.add_parser(
        "reset",
        help="Replace the report with an empty one.",
    )
    _add_verbose_option(reset_parser, suppress_default=True)
    _add_report_argument(reset_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for eyec commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ConfigError as exc:
        parser.exit(78, f"{exc}\n")

    configure_logging(verbose=bool(args.verbose) or config.verbose, log_file=config.log_file)

    if args.command == "run":
        tool_argv = list(args.tool_argv)
        if tool_argv and tool_argv[0] == "--":
            tool_argv = tool_argv[1:]
        if not tool_argv:
            parser.exit(2, "eyec run: missing tool to run\n")
        sys.exit(run_wrapped(tool_argv, config=config))
    elif args.command == "graph":
        report = load_report(_report_path(args, config))
        dot = render_dot(report)
        if args.output:
            Path(args.output).write_text(dot, encoding="utf-8")
        else:
            sys.stdout.write(dot)
    elif args.command == "summary":
        report = load_report(_report_path(args, config))
        print(summarize(report, top=args.top).format())
    elif args.command == "reset":
        path = _report_path(args, config)
        try:
            ReportStore(path).reset()
        except ReportStoreError as exc:
            parser.exit(74, f"eyec reset failed: {exc}\n")
        print(f"Report reset at {_relativize(path)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _report_path(args: argparse.Namespace, config: EyecConfig) -> Path:
    return Path(args.report) if args.report else config.report_path


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
