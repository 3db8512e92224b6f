#!/usr/bin/env python3
"""jstype/main.py — CLI entry-point for the jstype checker.

Usage examples
--------------
    # Check a single file
    jstype app.js

    # Check a source tree, four files at a time, with per-check traces
    jstype src/ --jobs 4 -vv

    # Also track unannotated declarations by their inferred type
    jstype src/ --infer

    # Write a JSON report next to the console output
    jstype src/ --report jstype-report.json

    # Machine-readable output on stdout
    jstype src/ --format gcc

Exit codes
----------
    0   Every checked file is free of type mismatches.
    1   One or more type mismatches were reported.
    2   Infrastructure failure (no input, bad configuration, or a file
        that could not be read or parsed while no mismatch was found).

The module doubles as ``python -m jstype`` via the companion
``jstype/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from jstype import __version__
from jstype.checker import FileCheckResult, FileStatus
from jstype.config import CheckerConfig
from jstype.errors import ConfigError
from jstype.runner import CheckerRunner, RunResults

_log = logging.getLogger("jstype")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``jstype`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("jstype")
    root.setLevel(level)
    # Repeated main() calls in one process replace the handler.
    for old in [h for h in root.handlers if getattr(h, "_jstype_cli", False)]:
        root.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    handler._jstype_cli = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def _load_config(args: argparse.Namespace) -> CheckerConfig:
    """Defaults, then ``--config FILE``, then command-line flags."""
    config = CheckerConfig()
    if args.config:
        config = CheckerConfig.from_file(args.config)

    exclude = None
    if args.exclude:
        exclude = tuple(config.exclude_dirs) + tuple(args.exclude)
    config = config.with_overrides(
        infer=True if args.infer else None,
        jobs=args.jobs,
        exclude_dirs=exclude,
    )
    for warning in config.validate():
        _log.warning("config: %s", warning)
    return config


def _write_report(dest: str, results: RunResults) -> None:
    p = Path(dest).expanduser()
    if p.parent and not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as fh:
        json.dump(results.to_report(), fh, indent=2)
        fh.write("\n")
    _log.info("Report written to %s", p)


# ===========================================================================
# Output
# ===========================================================================

def _emit_text_file(result: FileCheckResult, stream: TextIO) -> None:
    if result.status is FileStatus.SKIPPED:
        stream.write(f"Skipped {result.file} (: skip directive)\n")
        return
    if result.status is FileStatus.PARSE_ERROR:
        stream.write(f"Error: could not check {result.file}: {result.error}\n")
        return
    for diag in result.diagnostics:
        stream.write(diag.to_text() + "\n")
    if result.diagnostics:
        stream.write(f"Found {result.error_count} type error(s) in {result.file}\n")
    else:
        stream.write(
            f"Checked {result.file} successfully! "
            f"({result.checks_performed} type checks performed)\n"
        )


def _emit_results(results: RunResults, fmt: str, stream: TextIO) -> None:
    """Write *results* to *stream* in the chosen format."""
    if fmt == "json":
        stream.write(json.dumps(results.to_report(), indent=2) + "\n")
    elif fmt == "gcc":
        if results.diagnostics:
            stream.write(results.to_gcc_format() + "\n")
        for failure in results.failures:
            stream.write(f"{failure.error}\n")
    else:
        for result in results.files:
            _emit_text_file(result, stream)


def _exit_code(results: RunResults) -> int:
    if results.has_errors:
        return EXIT_ERROR
    if results.has_failures:
        return EXIT_INFRA
    return EXIT_OK


# ===========================================================================
# Command
# ===========================================================================

def cmd_check(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args)
    except ConfigError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    runner = CheckerRunner(config)
    results = runner.run(args.paths)
    if not results.files:
        _log.error("No JavaScript files found in: %s", ", ".join(args.paths))
        return EXIT_INFRA

    _emit_results(results, args.format, sys.stdout)
    _log.info("%s", results.summary())

    if args.report:
        try:
            _write_report(args.report, results)
        except OSError as exc:
            _log.error("Cannot write report %s: %s", args.report, exc)
            return EXIT_INFRA

    return _exit_code(results)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="jstype",
        description=(
            "jstype: a lightweight type-checker for JavaScript.\n\n"
            "Checks values against types written in comments:\n"
            "  let n /*: number */ = 42;\n"
            "  /** @type {string[]} */ const names = [];"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              jstype app.js
              jstype src/ --infer --jobs 4
              jstype src/ --format json --report out.json
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="JavaScript files or directories to check.",
    )
    parser.add_argument(
        "--infer",
        action="store_true",
        help="Track unannotated declarations by their inferred type.",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=None,
        metavar="N",
        help="Check N files in parallel (default: 1).",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        metavar="FILE",
        help="JSON configuration file.",
    )
    parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "gcc"],
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--report",
        default=None,
        metavar="FILE",
        help="Also write a JSON report to FILE.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory name to skip during discovery (repeatable).",
    )
    parser.set_defaults(func=cmd_check)
    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the jstype CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA

    _configure_logging(args.verbose)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


__all__: List[str] = ["main", "EXIT_OK", "EXIT_ERROR", "EXIT_INFRA"]


if __name__ == "__main__":
    raise SystemExit(main())
