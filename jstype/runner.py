"""
jstype/runner.py
════════════════

File discovery and multi-file orchestration.

A run takes a list of paths (files or directories), expands directories
into JavaScript files, checks every file independently and reduces the
per-file results *in input order* into a :class:`RunResults`.

A file that cannot be read or parsed is recorded as a ``PARSE_ERROR``
result and the run continues with the next file.  Nothing about one
file (bindings, signatures, skip state) is visible while checking
another.

With ``jobs > 1`` files are checked on a thread pool; the result order
is the same as for a sequential run.

License: MIT
"""

from __future__ import annotations

import concurrent.futures
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from jstype.checker import FileCheckResult, FileStatus, TypeChecker
from jstype.config import CheckerConfig
from jstype.diagnostics import Diagnostic
from jstype.errors import SourceParseError, SourceReadError

_log = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — DISCOVERY
# ═════════════════════════════════════════════════════════════════════════

def _is_hidden(name: str) -> bool:
    return name.startswith(".") and name not in (".", "..")


def discover_files(
    paths: Iterable[PathLike],
    config: Optional[CheckerConfig] = None,
) -> List[str]:
    """
    Expand *paths* into the list of files to check.

    Files named explicitly are always kept, whatever their suffix.
    Directories are walked recursively in sorted order; hidden
    directories and ``config.exclude_dirs`` are pruned and only files
    with one of ``config.extensions`` are kept.  Paths that do not
    exist are kept as-is so that the read failure is reported for them.
    Duplicates are dropped, first occurrence wins.
    """
    config = config or CheckerConfig()
    excluded = set(config.exclude_dirs)
    extensions = tuple(config.extensions)
    found: List[str] = []
    seen = set()

    def _add(path: str) -> None:
        if path not in seen:
            seen.add(path)
            found.append(path)

    for raw in paths:
        path = str(raw)
        if not os.path.isdir(path):
            _add(path)
            continue
        for dirpath, dirnames, filenames in os.walk(path):
            dirnames[:] = sorted(
                d for d in dirnames if d not in excluded and not _is_hidden(d)
            )
            for name in sorted(filenames):
                if extensions and name.endswith(extensions):
                    _add(os.path.join(dirpath, name))

    _log.debug("Discovered %d file(s)", len(found))
    return found


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — RESULTS
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class RunResults:
    """
    Aggregate results of checking a set of files.

    Attributes
    ----------
    files    : per-file results, in input order
    stats    : timing and counting statistics
    """
    files: List[FileCheckResult] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return [d for result in self.files for d in result.diagnostics]

    @property
    def total_checks(self) -> int:
        return sum(result.checks_performed for result in self.files)

    @property
    def error_count(self) -> int:
        return sum(result.error_count for result in self.files)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def failures(self) -> List[FileCheckResult]:
        return [r for r in self.files if r.status is FileStatus.PARSE_ERROR]

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    @property
    def skipped(self) -> List[FileCheckResult]:
        return [r for r in self.files if r.status is FileStatus.SKIPPED]

    def by_file(self, file: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.location.file == file]

    def to_report(self) -> List[Dict[str, Any]]:
        """JSON report: one entry per file that has diagnostics."""
        return [r.to_report_entry() for r in self.files if r.diagnostics]

    def to_gcc_format(self) -> str:
        return "\n".join(d.to_gcc_format() for d in self.diagnostics)

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Checked {len(self.files)} file(s): {self.total_checks} checks, "
            f"{self.error_count} type error(s)",
        ]
        if self.skipped:
            lines.append(f"  skipped: {len(self.skipped)}")
        if self.failures:
            lines.append(f"  failed to parse: {len(self.failures)}")
        if "elapsed" in self.stats:
            lines.append(f"  elapsed: {self.stats['elapsed']:.3f}s")
        return "\n".join(lines)


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — RUNNER
# ═════════════════════════════════════════════════════════════════════════

class CheckerRunner:
    """
    Checks many files, each in isolation.

    Usage
    -----
    >>> runner = CheckerRunner(CheckerConfig(jobs=4))
    >>> results = runner.run(["src/"])
    >>> print(results.summary())
    """

    def __init__(self, config: Optional[CheckerConfig] = None) -> None:
        self.config = config or CheckerConfig()
        self.checker = TypeChecker(self.config)

    def check_one(self, path: str) -> FileCheckResult:
        """Check one file; read/parse failures become a PARSE_ERROR result."""
        _log.info("Checking %s", path)
        try:
            return self.checker.check_path(path, display_path=path)
        except (SourceReadError, SourceParseError) as exc:
            _log.warning("Could not check %s: %s", path, exc)
            return FileCheckResult(
                file=path,
                status=FileStatus.PARSE_ERROR,
                error=str(exc),
            )

    def run_files(self, files: Sequence[str]) -> RunResults:
        start = time.monotonic()
        workers = min(self.config.worker_count, max(len(files), 1))

        if workers <= 1:
            per_file = [self.check_one(path) for path in files]
        else:
            _log.debug("Checking %d file(s) on %d workers", len(files), workers)
            with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields in submission order.
                per_file = list(pool.map(self.check_one, files))

        results = RunResults(files=per_file)
        results.stats = {
            "elapsed": time.monotonic() - start,
            "files": len(per_file),
            "checks": results.total_checks,
            "errors": results.error_count,
            "workers": workers,
        }
        return results

    def run(self, paths: Iterable[PathLike]) -> RunResults:
        """Discover files under *paths* and check them."""
        return self.run_files(discover_files(paths, self.config))


def run_checks(
    paths: Iterable[PathLike],
    config: Optional[CheckerConfig] = None,
) -> RunResults:
    """Convenience wrapper around :class:`CheckerRunner`."""
    return CheckerRunner(config).run(paths)


__all__ = [
    "discover_files",
    "RunResults",
    "CheckerRunner",
    "run_checks",
]
