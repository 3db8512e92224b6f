"""
jstype — Lightweight Annotation-Driven Type Checker for JavaScript
==================================================================

Types are written in comments next to ordinary JavaScript; the checker
compares them with what the values look like and reports mismatches.
It never transforms or runs the code.

Annotation forms
----------------
::

    let count /*: number */ = 0;          // inline
    /** @type {string[]} */               // JSDoc, leading comment
    const names = ["a", "b"];
    /**
     * @param {number} a
     * @returns {string}
     */
    function label(a) { ... }

Directives
----------
``// : skip`` anywhere in a file skips the whole file;
``/*: skip-remaining */`` stops checking after the line it appears on.

Core modules
------------
parsing
    tree-sitter front end, :class:`SourceFile`.
annotations
    Inline / JSDoc annotation extraction.
inference
    Expression → semantic type.
matching
    Declared vs. inferred compatibility.
checker
    The per-file two-pass :class:`TypeChecker`.
runner
    File discovery and multi-file runs.

Quick start
-----------
>>> from jstype import check_source_text
>>> result = check_source_text('let age /*: number */ = "twenty";', "a.js")
>>> print(result.diagnostics[0])
a.js:1:5: error: variable 'age': expected number, found string ("twenty") [typeMismatch]
"""

from __future__ import annotations

from typing import List

__version__ = "0.1.0"

from jstype.checker import (  # noqa: E402
    FileCheckResult,
    FileStatus,
    TypeChecker,
    check_source_text,
)
from jstype.config import CheckerConfig  # noqa: E402
from jstype.diagnostics import Diagnostic, DiagnosticKind, SourceLocation  # noqa: E402
from jstype.errors import (  # noqa: E402
    ConfigError,
    JSTypeError,
    SourceParseError,
    SourceReadError,
)
from jstype.runner import CheckerRunner, RunResults, discover_files, run_checks  # noqa: E402

__all__: List[str] = [
    "__version__",
    "FileCheckResult",
    "FileStatus",
    "TypeChecker",
    "check_source_text",
    "CheckerConfig",
    "Diagnostic",
    "DiagnosticKind",
    "SourceLocation",
    "ConfigError",
    "JSTypeError",
    "SourceParseError",
    "SourceReadError",
    "CheckerRunner",
    "RunResults",
    "discover_files",
    "run_checks",
]
