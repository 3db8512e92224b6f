"""
jstype/diagnostics.py
═════════════════════

Diagnostic model.

A :class:`Diagnostic` records one failed compatibility check: where it
happened, which name was involved, and the expected/found types.  It is
a value, never an exception; checking continues after it is recorded.

Output shapes
─────────────
  text     ``Type mismatch at app.js:3:5:`` + indented detail lines
  gcc      ``app.js:3:5: error: … [typeMismatch]``
  report   ``{"loc": "app.js:3:5", "variable": …, "expected": …,
             "found": …}``

License: MIT
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class DiagnosticKind(Enum):
    """Which kind of site produced the mismatch."""
    DECLARATION = "declaration"
    ASSIGNMENT = "assignment"
    ARGUMENT = "argument"


_SUBJECT_LABELS = {
    DiagnosticKind.DECLARATION: "Variable",
    DiagnosticKind.ASSIGNMENT: "Assignment to",
    DiagnosticKind.ARGUMENT: "Argument for parameter",
}


@dataclass(frozen=True)
class SourceLocation:
    """A point in source code; ``column`` is 1-based."""
    file: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single type mismatch.

    Attributes
    ----------
    location : where the checked declaration/assignment/argument starts
    subject  : variable or parameter name
    expected : declared type
    found    : inferred type
    kind     : DiagnosticKind of the checked site
    value    : literal source text of the offending value, if short
    """
    location: SourceLocation
    subject: str
    expected: str
    found: str
    kind: DiagnosticKind = DiagnosticKind.DECLARATION
    value: str = ""

    error_id = "typeMismatch"

    @property
    def message(self) -> str:
        label = _SUBJECT_LABELS[self.kind].lower()
        text = (f"{label} '{self.subject}': expected {self.expected}, "
                f"found {self.found}")
        if self.value:
            text += f" ({self.value})"
        return text

    def to_report_dict(self) -> Dict[str, Any]:
        """Entry of the ``errors`` list in the JSON report."""
        return {
            "loc": str(self.location),
            "variable": self.subject,
            "expected": self.expected,
            "found": self.found,
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_report_dict())

    def to_gcc_format(self) -> str:
        """GCC-style diagnostic string: file:line:col: error: message."""
        return f"{self.location}: error: {self.message} [{self.error_id}]"

    def to_text(self) -> str:
        """Multi-line console form."""
        found = self.found + (f" ({self.value})" if self.value else "")
        return (
            f"Type mismatch at {self.location}:\n"
            f"  {_SUBJECT_LABELS[self.kind]}: {self.subject}\n"
            f"  Expected: {self.expected}, Found: {found}"
        )

    def __str__(self) -> str:
        return self.to_gcc_format()


__all__ = [
    "DiagnosticKind",
    "SourceLocation",
    "Diagnostic",
]
