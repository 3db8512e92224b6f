# jstype/errors.py
"""
jstype Error Types

Exception hierarchy for the infrastructure failures the checker can run
into.  Type mismatches are *not* exceptions: they are collected as
:class:`jstype.diagnostics.Diagnostic` records and never raised.

Hierarchy:
──────────
┌──────────────────────────────────────────────────────────────────────┐
│  JSTypeError (base)                                                  │
│  ├── SourceReadError   - file missing, unreadable or undecodable     │
│  ├── SourceParseError  - source does not parse into a clean tree     │
│  └── ConfigError       - invalid configuration file or values        │
└──────────────────────────────────────────────────────────────────────┘

``SourceReadError`` and ``SourceParseError`` are fatal for one file
only; the runner records them and moves on to sibling files.
"""

from __future__ import annotations

from typing import Optional


class JSTypeError(Exception):
    """
    Base exception for all jstype errors.

    Carries an optional source position so it can be rendered in the
    same ``file:line:col: message`` shape as diagnostics.
    """

    def __init__(
        self,
        message: str,
        path: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line
        self.column = column

    @property
    def location(self) -> str:
        if not self.path:
            return ""
        if self.line is None:
            return self.path
        if self.column is None:
            return f"{self.path}:{self.line}"
        return f"{self.path}:{self.line}:{self.column}"

    def __str__(self) -> str:
        loc = self.location
        return f"{loc}: {self.message}" if loc else self.message


class SourceReadError(JSTypeError):
    """The source file could not be read or decoded."""


class SourceParseError(JSTypeError):
    """The source does not parse into an error-free syntax tree."""

    def __init__(
        self,
        message: str = "syntax error",
        path: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        snippet: str = "",
    ) -> None:
        super().__init__(message, path=path, line=line, column=column)
        self.snippet = snippet


class ConfigError(JSTypeError):
    """Invalid configuration file or option value."""


__all__ = [
    "JSTypeError",
    "SourceReadError",
    "SourceParseError",
    "ConfigError",
]
