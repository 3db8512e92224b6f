"""
jstype/checker.py
═════════════════

The per-file type checker.

Architecture
────────────

  ┌──────────────────────────────────────────────────────────────┐
  │                        TypeChecker                           │
  │                                                              │
  │   SourceFile ──► scan_directives ──► skipped? ──► Skipped    │
  │                         │                                    │
  │                         ▼                                    │
  │   phase 1   collect_signatures      (whole file)             │
  │                         │                                    │
  │                         ▼                                    │
  │   phase 2   pre-order walk, source order                     │
  │               variable_declarator  ─┐                        │
  │               assignment (= += …)   ├─► infer ─► match       │
  │               call_expression      ─┘        │               │
  │                                              ▼               │
  │                        FileContext.diagnostics ──► Checked   │
  └──────────────────────────────────────────────────────────────┘

Per-file state machine::

    Start ─► ParseError                 (SourceParseError raised)
          └► Parsed ─► Skipped          (": skip" comment)
                    └► Checking ─► Checked

All mutable state lives in a :class:`FileContext` created for one file
and dropped afterwards, so files can be checked on independent workers.

License: MIT
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jstype.annotations import find_type_annotation
from jstype.ast_helper import (
    ASSIGNMENT_TYPES,
    CALL_EXPRESSION,
    VARIABLE_DECLARATOR,
    Node,
    assignment_target,
    call_arguments,
    callee_name,
    classify_expression,
    declarator_name,
    declarator_value,
    field as node_field,
    identifier_name,
    iter_preorder,
    node_line,
    node_text,
    unwrap_parens,
)
from jstype.bindings import BindingTracker
from jstype.config import CheckerConfig
from jstype.diagnostics import Diagnostic, DiagnosticKind, SourceLocation
from jstype.directives import SkipState, scan_directives
from jstype.inference import infer_type
from jstype.matching import is_type_match
from jstype.parsing import SourceFile
from jstype.signatures import SignatureRegistry, collect_signatures
from jstype.types import ExprKind

_log = logging.getLogger(__name__)

_VALUE_KINDS = frozenset({ExprKind.STRING, ExprKind.NUMBER, ExprKind.BOOLEAN})
_MAX_VALUE_TEXT = 40


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — RESULTS
# ═════════════════════════════════════════════════════════════════════════

class FileStatus(Enum):
    """Terminal states of the per-file state machine."""
    PARSE_ERROR = "parse_error"
    SKIPPED = "skipped"
    CHECKED = "checked"


@dataclass
class FileCheckResult:
    """
    Outcome of checking one file.

    Attributes
    ----------
    file             : display path
    status           : FileStatus
    diagnostics      : mismatches, in source order of detection
    checks_performed : number of compatibility checks made
    error            : read/parse failure message (PARSE_ERROR only)
    """
    file: str
    status: FileStatus
    diagnostics: List[Diagnostic] = field(default_factory=list)
    checks_performed: int = 0
    error: Optional[str] = None

    @property
    def error_count(self) -> int:
        return len(self.diagnostics)

    @property
    def ok(self) -> bool:
        return self.status is not FileStatus.PARSE_ERROR and not self.diagnostics

    def to_report_entry(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "errors": [d.to_report_dict() for d in self.diagnostics],
        }


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — PER-FILE CONTEXT
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class FileContext:
    """Everything the checker knows about the file being checked."""
    source: SourceFile
    config: CheckerConfig
    skip: SkipState
    bindings: BindingTracker = field(default_factory=BindingTracker)
    signatures: SignatureRegistry = field(default_factory=SignatureRegistry)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    checks_performed: int = 0

    def location(self, node: Node) -> SourceLocation:
        return SourceLocation(
            file=self.source.path,
            line=node_line(node),
            column=self.source.column_of(node) + 1,
        )

    def infer(self, node: Node, declared_type: Optional[str] = None) -> str:
        return infer_type(node, self.bindings, self.signatures, declared_type)

    def report(
        self,
        node: Node,
        subject: str,
        expected: str,
        found: str,
        kind: DiagnosticKind,
        value_node: Node = None,
    ) -> Diagnostic:
        diag = Diagnostic(
            location=self.location(node),
            subject=subject,
            expected=expected,
            found=found,
            kind=kind,
            value=_value_text(value_node),
        )
        self.diagnostics.append(diag)
        _log.debug("%s", diag.to_gcc_format())
        return diag


def _value_text(node: Node) -> str:
    """Source text of a short literal value, for messages."""
    if node is None or classify_expression(node) not in _VALUE_KINDS:
        return ""
    text = node_text(unwrap_parens(node))
    if len(text) > _MAX_VALUE_TEXT:
        return ""
    return text


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — CHECKER
# ═════════════════════════════════════════════════════════════════════════

class TypeChecker:
    """
    Checks JavaScript files against their type annotations.

    Usage
    -----
    >>> checker = TypeChecker(CheckerConfig(infer=True))
    >>> result = checker.check_text('let n /*: number */ = "x";', "a.js")
    >>> result.error_count
    1
    >>> print(result.diagnostics[0].to_text())
    Type mismatch at a.js:1:5:
      Variable: n
      Expected: number, Found: string ("x")

    ``check_text`` and ``check_path`` raise
    :class:`~jstype.errors.SourceParseError` /
    :class:`~jstype.errors.SourceReadError` for files that cannot be
    checked; :class:`jstype.runner.CheckerRunner` turns those into
    ``PARSE_ERROR`` results.
    """

    def __init__(self, config: Optional[CheckerConfig] = None) -> None:
        self.config = config or CheckerConfig()

    # ── Entry points ─────────────────────────────────────────────────

    def check_text(self, text: str, path: str = "<string>") -> FileCheckResult:
        return self.check_source(SourceFile.from_text(text, path=path))

    def check_path(
        self,
        path: Union[str, Path],
        display_path: Optional[str] = None,
    ) -> FileCheckResult:
        return self.check_source(SourceFile.from_path(path, display_path=display_path))

    def check_source(self, source: SourceFile) -> FileCheckResult:
        """Run both phases over an already parsed file."""
        skip = scan_directives(source.comments, source.lines)
        if skip.file_skipped:
            _log.info("Skipping %s (: skip directive)", source.path)
            return FileCheckResult(file=source.path, status=FileStatus.SKIPPED)

        ctx = FileContext(source=source, config=self.config, skip=skip)
        if skip.skip_remaining_line is not None:
            _log.debug("%s: checking stops after line %d",
                       source.path, skip.skip_remaining_line)

        self._collect_signatures(ctx)
        self._check_tree(ctx)

        return FileCheckResult(
            file=source.path,
            status=FileStatus.CHECKED,
            diagnostics=list(ctx.diagnostics),
            checks_performed=ctx.checks_performed,
        )

    # ── Phase 1 ──────────────────────────────────────────────────────

    def _collect_signatures(self, ctx: FileContext) -> None:
        ctx.signatures = collect_signatures(ctx.source.root)

    # ── Phase 2 ──────────────────────────────────────────────────────

    def _check_tree(self, ctx: FileContext) -> None:
        for node in iter_preorder(ctx.source.root):
            if node.type == VARIABLE_DECLARATOR:
                self._check_declarator(ctx, node)
            elif node.type in ASSIGNMENT_TYPES:
                self._check_assignment(ctx, node)
            elif node.type == CALL_EXPRESSION:
                self._check_call(ctx, node)

    def _check_declarator(self, ctx: FileContext, node: Node) -> None:
        name = declarator_name(node)
        value = declarator_value(node)
        if name is None or value is None:
            return
        if not ctx.skip.allows(node):
            return

        annotation = find_type_annotation(ctx.source, node)
        if annotation is not None:
            declared = annotation.declared_type
            inferred = ctx.infer(value, declared)
            ctx.checks_performed += 1
            _log.debug("%s: expected %s, actual %s", name, declared, inferred)
            if not is_type_match(declared, inferred, value, annotation.is_complex):
                ctx.report(node, name, declared, inferred,
                           DiagnosticKind.DECLARATION, value)
            ctx.bindings.declare(name, declared, inferred, annotation.is_complex)
            return

        inferred = ctx.infer(value)
        alias = identifier_name(value)
        if alias is not None and alias in ctx.bindings:
            # Copies of a tracked name are tracked with its current type.
            ctx.bindings.declare(name, inferred, inferred)
            _log.debug("%s: tracked as alias of %s (%s)", name, alias, inferred)
        elif ctx.config.infer:
            ctx.bindings.declare(name, inferred, inferred)
            _log.debug("%s: inferred %s", name, inferred)
        else:
            _log.debug("No type annotation found for %s", name)

    def _check_assignment(self, ctx: FileContext, node: Node) -> None:
        name = assignment_target(node)
        if name is None or not ctx.skip.allows(node):
            return
        binding = ctx.bindings.get(name)
        if binding is None or binding.declared_type is None:
            return

        right = node_field(node, "right")
        declared = binding.declared_type
        inferred = ctx.infer(right, declared)
        ctx.checks_performed += 1
        _log.debug("assignment to %s: expected %s, actual %s", name, declared, inferred)
        if is_type_match(declared, inferred, right, binding.is_complex):
            ctx.bindings.refresh(name, inferred)
        else:
            ctx.report(node, name, declared, inferred,
                       DiagnosticKind.ASSIGNMENT, right)

    def _check_call(self, ctx: FileContext, node: Node) -> None:
        signature = ctx.signatures.get(callee_name(node))
        if signature is None or not signature.has_params:
            return
        if not ctx.skip.allows(node):
            return

        arguments = call_arguments(node)
        for param, argument in zip(signature.params, arguments):
            inferred = ctx.infer(argument)
            if inferred != param.declared_type:
                ctx.report(argument, param.name, param.declared_type, inferred,
                           DiagnosticKind.ARGUMENT, argument)
        ctx.checks_performed += len(signature.params)


def check_source_text(
    text: str,
    path: str = "<string>",
    config: Optional[CheckerConfig] = None,
) -> FileCheckResult:
    """Check a source string with a fresh :class:`TypeChecker`."""
    return TypeChecker(config).check_text(text, path=path)


__all__ = [
    "FileStatus",
    "FileCheckResult",
    "FileContext",
    "TypeChecker",
    "check_source_text",
]
