"""
jstype/parsing.py
═════════════════

Source loading and tree construction.

A :class:`SourceFile` is built once per checked file: the text is read,
split into lines (for the inline-annotation and directive scans) and
parsed with the tree-sitter JavaScript grammar.  Comments are collected
up front so every later phase works from the same list.

tree-sitter never raises on bad input; it produces ``ERROR`` / missing
nodes instead.  Any such node makes the file unparsable and raises
:class:`jstype.errors.SourceParseError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Parser, Tree

from jstype.ast_helper import Node, find_syntax_error, iter_comments, node_text
from jstype.errors import SourceParseError, SourceReadError

_log = logging.getLogger(__name__)

JS_LANGUAGE = Language(tsjs.language())


def _new_parser() -> Parser:
    # Parsers carry mutable state; one per parse keeps worker threads apart.
    return Parser(JS_LANGUAGE)


@dataclass
class SourceFile:
    """
    One parsed JavaScript source file.

    Attributes
    ----------
    path     : display path used in diagnostics
    text     : decoded source text
    lines    : ``text`` split on newlines (index 0 is line 1)
    tree     : the tree-sitter ``Tree``
    comments : every comment node, in source order
    """
    path: str
    text: str
    tree: Tree
    lines: List[str] = field(default_factory=list)
    comments: List[Node] = field(default_factory=list)
    _raw_lines: List[bytes] = field(default_factory=list, repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    # ── Construction ─────────────────────────────────────────────────

    @classmethod
    def from_text(cls, text: str, path: str = "<string>") -> "SourceFile":
        """Parse *text*; raises :class:`SourceParseError` on syntax errors."""
        raw = text.encode("utf-8")
        tree = _new_parser().parse(raw)
        bad = find_syntax_error(tree.root_node)
        if bad is not None:
            line = bad.start_point[0] + 1
            raw_lines = raw.split(b"\n")
            column = _char_column(raw_lines, bad.start_point[0], bad.start_point[1]) + 1
            what = "missing token" if bad.is_missing else "unexpected input"
            raise SourceParseError(
                f"syntax error ({what})",
                path=path,
                line=line,
                column=column,
                snippet=node_text(bad)[:80],
            )
        source = cls(
            path=path,
            text=text,
            tree=tree,
            lines=text.split("\n"),
            _raw_lines=raw.split(b"\n"),
        )
        source.comments = list(iter_comments(tree.root_node))
        _log.debug("Parsed %s: %d lines, %d comments",
                   path, len(source.lines), len(source.comments))
        return source

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        display_path: Optional[str] = None,
    ) -> "SourceFile":
        """Read and parse a file from disk."""
        p = Path(path)
        shown = display_path if display_path is not None else str(path)
        try:
            text = p.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceReadError("file not found", path=shown) from exc
        except UnicodeDecodeError as exc:
            raise SourceReadError("file is not valid UTF-8", path=shown) from exc
        except OSError as exc:
            raise SourceReadError(f"cannot read file: {exc.strerror}", path=shown) from exc
        return cls.from_text(text, path=shown)

    # ── Queries ──────────────────────────────────────────────────────

    def line_span(self, start_line: int, end_line: int) -> str:
        """Source lines ``start_line..end_line`` (1-based, inclusive)."""
        return "\n".join(self.lines[start_line - 1:end_line])

    def node_span_text(self, node: Node) -> str:
        """Full source lines covered by *node*."""
        return self.line_span(node.start_point[0] + 1, node.end_point[0] + 1)

    def column_of(self, node: Node) -> int:
        """0-based *character* column at which *node* starts."""
        row, byte_col = node.start_point[0], node.start_point[1]
        return _char_column(self._raw_lines, row, byte_col)


def _char_column(raw_lines: List[bytes], row: int, byte_col: int) -> int:
    if row >= len(raw_lines):
        return byte_col
    return len(raw_lines[row][:byte_col].decode("utf-8", errors="replace"))


__all__ = [
    "JS_LANGUAGE",
    "SourceFile",
]
