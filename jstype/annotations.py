"""
jstype/annotations.py
═════════════════════

Annotation Extractor.

Recognized forms
────────────────
  inline     ``let x /*: number */ = 5;``
  JSDoc      ``/** @type {string} */``
             ``@param {number} a``   ``@returns {number}`` / ``@return {…}``

Extraction is pure: it reads the already-parsed tree, comment list and
source lines and never mutates them.

License: MIT
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from jstype.ast_helper import (
    Node,
    comment_body,
    is_block_comment,
    leading_comments,
    node_line,
)
from jstype.parsing import SourceFile
from jstype.types import is_complex_type


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — GRAMMAR
# ═════════════════════════════════════════════════════════════════════════

INLINE_ANNOTATION_RE = re.compile(r"/\*\s*:\s*([\w\[\]<>|&]+)\s*\*/")
JSDOC_TYPE_RE = re.compile(r"@type\s*{\s*([\w\[\]<>|&]+)\s*}")
JSDOC_RETURNS_RE = re.compile(r"@returns?\s*{\s*([^}]+)\s*}")
JSDOC_PARAM_RE = re.compile(r"@param\s*{\s*([^}]+)\s*}\s*(\w+)")


@dataclass(frozen=True)
class Annotation:
    """
    A parsed type annotation.

    Attributes
    ----------
    raw_text      : the type text exactly as written
    declared_type : ``raw_text`` lower-cased
    is_complex    : raw text contains any of ``[ ] < > | &``
    """
    raw_text: str
    declared_type: str
    is_complex: bool

    def __str__(self) -> str:
        return self.declared_type


def parse_type_annotation(raw_text: str) -> Annotation:
    """Build an :class:`Annotation` from the text captured by a pattern."""
    return Annotation(
        raw_text=raw_text,
        declared_type=raw_text.lower(),
        is_complex=is_complex_type(raw_text),
    )


def _clean_tag_type(text: str) -> str:
    return text.strip().lower()


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — DECLARATION / ASSIGNMENT ANNOTATIONS
# ═════════════════════════════════════════════════════════════════════════

def find_inline_annotation(source: SourceFile, node: Node) -> Optional[str]:
    """First ``/*: type */`` on the source lines spanned by *node*."""
    match = INLINE_ANNOTATION_RE.search(source.node_span_text(node))
    return match.group(1) if match else None


def jsdoc_candidates(source: SourceFile, node: Node) -> List[Node]:
    """
    Comments that may carry a JSDoc ``@type`` for *node*: its leading
    comments, then any ``/** … */`` block ending on the line right
    above the node.
    """
    candidates = list(leading_comments(node))
    seen = {(c.start_byte, c.end_byte) for c in candidates}
    previous_line = node_line(node) - 1
    for comment in source.comments:
        if (comment.start_byte, comment.end_byte) in seen:
            continue
        if comment.end_point[0] + 1 != previous_line:
            continue
        if is_block_comment(comment) and comment_body(comment).strip().startswith("*"):
            candidates.append(comment)
            seen.add((comment.start_byte, comment.end_byte))
    return candidates


def find_jsdoc_type(source: SourceFile, node: Node) -> Optional[str]:
    """First ``@type {T}`` among the JSDoc candidates of *node*."""
    for comment in jsdoc_candidates(source, node):
        match = JSDOC_TYPE_RE.search(comment_body(comment))
        if match:
            return match.group(1)
    return None


def find_type_annotation(source: SourceFile, node: Node) -> Optional[Annotation]:
    """
    Declared type of a declarator: the inline form wins over JSDoc.
    ``None`` when the declaration is unannotated.
    """
    raw = find_inline_annotation(source, node)
    if raw is None:
        raw = find_jsdoc_type(source, node)
    if raw is None:
        return None
    return parse_type_annotation(raw)


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — FUNCTION SIGNATURE TAGS
# ═════════════════════════════════════════════════════════════════════════

def extract_function_tags(
    node: Node,
) -> Tuple[List[Tuple[str, str]], Optional[str]]:
    """
    Scan the leading comments of a function declaration (or of a
    function-valued declarator) for ``@param`` / ``@returns`` tags.

    Returns ``(params, return_type)`` where ``params`` lists
    ``(name, declared_type)`` in comment order.  Parameters are not
    validated against the real parameter list.
    """
    params: List[Tuple[str, str]] = []
    return_type: Optional[str] = None
    for comment in leading_comments(node):
        body = comment_body(comment)
        if return_type is None:
            match = JSDOC_RETURNS_RE.search(body)
            if match:
                return_type = _clean_tag_type(match.group(1))
        for match in JSDOC_PARAM_RE.finditer(body):
            params.append((match.group(2), _clean_tag_type(match.group(1))))
    return params, return_type


__all__ = [
    "INLINE_ANNOTATION_RE",
    "JSDOC_TYPE_RE",
    "JSDOC_RETURNS_RE",
    "JSDOC_PARAM_RE",
    "Annotation",
    "parse_type_annotation",
    "find_inline_annotation",
    "jsdoc_candidates",
    "find_jsdoc_type",
    "find_type_annotation",
    "extract_function_tags",
]
