"""
jstype/directives.py
════════════════════

Checking directives, the counterpart of suppression comments in other
linters.

  ``/*: skip */`` (any comment whose trimmed body is ``: skip``)
      the whole file is skipped
  ``/*: skip-remaining */``
      nothing starting after that line is checked

``skip-remaining`` is found by a plain text scan of the source lines,
not through the tree, so it works on any line.  Only the first
occurrence counts.

License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from jstype.ast_helper import Node, comment_body, node_line

SKIP_FILE_DIRECTIVE = ": skip"
SKIP_REMAINING_MARKER = "/*: skip-remaining */"


@dataclass(frozen=True)
class SkipState:
    """
    Directive state of one file.

    Attributes
    ----------
    file_skipped        : a ``: skip`` comment exists
    skip_remaining_line : 1-based line of the first skip-remaining marker
    """
    file_skipped: bool = False
    skip_remaining_line: Optional[int] = None

    def is_cut_off(self, line: int) -> bool:
        """True if checking is disabled for code starting on *line*."""
        return self.skip_remaining_line is not None and line > self.skip_remaining_line

    def allows(self, node: Node) -> bool:
        return not self.is_cut_off(node_line(node))


def has_skip_directive(comments: Iterable[Node]) -> bool:
    return any(comment_body(c).strip() == SKIP_FILE_DIRECTIVE for c in comments)


def find_skip_remaining_line(lines: Sequence[str]) -> Optional[int]:
    for index, text in enumerate(lines):
        if SKIP_REMAINING_MARKER in text:
            return index + 1
    return None


def scan_directives(comments: Iterable[Node], lines: Sequence[str]) -> SkipState:
    """Compute the :class:`SkipState` of a file."""
    return SkipState(
        file_skipped=has_skip_directive(comments),
        skip_remaining_line=find_skip_remaining_line(lines),
    )


__all__ = [
    "SKIP_FILE_DIRECTIVE",
    "SKIP_REMAINING_MARKER",
    "SkipState",
    "has_skip_directive",
    "find_skip_remaining_line",
    "scan_directives",
]
