"""
jstype/types.py
═══════════════

Semantic type vocabulary shared by the inference engine, the
compatibility matcher and the binding tracker.

Type representation
───────────────────
A semantic type is either one member of the closed set below, or a raw
declared-type string when the declaration is *complex* (array-suffix or
union composites such as ``"number[]"`` or ``"string|number"``)::

    τ ::= string | number | boolean | null | undefined
        | object | array | function
        | reference                   (identifier we know nothing about)
        | unknown                     (expression shape not recognized)
        | "<complex declared string>"

``SemanticType`` members subclass ``str`` so both variants compare and
serialize the same way.

License: MIT
"""

from __future__ import annotations

from enum import Enum, auto
from typing import FrozenSet, List


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — SEMANTIC TYPES
# ═════════════════════════════════════════════════════════════════════════

class SemanticType(str, Enum):
    """The closed set of base semantic types."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    OBJECT = "object"
    ARRAY = "array"
    FUNCTION = "function"
    REFERENCE = "reference"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


#: Characters whose presence makes a declared type complex.
COMPLEX_TYPE_CHARS: FrozenSet[str] = frozenset("[]<>|&")

ARRAY_SUFFIX = "[]"
UNION_SEPARATOR = "|"


def is_complex_type(type_text: str) -> bool:
    """True if *type_text* contains any of ``[ ] < > | &``."""
    return any(ch in COMPLEX_TYPE_CHARS for ch in type_text)


def is_array_type(type_text: str) -> bool:
    """True for array-suffixed composites such as ``number[]``."""
    return type_text.endswith(ARRAY_SUFFIX)


def array_element_type(type_text: str) -> str:
    """``"number[]"`` → ``"number"``."""
    return type_text[: -len(ARRAY_SUFFIX)]


def is_union_type(type_text: str) -> bool:
    return UNION_SEPARATOR in type_text


def union_members(type_text: str) -> List[str]:
    """Split a union into its member type names (whitespace stripped)."""
    return [member.strip() for member in type_text.split(UNION_SEPARATOR)]


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — EXPRESSION KINDS
# ═════════════════════════════════════════════════════════════════════════

class ExprKind(Enum):
    """
    Closed enumeration of the expression shapes the inference engine
    distinguishes.  Everything else falls into ``OTHER``.
    """
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    OBJECT = auto()
    ARRAY = auto()
    FUNCTION = auto()
    IDENTIFIER = auto()
    VOID = auto()
    CALL = auto()
    OTHER = auto()


__all__ = [
    "SemanticType",
    "ExprKind",
    "COMPLEX_TYPE_CHARS",
    "ARRAY_SUFFIX",
    "UNION_SEPARATOR",
    "is_complex_type",
    "is_array_type",
    "array_element_type",
    "is_union_type",
    "union_members",
]
