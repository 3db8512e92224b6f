"""
jstype/matching.py
══════════════════

Type Compatibility Matcher: does an inferred type satisfy a declared
one?

  simple     declared == inferred
  T[]        inferred is an array; an empty literal matches; otherwise
             only the FIRST element's literal type is compared with T
  A|B|…      inferred is one of the members
  other      never matches (``<…>`` and ``&`` are not understood)

The first-element rule is a heuristic: ``[1, "two"]`` satisfies
``number[]``.  Callers rely on that exact behavior.

License: MIT
"""

from __future__ import annotations

from jstype.ast_helper import Node, array_elements, classify_expression
from jstype.inference import literal_type
from jstype.types import (
    ExprKind,
    SemanticType,
    array_element_type,
    is_array_type,
    is_union_type,
    union_members,
)


def _matches_array(declared: str, inferred: str, node: Node) -> bool:
    if inferred not in (SemanticType.ARRAY.value, declared):
        return False
    if classify_expression(node) is not ExprKind.ARRAY:
        # Arrays reached through a name or a call carry no elements to inspect.
        return True
    elements = array_elements(node)
    if not elements:
        return True
    return array_element_type(declared) == literal_type(elements[0])


def is_type_match(
    declared: str,
    inferred: str,
    node: Node,
    is_complex: bool,
) -> bool:
    """
    Decide whether *inferred* satisfies *declared*.

    Parameters
    ----------
    declared   : lower-cased declared type
    inferred   : type produced by :func:`jstype.inference.infer_type`
    node       : the checked expression (array elements are read from it)
    is_complex : whether *declared* is an array/union composite
    """
    if not is_complex:
        return declared == inferred
    if is_array_type(declared):
        return _matches_array(declared, inferred, node)
    if is_union_type(declared):
        return inferred in union_members(declared)
    return False


__all__ = ["is_type_match"]
