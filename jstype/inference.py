"""
jstype/inference.py
═══════════════════

Type Inference Engine: maps an expression node to a semantic type.

Rules, in priority order
────────────────────────
  1. ``f(…)`` where ``f`` has a recorded ``@returns`` type → that type
  2. structural mapping over :class:`ExprKind`

         "…"            → string        { … }        → object
         42             → number        [ … ]        → array (*)
         true / false   → boolean       function/=>  → function
         null           → null          void x       → undefined
         name           → tracked inferred type, else reference
         anything else  → unknown

     (*) with an array-suffixed complex declared type, the declared
         string itself is echoed so the matcher can decompose it.

  3. identifiers resolve one level deep: the binding's *recorded*
     inferred type at lookup time.

License: MIT
"""

from __future__ import annotations

from typing import Optional

from jstype.ast_helper import (
    Node,
    callee_name,
    classify_expression,
    identifier_name,
    unwrap_parens,
)
from jstype.bindings import BindingTracker
from jstype.signatures import SignatureRegistry
from jstype.types import ExprKind, SemanticType, is_array_type, is_complex_type

_STRUCTURAL_TYPES = {
    ExprKind.STRING: SemanticType.STRING,
    ExprKind.NUMBER: SemanticType.NUMBER,
    ExprKind.BOOLEAN: SemanticType.BOOLEAN,
    ExprKind.NULL: SemanticType.NULL,
    ExprKind.OBJECT: SemanticType.OBJECT,
    ExprKind.FUNCTION: SemanticType.FUNCTION,
    ExprKind.VOID: SemanticType.UNDEFINED,
}


def literal_type(node: Node) -> str:
    """
    Type of a bare literal, with no tracker or registry lookups.
    Used for array elements.
    """
    kind = classify_expression(node)
    if kind in (ExprKind.STRING, ExprKind.NUMBER, ExprKind.BOOLEAN):
        return _STRUCTURAL_TYPES[kind].value
    return SemanticType.UNKNOWN.value


def infer_type(
    node: Node,
    bindings: BindingTracker,
    signatures: SignatureRegistry,
    declared_type: Optional[str] = None,
) -> str:
    """
    Infer the semantic type of expression *node*.

    Parameters
    ----------
    node          : expression node (parentheses are transparent)
    bindings      : the file's binding tracker, for identifiers
    signatures    : the file's signature registry, for calls
    declared_type : declared type at the checked site; only used to
                    echo array-suffixed complex types for array literals
    """
    node = unwrap_parens(node)
    kind = classify_expression(node)

    if kind is ExprKind.CALL:
        return_type = signatures.return_type_of(callee_name(node))
        if return_type is not None:
            return return_type
        return SemanticType.UNKNOWN.value

    structural = _STRUCTURAL_TYPES.get(kind)
    if structural is not None:
        return structural.value

    if kind is ExprKind.ARRAY:
        if (
            declared_type is not None
            and is_complex_type(declared_type)
            and is_array_type(declared_type)
        ):
            return declared_type
        return SemanticType.ARRAY.value

    if kind is ExprKind.IDENTIFIER:
        resolved = bindings.resolve(identifier_name(node) or "")
        if resolved is not None:
            return resolved
        return SemanticType.REFERENCE.value

    return SemanticType.UNKNOWN.value


__all__ = ["literal_type", "infer_type"]
