"""
jstype/signatures.py
════════════════════

Function Signature Registry and the pre-pass that fills it.

Signatures come from JSDoc on

  * function declarations         ``function add(a, b) {…}``
  * function-valued declarators   ``const add = (a, b) => …``

The registry must be complete before the main pass starts because a
call may appear lexically before the function it calls.  It is
read-only afterwards.

License: MIT
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from jstype.annotations import extract_function_tags
from jstype.ast_helper import (
    FUNCTION_DECLARATION_TYPES,
    VARIABLE_DECLARATOR,
    Node,
    declarator_name,
    declarator_value,
    function_name,
    is_function_value,
    iter_preorder,
)

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParamSignature:
    name: str
    declared_type: str


@dataclass
class FunctionSignature:
    """
    Declared parameter and return types of one function.

    ``params`` keeps ``@param`` tag order as written in the comment.
    """
    name: str
    params: List[ParamSignature] = field(default_factory=list)
    return_type: Optional[str] = None

    @property
    def has_params(self) -> bool:
        return bool(self.params)


class SignatureRegistry:
    """Per-file mapping from function name to :class:`FunctionSignature`."""

    def __init__(self) -> None:
        self._signatures: Dict[str, FunctionSignature] = {}

    def register(self, signature: FunctionSignature) -> None:
        self._signatures[signature.name] = signature

    def get(self, name: Optional[str]) -> Optional[FunctionSignature]:
        if name is None:
            return None
        return self._signatures.get(name)

    def return_type_of(self, name: Optional[str]) -> Optional[str]:
        signature = self.get(name)
        return signature.return_type if signature is not None else None

    def __contains__(self, name: object) -> bool:
        return name in self._signatures

    def __iter__(self) -> Iterator[FunctionSignature]:
        return iter(list(self._signatures.values()))

    def __len__(self) -> int:
        return len(self._signatures)


def signature_from_node(name: str, node: Node) -> FunctionSignature:
    """Build a signature for *name* from the JSDoc leading *node*."""
    params, return_type = extract_function_tags(node)
    return FunctionSignature(
        name=name,
        params=[ParamSignature(pname, ptype) for pname, ptype in params],
        return_type=return_type,
    )


def collect_signatures(root: Node) -> SignatureRegistry:
    """
    Pre-pass: walk the whole tree and register every named function
    declaration and function-valued declarator.
    """
    registry = SignatureRegistry()
    for node in iter_preorder(root):
        if node.type in FUNCTION_DECLARATION_TYPES:
            name = function_name(node)
            if name:
                registry.register(signature_from_node(name, node))
        elif node.type == VARIABLE_DECLARATOR:
            name = declarator_name(node)
            if name and is_function_value(declarator_value(node)):
                registry.register(signature_from_node(name, node))
    for signature in registry:
        _log.debug(
            "Signature %s(%s) -> %s",
            signature.name,
            ", ".join(f"{p.name}: {p.declared_type}" for p in signature.params),
            signature.return_type or "?",
        )
    return registry


__all__ = [
    "ParamSignature",
    "FunctionSignature",
    "SignatureRegistry",
    "signature_from_node",
    "collect_signatures",
]
