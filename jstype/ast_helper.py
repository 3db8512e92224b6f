#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
jstype/ast_helper.py
════════════════════

Traversal, querying and classification utilities for tree-sitter
JavaScript syntax trees.

    ┌─────────────────────────────────────────────────────────────────┐
    │  Safe Accessors                                                 │
    │    • 1-based start lines, node text                             │
    │    • named children with comment extras filtered out            │
    ├─────────────────────────────────────────────────────────────────┤
    │  Traversal                                                      │
    │    • pre-order iteration (source order)                         │
    │    • first syntax error lookup                                  │
    ├─────────────────────────────────────────────────────────────────┤
    │  Expression Classification                                      │
    │    • ExprKind dispatch for the inference engine                 │
    │    • call / array / declarator / assignment structure           │
    ├─────────────────────────────────────────────────────────────────┤
    │  Comments                                                       │
    │    • leading comments of a node                                 │
    │    • comment bodies without delimiters                          │
    └─────────────────────────────────────────────────────────────────┘

All functions are read-only and accept ``None`` where a node may be
absent, returning an empty/neutral result.

License: MIT
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterator, List, Optional

from jstype.types import ExprKind

# tree_sitter.Node; kept as Any so helpers also accept test doubles.
Node = Any


# ═══════════════════════════════════════════════════════════════════════════
#  CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════

COMMENT = "comment"
ERROR = "ERROR"

VARIABLE_DECLARATOR = "variable_declarator"
ASSIGNMENT_EXPRESSION = "assignment_expression"

#: Plain and compound (`+=`, `||=`, ...) assignments.
ASSIGNMENT_TYPES: FrozenSet[str] = frozenset({
    ASSIGNMENT_EXPRESSION,
    "augmented_assignment_expression",
})

CALL_EXPRESSION = "call_expression"

FUNCTION_DECLARATION_TYPES: FrozenSet[str] = frozenset({
    "function_declaration",
    "generator_function_declaration",
})

# "function" is the pre-0.21 grammar name of function_expression.
FUNCTION_EXPRESSION_TYPES: FrozenSet[str] = frozenset({
    "function_expression",
    "function",
    "arrow_function",
    "generator_function",
})

#: Statements whose leading comments belong to their first child.
COMMENT_WRAPPER_TYPES: FrozenSet[str] = frozenset({
    "lexical_declaration",
    "variable_declaration",
    "export_statement",
    "expression_statement",
})

_KIND_BY_NODE_TYPE = {
    "string": ExprKind.STRING,
    "number": ExprKind.NUMBER,
    "true": ExprKind.BOOLEAN,
    "false": ExprKind.BOOLEAN,
    "null": ExprKind.NULL,
    "object": ExprKind.OBJECT,
    "array": ExprKind.ARRAY,
    "identifier": ExprKind.IDENTIFIER,
    # ``undefined`` is a plain identifier in JavaScript.
    "undefined": ExprKind.IDENTIFIER,
    CALL_EXPRESSION: ExprKind.CALL,
}


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — SAFE ACCESSORS
# ═══════════════════════════════════════════════════════════════════════════

def node_line(node: Node) -> int:
    """1-based line on which *node* starts (0 for ``None``)."""
    if node is None:
        return 0
    return node.start_point[0] + 1


def node_text(node: Node) -> str:
    """Source text covered by *node*."""
    if node is None:
        return ""
    text = node.text
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text or ""


def field(node: Node, name: str) -> Optional[Node]:
    """Child stored under grammar field *name*, or ``None``."""
    if node is None:
        return None
    return node.child_by_field_name(name)


def named_children(node: Node) -> List[Node]:
    """Named children of *node* with comment extras removed."""
    if node is None:
        return []
    return [child for child in node.named_children if child.type != COMMENT]


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — TRAVERSAL
# ═══════════════════════════════════════════════════════════════════════════

def iter_preorder(root: Node) -> Iterator[Node]:
    """
    Yield every node of the subtree rooted at *root* in pre-order,
    which is source order for tree-sitter trees.
    """
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_comments(root: Node) -> Iterator[Node]:
    """Yield every comment node under *root* in source order."""
    for node in iter_preorder(root):
        if node.type == COMMENT:
            yield node


def find_syntax_error(root: Node) -> Optional[Node]:
    """First ``ERROR`` or missing node under *root*, or ``None``."""
    if root is None or not root.has_error:
        return None
    for node in iter_preorder(root):
        if node.type == ERROR or node.is_missing:
            return node
    return root


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — EXPRESSION CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════

def unwrap_parens(node: Node) -> Node:
    """Strip any number of enclosing parentheses."""
    while node is not None and node.type == "parenthesized_expression":
        inner = named_children(node)
        if not inner:
            break
        node = inner[0]
    return node


def classify_expression(node: Node) -> ExprKind:
    """Map an expression node to its :class:`ExprKind`."""
    node = unwrap_parens(node)
    if node is None:
        return ExprKind.OTHER
    kind = _KIND_BY_NODE_TYPE.get(node.type)
    if kind is not None:
        return kind
    if node.type in FUNCTION_EXPRESSION_TYPES:
        return ExprKind.FUNCTION
    if node.type == "unary_expression":
        operator = field(node, "operator")
        if operator is not None and operator.type == "void":
            return ExprKind.VOID
    return ExprKind.OTHER


def identifier_name(node: Node) -> Optional[str]:
    """Name of an identifier node (parentheses allowed), else ``None``."""
    node = unwrap_parens(node)
    if classify_expression(node) is ExprKind.IDENTIFIER:
        return node_text(node)
    return None


def callee_name(call: Node) -> Optional[str]:
    """Name of a call's callee when it is a bare identifier."""
    return identifier_name(field(call, "function"))


def call_arguments(call: Node) -> List[Node]:
    """Positional argument expressions of a call, in order."""
    return named_children(field(call, "arguments"))


def array_elements(node: Node) -> List[Node]:
    """Element expressions of an array literal (holes are skipped)."""
    node = unwrap_parens(node)
    if node is None or node.type != "array":
        return []
    return named_children(node)


def is_function_value(node: Node) -> bool:
    return classify_expression(node) is ExprKind.FUNCTION


def declarator_name(declarator: Node) -> Optional[str]:
    """Bound name of a declarator; ``None`` for destructuring patterns."""
    name = field(declarator, "name")
    if name is not None and name.type == "identifier":
        return node_text(name)
    return None


def declarator_value(declarator: Node) -> Optional[Node]:
    return field(declarator, "value")


def assignment_target(assignment: Node) -> Optional[str]:
    """Name assigned by ``name = expr`` or ``name op= expr``; ``None`` for member targets."""
    left = field(assignment, "left")
    if left is not None and left.type == "identifier":
        return node_text(left)
    return None


def function_name(node: Node) -> Optional[str]:
    name = field(node, "name")
    return node_text(name) if name is not None else None


# ═══════════════════════════════════════════════════════════════════════════
#  PART 4 — COMMENTS
# ═══════════════════════════════════════════════════════════════════════════

def is_block_comment(comment: Node) -> bool:
    return node_text(comment).startswith("/*")


def comment_body(comment: Node) -> str:
    """Comment text without its ``/* */`` or ``//`` delimiters."""
    text = node_text(comment)
    if text.startswith("/*"):
        text = text[2:]
        if text.endswith("*/"):
            text = text[:-2]
        return text
    if text.startswith("//"):
        return text[2:]
    return text


def _first_named_child(node: Node) -> Optional[Node]:
    children = named_children(node)
    return children[0] if children else None


def leading_comments(node: Node) -> List[Node]:
    """
    Comments written directly before *node*, in source order.

    A node that opens a declaration, export or expression statement
    inherits the comments preceding that statement.  A comment starting
    on the line where the previous statement ends trails that statement
    and is not included.
    """
    target = node
    while target is not None:
        found: List[Node] = []
        sibling = target.prev_sibling
        while sibling is not None and sibling.type == COMMENT:
            found.append(sibling)
            sibling = sibling.prev_sibling
        if found and sibling is not None and sibling.is_named:
            ends_on = sibling.end_point[0]
            found = [c for c in found if c.start_point[0] != ends_on]
        if found:
            found.reverse()
            return found
        parent = target.parent
        if (
            parent is not None
            and parent.type in COMMENT_WRAPPER_TYPES
            and _first_named_child(parent) == target
        ):
            target = parent
            continue
        break
    return []


__all__ = [
    "Node",
    "VARIABLE_DECLARATOR",
    "ASSIGNMENT_EXPRESSION",
    "ASSIGNMENT_TYPES",
    "CALL_EXPRESSION",
    "FUNCTION_DECLARATION_TYPES",
    "FUNCTION_EXPRESSION_TYPES",
    "node_line",
    "node_text",
    "field",
    "named_children",
    "iter_preorder",
    "iter_comments",
    "find_syntax_error",
    "unwrap_parens",
    "classify_expression",
    "identifier_name",
    "callee_name",
    "call_arguments",
    "array_elements",
    "is_function_value",
    "declarator_name",
    "declarator_value",
    "assignment_target",
    "function_name",
    "is_block_comment",
    "comment_body",
    "leading_comments",
]
