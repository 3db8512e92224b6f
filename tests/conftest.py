# tests/conftest.py
"""
Shared helpers for the jstype test-suite: parse/check source snippets,
locate nodes, and lay out JavaScript trees on disk.
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from jstype.ast_helper import iter_preorder
from jstype.checker import FileCheckResult, TypeChecker
from jstype.config import CheckerConfig
from jstype.parsing import SourceFile


# ─── Source snippets ─────────────────────────────────────────────────────

END_TO_END_JS = '''\
/** @type {string} */
let name = "Alice";

/** @type {number} */
let age = "twenty";

/** @type {array} */
let arr = [1, 2, 3];

/** @type {object} */
let person = { name: "Bob", age: 30 };

/** @type {function} */
let greeting = () => console.log("Hello");

/** @type {boolean} */
let isValid = "true";

/** @type {null} */
let empty = null;

/** @type {undefined} */
let none = void 0;

let count /*: number */ = 5;
let tags /*: string[] */ = ["a", "b"];
'''

PARAMS_JS = '''\
/**
 * @param {number} a
 * @param {number} b
 * @returns {number}
 */
function add(a, b) {
  return a + b;
}

add("2", 3);
'''

SKIP_REMAINING_JS = '''\
let a /*: number */ = "early";
/*: skip-remaining */
let b /*: number */ = "late";
'''


# ─── Helpers ─────────────────────────────────────────────────────────────

def parse(src: str, path: str = "test.js") -> SourceFile:
    return SourceFile.from_text(src, path=path)


def check(src: str, infer: bool = False, path: str = "test.js") -> FileCheckResult:
    """Check *src* as a single file and return its result."""
    return TypeChecker(CheckerConfig(infer=infer)).check_text(src, path=path)


def find_nodes(source: SourceFile, node_type: str) -> List:
    return [n for n in iter_preorder(source.root) if n.type == node_type]


def first_node(source: SourceFile, node_type: str):
    nodes = find_nodes(source, node_type)
    assert nodes, f"no {node_type} in source"
    return nodes[0]


def declarator(source: SourceFile, name: Optional[str] = None):
    """First variable_declarator (optionally the one binding *name*)."""
    for node in find_nodes(source, "variable_declarator"):
        if name is None or node.child_by_field_name("name").text.decode() == name:
            return node
    raise AssertionError(f"no declarator for {name!r}")


def value_of(src: str):
    """Parse ``let v = <src>;`` and return the initializer node."""
    source = parse(f"let v = {src};")
    return declarator(source).child_by_field_name("value")


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Create *files* (relative path → content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


# ─── Fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def checker() -> TypeChecker:
    return TypeChecker()


@pytest.fixture
def infer_checker() -> TypeChecker:
    return TypeChecker(CheckerConfig(infer=True))


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    """A small project: one clean file, one with a mismatch, noise dirs."""
    return write_tree(tmp_path, {
        "src/ok.js": 'let n /*: number */ = 1;\n',
        "src/bad.js": 'let s /*: string */ = 2;\n',
        "src/readme.md": "not javascript\n",
        "node_modules/lib/index.js": 'let x /*: number */ = "x";\n',
        ".cache/gen.js": 'let y /*: number */ = "y";\n',
    })
