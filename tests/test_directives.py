# tests/test_directives.py
"""
Tests for ``: skip`` and ``/*: skip-remaining */`` directives.
"""

from jstype.directives import (
    SkipState,
    find_skip_remaining_line,
    has_skip_directive,
    scan_directives,
)
from tests.conftest import parse


class TestSkipFile:

    def test_line_comment(self):
        assert has_skip_directive(parse("// : skip\nlet a = 1;").comments)

    def test_block_comment_with_padding(self):
        assert has_skip_directive(parse("let a = 1;\n/*   : skip   */").comments)

    def test_other_text_does_not_skip(self):
        assert not has_skip_directive(parse("// : skip this later\nlet a = 1;").comments)
        assert not has_skip_directive(parse("// skip\nlet a = 1;").comments)

    def test_skip_remaining_is_not_file_skip(self):
        assert not has_skip_directive(parse("/*: skip-remaining */\nlet a = 1;").comments)


class TestSkipRemaining:

    def test_first_marker_line(self):
        lines = ["let a = 1;", "/*: skip-remaining */", "x", "/*: skip-remaining */"]
        assert find_skip_remaining_line(lines) == 2

    def test_found_by_text_scan_inside_strings(self):
        lines = ['let s = "/*: skip-remaining */";', "let b = 2;"]
        assert find_skip_remaining_line(lines) == 1

    def test_no_marker(self):
        assert find_skip_remaining_line(["let a = 1;"]) is None


class TestSkipState:

    def test_default_allows_everything(self):
        state = SkipState()
        assert not state.is_cut_off(10_000)

    def test_cut_off_after_threshold(self):
        state = SkipState(skip_remaining_line=3)
        assert not state.is_cut_off(3)
        assert state.is_cut_off(4)

    def test_allows_node(self):
        source = parse("let a = 1;\n/*: skip-remaining */\nlet b = 2;")
        state = scan_directives(source.comments, source.lines)
        first, second = source.root.named_children[0], source.root.named_children[2]
        assert state.allows(first)
        assert not state.allows(second)
