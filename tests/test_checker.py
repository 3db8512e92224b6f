# tests/test_checker.py
"""
Tests for the two-pass per-file checker: declarations, assignments,
call sites, directives, aliasing and check counting.
"""

import pytest

from jstype.checker import FileStatus, TypeChecker, check_source_text
from jstype.config import CheckerConfig
from jstype.diagnostics import DiagnosticKind
from jstype.errors import SourceParseError, SourceReadError
from tests.conftest import END_TO_END_JS, PARAMS_JS, SKIP_REMAINING_JS, check


class TestDeclarations:

    def test_matching_literal(self):
        result = check('let name /*: string */ = "Alice";')
        assert result.status is FileStatus.CHECKED
        assert result.diagnostics == []
        assert result.checks_performed == 1

    def test_mismatching_literal(self):
        result = check('let age /*: number */ = "twenty";')
        assert len(result.diagnostics) == 1
        diag = result.diagnostics[0]
        assert diag.kind is DiagnosticKind.DECLARATION
        assert diag.subject == "age"
        assert diag.expected == "number"
        assert diag.found == "string"
        assert str(diag.location) == "test.js:1:5"

    def test_text_output_names_variable(self):
        diag = check('let age /*: number */ = "twenty";').diagnostics[0]
        assert diag.to_text() == (
            "Type mismatch at test.js:1:5:\n"
            "  Variable: age\n"
            '  Expected: number, Found: string ("twenty")'
        )

    def test_declared_type_is_case_insensitive(self):
        assert check('let s /*: String */ = "x";').diagnostics == []

    def test_jsdoc_declaration(self):
        result = check('/** @type {boolean} */\nlet ok = "true";')
        assert [d.found for d in result.diagnostics] == ["string"]
        assert str(result.diagnostics[0].location) == "test.js:2:5"

    def test_declaration_without_initializer_is_ignored(self):
        result = check("let x /*: number */;")
        assert result.checks_performed == 0
        assert result.diagnostics == []

    def test_destructuring_is_ignored(self):
        result = check("let { a } /*: number */ = obj;")
        assert result.checks_performed == 0

    def test_unannotated_declarations_are_not_checked(self):
        result = check('let a = 1;\nlet b = "x";')
        assert result.checks_performed == 0

    def test_column_counts_characters(self):
        result = check('let s = "é"; let n /*: string */ = 2;')
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].location.column == 18

    def test_union_declaration(self):
        assert check("let u /*: string|number */ = 42;").diagnostics == []
        assert len(check("let u /*: string|number */ = true;").diagnostics) == 1

    def test_array_heuristic(self):
        assert check("let xs /*: number[] */ = [];").diagnostics == []
        assert check('let xs /*: number[] */ = [1, 2, "three"];').diagnostics == []
        result = check('let xs /*: number[] */ = ["one", 2];')
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].found == "number[]"

    def test_call_return_type(self):
        src = (
            "/** @returns {string} */\n"
            "function label() { return 'x'; }\n"
            "let n /*: number */ = label();\n"
            "let s /*: string */ = label();\n"
        )
        result = check(src)
        assert [(d.subject, d.found) for d in result.diagnostics] == [("n", "string")]

    def test_unknown_values_mismatch_simple_types(self):
        result = check("let n /*: number */ = a + b;")
        assert [d.found for d in result.diagnostics] == ["unknown"]


class TestAssignments:

    def test_assignment_to_tracked_name(self):
        src = 'let count /*: number */ = 5;\ncount = "ten";'
        result = check(src)
        assert result.checks_performed == 2
        diag = result.diagnostics[0]
        assert diag.kind is DiagnosticKind.ASSIGNMENT
        assert diag.to_text().splitlines()[1] == "  Assignment to: count"
        assert str(diag.location) == "test.js:2:1"

    def test_matching_assignment(self):
        result = check("let count /*: number */ = 5;\ncount = 6;")
        assert result.diagnostics == []
        assert result.checks_performed == 2

    def test_untracked_assignment_is_ignored(self):
        result = check('x = "anything";')
        assert result.checks_performed == 0

    def test_member_assignment_is_ignored(self):
        result = check('let o /*: object */ = {};\no.count = "x";')
        assert result.checks_performed == 1

    def test_assignment_annotation_does_not_change_declared_type(self):
        src = (
            "/** @type {number} */\n"
            "let count = 5;\n"
            "/** @type {string} */\n"
            'count = "10";\n'
        )
        result = check(src)
        assert [d.expected for d in result.diagnostics] == ["number"]

    def test_failed_assignment_keeps_previous_inferred_type(self):
        src = (
            "let u /*: string|number */ = 1;\n"
            "u = true;\n"
            "let v /*: number */ = u;\n"
        )
        result = check(src)
        assert [d.subject for d in result.diagnostics] == ["u"]

    def test_matching_assignment_refreshes_inferred_type(self):
        src = (
            'let u /*: string|number */ = "s";\n'
            "u = 1;\n"
            "let v /*: number */ = u;\n"
        )
        assert check(src).diagnostics == []

    def test_array_assignment_uses_declared_context(self):
        src = 'let xs /*: string[] */ = [];\nxs = ["a"];\nxs = [1];'
        result = check(src)
        assert [str(d.location) for d in result.diagnostics] == ["test.js:3:1"]

    def test_compound_assignment_is_checked(self):
        result = check('let n /*: number */ = 1;\nn += "s";')
        assert result.checks_performed == 2
        assert len(result.diagnostics) == 1
        diag = result.diagnostics[0]
        assert diag.kind is DiagnosticKind.ASSIGNMENT
        assert (diag.subject, diag.expected, diag.found) == ("n", "number", "string")
        assert str(diag.location) == "test.js:2:1"

    @pytest.mark.parametrize("op", ["-=", "*=", "||=", "??="])
    def test_other_compound_operators(self, op):
        result = check(f'let n /*: number */ = 1;\nn {op} 2;\nn {op} "s";')
        assert result.checks_performed == 3
        assert [str(d.location) for d in result.diagnostics] == ["test.js:3:1"]


class TestAliasing:

    def test_alias_inherits_inferred_type(self):
        src = 'let a /*: number */ = 5;\nlet b = a;\nb = "x";'
        result = check(src)
        assert len(result.diagnostics) == 1
        diag = result.diagnostics[0]
        assert diag.subject == "b"
        assert diag.expected == "number"
        assert diag.found == "string"

    def test_alias_of_untracked_name_is_not_tracked(self):
        result = check('let b = a;\nb = "x";')
        assert result.diagnostics == []
        assert result.checks_performed == 0

    def test_identifier_initializer_with_annotation(self):
        src = 'let a /*: string */ = "s";\nlet b /*: number */ = a;'
        result = check(src)
        assert [(d.subject, d.found) for d in result.diagnostics] == [("b", "string")]

    def test_untracked_identifier_is_reference(self):
        result = check("let b /*: number */ = elsewhere;")
        assert result.diagnostics[0].found == "reference"


class TestInferMode:

    def test_unannotated_declaration_is_tracked(self):
        src = 'let n = 1;\nn = "one";'
        assert check(src).diagnostics == []
        result = check(src, infer=True)
        assert [(d.subject, d.expected, d.found) for d in result.diagnostics] == [
            ("n", "number", "string"),
        ]

    def test_unknown_and_reference_types_are_tracked(self):
        src = 'let x = foo();\nx = 5;\nlet r = other;\nr = 1;'
        assert check(src).checks_performed == 0
        result = check(src, infer=True)
        assert result.checks_performed == 2
        assert [(d.subject, d.expected, d.found) for d in result.diagnostics] == [
            ("x", "unknown", "number"),
            ("r", "reference", "number"),
        ]


class TestCallSites:

    def test_argument_mismatch(self):
        result = check(PARAMS_JS)
        assert len(result.diagnostics) == 1
        diag = result.diagnostics[0]
        assert diag.kind is DiagnosticKind.ARGUMENT
        assert diag.subject == "a"
        assert diag.expected == "number"
        assert diag.found == "string"
        assert str(diag.location) == "test.js:10:5"

    def test_each_declared_param_counts_as_a_check(self):
        assert check(PARAMS_JS).checks_performed == 2

    def test_missing_arguments_are_not_reported(self):
        src = PARAMS_JS.replace('add("2", 3);', "add(1);")
        result = check(src)
        assert result.diagnostics == []
        assert result.checks_performed == 2

    def test_extra_arguments_are_ignored(self):
        src = PARAMS_JS.replace('add("2", 3);', 'add(1, 2, "three");')
        assert check(src).diagnostics == []

    def test_call_before_declaration(self):
        src = (
            'greet(42);\n'
            '/** @param {string} who */\n'
            'function greet(who) { return who; }\n'
        )
        result = check(src)
        assert [d.subject for d in result.diagnostics] == ["who"]

    def test_arguments_compared_strictly(self):
        src = (
            "/** @param {number[]} xs */\n"
            "function sum(xs) { return 0; }\n"
            "sum([1, 2]);\n"
        )
        assert [d.found for d in check(src).diagnostics] == ["array"]

    def test_tracked_identifier_argument(self):
        src = PARAMS_JS.replace('add("2", 3);', 'let s /*: string */ = "s";\nadd(1, s);')
        result = check(src)
        assert [(d.subject, d.found) for d in result.diagnostics] == [("b", "string")]

    def test_function_without_params_is_not_checked(self):
        src = "/** @returns {number} */\nfunction one() { return 1; }\none();"
        assert check(src).checks_performed == 0


class TestDirectives:

    def test_file_skip(self):
        result = check('// : skip\nlet n /*: number */ = "x";')
        assert result.status is FileStatus.SKIPPED
        assert result.diagnostics == []
        assert result.checks_performed == 0

    def test_skip_remaining_cutoff(self):
        result = check(SKIP_REMAINING_JS)
        assert [d.subject for d in result.diagnostics] == ["a"]
        assert result.checks_performed == 1

    def test_skip_remaining_applies_to_assignments_and_calls(self):
        src = PARAMS_JS.replace(
            'add("2", 3);',
            'let n /*: number */ = 1;\n/*: skip-remaining */\nn = "s";\nadd("2", 3);',
        )
        result = check(src)
        assert result.diagnostics == []
        assert result.checks_performed == 1

    def test_signatures_after_cutoff_still_collected(self):
        src = (
            "let n /*: number */ = make();\n"
            "/*: skip-remaining */\n"
            "/** @returns {string} */\n"
            "function make() { return 'x'; }\n"
        )
        assert [d.found for d in check(src).diagnostics] == ["string"]


class TestEndToEnd:

    def test_ten_declarations_two_mismatches(self):
        result = check(END_TO_END_JS)
        assert result.checks_performed >= 10
        assert [d.subject for d in result.diagnostics] == ["age", "isValid"]

    def test_module_level_helper(self):
        result = check_source_text('let n /*: number */ = "x";', "m.js")
        assert result.file == "m.js"
        assert result.error_count == 1
        assert not result.ok

    def test_files_do_not_share_state(self, checker):
        checker.check_text("let a /*: number */ = 1;", "one.js")
        result = checker.check_text('a = "s";', "two.js")
        assert result.diagnostics == []
        assert result.checks_performed == 0

    def test_report_entry(self):
        entry = check('let n /*: number */ = "x";').to_report_entry()
        assert entry == {
            "file": "test.js",
            "errors": [
                {"loc": "test.js:1:5", "variable": "n", "expected": "number", "found": "string"},
            ],
        }


class TestFailures:

    def test_syntax_error_raises(self, checker):
        with pytest.raises(SourceParseError) as info:
            checker.check_text("let = ;", "broken.js")
        assert info.value.path == "broken.js"
        assert info.value.line == 1

    def test_missing_file_raises(self, checker, tmp_path):
        with pytest.raises(SourceReadError):
            checker.check_path(tmp_path / "absent.js")

    def test_check_path(self, tmp_path):
        path = tmp_path / "a.js"
        path.write_text('let n /*: number */ = "x";\n', encoding="utf-8")
        result = TypeChecker(CheckerConfig()).check_path(path, display_path="a.js")
        assert result.file == "a.js"
        assert result.error_count == 1
