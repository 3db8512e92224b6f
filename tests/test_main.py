# tests/test_main.py
"""
Tests for the command-line interface: output formats, reports and
exit codes.
"""

import json

import pytest

from jstype import __version__
from jstype.main import EXIT_ERROR, EXIT_INFRA, EXIT_OK, main
from tests.conftest import write_tree


class TestExitCodes:

    def test_clean_file(self, tmp_path, capsys):
        write_tree(tmp_path, {"ok.js": "let n /*: number */ = 1;\n"})
        assert main([str(tmp_path / "ok.js")]) == EXIT_OK
        out = capsys.readouterr().out
        assert "successfully! (1 type checks performed)" in out

    def test_mismatch(self, js_project, capsys):
        assert main([str(js_project)]) == EXIT_ERROR
        out = capsys.readouterr().out
        assert "Type mismatch at" in out
        assert "  Variable: s" in out
        assert "  Expected: string, Found: number (2)" in out
        assert "Found 1 type error(s) in" in out

    def test_parse_failure_only(self, tmp_path, capsys):
        write_tree(tmp_path, {"broken.js": "let = ;\n"})
        assert main([str(tmp_path)]) == EXIT_INFRA
        assert "could not check" in capsys.readouterr().out

    def test_mismatch_wins_over_parse_failure(self, tmp_path):
        write_tree(tmp_path, {
            "a.js": "let = ;\n",
            "b.js": 'let n /*: number */ = "x";\n',
        })
        assert main([str(tmp_path)]) == EXIT_ERROR

    def test_no_javascript_files(self, tmp_path):
        write_tree(tmp_path, {"notes.txt": "hello\n"})
        assert main([str(tmp_path)]) == EXIT_INFRA

    def test_no_arguments(self, capsys):
        assert main([]) == EXIT_INFRA

    def test_version(self, capsys):
        assert main(["--version"]) == EXIT_OK
        assert __version__ in capsys.readouterr().out


class TestOptions:

    def test_skip_message(self, tmp_path, capsys):
        write_tree(tmp_path, {"s.js": "// : skip\nlet n /*: number */ = 'x';\n"})
        assert main([str(tmp_path / "s.js")]) == EXIT_OK
        assert "(: skip directive)" in capsys.readouterr().out

    def test_infer_flag(self, tmp_path):
        write_tree(tmp_path, {"i.js": 'let n = 1;\nn = "one";\n'})
        assert main([str(tmp_path / "i.js")]) == EXIT_OK
        assert main([str(tmp_path / "i.js"), "--infer"]) == EXIT_ERROR

    def test_exclude_flag(self, tmp_path):
        write_tree(tmp_path, {
            "ok.js": "let n /*: number */ = 1;\n",
            "legacy/bad.js": 'let n /*: number */ = "x";\n',
        })
        assert main([str(tmp_path)]) == EXIT_ERROR
        assert main([str(tmp_path), "--exclude", "legacy"]) == EXIT_OK

    def test_config_file(self, tmp_path):
        write_tree(tmp_path, {
            "i.js": 'let n = 1;\nn = "one";\n',
            "jstype.json": json.dumps({"infer": True}),
        })
        args = [str(tmp_path / "i.js"), "--config", str(tmp_path / "jstype.json")]
        assert main(args) == EXIT_ERROR

    def test_bad_config_file(self, tmp_path):
        write_tree(tmp_path, {"ok.js": "", "bad.json": '{"speed": 9}'})
        args = [str(tmp_path / "ok.js"), "--config", str(tmp_path / "bad.json")]
        assert main(args) == EXIT_INFRA

    def test_jobs_flag(self, js_project):
        assert main([str(js_project), "--jobs", "2"]) == EXIT_ERROR


class TestFormats:

    def test_json_format(self, js_project, capsys):
        main([str(js_project), "--format", "json"])
        report = json.loads(capsys.readouterr().out)
        assert len(report) == 1
        assert report[0]["errors"][0]["expected"] == "string"

    def test_gcc_format(self, js_project, capsys):
        main([str(js_project), "--format", "gcc"])
        out = capsys.readouterr().out.strip()
        assert out.endswith("error: variable 's': expected string, found number (2) [typeMismatch]")

    def test_report_file(self, js_project, tmp_path, capsys):
        report_path = tmp_path / "out" / "report.json"
        assert main([str(js_project), "--report", str(report_path)]) == EXIT_ERROR
        report = json.loads(report_path.read_text(encoding="utf-8"))
        entry = report[0]
        assert entry["file"].endswith("bad.js")
        assert set(entry["errors"][0]) == {"loc", "variable", "expected", "found"}

    def test_report_file_empty_when_clean(self, tmp_path):
        write_tree(tmp_path, {"ok.js": "let n /*: number */ = 1;\n"})
        report_path = tmp_path / "report.json"
        assert main([str(tmp_path / "ok.js"), "--report", str(report_path)]) == EXIT_OK
        assert json.loads(report_path.read_text(encoding="utf-8")) == []
