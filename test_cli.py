"""Tests for the jsoncompare command line."""

import json

import pytest
from jsoncompare import FileTemplateRepository
from jsoncompare.cli import EXIT_DIFFERENT, EXIT_EQUAL, EXIT_INVALID, main


@pytest.fixture
def run(tmp_path):
    """Run the CLI against an isolated config and template store."""
    base = ["-c", str(tmp_path / "config.yaml"), "--templates", str(tmp_path / "templates.yaml")]

    def _run(*args):
        return main(base + [str(a) for a in args])

    return _run


@pytest.fixture
def write(tmp_path):
    """Write a file into the temporary directory."""
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestCompareCommand:
    """Test the compare command."""

    def test_equal(self, run, write, capsys):
        """Test comparing equal files."""
        first = write("a.json", '{"a": 1}')
        second = write("b.json", '{"a": 1}')

        assert run("compare", first, second) == EXIT_EQUAL
        assert "equal" in capsys.readouterr().out

    def test_different(self, run, write, capsys):
        """Test comparing different files."""
        first = write("a.json", '{"a": 1, "b": 2}')
        second = write("b.json", '{"a": 1, "b": 3}')

        assert run("compare", first, second) == EXIT_DIFFERENT
        out = capsys.readouterr().out
        assert "Found 1 difference(s):" in out
        assert "b: Value mismatch - 2 vs 3" in out

    def test_exclude(self, run, write):
        """Test excluding a field from the command line."""
        first = write("a.json", '{"a": 1, "ts": 2}')
        second = write("b.json", '{"a": 1, "ts": 3}')
        assert run("compare", first, second, "-x", "ts") == EXIT_EQUAL

    def test_invalid_input_blocks_compare(self, run, write, capsys):
        """Test that an invalid file blocks the comparison."""
        first = write("a.json", '{a: 1}')
        second = write("b.json", '{"a": 1}')

        assert run("compare", first, second) == EXIT_INVALID
        assert "Line 1, Column 2: " in capsys.readouterr().err

    def test_empty_input_blocks_compare(self, run, write, capsys):
        """Test that an empty file blocks the comparison."""
        first = write("a.json", '  ')
        second = write("b.json", '{}')

        assert run("compare", first, second) == EXIT_INVALID
        assert "Empty input" in capsys.readouterr().err

    def test_missing_file(self, run, tmp_path, capsys):
        """Test that a missing file is reported."""
        assert run("compare", tmp_path / "nope.json", tmp_path / "nope2.json") == EXIT_INVALID
        assert "File not found" in capsys.readouterr().err

    def test_report_file(self, run, write, tmp_path):
        """Test writing the JSON report file."""
        first = write("a.json", '{"a": [1, 2]}')
        second = write("b.json", '{"a": [1]}')
        report = tmp_path / "report.json"

        assert run("compare", first, second, "-q", "-x", "z", "-r", report) == EXIT_DIFFERENT
        assert json.loads(report.read_text()) == {
            "is_equal": False,
            "differences": [
                "a: Array length mismatch - 2 vs 1",
                "a[1]: Type mismatch - number vs undefined",
            ],
            "excluded_fields": ["z"],
        }

    def test_config_exclusions(self, run, write):
        """Test exclusions taken from the config file."""
        write("config.yaml", "excluded_fields: [ts]\n")
        first = write("a.json", '{"ts": 1}')
        second = write("b.json", '{"ts": 2}')
        assert run("compare", first, second) == EXIT_EQUAL

    def test_bad_config(self, run, write, capsys):
        """Test that a bad config file is reported."""
        write("config.yaml", "colour: blue\n")
        first = write("a.json", '{}')
        assert run("compare", first, first) == EXIT_INVALID
        assert "Unknown configuration keys" in capsys.readouterr().err


class TestTemplateCommands:
    """Test the templates command."""

    def test_save_list_use_delete(self, run, write, tmp_path, capsys):
        """Test the full template lifecycle from the command line."""
        assert run("templates", "save", "audit", "-x", "ts", "-x", "ts", "-x", "id") == 0
        capsys.readouterr()

        templates = FileTemplateRepository(tmp_path / "templates.yaml").list_all()
        assert len(templates) == 1
        template = templates[0]
        assert template.excluded_fields == ["ts", "id"]

        assert run("templates", "list") == 0
        assert "audit (2 fields): ts, id" in capsys.readouterr().out

        first = write("a.json", '{"ts": 1, "id": 1, "v": 1}')
        second = write("b.json", '{"ts": 2, "id": 2, "v": 1}')
        assert run("compare", first, second, "-t", template.id) == EXIT_EQUAL

        assert run("templates", "delete", template.id) == 0
        assert run("templates", "delete", template.id) == 1

    def test_save_requires_fields(self, run, capsys):
        """Test that saving needs at least one field."""
        assert run("templates", "save", "empty") == 1
        assert "at least one" in capsys.readouterr().err

    def test_unknown_template(self, run, write, capsys):
        """Test that an unknown template id is reported."""
        first = write("a.json", '{}')
        assert run("compare", first, first, "-t", "missing") == EXIT_INVALID
        assert "Template not found" in capsys.readouterr().err

    def test_list_empty(self, run, capsys):
        """Test listing with no templates saved."""
        assert run("templates", "list") == 0
        assert "No templates saved." in capsys.readouterr().out

    def test_help_names_argument(self, run, capsys):
        """Test that the positional argument reads as a name or an id."""
        with pytest.raises(SystemExit):
            run("templates", "--help")
        assert "NAME_OR_ID" in capsys.readouterr().out


class TestValidateAndFormatCommands:
    """Test the validate and format commands."""

    def test_validate(self, run, write, capsys):
        """Test validating good and bad files."""
        good = write("good.json", '[1, 2]')
        bad = write("bad.json", '{\n  "a": 1,\n  "b": }')

        assert run("validate", good) == 0
        assert run("validate", good, bad) == 1
        out = capsys.readouterr().out
        assert "good.json: Valid JSON" in out
        assert "Line 3, Column 8: " in out

    def test_format_stdout(self, run, write, capsys):
        """Test formatting to standard output."""
        path = write("a.json", '{"b":1,"a":[]}')
        assert run("format", path) == 0
        assert capsys.readouterr().out == '{\n  "b": 1,\n  "a": []\n}\n'

    def test_format_in_place(self, run, write):
        """Test formatting a file in place with a custom indent."""
        path = write("a.json", '{"a":{"b":1}}')
        assert run("format", path, "--in-place", "--indent", "4") == 0
        assert path.read_text() == '{\n    "a": {\n        "b": 1\n    }\n}\n'

    def test_format_invalid_untouched(self, run, write):
        """Test that an invalid file is not rewritten."""
        path = write("a.json", '{"a":')
        assert run("format", path, "-i") == 1
        assert path.read_text() == '{"a":'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
