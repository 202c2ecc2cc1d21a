"""Tests for the localeforge command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from localeforge.cli import EXIT_FAILURE, EXIT_OK, EXIT_STALE, main


class TestGenerateAndCheck:
    """generate writes the module; check compares it."""

    def test_generate_then_check(
        self, locales_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A freshly generated module is up to date."""
        output = tmp_path / "out" / "locales.py"

        assert main(["generate", str(locales_dir), "-o", str(output)]) == EXIT_OK
        assert output.read_text(encoding="utf-8").startswith("# Generated by localeforge.")

        assert main(["check", str(locales_dir), str(output)]) == EXIT_OK
        assert "is up to date" in capsys.readouterr().out

    def test_check_detects_edits(
        self, locales_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Hand edits make the output stale."""
        output = tmp_path / "locales.py"
        main(["generate", str(locales_dir), "-o", str(output)])
        output.write_text(output.read_text(encoding="utf-8") + "# edited\n", encoding="utf-8")

        assert main(["check", str(locales_dir), str(output)]) == EXIT_STALE
        assert "was modified" in capsys.readouterr().err

    def test_check_detects_source_changes(self, locales_dir: Path, tmp_path: Path) -> None:
        """Changing a locale source makes the output stale."""
        output = tmp_path / "locales.py"
        main(["generate", str(locales_dir), "-o", str(output)])
        (locales_dir / "nl_NL").write_text("LC_TIME\nEND LC_TIME\n", encoding="utf-8")

        assert main(["check", str(locales_dir), str(output)]) == EXIT_STALE

    def test_check_missing_output(self, locales_dir: Path, tmp_path: Path) -> None:
        """A missing output file is stale."""
        assert main(["check", str(locales_dir), str(tmp_path / "none.py")]) == EXIT_STALE


class TestInspection:
    """list and schema."""

    def test_list(self, locales_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """One locale key per line, sorted."""
        assert main(["list", str(locales_dir)]) == EXIT_OK

        lines = capsys.readouterr().out.splitlines()
        assert [line.split("\t")[0] for line in lines] == ["de_DE", "fr_BE", "fr_FR"]

    def test_list_display_names(
        self, locales_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """With Babel installed, display names follow the key."""
        pytest.importorskip("babel")

        main(["list", str(locales_dir)])

        assert "de_DE\tGerman (Germany)" in capsys.readouterr().out.splitlines()

    def test_schema_json(self, locales_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """The canonical schema is printed as JSON."""
        assert main(["schema", str(locales_dir)]) == EXIT_OK

        schema = json.loads(capsys.readouterr().out)
        assert schema["LC_NUMERIC"]["GROUPING"] == {
            "type": "integer",
            "arity": "array",
            "optional": True,
        }


class TestFailures:
    """Errors are reported and exit with code 2."""

    def test_syntax_error(self, locales_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Parse failures name the file and show the source line."""
        (locales_dir / "nl_NL").write_text('LC_TIME\nd_fmt "x\n', encoding="utf-8")

        assert main(["schema", str(locales_dir)]) == EXIT_FAILURE

        err = capsys.readouterr().err
        assert "error[UNTERMINATED_STRING]" in err
        assert "nl_NL:2:7" in err
        assert "^" in err

    def test_json_format(self, locales_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--format json prints one JSON diagnostic."""
        (locales_dir / "nl_NL").write_text('LC_TIME\ncopy "xx"\nEND LC_TIME\n', encoding="utf-8")

        assert main(["--format", "json", "schema", str(locales_dir)]) == EXIT_FAILURE

        data = json.loads(capsys.readouterr().err)
        assert data["code"] == "UNKNOWN_ALIAS_TARGET"
        assert data["source"] == "nl_NL"

    def test_undecodable_file(
        self, locales_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A file that is not UTF-8 is reported by name with exit code 2."""
        (locales_dir / "de_DE").write_bytes(b'LC_TIME\nd_fmt "\xe9"\nEND LC_TIME\n')

        assert main(["schema", str(locales_dir)]) == EXIT_FAILURE

        err = capsys.readouterr().err
        assert "error[UNDECODABLE_SOURCE]" in err
        assert str(locales_dir / "de_DE") in err

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Unreadable input is an OSError report."""
        assert main(["list", str(tmp_path / "missing")]) == EXIT_FAILURE
        assert capsys.readouterr().err.startswith("error: Locale directory not found")

    def test_usage_error(self) -> None:
        """A missing subcommand is an argparse usage error."""
        with pytest.raises(SystemExit) as error:
            main([])

        assert error.value.code == 2
