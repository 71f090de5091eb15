"""Tests for command line checking.

Test exit codes and the text and JSON output of the check functions.
"""

import json
from pathlib import Path

import pytest

from robolang.cli import (
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERRORS,
    check_directory,
    check_file,
    run_check,
)

VALID_SOURCE = """\
|x|
x := 2 .
proc hop [ jump: 1 toThe: #front . ]
move: x .
hop .
"""

INVALID_SOURCE = """\
|x|
y := 2 .
"""


# =============================================================================
# check_file Tests
# =============================================================================


class TestCheckFile:
    """Test check_file function."""

    def test_valid_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A valid program prints a summary and succeeds."""
        program = tmp_path / "valid.robot"
        program.write_text(VALID_SOURCE)

        assert check_file(program) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "valid (1 procedure, 1 variable)" in out

    def test_invalid_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An invalid program prints a diagnostic and fails."""
        program = tmp_path / "invalid.robot"
        program.write_text(INVALID_SOURCE)

        assert check_file(program) == EXIT_VALIDATION_ERRORS
        out = capsys.readouterr().out
        assert "error[E0009]" in out
        assert f"{program}:2:1" in out

    def test_file_not_found(self, tmp_path: Path) -> None:
        """A missing file is a file error."""
        assert check_file(tmp_path / "missing.robot") == EXIT_FILE_ERROR

    def test_directory_as_file(self, tmp_path: Path) -> None:
        """A directory is not a file."""
        assert check_file(tmp_path) == EXIT_FILE_ERROR

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """Files that are not UTF-8 are file errors."""
        program = tmp_path / "binary.robot"
        program.write_bytes(b"\xff\xfe\x00")
        assert check_file(program) == EXIT_FILE_ERROR

    def test_json_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON output carries the verdict and errors."""
        program = tmp_path / "invalid.robot"
        program.write_text(INVALID_SOURCE)

        assert check_file(program, json_output=True) == EXIT_VALIDATION_ERRORS
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is False
        assert data["errors"][0]["kind"] == "VariableAssignmentError"
        assert data["errors"][0]["location"]["line"] == 2

    def test_json_output_valid(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Valid programs give an empty error list."""
        program = tmp_path / "valid.robot"
        program.write_text(VALID_SOURCE)

        assert check_file(program, json_output=True) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "version": "1.0",
            "file": str(program),
            "valid": True,
            "errors": [],
        }

    def test_max_depth(self, tmp_path: Path) -> None:
        """The nesting limit is passed through."""
        program = tmp_path / "deep.robot"
        program.write_text("[ [ [ nop . ] ] ]")
        assert check_file(program, max_depth=2) == EXIT_VALIDATION_ERRORS
        assert check_file(program, max_depth=3) == EXIT_SUCCESS


# =============================================================================
# check_directory and run_check Tests
# =============================================================================


class TestCheckDirectory:
    """Test check_directory function."""

    def test_all_valid(self, tmp_path: Path) -> None:
        """A directory of valid programs succeeds."""
        (tmp_path / "a.robot").write_text(VALID_SOURCE)
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "b.robot").write_text("nop .")
        assert check_directory(tmp_path) == EXIT_SUCCESS

    def test_one_invalid(self, tmp_path: Path) -> None:
        """One invalid program fails the directory."""
        (tmp_path / "a.robot").write_text(VALID_SOURCE)
        (tmp_path / "b.robot").write_text(INVALID_SOURCE)
        assert check_directory(tmp_path) == EXIT_VALIDATION_ERRORS

    def test_other_files_ignored(self, tmp_path: Path) -> None:
        """Only .robot files are checked."""
        (tmp_path / "notes.txt").write_text(INVALID_SOURCE)
        assert check_directory(tmp_path) == EXIT_SUCCESS


class TestRunCheck:
    """Test run_check function."""

    def test_worst_code_wins(self, tmp_path: Path) -> None:
        """The exit code is the worst of all paths."""
        valid = tmp_path / "valid.robot"
        valid.write_text(VALID_SOURCE)
        invalid = tmp_path / "invalid.robot"
        invalid.write_text(INVALID_SOURCE)

        assert run_check([valid]) == EXIT_SUCCESS
        assert run_check([valid, invalid]) == EXIT_VALIDATION_ERRORS
        assert run_check([invalid, tmp_path / "missing.robot"]) == EXIT_FILE_ERROR

    def test_directory_path(self, tmp_path: Path) -> None:
        """Directories are searched."""
        (tmp_path / "b.robot").write_text(INVALID_SOURCE)
        assert run_check([tmp_path]) == EXIT_VALIDATION_ERRORS
