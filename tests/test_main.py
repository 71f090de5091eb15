"""Tests for the command line entry point."""

from pathlib import Path

import pytest
import typed_argparse as tap

from robolang.args import Args
from robolang.cli import EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERRORS
from robolang.main import run


def run_cli(argv: list[str]) -> int:
    """Parse ``argv`` and run the checker, returning the exit code."""
    with pytest.raises(SystemExit) as exc_info:
        tap.Parser(Args).bind(run).run(argv)
    return int(exc_info.value.code or 0)


@pytest.fixture(autouse=True)
def in_tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the log file and config lookup inside the test directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


class TestRun:
    """Test exit codes of the entry point."""

    def test_valid_program(self, tmp_path: Path) -> None:
        """Valid programs exit with success."""
        (tmp_path / "ok.robot").write_text("nop .")
        assert run_cli(["ok.robot"]) == EXIT_SUCCESS

    def test_invalid_program(self, tmp_path: Path) -> None:
        """Invalid programs exit with the validation code."""
        (tmp_path / "bad.robot").write_text("fly .")
        assert run_cli(["bad.robot", "--json-output"]) == EXIT_VALIDATION_ERRORS

    def test_no_paths(self) -> None:
        """Running without programs is an error."""
        assert run_cli([]) == EXIT_FILE_ERROR

    def test_max_depth_flag(self, tmp_path: Path) -> None:
        """The command line depth overrides the default."""
        (tmp_path / "deep.robot").write_text("[ [ nop . ] ]")
        assert run_cli(["deep.robot", "--max-depth", "1"]) == EXIT_VALIDATION_ERRORS

    def test_depth_from_local_config(self, tmp_path: Path) -> None:
        """The local configuration file sets the depth."""
        config_dir = tmp_path / ".robolang"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("max_depth = 1\n")
        (tmp_path / "deep.robot").write_text("[ [ nop . ] ]")
        assert run_cli(["deep.robot"]) == EXIT_VALIDATION_ERRORS

    def test_invalid_max_depth(self, tmp_path: Path) -> None:
        """Depths outside the allowed range are rejected."""
        (tmp_path / "ok.robot").write_text("nop .")
        assert run_cli(["ok.robot", "--max-depth", "0"]) == EXIT_FILE_ERROR
        assert run_cli(["ok.robot", "--max-depth", "1000"]) == EXIT_FILE_ERROR

    def test_bad_working_dir(self, tmp_path: Path) -> None:
        """A working directory that does not exist is rejected."""
        (tmp_path / "ok.robot").write_text("nop .")
        assert run_cli(["ok.robot", "--path", "nowhere"]) == EXIT_FILE_ERROR

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--version prints the version and exits."""
        assert run_cli(["--version"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("robolang")
