"""Command line checking of robot programs.

Read program files, validate them, and present the verdict as
rustc-style diagnostics or JSON. Return process exit codes.
"""

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console

from robolang.checker import validate_source
from robolang.errors.reporter import DiagnosticReporter, format_success_message
from robolang.log import get_logger
from robolang.semantic.validator import DEFAULT_MAX_DEPTH

logger = get_logger(__name__)

EXIT_SUCCESS = 0
"""Every program is valid."""

EXIT_VALIDATION_ERRORS = 1
"""At least one program is invalid."""

EXIT_FILE_ERROR = 2
"""A file could not be read."""

PROGRAM_GLOB = "*.robot"
"""Pattern of program files searched in directories."""


def _print(console: Console, text: str) -> None:
    console.print(
        text.rstrip("\n"),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def check_file(
    path: Path,
    *,
    json_output: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    console: Console | None = None,
) -> int:
    """Validate one program file.

    Args:
        path: Program file.
        json_output: Print the reporter's JSON document instead of text.
        max_depth: Deepest block nesting accepted.
        console: Console to print to.

    Returns:
        Exit code.

    """
    console = console or Console()
    if not path.is_file():
        logger.error("Not a file: %s", path)
        _print(console, f"error: cannot read '{path}': not a file")
        return EXIT_FILE_ERROR
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)  # noqa: TRY400
        _print(console, f"error: cannot read '{path}': {e}")
        return EXIT_FILE_ERROR

    filename = str(path)
    result = validate_source(source, filename, max_depth=max_depth)
    diagnostics = [result.diagnostic] if result.diagnostic is not None else []
    reporter = DiagnosticReporter()
    reporter.add_source(filename, source)

    if json_output:
        _print(console, reporter.format_json(diagnostics, filename))
    elif result.is_valid:
        message = format_success_message(
            procedures=len(result.context.user_procedures),
            variables=len(result.context.globals.names()),
        )
        _print(console, f"{filename}: {message}")
    else:
        for diagnostic in diagnostics:
            _print(console, reporter.format_diagnostic(diagnostic))

    return EXIT_SUCCESS if result.is_valid else EXIT_VALIDATION_ERRORS


def check_directory(
    path: Path,
    *,
    json_output: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    console: Console | None = None,
) -> int:
    """Validate every program file under a directory.

    Args:
        path: Directory searched recursively for ``*.robot`` files.
        json_output: Print JSON documents instead of text.
        max_depth: Deepest block nesting accepted.
        console: Console to print to.

    Returns:
        The worst exit code of all files.

    """
    console = console or Console()
    files = sorted(path.rglob(PROGRAM_GLOB))
    if not files:
        logger.info("No %s files under %s", PROGRAM_GLOB, path)
    return max(
        (
            check_file(
                file,
                json_output=json_output,
                max_depth=max_depth,
                console=console,
            )
            for file in files
        ),
        default=EXIT_SUCCESS,
    )


def run_check(
    paths: Iterable[Path],
    *,
    json_output: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    console: Console | None = None,
) -> int:
    """Validate files and directories given on the command line.

    Args:
        paths: Files or directories.
        json_output: Print JSON documents instead of text.
        max_depth: Deepest block nesting accepted.
        console: Console to print to.

    Returns:
        The worst exit code of all paths.

    """
    console = console or Console()
    codes = []
    for path in paths:
        check = check_directory if path.is_dir() else check_file
        codes.append(
            check(path, json_output=json_output, max_depth=max_depth, console=console),
        )
    return max(codes, default=EXIT_SUCCESS)
