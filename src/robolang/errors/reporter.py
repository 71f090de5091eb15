"""Error reporter for the robolang checker.

Provide rustc-style formatting of diagnostics with source context,
carets under the offending token, and a JSON rendering for tools.
"""

import json
from io import StringIO

from robolang.errors.diagnostics import Diagnostic, Severity
from robolang.log import get_logger

logger = get_logger(__name__)

GUTTER_WIDTH = 5
"""Width of the line number gutter."""

CONTEXT_LINES = 1
"""Number of context lines to show before/after error."""


class DiagnosticReporter:
    """Format and report diagnostic messages.

    Format diagnostics in rustc-style with source context and carets
    pointing to the error location.
    """

    def __init__(self) -> None:
        """Initialize the diagnostic reporter with no sources."""
        self._source_cache: dict[str, str] = {}

    def add_source(self, file_path: str, source: str) -> None:
        """Add source content for a file.

        Args:
            file_path: Path to the source file.
            source: Content of the source file.

        """
        self._source_cache[file_path] = source

    def format_diagnostic(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic in rustc-style.

        Args:
            diagnostic: The diagnostic to format.

        Returns:
            Formatted diagnostic string.

        Example output:
            error[E0009]: invalid assignment: 'y' used but never defined
              --> robot.txt:2:1
               |
             1 | |x|
             2 | y := 5 .
               | ^
               |

        """
        output = StringIO()
        self._write_header(output, diagnostic)
        output.write(
            f"  --> {diagnostic.file}:{diagnostic.line}:{diagnostic.column}\n",
        )
        self._write_source_context(output, diagnostic)
        return output.getvalue()

    def format_json(self, diagnostics: list[Diagnostic], file: str) -> str:
        """Format diagnostics as JSON.

        Args:
            diagnostics: List of diagnostics.
            file: Primary file being checked.

        Returns:
            JSON string representation.

        """
        errors = [d for d in diagnostics if d.severity == Severity.ERROR]
        result = {
            "version": "1.0",
            "file": file,
            "valid": len(errors) == 0,
            "errors": [d.to_dict() for d in errors],
        }
        return json.dumps(result, indent=2)

    def _write_header(self, output: StringIO, diagnostic: Diagnostic) -> None:
        severity = diagnostic.severity.value
        if diagnostic.code:
            output.write(f"{severity}[{diagnostic.code.value}]: {diagnostic.message}\n")
        else:
            output.write(f"{severity}: {diagnostic.message}\n")

    def _write_source_context(
        self,
        output: StringIO,
        diagnostic: Diagnostic,
    ) -> None:
        """Write source lines around the error with a caret line under it.

        Args:
            output: Output buffer.
            diagnostic: The diagnostic.

        """
        gutter = " " * GUTTER_WIDTH
        source = self._source_cache.get(diagnostic.file)
        lines = source.split("\n") if source is not None else []
        line_idx = diagnostic.line - 1

        if not 0 <= line_idx < len(lines):
            output.write(f"{gutter}|\n")
            return

        start_idx = max(0, line_idx - CONTEXT_LINES)
        end_idx = min(len(lines), line_idx + CONTEXT_LINES + 1)

        output.write(f"{gutter}|\n")
        for idx in range(start_idx, end_idx):
            line_content = lines[idx]
            output.write(f"{idx + 1:>{GUTTER_WIDTH - 1}} | {line_content}\n")
            if idx == line_idx:
                # Columns are 1-indexed; keep tabs so the caret lines up
                prefix = line_content[: max(0, diagnostic.column - 1)]
                spacing = "".join("\t" if c == "\t" else " " for c in prefix)
                output.write(f"{gutter}| {spacing}{'^' * diagnostic.length}\n")
        output.write(f"{gutter}|\n")


def format_success_message(procedures: int = 0, variables: int = 0) -> str:
    """Format a success message for a valid program.

    Args:
        procedures: Number of user procedures defined.
        variables: Number of global variables declared.

    Returns:
        Formatted success message.

    """
    parts = []
    if procedures > 0:
        parts.append(f"{procedures} procedure{'s' if procedures != 1 else ''}")
    if variables > 0:
        parts.append(f"{variables} variable{'s' if variables != 1 else ''}")

    if parts:
        return f"valid ({', '.join(parts)})"
    return "valid"
