"""Diagnostic messages for the robolang checker.

Provide the diagnostic dataclass that carries a classified validation
failure and its source location to whoever presents it.
"""

from dataclasses import dataclass
from enum import Enum

from robolang.errors.codes import ErrorCode
from robolang.log import get_logger

logger = get_logger(__name__)


class Severity(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    """A validation error; the program is invalid."""


@dataclass
class Diagnostic:
    """A diagnostic message with source location."""

    severity: Severity
    """The severity level of this diagnostic."""

    message: str
    """The primary diagnostic message (no leading capital, no trailing period)."""

    file: str
    """Path to the source file."""

    line: int
    """Line number where the diagnostic occurs (1-indexed)."""

    column: int
    """Column number where the diagnostic starts (1-indexed)."""

    code: ErrorCode | None = None
    """Optional error code for categorization."""

    kind: str | None = None
    """Name of the error kind, e.g. ``ProcedureCallError``."""

    length: int = 1
    """Number of characters of the offending token."""

    @classmethod
    def error(  # noqa: PLR0913
        cls,
        message: str,
        file: str,
        line: int,
        column: int,
        *,
        code: ErrorCode | None = None,
        kind: str | None = None,
        length: int = 1,
    ) -> "Diagnostic":
        """Create an error diagnostic.

        Args:
            message: The error message.
            file: Source file path.
            line: Line number (1-indexed).
            column: Column number (1-indexed).
            code: Optional error code.
            kind: Optional error kind name.
            length: Length of the offending token.

        Returns:
            A new Diagnostic with ERROR severity.

        """
        return cls(
            severity=Severity.ERROR,
            message=message,
            file=file,
            line=line,
            column=column,
            code=code,
            kind=kind,
            length=max(1, length),
        )

    def to_dict(self) -> dict[str, object]:
        """Convert this diagnostic to a dictionary for JSON serialization.

        Returns:
            Dictionary representation suitable for JSON output.

        """
        result: dict[str, object] = {
            "severity": self.severity.value,
            "message": self.message,
            "location": {
                "file": self.file,
                "line": self.line,
                "column": self.column,
            },
        }

        if self.code is not None:
            result["code"] = self.code.value

        if self.kind is not None:
            result["kind"] = self.kind

        return result
