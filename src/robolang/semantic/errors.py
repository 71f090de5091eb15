"""Validation errors for the robot-control language.

Each error kind of the checker is an exception carrying the offending
token. Validation raises the first error it meets; the checker converts
it into a diagnostic at the boundary.
"""

from typing import ClassVar

from robolang.errors.codes import ErrorCode
from robolang.lexer.tokens import Token


class RobolangValidationError(Exception):
    """Base exception for validation errors."""

    code: ClassVar[ErrorCode]
    """Error code reported for this kind."""

    def __init__(self, message: str, token: Token) -> None:
        """Initialize the validation error.

        Args:
            message: Short description (no leading capital, no trailing period).
            token: Token where the error was detected.

        """
        super().__init__(message)
        self.message = message
        self.token = token

    @property
    def kind(self) -> str:
        """Name of the error kind, e.g. ``IfStatementError``."""
        return type(self).__name__

    @property
    def line(self) -> int:
        """Line of the offending token."""
        return self.token.line

    @property
    def column(self) -> int:
        """Column of the offending token."""
        return self.token.column


class LexicalError(RobolangValidationError):
    """An invalid character voided the token stream."""

    code = ErrorCode.E0001


class VariableDefinitionError(RobolangValidationError):
    """A ``| ... |`` block holds something other than identifiers."""

    code = ErrorCode.E0002


class ProcedureDefinitionError(RobolangValidationError):
    """A ``proc`` header does not have keyword-message shape."""

    code = ErrorCode.E0003


class ProcedureCallError(RobolangValidationError):
    """A call matches neither a user procedure nor a built-in."""

    code = ErrorCode.E0004


class ConditionError(RobolangValidationError):
    """A guard matches no built-in condition."""

    code = ErrorCode.E0005


class IfStatementError(RobolangValidationError):
    """Malformed ``if: ... then: [...] else: [...]``."""

    code = ErrorCode.E0006


class WhileStatementError(RobolangValidationError):
    """Malformed ``while: ... do: [...]``."""

    code = ErrorCode.E0007


class ForStatementError(RobolangValidationError):
    """Malformed ``for: ... repeat: [...]``."""

    code = ErrorCode.E0008


class VariableAssignmentError(RobolangValidationError):
    """Assignment to or from a variable that is not in scope."""

    code = ErrorCode.E0009


class UnterminatedConstructError(RobolangValidationError):
    """Brackets or a construct were left open at the end of a range."""

    code = ErrorCode.E0010


class RecursionLimitError(RobolangValidationError):
    """Blocks are nested deeper than the configured limit."""

    code = ErrorCode.E0011
