"""Checker for the robot-control language.

Provide tokenization, structural and referential validation, and
diagnostics for programs that drive the robot through built-in and
user-defined procedures.
"""

from robolang.checker import (
    ValidationResult,
    is_valid_program,
    validate_source,
    validate_tokens,
)
from robolang.errors import Diagnostic, DiagnosticReporter, ErrorCode, Severity
from robolang.lexer import Token, TokenKind, tokenize, void_if_invalid
from robolang.semantic import (
    RobolangValidationError,
    StructuralValidator,
    ValidationContext,
)

__all__ = [
    "Diagnostic",
    "DiagnosticReporter",
    "ErrorCode",
    "RobolangValidationError",
    "Severity",
    "StructuralValidator",
    "Token",
    "TokenKind",
    "ValidationContext",
    "ValidationResult",
    "is_valid_program",
    "tokenize",
    "validate_source",
    "validate_tokens",
    "void_if_invalid",
]
