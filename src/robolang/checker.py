"""Program checker for the robot-control language.

Run the whole pipeline on a program: tokenize, apply the fail-fast
lexical rule, validate structure and references, and turn the first
error into a diagnostic.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from robolang.errors.codes import ErrorCode, format_error_message
from robolang.errors.diagnostics import Diagnostic
from robolang.lexer.tokenizer import first_invalid, tokenize, void_if_invalid
from robolang.lexer.tokens import Token, TokenKind
from robolang.log import get_logger
from robolang.semantic.errors import LexicalError, RobolangValidationError
from robolang.semantic.validator import (
    DEFAULT_MAX_DEPTH,
    StructuralValidator,
    ValidationContext,
)

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Verdict for one program."""

    is_valid: bool
    """Whether the program passed validation."""

    error: RobolangValidationError | None = None
    """The first error, when the program is invalid."""

    diagnostic: Diagnostic | None = None
    """The first error as a diagnostic, when the program is invalid."""

    context: ValidationContext = field(default_factory=ValidationContext)
    """Registries and globals accumulated by the run."""


def _lexical_error(tokens: Sequence[Token]) -> LexicalError:
    invalid = first_invalid(tokens)
    if invalid is not None:
        message = format_error_message(ErrorCode.E0001, token=invalid)
        return LexicalError(message, invalid)
    end = tokens[-1] if tokens else Token(TokenKind.END, "")
    return LexicalError("empty program", end)


def to_diagnostic(error: RobolangValidationError, filename: str) -> Diagnostic:
    """Convert a validation error to a diagnostic.

    Args:
        error: The error raised by validation.
        filename: Name of the source file.

    Returns:
        ERROR diagnostic located at the offending token.

    """
    return Diagnostic.error(
        message=error.message,
        file=filename,
        line=error.line,
        column=error.column,
        code=error.code,
        kind=error.kind,
        length=len(error.token.lexeme),
    )


def validate_tokens(
    tokens: Sequence[Token],
    *,
    filename: str = "<source>",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ValidationResult:
    """Validate an already tokenized program.

    Args:
        tokens: Output of ``tokenize``.
        filename: Name of the source file (for diagnostics).
        max_depth: Deepest block nesting accepted.

    Returns:
        ValidationResult with the verdict and the first error, if any.

    """
    context = ValidationContext(max_depth=max_depth)
    stream = void_if_invalid(tokens)
    if not stream or stream[0].kind == TokenKind.END:
        error: RobolangValidationError = _lexical_error(tokens)
        logger.debug("Lexical error in %s: %s", filename, error.message)
        return ValidationResult(
            is_valid=False,
            error=error,
            diagnostic=to_diagnostic(error, filename),
            context=context,
        )

    validator = StructuralValidator(context)
    try:
        validator.check(stream)
    except RobolangValidationError as e:
        logger.debug("%s in %s: %s", e.kind, filename, e.message)
        return ValidationResult(
            is_valid=False,
            error=e,
            diagnostic=to_diagnostic(e, filename),
            context=context,
        )

    logger.debug(
        "Validated %s: %d procedures, %d globals",
        filename,
        len(context.user_procedures),
        len(context.globals.names()),
    )
    return ValidationResult(is_valid=True, context=context)


def validate_source(
    source: str,
    filename: str = "<source>",
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ValidationResult:
    """Validate program source text.

    Every call builds its own registries and global scope.

    Args:
        source: The program source.
        filename: Name of the source file (for diagnostics).
        max_depth: Deepest block nesting accepted.

    Returns:
        ValidationResult with the verdict and the first error, if any.

    """
    logger.debug("Validating %s", filename)
    return validate_tokens(tokenize(source), filename=filename, max_depth=max_depth)


def is_valid_program(source: str) -> bool:
    """Return only the verdict for program source text."""
    return validate_source(source).is_valid
