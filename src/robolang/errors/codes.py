"""Error code definitions for the robolang checker.

Provide one standardized code per validation error kind so callers can
classify a failure without parsing messages.
"""

from enum import Enum

from robolang.log import get_logger

logger = get_logger(__name__)

# Error code category boundaries
_LEXICAL_MAX = 1
"""Maximum error code number for lexical errors."""

_DEFINITION_MAX = 3
"""Maximum error code number for definition errors."""

_STATEMENT_MAX = 9
"""Maximum error code number for statement errors."""


class ErrorCode(str, Enum):
    """Validation error codes.

    Codes follow the convention E0001-E9999 grouped by category:
    - E0001: Lexical errors
    - E0002-E0003: Definition errors
    - E0004-E0009: Statement errors
    - E0010+: Structural errors
    """

    E0001 = "E0001"
    """Invalid character in source (LexicalError)."""

    E0002 = "E0002"
    """Malformed variable block (VariableDefinitionError)."""

    E0003 = "E0003"
    """Malformed procedure header (ProcedureDefinitionError)."""

    E0004 = "E0004"
    """Call matches no known procedure (ProcedureCallError)."""

    E0005 = "E0005"
    """Condition matches no known condition (ConditionError)."""

    E0006 = "E0006"
    """Malformed if statement (IfStatementError)."""

    E0007 = "E0007"
    """Malformed while statement (WhileStatementError)."""

    E0008 = "E0008"
    """Malformed for statement (ForStatementError)."""

    E0009 = "E0009"
    """Invalid assignment (VariableAssignmentError)."""

    E0010 = "E0010"
    """Unbalanced brackets or unterminated construct (UnterminatedConstructError)."""

    E0011 = "E0011"
    """Nesting deeper than the configured limit (RecursionLimitError)."""

    @property
    def category(self) -> str:
        """Get the error category for this code.

        Returns:
            Human-readable category name.

        """
        code_num = int(self.value[1:])
        if code_num <= _LEXICAL_MAX:
            return "lexical"
        if code_num <= _DEFINITION_MAX:
            return "definition"
        if code_num <= _STATEMENT_MAX:
            return "statement"
        return "structure"


# Error message templates for each code
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.E0001: "invalid character {token}",
    ErrorCode.E0002: "malformed variable block: {detail}",
    ErrorCode.E0003: "malformed procedure definition: {detail}",
    ErrorCode.E0004: "invalid call: {detail}",
    ErrorCode.E0005: "invalid condition: {detail}",
    ErrorCode.E0006: "malformed if statement: {detail}",
    ErrorCode.E0007: "malformed while statement: {detail}",
    ErrorCode.E0008: "malformed for statement: {detail}",
    ErrorCode.E0009: "invalid assignment: {detail}",
    ErrorCode.E0010: "unterminated construct: {detail}",
    ErrorCode.E0011: "nesting exceeds the limit of {limit} levels",
}


def format_error_message(code: ErrorCode, **kwargs: object) -> str:
    """Format an error message with the given parameters.

    Args:
        code: The error code.
        **kwargs: Parameters to substitute in the message template.

    Returns:
        Formatted error message string.

    """
    template = ERROR_MESSAGES.get(code, "unknown error")
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing parameter for error message: %s", e)
        return template
