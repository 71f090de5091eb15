"""Token types for the robot-control language.

Define the token kinds produced by the lexer and the immutable token
value object consumed by the semantic validator.
"""

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(str, Enum):
    """Classification of a lexical token."""

    PIPE = "PIPE"
    BRACKET_OPEN = "BRACKET_OPEN"
    BRACKET_CLOSE = "BRACKET_CLOSE"
    PERIOD = "PERIOD"
    COLON = "COLON"
    ASSIGN = "ASSIGN"

    PROC = "PROC"
    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"
    WHILE = "WHILE"
    DO = "DO"
    FOR = "FOR"
    REPEAT = "REPEAT"

    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    CONSTANT = "CONSTANT"
    END = "END"
    INVALID = "INVALID"

    @property
    def is_literal(self) -> bool:
        """Whether this kind is a number or constant literal."""
        return self in (TokenKind.NUMBER, TokenKind.CONSTANT)


KEYWORDS: dict[str, TokenKind] = {
    "proc": TokenKind.PROC,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "do": TokenKind.DO,
    "for": TokenKind.FOR,
    "repeat": TokenKind.REPEAT,
}
"""Reserved words mapped to their token kind."""


@dataclass(frozen=True)
class Token:
    """A classified lexeme with its source position.

    Equality and hashing consider only the kind and lexeme, so two tokens
    spelled the same way compare equal wherever they occur.
    """

    kind: TokenKind
    """Classification of the token."""

    lexeme: str
    """Source text of the token (constants keep their leading '#')."""

    line: int = field(default=1, compare=False)
    """Line number (1-indexed)."""

    column: int = field(default=0, compare=False)
    """Column of the first character (1-indexed within the line)."""

    def is_a(self, kind: TokenKind, lexeme: str | None = None) -> bool:
        """Check the token kind and, optionally, its lexeme."""
        if self.kind != kind:
            return False
        return lexeme is None or self.lexeme == lexeme

    def __str__(self) -> str:
        """Render the token the way diagnostics refer to it."""
        if self.kind == TokenKind.END:
            return "end of input"
        return f"'{self.lexeme}'"
