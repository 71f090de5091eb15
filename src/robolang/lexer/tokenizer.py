"""Tokenizer for the robot-control language.

Turn source text into a sequence of classified tokens with line and
column positions. Tokenization is total: characters that cannot start a
token become ``INVALID`` tokens instead of raising, and the caller decides
what an invalid token means for the program.
"""

from collections.abc import Sequence

from lark import UnexpectedCharacters

from robolang.lexer.grammar import LexerFactory
from robolang.lexer.tokens import KEYWORDS, Token, TokenKind
from robolang.log import get_logger

logger = get_logger(__name__)


def _classify(lark_type: str, value: str) -> TokenKind:
    """Map a Lark terminal name to a token kind."""
    if lark_type == "IDENTIFIER":
        return KEYWORDS.get(value, TokenKind.IDENTIFIER)
    return TokenKind(lark_type)


def _end_token(text: str) -> Token:
    """Build the END token at the position reached after the whole text."""
    line = text.count("\n") + 1
    column = len(text) - (text.rfind("\n") + 1)
    return Token(TokenKind.END, "", line, column)


def tokenize(text: str) -> list[Token]:
    """Convert source text into tokens.

    Whitespace is skipped. The returned list always ends with a single
    ``END`` token.

    Args:
        text: The program source.

    Returns:
        Tokens in source order, terminated by ``END``.

    """
    lexer = LexerFactory.create()
    tokens: list[Token] = []
    try:
        for lark_token in lexer.lex(text):
            kind = _classify(lark_token.type, str(lark_token))
            tokens.append(
                Token(kind, str(lark_token), lark_token.line, lark_token.column),
            )
    except UnexpectedCharacters as e:
        # Lexing stops here; the rest of the text is not tokenized
        logger.debug("Lexer stopped at line %d col %d", e.line, e.column)
        tokens.append(
            Token(TokenKind.INVALID, text[e.pos_in_stream], e.line, e.column),
        )
    tokens.append(_end_token(text))
    logger.debug("Tokenized %d characters into %d tokens", len(text), len(tokens))
    return tokens


def first_invalid(tokens: Sequence[Token]) -> Token | None:
    """Return the first INVALID token, or None if the stream is clean."""
    return next((t for t in tokens if t.kind == TokenKind.INVALID), None)


def void_if_invalid(tokens: Sequence[Token]) -> list[Token]:
    """Apply the fail-fast lexical rule.

    A single invalid token voids the whole stream; no partial prefix is
    ever handed to the validator.

    Args:
        tokens: Output of ``tokenize``.

    Returns:
        The tokens unchanged, or an empty list if any token is invalid.

    """
    invalid = first_invalid(tokens)
    if invalid is not None:
        logger.debug(
            "Invalid character %s at line %d col %d voids the token stream",
            invalid,
            invalid.line,
            invalid.column,
        )
        return []
    return list(tokens)
