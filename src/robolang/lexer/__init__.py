"""Lexer package for the robot-control language.

Provide the terminal grammar, the cached Lark lexer factory, and the
tokenizer that produces positioned tokens.
"""

from robolang.lexer.grammar import LexerFactory
from robolang.lexer.tokenizer import first_invalid, tokenize, void_if_invalid
from robolang.lexer.tokens import KEYWORDS, Token, TokenKind

__all__ = [
    "KEYWORDS",
    "LexerFactory",
    "Token",
    "TokenKind",
    "first_invalid",
    "tokenize",
    "void_if_invalid",
]
