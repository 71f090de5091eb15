"""Lexer factory for the robot-control language.

Create the Lark lexer used by the tokenizer from the terminal grammar
shipped next to this module.
"""

from pathlib import Path

from lark import Lark

from robolang.log import get_logger

logger = get_logger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "robolang.lark"
"""Path to the terminal grammar file."""


class LexerFactory:
    """Factory for the robot-control language lexer.

    The grammar only describes terminals, so the instance is built with
    the basic lexer and used through ``Lark.lex``. Instances are cached
    because grammar compilation is the expensive part.
    """

    _grammar_cache: str | None = None
    """Cached grammar content to avoid repeated file reads."""

    _lexer_cache: Lark | None = None
    """Cached Lark instance."""

    @classmethod
    def _load_grammar(cls) -> str:
        """Load the grammar file contents.

        Returns:
            The grammar string.

        """
        if cls._grammar_cache is None:
            logger.debug("Loading grammar from %s", GRAMMAR_PATH)
            cls._grammar_cache = GRAMMAR_PATH.read_text(encoding="utf-8")
        return cls._grammar_cache

    @classmethod
    def create(cls) -> Lark:
        """Create (or reuse) the lexer.

        Returns:
            Configured Lark instance whose ``lex`` method yields tokens.

        """
        if cls._lexer_cache is not None:
            return cls._lexer_cache

        logger.debug("Creating basic lexer")
        cls._lexer_cache = Lark(
            cls._load_grammar(),
            parser="lalr",
            lexer="basic",
            propagate_positions=True,
            keep_all_tokens=True,
        )
        return cls._lexer_cache

    @classmethod
    def clear_cache(cls) -> None:
        """Clear all cached lexer state.

        Use for testing or when the grammar may have changed.
        """
        cls._grammar_cache = None
        cls._lexer_cache = None
