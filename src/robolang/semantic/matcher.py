"""Signature matching for calls and conditions.

Decide whether a run of tokens is a keyword message that matches one of
the signatures of a registry, checking each argument against its
parameter descriptor.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from robolang.lexer.tokens import Token, TokenKind
from robolang.log import get_logger
from robolang.semantic.registry import (
    ParameterDescriptor,
    ParameterKind,
    Registry,
    Selector,
    Signature,
)
from robolang.semantic.scope import Scope, ValueType

logger = get_logger(__name__)

NEGATION = "not"
"""Keyword part that negates a condition."""

_ARGUMENT_KINDS = frozenset(
    {TokenKind.IDENTIFIER, TokenKind.NUMBER, TokenKind.CONSTANT},
)

_NUMERIC_TYPES = frozenset({ValueType.NUMERIC, ValueType.PLACEHOLDER})


@dataclass(frozen=True)
class Message:
    """A keyword message read from a run of tokens."""

    selector: Selector
    arguments: tuple[Token, ...]
    head: Token
    """Token of the first keyword part, used for error positions."""


def parse_message(tokens: Sequence[Token]) -> Message | None:
    """Read a unary or keyword message.

    Accept ``name`` or ``part1: arg1 part2: arg2 ...`` where every argument
    is a single identifier, number or constant.

    Args:
        tokens: The run of tokens, without terminator.

    Returns:
        The message, or None if the run does not have message shape.

    """
    if not tokens or tokens[0].kind != TokenKind.IDENTIFIER:
        return None
    if len(tokens) == 1:
        return Message(Selector((tokens[0].lexeme,), keyword=False), (), tokens[0])
    if len(tokens) % 3 != 0:
        return None

    parts: list[str] = []
    arguments: list[Token] = []
    for i in range(0, len(tokens), 3):
        part, colon, argument = tokens[i : i + 3]
        if (
            part.kind != TokenKind.IDENTIFIER
            or colon.kind != TokenKind.COLON
            or argument.kind not in _ARGUMENT_KINDS
        ):
            return None
        parts.append(part.lexeme)
        arguments.append(argument)
    return Message(Selector(tuple(parts)), tuple(arguments), tokens[0])


def strip_negations(tokens: Sequence[Token]) -> Sequence[Token]:
    """Drop any number of leading ``not:`` prefixes from a condition."""
    start = 0
    while (
        len(tokens) >= start + 2
        and tokens[start].is_a(TokenKind.IDENTIFIER, NEGATION)
        and tokens[start + 1].kind == TokenKind.COLON
    ):
        start += 2
    return tokens[start:]


class SignatureMatcher:
    """Match keyword messages against registries within a scope."""

    def __init__(self, scope: Scope) -> None:
        """Initialize the matcher.

        Args:
            scope: Scope used to check and resolve variable arguments.

        """
        self._scope = scope

    def match(
        self,
        tokens: Sequence[Token],
        registry: Registry,
    ) -> Signature | None:
        """Find the signature a call matches.

        Candidates sharing the call's first keyword part are tried in
        registry order; a candidate wins only when its whole selector
        agrees with the call and every argument satisfies its descriptor.

        Args:
            tokens: The call's tokens, without terminator.
            registry: Registry to search.

        Returns:
            The matched signature, or None.

        """
        message = parse_message(tokens)
        if message is None:
            return None
        for candidate in registry.candidates(message.selector.head):
            if candidate.selector != message.selector:
                continue
            if all(
                self.accepts(descriptor, argument)
                for descriptor, argument in zip(
                    candidate.parameters,
                    message.arguments,
                    strict=True,
                )
            ):
                logger.debug("Matched %s in %s", candidate.selector, registry.name)
                return candidate
        return None

    def match_condition(
        self,
        tokens: Sequence[Token],
        registry: Registry,
    ) -> Signature | None:
        """Match a condition, ignoring leading ``not:`` prefixes."""
        return self.match(strip_negations(tokens), registry)

    def accepts(self, descriptor: ParameterDescriptor, argument: Token) -> bool:
        """Check one argument against its descriptor.

        Enumerated slots only accept constants written at the call site;
        a variable bound to a matching constant does not qualify.
        """
        if descriptor.kind == ParameterKind.NUMERIC:
            if argument.kind == TokenKind.NUMBER:
                return True
            return (
                argument.kind == TokenKind.IDENTIFIER
                and self._scope.resolve_type(argument.lexeme) in _NUMERIC_TYPES
            )
        if descriptor.kind == ParameterKind.SYMBOLIC_ENUM:
            return (
                argument.kind == TokenKind.CONSTANT
                and argument.lexeme in descriptor.allowed
            )
        if argument.kind == TokenKind.IDENTIFIER:
            return self._scope.is_defined(argument.lexeme)
        return argument.kind.is_literal
