"""Structural validator for the robot-control language.

Walk a token range with recursive descent, recognising variable blocks,
procedure definitions, conditionals, loops, bare blocks, assignments and
calls. Nested block bodies are validated by recursing into the token
sub-range between their brackets, with the scope the construct calls for.
The first error found aborts validation of every enclosing range.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from robolang.errors.codes import format_error_message
from robolang.lexer.tokens import Token, TokenKind
from robolang.log import get_logger
from robolang.semantic.errors import (
    ConditionError,
    ForStatementError,
    IfStatementError,
    LexicalError,
    ProcedureCallError,
    ProcedureDefinitionError,
    RecursionLimitError,
    RobolangValidationError,
    UnterminatedConstructError,
    VariableAssignmentError,
    VariableDefinitionError,
    WhileStatementError,
)
from robolang.semantic.matcher import SignatureMatcher, parse_message, strip_negations
from robolang.semantic.registry import (
    ParameterDescriptor,
    Registry,
    Selector,
    Signature,
    builtin_conditions,
    builtin_procedures,
    user_procedures,
)
from robolang.semantic.scope import Scope, ScopeType

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 64
"""Default limit on block and procedure nesting."""

MAX_DEPTH_LIMIT = 128
"""Highest nesting limit settings may ask for."""

_BRACKETS = frozenset({TokenKind.BRACKET_OPEN, TokenKind.BRACKET_CLOSE})
_STATEMENT_STOPS = _BRACKETS | {TokenKind.PERIOD}
_ASSIGNABLE_KINDS = frozenset(
    {TokenKind.NUMBER, TokenKind.CONSTANT, TokenKind.IDENTIFIER},
)
_ASSIGNMENT_LENGTH = 3

ErrorClass = type[RobolangValidationError]


def _fail(
    error_cls: ErrorClass,
    token: Token,
    **params: object,
) -> RobolangValidationError:
    """Build an error of ``error_cls`` with its code's message template."""
    return error_cls(format_error_message(error_cls.code, **params), token)


def _describe(tokens: Sequence[Token]) -> str:
    """Selector text of a message, or its raw lexemes if it has none."""
    message = parse_message(tokens)
    if message is not None:
        return message.selector.key
    return " ".join(t.lexeme for t in tokens)


@dataclass
class ValidationContext:
    """Registries and global scope shared by one validation run.

    Every run builds its own context, so independent programs never share
    variables or user procedures.
    """

    globals: Scope = field(default_factory=lambda: Scope(ScopeType.GLOBAL))
    """Top-level variables."""

    builtin_procedures: Registry = field(default_factory=builtin_procedures)
    """Fixed robot procedures."""

    builtin_conditions: Registry = field(default_factory=builtin_conditions)
    """Fixed robot conditions."""

    user_procedures: Registry = field(default_factory=user_procedures)
    """Procedures registered by ``proc`` definitions."""

    max_depth: int = DEFAULT_MAX_DEPTH
    """Deepest block nesting accepted."""


class StructuralValidator:
    """Recursive-descent validator over token ranges.

    Each ``_validate_range`` call handles the half-open range
    ``[start, end)`` of one token list. ``tokens[end]`` is always the
    closing bracket of the enclosing block or the END token, so errors
    found at the end of a range still have a token to point at.
    """

    def __init__(self, context: ValidationContext | None = None) -> None:
        """Initialize the validator.

        Args:
            context: Registries and globals to validate against; a fresh
                context is created when omitted.

        """
        self.context = context or ValidationContext()
        self.error: RobolangValidationError | None = None
        self._innermost = Token(TokenKind.END, "")
        self._deepest = 0

    def validate(
        self,
        tokens: Sequence[Token],
        procedure: Selector | None = None,
        local_scope: Scope | None = None,
    ) -> bool:
        """Validate a token range and return the verdict.

        The first error is kept in ``self.error``.

        Args:
            tokens: Tokens to validate, with or without the trailing END.
            procedure: Selector of the enclosing procedure, if any.
            local_scope: Locals of the enclosing procedure, if any.

        Returns:
            True if the range is a valid program fragment.

        """
        self.error = None
        try:
            self.check(tokens, procedure, local_scope)
        except RobolangValidationError as e:
            logger.debug("Validation failed with %s: %s", e.kind, e.message)
            self.error = e
            return False
        return True

    def check(
        self,
        tokens: Sequence[Token],
        procedure: Selector | None = None,
        local_scope: Scope | None = None,
    ) -> None:
        """Validate a token range, raising the first error found.

        Args:
            tokens: Tokens to validate, with or without the trailing END.
            procedure: Selector of the enclosing procedure, if any.
            local_scope: Locals of the enclosing procedure, if any.

        Raises:
            RobolangValidationError: The first error in the range.

        """
        stream = list(tokens)
        if not stream or stream[-1].kind != TokenKind.END:
            last = stream[-1] if stream else Token(TokenKind.END, "")
            stream.append(
                Token(TokenKind.END, "", last.line, last.column + len(last.lexeme)),
            )
        if stream[0].kind == TokenKind.END:
            raise LexicalError("empty program", stream[0])

        scope = local_scope if local_scope is not None else self.context.globals
        self._innermost = stream[0]
        self._deepest = 0
        try:
            self._validate_range(stream, 0, len(stream) - 1, procedure, scope, 0)
        except RecursionError as e:
            logger.debug("Interpreter stack exhausted at depth %d", self._deepest)
            raise _fail(
                RecursionLimitError,
                self._innermost,
                limit=self._deepest,
            ) from e

    # --- Ranges ---

    def _validate_range(  # noqa: PLR0913
        self,
        tokens: list[Token],
        start: int,
        end: int,
        procedure: Selector | None,
        scope: Scope,
        depth: int,
    ) -> None:
        pos = start
        while pos < end:
            token = tokens[pos]
            kind = token.kind
            if kind == TokenKind.PIPE:
                pos = self._variable_block(tokens, pos, end, scope)
            elif kind == TokenKind.PROC:
                pos = self._procedure(tokens, pos, end, procedure, depth)
            elif kind == TokenKind.IF:
                pos = self._if_statement(tokens, pos, end, procedure, scope, depth)
            elif kind == TokenKind.WHILE:
                pos = self._while_statement(tokens, pos, end, procedure, scope, depth)
            elif kind == TokenKind.FOR:
                pos = self._for_statement(tokens, pos, end, procedure, scope, depth)
            elif kind == TokenKind.BRACKET_OPEN:
                close = self._block(tokens, pos, end, procedure, scope, depth)
                pos = self._skip_period(tokens, close + 1, end)
            elif kind == TokenKind.BRACKET_CLOSE:
                raise _fail(UnterminatedConstructError, token, detail="unmatched ']'")
            elif (
                kind == TokenKind.IDENTIFIER
                and pos + 1 < end
                and tokens[pos + 1].kind == TokenKind.ASSIGN
            ):
                pos = self._assignment(tokens, pos, end, scope)
            else:
                pos = self._call(tokens, pos, end, scope)

    def _block(  # noqa: PLR0913
        self,
        tokens: list[Token],
        open_pos: int,
        end: int,
        procedure: Selector | None,
        scope: Scope,
        depth: int,
    ) -> int:
        """Validate ``[ body ]`` opening at ``open_pos``; return the ``]`` index."""
        if depth >= self.context.max_depth:
            raise _fail(
                RecursionLimitError,
                tokens[open_pos],
                limit=self.context.max_depth,
            )
        self._innermost = tokens[open_pos]
        self._deepest = depth
        close = self._matching_bracket(tokens, open_pos, end)
        self._validate_range(tokens, open_pos + 1, close, procedure, scope, depth + 1)
        return close

    def _matching_bracket(self, tokens: list[Token], open_pos: int, end: int) -> int:
        nesting = 0
        for i in range(open_pos, end):
            kind = tokens[i].kind
            if kind == TokenKind.BRACKET_OPEN:
                nesting += 1
            elif kind == TokenKind.BRACKET_CLOSE:
                nesting -= 1
                if nesting == 0:
                    return i
        raise _fail(
            UnterminatedConstructError,
            tokens[open_pos],
            detail="'[' is never closed",
        )

    def _skip_period(self, tokens: list[Token], pos: int, end: int) -> int:
        """Consume one optional '.' after a block-terminated construct."""
        if pos < end and tokens[pos].kind == TokenKind.PERIOD:
            return pos + 1
        return pos

    def _expect(  # noqa: PLR0913
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        kind: TokenKind,
        error_cls: ErrorClass,
        what: str,
    ) -> int:
        """Require ``kind`` at ``pos`` inside the range; return ``pos + 1``."""
        if pos >= end or tokens[pos].kind != kind:
            found = tokens[min(pos, end)]
            raise _fail(error_cls, found, detail=f"expected {what}, found {found}")
        return pos + 1

    def _scan_to(
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        kind: TokenKind,
    ) -> int:
        """Index of the first ``kind`` or bracket token from ``pos``, else ``end``."""
        while pos < end and tokens[pos].kind != kind:
            if tokens[pos].kind in _BRACKETS:
                return pos
            pos += 1
        return pos

    # --- Declarations ---

    def _variable_block(
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        scope: Scope,
    ) -> int:
        i = pos + 1
        while i < end and tokens[i].kind == TokenKind.IDENTIFIER:
            i += 1
        if i >= end:
            raise _fail(
                UnterminatedConstructError,
                tokens[pos],
                detail="'|' is never closed",
            )
        if tokens[i].kind != TokenKind.PIPE:
            raise _fail(
                VariableDefinitionError,
                tokens[i],
                detail=f"expected a variable name or '|', found {tokens[i]}",
            )
        names = [t.lexeme for t in tokens[pos + 1 : i]]
        for name in names:
            scope.declare(name)
        logger.debug(
            "Variable block declares %s in %s scope",
            names,
            scope.scope_type.name,
        )
        return i + 1

    def _procedure(
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        enclosing: Selector | None,
        depth: int,
    ) -> int:
        if enclosing is not None:
            raise _fail(
                ProcedureDefinitionError,
                tokens[pos],
                detail=f"procedure defined inside procedure {enclosing}",
            )
        open_pos = self._scan_to(tokens, pos + 1, end, TokenKind.BRACKET_OPEN)
        if open_pos >= end or tokens[open_pos].kind != TokenKind.BRACKET_OPEN:
            found = tokens[open_pos]
            raise _fail(
                ProcedureDefinitionError,
                found,
                detail=f"expected '[' after procedure header, found {found}",
            )

        header = tokens[pos + 1 : open_pos]
        message = parse_message(header)
        if message is None or any(
            arg.kind != TokenKind.IDENTIFIER for arg in message.arguments
        ):
            raise _fail(
                ProcedureDefinitionError,
                header[0] if header else tokens[open_pos],
                detail="header must be 'proc name' or 'proc part: param ...'",
            )
        parameters = [arg.lexeme for arg in message.arguments]
        if len(set(parameters)) != len(parameters):
            raise _fail(
                ProcedureDefinitionError,
                message.head,
                detail=f"repeated parameter name in {message.selector}",
            )

        # Registered before the body so the body may call itself
        selector = message.selector
        self.context.user_procedures.register(
            Signature(
                selector,
                tuple(ParameterDescriptor.any_variable() for _ in parameters),
            ),
        )
        logger.debug("Registered procedure %s(%s)", selector, ", ".join(parameters))

        local_scope = Scope(ScopeType.PROCEDURE, parent=self.context.globals)
        for name in parameters:
            local_scope.declare(name, parameter=True)
        close = self._block(tokens, open_pos, end, selector, local_scope, depth)
        return self._skip_period(tokens, close + 1, end)

    # --- Control flow ---

    def _condition(
        self,
        tokens: list[Token],
        start: int,
        stop: int,
        scope: Scope,
    ) -> None:
        condition = tokens[start:stop]
        if not strip_negations(condition):
            raise _fail(ConditionError, tokens[stop], detail="missing condition")
        matcher = SignatureMatcher(scope)
        if matcher.match_condition(condition, self.context.builtin_conditions) is None:
            raise _fail(
                ConditionError,
                condition[0],
                detail=f"no condition matches '{_describe(strip_negations(condition))}'",
            )

    def _guard(  # noqa: PLR0913
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        scope: Scope,
        keyword: TokenKind,
        error_cls: ErrorClass,
    ) -> int:
        """Check ``kw: condition next:`` and return the index after ``next:``."""
        word = keyword.value.lower()
        pos = self._expect(
            tokens,
            pos + 1,
            end,
            TokenKind.COLON,
            error_cls,
            f"':' after '{tokens[pos].lexeme}'",
        )
        stop = self._scan_to(tokens, pos, end, keyword)
        if stop >= end or tokens[stop].kind != keyword:
            raise _fail(
                error_cls,
                tokens[stop],
                detail=f"expected '{word}:' after condition, found {tokens[stop]}",
            )
        try:
            self._condition(tokens, pos, stop, scope)
        except ConditionError as e:
            raise _fail(error_cls, e.token, detail=e.message) from e
        return self._expect(
            tokens,
            stop + 1,
            end,
            TokenKind.COLON,
            error_cls,
            f"':' after '{word}'",
        )

    def _guarded_block(  # noqa: PLR0913
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        procedure: Selector | None,
        scope: Scope,
        depth: int,
        error_cls: ErrorClass,
        after: str,
    ) -> int:
        """Validate the ``[ body ]`` a control keyword requires at ``pos``."""
        self._expect(
            tokens,
            pos,
            end,
            TokenKind.BRACKET_OPEN,
            error_cls,
            f"'[' after '{after}'",
        )
        return self._block(tokens, pos, end, procedure, scope, depth)

    def _if_statement(  # noqa: PLR0913
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        procedure: Selector | None,
        scope: Scope,
        depth: int,
    ) -> int:
        pos = self._guard(tokens, pos, end, scope, TokenKind.THEN, IfStatementError)
        close = self._guarded_block(
            tokens, pos, end, procedure, scope, depth, IfStatementError, "then:",
        )
        pos = self._expect(
            tokens, close + 1, end, TokenKind.ELSE, IfStatementError, "'else:'",
        )
        pos = self._expect(
            tokens, pos, end, TokenKind.COLON, IfStatementError, "':' after 'else'",
        )
        close = self._guarded_block(
            tokens, pos, end, procedure, scope, depth, IfStatementError, "else:",
        )
        logger.debug("Validated if statement ending at line %d", tokens[close].line)
        return self._skip_period(tokens, close + 1, end)

    def _while_statement(  # noqa: PLR0913
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        procedure: Selector | None,
        scope: Scope,
        depth: int,
    ) -> int:
        pos = self._guard(tokens, pos, end, scope, TokenKind.DO, WhileStatementError)
        close = self._guarded_block(
            tokens, pos, end, procedure, scope, depth, WhileStatementError, "do:",
        )
        logger.debug("Validated while statement ending at line %d", tokens[close].line)
        return self._skip_period(tokens, close + 1, end)

    def _for_statement(  # noqa: PLR0913
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        procedure: Selector | None,
        scope: Scope,
        depth: int,
    ) -> int:
        pos = self._expect(
            tokens, pos + 1, end, TokenKind.COLON, ForStatementError, "':' after 'for'",
        )
        if pos >= end:
            raise _fail(ForStatementError, tokens[end], detail="missing repeat count")
        count = tokens[pos]
        if not SignatureMatcher(scope).accepts(ParameterDescriptor.numeric(), count):
            raise _fail(
                ForStatementError,
                count,
                detail=f"repeat count {count} is not a number",
            )
        pos = self._expect(
            tokens, pos + 1, end, TokenKind.REPEAT, ForStatementError, "'repeat:'",
        )
        pos = self._expect(
            tokens, pos, end, TokenKind.COLON, ForStatementError, "':' after 'repeat'",
        )
        close = self._guarded_block(
            tokens, pos, end, procedure, scope, depth, ForStatementError, "repeat:",
        )
        logger.debug("Validated for statement ending at line %d", tokens[close].line)
        return self._skip_period(tokens, close + 1, end)

    # --- Simple statements ---

    def _statement_end(self, tokens: list[Token], pos: int, end: int) -> int:
        while pos < end and tokens[pos].kind not in _STATEMENT_STOPS:
            pos += 1
        return pos

    def _finish_statement(
        self,
        tokens: list[Token],
        stop: int,
        end: int,
        error_cls: ErrorClass,
        *,
        closes_block: bool = False,
    ) -> int:
        """Consume the terminator of a simple statement ending at ``stop``.

        Statements end with '.'. When ``closes_block`` is set, the last
        statement of a block may instead end at the block's ']'.
        """
        terminator = tokens[stop]
        if stop < end and terminator.kind == TokenKind.PERIOD:
            return stop + 1
        if stop < end and terminator.kind == TokenKind.BRACKET_CLOSE:
            # Stray ']' is reported by the enclosing range
            return stop
        if (
            stop == end
            and closes_block
            and terminator.kind == TokenKind.BRACKET_CLOSE
        ):
            return stop
        raise _fail(
            error_cls,
            terminator,
            detail=f"expected '.', found {terminator}",
        )

    def _assignment(
        self,
        tokens: list[Token],
        pos: int,
        end: int,
        scope: Scope,
    ) -> int:
        stop = self._statement_end(tokens, pos, end)
        statement = tokens[pos:stop]
        if len(statement) < _ASSIGNMENT_LENGTH:
            raise _fail(
                VariableAssignmentError,
                tokens[stop],
                detail=f"missing value before {tokens[stop]}",
            )
        if len(statement) > _ASSIGNMENT_LENGTH:
            extra = statement[_ASSIGNMENT_LENGTH]
            raise _fail(
                VariableAssignmentError,
                extra,
                detail=f"expected '.' after the value, found {extra}",
            )

        target, _, value = statement
        if value.kind not in _ASSIGNABLE_KINDS:
            raise _fail(
                VariableAssignmentError,
                value,
                detail=f"expected a number, constant or variable, found {value}",
            )
        for name in (target, value):
            if name.kind == TokenKind.IDENTIFIER and not scope.is_defined(name.lexeme):
                raise _fail(
                    VariableAssignmentError,
                    name,
                    detail=f"'{name.lexeme}' used but never defined",
                )
        scope.bind(target.lexeme, value)
        return self._finish_statement(tokens, stop, end, VariableAssignmentError)

    def _call(self, tokens: list[Token], pos: int, end: int, scope: Scope) -> int:
        stop = self._statement_end(tokens, pos, end)
        call = tokens[pos:stop]
        if not call:
            raise _fail(
                ProcedureCallError,
                tokens[pos],
                detail=f"expected a statement, found {tokens[pos]}",
            )

        matcher = SignatureMatcher(scope)
        matched = matcher.match(call, self.context.user_procedures)
        if matched is None:
            matched = matcher.match(call, self.context.builtin_procedures)
        if matched is None:
            raise _fail(
                ProcedureCallError,
                call[0],
                detail=f"no procedure matches '{_describe(call)}'",
            )
        return self._finish_statement(
            tokens,
            stop,
            end,
            ProcedureCallError,
            closes_block=True,
        )
