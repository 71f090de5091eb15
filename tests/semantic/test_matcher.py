"""Tests for keyword-message parsing and signature matching."""

from robolang.lexer import Token, TokenKind, tokenize
from robolang.semantic.matcher import (
    SignatureMatcher,
    parse_message,
    strip_negations,
)
from robolang.semantic.registry import (
    DIRECTIONS,
    ParameterDescriptor,
    Selector,
    builtin_conditions,
    builtin_procedures,
)
from robolang.semantic.scope import Scope, ScopeType


def run(text: str) -> list[Token]:
    """Tokens of ``text`` without the trailing END."""
    return tokenize(text)[:-1]


def scope_with(**bindings: str) -> Scope:
    """Global scope with each name bound to the single token of its text."""
    scope = Scope(ScopeType.GLOBAL)
    for name, value in bindings.items():
        scope.declare(name)
        scope.bind(name, run(value)[0])
    return scope


class TestParseMessage:
    """Test reading message shapes from token runs."""

    def test_unary(self) -> None:
        """A lone identifier is a unary message."""
        message = parse_message(run("nop"))
        assert message is not None
        assert message.selector == Selector.parse("nop")
        assert message.arguments == ()

    def test_keyword(self) -> None:
        """Part, colon and argument triples form a keyword message."""
        message = parse_message(run("move: 3 inDir: #north"))
        assert message is not None
        assert message.selector == Selector.parse("move:inDir:")
        assert [a.lexeme for a in message.arguments] == ["3", "#north"]
        assert message.head.lexeme == "move"

    def test_missing_argument(self) -> None:
        """A keyword part without an argument is not a message."""
        assert parse_message(run("move:")) is None
        assert parse_message(run("move: 3 inDir:")) is None

    def test_argument_must_be_single_token(self) -> None:
        """Arguments are one identifier, number or constant."""
        assert parse_message(run("move: 3 4")) is None
        assert parse_message(run("move: [ inDir: 4")) is None

    def test_must_start_with_identifier(self) -> None:
        """Runs starting with anything but an identifier are not messages."""
        assert parse_message(run("5")) is None
        assert parse_message([]) is None


class TestStripNegations:
    """Test removal of 'not:' prefixes."""

    def test_single(self) -> None:
        """One prefix is removed."""
        assert strip_negations(run("not: facing: #north")) == run("facing: #north")

    def test_repeated(self) -> None:
        """Any number of prefixes is removed."""
        stripped = strip_negations(run("not: not: not: facing: #north"))
        assert stripped == run("facing: #north")

    def test_plain_condition_unchanged(self) -> None:
        """Conditions without the prefix pass through."""
        tokens = run("canMove: 1 inDir: #east")
        assert strip_negations(tokens) == tokens

    def test_not_as_argument_is_kept(self) -> None:
        """'not' only counts as a prefix when followed by a colon."""
        tokens = run("not")
        assert strip_negations(tokens) == tokens


class TestAccepts:
    """Test argument checks against descriptors."""

    def test_numeric_literal(self) -> None:
        """Number literals satisfy numeric slots."""
        matcher = SignatureMatcher(Scope(ScopeType.GLOBAL))
        assert matcher.accepts(ParameterDescriptor.numeric(), run("4")[0])
        assert not matcher.accepts(ParameterDescriptor.numeric(), run("#north")[0])

    def test_numeric_variable(self) -> None:
        """Variables resolving to numbers satisfy numeric slots."""
        matcher = SignatureMatcher(scope_with(n="4", d="#north"))
        assert matcher.accepts(ParameterDescriptor.numeric(), run("n")[0])
        assert not matcher.accepts(ParameterDescriptor.numeric(), run("d")[0])
        assert not matcher.accepts(ParameterDescriptor.numeric(), run("ghost")[0])

    def test_numeric_placeholder(self) -> None:
        """Unbound procedure parameters satisfy numeric slots."""
        scope = Scope(ScopeType.PROCEDURE)
        scope.declare("n", parameter=True)
        matcher = SignatureMatcher(scope)
        assert matcher.accepts(ParameterDescriptor.numeric(), run("n")[0])

    def test_symbolic_requires_literal_member(self) -> None:
        """Enumerated slots take only allowed constants written in place."""
        descriptor = ParameterDescriptor.symbolic(DIRECTIONS)
        matcher = SignatureMatcher(scope_with(d="#north"))
        assert matcher.accepts(descriptor, run("#north")[0])
        assert not matcher.accepts(descriptor, run("#left")[0])
        assert not matcher.accepts(descriptor, run("d")[0])

    def test_any_variable(self) -> None:
        """Open slots take defined variables and literals."""
        scope = Scope(ScopeType.GLOBAL)
        scope.declare("x")
        matcher = SignatureMatcher(scope)
        descriptor = ParameterDescriptor.any_variable()
        assert matcher.accepts(descriptor, run("x")[0])
        assert matcher.accepts(descriptor, run("7")[0])
        assert matcher.accepts(descriptor, run("#chips")[0])
        assert not matcher.accepts(descriptor, run("y")[0])


class TestMatch:
    """Test matching calls against registries."""

    def test_picks_full_selector(self) -> None:
        """Candidates sharing a first part are told apart by the whole selector."""
        matcher = SignatureMatcher(Scope(ScopeType.GLOBAL))
        registry = builtin_procedures()
        single = matcher.match(run("move: 2"), registry)
        relative = matcher.match(run("move: 2 toThe: #left"), registry)
        compass = matcher.match(run("move: 2 inDir: #west"), registry)
        assert single is not None
        assert single.selector.key == "move:"
        assert relative is not None
        assert relative.selector.key == "move:toThe:"
        assert compass is not None
        assert compass.selector.key == "move:inDir:"

    def test_wrong_enum_set(self) -> None:
        """A constant from another set does not match."""
        matcher = SignatureMatcher(Scope(ScopeType.GLOBAL))
        assert matcher.match(run("move: 2 inDir: #left"), builtin_procedures()) is None
        assert matcher.match(run("move: 2 toThe: #north"), builtin_procedures()) is None

    def test_unknown_selector(self) -> None:
        """Calls with no registered selector do not match."""
        matcher = SignatureMatcher(Scope(ScopeType.GLOBAL))
        assert matcher.match(run("fly: 3"), builtin_procedures()) is None
        assert matcher.match(run("move: 3 upTo: 4"), builtin_procedures()) is None

    def test_unary_is_not_keyword(self) -> None:
        """'move' alone does not match 'move:'."""
        matcher = SignatureMatcher(Scope(ScopeType.GLOBAL))
        assert matcher.match(run("move"), builtin_procedures()) is None
        assert matcher.match(run("nop"), builtin_procedures()) is not None

    def test_goto_with_variables(self) -> None:
        """Numeric slots accept variables bound through chains."""
        scope = scope_with(x="3")
        scope.declare("y")
        scope.bind("y", run("x")[0])
        matcher = SignatureMatcher(scope)
        assert matcher.match(run("goTo: x with: y"), builtin_procedures()) is not None

    def test_negated_condition(self) -> None:
        """Negated conditions match after stripping the prefix."""
        matcher = SignatureMatcher(Scope(ScopeType.GLOBAL))
        registry = builtin_conditions()
        matched = matcher.match_condition(run("not: canPick: 1 ofType: #chips"), registry)
        assert matched is not None
        assert matched.selector.key == "canPick:ofType:"
        assert matcher.match_condition(run("not: facing: #up"), registry) is None

    def test_condition_not_a_procedure(self) -> None:
        """Conditions are not procedures."""
        matcher = SignatureMatcher(Scope(ScopeType.GLOBAL))
        assert matcher.match(run("facing: #north"), builtin_procedures()) is None
