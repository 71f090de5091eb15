"""Procedure and condition registries.

Provide the selector and signature value types, the registry that maps
selectors to parameter descriptors, and the fixed tables of built-in
robot procedures and conditions.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from functools import cache

from robolang.log import get_logger

logger = get_logger(__name__)

DIRECTIONS = frozenset({"#north", "#south", "#west", "#east"})
"""Compass directions."""

TURNS = frozenset({"#left", "#right", "#around"})
"""Relative turns."""

ITEM_TYPES = frozenset({"#chips", "#balloons"})
"""Objects the robot can put or pick."""

RELATIVE_DIRECTIONS = frozenset({"#front", "#back", "#left", "#right"})
"""Directions relative to where the robot faces."""


class ParameterKind(Enum):
    """What an argument slot accepts."""

    NUMERIC = auto()
    SYMBOLIC_ENUM = auto()
    ANY_VARIABLE = auto()


@dataclass(frozen=True)
class ParameterDescriptor:
    """Expected kind of one argument of a signature."""

    kind: ParameterKind
    """What the slot accepts."""

    allowed: frozenset[str] = frozenset()
    """Constant lexemes accepted by a SYMBOLIC_ENUM slot."""

    @classmethod
    def numeric(cls) -> "ParameterDescriptor":
        """Slot for a number literal or a variable resolving to a number."""
        return cls(ParameterKind.NUMERIC)

    @classmethod
    def symbolic(cls, allowed: frozenset[str]) -> "ParameterDescriptor":
        """Slot for a constant literal drawn from ``allowed``."""
        return cls(ParameterKind.SYMBOLIC_ENUM, allowed)

    @classmethod
    def any_variable(cls) -> "ParameterDescriptor":
        """Slot for any variable in scope."""
        return cls(ParameterKind.ANY_VARIABLE)

    def __str__(self) -> str:
        """Render the descriptor for diagnostics."""
        if self.kind == ParameterKind.SYMBOLIC_ENUM:
            return "one of " + ", ".join(sorted(self.allowed))
        if self.kind == ParameterKind.NUMERIC:
            return "a number"
        return "a variable"


@dataclass(frozen=True)
class Selector:
    """Keyword-message pattern identifying a procedure or condition.

    ``move: n inDir: d`` has parts ``("move", "inDir")`` and is a keyword
    selector; ``nop`` is a unary selector with the single part ``"nop"``.
    Selectors are plain values: equal parts and shape mean the same
    selector wherever the tokens came from.
    """

    parts: tuple[str, ...]
    keyword: bool = True

    @classmethod
    def parse(cls, text: str) -> "Selector":
        """Build a selector from its canonical text (``move:inDir:``)."""
        if ":" not in text:
            return cls((text,), keyword=False)
        return cls(tuple(text.rstrip(":").split(":")), keyword=True)

    @property
    def key(self) -> str:
        """Canonical text of the selector."""
        if not self.keyword:
            return self.parts[0]
        return "".join(f"{part}:" for part in self.parts)

    @property
    def arity(self) -> int:
        """Number of arguments a call with this selector takes."""
        return len(self.parts) if self.keyword else 0

    @property
    def head(self) -> str:
        """First keyword part."""
        return self.parts[0]

    def __str__(self) -> str:
        """Render the canonical text."""
        return self.key


@dataclass(frozen=True)
class Signature:
    """A selector with the descriptors of its arguments, in order."""

    selector: Selector
    parameters: tuple[ParameterDescriptor, ...] = ()

    def __post_init__(self) -> None:
        """Check the descriptor count against the selector shape."""
        if len(self.parameters) != self.selector.arity:
            msg = (
                f"signature {self.selector} takes {self.selector.arity} "
                f"arguments, got {len(self.parameters)} descriptors"
            )
            raise ValueError(msg)


@dataclass
class Registry:
    """Ordered table of signatures keyed by selector.

    Registering a selector that is already present replaces its entry,
    so the latest registration governs later lookups.
    """

    name: str
    """Registry name used in log records."""

    _entries: dict[Selector, Signature] = field(default_factory=dict)

    def register(self, signature: Signature) -> None:
        """Add or replace the entry for the signature's selector."""
        if signature.selector in self:
            logger.debug(
                "Redefining %s in %s registry",
                signature.selector,
                self.name,
            )
        self._entries[signature.selector] = signature

    def lookup(self, selector: Selector) -> Signature | None:
        """Return the signature registered under ``selector``."""
        return self._entries.get(selector)

    def candidates(self, head: str) -> list[Signature]:
        """Return signatures whose first keyword part is ``head``."""
        return [s for s in self._entries.values() if s.selector.head == head]

    def __contains__(self, selector: object) -> bool:
        """Check whether a selector is registered."""
        return selector in self._entries

    def __len__(self) -> int:
        """Return the number of registered selectors."""
        return len(self._entries)


def _signature(selector: str, *parameters: ParameterDescriptor) -> Signature:
    return Signature(Selector.parse(selector), tuple(parameters))


@cache
def builtin_procedure_signatures() -> tuple[Signature, ...]:
    """Built-in robot procedures, constructed on first use."""
    logger.debug("Building built-in procedure table")
    number = ParameterDescriptor.numeric()
    items = ParameterDescriptor.symbolic(ITEM_TYPES)
    directions = ParameterDescriptor.symbolic(DIRECTIONS)
    relative = ParameterDescriptor.symbolic(RELATIVE_DIRECTIONS)
    return (
        _signature("goTo:with:", number, number),
        _signature("move:", number),
        _signature("turn:", ParameterDescriptor.symbolic(TURNS)),
        _signature("face:", directions),
        _signature("put:ofType:", number, items),
        _signature("pick:ofType:", number, items),
        _signature("move:toThe:", number, relative),
        _signature("jump:toThe:", number, relative),
        _signature("move:inDir:", number, directions),
        _signature("jump:inDir:", number, directions),
        _signature("nop"),
    )


@cache
def builtin_condition_signatures() -> tuple[Signature, ...]:
    """Built-in robot conditions, constructed on first use."""
    logger.debug("Building built-in condition table")
    number = ParameterDescriptor.numeric()
    items = ParameterDescriptor.symbolic(ITEM_TYPES)
    directions = ParameterDescriptor.symbolic(DIRECTIONS)
    relative = ParameterDescriptor.symbolic(RELATIVE_DIRECTIONS)
    return (
        _signature("facing:", directions),
        _signature("canPut:ofType:", number, items),
        _signature("canPick:ofType:", number, items),
        _signature("canMove:inDir:", number, directions),
        _signature("canJump:inDir:", number, directions),
        _signature("canMove:toThe:", number, relative),
        _signature("canJump:toThe:", number, relative),
    )


def _seeded(name: str, signatures: tuple[Signature, ...]) -> Registry:
    registry = Registry(name)
    for signature in signatures:
        registry.register(signature)
    return registry


def builtin_procedures() -> Registry:
    """Create a registry holding the built-in procedures."""
    return _seeded("builtin procedures", builtin_procedure_signatures())


def builtin_conditions() -> Registry:
    """Create a registry holding the built-in conditions."""
    return _seeded("builtin conditions", builtin_condition_signatures())


def user_procedures() -> Registry:
    """Create an empty registry for procedures defined with ``proc``."""
    return Registry("user procedures")
