"""Variable scopes for robot-control language validation.

Track declared variables and their current bindings. A procedure body
gets a local scope whose parent is the global scope; lookups search the
local scope first. Variable types are resolved by following bindings
from one variable to the next until a literal is reached.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from robolang.lexer.tokens import Token, TokenKind
from robolang.log import get_logger

logger = get_logger(__name__)


class ScopeType(Enum):
    """Type of scope for variable visibility rules."""

    GLOBAL = auto()
    PROCEDURE = auto()


class ValueType(Enum):
    """Resolved type of a variable."""

    NUMERIC = auto()
    SYMBOLIC = auto()
    PLACEHOLDER = auto()
    """An unbound procedure parameter; its type is only known at call time."""


_LITERAL_TYPES = {
    TokenKind.NUMBER: ValueType.NUMERIC,
    TokenKind.CONSTANT: ValueType.SYMBOLIC,
}


@dataclass(eq=False)
class Binding:
    """A declared variable and the token it is currently bound to."""

    name: str
    """Variable name."""

    value: Token | None = None
    """Literal or identifier token, or None while unbound."""

    parameter: bool = False
    """Whether the variable is a procedure parameter."""

    @property
    def is_bound(self) -> bool:
        """Whether an assignment has bound the variable."""
        return self.value is not None


@dataclass
class Scope:
    """Variable bindings visible while validating a range of tokens.

    Support a parent scope so procedure locals fall back to globals.
    """

    scope_type: ScopeType
    """Type of this scope."""

    parent: "Scope | None" = None
    """Enclosing scope searched after this one."""

    _bindings: dict[str, Binding] = field(default_factory=dict)
    """Variables declared in this scope."""

    def declare(self, name: str, *, parameter: bool = False) -> Binding:
        """Declare an unbound variable in this scope.

        Redeclaring an existing name resets it to unbound.

        Args:
            name: Variable name.
            parameter: Whether the name is a procedure parameter.

        Returns:
            The new binding.

        """
        binding = Binding(name=name, parameter=parameter)
        self._bindings[name] = binding
        logger.debug("Declared %s in %s scope", name, self.scope_type.name)
        return binding

    def find(self, name: str) -> tuple[Binding, "Scope"] | None:
        """Find a binding and the scope that owns it, searching parents."""
        if name in self._bindings:
            return self._bindings[name], self
        if self.parent is not None:
            return self.parent.find(name)
        return None

    def lookup(self, name: str) -> Binding | None:
        """Look up a binding by name, searching parent scopes."""
        found = self.find(name)
        return found[0] if found is not None else None

    def is_defined(self, name: str) -> bool:
        """Check whether a name is visible from this scope."""
        return self.find(name) is not None

    def is_defined_locally(self, name: str) -> bool:
        """Check whether a name is declared in this scope only."""
        return name in self._bindings

    def bind(self, name: str, value: Token) -> Binding:
        """Rebind a visible variable to a new token.

        Args:
            name: Variable name; must already be declared.
            value: Literal or identifier token.

        Returns:
            The updated binding.

        Raises:
            KeyError: If the name is not visible from this scope.

        """
        binding = self.lookup(name)
        if binding is None:
            raise KeyError(name)
        binding.value = value
        logger.debug("Bound %s to %s", name, value)
        return binding

    def resolve_type(self, name: str) -> ValueType | None:
        """Resolve the type a variable currently holds.

        Follow identifier bindings transitively, every hop looked up from
        this scope, until a literal or an unbound parameter is reached.

        Args:
            name: Variable name.

        Returns:
            The resolved type, or None for undefined names, unbound
            variables and binding cycles.

        """
        visited: set[int] = set()
        current = name
        while True:
            binding = self.lookup(current)
            if binding is None:
                return None
            if id(binding) in visited:
                logger.debug("Binding cycle while resolving %s", name)
                return None
            visited.add(id(binding))

            value = binding.value
            if value is None:
                return ValueType.PLACEHOLDER if binding.parameter else None
            if value.kind in _LITERAL_TYPES:
                return _LITERAL_TYPES[value.kind]
            current = value.lexeme

    def names(self) -> list[str]:
        """Return the names declared in this scope, in declaration order."""
        return list(self._bindings)
