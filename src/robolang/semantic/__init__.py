"""Semantic validation for the robot-control language.

Provide the procedure and condition registries, variable scopes, the
signature matcher, and the recursive structural validator.
"""

from robolang.semantic.errors import RobolangValidationError
from robolang.semantic.matcher import SignatureMatcher
from robolang.semantic.registry import (
    ParameterDescriptor,
    ParameterKind,
    Registry,
    Selector,
    Signature,
)
from robolang.semantic.scope import Scope, ScopeType, ValueType
from robolang.semantic.validator import StructuralValidator, ValidationContext

__all__ = [
    "ParameterDescriptor",
    "ParameterKind",
    "Registry",
    "RobolangValidationError",
    "Scope",
    "ScopeType",
    "Selector",
    "Signature",
    "SignatureMatcher",
    "StructuralValidator",
    "ValidationContext",
    "ValueType",
]
