from __future__ import annotations

import numbers
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any, TypeAlias

from servicebind._internal.type_checks import is_runtime_class
from servicebind.exceptions import InvalidBindingIdentifierError, InvalidBindingValueError

BindingIdentifier: TypeAlias = Any
"""A key used to request a value from the container (also known as "abstract").

Strings, ``Token`` instances, classes, functions and plain objects are accepted.
Equality follows ``dict`` key equality.
"""

FactoryCallback: TypeAlias = Callable[..., Any]
"""A callable invoked as ``factory(container, *params)`` to produce a value."""


class Token:
    """Unique named marker usable as a binding identifier.

    Two tokens are never equal unless they are the same object, even when
    created with the same description.

    Examples:
        .. code-block:: python

            GREETER = Token("greeter")
            container.bind(GREETER, Greeter)

    """

    __slots__ = ("description",)

    def __init__(self, description: str) -> None:
        self.description = description

    def __repr__(self) -> str:
        return f"Token({self.description})"

    __str__ = __repr__


CONTAINER = Token("servicebind.container")
"""Identifier under which bound containers register themselves."""


@dataclass(frozen=True, slots=True)
class FactoryValue:
    """Binding value produced by invoking a factory callback."""

    factory: FactoryCallback


@dataclass(frozen=True, slots=True)
class ClassValue:
    """Binding value produced by instantiating a class."""

    cls: type[Any]


BindingValue: TypeAlias = FactoryValue | ClassValue


@dataclass(frozen=True, slots=True)
class Binding:
    """Registered recipe for producing the value of an identifier.

    The value kind is fixed when the binding is created; ``shared`` bindings
    are cached by the container after their first resolution.
    """

    abstract: BindingIdentifier
    """The identifier the binding was registered under."""
    value: BindingValue
    """Factory callback or class reference, tagged by kind."""
    shared: bool = False
    """Whether the resolved value is cached and reused."""

    @classmethod
    def create(
        cls,
        abstract: BindingIdentifier,
        concrete: FactoryCallback | type[Any],
        *,
        shared: bool = False,
    ) -> Binding:
        """Validate ``abstract``/``concrete`` and return a new binding.

        Raises:
            InvalidBindingIdentifierError: If ``abstract`` is not a valid identifier.
            InvalidBindingValueError: If ``concrete`` is neither a class nor callable.

        """
        assert_binding_identifier(abstract)
        return cls(abstract=abstract, value=make_binding_value(concrete), shared=shared)

    @property
    def concrete(self) -> FactoryCallback | type[Any]:
        """Return the raw factory callback or class of this binding."""
        if isinstance(self.value, ClassValue):
            return self.value.cls
        return self.value.factory

    @property
    def is_factory_callback(self) -> bool:
        return isinstance(self.value, FactoryValue)

    @property
    def is_class_reference(self) -> bool:
        return isinstance(self.value, ClassValue)


def make_binding_value(concrete: object) -> BindingValue:
    """Tag a registration value as a class reference or a factory callback."""
    if is_runtime_class(concrete):
        return ClassValue(concrete)
    if callable(concrete):
        return FactoryValue(concrete)
    msg = (
        "Invalid binding value. Expected a factory callback or a class reference. "
        f"Got {type(concrete).__name__!r} instead."
    )
    raise InvalidBindingValueError(msg)


def assert_binding_identifier(identifier: object) -> None:
    """Raise when ``identifier`` cannot be used as a binding key.

    Raises:
        InvalidBindingIdentifierError: For ``None``, booleans, numbers and
            unhashable values.

    """
    if identifier is None:
        msg = "Invalid binding identifier. None cannot be used as a binding identifier."
        raise InvalidBindingIdentifierError(msg)

    if isinstance(identifier, bool | numbers.Number) or not isinstance(identifier, Hashable):
        msg = (
            "Invalid binding identifier. Expected either of: str, Token, class, function, object. "
            f"Got {type(identifier).__name__!r} instead."
        )
        raise InvalidBindingIdentifierError(msg)

    try:
        hash(identifier)
    except TypeError as exc:
        msg = f"Invalid binding identifier. {type(identifier).__name__!r} is not hashable."
        raise InvalidBindingIdentifierError(msg) from exc


def identifier_to_string(identifier: BindingIdentifier) -> str:
    """Return a string representation of a binding identifier for messages.

    Strings are returned unchanged, tokens render as ``Token(description)``,
    everything else renders as its type name.
    """
    if isinstance(identifier, str):
        return identifier
    if isinstance(identifier, Token):
        return str(identifier)
    return type(identifier).__name__


__all__ = [
    "CONTAINER",
    "Binding",
    "BindingIdentifier",
    "BindingValue",
    "ClassValue",
    "FactoryCallback",
    "FactoryValue",
    "Token",
    "assert_binding_identifier",
    "identifier_to_string",
    "make_binding_value",
]
