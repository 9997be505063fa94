from __future__ import annotations

from typing import Any

import pytest

from servicebind.container import Container
from servicebind.exceptions import BindingError, BindingResolutionError
from servicebind.reference import Reference


class Greeter:
    def __init__(self, *params: Any) -> None:
        self.params = params

    def greet(self, name: str = "world") -> str:
        return f"hello {name}"

    def params_of(self, *params: Any) -> tuple[Any, ...]:
        return params

    def __call__(self, *params: Any) -> tuple[Any, ...]:
        return ("called", *params)

    attribute = "not callable"


class Name:
    def __str__(self) -> str:
        return "injected"


def test_call_plain_function_with_params(container: Container) -> None:
    assert container.call(lambda left, right: left + right, 1, 2) == 3


def test_call_function_without_params_or_dependencies(container: Container) -> None:
    assert container.call(lambda: "no args") == "no args"


def test_call_function_with_declared_dependencies(isolated_container: Container) -> None:
    def handler(first: str, second: str) -> str:
        return f"{first}-{second}"

    isolated_container.instance("first", "a")
    isolated_container.instance("second", "b")
    isolated_container.reflector.set(handler, ["first", "second"])

    assert isolated_container.call(handler) == "a-b"
    assert isolated_container.call(handler, "x", "y") == "x-y"


def test_call_reference_builds_class_target(container: Container) -> None:
    assert container.call(Reference(Greeter, "greet")) == "hello world"


def test_call_reference_with_explicit_params(container: Container) -> None:
    assert container.call(Reference(Greeter, "greet"), "you") == "hello you"


def test_call_reference_with_attached_params(container: Container) -> None:
    reference = Reference.make(Greeter, "params_of").with_params(1).with_params(2, 3)

    assert container.call(reference) == (1, 2, 3)


def test_explicit_params_take_precedence_over_attached(container: Container) -> None:
    reference = Reference(Greeter, "params_of").with_params("attached")

    assert container.call(reference, "explicit") == ("explicit",)


def test_attached_params_take_precedence_over_dependencies(
    isolated_container: Container,
) -> None:
    isolated_container.reflector.set(Greeter.params_of, ["dependency"])
    reference = Reference(Greeter, "params_of").with_params("attached")

    assert isolated_container.call(reference) == ("attached",)


def test_method_dependencies_are_injected(isolated_container: Container) -> None:
    isolated_container.reflector.set(Greeter.greet, [Name])

    assert isolated_container.call(Reference(Greeter, "greet")) == "hello injected"


def test_tuple_reference(container: Container) -> None:
    assert container.call((Greeter, "greet"), "tuple") == "hello tuple"
    assert container.call([Greeter, "greet"]) == "hello world"


def test_default_reference_method_invokes_target(container: Container) -> None:
    assert container.call(Reference(Greeter), 1) == ("called", 1)


def test_reference_to_object_uses_it_as_receiver(container: Container) -> None:
    greeter = Greeter()

    assert container.call(Reference(greeter, "greet"), "object") == "hello object"


def test_reference_target_is_built_with_its_dependencies(isolated_container: Container) -> None:
    isolated_container.instance("config", {"debug": True})
    isolated_container.reflector.set(Greeter, ["config"])

    result = isolated_container.call(Reference(Greeter, "params_of").with_params("x"))

    assert result == ("x",)


def test_missing_method_fails(container: Container) -> None:
    with pytest.raises(BindingError, match='Method "missing" does not exist in Greeter'):
        container.call(Reference(Greeter, "missing"))


def test_non_callable_member_fails(container: Container) -> None:
    with pytest.raises(BindingError, match='Method "attribute" does not exist'):
        container.call((Greeter, "attribute"))


def test_non_callable_value_fails(container: Container) -> None:
    with pytest.raises(BindingError, match="not callable"):
        container.call("not callable")  # type: ignore[arg-type]


def test_malformed_tuple_reference_fails(container: Container) -> None:
    with pytest.raises(BindingError, match="pair"):
        container.call((Greeter, "greet", "extra"))

    with pytest.raises(BindingError, match="pair"):
        container.call((Greeter, 1))


def test_unresolvable_method_dependency_is_wrapped(isolated_container: Container) -> None:
    def handler(value: Any) -> Any:
        return value

    isolated_container.reflector.set(handler, ["missing"])

    with pytest.raises(BindingResolutionError, match='dependency "missing" for'):
        isolated_container.call(handler)


def test_reference_accessors() -> None:
    reference = Reference(Greeter)

    assert reference.target is Greeter
    assert reference.method == "__call__"
    assert not reference.has_parameters
    assert reference.parameters == []

    reference.with_params(1)
    reference.parameters.append(2)

    assert reference.has_parameters
    assert reference.parameters == [1]
    assert repr(Reference(Greeter, "greet")).endswith("'greet')")


def test_reference_from_tuple() -> None:
    reference = Reference.from_tuple((Greeter, "greet"))

    assert reference.target is Greeter
    assert reference.method == "greet"
