from __future__ import annotations

from typing import Any

import pytest

import servicebind
from servicebind.bindings import CONTAINER
from servicebind.container import Container
from servicebind.container_context import ContainerContext, container_context
from servicebind.exceptions import (
    ContainerNotSetError,
    InvalidAliasError,
    InvalidBindingIdentifierError,
    InvalidBindingValueError,
)
from servicebind.reference import Reference


class _Service:
    def __init__(self, value: str = "service") -> None:
        self.value = value

    def describe(self, prefix: str = "") -> str:
        return f"{prefix}{self.value}"


class _CustomContainer(Container):
    pass


def test_top_level_container_context_export_is_available() -> None:
    assert isinstance(servicebind.container_context, ContainerContext)
    assert servicebind.container_context is container_context


def test_get_current_raises_when_context_is_unbound() -> None:
    context = ContainerContext()

    with pytest.raises(ContainerNotSetError, match="set_current"):
        context.get_current()

    assert not context.has_current


@pytest.mark.parametrize(
    "operation",
    [
        lambda context: context.make(_Service),
        lambda context: context.get(_Service),
        lambda context: context.has(_Service),
        lambda context: context.call(lambda: None),
    ],
)
def test_forwarding_raises_when_context_is_unbound(operation: Any) -> None:
    with pytest.raises(ContainerNotSetError):
        operation(ContainerContext())


def test_set_current_binds_container_and_registers_it() -> None:
    context = ContainerContext()
    container = Container()

    context.set_current(container)

    assert context.get_current() is container
    assert context.has_current
    assert container.make(CONTAINER) is container


def test_forwarding_uses_bound_container() -> None:
    context = ContainerContext()
    container = Container()
    container.singleton("service", _Service)
    context.set_current(container)

    assert context.make("service") is container.make("service")
    assert context.get("service") is container.make("service")
    assert context.has("service")
    assert context.make(_Service, "explicit").value == "explicit"
    assert context.call(Reference(_Service, "describe"), "> ") == "> service"


def test_get_instance_creates_and_binds_a_container_once() -> None:
    context = ContainerContext()

    first = context.get_instance()
    second = context.get_instance()

    assert isinstance(first, Container)
    assert first is second
    assert context.get_current() is first


def test_get_instance_uses_factory() -> None:
    context = ContainerContext()

    assert isinstance(context.get_instance(_CustomContainer), _CustomContainer)


def test_set_instance_replaces_or_unbinds() -> None:
    context = ContainerContext()
    container = Container()

    assert context.set_instance(container) is container
    assert context.get_current() is container

    assert context.set_instance(None) is None
    assert not context.has_current
    assert container.has(CONTAINER)


def test_destroy_flushes_and_unbinds() -> None:
    context = ContainerContext()
    container = Container()
    container.bind("service", _Service)
    context.set_current(container)

    context.destroy()

    assert not context.has_current
    assert not container.has("service")
    assert not container.has(CONTAINER)


def test_destroy_without_container_is_a_no_op() -> None:
    ContainerContext().destroy()


def test_registrations_before_binding_are_replayed() -> None:
    context = ContainerContext()
    service = _Service("instance")

    context.bind("transient", _Service)
    context.singleton("shared", _Service)
    context.instance("instance", service)
    context.alias("shared", "shared-alias")

    container = Container()
    context.set_current(container)

    assert isinstance(container.make("transient"), _Service)
    assert container.make("shared") is container.make("shared-alias")
    assert container.bindings["shared"].shared
    assert container.make("instance") is service


def test_registrations_after_binding_are_applied_and_recorded() -> None:
    context = ContainerContext()
    first = Container()
    context.set_current(first)

    context.singleton("shared", _Service)

    assert first.has("shared")

    second = Container()
    context.set_current(second)

    assert second.has("shared")
    assert second.make("shared") is not first.make("shared")


def test_replay_preserves_registration_order() -> None:
    context = ContainerContext()
    context.bind("service", lambda _container: "first")
    context.bind("service", lambda _container: "second")

    container = Container()
    context.set_current(container)

    assert container.make("service") == "second"


def test_clear_operations_stops_replay() -> None:
    context = ContainerContext()
    context.bind("service", _Service)
    context.clear_operations()

    container = Container()
    context.set_current(container)

    assert not container.has("service")


def test_destroy_keeps_recorded_registrations() -> None:
    context = ContainerContext()
    context.bind("service", _Service)
    context.set_current(Container())

    context.destroy()
    replacement = Container()
    context.set_current(replacement)

    assert replacement.has("service")


def test_invalid_registrations_are_rejected_before_recording() -> None:
    context = ContainerContext()

    with pytest.raises(InvalidBindingIdentifierError):
        context.bind(None, _Service)
    with pytest.raises(InvalidBindingValueError):
        context.singleton("service", "not callable")  # type: ignore[arg-type]
    with pytest.raises(InvalidBindingIdentifierError):
        context.instance(1, object())
    with pytest.raises(InvalidAliasError):
        context.alias("service", "service")

    container = Container()
    context.set_current(container)

    assert len(container.bindings) == 0
    assert len(container.aliases) == 0
    assert list(container.instances) == [CONTAINER]


def test_instance_returns_the_value() -> None:
    context = ContainerContext()
    value = object()

    assert context.instance("value", value) is value


def test_container_class_methods_delegate_to_global_context() -> None:
    container = Container.get_instance()

    assert container_context.get_current() is container
    assert Container.get_instance() is container

    replacement = Container()
    assert Container.set_instance(replacement) is replacement
    assert container_context.get_current() is replacement

    Container.destroy()

    assert not container_context.has_current


def test_container_subclass_get_instance_creates_subclass() -> None:
    assert isinstance(_CustomContainer.get_instance(), _CustomContainer)
