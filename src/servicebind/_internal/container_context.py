from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias, TypeVar, cast, overload

from servicebind._internal.bindings import (
    CONTAINER,
    Binding,
    BindingIdentifier,
    FactoryCallback,
    assert_binding_identifier,
)
from servicebind._internal.container import Container
from servicebind._internal.reference import Reference
from servicebind.exceptions import ContainerNotSetError, InvalidAliasError

T = TypeVar("T")
C = TypeVar("C", bound=Container)

logger = logging.getLogger(__name__)

_RegistrationMethod: TypeAlias = Literal["bind", "instance", "alias"]


@dataclass(frozen=True, slots=True)
class _RegistrationOperation:
    """Container registration operation replayed by ContainerContext."""

    method_name: _RegistrationMethod
    args: tuple[Any, ...]

    def apply(self, container: Container) -> None:
        registration_method = cast("Callable[..., Any]", getattr(container, self.method_name))
        registration_method(*self.args)


class ContainerContext:
    """Hold the process-wide container with explicit setup and teardown.

    Registrations made through the context before a container is bound are
    recorded and replayed, in order, when ``set_current`` binds one. After
    that they are applied immediately and still recorded, so a replacement
    container receives them as well.

    The binding is process-global for this instance, not task-local or
    thread-local.
    """

    def __init__(self) -> None:
        self._container: Container | None = None
        self._operations: list[_RegistrationOperation] = []

    def set_current(self, container: Container) -> None:
        """Bind the active container and replay recorded registrations.

        The container is also registered as an instance under ``CONTAINER``.

        Args:
            container: Container to bind as the active target.

        """
        self._container = container
        container.instance(CONTAINER, container)
        self._populate(container)
        logger.debug("Bound %r as current container", container)

    def get_current(self) -> Container:
        """Return the bound container.

        Raises:
            ContainerNotSetError: If no container has been bound yet.

        """
        if self._container is None:
            msg = (
                "Container is not set for container_context. "
                "Call container_context.set_current(container) before using container_context."
            )
            raise ContainerNotSetError(msg)
        return self._container

    @property
    def has_current(self) -> bool:
        return self._container is not None

    @overload
    def get_instance(self) -> Container: ...

    @overload
    def get_instance(self, factory: Callable[[], C]) -> C: ...

    def get_instance(self, factory: Callable[[], Container] = Container) -> Container:
        """Return the bound container, binding a new one from ``factory`` if needed."""
        if self._container is None:
            self.set_current(factory())
        return self.get_current()

    def set_instance(self, container: Container | None = None) -> Container | None:
        """Bind ``container``, or unbind the current one when ``None`` is given.

        The previously bound container is left untouched.
        """
        if container is None:
            self._container = None
            return None
        self.set_current(container)
        return container

    def destroy(self) -> None:
        """Flush the bound container and unbind it. Does nothing when unbound."""
        if self._container is None:
            return
        self._container.flush()
        self._container = None
        logger.debug("Destroyed current container")

    def clear_operations(self) -> None:
        """Forget recorded registrations. The bound container keeps them."""
        self._operations.clear()

    def _populate(self, container: Container) -> None:
        for operation in self._operations:
            operation.apply(container)

    def _record_operation(self, method_name: _RegistrationMethod, *args: Any) -> None:
        operation = _RegistrationOperation(method_name=method_name, args=args)
        if self._container is not None:
            operation.apply(self._container)
        self._operations.append(operation)

    def bind(
        self,
        abstract: BindingIdentifier,
        value: FactoryCallback | type[Any],
        shared: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        """Record a binding and apply it to the bound container, if any."""
        Binding.create(abstract, value, shared=shared)
        self._record_operation("bind", abstract, value, shared)

    def singleton(self, abstract: BindingIdentifier, value: FactoryCallback | type[Any]) -> None:
        """Record a shared binding and apply it to the bound container, if any."""
        Binding.create(abstract, value, shared=True)
        self._record_operation("bind", abstract, value, True)  # noqa: FBT003

    def instance(self, abstract: BindingIdentifier, instance: T) -> T:
        """Record an instance registration and apply it to the bound container, if any."""
        assert_binding_identifier(abstract)
        self._record_operation("instance", abstract, instance)
        return instance

    def alias(self, abstract: BindingIdentifier, alias: BindingIdentifier) -> None:
        """Record an alias and apply it to the bound container, if any."""
        assert_binding_identifier(abstract)
        assert_binding_identifier(alias)
        if abstract == alias:
            msg = "Unable to create binding alias to itself."
            raise InvalidAliasError(msg)
        self._record_operation("alias", abstract, alias)

    def has(self, abstract: BindingIdentifier) -> bool:
        return self.get_current().has(abstract)

    @overload
    def make(self, abstract: type[T], *params: Any) -> T: ...

    @overload
    def make(self, abstract: Any, *params: Any) -> Any: ...

    def make(self, abstract: Any, *params: Any) -> Any:
        """Resolve ``abstract`` via the bound container."""
        return self.get_current().make(abstract, *params)

    def get(self, abstract: Any) -> Any:
        return self.get_current().get(abstract)

    def call(self, method: Callable[..., Any] | Reference | Sequence[Any], *params: Any) -> Any:
        """Invoke ``method`` with injection via the bound container."""
        return self.get_current().call(method, *params)


container_context = ContainerContext()
