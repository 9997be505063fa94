from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from servicebind._internal.bindings import CONTAINER, BindingIdentifier
from servicebind.exceptions import ContainerNotSetError

if TYPE_CHECKING:
    from servicebind._internal.container import Container

logger = logging.getLogger(__name__)

_NOT_CACHED: Any = object()

FACADE_OWN_MEMBERS: frozenset[str] = frozenset(
    {"facade_accessor", "facade_root", "service_container"},
)
"""Members served by the facade itself; they can never be forwarded."""


class _ForwardedMember:
    """Descriptor forwarding attribute get/set/delete to the facade root."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: Facade | None, owner: type[Facade]) -> Any:
        if instance is None:
            return self
        return getattr(instance.facade_root(), self.name)

    def __set__(self, instance: Facade, value: Any) -> None:
        setattr(instance.facade_root(), self.name, value)

    def __delete__(self, instance: Facade) -> None:
        delattr(instance.facade_root(), self.name)

    def __repr__(self) -> str:
        return f"<forwarded member {self.name!r}>"


class Facade(ABC):
    """Expose a container-resolved service through a module-level object.

    A concrete facade names the binding identifier of its root in
    ``facade_accessor`` and lists the root members it forwards in
    ``__facade_members__``. Reading, assigning or deleting a forwarded member on
    the facade does the same on the root, which is resolved from the configured
    service container on first use.

    Resolved roots are cached per accessor for all facades. The cache is
    independent of the container: call ``clear_resolved_instance`` or
    ``clear_resolved_instances`` after rebinding or forgetting a root.

    Examples:
        .. code-block:: python

            class CacheFacade(Facade):
                __facade_members__ = ("get", "put", "ttl")

                def facade_accessor(self) -> str:
                    return "cache"


            cache = CacheFacade()
            Facade.set_service_container(container)
            cache.put("key", "value")

    """

    __facade_members__: ClassVar[tuple[str, ...]] = ()

    _container: ClassVar[Container | None] = None
    _resolved_instances: ClassVar[dict[BindingIdentifier, Any]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name in cls.__dict__.get("__facade_members__", ()):
            if name in FACADE_OWN_MEMBERS or name.startswith("__"):
                msg = f"{cls.__name__} cannot forward reserved member {name!r}."
                raise TypeError(msg)
            setattr(cls, name, _ForwardedMember(name))

    def __init__(self) -> None:
        """Create the facade.

        Raises:
            TypeError: If ``facade_accessor`` returns a falsy identifier.

        """
        if not self.facade_accessor():
            msg = f"A facade accessor was expected, but was not defined in {type(self).__name__}."
            raise TypeError(msg)

    @abstractmethod
    def facade_accessor(self) -> BindingIdentifier:
        """Return the binding identifier of the facade root."""

    def facade_root(self) -> Any:
        """Return the resolved facade root.

        Raises:
            ContainerNotSetError: If no service container is configured.
            BindingResolutionError: If the container cannot resolve the accessor.

        """
        return Facade.resolve_facade_instance(self.facade_accessor())

    @property
    def service_container(self) -> Container | None:
        return Facade.get_service_container()

    @service_container.setter
    def service_container(self, container: Container | None) -> None:
        Facade.set_service_container(container)

    @classmethod
    def forwarded_members(cls) -> tuple[str, ...]:
        """Return every member forwarded by this facade, including inherited ones."""
        names: list[str] = []
        for klass in reversed(cls.__mro__):
            for name in klass.__dict__.get("__facade_members__", ()):
                if name not in names:
                    names.append(name)
        return tuple(names)

    @staticmethod
    def resolve_facade_instance(name: BindingIdentifier) -> Any:
        """Resolve ``name`` from the service container once and cache it.

        Raises:
            ContainerNotSetError: If no service container is configured.
            BindingResolutionError: If the container cannot resolve ``name``.

        """
        if name in Facade._resolved_instances:
            return Facade._resolved_instances[name]

        container = Facade._container
        if container is None:
            msg = (
                "Service container is not set for facades. "
                "Call Facade.set_service_container(container) before using facades."
            )
            raise ContainerNotSetError(msg)

        resolved = container.make(name)
        Facade._resolved_instances[name] = resolved
        logger.debug("Resolved facade root for %r", name)
        return resolved

    @staticmethod
    def has_resolved_instance(name: BindingIdentifier) -> bool:
        return name in Facade._resolved_instances

    @staticmethod
    def clear_resolved_instance(name: BindingIdentifier) -> bool:
        """Drop the cached root of ``name``. Return whether one was cached."""
        return Facade._resolved_instances.pop(name, _NOT_CACHED) is not _NOT_CACHED

    @staticmethod
    def clear_resolved_instances() -> None:
        Facade._resolved_instances.clear()

    @staticmethod
    def get_service_container() -> Container | None:
        return Facade._container

    @staticmethod
    def set_service_container(container: Container | None) -> None:
        """Configure the container every facade resolves its root from."""
        Facade._container = container

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        if name in FACADE_OWN_MEMBERS:
            return True
        if name not in self.forwarded_members():
            return False
        return hasattr(self.facade_root(), name)

    def __dir__(self) -> list[str]:
        return sorted({*FACADE_OWN_MEMBERS, *self.forwarded_members()})

    def __repr__(self) -> str:
        return f"<{type(self).__name__} facade for {self.facade_accessor()!r}>"


class ContainerFacade(Facade):
    """Facade over the container registered under ``CONTAINER``."""

    __facade_members__ = (
        "bind",
        "singleton",
        "instance",
        "alias",
        "has",
        "bound",
        "get",
        "make",
        "make_or_default",
        "build",
        "call",
        "forget",
        "flush",
        "register",
        "boot",
    )

    def facade_accessor(self) -> BindingIdentifier:
        return CONTAINER


container_facade = ContainerFacade()
"""Module-level facade over the container bound to ``container_context``."""


__all__ = [
    "FACADE_OWN_MEMBERS",
    "ContainerFacade",
    "Facade",
    "container_facade",
]
