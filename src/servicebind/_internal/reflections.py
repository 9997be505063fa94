from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from servicebind._internal.bindings import BindingIdentifier
from servicebind._internal.meta import MetaStore, default_meta_store

T = TypeVar("T")

DEPENDENCIES_META_TAG = "servicebind.dependencies"
"""Meta store tag holding dependency lists."""


def reflection_target(target: Any) -> Any:
    """Return the object dependency metadata is stored against.

    Bound methods, static methods and class methods share the metadata of
    their underlying function.
    """
    while isinstance(target, staticmethod | classmethod) or hasattr(target, "__self__"):
        func = getattr(target, "__func__", None)
        if func is None:
            break
        target = func
    return target


class DependenciesReflector:
    """Associate classes and functions with an ordered list of dependencies.

    The container consults the reflector only when it builds a class or calls a
    function without explicit parameters. Each identifier in the list is
    resolved with ``Container.make`` and passed positionally, in order.

    Reflectors created without a store share ``default_meta_store``, so
    dependencies declared with ``depends_on`` are visible to every container
    that keeps the default reflector.
    """

    def __init__(self, store: MetaStore | None = None) -> None:
        self._store = store if store is not None else default_meta_store

    def set(
        self,
        target: object,
        dependencies: Iterable[BindingIdentifier],
    ) -> DependenciesReflector:
        """Declare ``dependencies`` for ``target``, replacing earlier declarations.

        Args:
            target: Class or function that requires the dependencies.
            dependencies: Binding identifiers in constructor/argument order.

        Raises:
            TypeError: If ``target`` cannot hold metadata (for example ``None``
                or a builtin value).

        """
        self._store.set(reflection_target(target), list(dependencies), DEPENDENCIES_META_TAG)
        return self

    def get(self, target: object) -> list[BindingIdentifier]:
        """Return the declared dependencies of ``target``, empty when none."""
        dependencies = self._store.get(reflection_target(target), DEPENDENCIES_META_TAG)
        if dependencies is None:
            return []
        return list(dependencies)

    def has(self, target: object) -> bool:
        return self._store.has(reflection_target(target), DEPENDENCIES_META_TAG)

    def forget(self, target: object) -> bool:
        return self._store.forget(reflection_target(target), DEPENDENCIES_META_TAG)


def depends_on(*dependencies: BindingIdentifier) -> Callable[[T], T]:
    """Declare dependencies of a class or function at definition time.

    The decorated object is returned unchanged; the declaration is stored in
    ``default_meta_store``.

    Examples:
        .. code-block:: python

            @depends_on("repository", Mailer)
            class SignupService:
                def __init__(self, repository: Repository, mailer: Mailer) -> None: ...

                @depends_on("clock")
                def handle(self, clock: Clock) -> None: ...

    """

    def decorator(target: T) -> T:
        DependenciesReflector().set(target, dependencies)
        return target

    return decorator


__all__ = [
    "DEPENDENCIES_META_TAG",
    "DependenciesReflector",
    "depends_on",
    "reflection_target",
]
