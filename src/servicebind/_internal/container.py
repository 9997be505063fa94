from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar, overload

from servicebind._internal.bindings import (
    Binding,
    BindingIdentifier,
    FactoryCallback,
    FactoryValue,
    Token,
    assert_binding_identifier,
    identifier_to_string,
)
from servicebind._internal.reference import Reference
from servicebind._internal.reflections import DependenciesReflector
from servicebind._internal.registry import Registry
from servicebind._internal.service_providers import ServiceProvider
from servicebind._internal.type_checks import describe_target, is_runtime_class
from servicebind.exceptions import (
    BindingError,
    BindingResolutionError,
    CircularDependencyError,
    InvalidAliasError,
    NotFoundError,
)

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")
P = TypeVar("P", bound=ServiceProvider)

logger = logging.getLogger(__name__)


class Container:
    """Register bindings and resolve them into concrete values.

    A binding maps an identifier (string, ``Token``, class, function or any
    other hashable object) to a factory callback or a class. Shared bindings
    are resolved once and cached; other bindings produce a new value on every
    ``make`` call. Classes that are not bound are built directly.

    When a class is built, or a function is invoked with ``call``, without
    explicit parameters, the dependencies declared for it in the ``reflector``
    are resolved with ``make`` and passed positionally in declaration order.

    The container is not thread-safe. Re-entering an identifier that is still
    being constructed raises ``CircularDependencyError`` unless
    ``detect_cycles`` is disabled.
    """

    def __init__(
        self,
        *,
        reflector: DependenciesReflector | None = None,
        detect_cycles: bool = True,
    ) -> None:
        """Initialize an empty container.

        Args:
            reflector: Dependency reflector consulted while building classes and
                calling functions. Defaults to a ``DependenciesReflector`` on the
                shared meta store.
            detect_cycles: Track identifiers under construction and fail fast on
                circular dependency graphs.

        """
        self._registry = Registry()
        self._reflector = reflector
        self._detect_cycles = detect_cycles
        self._resolving: list[tuple[str, Any]] = []
        self._providers: list[ServiceProvider] = []
        self._booted = False

    @classmethod
    def get_instance(cls) -> Container:
        """Return the process-wide container, creating one when none is bound."""
        from servicebind._internal.container_context import container_context  # noqa: PLC0415

        return container_context.get_instance(factory=cls)

    @classmethod
    def set_instance(cls, container: Container | None = None) -> Container | None:
        """Bind ``container`` as the process-wide container, or unbind with ``None``."""
        from servicebind._internal.container_context import container_context  # noqa: PLC0415

        return container_context.set_instance(container)

    @classmethod
    def destroy(cls) -> None:
        """Flush and unbind the process-wide container, if any."""
        from servicebind._internal.container_context import container_context  # noqa: PLC0415

        container_context.destroy()

    @property
    def bindings(self) -> MappingProxyType[BindingIdentifier, Binding]:
        """Read-only view of registered bindings."""
        return self._registry.bindings

    @property
    def aliases(self) -> MappingProxyType[BindingIdentifier, BindingIdentifier]:
        """Read-only view of aliases, keyed by alias."""
        return self._registry.aliases

    @property
    def instances(self) -> MappingProxyType[BindingIdentifier, Any]:
        """Read-only view of cached shared instances."""
        return self._registry.instances

    @property
    def reflector(self) -> DependenciesReflector:
        if self._reflector is None:
            self._reflector = DependenciesReflector()
        return self._reflector

    @reflector.setter
    def reflector(self, reflector: DependenciesReflector) -> None:
        self._reflector = reflector

    def bind(
        self,
        abstract: BindingIdentifier,
        value: FactoryCallback | type[Any],
        shared: bool = False,  # noqa: FBT001, FBT002
    ) -> Self:
        """Register a factory callback or class for an identifier.

        An existing binding for the same identifier is replaced. Factories are
        invoked as ``value(container, *params)``.

        Args:
            abstract: Identifier to bind.
            value: Factory callback or class reference.
            shared: Cache the first resolved value and return it afterwards.

        Raises:
            InvalidBindingIdentifierError: If ``abstract`` is not a valid identifier.
            InvalidBindingValueError: If ``value`` is neither callable nor a class.

        """
        binding = Binding.create(abstract, value, shared=shared)
        self._registry.add_binding(binding)
        logger.debug(
            "Bound %s to %s (shared=%s)",
            self._describe(abstract),
            describe_target(binding.concrete),
            shared,
        )
        return self

    def singleton(self, abstract: BindingIdentifier, value: FactoryCallback | type[Any]) -> Self:
        """Register a shared binding, see ``bind``."""
        return self.bind(abstract, value, shared=True)

    def instance(self, abstract: BindingIdentifier, instance: T) -> T:
        """Register an already built value as the shared instance of ``abstract``.

        Returns:
            The given ``instance``.

        Raises:
            InvalidBindingIdentifierError: If ``abstract`` is not a valid identifier.

        """
        assert_binding_identifier(abstract)
        self._registry.add_instance(abstract, instance)
        logger.debug("Registered instance for %s", self._describe(abstract))
        return instance

    def alias(self, abstract: BindingIdentifier, alias: BindingIdentifier) -> Self:
        """Make ``alias`` resolve to whatever ``abstract`` resolves to.

        Raises:
            InvalidBindingIdentifierError: If either identifier is invalid.
            InvalidAliasError: If ``alias`` equals ``abstract``.

        """
        assert_binding_identifier(abstract)
        assert_binding_identifier(alias)
        if abstract == alias:
            msg = f"Unable to create binding alias {self._describe(alias)!r} to itself."
            raise InvalidAliasError(msg)

        self._registry.add_alias(abstract, alias)
        logger.debug("Aliased %s to %s", self._describe(alias), self._describe(abstract))
        return self

    def has(self, abstract: BindingIdentifier) -> bool:
        """Return whether ``abstract`` is bound, aliased or has a cached instance."""
        return self._registry.contains(abstract)

    def bound(self, abstract: BindingIdentifier) -> bool:
        """Alias for ``has``."""
        return self.has(abstract)

    def __contains__(self, abstract: object) -> bool:
        return self.has(abstract)

    @overload
    def get(self, abstract: type[T]) -> T: ...

    @overload
    def get(self, abstract: Any) -> Any: ...

    def get(self, abstract: Any) -> Any:
        """Resolve ``abstract`` without parameters, see ``make``."""
        return self.make(abstract)

    @overload
    def make(self, abstract: type[T], *params: Any) -> T: ...

    @overload
    def make(self, abstract: Any, *params: Any) -> Any: ...

    def make(self, abstract: Any, *params: Any) -> Any:
        """Resolve an identifier into its concrete value.

        Aliases are followed one level. A cached instance is returned as is.
        Otherwise the binding is built with ``params`` and cached when shared.
        Unbound classes are built directly and never cached.

        Args:
            abstract: Identifier or alias to resolve.
            *params: Parameters passed to the factory or constructor. When
                empty, declared dependencies are resolved instead.

        Raises:
            NotFoundError: If nothing is registered and ``abstract`` is not a
                buildable class.
            BindingResolutionError: If the binding or one of its dependencies
                cannot be resolved.
            CircularDependencyError: If ``abstract`` is already under construction.

        """
        if not self._is_hashable(abstract):
            msg = f"Unable to resolve {self._describe(abstract)}: identifier is not hashable."
            raise NotFoundError(msg)

        abstract = self._registry.canonical(abstract)

        if self._registry.has_instance(abstract):
            return self._registry.get_instance(abstract)

        binding = self._registry.find_binding(abstract)
        if binding is None:
            if self._is_buildable(abstract):
                return self.build(abstract, *params)
            msg = (
                f"Unable to resolve {self._describe(abstract)!r}: no matching binding found "
                "and identifier is not buildable (not a class reference)."
            )
            raise NotFoundError(msg)

        with self._resolving_frame("make", abstract):
            instance = self.build(binding, *params)

        if binding.shared:
            self._registry.add_instance(abstract, instance)
            logger.debug("Cached shared instance for %s", self._describe(abstract))

        return instance

    def make_or_default(self, abstract: Any, default: Any = None, *params: Any) -> Any:
        """Resolve ``abstract`` or return ``default`` when nothing can produce it.

        Resolution errors of registered bindings still propagate.
        """
        if not self.has(abstract) and not self._is_buildable(abstract):
            return default
        return self.make(abstract, *params)

    def build(self, target: Binding | type[Any], *params: Any) -> Any:
        """Build a value from a binding or a class, bypassing aliases and caches.

        Factory bindings are invoked with the container and ``params``. Class
        bindings and classes are instantiated with ``params`` or, when none are
        given, with their declared dependencies.

        Raises:
            BindingResolutionError: If ``target`` is missing or not buildable, the
                factory fails, or a dependency cannot be resolved.

        """
        if target is None:
            msg = "Unable to build, no target binding or class reference given."
            raise BindingResolutionError(msg)

        if isinstance(target, Binding):
            if isinstance(target.value, FactoryValue):
                return self._resolve_binding_callback(target, *params)
            target = target.value.cls

        if not self._is_buildable(target):
            msg = f"Target {describe_target(target)} is not buildable (not a class reference)."
            raise BindingResolutionError(msg)

        with self._resolving_frame("build", target):
            if not params and self.reflector.has(target):
                params = tuple(self._resolve_dependencies(target))
            return target(*params)

    def call(self, method: Callable[..., Any] | Reference | Sequence[Any], *params: Any) -> Any:
        """Invoke a callable or class method, injecting its dependencies.

        ``method`` may be a callable, a ``Reference``, or a ``(target,
        method_name)`` pair. Class targets are built first. Explicit ``params``
        take precedence over parameters attached to a reference, which take
        precedence over declared dependencies.

        Raises:
            BindingError: If the method does not exist on the target or the value
                is not callable.
            BindingResolutionError: If the target or a dependency cannot be resolved.

        """
        if isinstance(method, tuple | list):
            method = Reference.from_tuple(method)

        if isinstance(method, Reference):
            return self._call_reference(method, params)

        if not callable(method):
            msg = f"Unable to call {describe_target(method)}: value is not callable."
            raise BindingError(msg)

        return self._invoke(method, params)

    def forget(self, abstract: BindingIdentifier) -> None:
        """Remove ``abstract`` from bindings, aliases and cached instances."""
        self._registry.remove(abstract)
        logger.debug("Forgot %s", self._describe(abstract))

    def flush(self) -> None:
        """Remove every binding, alias and cached instance."""
        self._registry.clear()
        logger.debug("Flushed container")

    @property
    def providers(self) -> tuple[ServiceProvider, ...]:
        """Registered service providers, in registration order."""
        return tuple(self._providers)

    @property
    def is_booted(self) -> bool:
        return self._booted

    def register(self, provider: P | type[P]) -> P:
        """Register a service provider and let it add its bindings.

        A provider class is instantiated with this container. Registering a
        second provider of the same class returns the first one. Providers
        registered after ``boot`` are booted immediately.

        Raises:
            BindingError: If ``provider`` is not a ``ServiceProvider`` or is an
                abstract provider class.

        """
        if is_runtime_class(provider) and issubclass(provider, ServiceProvider):
            existing = self.get_provider(provider)
            if existing is not None:
                return existing
            if inspect.isabstract(provider):
                msg = (
                    f"Unable to register {describe_target(provider)}: "
                    "abstract service provider does not implement register()."
                )
                raise BindingError(msg)
            provider = provider(self)

        if not isinstance(provider, ServiceProvider):
            msg = f"Unable to register {describe_target(provider)}: not a ServiceProvider."
            raise BindingError(msg)

        existing = self.get_provider(type(provider))
        if existing is not None:
            return existing

        provider.register()
        self._providers.append(provider)
        logger.debug("Registered service provider %s", describe_target(type(provider)))

        if self._booted:
            self._boot_provider(provider)
        return provider

    def get_provider(self, provider_class: type[P]) -> P | None:
        for provider in self._providers:
            if type(provider) is provider_class:
                return provider
        return None

    def boot(self) -> None:
        """Boot registered service providers once, in registration order."""
        if self._booted:
            return

        index = 0
        # providers registered while booting are booted in the same pass
        while index < len(self._providers):
            self._boot_provider(self._providers[index])
            index += 1

        self._booted = True

    def _boot_provider(self, provider: ServiceProvider) -> None:
        if provider.is_booted:
            return
        provider.boot()
        provider.is_booted = True
        logger.debug("Booted service provider %s", describe_target(type(provider)))

    def _call_reference(self, reference: Reference, params: tuple[Any, ...]) -> Any:
        target = reference.target
        if self._is_buildable(target):
            target = self.build(target)

        member = getattr(target, reference.method, None)
        if member is None or not callable(member):
            msg = (
                f'Method "{reference.method}" does not exist in '
                f"{describe_target(reference.target)}."
            )
            raise BindingError(msg)

        if not params and reference.has_parameters:
            params = tuple(reference.parameters)
        return self._invoke(member, params)

    def _invoke(self, func: Callable[..., Any], params: tuple[Any, ...]) -> Any:
        if not params and self.reflector.has(func):
            params = tuple(self._resolve_dependencies(func))
        return func(*params)

    def _resolve_binding_callback(self, binding: Binding, *params: Any) -> Any:
        factory = binding.concrete
        try:
            return factory(self, *params)
        except CircularDependencyError:
            raise
        except Exception as exc:
            msg = (
                f'Unable to resolve binding "{identifier_to_string(binding.abstract)}", '
                f"due to: {exc}"
            )
            logger.debug(msg)
            raise BindingResolutionError(msg) from exc

    def _resolve_dependencies(self, target: object) -> list[Any]:
        return [
            self._resolve_dependency(dependency, target)
            for dependency in self.reflector.get(target)
        ]

    def _resolve_dependency(self, dependency: BindingIdentifier, target: object) -> Any:
        try:
            return self.make(dependency)
        except CircularDependencyError:
            raise
        except Exception as exc:
            msg = (
                f'Unable to resolve dependency "{self._describe(dependency)}" '
                f"for {describe_target(target)}: {exc}"
            )
            logger.debug(msg)
            raise BindingResolutionError(msg) from exc

    @contextmanager
    def _resolving_frame(self, kind: str, key: Any) -> Iterator[None]:
        # make() frames hold canonical identifiers, build() frames hold classes;
        # a bound class legitimately appears once in each
        if not self._detect_cycles:
            yield
            return

        frame = (kind, key)
        if frame in self._resolving:
            start = self._resolving.index(frame)
            chain: list[Any] = []
            previous: tuple[str, Any] | None = None
            for current_kind, item in (*self._resolving[start:], frame):
                if not (
                    previous is not None
                    and previous[0] == "make"
                    and current_kind == "build"
                    and previous[1] is item
                ):
                    chain.append(item)
                previous = (current_kind, item)
            rendered = " -> ".join(self._describe(item) for item in chain)
            msg = f"Circular dependency detected: {rendered}."
            raise CircularDependencyError(msg, tuple(chain))

        self._resolving.append(frame)
        try:
            yield
        finally:
            self._resolving.pop()

    def _is_buildable(self, target: object) -> bool:
        return is_runtime_class(target) and not inspect.isabstract(target)

    def _is_hashable(self, value: object) -> bool:
        try:
            hash(value)
        except TypeError:
            return False
        return True

    def _describe(self, identifier: object) -> str:
        if isinstance(identifier, str | Token):
            return str(identifier)
        return describe_target(identifier)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bindings={len(self._registry.bindings)}, "
            f"aliases={len(self._registry.aliases)}, "
            f"instances={len(self._registry.instances)})"
        )


__all__ = ["Container"]
