from __future__ import annotations

from types import MappingProxyType
from typing import Any

from servicebind._internal.bindings import Binding, BindingIdentifier


class Registry:
    """Store bindings, aliases and cached instances of one container.

    Keys are unique in each map: adding an entry for an existing identifier
    replaces the previous one. An alias always points directly at its canonical
    identifier, so alias lookup is a single map access.
    """

    def __init__(self) -> None:
        self._bindings: dict[BindingIdentifier, Binding] = {}
        self._aliases: dict[BindingIdentifier, BindingIdentifier] = {}
        self._instances: dict[BindingIdentifier, Any] = {}

    @property
    def bindings(self) -> MappingProxyType[BindingIdentifier, Binding]:
        return MappingProxyType(self._bindings)

    @property
    def aliases(self) -> MappingProxyType[BindingIdentifier, BindingIdentifier]:
        return MappingProxyType(self._aliases)

    @property
    def instances(self) -> MappingProxyType[BindingIdentifier, Any]:
        return MappingProxyType(self._instances)

    def add_binding(self, binding: Binding) -> None:
        self._bindings[binding.abstract] = binding

    def find_binding(self, abstract: BindingIdentifier) -> Binding | None:
        return self._bindings.get(abstract)

    def add_alias(self, abstract: BindingIdentifier, alias: BindingIdentifier) -> None:
        self._aliases[alias] = abstract

    def canonical(self, abstract: BindingIdentifier) -> BindingIdentifier:
        """Return the identifier an alias points at, or ``abstract`` itself."""
        return self._aliases.get(abstract, abstract)

    def add_instance(self, abstract: BindingIdentifier, instance: Any) -> None:
        self._instances[abstract] = instance

    def has_instance(self, abstract: BindingIdentifier) -> bool:
        return abstract in self._instances

    def get_instance(self, abstract: BindingIdentifier) -> Any:
        return self._instances[abstract]

    def contains(self, abstract: BindingIdentifier) -> bool:
        """Return whether ``abstract`` is a binding, instance or alias key."""
        try:
            return (
                abstract in self._bindings
                or abstract in self._instances
                or abstract in self._aliases
            )
        except TypeError:
            # unhashable values are never registered
            return False

    def remove(self, abstract: BindingIdentifier) -> None:
        """Remove ``abstract`` from all maps. Unknown identifiers are ignored."""
        if not self.contains(abstract):
            return
        self._bindings.pop(abstract, None)
        self._aliases.pop(abstract, None)
        self._instances.pop(abstract, None)

    def clear(self) -> None:
        self._bindings.clear()
        self._aliases.clear()
        self._instances.clear()
