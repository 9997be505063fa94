from servicebind.bindings import CONTAINER, Binding, Token
from servicebind.container import Container
from servicebind.container_context import ContainerContext, container_context
from servicebind.exceptions import (
    BindingError,
    BindingResolutionError,
    CircularDependencyError,
    ContainerNotSetError,
    InvalidAliasError,
    InvalidBindingIdentifierError,
    InvalidBindingValueError,
    NotFoundError,
    ServiceBindError,
)
from servicebind.facades import ContainerFacade, Facade, container_facade
from servicebind.meta import MetaStore
from servicebind.reference import Reference
from servicebind.reflections import DependenciesReflector, depends_on
from servicebind.service_providers import ServiceProvider

__all__ = [
    "CONTAINER",
    "Binding",
    "BindingError",
    "BindingResolutionError",
    "CircularDependencyError",
    "Container",
    "ContainerContext",
    "ContainerFacade",
    "ContainerNotSetError",
    "DependenciesReflector",
    "Facade",
    "InvalidAliasError",
    "InvalidBindingIdentifierError",
    "InvalidBindingValueError",
    "MetaStore",
    "NotFoundError",
    "Reference",
    "ServiceBindError",
    "ServiceProvider",
    "Token",
    "container_context",
    "container_facade",
    "depends_on",
]
