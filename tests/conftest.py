"""Shared pytest fixtures for servicebind tests."""

from collections.abc import Iterator

import pytest

from servicebind.container import Container
from servicebind.container_context import container_context
from servicebind.facades import Facade
from servicebind.meta import MetaStore
from servicebind.reflections import DependenciesReflector


@pytest.fixture()
def container() -> Container:
    """Container using the shared default reflector."""
    return Container()


@pytest.fixture()
def isolated_reflector() -> DependenciesReflector:
    """Reflector backed by its own meta store."""
    return DependenciesReflector(MetaStore())


@pytest.fixture()
def isolated_container(isolated_reflector: DependenciesReflector) -> Container:
    """Container whose declared dependencies do not leak between tests."""
    return Container(reflector=isolated_reflector)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Unbind the process-wide container and drop facade state around each test."""
    yield
    Facade.clear_resolved_instances()
    Facade.set_service_container(None)
    container_context.destroy()
    container_context.clear_operations()
