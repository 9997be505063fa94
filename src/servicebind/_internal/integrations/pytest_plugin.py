from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from servicebind._internal.container import Container
from servicebind._internal.container_context import container_context
from servicebind._internal.facades import Facade


@pytest.fixture()
def servicebind_container_factory() -> Callable[[], Container]:
    """Fixture hook returning the callable that creates test containers.

    Override it in a test suite to start every test from a pre-configured
    container, for example one with service providers registered.

    """
    return Container


@pytest.fixture()
def servicebind_container(
    servicebind_container_factory: Callable[[], Container],
) -> Iterator[Container]:
    """Provide a fresh container bound to ``container_context`` and facades.

    Facade caches are cleared before and after the test. On teardown the
    container is flushed and unbound, and facades lose their service container.

    Yields:
        The container bound for the duration of the test.

    """
    container = servicebind_container_factory()
    Facade.clear_resolved_instances()
    container_context.set_current(container)
    Facade.set_service_container(container)
    try:
        yield container
    finally:
        Facade.clear_resolved_instances()
        Facade.set_service_container(None)
        container_context.destroy()
