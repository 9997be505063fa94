from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from servicebind._internal.container import Container


class ServiceProvider(ABC):
    """Group related bindings and their startup work.

    Subclasses add bindings in ``register`` and may override ``boot`` for work
    that needs every provider to be registered first, such as resolving
    services bound by other providers.

    Examples:
        .. code-block:: python

            class CacheServiceProvider(ServiceProvider):
                def register(self) -> None:
                    self.container.singleton("cache", CacheService)

                def boot(self) -> None:
                    self.container.make("cache").warm_up()


            container.register(CacheServiceProvider)
            container.boot()

    """

    def __init__(self, container: Container) -> None:
        self.container = container
        self.is_booted = False

    @abstractmethod
    def register(self) -> None:
        """Register bindings into ``self.container``."""

    def boot(self) -> None:
        """Run after all providers are registered. Does nothing by default."""


__all__ = ["ServiceProvider"]
