from servicebind._internal.facades import (
    FACADE_OWN_MEMBERS,
    ContainerFacade,
    Facade,
    container_facade,
)

__all__ = ["FACADE_OWN_MEMBERS", "ContainerFacade", "Facade", "container_facade"]
