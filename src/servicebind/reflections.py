from servicebind._internal.reflections import (
    DEPENDENCIES_META_TAG,
    DependenciesReflector,
    depends_on,
)

__all__ = ["DEPENDENCIES_META_TAG", "DependenciesReflector", "depends_on"]
