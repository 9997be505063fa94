from servicebind._internal.container import Container

__all__ = ["Container"]
