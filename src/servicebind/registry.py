from servicebind._internal.registry import Registry

__all__ = ["Registry"]
