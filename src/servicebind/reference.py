from servicebind._internal.reference import INVOKE, Reference

__all__ = ["INVOKE", "Reference"]
