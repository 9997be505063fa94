from servicebind._internal.service_providers import ServiceProvider

__all__ = ["ServiceProvider"]
