"""Pytest plugin exposing ``servicebind_container`` and its factory fixture.

Enable it with ``pytest_plugins = ["servicebind.integrations.pytest_plugin"]``.
"""

from servicebind._internal.integrations.pytest_plugin import (
    servicebind_container,
    servicebind_container_factory,
)

__all__ = ["servicebind_container", "servicebind_container_factory"]
