"""Abstract interface for enumerating installed plugins."""

from abc import ABC, abstractmethod


class PluginCatalog(ABC):
    """Abstract interface for plugin discovery."""

    @abstractmethod
    def list_plugins(self) -> list[str]:
        """Return installed plugin names in report order."""
        ...
