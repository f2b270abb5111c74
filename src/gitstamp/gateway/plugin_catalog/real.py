"""Plugin catalog that treats every subdirectory of the plugin directory as a plugin."""

from pathlib import Path

from gitstamp.gateway.plugin_catalog.abc import PluginCatalog


class DirectoryPluginCatalog(PluginCatalog):
    """Lists non-hidden subdirectories of `plugin_dir`, sorted by name."""

    def __init__(self, plugin_dir: Path) -> None:
        self._plugin_dir = plugin_dir

    def list_plugins(self) -> list[str]:
        if not self._plugin_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self._plugin_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        )
