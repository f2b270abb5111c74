"""Fake plugin catalog for testing."""

from gitstamp.gateway.plugin_catalog.abc import PluginCatalog


class FakePluginCatalog(PluginCatalog):
    """In-memory fake that counts how often plugins were listed.

    Short-format staleness checks must not touch plugins at all; tests
    assert on `list_calls` to verify that.
    """

    def __init__(self, *, plugins: list[str] | None = None) -> None:
        self._plugins = plugins if plugins is not None else []
        self._list_calls = 0

    def list_plugins(self) -> list[str]:
        self._list_calls += 1
        return list(self._plugins)

    @property
    def list_calls(self) -> int:
        """Number of list_plugins() calls, for test assertions."""
        return self._list_calls
