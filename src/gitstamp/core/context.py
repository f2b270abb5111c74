"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from gitstamp.core.config import GitstampConfig, load_config
from gitstamp.gateway.commit_reader.abc import CommitReader
from gitstamp.gateway.commit_reader.real import Pygit2CommitReader
from gitstamp.gateway.plugin_catalog.abc import PluginCatalog
from gitstamp.gateway.plugin_catalog.real import DirectoryPluginCatalog


@dataclass(frozen=True)
class GitstampContext:
    """Immutable context holding all dependencies for gitstamp operations.

    Created at the CLI entry point and threaded through the application.
    Tests build one directly with fake gateways.
    """

    commit_reader: CommitReader
    plugin_catalog: PluginCatalog
    config: GitstampConfig


def create_context(root_dir: Path, config_path: Path | None = None) -> GitstampContext:
    """Create production context with real gateways.

    Args:
        root_dir: Application root (usually the current directory)
        config_path: Explicit config file, or None for `<root_dir>/.gitstamp/config.toml`
    """
    config = load_config(root_dir, config_path)
    return GitstampContext(
        commit_reader=Pygit2CommitReader(),
        plugin_catalog=DirectoryPluginCatalog(config.layout.plugin_dir),
        config=config,
    )
