"""Version Aggregator: one descriptor per component, collected into a report."""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from gitstamp.core.config import AppLayout
from gitstamp.core.locator import GIT_DIR_NAME, resolve_git_dir
from gitstamp.core.types import (
    APP_COMPONENT,
    BUNDLED_PLUGIN_NOTE,
    CORE_COMPONENT,
    READ_FAILURE_ERROR,
    ComponentVersion,
    FailedVersion,
    RepositoryNotFound,
    ResolvedVersion,
    VersionReport,
    plugin_component_id,
)
from gitstamp.gateway.commit_reader.abc import CommitReader
from gitstamp.gateway.commit_reader.types import CommitReadError

logger = logging.getLogger(__name__)


def read_component_version(commit_reader: CommitReader, base_path: Path) -> ComponentVersion:
    """Read the version of the working tree at `base_path`.

    Never raises for repository problems: a missing repository or a reader
    failure becomes a FailedVersion for this component only.
    """
    git_dir = resolve_git_dir(base_path)
    if isinstance(git_dir, RepositoryNotFound):
        logger.warning("%s: %s", base_path, git_dir.message)
        return FailedVersion(error=READ_FAILURE_ERROR, note=git_dir.message)

    result = commit_reader.describe(git_dir)
    if isinstance(result, CommitReadError):
        logger.warning("Failed to read git repository: %s", result.message)
        return FailedVersion(error=READ_FAILURE_ERROR, note=result.message)

    logger.debug("%s is at %s", base_path, result.version)
    return ResolvedVersion(version=result.version, date=result.date, origin=result.origin)


def _read_plugin_version(
    commit_reader: CommitReader, layout: AppLayout, plugin_name: str
) -> ComponentVersion:
    plugin_path = layout.plugin_path(plugin_name)
    if not (plugin_path / GIT_DIR_NAME).exists():
        return FailedVersion(error=None, note=BUNDLED_PLUGIN_NOTE)
    return read_component_version(commit_reader, plugin_path)


def build_version_report(
    *,
    layout: AppLayout,
    plugin_names: Sequence[str],
    commit_reader: CommitReader,
    max_workers: int = 1,
) -> VersionReport:
    """Collect version descriptors for the app, the core library and each plugin.

    The report always starts with `app` and `core`, followed by one
    `plugin:<name>` entry per plugin in the order supplied.

    Args:
        layout: Root, core and plugin directories
        plugin_names: Installed plugins, in report order
        commit_reader: Reader used for every component with a repository
        max_workers: Plugins are read in a thread pool when greater than 1

    Returns:
        Ordered mapping of component id to ComponentVersion
    """
    report: VersionReport = {
        APP_COMPONENT: read_component_version(commit_reader, layout.root_dir),
        CORE_COMPONENT: read_component_version(commit_reader, layout.core_dir),
    }

    if max_workers > 1 and len(plugin_names) > 1:
        # map() yields in submission order, so plugin order stays deterministic
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            versions = list(
                executor.map(
                    lambda name: _read_plugin_version(commit_reader, layout, name),
                    plugin_names,
                )
            )
    else:
        versions = [_read_plugin_version(commit_reader, layout, name) for name in plugin_names]

    for plugin_name, version in zip(plugin_names, versions, strict=True):
        report[plugin_component_id(plugin_name)] = version

    return report
