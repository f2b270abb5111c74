"""Cache staleness detection from repository metadata timestamps.

No git executable is invoked. Freshness is inferred from the modification
times of `HEAD` and of the branch ref it points to: committing on a branch
rewrites the ref file, switching branches or detaching rewrites `HEAD`.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from gitstamp.core.config import AppLayout, ReportFormat
from gitstamp.core.locator import head_file, read_symbolic_ref, ref_file, resolve_git_dir
from gitstamp.core.types import CacheArtifact, RepositoryNotFound
from gitstamp.gateway.plugin_catalog.abc import PluginCatalog

logger = logging.getLogger(__name__)

# Smallest cache file that can hold a serialized section.
MIN_CACHE_SIZE = 10


@dataclass(frozen=True)
class RefreshDecision:
    """Outcome of the aggregate staleness policy.

    Attributes:
        needed: True if the cache must be rebuilt
        reason: Short description of the rule that decided
    """

    needed: bool
    reason: str


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def stat_cache_artifact(cache_file: Path) -> CacheArtifact | None:
    """Stat the cache file, returning None if it does not exist or cannot be read."""
    try:
        st = cache_file.stat()
    except OSError:
        return None
    return CacheArtifact(path=cache_file, mtime=st.st_mtime, size=st.st_size)


def is_repo_newer(reference_mtime: float, base_path: Path) -> bool:
    """Check whether the repository at `base_path` moved after `reference_mtime`.

    Equal timestamps are not "newer". Any missing or unreadable file yields
    False, so a failed check keeps the existing cache for one more cycle.

    Args:
        reference_mtime: Modification time of the cached artifact
        base_path: Working tree directory of the repository

    Returns:
        True if HEAD or the branch it points to changed after `reference_mtime`
    """
    git_dir = resolve_git_dir(base_path)
    if isinstance(git_dir, RepositoryNotFound):
        return False

    head_mtime = _mtime(head_file(git_dir))
    if head_mtime is not None and head_mtime > reference_mtime:
        return True

    ref_name = read_symbolic_ref(git_dir)
    if ref_name is None:
        # Detached HEAD or unreadable; nothing more to infer from metadata
        return False

    ref_mtime = _mtime(ref_file(git_dir, ref_name))
    return ref_mtime is not None and ref_mtime > reference_mtime


def evaluate_staleness(
    *,
    cache_file: Path,
    layout: AppLayout,
    plugin_catalog: PluginCatalog,
    report_format: ReportFormat,
    recheck_short: bool,
    watched_paths: Sequence[Path],
    min_cache_size: int = MIN_CACHE_SIZE,
) -> RefreshDecision:
    """Decide whether the cached version report must be rebuilt.

    Rules, first match wins:
    1. Cache missing or smaller than `min_cache_size` -> rebuild.
    2. Any of `watched_paths` (detector code, config file) newer -> rebuild.
    3. Short format: only the root repository is checked, and only when
       `recheck_short` is set. Core and plugins are never inspected.
    4. Details format: root, core, the plugin directory itself (plugins
       added/removed/renamed) and every plugin repository are checked.

    Args:
        cache_file: Path to the cache file
        layout: Root, core and plugin directories
        plugin_catalog: Source of plugin names, queried only in details format
        report_format: "short" or "details"
        recheck_short: Whether short format rechecks the root repository
        watched_paths: Files whose modification invalidates the cache
        min_cache_size: Minimum viable cache size in bytes

    Returns:
        RefreshDecision with the rule that fired
    """
    artifact = stat_cache_artifact(cache_file)
    if artifact is None:
        return _decide(True, "cache file missing")
    if not artifact.is_viable(min_cache_size):
        return _decide(True, f"cache file too small ({artifact.size} bytes)")

    cache_mtime = artifact.mtime
    for watched in watched_paths:
        watched_mtime = _mtime(watched)
        if watched_mtime is not None and watched_mtime > cache_mtime:
            return _decide(True, f"{watched} changed")

    if report_format == "short":
        if not recheck_short:
            return _decide(False, "short format recheck disabled")
        if is_repo_newer(cache_mtime, layout.root_dir):
            return _decide(True, "root repository is newer")
        return _decide(False, "root repository unchanged")

    if is_repo_newer(cache_mtime, layout.root_dir):
        return _decide(True, "root repository is newer")
    if is_repo_newer(cache_mtime, layout.core_dir):
        return _decide(True, "core repository is newer")

    plugin_dir_mtime = _mtime(layout.plugin_dir)
    if plugin_dir_mtime is not None and plugin_dir_mtime > cache_mtime:
        return _decide(True, "plugin directory changed")

    for plugin_name in plugin_catalog.list_plugins():
        if is_repo_newer(cache_mtime, layout.plugin_path(plugin_name)):
            return _decide(True, f"plugin {plugin_name} repository is newer")

    return _decide(False, "all repositories unchanged")


def _decide(needed: bool, reason: str) -> RefreshDecision:
    logger.debug("Cache refresh %s: %s", "needed" if needed else "not needed", reason)
    return RefreshDecision(needed=needed, reason=reason)
