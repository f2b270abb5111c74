"""Refresh-and-load sequence for the version cache.

Staleness check, rebuild and write happen under one lock so concurrent
callers never rebuild twice or interleave writes.
"""

import logging
from pathlib import Path

from gitstamp.core import aggregator, cache_store, staleness
from gitstamp.core.aggregator import build_version_report
from gitstamp.core.cache_store import read_version_report, write_version_report
from gitstamp.core.config import ReportFormat
from gitstamp.core.context import GitstampContext
from gitstamp.core.lock import cache_lock
from gitstamp.core.staleness import RefreshDecision, evaluate_staleness
from gitstamp.core.types import VersionReport

logger = logging.getLogger(__name__)


def watched_paths(ctx: GitstampContext) -> list[Path]:
    """Files whose modification invalidates any existing cache.

    The modules that decide staleness and shape the report, plus the config
    file when one was loaded.
    """
    paths = [
        Path(module.__file__)
        for module in (staleness, aggregator, cache_store)
        if module.__file__ is not None
    ]
    if ctx.config.config_path is not None:
        paths.append(ctx.config.config_path)
    return paths


def check_staleness(ctx: GitstampContext, report_format: ReportFormat) -> RefreshDecision:
    """Evaluate the staleness policy without rebuilding."""
    return evaluate_staleness(
        cache_file=ctx.config.cache_file,
        layout=ctx.config.layout,
        plugin_catalog=ctx.plugin_catalog,
        report_format=report_format,
        recheck_short=ctx.config.recheck_short,
        watched_paths=watched_paths(ctx),
    )


def rebuild_report(ctx: GitstampContext) -> VersionReport:
    """Aggregate a fresh report and persist it.

    Raises:
        CacheWriteError: If the report cannot be written
    """
    report = build_version_report(
        layout=ctx.config.layout,
        plugin_names=ctx.plugin_catalog.list_plugins(),
        commit_reader=ctx.commit_reader,
        max_workers=ctx.config.max_workers,
    )
    write_version_report(report, ctx.config.cache_file)
    logger.info("Version cache rebuilt: %s", ctx.config.cache_file)
    return report


def refresh_if_stale(
    ctx: GitstampContext, report_format: ReportFormat, *, force: bool = False
) -> RefreshDecision:
    """Rebuild the cache when the staleness policy (or `force`) requires it.

    A fresh cache is answered without taking the lock, so reading needs no
    write access to the cache directory. A stale verdict is re-checked once
    the lock is held, since another process may have rebuilt meanwhile.

    Returns:
        The decision that was acted on

    Raises:
        CacheWriteError: If a rebuild was needed but could not be written
            (or the lock could not be taken); the previous cache file, if
            any, is left untouched
    """
    if not force:
        decision = check_staleness(ctx, report_format)
        if not decision.needed:
            return decision

    with cache_lock(ctx.config.cache_file):
        if force:
            decision = RefreshDecision(needed=True, reason="forced")
        else:
            decision = check_staleness(ctx, report_format)
        if decision.needed:
            rebuild_report(ctx)
    return decision


def load_version_report(
    ctx: GitstampContext, report_format: ReportFormat, *, refresh: bool = True
) -> VersionReport | None:
    """Return the cached report, refreshing it first unless `refresh` is False.

    Returns:
        The report, or None when no readable cache exists

    Raises:
        CacheWriteError: If a needed rebuild could not be written
    """
    if refresh:
        refresh_if_stale(ctx, report_format)
    return read_version_report(ctx.config.cache_file)
