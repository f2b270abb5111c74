import dataclasses
import logging
import tomllib
from pathlib import Path
from typing import cast

import click
from rich.console import Console

from gitstamp.cli.render import build_details_table, format_short
from gitstamp.core.cache_store import CacheWriteError, read_version_report
from gitstamp.core.config import REPORT_FORMATS, ConfigError, ReportFormat
from gitstamp.core.context import GitstampContext, create_context
from gitstamp.core.service import check_staleness, load_version_report, refresh_if_stale
from gitstamp.core.types import VersionReport
from gitstamp.output import user_output

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

format_option = click.option(
    "--format",
    "report_format",
    type=click.Choice(REPORT_FORMATS),
    help="short = app version only, details = every component",
)


def _with_cache_file(ctx: GitstampContext, cache_file: Path | None) -> GitstampContext:
    if cache_file is None:
        return ctx
    config = dataclasses.replace(ctx.config, cache_file=cache_file.resolve())
    return dataclasses.replace(ctx, config=config)


def _resolve_format(ctx: GitstampContext, report_format: str | None) -> ReportFormat:
    if report_format is None:
        return ctx.config.report_format
    return cast(ReportFormat, report_format)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitstamp")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: .gitstamp/config.toml)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_path: Path | None) -> None:
    """Cache and show the versions of an application, its core and its plugins."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(Path.cwd(), config_path)
        except (ConfigError, tomllib.TOMLDecodeError) as e:
            user_output(click.style("Error: ", fg="red") + f"Invalid config: {e}")
            raise SystemExit(1) from e


@cli.command("show")
@format_option
@click.option("--link", help="Short format: link the version to this URL")
@click.option("--prefix", help="Short format: text before the version")
@click.option("--suffix", help="Short format: text after the version")
@click.option(
    "--cache-file", type=click.Path(dir_okay=False, path_type=Path), help="Override cache file"
)
@click.option("--cached", is_flag=True, help="Show the cache as-is, without refreshing it")
@click.pass_obj
def show_cmd(
    ctx: GitstampContext,
    report_format: str | None,
    link: str | None,
    prefix: str | None,
    suffix: str | None,
    cache_file: Path | None,
    cached: bool,
) -> None:
    """Show version information, refreshing the cache when a repository advanced.

    Examples:

    \b
      # Application version only
      gitstamp show

      # Every component as a table
      gitstamp show --format details
    """
    ctx = _with_cache_file(ctx, cache_file)
    fmt = _resolve_format(ctx, report_format)

    report: VersionReport | None
    try:
        report = load_version_report(ctx, fmt, refresh=not cached)
    except CacheWriteError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        report = read_version_report(ctx.config.cache_file)
        if report is None:
            raise SystemExit(1) from e
        user_output("Showing previous version information.")

    if not report:
        user_output("No version information available.")
        return

    console = Console(width=200)
    if fmt == "short":
        text = format_short(report, link=link, prefix=prefix, suffix=suffix)
        if text is None:
            user_output("No version information available.")
            return
        console.print(text)
    else:
        console.print(build_details_table(report))


@cli.command("refresh")
@click.option("--force", is_flag=True, help="Rebuild even if the cache looks fresh")
@format_option
@click.pass_obj
def refresh_cmd(ctx: GitstampContext, force: bool, report_format: str | None) -> None:
    """Rebuild the version cache if any repository advanced."""
    fmt = _resolve_format(ctx, report_format)
    try:
        decision = refresh_if_stale(ctx, fmt, force=force)
    except CacheWriteError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    if decision.needed:
        user_output(f"Rebuilt {ctx.config.cache_file} ({decision.reason})")
    else:
        user_output(f"Up to date: {ctx.config.cache_file} ({decision.reason})")


@cli.command("check")
@format_option
@click.pass_obj
def check_cmd(ctx: GitstampContext, report_format: str | None) -> None:
    """Print whether the version cache is stale, without rebuilding it."""
    decision = check_staleness(ctx, _resolve_format(ctx, report_format))
    click.echo("stale" if decision.needed else "fresh")
    user_output(decision.reason)
