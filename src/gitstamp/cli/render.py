"""Presentation of a version report: one-line short form or a details table."""

from rich.table import Table
from rich.text import Text

from gitstamp.core.types import APP_COMPONENT, FailedVersion, ResolvedVersion, VersionReport


def format_short(
    report: VersionReport,
    *,
    link: str | None = None,
    prefix: str | None = None,
    suffix: str | None = None,
) -> Text | None:
    """Render the application's own version.

    Args:
        report: Loaded version report
        link: URL the version text links to
        prefix: Text placed before the version (e.g. a delimiter)
        suffix: Text placed after the version

    Returns:
        Rich Text, or None when the app version is unknown
    """
    app = report.get(APP_COMPONENT)
    if not isinstance(app, ResolvedVersion):
        return None

    text = Text(prefix or "")
    text.append(app.version, style=f"link {link}" if link else "")
    text.append(suffix or "")
    return text


def _describe_failure(version: FailedVersion) -> str:
    parts = [part for part in (version.error, version.note) if part]
    return " ".join(parts)


def build_details_table(report: VersionReport) -> Table:
    """Build a table with one row per component."""
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Part", style="cyan", no_wrap=True)
    table.add_column("Version", style="yellow", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Origin")

    for component_id, version in report.items():
        if isinstance(version, ResolvedVersion):
            table.add_row(component_id, version.version, version.date, version.origin)
        else:
            # Bundled plugins are informational; real failures are highlighted
            style = "red" if version.error else "dim"
            table.add_row(component_id, "-", "-", Text(_describe_failure(version), style=style))

    return table
