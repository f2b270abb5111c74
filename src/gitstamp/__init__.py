"""gitstamp CLI entry point.

This package builds a cached version report for an application made of a
root project, a core library and plugins, each possibly its own git
repository. See `gitstamp --help` for details.
"""

from gitstamp.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `gitstamp` console script."""
    cli()
