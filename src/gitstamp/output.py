"""User-facing output helpers.

Diagnostics and status messages go to stderr so stdout carries only the
rendered report.
"""

import click


def user_output(message: str = "") -> None:
    """Print a user-facing message to stderr."""
    click.echo(message, err=True)
