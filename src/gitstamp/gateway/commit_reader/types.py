"""Discriminated union types for commit reading.

CommitInfo | CommitReadError follows the NonIdealState pattern: readers
return the error value instead of raising it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitInfo:
    """Success result describing a repository's head commit.

    Attributes:
        version: `describe` label (nearest tag, or abbreviated commit id)
        date: Author date formatted as "YYYY-MM-DD HH:MM:SS +HHMM"
        origin: URL of the `origin` remote
    """

    version: str
    date: str
    origin: str


@dataclass(frozen=True)
class CommitReadError:
    """Error: repository metadata present but unreadable. Implements NonIdealState."""

    message: str

    @property
    def error_type(self) -> str:
        return "commit-read-failed"
