"""Fake commit reader for testing."""

from pathlib import Path

from gitstamp.gateway.commit_reader.abc import CommitReader
from gitstamp.gateway.commit_reader.types import CommitInfo, CommitReadError


class FakeCommitReader(CommitReader):
    """In-memory fake implementation.

    Constructor Injection: results keyed by metadata directory.
    Mutation Tracking: records every directory passed to describe().
    """

    def __init__(
        self,
        *,
        results: dict[Path, CommitInfo | CommitReadError] | None = None,
    ) -> None:
        """Create FakeCommitReader with pre-configured results.

        Args:
            results: Mapping of git_dir -> result. Unknown directories yield
                a CommitReadError.
        """
        self._results = results if results is not None else {}
        self._described: list[Path] = []

    def describe(self, git_dir: Path) -> CommitInfo | CommitReadError:
        self._described.append(git_dir)
        if git_dir in self._results:
            return self._results[git_dir]
        return CommitReadError(message=f"{git_dir}: no fake result configured")

    @property
    def described(self) -> list[Path]:
        """Read-only access to describe() calls for test assertions."""
        return list(self._described)
