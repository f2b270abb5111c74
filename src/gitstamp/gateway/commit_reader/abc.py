"""Abstract interface for reading head commit information."""

from abc import ABC, abstractmethod
from pathlib import Path

from gitstamp.gateway.commit_reader.types import CommitInfo, CommitReadError


class CommitReader(ABC):
    """Abstract interface for commit reading.

    All implementations (real, fake) must implement this interface.
    """

    @abstractmethod
    def describe(self, git_dir: Path) -> CommitInfo | CommitReadError:
        """Describe the commit HEAD resolves to.

        Args:
            git_dir: Resolved repository metadata directory

        Returns:
            CommitInfo on success, CommitReadError for any failure (missing
            object, corrupt ref, no `origin` remote)
        """
        ...
