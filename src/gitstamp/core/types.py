"""Data types shared by the locator, detector, aggregator and cache store.

ComponentVersion is a discriminated union: ResolvedVersion | FailedVersion.
Both variants are frozen so a report never changes after it is built.
"""

from dataclasses import dataclass
from pathlib import Path

APP_COMPONENT = "app"
CORE_COMPONENT = "core"
PLUGIN_PREFIX = "plugin:"

READ_FAILURE_ERROR = "Failed to read git repository."
BUNDLED_PLUGIN_NOTE = "bundled, not a separate repository"


def plugin_component_id(plugin_name: str) -> str:
    """Return the report key for a plugin (e.g. "plugin:alpha")."""
    return f"{PLUGIN_PREFIX}{plugin_name}"


@dataclass(frozen=True)
class RepositoryNotFound:
    """Sentinel: no repository metadata lives at the given location.

    Returned, never raised. A missing repository is an expected state for
    bundled plugins and for directories that are not checkouts.
    """

    path: Path
    message: str = "No git repository found"


@dataclass(frozen=True)
class ResolvedVersion:
    """Version descriptor read successfully from a repository."""

    version: str
    date: str  # "YYYY-MM-DD HH:MM:SS +HHMM"
    origin: str


@dataclass(frozen=True)
class FailedVersion:
    """Version descriptor for a component whose repository could not be read.

    Attributes:
        error: Short failure summary, or None when the component simply has
            no repository of its own (bundled plugin)
        note: Human-readable detail (underlying reader message, or the
            bundled-plugin note)
    """

    error: str | None
    note: str | None


ComponentVersion = ResolvedVersion | FailedVersion

# Ordered mapping component id -> ComponentVersion. dict preserves insertion order.
VersionReport = dict[str, ComponentVersion]


@dataclass(frozen=True)
class CacheArtifact:
    """Stat snapshot of the cache file.

    Attributes:
        path: Location of the cache file
        mtime: Last-modified time (seconds since epoch)
        size: Size in bytes
    """

    path: Path
    mtime: float
    size: int

    def is_viable(self, min_size: int) -> bool:
        """Whether the file is large enough to hold real serialized data."""
        return self.size >= min_size
