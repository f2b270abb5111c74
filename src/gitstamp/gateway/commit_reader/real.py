"""Commit reader backed by pygit2 (libgit2); no git executable is run."""

import logging
from datetime import UTC, datetime
from pathlib import Path

import pygit2
from pygit2.enums import DescribeStrategy, RepositoryOpenFlag

from gitstamp.gateway.commit_reader.abc import CommitReader
from gitstamp.gateway.commit_reader.types import CommitInfo, CommitReadError

logger = logging.getLogger(__name__)

ORIGIN_URL_KEY = "remote.origin.url"


def format_commit_date(timestamp: int, offset_minutes: int) -> str:
    """Format an author time in the author's own UTC offset.

    Args:
        timestamp: Seconds since epoch (UTC)
        offset_minutes: Author's UTC offset in minutes

    Returns:
        "YYYY-MM-DD HH:MM:SS +HHMM"

    Example:
        >>> format_commit_date(0, -330)
        '1969-12-31 18:30:00 -0530'
    """
    wall_clock = datetime.fromtimestamp(timestamp + offset_minutes * 60, tz=UTC)
    sign = "+" if offset_minutes >= 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{wall_clock:%Y-%m-%d %H:%M:%S} {sign}{hours:02d}{minutes:02d}"


class Pygit2CommitReader(CommitReader):
    """Production implementation reading the object database through pygit2."""

    def describe(self, git_dir: Path) -> CommitInfo | CommitReadError:
        try:
            # NO_SEARCH: a broken plugin repository must not fall back to an enclosing one
            repo = pygit2.Repository(str(git_dir), flags=RepositoryOpenFlag.NO_SEARCH)
            commit = repo[repo.head.target].peel(pygit2.Commit)
            version = repo.describe(
                committish=str(commit.id),
                describe_strategy=DescribeStrategy.TAGS,
                show_commit_oid_as_fallback=True,
            )
            origin = repo.config[ORIGIN_URL_KEY]
        except KeyError as e:
            logger.debug("Missing key reading %s: %s", git_dir, e)
            return CommitReadError(message=f"{git_dir}: missing {e}")
        except (pygit2.GitError, ValueError, OSError) as e:
            logger.debug("Failed to read %s: %s", git_dir, e)
            return CommitReadError(message=f"{git_dir}: {e}")

        return CommitInfo(
            version=version,
            date=format_commit_date(commit.author.time, commit.author.offset),
            origin=origin,
        )
