"""Tests for FakeCommitReader."""

from pathlib import Path

from gitstamp.gateway.commit_reader.fake import FakeCommitReader
from gitstamp.gateway.commit_reader.types import CommitInfo, CommitReadError


def test_returns_configured_result() -> None:
    info = CommitInfo(version="v1", date="2024-01-01 00:00:00 +0000", origin="url")
    fake = FakeCommitReader(results={Path("/repo/.git"): info})

    assert fake.describe(Path("/repo/.git")) == info


def test_unknown_directory_is_read_error() -> None:
    fake = FakeCommitReader()

    result = fake.describe(Path("/unknown/.git"))

    assert isinstance(result, CommitReadError)
    assert "/unknown/.git" in result.message


def test_records_described_directories() -> None:
    fake = FakeCommitReader()

    fake.describe(Path("/a/.git"))
    fake.describe(Path("/b/.git"))

    assert fake.described == [Path("/a/.git"), Path("/b/.git")]
