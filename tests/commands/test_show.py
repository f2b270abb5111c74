"""Tests for the show command."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from gitstamp.cli.cli import cli
from gitstamp.core import service
from gitstamp.core.cache_store import CacheWriteError
from gitstamp.core.lock import lock_path_for
from gitstamp.gateway.commit_reader.fake import FakeCommitReader
from tests.test_utils.context_builders import build_test_context, make_app_tree
from tests.test_utils.git_layout import set_mtime


def test_show_short_prints_app_version(tmp_path: Path) -> None:
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root)

    runner = CliRunner()
    result = runner.invoke(cli, ["show"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "v1.0.0"
    assert ctx.config.cache_file.exists()


def test_show_short_with_prefix_and_suffix(tmp_path: Path) -> None:
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root)

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["show", "--prefix", "Version ", "--suffix", ".", "--link", "https://example.com"],
        obj=ctx,
    )

    assert result.exit_code == 0, result.output
    assert "Version v1.0.0." in result.output


def test_show_details_prints_table(tmp_path: Path) -> None:
    root = make_app_tree(tmp_path / "app", bundled_plugins=["alpha"])
    ctx = build_test_context(root, plugins=["alpha"])

    runner = CliRunner()
    result = runner.invoke(cli, ["show", "--format", "details"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Part" in result.output
    assert "v9.9.9" in result.output
    assert "plugin:alpha" in result.output
    assert "bundled, not a separate repository" in result.output


def test_show_without_app_version(tmp_path: Path) -> None:
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root, commit_reader=FakeCommitReader())

    runner = CliRunner()
    result = runner.invoke(cli, ["show"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "No version information available." in result.output


def test_show_cached_never_builds(tmp_path: Path) -> None:
    root = make_app_tree(tmp_path / "app")
    reader = FakeCommitReader()
    ctx = build_test_context(root, commit_reader=reader)

    runner = CliRunner()
    result = runner.invoke(cli, ["show", "--cached"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "No version information available." in result.output
    assert reader.described == []
    assert not ctx.config.cache_file.exists()


def test_show_cache_file_override(tmp_path: Path) -> None:
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root)
    override = tmp_path / "elsewhere" / "versions.ini"

    runner = CliRunner()
    result = runner.invoke(cli, ["show", "--cache-file", str(override)], obj=ctx)

    assert result.exit_code == 0, result.output
    assert override.exists()
    assert not ctx.config.cache_file.exists()


def test_show_falls_back_to_previous_cache_on_write_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root)
    runner = CliRunner()
    assert runner.invoke(cli, ["show"], obj=ctx).exit_code == 0
    # Age the cache so the next details show wants to rebuild
    set_mtime(ctx.config.cache_file, 1_000_000_000)

    def failing_write(report: object, path: Path) -> None:
        raise CacheWriteError(path, "Permission denied")

    monkeypatch.setattr(service, "write_version_report", failing_write)

    result = runner.invoke(cli, ["show", "--format", "details"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Permission denied" in result.output
    assert "Showing previous version information." in result.output
    assert "v1.0.0" in result.output


def test_show_write_failure_without_previous_cache(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root)

    def failing_write(report: object, path: Path) -> None:
        raise CacheWriteError(path, "Read-only file system")

    monkeypatch.setattr(service, "write_version_report", failing_write)

    runner = CliRunner()
    result = runner.invoke(cli, ["show"], obj=ctx)

    assert result.exit_code == 1
    assert "Read-only file system" in result.output


def test_show_fresh_cache_needs_no_lock(tmp_path: Path) -> None:
    """Test that a fresh cache is shown even when the lock file cannot be opened."""
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root)
    runner = CliRunner()
    assert runner.invoke(cli, ["show"], obj=ctx).exit_code == 0
    lock_file = lock_path_for(ctx.config.cache_file)
    lock_file.unlink()
    lock_file.mkdir()

    result = runner.invoke(cli, ["show", "--format", "details"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "v1.0.0" in result.output
    assert "Error" not in result.output


def test_show_unopenable_lock_falls_back_to_previous_cache(tmp_path: Path) -> None:
    root = make_app_tree(tmp_path / "app")
    ctx = build_test_context(root)
    runner = CliRunner()
    assert runner.invoke(cli, ["show"], obj=ctx).exit_code == 0
    lock_file = lock_path_for(ctx.config.cache_file)
    lock_file.unlink()
    lock_file.mkdir()
    set_mtime(ctx.config.cache_file, 1_000_000_000)

    result = runner.invoke(cli, ["show", "--format", "details"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "lock" in result.output
    assert "Showing previous version information." in result.output
    assert "v1.0.0" in result.output
