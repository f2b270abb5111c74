"""Tests for DirectoryPluginCatalog."""

from pathlib import Path

from gitstamp.gateway.plugin_catalog.real import DirectoryPluginCatalog


def test_lists_subdirectories_sorted(tmp_path: Path) -> None:
    for name in ("zeta", "alpha", "mid"):
        (tmp_path / name).mkdir()

    assert DirectoryPluginCatalog(tmp_path).list_plugins() == ["alpha", "mid", "zeta"]


def test_skips_files_and_hidden_directories(tmp_path: Path) -> None:
    (tmp_path / "alpha").mkdir()
    (tmp_path / ".cache").mkdir()
    (tmp_path / "README").write_text("plugins live here", encoding="utf-8")

    assert DirectoryPluginCatalog(tmp_path).list_plugins() == ["alpha"]


def test_missing_plugin_directory_has_no_plugins(tmp_path: Path) -> None:
    assert DirectoryPluginCatalog(tmp_path / "plugin").list_plugins() == []
