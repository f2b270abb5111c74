"""Builders for GitstampContext instances wired to fake gateways."""

from pathlib import Path

from gitstamp.core.config import load_config
from gitstamp.core.context import GitstampContext
from gitstamp.gateway.commit_reader.fake import FakeCommitReader
from gitstamp.gateway.commit_reader.types import CommitInfo
from gitstamp.gateway.plugin_catalog.fake import FakePluginCatalog
from tests.test_utils.git_layout import make_work_tree

APP_INFO = CommitInfo(
    version="v1.0.0", date="2024-01-01 00:00:00 +0000", origin="https://example.com/app.git"
)
CORE_INFO = CommitInfo(
    version="v9.9.9", date="2024-01-02 00:00:00 +0000", origin="https://example.com/core.git"
)


def make_app_tree(root: Path, *, bundled_plugins: list[str] | None = None) -> Path:
    """Create app and core working trees plus plugin directories without repositories.

    Returns:
        `root`
    """
    make_work_tree(root)
    make_work_tree(root / "core")
    for name in bundled_plugins or []:
        (root / "plugin" / name).mkdir(parents=True, exist_ok=True)
    return root


def default_results(root: Path) -> dict[Path, CommitInfo]:
    """Reader results for the app and core trees created by make_app_tree."""
    return {
        (root / ".git").resolve(): APP_INFO,
        (root / "core" / ".git").resolve(): CORE_INFO,
    }


def build_test_context(
    root: Path,
    *,
    commit_reader: FakeCommitReader | None = None,
    plugins: list[str] | None = None,
) -> GitstampContext:
    """Build a context over `root` with fake gateways and the default config."""
    return GitstampContext(
        commit_reader=(
            commit_reader
            if commit_reader is not None
            else FakeCommitReader(results=default_results(root))
        ),
        plugin_catalog=FakePluginCatalog(plugins=plugins),
        config=load_config(root),
    )
