"""Repository metadata location without invoking git.

Two on-disk redirections share the same shape (read one line, strip a
prefix, treat the rest as a path):

- `.git` as a regular file containing "gitdir: <target>" (linked worktrees,
  submodules)
- `HEAD` containing "ref: <refname>" (symbolic reference to a branch)

Both are followed exactly one level deep.
"""

from pathlib import Path

from gitstamp.core.types import RepositoryNotFound

GIT_DIR_NAME = ".git"
HEAD_FILE_NAME = "HEAD"
COMMON_DIR_FILE_NAME = "commondir"

GITDIR_PREFIX = "gitdir:"
SYMREF_PREFIX = "ref:"


def read_redirect(pointer_file: Path, prefix: str) -> str | None:
    """Read a one-line pointer file and return the target after `prefix`.

    Args:
        pointer_file: File whose first line may hold a redirect
        prefix: Expected line prefix ("gitdir:", "ref:", or "" for bare paths)

    Returns:
        The stripped target, or None if the file is unreadable, empty, or its
        first line does not start with `prefix`
    """
    try:
        content = pointer_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    lines = content.splitlines()
    if not lines or not lines[0].startswith(prefix):
        return None

    target = lines[0][len(prefix) :].strip()
    if not target:
        return None
    return target


def resolve_git_dir(base_path: Path) -> Path | RepositoryNotFound:
    """Find the metadata directory for the working tree at `base_path`.

    Args:
        base_path: Working tree directory expected to contain `.git`

    Returns:
        Absolute path to the metadata directory, or RepositoryNotFound when
        `.git` is missing, is an unreadable pointer, or points nowhere
    """
    git_path = base_path / GIT_DIR_NAME

    if git_path.is_dir():
        return git_path.resolve()

    if not git_path.is_file():
        return RepositoryNotFound(path=base_path)

    target = read_redirect(git_path, GITDIR_PREFIX)
    if target is None:
        return RepositoryNotFound(path=base_path, message=f"Unreadable gitdir pointer: {git_path}")

    # Relative targets are relative to the directory holding the pointer file
    resolved = (base_path / target).resolve()
    if not resolved.is_dir():
        return RepositoryNotFound(path=base_path, message=f"gitdir target missing: {resolved}")
    return resolved


def head_file(git_dir: Path) -> Path:
    """Return the head pointer file inside a metadata directory."""
    return git_dir / HEAD_FILE_NAME


def read_symbolic_ref(git_dir: Path) -> str | None:
    """Return the ref name HEAD points to, or None for a detached/unreadable HEAD."""
    return read_redirect(head_file(git_dir), SYMREF_PREFIX)


def ref_file(git_dir: Path, ref_name: str) -> Path:
    """Locate the loose ref file for `ref_name`.

    Linked worktrees keep their own HEAD but share branch refs with the main
    repository, reached through the `commondir` file. The common directory is
    consulted only when the ref is absent from `git_dir` itself.

    Args:
        git_dir: Resolved metadata directory
        ref_name: Ref path such as "refs/heads/main"

    Returns:
        Path of the ref file (which may not exist)
    """
    candidate = git_dir / ref_name
    if candidate.exists():
        return candidate

    common = read_redirect(git_dir / COMMON_DIR_FILE_NAME, "")
    if common is None:
        return candidate
    return (git_dir / common).resolve() / ref_name
