"""Cross-process lock serializing cache rebuilds."""

import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from gitstamp.core.cache_store import CacheWriteError


def lock_path_for(cache_file: Path) -> Path:
    return cache_file.with_name(f"{cache_file.name}.lock")


@contextmanager
def cache_lock(cache_file: Path) -> Iterator[None]:
    """Hold an exclusive fcntl lock next to `cache_file` for the duration of the block.

    Concurrent callers wait here instead of rebuilding the same report twice.

    Raises:
        CacheWriteError: If the lock file cannot be created or locked
    """
    lock_file = lock_path_for(cache_file)
    try:
        lock_file.parent.mkdir(parents=True, exist_ok=True)
        # Append mode so opening never truncates a lock file another process holds
        lock_fd = open(lock_file, "a")
    except OSError as e:
        raise CacheWriteError(cache_file, f"cannot open lock file {lock_file}: {e}") from e

    with lock_fd:
        try:
            fcntl.flock(lock_fd.fileno(), fcntl.LOCK_EX)
        except OSError as e:
            raise CacheWriteError(cache_file, f"cannot lock {lock_file}: {e}") from e
        try:
            yield
        finally:
            fcntl.flock(lock_fd.fileno(), fcntl.LOCK_UN)
