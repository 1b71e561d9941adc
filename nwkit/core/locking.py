"""
Concurrent access control for nwkit.

Two acquisitions that target the same cache key must not interleave their
cache check, download and extraction. This module provides a per-key,
cross-process file lock for that window.

Usage:
    from nwkit.core.locking import LockManager

    lock_manager = LockManager(cache_dir / ".locks")
    with lock_manager.archive_lock("nwjs-v0.44.5-linux-x64", timeout=600):
        # Re-check the cache, then download and extract
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 600


class LockManager:
    """
    Manages per-archive locks inside a cache directory.

    Uses file-based locking with the `filelock` library, so the lock holds
    across threads and processes and is released if the holder dies.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (created on first lock)
        """
        self.lock_dir = Path(lock_dir)

    def lock_path(self, archive_name: str) -> Path:
        """Return the lock file used for ``archive_name``."""
        safe_name = archive_name.replace("/", "-").replace("\\", "-").replace(":", "-")
        return self.lock_dir / f"{safe_name}.lock"

    @contextmanager
    def archive_lock(self, archive_name: str, timeout: Optional[float] = None):
        """
        Acquire the lock for a single cache key.

        Args:
            archive_name: Cache key (e.g., 'nwjs-v0.44.5-linux-x64')
            timeout: Maximum wait in seconds (default: 600, negative waits forever)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout

        Example:
            >>> with lock_manager.archive_lock('nwjs-sdk-v0.50.0-win-x64'):
            ...     download_and_extract()
        """
        if timeout is None:
            timeout = DEFAULT_LOCK_TIMEOUT

        self.lock_dir.mkdir(parents=True, exist_ok=True)
        lock_path = self.lock_path(archive_name)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired archive lock: {lock_path}")
                yield
                logger.debug(f"Released archive lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire lock for {archive_name} after {timeout}s. "
                "Another process may be downloading this binary."
            )
            raise LockTimeout(str(lock_path)) from e


__all__ = [
    "LockManager",
    "LockTimeout",
    "DEFAULT_LOCK_TIMEOUT",
]
