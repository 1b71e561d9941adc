"""
Local cache of extracted NW.js binaries.

Layout under the cache root:
    <name>/           : Extracted binary directory (the cache entry)
    <name><ext>       : Transient archive, present only during acquisition
                        or after a failed extraction
    <name>.partial    : Marker written before extraction, removed on success
    .locks/           : Per-key lock files

A directory counts as a cache hit unless its partial marker is present.
Directories created by earlier runs or other tools therefore remain valid,
while an interrupted extraction is never mistaken for a complete one.
"""

import logging
from pathlib import Path
from typing import List, Union

from nwkit.binary.models import ResolvedArchive
from nwkit.core.filesystem import safe_rmtree

logger = logging.getLogger(__name__)

PARTIAL_SUFFIX = ".partial"
LOCK_DIR_NAME = ".locks"


class CacheStore:
    """
    Directory-backed cache keyed by archive name.

    Attributes:
        cache_dir: Cache root
    """

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)

    @property
    def lock_dir(self) -> Path:
        return self.cache_dir / LOCK_DIR_NAME

    def ensure_root(self) -> Path:
        """Create the cache root (recursive, idempotent)."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return self.cache_dir

    def entry_path(self, name: str) -> Path:
        """Absolute path of the cache entry for ``name``."""
        return (self.cache_dir / name).absolute()

    def archive_path(self, archive: ResolvedArchive) -> Path:
        """Path of the transient archive for ``archive``."""
        return self.cache_dir / archive.filename

    def partial_marker(self, name: str) -> Path:
        return self.cache_dir / f"{name}{PARTIAL_SUFFIX}"

    def has(self, name: str) -> bool:
        """
        Check whether a complete cache entry exists.

        Args:
            name: Archive name / cache key

        Returns:
            True if ``cache_dir/name`` is a directory without a partial marker
        """
        entry = self.cache_dir / name
        if not entry.is_dir():
            return False

        if self.partial_marker(name).exists():
            logger.warning(
                f"Ignoring incomplete cache entry from an interrupted "
                f"extraction: {entry}"
            )
            return False

        return True

    def mark_partial(self, name: str) -> None:
        """Record that extraction of ``name`` has started."""
        self.ensure_root()
        self.partial_marker(name).touch()

    def clear_partial(self, name: str) -> None:
        """Record that extraction of ``name`` completed."""
        self.partial_marker(name).unlink(missing_ok=True)

    def remove_entry(self, name: str) -> None:
        """Delete the cache entry directory for ``name`` if present."""
        entry = self.cache_dir / name
        if entry.exists():
            logger.debug(f"Removing cache entry: {entry}")
            safe_rmtree(entry, require_prefix=self.cache_dir)

    def list_entries(self) -> List[str]:
        """
        List complete cache entries.

        Returns:
            Sorted archive names with a complete cache entry
        """
        if not self.cache_dir.is_dir():
            return []

        return sorted(
            path.name
            for path in self.cache_dir.iterdir()
            if path.is_dir() and not path.name.startswith(".") and self.has(path.name)
        )
