"""
Archive extraction.

An :class:`Extractor` expands one transient archive into the cache root and
then removes the archive. The strategy is looked up from the
:class:`ArchiveFormat` chosen by the locator.

States::

    NOT_STARTED --> EXTRACTING --> DONE
                         |
                         +-------> FAILED

On FAILED the transient archive stays on disk for diagnosis. After DONE
the archive is deleted; failing to delete it is only a warning.
"""

import logging
import tarfile
import time
import warnings
import zipfile
import zlib
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from nwkit.binary.models import ArchiveFormat, ResolvedArchive
from nwkit.core.exceptions import (
    CleanupWarning,
    ExtractionError,
    UnsupportedArchiveFormat,
)
from nwkit.core.filesystem import extract_tar_gz, extract_zip

logger = logging.getLogger(__name__)


class ExtractionState(Enum):
    """Lifecycle of a single extraction."""

    NOT_STARTED = "not_started"
    EXTRACTING = "extracting"
    DONE = "done"
    FAILED = "failed"


class ExtractionStrategy(ABC):
    """Expands one archive format into a directory."""

    @abstractmethod
    def extract(
        self,
        archive_path: Path,
        destination: Path,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        pass


class TarGzStrategy(ExtractionStrategy):
    """gzip decompression composed with tar member expansion."""

    def extract(self, archive_path, destination, progress_callback=None):
        extract_tar_gz(archive_path, destination, progress_callback)


class ZipStrategy(ExtractionStrategy):
    """zip expansion."""

    def extract(self, archive_path, destination, progress_callback=None):
        extract_zip(archive_path, destination, progress_callback)


STRATEGIES: Dict[ArchiveFormat, ExtractionStrategy] = {
    ArchiveFormat.TAR_GZ: TarGzStrategy(),
    ArchiveFormat.ZIP: ZipStrategy(),
}


class Extractor:
    """
    Extracts a transient archive into the cache root.

    An instance handles exactly one extraction.

    Example:
        >>> extractor = Extractor(archive, cache_dir)
        >>> binary_dir = extractor.extract(cache_dir / archive.filename)
        >>> extractor.state
        <ExtractionState.DONE: 'done'>
    """

    def __init__(self, archive: ResolvedArchive, destination: Path):
        """
        Initialize extractor.

        Args:
            archive: Archive being extracted (selects the strategy)
            destination: Cache root to extract into
        """
        self.archive = archive
        self.destination = Path(destination)
        self.state = ExtractionState.NOT_STARTED
        self.warnings: List[str] = []
        self.elapsed = 0.0

    def strategy(self) -> ExtractionStrategy:
        try:
            return STRATEGIES[self.archive.archive_format]
        except KeyError:
            raise UnsupportedArchiveFormat(
                f"No extraction strategy for {self.archive.archive_format}"
            ) from None

    def extract(
        self,
        archive_path: Path,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> Path:
        """
        Expand the archive and remove it.

        Args:
            archive_path: Transient archive to expand
            progress_callback: Optional callback(current, total)

        Returns:
            Path to the extracted binary directory

        Raises:
            ExtractionError: If the archive is malformed, a write fails, or
                the archive did not contain the expected directory
        """
        if self.state is not ExtractionState.NOT_STARTED:
            raise ExtractionError(
                f"Extractor for {self.archive.name} already ran "
                f"(state: {self.state.value})"
            )

        archive_path = Path(archive_path)
        strategy = self.strategy()
        self.state = ExtractionState.EXTRACTING
        logger.info("Extracting binary")
        logger.debug(
            f"Extracting {archive_path} into {self.destination} "
            f"with {type(strategy).__name__}"
        )

        start = time.time()
        try:
            strategy.extract(archive_path, self.destination, progress_callback)
        except ExtractionError:
            self.state = ExtractionState.FAILED
            raise
        except (
            tarfile.TarError,
            zipfile.BadZipFile,
            zlib.error,
            EOFError,
            OSError,
            NotImplementedError,
            RuntimeError,
            ValueError,
        ) as e:
            self.state = ExtractionState.FAILED
            logger.error(f"Extraction of {archive_path.name} failed: {e}")
            raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e
        self.elapsed = time.time() - start

        binary_dir = self.destination / self.archive.name
        if not binary_dir.is_dir():
            self.state = ExtractionState.FAILED
            raise ExtractionError(
                f"Archive {archive_path.name} did not contain the directory "
                f"{self.archive.name}"
            )

        self.state = ExtractionState.DONE
        self._remove_archive(archive_path)
        return binary_dir.absolute()

    def _remove_archive(self, archive_path: Path) -> None:
        try:
            archive_path.unlink(missing_ok=True)
            logger.debug(f"Removed transient archive: {archive_path}")
        except OSError as e:
            message = f"Could not remove transient archive {archive_path}: {e}"
            logger.warning(message)
            warnings.warn(message, CleanupWarning, stacklevel=3)
            self.warnings.append(message)
