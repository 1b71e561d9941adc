"""
File system utilities for nwkit.

This module provides the low-level operations used by the acquisition
pipeline:
- Archive expansion (tar.gz, zip) with directory traversal protection
- Preservation of unix permissions and symlinks stored in zip archives
- Safe directory deletion restricted to a required prefix
"""

import os
import shutil
import stat
import sys
import tarfile
import zipfile
from pathlib import Path
from typing import Callable, Optional, Union

from nwkit.core.exceptions import ExtractionError, InsecureArchiveError, NwKitError

IS_WINDOWS = os.name == "nt"


class FilesystemError(NwKitError):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Args:
        path: Path to check
        parent: Parent directory

    Returns:
        True if path is under parent directory

    Example:
        >>> is_relative_to(Path("/home/user/cache/nwjs"), Path("/home/user"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Prevents directory traversal attacks (e.g., paths containing '../').

    Args:
        path: Member path from archive
        destination: Extraction destination

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


# ============================================================================
# Archive Extraction
# ============================================================================


def extract_tar_gz(
    archive_path: Path,
    destination: Path,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> None:
    """
    Decompress and expand a gzip-compressed tar archive.

    Args:
        archive_path: Path to the .tar.gz file
        destination: Directory to extract into
        progress_callback: Optional callback(current, total)

    Raises:
        InsecureArchiveError: If a member escapes the destination
        tarfile.TarError: If the archive is malformed
        OSError: On read/write failures
    """
    with tarfile.open(archive_path, "r:gz") as tar:
        members = tar.getmembers()
        total = len(members)

        # Validate all paths first
        for member in members:
            validate_archive_path(member.name, destination)

        # Extract with filter for security (Python 3.12+)
        # For older Python, paths were validated above
        if sys.version_info >= (3, 12):
            tar.extractall(destination, filter="data")
        else:
            tar.extractall(destination)

        if progress_callback:
            progress_callback(total, total)


def extract_zip(
    archive_path: Path,
    destination: Path,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> None:
    """
    Expand a zip archive.

    ``zipfile`` drops the unix mode and writes symlinks as plain files, so
    both are restored from each entry's external attributes. macOS builds
    rely on the symlinks inside their framework bundles.

    Args:
        archive_path: Path to the .zip file
        destination: Directory to extract into
        progress_callback: Optional callback(current, total)

    Raises:
        InsecureArchiveError: If a member or symlink target escapes the destination
        ExtractionError: If a symlink target is not valid UTF-8
        zipfile.BadZipFile: If the archive is malformed
        NotImplementedError: If an entry uses an unsupported compression method
        RuntimeError: If an entry is encrypted
        OSError: On read/write failures
    """
    with zipfile.ZipFile(archive_path, "r") as zf:
        infos = zf.infolist()
        total = len(infos)

        for info in infos:
            validate_archive_path(info.filename, destination)

        for i, info in enumerate(infos):
            mode = info.external_attr >> 16

            if stat.S_ISLNK(mode) and not IS_WINDOWS:
                _extract_zip_symlink(zf, info, destination)
            else:
                extracted = zf.extract(info, destination)
                permissions = stat.S_IMODE(mode)
                if permissions and not info.is_dir():
                    os.chmod(extracted, permissions)

            if progress_callback:
                progress_callback(i + 1, total)


def _extract_zip_symlink(
    zf: zipfile.ZipFile, info: zipfile.ZipInfo, destination: Path
) -> None:
    """Recreate a symlink entry whose body holds the link target."""
    link_path = destination / info.filename
    try:
        target = zf.read(info).decode("utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(
            f"Symlink {info.filename} has an undecodable target: {e}"
        ) from e

    # Targets are relative to the link's directory
    validate_archive_path(
        os.path.join(os.path.dirname(info.filename), target), destination
    )

    link_path.parent.mkdir(parents=True, exist_ok=True)
    if link_path.is_symlink() or link_path.exists():
        link_path.unlink()
    os.symlink(target, link_path)


# ============================================================================
# Safe File Operations
# ============================================================================


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('/tmp/cache/nwjs-v0.44.5-linux-x64', require_prefix='/tmp/cache')
        >>> safe_rmtree('/usr/bin', require_prefix='/home')  # ValueError
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix) or path == require_prefix:
            raise ValueError(
                f"Refusing to delete '{path}': "
                f"not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    def handle_remove_readonly(func, failed_path, exc):
        """Retry removal of read-only entries (Windows)."""
        if not os.access(failed_path, os.W_OK):
            os.chmod(failed_path, stat.S_IWRITE | stat.S_IREAD)
            func(failed_path)
        else:
            raise exc if isinstance(exc, BaseException) else exc[1]

    try:
        if not IS_WINDOWS:
            shutil.rmtree(path)
        elif sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=handle_remove_readonly)
        else:
            shutil.rmtree(path, onerror=handle_remove_readonly)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e
