"""
Tests for the acquisition workflow.

The fake fetch client stands in for the release server, so these tests
exercise resolution, caching, locking, download and extraction together
without network access.
"""

import pytest
import requests
from pathlib import Path
from unittest.mock import patch

from nwkit.binary.cache import CacheStore
from nwkit.binary.downloader import BinaryDownloader, acquire_binary
from nwkit.binary.models import AcquisitionRequest, AcquisitionResult
from nwkit.binary.versions import VERSIONS_MANIFEST_URL
from nwkit.core.exceptions import (
    CleanupWarning,
    ExtractionError,
    FetchError,
    LockTimeout,
    ResolutionError,
)
from nwkit.core.locking import LockManager
from tests.fixtures.archives import CORRUPT_ARCHIVE, build_tar_gz, build_zip
from tests.mocks.network import FailingFetchClient, FakeFetchClient

LINUX_NAME = "nwjs-v0.44.5-linux-x64"
LINUX_URL = f"https://dl.nwjs.io/v0.44.5/{LINUX_NAME}.tar.gz"


def linux_request(cache_dir, **kwargs):
    return AcquisitionRequest(
        version=kwargs.pop("version", "0.44.5"),
        platform=kwargs.pop("platform", "linux"),
        architecture=kwargs.pop("architecture", "x64"),
        cache_dir=cache_dir,
        **kwargs,
    )


class TestAcquire:
    """Test BinaryDownloader.acquire."""

    def test_download_and_extract(self, fake_client, cache_dir):
        """Test a cache miss downloads and extracts the binary."""
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))

        result = BinaryDownloader(client=fake_client).acquire(linux_request(cache_dir))

        assert isinstance(result, AcquisitionResult)
        assert result.path == (cache_dir / LINUX_NAME).absolute()
        assert result.path.is_absolute()
        assert (result.path / "nw").exists()
        assert result.was_cached is False
        assert result.archive.name == LINUX_NAME
        assert fake_client.urls == [LINUX_URL]

    def test_transient_archive_removed(self, fake_client, cache_dir):
        """Test only the extracted directory remains after success."""
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))

        BinaryDownloader(client=fake_client).acquire(linux_request(cache_dir))

        assert not (cache_dir / f"{LINUX_NAME}.tar.gz").exists()
        assert not (cache_dir / f"{LINUX_NAME}.partial").exists()

    def test_creates_nested_cache_root(self, fake_client, tmp_path):
        """Test a missing cache root is created recursively."""
        cache_dir = tmp_path / "a" / "b" / "cache"
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))

        result = BinaryDownloader(client=fake_client).acquire(linux_request(cache_dir))

        assert result.path.parent == cache_dir.absolute()

    def test_existing_directory_is_hit(self, cache_dir):
        """Test a pre-existing directory is returned without network access."""
        existing = cache_dir / LINUX_NAME
        existing.mkdir(parents=True)
        (existing / "marker.txt").write_text("original")
        client = FakeFetchClient()

        result = BinaryDownloader(client=client).acquire(linux_request(cache_dir))

        assert result.was_cached is True
        assert result.path == existing.absolute()
        assert (result.path / "marker.txt").read_text() == "original"
        assert client.request_history == []

    def test_second_acquire_is_cached(self, fake_client, cache_dir):
        """Test acquiring twice downloads once."""
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))
        downloader = BinaryDownloader(client=fake_client)

        first = downloader.acquire(linux_request(cache_dir))
        second = downloader.acquire(linux_request(cache_dir))

        assert first.path == second.path
        assert second.was_cached is True
        assert fake_client.urls == [LINUX_URL]

    def test_force_replaces_contents(self, fake_client, cache_dir):
        """Test force downloads again and replaces the directory contents."""
        existing = cache_dir / LINUX_NAME
        existing.mkdir(parents=True)
        (existing / "stale.txt").write_text("stale")
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))

        result = BinaryDownloader(client=fake_client).acquire(
            linux_request(cache_dir), force=True
        )

        assert result.was_cached is False
        assert fake_client.urls == [LINUX_URL]
        assert not (result.path / "stale.txt").exists()
        assert (result.path / "nw").exists()

    def test_alias_request(self, fake_client, cache_dir):
        """Test aliases are resolved before locating the archive."""
        url = "https://dl.nwjs.io/v0.50.0/nwjs-sdk-v0.50.0-win-ia32.zip"
        fake_client.add_bytes(url, build_zip("nwjs-sdk-v0.50.0-win-ia32"))
        request = linux_request(
            cache_dir, version="latest", platform="win", architecture="ia32", flavor="sdk"
        )

        result = BinaryDownloader(client=fake_client).acquire(request)

        assert result.path.name == "nwjs-sdk-v0.50.0-win-ia32"
        assert fake_client.urls == [VERSIONS_MANIFEST_URL, url]

    def test_custom_base_url(self, fake_client, cache_dir):
        """Test archives are fetched from the configured server."""
        url = f"https://mirror.example/v0.44.5/{LINUX_NAME}.tar.gz"
        fake_client.add_bytes(url, build_tar_gz(LINUX_NAME))

        BinaryDownloader(client=fake_client).acquire(
            linux_request(cache_dir, base_url="https://mirror.example")
        )

        assert fake_client.urls == [url]

    def test_progress_callback_forwarded(self, cache_dir):
        """Test the download progress callback reaches the client."""
        client = FakeFetchClient()
        client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))
        callback = lambda progress: None  # noqa: E731

        with patch.object(client, "download", wraps=client.download) as download:
            BinaryDownloader(client=client).acquire(
                linux_request(cache_dir), progress_callback=callback
            )

        assert download.call_args.kwargs["progress_callback"] is callback

    def test_request_reusable(self, fake_client, cache_dir):
        """Test a request is not modified by acquisition."""
        fake_client.add_bytes(
            "https://dl.nwjs.io/v0.50.0/nwjs-v0.50.0-linux-x64.tar.gz",
            build_tar_gz("nwjs-v0.50.0-linux-x64"),
        )
        request = linux_request(cache_dir, version="latest")

        BinaryDownloader(client=fake_client).acquire(request)

        assert request.version == "latest"


class TestAcquireFailures:
    """Test failure behavior of each stage."""

    def test_resolution_failure_writes_nothing(self, tmp_path):
        """Test a manifest failure raises ResolutionError before any write."""
        cache_dir = tmp_path / "cache"
        client = FailingFetchClient(requests.ConnectionError("network down"))

        with pytest.raises(ResolutionError):
            BinaryDownloader(client=client).acquire(
                linux_request(cache_dir, version="stable")
            )

        assert not cache_dir.exists()
        assert list(tmp_path.iterdir()) == []

    def test_fetch_failure(self, fake_client, cache_dir):
        """Test a missing archive raises FetchError."""
        with pytest.raises(FetchError, match="HTTP 404"):
            BinaryDownloader(client=fake_client).acquire(linux_request(cache_dir))

        assert not (cache_dir / LINUX_NAME).exists()

    def test_corrupt_archive(self, fake_client, cache_dir):
        """Test a corrupt archive raises ExtractionError and is kept."""
        fake_client.add_bytes(LINUX_URL, CORRUPT_ARCHIVE)

        with pytest.raises(ExtractionError):
            BinaryDownloader(client=fake_client).acquire(linux_request(cache_dir))

        assert (cache_dir / f"{LINUX_NAME}.tar.gz").read_bytes() == CORRUPT_ARCHIVE

    def test_interrupted_extraction_not_a_hit(self, fake_client, cache_dir):
        """Test a partial entry from a failed run is re-acquired."""
        fake_client.add_bytes(LINUX_URL, CORRUPT_ARCHIVE)
        downloader = BinaryDownloader(client=fake_client)
        with pytest.raises(ExtractionError):
            downloader.acquire(linux_request(cache_dir))

        # A failed run left a partial directory behind
        (cache_dir / LINUX_NAME).mkdir(exist_ok=True)
        (cache_dir / LINUX_NAME / "half-written").write_bytes(b"x")
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))

        result = downloader.acquire(linux_request(cache_dir))

        assert result.was_cached is False
        assert not (result.path / "half-written").exists()
        assert CacheStore(cache_dir).has(LINUX_NAME)

    def test_cleanup_warning_reported(self, fake_client, cache_dir):
        """Test a failed archive removal still returns the directory."""
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))
        real_unlink = Path.unlink

        def unlink_archive_fails(path, *args, **kwargs):
            if path.name.endswith(".tar.gz"):
                raise PermissionError("file in use")
            return real_unlink(path, *args, **kwargs)

        with patch.object(Path, "unlink", unlink_archive_fails), pytest.warns(
            CleanupWarning
        ):
            result = BinaryDownloader(client=fake_client).acquire(
                linux_request(cache_dir)
            )

        assert result.path.is_dir()
        assert len(result.warnings) == 1


class TestLocking:
    """Test per-key locking around the download."""

    def test_lock_timeout(self, fake_client, cache_dir):
        """Test a held key lock times out a second acquisition."""
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))
        lock_manager = LockManager(cache_dir / ".locks")

        with lock_manager.archive_lock(LINUX_NAME, timeout=5):
            with pytest.raises(LockTimeout):
                BinaryDownloader(client=fake_client, lock_timeout=0.1).acquire(
                    linux_request(cache_dir)
                )

        assert fake_client.urls == []

    def test_recheck_after_lock(self, cache_dir):
        """Test a binary finished by another process while waiting is reused."""
        client = FakeFetchClient()
        downloader = BinaryDownloader(client=client)
        entry = cache_dir / LINUX_NAME
        real_has = CacheStore.has
        checks = []

        def has_after_first_check(store, name):
            checks.append(name)
            if len(checks) == 2:
                # Simulate the other process finishing while we waited
                entry.mkdir(parents=True)
            return real_has(store, name)

        with patch.object(CacheStore, "has", has_after_first_check):
            result = downloader.acquire(linux_request(cache_dir))

        assert result.was_cached is True
        assert len(checks) == 2
        assert client.request_history == []


class TestAcquireBinary:
    """Test the convenience function."""

    def test_returns_path(self, fake_client, cache_dir):
        """Test acquire_binary returns the extracted directory."""
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))

        path = acquire_binary("0.44.5", "linux", "x64", cache_dir, client=fake_client)

        assert path == (cache_dir / LINUX_NAME).absolute()

    def test_force(self, fake_client, cache_dir):
        """Test acquire_binary honors force."""
        (cache_dir / LINUX_NAME).mkdir(parents=True)
        fake_client.add_bytes(LINUX_URL, build_tar_gz(LINUX_NAME))

        acquire_binary(
            "v0.44.5", "linux", "x64", str(cache_dir), force=True, client=fake_client
        )

        assert fake_client.urls == [LINUX_URL]
