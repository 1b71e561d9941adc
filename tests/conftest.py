"""
Pytest configuration and shared fixtures for nwkit tests.
"""

import pytest
from pathlib import Path

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.archives import linux_archive, zip_archive
from tests.mocks.network import FakeFetchClient

from nwkit.binary.versions import VERSIONS_MANIFEST_URL
from nwkit.core.platform import clear_platform_cache

MANIFEST = {
    "latest": "v0.50.0",
    "stable": "v0.49.2",
    "lts": "v0.14.7",
    "versions": [],
}


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_platform_cache():
    """Forget host detection between tests."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    """Cache root that does not exist yet."""
    return tmp_path / "cache"


@pytest.fixture
def fake_client() -> FakeFetchClient:
    """Fake fetch capability serving the version manifest."""
    client = FakeFetchClient()
    client.add_json(VERSIONS_MANIFEST_URL, dict(MANIFEST))
    return client


@pytest.fixture
def isolated_home(tmp_path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))

    return fake_home
