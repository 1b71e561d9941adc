"""Test fixtures for nwkit tests.

- archives: In-memory NW.js release archives (.tar.gz and .zip)

Import fixtures in your tests using:
    from tests.fixtures.archives import build_tar_gz, build_zip
"""

__all__ = [
    "archives",
]
