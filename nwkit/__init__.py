"""
nwkit - NW.js runtime binary acquisition.

Resolves NW.js versions, downloads the matching release archive for a
platform and architecture, and extracts it into a reusable local cache.
"""

__version__ = "0.1.0"

from nwkit.binary import (
    AcquisitionRequest,
    AcquisitionResult,
    BinaryDownloader,
    acquire_binary,
)

__all__ = [
    "AcquisitionRequest",
    "AcquisitionResult",
    "BinaryDownloader",
    "acquire_binary",
    "__version__",
]
