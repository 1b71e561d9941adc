"""
Version token resolution.

A version token is either a literal release number ('0.44.5') or one of the
aliases published in the NW.js version manifest ('latest', 'stable', 'lts').
Literal tokens never touch the network; aliases cost exactly one manifest
request.
"""

import logging
from typing import Optional

import requests

from nwkit.binary.models import AcquisitionRequest, ResolvedRequest
from nwkit.core.exceptions import InvalidRequestError, ResolutionError
from nwkit.core.interfaces import FetchCapability

logger = logging.getLogger(__name__)

ALIASES = ("latest", "stable", "lts")
VERSIONS_MANIFEST_URL = "https://nwjs.io/versions.json"
VERSION_PREFIX = "v"


def is_alias(token: str) -> bool:
    """Check whether ``token`` names a manifest alias."""
    return token in ALIASES


def canonicalize_version(token: str) -> str:
    """
    Prefix a literal version with 'v' exactly once.

    Args:
        token: Literal version token

    Returns:
        Canonical version string

    Raises:
        InvalidRequestError: If the token is empty

    Example:
        >>> canonicalize_version("0.44.5")
        'v0.44.5'
        >>> canonicalize_version("v0.44.5")
        'v0.44.5'
    """
    token = token.strip()
    if not token:
        raise InvalidRequestError("Version cannot be empty")

    if token.startswith(VERSION_PREFIX):
        return token
    return f"{VERSION_PREFIX}{token}"


class VersionResolver:
    """
    Maps version tokens onto canonical versions.

    Example:
        >>> resolver = VersionResolver(HttpClient())
        >>> resolver.resolve("0.44.5")
        'v0.44.5'
        >>> resolver.resolve("latest")  # one request to the manifest
        'v0.50.0'
    """

    def __init__(
        self,
        client: FetchCapability,
        manifest_url: Optional[str] = None,
    ):
        """
        Initialize version resolver.

        Args:
            client: Fetch capability used for the manifest request
            manifest_url: Override for the alias manifest location
        """
        self.client = client
        self.manifest_url = manifest_url or VERSIONS_MANIFEST_URL

    def resolve(self, token: str) -> str:
        """
        Resolve a version token to its canonical version.

        Aliases are replaced verbatim by the manifest value. Any other token
        is canonicalized with :func:`canonicalize_version`.

        Args:
            token: Literal version or alias

        Returns:
            Canonical version

        Raises:
            ResolutionError: If the manifest is unreachable, malformed, or
                does not define the alias
            InvalidRequestError: If the token is empty
        """
        token = token.strip()
        if not is_alias(token):
            return canonicalize_version(token)

        versions = self._fetch_manifest(token)

        version = versions.get(token)
        if version is None:
            raise ResolutionError(
                token, f"alias not defined in manifest {self.manifest_url}"
            )
        if not isinstance(version, str) or not version.strip():
            raise ResolutionError(
                token, f"manifest value for alias is not a version string: {version!r}"
            )

        logger.info(f"Resolved '{token}' to {version}")
        return version.strip()

    def resolve_request(self, request: AcquisitionRequest) -> ResolvedRequest:
        """Resolve the version of ``request`` into a new ``ResolvedRequest``."""
        return ResolvedRequest(
            request=request, canonical_version=self.resolve(request.version)
        )

    def _fetch_manifest(self, token: str) -> dict:
        logger.debug(f"Fetching version manifest from {self.manifest_url}")
        try:
            versions = self.client.get_json(self.manifest_url)
        except requests.JSONDecodeError as e:
            raise ResolutionError(token, f"manifest is not valid JSON: {e}") from e
        except requests.RequestException as e:
            # Also covers InvalidURL and MissingSchema, which subclass ValueError
            logger.error(f"Could not fetch version manifest: {e}")
            raise ResolutionError(token, f"manifest request failed: {e}") from e
        except ValueError as e:
            raise ResolutionError(token, f"manifest is not valid JSON: {e}") from e

        if not isinstance(versions, dict):
            raise ResolutionError(
                token, f"manifest is not a JSON object: {type(versions).__name__}"
            )
        return versions
