"""
Update checker module for checking GitHub releases for newer versions.
Handles version comparison against the latest published release.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from packaging import version as pkg_version

from .constants import RELEASES_URL, UPDATE_CHECK_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass
class ReleaseInfo:
    """Latest release as reported by GitHub."""
    version: str
    download_url: Optional[str] = None


@dataclass
class UpdateResult:
    """Result of an update check operation."""
    update_available: bool
    current_version: str
    latest_version: Optional[str] = None
    download_url: Optional[str] = None
    error: Optional[str] = None


class UpdateChecker:
    """
    Checks GitHub's "latest release" endpoint for a newer version.

    Failures never raise; they are reported through ``UpdateResult.error``.
    """

    def __init__(
        self,
        releases_url: str = RELEASES_URL,
        timeout: float = UPDATE_CHECK_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the update checker.

        Args:
            releases_url: GitHub API URL of the latest release
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. a mock in tests
        """
        self.releases_url = releases_url
        self.timeout = timeout
        self._transport = transport

    async def check_for_update(self, current_version: str) -> UpdateResult:
        """
        Check if a newer version is available.

        Args:
            current_version: The running version.

        Returns:
            UpdateResult with update availability information.
        """
        try:
            release = await self.fetch_latest_release()
        except httpx.TimeoutException:
            return self._failed(current_version, "Timed out contacting GitHub")
        except httpx.HTTPStatusError as e:
            return self._failed(current_version, f"GitHub returned HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            return self._failed(current_version, f"Network error: {e}")
        except (ValueError, KeyError, TypeError) as e:
            return self._failed(current_version, f"Failed to parse release: {e}")

        is_newer = self.compare_versions(current_version, release.version)
        return UpdateResult(
            update_available=is_newer,
            current_version=current_version,
            latest_version=release.version,
            download_url=release.download_url if is_newer else None,
        )

    def _failed(self, current_version: str, error: str) -> UpdateResult:
        logger.debug(f"Update check failed: {error}")
        return UpdateResult(
            update_available=False,
            current_version=current_version,
            error=error,
        )

    async def fetch_latest_release(self) -> ReleaseInfo:
        """
        Fetch the latest release from GitHub.

        Returns:
            ReleaseInfo for the latest release

        Raises:
            httpx.HTTPError: On network or HTTP errors
            KeyError, TypeError, ValueError: On an unexpected response body
        """
        headers = {"Accept": "application/vnd.github.v3+json"}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.releases_url, headers=headers)
            response.raise_for_status()
            return parse_release(response.json())

    def compare_versions(self, current: str, latest: str) -> bool:
        """
        Compare two version strings.

        Args:
            current: The current version string.
            latest: The latest version string.

        Returns:
            True if latest > current, False otherwise.
        """
        try:
            return pkg_version.parse(latest) > pkg_version.parse(current)
        except (pkg_version.InvalidVersion, TypeError):
            return False


def parse_release(data: Any) -> ReleaseInfo:
    """
    Extract version and download URL from a GitHub release payload.

    The first asset's download URL is preferred, falling back to the
    release page.
    """
    tag = data["tag_name"]
    if not isinstance(tag, str):
        raise TypeError(f"tag_name must be a string, got {type(tag).__name__}")

    release_version = tag[1:] if tag.startswith("v") else tag

    download_url = None
    assets = data.get("assets") or []
    if assets and isinstance(assets[0], dict):
        download_url = assets[0].get("browser_download_url")
    if not download_url:
        download_url = data.get("html_url")

    return ReleaseInfo(version=release_version, download_url=download_url)
