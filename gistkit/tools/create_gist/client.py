"""HTTP client for the GitHub Gist API."""

import logging
import os
from typing import Any, Dict, Optional

import httpx

from gistkit.libs.config_loader import ConfigType, get_config
from gistkit.libs.errors import GistCreationError

# Fix up logging level for httpx to WARNING to reduce noise
logging.getLogger("httpx").setLevel(logging.WARNING)

LOG = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


def resolve_token(config: ConfigType) -> Optional[str]:
    """Return the GitHub token from config, falling back to GITHUB_TOKEN."""
    token = get_config("github.token", config, None)
    return token or os.environ.get("GITHUB_TOKEN") or None


class GistClient:
    """Create gists through the GitHub REST API."""

    def __init__(self,
                 api_url: str = GITHUB_API_URL,
                 timeout: float = DEFAULT_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Args:
            api_url: Base URL of the GitHub API (GitHub Enterprise installs differ)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.api_url = api_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.api_url,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport,
        )

    @classmethod
    def create_from_config(cls, config: ConfigType,
                           transport: Optional[httpx.BaseTransport] = None) -> "GistClient":
        return cls(
            api_url=get_config("github.api_url", config, GITHUB_API_URL),
            timeout=get_config("github.timeout", config, DEFAULT_TIMEOUT),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GistClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_gist(self, payload: Dict[str, Any], token: Optional[str] = None) -> str:
        """Post a gist and return its html_url.

        Args:
            payload: Request body from prepare_gist_request
            token: GitHub token, or None to post anonymously

        Raises:
            GistCreationError: If the request fails or the response has no html_url
        """
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._client.post("/gists", json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            LOG.info("Exception when creating a Gist: %s", e)
            raise GistCreationError("Failed to create gist", e.response.text) from e
        except httpx.RequestError as e:
            LOG.info("Exception when creating a Gist: %s", e)
            raise GistCreationError(f"Failed to create gist: {e}") from e

        if not response.content.strip():
            LOG.info("Null JSON response returned by GitHub")
            raise GistCreationError("Empty JSON response returned by GitHub")

        try:
            data = response.json()
        except ValueError as e:
            LOG.info("Couldn't parse response as json data: %s", response.text)
            raise GistCreationError("Invalid GitHub response", response.text) from e

        if not isinstance(data, dict):
            LOG.error("Unexpected JSON result format: %s", data)
            raise GistCreationError("Unexpected JSON result format", str(data))

        html_url = data.get("html_url")
        if not html_url:
            LOG.info("Invalid JSON response: %s", data)
            raise GistCreationError("Invalid GitHub response: no html_url property", str(data))
        return str(html_url)
