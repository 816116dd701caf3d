"""Releases API client.

Only one endpoint is used: ``GET /repos/{owner}/{repo}/releases``, whose first
entry is the most recent release.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Any

from setup_kced.domain.errors import SetupKcedError

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"

Opener = Callable[..., Any]


class ReleasesApiError(SetupKcedError):
    """The releases listing request failed or returned something unusable."""

    code = "RELEASES_API_FAILED"

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ReleasesClient:
    """Minimal REST client for repository releases.

    Args:
        api_url: API root, e.g. ``https://api.github.com``.
        token: Bearer token; omitted from requests when empty.
        opener: ``urlopen``-compatible callable, injectable for tests.
    """

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        token: str = "",
        *,
        timeout: float = 30.0,
        user_agent: str = "setup-kced",
        opener: Opener | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self._token = token
        self.timeout = timeout
        self.user_agent = user_agent
        self._opener = opener or urllib.request.urlopen

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def list_releases(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """Return the first page of releases, newest first.

        Raises:
            ReleasesApiError: On HTTP or transport failure, an undecodable body,
                or a body that is not a list of release objects.
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/releases"
        req = urllib.request.Request(url, headers=self._headers())
        logger.debug("Listing releases from %s", url)
        try:
            with self._opener(req, timeout=self.timeout) as resp:  # nosec B310
                payload = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            msg = f"Failed to list releases for {owner}/{repo}: HTTP {exc.code} {exc.reason}"
            raise ReleasesApiError(msg, status=exc.code) from exc
        except urllib.error.URLError as exc:
            msg = f"Failed to list releases for {owner}/{repo}: {exc.reason}"
            raise ReleasesApiError(msg) from exc
        except (OSError, http.client.HTTPException) as exc:
            msg = f"Failed to read releases for {owner}/{repo}: {exc}"
            raise ReleasesApiError(msg) from exc
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Releases listing for {owner}/{repo} is not valid JSON"
            raise ReleasesApiError(msg) from exc

        if not isinstance(payload, list) or not all(isinstance(r, dict) for r in payload):
            raise ReleasesApiError(f"Unexpected releases payload for {owner}/{repo}")
        return payload
