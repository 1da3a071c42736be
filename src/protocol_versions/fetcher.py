"""Async HTTP fetcher for the remote versions.json document.

Sends a single GET per call (no retry) with a fixed timeout and the
OneVersionRemake User-Agent. HTTP/2 is preferred; httpx falls back to
HTTP/1.1 when the server does not negotiate it.
"""

from __future__ import annotations

import logging

import httpx

from protocol_versions.config import DEFAULT_TIMEOUT_SECONDS, USER_AGENT
from protocol_versions.errors import (
    VersionsEmptyBodyError,
    VersionsNetworkError,
    VersionsStatusError,
)

logger = logging.getLogger(__name__)

_STATUS_HINTS = {
    404: "404: Unknown Site. Make sure the URL is valid.",
    429: "429: Encountered rate limit. Please delay any future requests.",
    500: (
        "500: Site couldn't process request and encountered an "
        "'Internal Server Error'. Try again later?"
    ),
}


class VersionsFetcher:
    """Fetch raw JSON bodies over HTTP.

    Args:
        timeout: Connect and request timeout in seconds.
        user_agent: Value of the User-Agent header.
        client: Pre-configured ``httpx.AsyncClient``. When given, the
            fetcher does not own it and ``aclose`` leaves it open.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP client."""
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient(
            http2=True,
            follow_redirects=True,
        )

    async def fetch(self, url: str) -> str:
        """GET ``url`` and return the response body.

        Args:
            url: Address of the versions.json document.

        Returns:
            The non-empty response body.

        Raises:
            VersionsNetworkError: On connection errors, timeouts or an
                unusable URL.
            VersionsStatusError: On any status other than 200.
            VersionsEmptyBodyError: If a 200 response has no body.
        """
        try:
            response = await self._http.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Encountered exception while fetching %s", url, exc_info=exc)
            raise VersionsNetworkError(f"Request to {url} failed: {exc}") from exc

        status = response.status_code
        if status != 200:
            logger.warning(
                "Received non-successful response code from %s. "
                "Further details below.",
                url,
            )
            logger.warning(_STATUS_HINTS.get(status, f"{status}: Unknown error"))
            raise VersionsStatusError(
                f"Unexpected status {status} from {url}", status_code=status
            )

        body = response.text
        if not body:
            logger.warning("Received empty or null response body from %s.", url)
            raise VersionsEmptyBodyError(f"Empty response body from {url}")
        return body

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this fetcher created it."""
        if self._owns_client:
            await self._http.aclose()
