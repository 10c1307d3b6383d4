"""
Discogs Adapter - Anti-Corruption Layer for the Discogs API.

This adapter isolates the catalog from the Discogs database API, turning
search and release lookups into typed results or typed errors.

API Documentation: https://www.discogs.com/developers
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Union

import aiohttp

from ...exceptions import (
    ConfigurationError,
    LookupClientError,
    LookupHttpError,
    LookupResponseError,
    LookupTransportError,
)
from ...models.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, DiscogsConfig
from .discogs_models import (
    DiscogsMasterRelease,
    DiscogsReleaseDetails,
    DiscogsSearchResponse,
    SearchType,
)

logger = logging.getLogger(__name__)


class DiscogsAdapter:
    """
    Adapter for the Discogs database API.

    Every call is a single, independent GET request: there is no caching,
    retrying or rate limiting. A client without a token is "not configured"
    and rejects every call with ConfigurationError before touching the
    network.

    When ``session`` is given it is used for all requests and left open;
    otherwise each call opens and closes its own ``aiohttp.ClientSession``.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.token = token or None
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_config(
        cls,
        config: DiscogsConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "DiscogsAdapter":
        """Create an adapter from the discogs section of the configuration."""
        return cls(
            token=config.token,
            base_url=config.base_url,
            user_agent=config.user_agent,
            timeout=config.timeout,
            session=session,
        )

    def set_token(self, token: Optional[str]) -> None:
        """Replace the personal access token."""
        self.token = token or None

    def is_configured(self) -> bool:
        """Check if a token is available."""
        return bool(self.token)

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.token:
            headers["Authorization"] = f"Discogs token={self.token}"
        return headers

    def _ensure_configured(self) -> None:
        if not self.is_configured():
            raise ConfigurationError(
                "Discogs API not configured. Please provide authentication credentials."
            )

    async def _request(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Issue one GET request and return the decoded JSON object.

        Raises:
            ConfigurationError: no token is set; nothing is sent.
            LookupHttpError: the API answered with a non-success status.
            LookupResponseError: a successful answer was not a JSON object.
            LookupTransportError: no response was received.
        """
        self._ensure_configured()

        url = f"{self.base_url}{endpoint}"
        logger.debug(f"Discogs GET {endpoint} {params or {}}")

        try:
            if self._session is not None:
                return await self._send(self._session, url, params)

            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                return await self._send(session, url, params)
        except LookupClientError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Discogs request to {endpoint} failed: {e!r}")
            raise LookupTransportError("Failed to fetch data from Discogs API") from e

    async def _send(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: Optional[Dict[str, str]],
    ) -> Dict[str, Any]:
        async with session.get(url, params=params, headers=self._headers()) as response:
            if not 200 <= response.status < 300:
                message = ""
                try:
                    body = await response.json(content_type=None)
                    if isinstance(body, dict) and body.get("message"):
                        message = str(body["message"])
                except (aiohttp.ClientError, asyncio.TimeoutError, ValueError):
                    pass
                logger.warning(f"Discogs API error {response.status} for {url}")
                raise LookupHttpError(response.status, response.reason or "", message)

            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                raise LookupResponseError(f"Discogs API returned invalid JSON: {e}") from e

            if not isinstance(data, dict):
                raise LookupResponseError("Discogs API returned an unexpected response body")
            return data

    @staticmethod
    def _page_param(name: str, value: int) -> str:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"{name} must be a positive integer, got {value!r}")
        return str(value)

    async def search(
        self,
        query: str,
        search_type: Optional[Union[SearchType, str]] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> DiscogsSearchResponse:
        """
        Search the Discogs database.

        Args:
            query: Free-text query
            search_type: Restrict results to release, master, artist or label
            page: Page number, starting at 1
            per_page: Results per page

        Returns:
            Search results with pagination metadata
        """
        self._ensure_configured()
        params = {
            "q": query,
            "page": self._page_param("page", page),
            "per_page": self._page_param("per_page", per_page),
        }
        if search_type is not None:
            params["type"] = SearchType(search_type).value

        data = await self._request("/database/search", params)
        return DiscogsSearchResponse.from_dict(data)

    async def search_by_artist_and_album(
        self,
        artist: str,
        album: str,
        page: int = 1,
    ) -> DiscogsSearchResponse:
        """Search releases matching an artist and album name."""
        return await self.search(f"{artist} {album}", SearchType.RELEASE, page)

    async def get_release_details(self, release_id: int) -> DiscogsReleaseDetails:
        """
        Get full metadata for one release: artists, labels, formats, genres,
        styles, tracklist, images, identifiers, notes and canonical URL.
        """
        self._ensure_configured()
        data = await self._request(f"/releases/{int(release_id)}")
        return DiscogsReleaseDetails.from_dict(data)

    async def get_master_release(self, master_id: int) -> DiscogsMasterRelease:
        """Get a master release, the group of all versions of an album."""
        self._ensure_configured()
        data = await self._request(f"/masters/{int(master_id)}")
        return DiscogsMasterRelease.from_dict(data)

    async def search_by_barcode(self, barcode: str) -> DiscogsSearchResponse:
        """Search releases by barcode, UPC or EAN."""
        data = await self._request("/database/search", {
            "barcode": barcode,
            "type": SearchType.RELEASE.value,
        })
        return DiscogsSearchResponse.from_dict(data)

    async def search_by_catalog_number(self, catno: str, page: int = 1) -> DiscogsSearchResponse:
        """Search releases by the label's catalog number (e.g. "MOVLP123")."""
        self._ensure_configured()
        data = await self._request("/database/search", {
            "catno": catno,
            "type": SearchType.RELEASE.value,
            "page": self._page_param("page", page),
        })
        return DiscogsSearchResponse.from_dict(data)
