"""Unsplash adapter for background photos."""

import logging

import httpx

from vietcards.domain.constants import BACKGROUND_ORIENTATION
from vietcards.domain.value_objects.background_image import BackgroundImage

logger = logging.getLogger(__name__)

RANDOM_PHOTO_URL = "https://api.unsplash.com/photos/random"


class UnsplashError(Exception):
    """Unsplash API error."""

    pass


class UnsplashAdapter:
    """Unsplash adapter implementing BackgroundImageSource.

    Works without an access key in demo mode (50 requests/hour); with a key
    the production limit applies (5000 requests/hour).
    """

    def __init__(
        self,
        access_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._access_key = access_key or None
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def random_image(self, query: str) -> BackgroundImage | None:
        """Fetch a random landscape photo for query.

        Raises:
            UnsplashError: On network failure or error status
        """
        params = {"query": query, "orientation": BACKGROUND_ORIENTATION}
        if self._access_key:
            params["client_id"] = self._access_key

        client = await self._get_client()
        try:
            response = await client.get(RANDOM_PHOTO_URL, params=params)
        except httpx.HTTPError as e:
            raise UnsplashError(f"Unsplash request failed: {e}") from e

        if response.is_error:
            raise UnsplashError(f"Unsplash API error: {response.status_code}")

        data = response.json()
        url = (data.get("urls") or {}).get("regular")
        if not url:
            logger.warning("Unsplash response had no regular-size URL")
            return None

        return BackgroundImage(
            url=url,
            author=(data.get("user") or {}).get("name"),
            link=(data.get("links") or {}).get("html"),
        )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
