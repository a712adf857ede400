"""Background photo rotation."""

import logging

from vietcards.domain.constants import BACKGROUND_QUERY, BACKGROUND_REFRESH_SECONDS
from vietcards.domain.value_objects.background_image import BackgroundImage
from vietcards.infrastructure.scheduler import PeriodicTask
from vietcards.ports.background import BackgroundImageSource

logger = logging.getLogger(__name__)


class BackgroundRotator:
    """Periodically fetches a new background photo.

    `key` increments on every refresh attempt so clients can re-trigger
    their transition; `use_fallback` is set when the fetch fails and the
    client should show its gradient instead.
    """

    def __init__(
        self,
        source: BackgroundImageSource,
        interval: float = BACKGROUND_REFRESH_SECONDS,
        query: str = BACKGROUND_QUERY,
    ):
        self._source = source
        self._query = query
        self._current: BackgroundImage | None = None
        self._use_fallback = False
        self._key = 0
        self._timer = PeriodicTask("background-refresh", interval, self.refresh)

    @property
    def current(self) -> BackgroundImage | None:
        return self._current

    @property
    def use_fallback(self) -> bool:
        return self._use_fallback

    @property
    def key(self) -> int:
        return self._key

    async def refresh(self) -> None:
        try:
            image = await self._source.random_image(self._query)
        except Exception as e:
            logger.warning(f"Error fetching background image: {e}")
            self._use_fallback = True
            self._key += 1
            return

        if image is None:
            return
        self._current = image
        self._use_fallback = False
        self._key += 1

    async def start(self) -> None:
        """Fetch the first image, then refresh on the timer."""
        await self.refresh()
        self._timer.start()

    async def stop(self) -> None:
        await self._timer.cancel()
