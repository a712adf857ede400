"""Tip rotation - uniform random tips with no immediate repeat."""

import logging
import random
from collections.abc import Sequence

from vietcards.domain.constants import TIP_ROTATION_SECONDS
from vietcards.domain.entities.tip import Tip
from vietcards.domain.services.events import StoreEvent, StoreEventKind
from vietcards.domain.services.tip_store import TipStore
from vietcards.domain.services.weighted_selector import RandomSource, uniform_pick
from vietcards.infrastructure.scheduler import PeriodicTask

logger = logging.getLogger(__name__)


def get_random_tip(tips: Sequence[Tip], rng: RandomSource | None = None) -> Tip | None:
    """Uniform draw, None if there are no tips."""
    return uniform_pick(tips, rng)


def get_next_tip(
    tips: Sequence[Tip],
    current: Tip | None,
    rng: RandomSource | None = None,
) -> Tip | None:
    """Uniform draw that differs from `current` whenever there are 2+ tips.

    Draws from the tips with a different id instead of rejection sampling,
    so it always terminates.
    """
    if len(tips) <= 1:
        return tips[0] if tips else None
    if current is None:
        return uniform_pick(tips, rng)
    others = [t for t in tips if t.id != current.id]
    return uniform_pick(others or tips, rng)


class TipRotator:
    """Keeps the tip on display and rotates it on a timer.

    Manual rotation and the timer share `rotate()`; each draw excludes
    whatever tip is current at the moment it runs.
    """

    def __init__(
        self,
        store: TipStore,
        interval: float = TIP_ROTATION_SECONDS,
        rng: RandomSource | None = None,
    ):
        self._store = store
        self._rng = rng or random.Random()
        self._current_id: int | None = None
        self._timer = PeriodicTask("tip-rotation", interval, self.rotate)
        self._unsubscribe = store.subscribe(self._on_store_event)

    @property
    def current_tip(self) -> Tip | None:
        if self._current_id is None:
            return None
        return self._store.get(self._current_id)

    @property
    def is_running(self) -> bool:
        return self._timer.is_running

    def start(self) -> None:
        """Pick an initial tip and start the rotation timer."""
        if self.current_tip is None:
            self._set(get_random_tip(self._store.tips, self._rng))
        self._timer.start()

    async def stop(self) -> None:
        await self._timer.cancel()

    async def close(self) -> None:
        await self.stop()
        self._unsubscribe()

    def rotate(self) -> Tip | None:
        """Replace the current tip with a different one."""
        tip = get_next_tip(self._store.tips, self.current_tip, self._rng)
        self._set(tip)
        logger.debug(f"Rotated tip to {tip.id if tip else None}")
        return tip

    def _set(self, tip: Tip | None) -> None:
        self._current_id = tip.id if tip else None

    def _on_store_event(self, event: StoreEvent) -> None:
        if event.kind is StoreEventKind.DELETED and event.item_id == self._current_id:
            self._set(get_random_tip(self._store.tips, self._rng))
        elif event.kind is StoreEventKind.LOADED and self.current_tip is None:
            self._set(get_random_tip(self._store.tips, self._rng))
        elif event.kind is StoreEventKind.CREATED and self.current_tip is None:
            self._set(self._store.get(event.item_id))
