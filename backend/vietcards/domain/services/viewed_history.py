"""Viewed-cards history persisted to durable local storage."""

import asyncio
import json
import logging

from vietcards.domain.constants import VIEWED_CARDS_KEY
from vietcards.domain.entities.flashcard import Flashcard
from vietcards.ports.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class ViewedHistory:
    """Order-preserving, id-deduplicated log of every card shown.

    Stored as a JSON list of card snapshots so a restart restores the
    history. Growth is unbounded.

    Mutations change memory immediately and hand the write to a single
    background writer task. Changes made while a write is in flight are
    coalesced into the next write, so storage always ends on the latest
    state. Call `load()` once before use and `flush()` before shutdown.
    """

    def __init__(self, storage: KeyValueStorage, key: str = VIEWED_CARDS_KEY):
        self._storage = storage
        self._key = key
        self._cards: list[Flashcard] = []
        self._dirty = False
        self._writer: asyncio.Task | None = None

    @property
    def cards(self) -> list[Flashcard]:
        return list(self._cards)

    @property
    def ids(self) -> list[int]:
        return [c.id for c in self._cards]

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return any(c.id == card_id for c in self._cards)

    async def load(self) -> list[Flashcard]:
        """Read history, falling back to empty on missing or corrupt data."""
        self._cards = await self._read()
        return self.cards

    async def flush(self) -> None:
        """Wait until every change so far has been written."""
        while self._writer is not None and not self._writer.done():
            await self._writer

    def record(self, card: Flashcard) -> bool:
        """Append card if its id is not already present.

        Returns:
            True if the card was added
        """
        if card.id in self:
            return False
        self._cards.append(card)
        self._save()
        return True

    def remove(self, card_id: int) -> bool:
        """Drop a card (e.g. after deletion).

        Returns:
            True if the card was present
        """
        if card_id not in self:
            return False
        self._cards = [c for c in self._cards if c.id != card_id]
        self._save()
        return True

    def refresh(self, card: Flashcard) -> None:
        """Replace the stored snapshot of an edited card, keeping its position."""
        if card.id in self:
            self._cards = [card if c.id == card.id else c for c in self._cards]
            self._save()

    def clear(self) -> None:
        self._cards = []
        self._save()

    async def _read(self) -> list[Flashcard]:
        try:
            raw = await self._storage.get(self._key)
        except Exception as e:
            logger.error(f'Error reading storage key "{self._key}": {e}')
            return []
        if not raw:
            return []

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("history is not a list")
            cards = [Flashcard.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f'Discarding corrupt history in "{self._key}": {e}')
            return []

        unique: dict[int, Flashcard] = {}
        for card in cards:
            unique.setdefault(card.id, card)
        return list(unique.values())

    def _save(self) -> None:
        """Mark the history dirty and make sure a writer is running.

        Must be called from inside the event loop.
        """
        self._dirty = True
        if self._writer is None or self._writer.done():
            self._writer = asyncio.get_running_loop().create_task(self._write_pending())

    async def _write_pending(self) -> None:
        while self._dirty:
            self._dirty = False
            payload = json.dumps([c.to_dict() for c in self._cards], ensure_ascii=False)
            try:
                await self._storage.set(self._key, payload)
            except Exception as e:
                logger.error(f'Error setting storage key "{self._key}": {e}')
