"""Card store - authoritative in-memory card set for the session."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from vietcards.domain.entities.flashcard import Flashcard, FlashcardDraft, FlashcardPatch
from vietcards.domain.errors import LoadError, NotFoundError, RepositoryError, ValidationError
from vietcards.domain.services.events import ChangeNotifier, StoreEvent, StoreEventKind
from vietcards.domain.value_objects.operation_result import ErrorCode, OperationResult
from vietcards.ports.repository import FlashcardRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class CardStore(ChangeNotifier):
    """Owns the card set loaded from the backend.

    Responsibilities:
    - One-time fetch of all cards at startup
    - Create/update/delete that keep memory consistent with the backend
    - Best-effort "last seen" writes
    - Change notifications for the session and derived views

    No other component writes to the card set. Readers get a snapshot via
    `cards` and subscribe for changes.
    """

    def __init__(
        self,
        repository: FlashcardRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize card store.

        Args:
            repository: Port for backend persistence
            clock: Source of "now" for last-seen timestamps
        """
        super().__init__()
        self._repository = repository
        self._clock = clock
        self._cards: list[Flashcard] = []
        self._version = 0
        self._loaded = False
        self._load_error: str | None = None

    @property
    def cards(self) -> list[Flashcard]:
        """Snapshot of all cards in id order."""
        return list(self._cards)

    @property
    def version(self) -> int:
        """Increments on every mutation."""
        return self._version

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def load_error(self) -> str | None:
        return self._load_error

    def __len__(self) -> int:
        return len(self._cards)

    def get(self, card_id: int) -> Flashcard | None:
        """Get card by id, or None if unknown."""
        return next((c for c in self._cards if c.id == card_id), None)

    async def load(self) -> list[Flashcard]:
        """Fetch all cards from the backend.

        Returns:
            Loaded cards ordered by id

        Raises:
            LoadError: If the backend fetch or row decoding fails (store stays empty)
        """
        try:
            cards = await self._repository.list_cards()
        except Exception as e:
            self._cards = []
            self._loaded = False
            self._load_error = str(e)
            self._bump(StoreEvent(StoreEventKind.LOADED))
            logger.error(f"Error fetching flashcards: {e}")
            raise LoadError(f"Could not load flashcards: {e}") from e

        self._cards = sorted(cards, key=lambda c: c.id)
        self._loaded = True
        self._load_error = None
        self._bump(StoreEvent(StoreEventKind.LOADED))
        logger.info(f"Loaded {len(self._cards)} flashcards")
        return self.cards

    async def create(self, draft: FlashcardDraft) -> OperationResult[Flashcard]:
        """Validate and insert a new card.

        Validation happens before any backend call. Memory is only changed
        after the backend confirms the insert.
        """
        try:
            clean = draft.validate()
        except ValidationError as e:
            return OperationResult.fail(ErrorCode.VALIDATION, str(e))

        try:
            card = await self._repository.insert_card(clean)
        except RepositoryError as e:
            logger.error(f"Error creating flashcard: {e}")
            return OperationResult.fail(ErrorCode.PERSISTENCE, str(e))

        self._cards.append(card)
        self._bump(StoreEvent(StoreEventKind.CREATED, card.id))
        return OperationResult.ok(card)

    async def update(self, card_id: int, patch: FlashcardPatch) -> OperationResult[Flashcard]:
        """Merge patch fields into a card.

        Unknown ids fail with NOT_FOUND without touching the backend.
        """
        if self.get(card_id) is None:
            return OperationResult.fail(ErrorCode.NOT_FOUND, f"Flashcard {card_id} not found")

        try:
            changes = patch.changes()
        except ValidationError as e:
            return OperationResult.fail(ErrorCode.VALIDATION, str(e))

        try:
            await self._repository.update_card(card_id, changes)
        except NotFoundError as e:
            return OperationResult.fail(ErrorCode.NOT_FOUND, str(e))
        except RepositoryError as e:
            logger.error(f"Error updating flashcard {card_id}: {e}")
            return OperationResult.fail(ErrorCode.PERSISTENCE, str(e))

        # Re-read: the card may have changed or vanished while awaiting
        current = self.get(card_id)
        if current is None:
            return OperationResult.fail(ErrorCode.NOT_FOUND, f"Flashcard {card_id} not found")

        updated = patch.apply(current)
        self._replace(updated)
        self._bump(StoreEvent(StoreEventKind.UPDATED, card_id))
        return OperationResult.ok(updated)

    async def delete(self, card_id: int) -> OperationResult[None]:
        """Delete a card from the backend and from memory."""
        if self.get(card_id) is None:
            return OperationResult.fail(ErrorCode.NOT_FOUND, f"Flashcard {card_id} not found")

        try:
            await self._repository.delete_card(card_id)
        except NotFoundError as e:
            return OperationResult.fail(ErrorCode.NOT_FOUND, str(e))
        except RepositoryError as e:
            logger.error(f"Error deleting flashcard {card_id}: {e}")
            return OperationResult.fail(ErrorCode.PERSISTENCE, str(e))

        self._cards = [c for c in self._cards if c.id != card_id]
        self._bump(StoreEvent(StoreEventKind.DELETED, card_id))
        return OperationResult.ok()

    async def touch_last_seen(self, card_id: int, seen_at: datetime | None = None) -> None:
        """Mark a card as seen now. Best-effort: failures are logged only.

        Memory is updated immediately so the next draw sees the new weight;
        the backend write is never retried.
        """
        seen_at = seen_at or self._clock()
        card = self.get(card_id)
        if card is None:
            return

        self._replace(card.with_last_seen(seen_at))
        self._bump(StoreEvent(StoreEventKind.TOUCHED, card_id))

        try:
            await self._repository.touch_last_seen(card_id, seen_at)
        except Exception as e:
            logger.warning(f"Failed to record last_seen for card {card_id}: {e}")

    def _replace(self, card: Flashcard) -> None:
        self._cards = [card if c.id == card.id else c for c in self._cards]

    def _bump(self, event: StoreEvent) -> None:
        self._version += 1
        self._notify(event)
