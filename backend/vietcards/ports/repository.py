"""Port interfaces for the persistence backend (cards and tips)."""

from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from vietcards.domain.entities.flashcard import Flashcard, FlashcardDraft
from vietcards.domain.entities.tip import Tip, TipDraft


@runtime_checkable
class FlashcardRepository(Protocol):
    """Port for flashcard persistence.

    Abstracts the hosted relational backend (Supabase in production).
    Implementations raise RepositoryError on failure.
    """

    async def list_cards(self) -> list[Flashcard]:
        """Get all cards.

        Returns:
            Cards ordered by id ascending
        """
        ...

    async def insert_card(self, draft: FlashcardDraft) -> Flashcard:
        """Insert a validated draft.

        Returns:
            Stored card with backend-assigned id and created_at
        """
        ...

    async def update_card(self, card_id: int, changes: dict[str, Any]) -> None:
        """Apply field changes to a card."""
        ...

    async def delete_card(self, card_id: int) -> None:
        """Delete a card."""
        ...

    async def touch_last_seen(self, card_id: int, seen_at: datetime) -> None:
        """Record when a card was last shown."""
        ...


@runtime_checkable
class CandidateSource(Protocol):
    """Optional server-side candidate query.

    Backends that can rank cards themselves return a pre-weighted pool from
    which the client performs a final uniform draw.
    """

    async def weighted_candidates(self, tags: frozenset[str], count: int) -> list[Flashcard]:
        """Get up to `count` candidates restricted to `tags` (all cards if empty)."""
        ...


@runtime_checkable
class TipRepository(Protocol):
    """Port for study tip persistence."""

    async def list_tips(self) -> list[Tip]:
        """Get all tips ordered by id ascending."""
        ...

    async def insert_tip(self, draft: TipDraft) -> Tip:
        """Insert a validated draft and return the stored tip."""
        ...

    async def update_tip(self, tip_id: int, changes: dict[str, Any]) -> Tip:
        """Apply field changes and return the stored tip."""
        ...

    async def delete_tip(self, tip_id: int) -> None:
        """Delete a tip."""
        ...
