"""Local deck adapter for development and testing.

This adapter bypasses Supabase by loading cards and tips from embedded JSON
files. Use FLASHCARD_BACKEND=local to enable.
"""

import json
from dataclasses import replace
from datetime import UTC, datetime
from importlib import resources
from typing import Any

from vietcards.domain.entities.flashcard import Flashcard, FlashcardDraft, normalize_tags
from vietcards.domain.entities.tip import Tip, TipDraft
from vietcards.domain.errors import NotFoundError


def _load_json(filename: str) -> list[dict[str, Any]]:
    data_path = resources.files("vietcards.adapters").joinpath("data").joinpath(filename)
    with data_path.open("r", encoding="utf-8") as f:
        return json.load(f)


class LocalDeckRepository:
    """FlashcardRepository and TipRepository with embedded seed data.

    Changes are kept in memory only and lost on restart.

    This adapter is useful for:
    - Development without a Supabase project
    - E2E testing without network access
    - Demo environments
    """

    def __init__(
        self,
        cards: list[Flashcard] | None = None,
        tips: list[Tip] | None = None,
    ) -> None:
        self._cards: dict[int, Flashcard] = {
            c.id: c for c in (cards if cards is not None else self._load_cards())
        }
        self._tips: dict[int, Tip] = {
            t.id: t for t in (tips if tips is not None else self._load_tips())
        }

    @staticmethod
    def _load_cards() -> list[Flashcard]:
        return [Flashcard.from_dict(row) for row in _load_json("flashcards.json")]

    @staticmethod
    def _load_tips() -> list[Tip]:
        return [Tip.from_dict(row) for row in _load_json("tips.json")]

    @staticmethod
    def _next_id(ids: Any) -> int:
        return max(ids, default=0) + 1

    async def list_cards(self) -> list[Flashcard]:
        return sorted(self._cards.values(), key=lambda c: c.id)

    async def insert_card(self, draft: FlashcardDraft) -> Flashcard:
        card = Flashcard(
            id=self._next_id(self._cards),
            question=draft.question,
            answer=draft.answer,
            example=draft.example,
            example_translation=draft.example_translation,
            tags=draft.tags,
            notes=draft.notes,
            created_at=datetime.now(UTC),
        )
        self._cards[card.id] = card
        return card

    async def update_card(self, card_id: int, changes: dict[str, Any]) -> None:
        card = self._cards.get(card_id)
        if card is None:
            raise NotFoundError(f"Flashcard {card_id} not found")
        if "tags" in changes:
            changes = {**changes, "tags": normalize_tags(changes["tags"])}
        self._cards[card_id] = replace(card, **changes)

    async def delete_card(self, card_id: int) -> None:
        if self._cards.pop(card_id, None) is None:
            raise NotFoundError(f"Flashcard {card_id} not found")

    async def touch_last_seen(self, card_id: int, seen_at: datetime) -> None:
        card = self._cards.get(card_id)
        if card is not None:
            self._cards[card_id] = card.with_last_seen(seen_at)

    async def list_tips(self) -> list[Tip]:
        return sorted(self._tips.values(), key=lambda t: t.id)

    async def insert_tip(self, draft: TipDraft) -> Tip:
        tip = Tip(
            id=self._next_id(self._tips),
            title=draft.title,
            content=draft.content,
            category=draft.category,
            tags=draft.tags,
        )
        self._tips[tip.id] = tip
        return tip

    async def update_tip(self, tip_id: int, changes: dict[str, Any]) -> Tip:
        tip = self._tips.get(tip_id)
        if tip is None:
            raise NotFoundError(f"Tip {tip_id} not found")
        if "tags" in changes:
            changes = {**changes, "tags": normalize_tags(changes["tags"])}
        self._tips[tip_id] = replace(tip, **changes)
        return self._tips[tip_id]

    async def delete_tip(self, tip_id: int) -> None:
        if self._tips.pop(tip_id, None) is None:
            raise NotFoundError(f"Tip {tip_id} not found")

    async def close(self) -> None:
        """No-op cleanup."""
        pass
