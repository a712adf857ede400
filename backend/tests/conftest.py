"""Shared fixtures and fakes for the vietcards test suite."""

import random
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from vietcards.adapters.local_deck import LocalDeckRepository
from vietcards.adapters.sqlite_storage import InMemoryKeyValueStore
from vietcards.domain.entities.flashcard import Flashcard
from vietcards.domain.entities.tip import Tip
from vietcards.domain.errors import RepositoryError
from vietcards.domain.services.card_store import CardStore
from vietcards.domain.services.study_session import StudySession
from vietcards.domain.services.tag_filter import TagFilter
from vietcards.domain.services.tip_store import TipStore
from vietcards.domain.services.viewed_history import ViewedHistory
from vietcards.domain.services.weighted_selector import WeightedSelector

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def make_card(
    card_id: int,
    tags: tuple[str, ...] = ("basics",),
    last_seen: datetime | None = None,
    created_at: datetime | None = None,
    **fields: Any,
) -> Flashcard:
    return Flashcard(
        id=card_id,
        question=fields.pop("question", f"câu hỏi {card_id}"),
        answer=fields.pop("answer", f"answer {card_id}"),
        tags=tags,
        last_seen=last_seen,
        created_at=created_at,
        **fields,
    )


def make_tip(tip_id: int) -> Tip:
    return Tip(id=tip_id, title=f"Tip {tip_id}", content=f"Content {tip_id}")


def hours_ago(hours: float) -> datetime:
    return NOW - timedelta(hours=hours)


class FakeRepository(LocalDeckRepository):
    """In-memory repository whose operations can be made to fail.

    Put an operation name (e.g. "list_cards") in `fail_on` to raise
    RepositoryError from it.
    """

    def __init__(self, cards: list[Flashcard] | None = None, tips: list[Tip] | None = None):
        super().__init__(cards=cards or [], tips=tips or [])
        self.fail_on: set[str] = set()
        self.calls: list[tuple[str, Any]] = []

    def _check(self, op: str, arg: Any = None) -> None:
        self.calls.append((op, arg))
        if op in self.fail_on:
            raise RepositoryError(f"{op} failed")

    async def list_cards(self):
        self._check("list_cards")
        return await super().list_cards()

    async def insert_card(self, draft):
        self._check("insert_card", draft)
        return await super().insert_card(draft)

    async def update_card(self, card_id, changes):
        self._check("update_card", card_id)
        await super().update_card(card_id, changes)

    async def delete_card(self, card_id):
        self._check("delete_card", card_id)
        await super().delete_card(card_id)

    async def touch_last_seen(self, card_id, seen_at):
        self._check("touch_last_seen", card_id)
        await super().touch_last_seen(card_id, seen_at)

    async def list_tips(self):
        self._check("list_tips")
        return await super().list_tips()

    async def insert_tip(self, draft):
        self._check("insert_tip", draft)
        return await super().insert_tip(draft)

    async def update_tip(self, tip_id, changes):
        self._check("update_tip", tip_id)
        return await super().update_tip(tip_id, changes)

    async def delete_tip(self, tip_id):
        self._check("delete_tip", tip_id)
        await super().delete_tip(tip_id)

    def ops(self, name: str) -> list[Any]:
        return [arg for op, arg in self.calls if op == name]


class FakeCandidateSource:
    """CandidateSource returning a fixed pool (or raising)."""

    def __init__(self, pool: list[Flashcard], error: Exception | None = None):
        self.pool = pool
        self.error = error
        self.requests: list[tuple[frozenset[str], int]] = []

    async def weighted_candidates(self, tags: frozenset[str], count: int) -> list[Flashcard]:
        self.requests.append((tags, count))
        if self.error is not None:
            raise self.error
        return list(self.pool)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def sample_cards() -> list[Flashcard]:
    return [
        make_card(1, ("greetings", "basics"), question="Xin chào", answer="Hello"),
        make_card(2, ("greetings",), question="Tạm biệt", answer="Goodbye"),
        make_card(3, ("food",), question="Phở", answer="Noodle soup"),
        make_card(4, ("food", "restaurant"), question="Bánh mì", answer="Bread"),
        make_card(5, ("numbers",), question="Một", answer="One"),
    ]


@pytest.fixture
def repository(sample_cards) -> FakeRepository:
    return FakeRepository(cards=sample_cards, tips=[make_tip(i) for i in range(1, 4)])


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
async def history(storage):
    viewed = ViewedHistory(storage)
    await viewed.load()
    yield viewed
    await viewed.flush()


@pytest.fixture
async def card_store(repository) -> CardStore:
    store = CardStore(repository, clock=lambda: NOW)
    await store.load()
    return store


@pytest.fixture
async def tip_store(repository) -> TipStore:
    store = TipStore(repository)
    await store.load()
    return store


@pytest.fixture
async def session(card_store, history, rng):
    study = StudySession(
        card_store,
        history,
        tag_filter=TagFilter(),
        selector=WeightedSelector(rng),
        transition_delay=0,
        clock=lambda: NOW,
    )
    yield study
    await study.close()
