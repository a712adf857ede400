"""
Unit tests for CardStore.
Run: python -m pytest backend/tests/test_card_store.py -v
"""

import pytest

from vietcards.domain.entities.flashcard import FlashcardDraft, FlashcardPatch
from vietcards.domain.errors import LoadError
from vietcards.domain.services.card_store import CardStore
from vietcards.domain.services.events import StoreEventKind
from vietcards.domain.value_objects.operation_result import ErrorCode

from .conftest import NOW, FakeRepository, make_card


class MalformedRowRepository(FakeRepository):
    """Backend whose rows fail to decode into cards."""

    async def list_cards(self):
        raise ValueError("Invalid isoformat string: 'not-a-date'")


class TestLoad:
    async def test_load_sorts_by_id(self):
        repo = FakeRepository(cards=[make_card(3), make_card(1), make_card(2)])
        store = CardStore(repo)

        cards = await store.load()

        assert [c.id for c in cards] == [1, 2, 3]
        assert store.is_loaded
        assert store.load_error is None

    async def test_load_failure_raises_and_leaves_store_empty(self, repository):
        repository.fail_on.add("list_cards")
        store = CardStore(repository)

        with pytest.raises(LoadError):
            await store.load()

        assert store.cards == []
        assert not store.is_loaded
        assert store.load_error == "list_cards failed"

    async def test_undecodable_rows_raise_load_error(self):
        repo = MalformedRowRepository()
        store = CardStore(repo)

        with pytest.raises(LoadError, match="Invalid isoformat"):
            await store.load()

        assert store.cards == []
        assert not store.is_loaded
        assert "Invalid isoformat" in store.load_error

    async def test_load_notifies_listeners(self, repository):
        store = CardStore(repository)
        events = []
        store.subscribe(events.append)

        await store.load()

        assert [e.kind for e in events] == [StoreEventKind.LOADED]

    async def test_cards_is_a_snapshot(self, card_store):
        snapshot = card_store.cards
        snapshot.clear()
        assert len(card_store) == 5


class TestCreate:
    async def test_create_appends_backend_card(self, card_store, repository):
        result = await card_store.create(
            FlashcardDraft(question="Nước", answer="Water", tags=("Drinks",))
        )

        assert result.success
        assert result.data.id == 6
        assert result.data.tags == ("drinks",)
        assert card_store.get(6) == result.data

    async def test_validation_failure_skips_backend(self, card_store, repository):
        version = card_store.version
        result = await card_store.create(FlashcardDraft(question="Nước", answer="", tags=("x",)))

        assert not result.success
        assert result.code is ErrorCode.VALIDATION
        assert result.error == "Question and answer are required"
        assert repository.ops("insert_card") == []
        assert card_store.version == version

    async def test_missing_tags_is_validation_error(self, card_store):
        result = await card_store.create(FlashcardDraft(question="Nước", answer="Water"))
        assert result.code is ErrorCode.VALIDATION
        assert result.error == "At least one tag is required"

    async def test_backend_failure_leaves_memory_unchanged(self, card_store, repository):
        repository.fail_on.add("insert_card")

        result = await card_store.create(
            FlashcardDraft(question="Nước", answer="Water", tags=("drinks",))
        )

        assert result.code is ErrorCode.PERSISTENCE
        assert len(card_store) == 5


class TestUpdate:
    async def test_update_merges_fields(self, card_store):
        result = await card_store.update(3, FlashcardPatch(answer="Beef noodle soup"))

        assert result.success
        assert card_store.get(3).answer == "Beef noodle soup"
        assert card_store.get(3).question == "Phở"

    async def test_unknown_id_is_not_found_without_backend_call(self, card_store, repository):
        result = await card_store.update(99, FlashcardPatch(answer="x"))

        assert result.code is ErrorCode.NOT_FOUND
        assert repository.ops("update_card") == []

    async def test_empty_patch_is_validation_error(self, card_store):
        result = await card_store.update(3, FlashcardPatch())
        assert result.code is ErrorCode.VALIDATION

    async def test_backend_failure_keeps_old_card(self, card_store, repository):
        repository.fail_on.add("update_card")

        result = await card_store.update(3, FlashcardPatch(answer="changed"))

        assert result.code is ErrorCode.PERSISTENCE
        assert card_store.get(3).answer == "Noodle soup"

    async def test_card_missing_from_backend_is_not_found(self, card_store, repository):
        del repository._cards[3]

        result = await card_store.update(3, FlashcardPatch(answer="changed"))

        assert result.code is ErrorCode.NOT_FOUND
        assert card_store.get(3).answer == "Noodle soup"

    async def test_update_emits_event(self, card_store):
        events = []
        card_store.subscribe(events.append)

        await card_store.update(3, FlashcardPatch(notes="street food"))

        assert events[-1].kind is StoreEventKind.UPDATED
        assert events[-1].item_id == 3


class TestDelete:
    async def test_delete_removes_card(self, card_store):
        result = await card_store.delete(2)

        assert result.success
        assert card_store.get(2) is None
        assert len(card_store) == 4

    async def test_delete_unknown_id(self, card_store, repository):
        result = await card_store.delete(99)

        assert result.code is ErrorCode.NOT_FOUND
        assert repository.ops("delete_card") == []

    async def test_backend_failure_keeps_card(self, card_store, repository):
        repository.fail_on.add("delete_card")

        result = await card_store.delete(2)

        assert result.code is ErrorCode.PERSISTENCE
        assert card_store.get(2) is not None

    async def test_card_missing_from_backend_is_not_found(self, card_store, repository):
        del repository._cards[1]

        result = await card_store.delete(1)

        assert result.code is ErrorCode.NOT_FOUND
        assert repository.ops("delete_card") == [1]


class TestTouchLastSeen:
    async def test_updates_memory_and_backend(self, card_store, repository):
        await card_store.touch_last_seen(1, NOW)

        assert card_store.get(1).last_seen == NOW
        assert repository.ops("touch_last_seen") == [1]

    async def test_defaults_to_clock(self, card_store):
        await card_store.touch_last_seen(1)
        assert card_store.get(1).last_seen == NOW

    async def test_backend_failure_is_swallowed(self, card_store, repository, caplog):
        repository.fail_on.add("touch_last_seen")

        await card_store.touch_last_seen(1, NOW)

        assert card_store.get(1).last_seen == NOW
        assert "Failed to record last_seen for card 1" in caplog.text

    async def test_unknown_card_is_ignored(self, card_store, repository):
        await card_store.touch_last_seen(99, NOW)
        assert repository.ops("touch_last_seen") == []
