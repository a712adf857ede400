"""Study session - current card, flip state, filters and viewed history."""

import asyncio
import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from vietcards.domain.constants import SERVER_CANDIDATE_COUNT, TRANSITION_DELAY_MS
from vietcards.domain.entities.flashcard import Flashcard
from vietcards.domain.errors import InvalidTransitionError, LoadError
from vietcards.domain.services.card_store import CardStore, utc_now
from vietcards.domain.services.events import StoreEvent, StoreEventKind
from vietcards.domain.services.tag_filter import TagFilter, all_tags
from vietcards.domain.services.viewed_history import ViewedHistory
from vietcards.domain.services.weighted_selector import WeightedSelector
from vietcards.domain.value_objects.session_state import SessionState
from vietcards.ports.repository import CandidateSource

logger = logging.getLogger(__name__)


class StudySession:
    """Orchestrates card selection for one learner.

    State machine:
        EMPTY                 no card available
        SHOWING(card, flipped)

    The current card is held by id and resolved through the CardStore, so
    edits to it show up in place. Every `next()` bumps a generation counter;
    a delayed draw is applied only if its generation is still current, which
    makes rapid clicks last-write-wins and lets deletions supersede pending
    draws.

    Filter changes never reselect: the current card stays on screen until the
    next `next()`, even if it falls outside the new filter.
    """

    def __init__(
        self,
        store: CardStore,
        history: ViewedHistory,
        tag_filter: TagFilter | None = None,
        selector: WeightedSelector | None = None,
        transition_delay: float = TRANSITION_DELAY_MS / 1000,
        candidate_source: CandidateSource | None = None,
        candidate_count: int = SERVER_CANDIDATE_COUNT,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize study session.

        Args:
            store: Owner of the card set
            history: Durable viewed-cards log
            tag_filter: Active tag selection (new empty filter if omitted)
            selector: Weighted selector (unseeded if omitted)
            transition_delay: Seconds between flip-back and the new card
            candidate_source: Optional server-side candidate query
            candidate_count: Pool size requested from candidate_source
            clock: Source of "now" for weights and last-seen writes
        """
        self._store = store
        self._history = history
        self._filter = tag_filter or TagFilter()
        self._selector = selector or WeightedSelector()
        self._transition_delay = transition_delay
        self._candidate_source = candidate_source
        self._candidate_count = candidate_count
        self._clock = clock

        self._current_id: int | None = None
        self._flipped = False
        self._generation = 0
        self._closed = False
        self._pending_writes: set[asyncio.Task] = set()

        self._filtered_key: tuple[int, int] | None = None
        self._filtered: list[Flashcard] = []
        self._tags_key: int | None = None
        self._tags: list[str] = []

        self._unsubscribe = store.subscribe(self._on_store_event)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.SHOWING if self.current_card is not None else SessionState.EMPTY

    @property
    def current_card(self) -> Flashcard | None:
        if self._current_id is None:
            return None
        return self._store.get(self._current_id)

    @property
    def is_flipped(self) -> bool:
        return self._flipped

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def selected_tags(self) -> frozenset[str]:
        return self._filter.selected_tags

    @property
    def history(self) -> ViewedHistory:
        return self._history

    @property
    def filtered_cards(self) -> list[Flashcard]:
        """Candidate set, recomputed when the store or the filter changes."""
        key = (self._store.version, self._filter.version)
        if key != self._filtered_key:
            self._filtered = self._filter.apply(self._store.cards)
            self._filtered_key = key
        return list(self._filtered)

    @property
    def all_tags(self) -> list[str]:
        """Every tag in the unfiltered store."""
        if self._tags_key != self._store.version:
            self._tags = all_tags(self._store.cards)
            self._tags_key = self._store.version
        return list(self._tags)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    async def initialize(self) -> Flashcard | None:
        """Show the first card.

        Returns:
            First card, or None if no card is eligible (EMPTY)

        Raises:
            LoadError: If the store failed to load
        """
        self._ensure_open()
        if self._store.load_error is not None:
            raise LoadError(self._store.load_error)

        self._generation += 1
        generation = self._generation
        card = await self._draw()
        if generation != self._generation or self._closed:
            return self.current_card
        self._show(card)
        return card

    def flip(self) -> bool:
        """Toggle the reveal state of the current card.

        Returns:
            New flipped state

        Raises:
            InvalidTransitionError: If no card is showing
        """
        if not self.state.can_flip():
            raise InvalidTransitionError(f"Cannot flip in state {self.state}")
        self._flipped = not self._flipped
        return self._flipped

    async def next(self) -> Flashcard | None:
        """Advance to a new weighted-random card.

        The card is turned face down immediately; the draw happens after the
        transition delay. If another `next()` (or a deletion of the current
        card) happens meanwhile, this call is superseded.

        Returns:
            The new card, or None if superseded or nothing is eligible
        """
        self._ensure_open()
        self._flipped = False
        self._generation += 1
        generation = self._generation

        if self._transition_delay > 0:
            await asyncio.sleep(self._transition_delay)
        if generation != self._generation or self._closed:
            logger.debug(f"Discarding stale draw (generation {generation})")
            return None

        card = await self._draw()
        if generation != self._generation or self._closed:
            logger.debug(f"Discarding stale draw (generation {generation})")
            return None

        self._show(card)
        return card

    def toggle_tag(self, tag: str) -> frozenset[str]:
        """Toggle a tag in the filter (no reselection)."""
        return self._filter.toggle(tag)

    def set_tags(self, tags: Iterable[str]) -> frozenset[str]:
        """Replace the filter selection (no reselection)."""
        return self._filter.set_tags(tags)

    def clear_filters(self) -> frozenset[str]:
        """Clear the filter selection (no reselection)."""
        return self._filter.clear()

    def clear_history(self) -> None:
        self._history.clear()

    async def close(self) -> None:
        """Tear down: discard in-flight draws and wait for pending writes."""
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._unsubscribe()
        if self._pending_writes:
            await asyncio.gather(*self._pending_writes, return_exceptions=True)
        await self._history.flush()

    def snapshot(self) -> dict[str, Any]:
        """Serializable view of the session."""
        card = self.current_card
        return {
            "state": self.state.value,
            "current_card": card.to_dict() if card else None,
            "is_flipped": self._flipped,
            "selected_tags": sorted(self._filter.selected_tags),
            "filtered_count": len(self.filtered_cards),
            "total_count": len(self._store),
            "viewed_count": len(self._history),
        }

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidTransitionError("Session is closed")

    async def _draw(self) -> Flashcard | None:
        """Pick a card from the current filtered set."""
        candidates = self.filtered_cards
        if not candidates:
            return None

        if self._candidate_source is not None:
            card = await self._draw_from_server(candidates)
            if card is not None:
                return card

        return self._selector.select(candidates, self._clock())

    async def _draw_from_server(self, candidates: list[Flashcard]) -> Flashcard | None:
        """Uniform draw from the server-ranked pool, None to fall back."""
        try:
            pool = await self._candidate_source.weighted_candidates(
                self._filter.selected_tags, self._candidate_count
            )
        except Exception as e:
            logger.warning(f"Server candidate query failed, using local weights: {e}")
            return None

        # Resolve against the store so the session only ever shows known cards
        by_id = {c.id: c for c in candidates}
        known = [by_id[c.id] for c in pool if c.id in by_id]
        return self._selector.pick_uniform(known)

    def _show(self, card: Flashcard | None) -> None:
        self._flipped = False
        if card is None:
            self._current_id = None
            return

        self._current_id = card.id
        self._history.record(card)
        self._schedule_last_seen(card.id)

    def _schedule_last_seen(self, card_id: int) -> None:
        """Fire-and-forget backend write; never blocks the transition."""
        task = asyncio.get_running_loop().create_task(
            self._store.touch_last_seen(card_id, self._clock())
        )
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    def _on_store_event(self, event: StoreEvent) -> None:
        if event.kind is StoreEventKind.DELETED:
            self._history.remove(event.item_id)
            if event.item_id == self._current_id:
                # Supersede any pending next() and replace the dead reference
                self._generation += 1
                self._show(self._selector.select(self.filtered_cards, self._clock()))
        elif event.kind is StoreEventKind.UPDATED:
            card = self._store.get(event.item_id)
            if card is not None:
                self._history.refresh(card)
        elif event.kind is StoreEventKind.LOADED:
            if self._current_id is not None and self._store.get(self._current_id) is None:
                self._current_id = None
                self._flipped = False
