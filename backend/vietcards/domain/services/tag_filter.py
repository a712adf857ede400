"""Tag filtering for the study deck."""

from collections.abc import Iterable, Sequence

from vietcards.domain.entities.flashcard import Flashcard


def all_tags(cards: Iterable[Flashcard]) -> list[str]:
    """Sorted, deduplicated union of every card's tags.

    Computed from the full card set, not the filtered subset, so that
    deselected tags stay visible.
    """
    return sorted({tag for card in cards for tag in card.tags})


def filter_cards(cards: Sequence[Flashcard], selected_tags: Iterable[str]) -> list[Flashcard]:
    """Cards carrying at least one selected tag (OR semantics).

    An empty selection means "no filter" and returns every card. Original
    card order is preserved.
    """
    selected = frozenset(selected_tags)
    if not selected:
        return list(cards)
    return [card for card in cards if not selected.isdisjoint(card.tags)]


class TagFilter:
    """Active tag selection.

    `version` increments on every change so derived views can be cached
    against it.
    """

    def __init__(self, selected_tags: Iterable[str] = ()):
        self._selected: frozenset[str] = frozenset(selected_tags)
        self._version = 0

    @property
    def selected_tags(self) -> frozenset[str]:
        return self._selected

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_active(self) -> bool:
        return bool(self._selected)

    def toggle(self, tag: str) -> frozenset[str]:
        """Add the tag if absent, remove it if present."""
        return self._replace(self._selected ^ {tag})

    def clear(self) -> frozenset[str]:
        """Deselect every tag."""
        return self._replace(frozenset())

    def set_tags(self, tags: Iterable[str]) -> frozenset[str]:
        """Replace the selection."""
        return self._replace(frozenset(tags))

    def apply(self, cards: Sequence[Flashcard]) -> list[Flashcard]:
        """Filter cards with the current selection."""
        return filter_cards(cards, self._selected)

    def _replace(self, selected: frozenset[str]) -> frozenset[str]:
        if selected != self._selected:
            self._selected = selected
            self._version += 1
        return self._selected
