"""
Unit tests for tag filtering.
Run: python -m pytest backend/tests/test_tag_filter.py -v
"""

from vietcards.domain.services.tag_filter import TagFilter, all_tags, filter_cards

from .conftest import make_card


class TestAllTags:
    def test_sorted_union_of_every_tag(self, sample_cards):
        assert all_tags(sample_cards) == ["basics", "food", "greetings", "numbers", "restaurant"]

    def test_no_cards(self):
        assert all_tags([]) == []


class TestFilterCards:
    """OR semantics over selected tags."""

    def test_empty_selection_returns_every_card(self, sample_cards):
        result = filter_cards(sample_cards, [])
        assert result == sample_cards
        assert result is not sample_cards

    def test_single_tag(self, sample_cards):
        assert [c.id for c in filter_cards(sample_cards, {"food"})] == [3, 4]

    def test_any_selected_tag_matches(self, sample_cards):
        result = filter_cards(sample_cards, {"greetings", "numbers"})
        assert [c.id for c in result] == [1, 2, 5]

    def test_result_is_exactly_the_matching_subset(self, sample_cards):
        selected = {"basics", "restaurant"}
        result = filter_cards(sample_cards, selected)

        for card in sample_cards:
            matches = bool(selected & set(card.tags))
            assert (card in result) == matches

    def test_unknown_tag_matches_nothing(self, sample_cards):
        assert filter_cards(sample_cards, {"weather"}) == []

    def test_card_without_tags_only_matches_empty_selection(self):
        untagged = make_card(9, tags=())
        assert filter_cards([untagged], set()) == [untagged]
        assert filter_cards([untagged], {"food"}) == []


class TestTagFilter:
    """Selection state."""

    def test_starts_inactive(self):
        tag_filter = TagFilter()
        assert tag_filter.selected_tags == frozenset()
        assert not tag_filter.is_active

    def test_toggle_adds_then_removes(self):
        tag_filter = TagFilter()
        assert tag_filter.toggle("food") == {"food"}
        assert tag_filter.is_active
        assert tag_filter.toggle("food") == frozenset()

    def test_toggle_twice_restores_selection(self):
        tag_filter = TagFilter({"greetings", "numbers"})
        before = tag_filter.selected_tags
        tag_filter.toggle("food")
        tag_filter.toggle("food")
        assert tag_filter.selected_tags == before

    def test_clear(self):
        tag_filter = TagFilter({"food", "numbers"})
        assert tag_filter.clear() == frozenset()

    def test_set_tags_replaces_selection(self):
        tag_filter = TagFilter({"food"})
        assert tag_filter.set_tags(["numbers", "basics"]) == {"numbers", "basics"}

    def test_version_changes_only_on_real_changes(self):
        tag_filter = TagFilter()
        tag_filter.clear()
        assert tag_filter.version == 0

        tag_filter.toggle("food")
        tag_filter.set_tags({"food"})
        assert tag_filter.version == 1

    def test_apply_uses_current_selection(self, sample_cards):
        tag_filter = TagFilter()
        tag_filter.toggle("numbers")
        assert [c.id for c in tag_filter.apply(sample_cards)] == [5]
