"""Weighted card selection.

Biases the draw toward cards the learner has not seen recently while giving
new vocabulary a strong, time-decaying boost:

- never shown: fixed weight UNSEEN_CARD_WEIGHT (no creation bonus)
- shown: floor(sqrt(hours since last seen)) + 1
- shown and created less than NEW_CARD_BONUS_DAYS ago: multiplied by a
  factor falling linearly from NEW_CARD_BONUS_MAX at age 0 to 1.0

The draw walks candidates in order subtracting weights from
r ~ U[0, total) and returns the first candidate that brings r to <= 0.
"""

import math
import random
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, TypeVar

from vietcards.domain.constants import (
    MIN_CARD_WEIGHT,
    NEW_CARD_BONUS_DAYS,
    NEW_CARD_BONUS_MAX,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    UNSEEN_CARD_WEIGHT,
)
from vietcards.domain.entities.flashcard import Flashcard

T = TypeVar("T")


class RandomSource(Protocol):
    """Subset of random.Random used by the selector."""

    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


def creation_bonus(created_at: datetime | None, now: datetime) -> float:
    """Multiplier for recently created cards (1.0 when not eligible)."""
    if created_at is None:
        return 1.0
    age_days = max((now - created_at).total_seconds() / SECONDS_PER_DAY, 0.0)
    if age_days >= NEW_CARD_BONUS_DAYS:
        return 1.0
    return NEW_CARD_BONUS_MAX - (age_days / NEW_CARD_BONUS_DAYS) * (NEW_CARD_BONUS_MAX - 1.0)


def card_weight(card: Flashcard, now: datetime) -> int:
    """Compute the sampling weight of a card at time `now` (always >= 1)."""
    if card.last_seen is None:
        return UNSEEN_CARD_WEIGHT

    # Clock skew can put last_seen in the future
    hours = max((now - card.last_seen).total_seconds() / SECONDS_PER_HOUR, 0.0)
    weight = max(math.floor(math.sqrt(hours)) + 1, MIN_CARD_WEIGHT)
    weight = math.floor(weight * creation_bonus(card.created_at, now))
    return max(weight, MIN_CARD_WEIGHT)


def compute_weights(candidates: Sequence[Flashcard], now: datetime) -> list[int]:
    """Weights for each candidate, in candidate order."""
    return [card_weight(card, now) for card in candidates]


def draw_weighted(items: Sequence[T], weights: Sequence[int], rng: RandomSource) -> T | None:
    """Linear-scan weighted draw.

    Args:
        items: Candidates in draw order
        weights: Positive weight per candidate
        rng: Random source

    Returns:
        Selected item, or None if items is empty
    """
    if not items:
        return None

    total = sum(weights)
    r = rng.random() * total
    for item, weight in zip(items, weights, strict=True):
        r -= weight
        if r <= 0:
            return item

    # Unreachable with positive weights and r < total; keep the draw total
    return items[0]


def select_weighted(
    candidates: Sequence[Flashcard],
    now: datetime,
    rng: RandomSource | None = None,
) -> Flashcard | None:
    """Draw one card from candidates with recency/novelty weighting.

    Args:
        candidates: Eligible cards (the filtered set)
        now: Reference time for elapsed-time computations
        rng: Random source, defaults to the module-level generator

    Returns:
        Selected card, or None iff candidates is empty
    """
    return draw_weighted(candidates, compute_weights(candidates, now), rng or random)


def uniform_pick(items: Sequence[T], rng: RandomSource | None = None) -> T | None:
    """Uniform draw, None if items is empty."""
    if not items:
        return None
    return items[(rng or random).randrange(len(items))]


class WeightedSelector:
    """Selector bound to a random source.

    Pass a seeded random.Random for reproducible draws in tests.
    """

    def __init__(self, rng: RandomSource | None = None):
        self._rng = rng or random.Random()

    @property
    def rng(self) -> RandomSource:
        return self._rng

    def select(self, candidates: Sequence[Flashcard], now: datetime) -> Flashcard | None:
        """Weighted draw over candidates."""
        return select_weighted(candidates, now, self._rng)

    def pick_uniform(self, candidates: Sequence[T]) -> T | None:
        """Uniform draw over candidates (server-ranked pools)."""
        return uniform_pick(candidates, self._rng)
