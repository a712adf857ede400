"""Domain services - orchestration and business logic."""

from .background_rotator import BackgroundRotator
from .card_store import CardStore
from .events import ChangeNotifier, StoreEvent, StoreEventKind
from .speech_service import SpeechResult, SpeechService
from .study_session import StudySession
from .tag_filter import TagFilter, all_tags, filter_cards
from .tip_rotator import TipRotator, get_next_tip, get_random_tip
from .tip_store import TipStore
from .viewed_history import ViewedHistory
from .weighted_selector import (
    WeightedSelector,
    card_weight,
    compute_weights,
    select_weighted,
)

__all__ = [
    "BackgroundRotator",
    "CardStore",
    "ChangeNotifier",
    "StoreEvent",
    "StoreEventKind",
    "SpeechResult",
    "SpeechService",
    "StudySession",
    "TagFilter",
    "all_tags",
    "filter_cards",
    "TipRotator",
    "get_next_tip",
    "get_random_tip",
    "TipStore",
    "ViewedHistory",
    "WeightedSelector",
    "card_weight",
    "compute_weights",
    "select_weighted",
]
