# Ports layer - Abstract interfaces (Protocols)

from .background import BackgroundImageSource
from .repository import CandidateSource, FlashcardRepository, TipRepository
from .speech import TTSPort
from .storage import KeyValueStorage

__all__ = [
    "BackgroundImageSource",
    "CandidateSource",
    "FlashcardRepository",
    "KeyValueStorage",
    "TTSPort",
    "TipRepository",
]
