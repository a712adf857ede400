"""Domain entities - objects with identity."""

from .flashcard import Flashcard, FlashcardDraft, FlashcardPatch
from .tip import Tip, TipDraft, TipPatch

__all__ = ["Flashcard", "FlashcardDraft", "FlashcardPatch", "Tip", "TipDraft", "TipPatch"]
