# Domain layer - Business logic (no framework dependencies)

from .entities import Flashcard, FlashcardDraft, FlashcardPatch, Tip, TipDraft, TipPatch
from .errors import (
    InvalidTransitionError,
    LoadError,
    NotFoundError,
    RepositoryError,
    ValidationError,
    VietcardsError,
)
from .value_objects import BackgroundImage, ErrorCode, OperationResult, SessionState

__all__ = [
    "BackgroundImage",
    "ErrorCode",
    "Flashcard",
    "FlashcardDraft",
    "FlashcardPatch",
    "InvalidTransitionError",
    "LoadError",
    "NotFoundError",
    "OperationResult",
    "RepositoryError",
    "SessionState",
    "Tip",
    "TipDraft",
    "TipPatch",
    "ValidationError",
    "VietcardsError",
]
