"""API routes module."""

from .background import router as background_router
from .cards import router as cards_router
from .speech import router as speech_router
from .study import router as study_router
from .tips import router as tips_router

__all__ = ["study_router", "cards_router", "tips_router", "speech_router", "background_router"]
