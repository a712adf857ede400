"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    BackgroundRotatorDep,
    CardStoreDep,
    SpeechServiceDep,
    StudySessionDep,
    TipRotatorDep,
    TipStoreDep,
    cleanup_dependencies,
    create_repository,
    init_dependencies,
)
from .routes import background_router, cards_router, speech_router, study_router, tips_router

__all__ = [
    # Routes
    "study_router",
    "cards_router",
    "tips_router",
    "speech_router",
    "background_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "create_repository",
    # Type aliases
    "CardStoreDep",
    "TipStoreDep",
    "StudySessionDep",
    "TipRotatorDep",
    "SpeechServiceDep",
    "BackgroundRotatorDep",
]
