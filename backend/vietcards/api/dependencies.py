"""FastAPI dependency injection module.

Provides singleton instances of services for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from pathlib import Path
from typing import Annotated, Any

from fastapi import Depends

from vietcards import config
from vietcards.adapters.google_tts import GoogleTTSAdapter
from vietcards.adapters.local_deck import LocalDeckRepository
from vietcards.adapters.sqlite_storage import SqliteKeyValueStore
from vietcards.adapters.supabase import SupabaseRepository
from vietcards.adapters.unsplash import UnsplashAdapter
from vietcards.domain.errors import LoadError
from vietcards.domain.services.background_rotator import BackgroundRotator
from vietcards.domain.services.card_store import CardStore
from vietcards.domain.services.speech_service import SpeechService
from vietcards.domain.services.study_session import StudySession
from vietcards.domain.services.tip_rotator import TipRotator
from vietcards.domain.services.tip_store import TipStore
from vietcards.domain.services.viewed_history import ViewedHistory
from vietcards.ports.repository import CandidateSource

logger = logging.getLogger(__name__)


def create_repository() -> SupabaseRepository | LocalDeckRepository:
    """Build the persistence adapter selected by FLASHCARD_BACKEND."""
    backend = config.get_flashcard_backend()

    if backend == "local":
        logger.info("Using local seed deck (no Supabase required)")
        return LocalDeckRepository()
    if backend == "supabase":
        url = config.get_supabase_url()
        key = config.get_supabase_key()
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required for the supabase backend")
        logger.info(f"Using Supabase backend: {url}")
        return SupabaseRepository(url=url, api_key=key)

    raise ValueError(
        f"Invalid FLASHCARD_BACKEND: '{backend}'. " "Valid options: 'supabase', 'local'"
    )


# Singletons stored at module level
_repository: SupabaseRepository | LocalDeckRepository | None = None
_card_store: CardStore | None = None
_tip_store: TipStore | None = None
_study_session: StudySession | None = None
_tip_rotator: TipRotator | None = None
_speech_service: SpeechService | None = None
_tts_adapter: GoogleTTSAdapter | None = None
_background_rotator: BackgroundRotator | None = None
_unsplash_adapter: UnsplashAdapter | None = None


async def init_dependencies() -> None:
    """Initialize all singleton dependencies.

    Called during FastAPI lifespan startup. A failed card or tip load does
    not abort startup: the stores keep their load_error and the routes
    answer 503 until restart.
    """
    global _repository, _card_store, _tip_store, _study_session, _tip_rotator
    global _speech_service, _tts_adapter, _background_rotator, _unsplash_adapter

    _repository = create_repository()

    db_path = config.get_history_db_path()
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    history = ViewedHistory(SqliteKeyValueStore(db_path))
    await history.load()

    _card_store = CardStore(_repository)
    _tip_store = TipStore(_repository)

    try:
        await _card_store.load()
    except LoadError as e:
        logger.error(f"Starting without flashcards: {e}")
    try:
        await _tip_store.load()
    except LoadError as e:
        logger.error(f"Starting without tips: {e}")

    candidate_source = None
    if config.use_server_candidates():
        if isinstance(_repository, CandidateSource):
            candidate_source = _repository
        else:
            logger.warning("USE_SERVER_CANDIDATES ignored: backend has no candidate query")

    _study_session = StudySession(
        _card_store,
        history,
        transition_delay=config.get_transition_delay_seconds(),
        candidate_source=candidate_source,
        candidate_count=config.get_server_candidate_count(),
    )
    if _card_store.load_error is None:
        await _study_session.initialize()

    _tip_rotator = TipRotator(_tip_store, interval=config.get_tip_rotation_seconds())
    _tip_rotator.start()

    _tts_adapter = GoogleTTSAdapter(api_key=config.get_google_tts_api_key())
    _speech_service = SpeechService(_tts_adapter)

    if config.is_background_enabled():
        _unsplash_adapter = UnsplashAdapter(access_key=config.get_unsplash_access_key())
        _background_rotator = BackgroundRotator(
            _unsplash_adapter, interval=config.get_background_refresh_seconds()
        )
        await _background_rotator.start()


async def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    Called during FastAPI lifespan shutdown.
    Stops timers, flushes pending writes and closes connections.
    """
    if _study_session is not None:
        await _study_session.close()
    if _tip_rotator is not None:
        await _tip_rotator.close()
    if _background_rotator is not None:
        await _background_rotator.stop()

    # Close HTTP clients
    for adapter in (_repository, _tts_adapter, _unsplash_adapter):
        if adapter is not None:
            await adapter.close()


def _require(value: Any) -> Any:
    if value is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return value


def get_card_store() -> CardStore:
    """Dependency: Get CardStore instance."""
    return _require(_card_store)


def get_tip_store() -> TipStore:
    """Dependency: Get TipStore instance."""
    return _require(_tip_store)


def get_study_session() -> StudySession:
    """Dependency: Get StudySession instance."""
    return _require(_study_session)


def get_tip_rotator() -> TipRotator:
    """Dependency: Get TipRotator instance."""
    return _require(_tip_rotator)


def get_speech_service() -> SpeechService:
    """Dependency: Get SpeechService instance."""
    return _require(_speech_service)


def get_background_rotator() -> BackgroundRotator | None:
    """Dependency: Get BackgroundRotator instance (None when disabled)."""
    return _background_rotator


# Type aliases for dependency injection
CardStoreDep = Annotated[CardStore, Depends(get_card_store)]
TipStoreDep = Annotated[TipStore, Depends(get_tip_store)]
StudySessionDep = Annotated[StudySession, Depends(get_study_session)]
TipRotatorDep = Annotated[TipRotator, Depends(get_tip_rotator)]
SpeechServiceDep = Annotated[SpeechService, Depends(get_speech_service)]
BackgroundRotatorDep = Annotated[BackgroundRotator | None, Depends(get_background_rotator)]
