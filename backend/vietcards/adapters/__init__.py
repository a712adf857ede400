# Adapters layer - Concrete implementations (Supabase, Google TTS, Unsplash, SQLite)

from .google_tts import GoogleTTSAdapter, GoogleTTSError
from .local_deck import LocalDeckRepository
from .sqlite_storage import InMemoryKeyValueStore, SqliteKeyValueStore
from .supabase import SupabaseRepository
from .unsplash import UnsplashAdapter, UnsplashError

__all__ = [
    "GoogleTTSAdapter",
    "GoogleTTSError",
    "InMemoryKeyValueStore",
    "LocalDeckRepository",
    "SqliteKeyValueStore",
    "SupabaseRepository",
    "UnsplashAdapter",
    "UnsplashError",
]
