"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
Each getter reads the environment on call so tests can monkeypatch it.
"""

import os
from pathlib import Path

from vietcards.domain.constants import (
    BACKGROUND_REFRESH_SECONDS,
    SERVER_CANDIDATE_COUNT,
    TIP_ROTATION_SECONDS,
    TRANSITION_DELAY_MS,
)


def _get_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"Invalid {name}: '{value}' is not a number") from e


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: Vite dev server ports
    """
    default_origins = "http://localhost:5173,http://localhost:4173"
    origins_str = os.getenv("CORS_ORIGINS", default_origins)
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

CORS_ALLOWED_HEADERS = ["Accept", "Content-Type", "X-Requested-With"]


def get_log_level() -> str:
    """Environment variable: LOG_LEVEL (default INFO)."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_flashcard_backend() -> str:
    """Get persistence backend type from environment.

    Options:
        - 'supabase': Hosted Supabase project (requires SUPABASE_URL/KEY)
        - 'local': In-memory adapter with the embedded seed deck
    """
    return os.getenv("FLASHCARD_BACKEND", "local").lower()


def get_supabase_url() -> str:
    """Environment variable: SUPABASE_URL. Required for the supabase backend."""
    return os.getenv("SUPABASE_URL", "")


def get_supabase_key() -> str:
    """Environment variable: SUPABASE_ANON_KEY. Required for the supabase backend."""
    return os.getenv("SUPABASE_ANON_KEY", "")


def get_google_tts_api_key() -> str | None:
    """Environment variable: GOOGLE_CLOUD_API_KEY. Unset means browser speech fallback."""
    return os.getenv("GOOGLE_CLOUD_API_KEY") or None


def get_unsplash_access_key() -> str | None:
    """Environment variable: UNSPLASH_ACCESS_KEY. Unset means demo mode."""
    return os.getenv("UNSPLASH_ACCESS_KEY") or None


def is_background_enabled() -> bool:
    """Environment variable: BACKGROUND_ENABLED (default true)."""
    return _get_bool("BACKGROUND_ENABLED", True)


def get_history_db_path() -> str:
    """Get viewed-history database path from environment."""
    default_path = str(Path.home() / ".vietcards" / "history.db")
    return os.getenv("HISTORY_DB_PATH", default_path)


def get_tip_rotation_seconds() -> float:
    """Environment variable: TIP_ROTATION_SECONDS (default 300)."""
    return _get_float("TIP_ROTATION_SECONDS", TIP_ROTATION_SECONDS)


def get_background_refresh_seconds() -> float:
    """Environment variable: BACKGROUND_REFRESH_SECONDS (default 300)."""
    return _get_float("BACKGROUND_REFRESH_SECONDS", BACKGROUND_REFRESH_SECONDS)


def get_transition_delay_seconds() -> float:
    """Environment variable: TRANSITION_DELAY_MS (default 200, 0 disables)."""
    return _get_float("TRANSITION_DELAY_MS", TRANSITION_DELAY_MS) / 1000


def use_server_candidates() -> bool:
    """Environment variable: USE_SERVER_CANDIDATES (default false).

    When enabled, the supabase backend's weighted_flashcards function ranks
    candidates and the client draws uniformly from the returned pool.
    """
    return _get_bool("USE_SERVER_CANDIDATES", False)


def get_server_candidate_count() -> int:
    """Environment variable: SERVER_CANDIDATE_COUNT (default 20)."""
    return int(_get_float("SERVER_CANDIDATE_COUNT", SERVER_CANDIDATE_COUNT))
