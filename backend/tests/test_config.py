"""
Tests for environment configuration and repository selection.
Run: python -m pytest backend/tests/test_config.py -v
"""

import pytest

from vietcards import config
from vietcards.adapters.local_deck import LocalDeckRepository
from vietcards.adapters.supabase import SupabaseRepository
from vietcards.api.dependencies import create_repository


class TestConfig:
    def test_defaults(self, monkeypatch):
        for name in (
            "FLASHCARD_BACKEND",
            "TIP_ROTATION_SECONDS",
            "TRANSITION_DELAY_MS",
            "USE_SERVER_CANDIDATES",
            "SERVER_CANDIDATE_COUNT",
            "CORS_ORIGINS",
        ):
            monkeypatch.delenv(name, raising=False)

        assert config.get_flashcard_backend() == "local"
        assert config.get_tip_rotation_seconds() == 300
        assert config.get_transition_delay_seconds() == pytest.approx(0.2)
        assert config.use_server_candidates() is False
        assert config.get_server_candidate_count() == 20
        assert config.get_cors_origins() == ["http://localhost:5173", "http://localhost:4173"]

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("TRANSITION_DELAY_MS", "0")
        monkeypatch.setenv("USE_SERVER_CANDIDATES", "yes")
        monkeypatch.setenv("CORS_ORIGINS", "https://cards.example, ")

        assert config.get_transition_delay_seconds() == 0
        assert config.use_server_candidates() is True
        assert config.get_cors_origins() == ["https://cards.example"]

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("TIP_ROTATION_SECONDS", "often")
        with pytest.raises(ValueError, match="TIP_ROTATION_SECONDS"):
            config.get_tip_rotation_seconds()

    def test_blank_keys_are_none(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLOUD_API_KEY", "")
        assert config.get_google_tts_api_key() is None


class TestCreateRepository:
    def test_local(self, monkeypatch):
        monkeypatch.setenv("FLASHCARD_BACKEND", "local")
        assert isinstance(create_repository(), LocalDeckRepository)

    def test_supabase(self, monkeypatch):
        monkeypatch.setenv("FLASHCARD_BACKEND", "Supabase")
        monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        assert isinstance(create_repository(), SupabaseRepository)

    def test_supabase_requires_credentials(self, monkeypatch):
        monkeypatch.setenv("FLASHCARD_BACKEND", "supabase")
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            create_repository()

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("FLASHCARD_BACKEND", "firebase")
        with pytest.raises(ValueError, match="Invalid FLASHCARD_BACKEND"):
            create_repository()
