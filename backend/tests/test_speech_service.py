"""
Unit tests for SpeechService.
Run: python -m pytest backend/tests/test_speech_service.py -v
"""

from vietcards.domain.constants import TTS_CACHE_SIZE
from vietcards.domain.services.speech_service import SpeechService


class FakeTTS:
    def __init__(self, configured=True, error=None):
        self.configured = configured
        self.error = error
        self.requests = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def synthesize(self, text: str) -> bytes:
        self.requests.append(text)
        if self.error:
            raise self.error
        return f"mp3:{text}".encode()


class TestSpeechService:
    async def test_returns_audio(self):
        service = SpeechService(FakeTTS())

        result = await service.speak("Xin chào")

        assert not result.fallback
        assert result.audio == "mp3:Xin chào".encode()

    async def test_caches_by_text(self):
        tts = FakeTTS()
        service = SpeechService(tts)

        await service.speak("Cảm ơn")
        await service.speak(" Cảm ơn ")

        assert tts.requests == ["Cảm ơn"]
        assert service.cache_size == 1

    async def test_unconfigured_falls_back(self, caplog):
        tts = FakeTTS(configured=False)
        service = SpeechService(tts)

        result = await service.speak("Phở")

        assert result.fallback
        assert result.audio is None
        assert result.language == "vi-VN"
        assert tts.requests == []
        assert "TTS API key not found" in caplog.text

    async def test_no_adapter_falls_back(self):
        result = await SpeechService(None).speak("Phở")
        assert result.fallback

    async def test_provider_error_falls_back_and_is_not_cached(self):
        tts = FakeTTS(error=RuntimeError("quota exceeded"))
        service = SpeechService(tts)

        result = await service.speak("Phở")

        assert result.fallback
        assert service.cache_size == 0

    async def test_blank_text(self):
        tts = FakeTTS()
        result = await SpeechService(tts).speak("   ")
        assert result.fallback
        assert tts.requests == []


class TestSpeechCache:
    """Bounded cache: the least recently spoken clip is evicted first."""

    async def test_cache_never_exceeds_its_bound(self):
        service = SpeechService(FakeTTS(), max_cache_size=3)

        for word in ["Một", "Hai", "Ba", "Bốn", "Năm"]:
            await service.speak(word)

        assert service.cache_size == 3

    async def test_oldest_clip_is_evicted(self):
        tts = FakeTTS()
        service = SpeechService(tts, max_cache_size=2)

        await service.speak("Một")
        await service.speak("Hai")
        await service.speak("Ba")
        await service.speak("Một")

        assert tts.requests == ["Một", "Hai", "Ba", "Một"]

    async def test_recent_hit_survives_eviction(self):
        tts = FakeTTS()
        service = SpeechService(tts, max_cache_size=2)

        await service.speak("Một")
        await service.speak("Hai")
        await service.speak("Một")
        await service.speak("Ba")
        await service.speak("Một")

        assert tts.requests == ["Một", "Hai", "Ba"]

    def test_default_bound_comes_from_constants(self):
        assert SpeechService(FakeTTS())._max_cache_size == TTS_CACHE_SIZE
