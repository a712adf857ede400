"""Speech service - hosted TTS with a browser-native fallback."""

import logging
from collections import OrderedDict
from dataclasses import dataclass

from vietcards.domain.constants import TTS_CACHE_SIZE, TTS_LANGUAGE_CODE
from vietcards.ports.speech import TTSPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpeechResult:
    """Outcome of a speak request.

    Attributes:
        audio: MP3 bytes from the hosted voice, None on fallback
        fallback: True when the client should use its own speech synthesis
        language: BCP-47 language for the fallback voice
    """

    audio: bytes | None
    fallback: bool
    language: str = TTS_LANGUAGE_CODE


class SpeechService:
    """Speaks card text, caching synthesized audio by text.

    The cache holds at most `max_cache_size` clips; the least recently
    spoken one is evicted first.

    Failures never propagate: they are logged and reported as a fallback.
    """

    def __init__(self, tts: TTSPort | None, max_cache_size: int = TTS_CACHE_SIZE):
        self._tts = tts
        self._max_cache_size = max_cache_size
        self._cache: OrderedDict[str, bytes] = OrderedDict()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def speak(self, text: str) -> SpeechResult:
        text = text.strip()
        if not text:
            return SpeechResult(audio=None, fallback=True)

        cached = self._cache.get(text)
        if cached is not None:
            self._cache.move_to_end(text)
            return SpeechResult(audio=cached, fallback=False)

        if self._tts is None or not self._tts.is_configured:
            logger.warning("TTS API key not found. Using browser speech fallback.")
            return SpeechResult(audio=None, fallback=True)

        try:
            audio = await self._tts.synthesize(text)
        except Exception as e:
            logger.error(f"Error synthesizing speech: {e}")
            return SpeechResult(audio=None, fallback=True)

        self._cache[text] = audio
        while len(self._cache) > self._max_cache_size:
            self._cache.popitem(last=False)
        return SpeechResult(audio=audio, fallback=False)
