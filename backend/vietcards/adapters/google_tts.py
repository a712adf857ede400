"""Google Cloud Text-to-Speech adapter."""

import base64
import logging

import httpx

from vietcards.domain.constants import (
    TTS_AUDIO_ENCODING,
    TTS_LANGUAGE_CODE,
    TTS_PITCH,
    TTS_SPEAKING_RATE,
    TTS_SSML_GENDER,
    TTS_VOICE_NAME,
)

logger = logging.getLogger(__name__)

SYNTHESIZE_URL = "https://texttospeech.googleapis.com/v1/text:synthesize"


class GoogleTTSError(Exception):
    """Text-to-Speech API error."""

    pass


class GoogleTTSAdapter:
    """Google Cloud TTS adapter implementing TTSPort.

    Synthesizes Vietnamese speech (vi-VN Wavenet voice, MP3, slightly slow
    speaking rate for learners). Without an API key the adapter reports
    itself unconfigured and callers fall back to browser speech.
    """

    def __init__(
        self,
        api_key: str | None,
        voice_name: str = TTS_VOICE_NAME,
        speaking_rate: float = TTS_SPEAKING_RATE,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or None
        self.voice_name = voice_name
        self.speaking_rate = speaking_rate
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None  # Lazy-initialized, reused across calls

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def synthesize(self, text: str) -> bytes:
        """Convert text to MP3 audio.

        Raises:
            GoogleTTSError: If no key is configured or the API call fails
        """
        if not self.is_configured:
            raise GoogleTTSError("Google Cloud API key not configured")

        payload = {
            "input": {"text": text},
            "voice": {
                "languageCode": TTS_LANGUAGE_CODE,
                "name": self.voice_name,
                "ssmlGender": TTS_SSML_GENDER,
            },
            "audioConfig": {
                "audioEncoding": TTS_AUDIO_ENCODING,
                "pitch": TTS_PITCH,
                "speakingRate": self.speaking_rate,
            },
        }

        client = await self._get_client()
        try:
            response = await client.post(SYNTHESIZE_URL, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as e:
            raise GoogleTTSError(f"TTS request failed: {e}") from e

        if response.is_error:
            raise GoogleTTSError(f"API request failed: {response.status_code}")

        audio_content = response.json().get("audioContent")
        if not audio_content:
            raise GoogleTTSError("TTS response contained no audio")

        logger.debug(f"Synthesized {len(text)} chars of speech")
        return base64.b64decode(audio_content)

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
