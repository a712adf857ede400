"""Port interface for text-to-speech."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TTSPort(Protocol):
    """Text-to-Speech port interface."""

    @property
    def is_configured(self) -> bool:
        """Whether the hosted voice can be used (e.g. an API key is set)."""
        ...

    async def synthesize(self, text: str) -> bytes:
        """Convert text to encoded audio (MP3)."""
        ...
