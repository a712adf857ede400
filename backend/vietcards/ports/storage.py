"""Port interface for durable local key-value storage."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorage(Protocol):
    """Durable string storage surviving restarts (the session history lives here)."""

    async def get(self, key: str) -> str | None:
        """Get stored value, or None if absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...
