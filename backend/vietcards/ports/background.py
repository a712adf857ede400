"""Port interface for background photos."""

from typing import Protocol, runtime_checkable

from vietcards.domain.value_objects.background_image import BackgroundImage


@runtime_checkable
class BackgroundImageSource(Protocol):
    """Hosted photo API."""

    async def random_image(self, query: str) -> BackgroundImage | None:
        """Get a random photo matching query, or None if the response had none."""
        ...
