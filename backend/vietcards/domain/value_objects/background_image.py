"""Background image value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BackgroundImage:
    """Photo used behind the study view.

    Attributes:
        url: Display-size image URL
        author: Photographer name for attribution, if known
        link: Page of the photo on the provider's site, if known
    """

    url: str
    author: str | None = None
    link: str | None = None
