"""Background image API route."""

from fastapi import APIRouter
from pydantic import BaseModel

from vietcards.api.dependencies import BackgroundRotatorDep

router = APIRouter(prefix="/api/background", tags=["background"])


class BackgroundResponse(BaseModel):
    """Current background photo.

    When use_fallback is true (or url is null) the client shows its
    built-in gradient instead. key changes on every failed refresh so
    the client can re-render.
    """

    url: str | None = None
    author: str | None = None
    link: str | None = None
    use_fallback: bool
    key: int


@router.get("", response_model=BackgroundResponse)
async def get_background(rotator: BackgroundRotatorDep) -> BackgroundResponse:
    """Get the background photo on display."""
    if rotator is None:
        return BackgroundResponse(use_fallback=True, key=0)

    image = rotator.current
    return BackgroundResponse(
        url=image.url if image else None,
        author=image.author if image else None,
        link=image.link if image else None,
        use_fallback=rotator.use_fallback or image is None,
        key=rotator.key,
    )
