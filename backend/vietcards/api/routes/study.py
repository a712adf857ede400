"""Study session API routes."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from vietcards.api.dependencies import CardStoreDep, StudySessionDep
from vietcards.api.errors import api_error, raise_for_load_error
from vietcards.api.routes.cards import CardResponse
from vietcards.domain.errors import InvalidTransitionError
from vietcards.domain.services.study_session import StudySession

router = APIRouter(prefix="/api/study", tags=["study"])


# =============================================================================
# Request/Response Models
# =============================================================================


class StudyStateResponse(BaseModel):
    """Current study session state."""

    state: str
    current_card: CardResponse | None
    is_flipped: bool
    selected_tags: list[str]
    filtered_count: int
    total_count: int
    viewed_count: int


class TagsResponse(BaseModel):
    """Available and selected tags."""

    all_tags: list[str]
    selected_tags: list[str]


class SetTagsRequest(BaseModel):
    """Request body for replacing the tag filter."""

    tags: list[str]


class HistoryResponse(BaseModel):
    """Cards viewed so far, in first-seen order."""

    cards: list[CardResponse]
    count: int


def _state(session: StudySession) -> StudyStateResponse:
    return StudyStateResponse(**session.snapshot())


def _tags(session: StudySession) -> TagsResponse:
    return TagsResponse(all_tags=session.all_tags, selected_tags=sorted(session.selected_tags))


# =============================================================================
# Routes
# =============================================================================


@router.get(
    "",
    response_model=StudyStateResponse,
    responses={503: {"description": "Flashcards failed to load"}},
)
async def get_state(session: StudySessionDep, card_store: CardStoreDep) -> StudyStateResponse:
    """Get the card on screen and the flip/filter state."""
    raise_for_load_error(card_store.load_error, "flashcards")
    return _state(session)


@router.post(
    "/next",
    response_model=StudyStateResponse,
    responses={503: {"description": "Flashcards failed to load"}},
)
async def next_card(session: StudySessionDep, card_store: CardStoreDep) -> StudyStateResponse:
    """Advance to a new weighted-random card from the filtered set.

    Rapid repeated calls are last-write-wins: superseded calls return the
    state as it stands when they finish.
    """
    raise_for_load_error(card_store.load_error, "flashcards")
    await session.next()
    return _state(session)


@router.post(
    "/flip",
    response_model=StudyStateResponse,
    responses={409: {"description": "No card to flip"}},
)
async def flip_card(session: StudySessionDep) -> StudyStateResponse:
    """Toggle between question and answer side."""
    try:
        session.flip()
    except InvalidTransitionError as e:
        raise api_error(status.HTTP_409_CONFLICT, "NO_CARD", str(e)) from None
    return _state(session)


@router.get("/tags", response_model=TagsResponse)
async def get_tags(session: StudySessionDep) -> TagsResponse:
    """List every tag in the deck and the active selection."""
    return _tags(session)


@router.post("/tags/{tag}/toggle", response_model=TagsResponse)
async def toggle_tag(tag: str, session: StudySessionDep) -> TagsResponse:
    """Add or remove a tag from the filter. The current card stays on screen."""
    session.toggle_tag(tag)
    return _tags(session)


@router.put("/tags", response_model=TagsResponse)
async def set_tags(request: SetTagsRequest, session: StudySessionDep) -> TagsResponse:
    """Replace the filter selection."""
    session.set_tags(request.tags)
    return _tags(session)


@router.delete("/tags", response_model=TagsResponse)
async def clear_tags(session: StudySessionDep) -> TagsResponse:
    """Clear all filters."""
    session.clear_filters()
    return _tags(session)


@router.get("/history", response_model=HistoryResponse)
async def get_history(session: StudySessionDep) -> HistoryResponse:
    """Cards shown so far (persisted across restarts)."""
    cards = session.history.cards
    return HistoryResponse(cards=[CardResponse.from_card(c) for c in cards], count=len(cards))


@router.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(session: StudySessionDep) -> Response:
    """Forget the viewed-cards history."""
    session.clear_history()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
