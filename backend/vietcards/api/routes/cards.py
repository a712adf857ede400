"""Flashcard management API routes."""

from datetime import datetime

from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel, Field

from vietcards.api.dependencies import CardStoreDep, StudySessionDep
from vietcards.api.errors import raise_for_load_error, raise_for_result
from vietcards.domain.entities.flashcard import Flashcard, FlashcardDraft, FlashcardPatch

router = APIRouter(prefix="/api/cards", tags=["cards"])


# =============================================================================
# Request/Response Models
# =============================================================================


class CardResponse(BaseModel):
    """A flashcard."""

    id: int
    question: str
    answer: str
    example: str | None = None
    example_translation: str | None = None
    tags: list[str]
    notes: str | None = None
    last_seen: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_card(cls, card: Flashcard) -> "CardResponse":
        return cls(**card.to_dict())


class CardListResponse(BaseModel):
    """Cards for the browse view."""

    cards: list[CardResponse]
    count: int


class CreateCardRequest(BaseModel):
    """Request body for creating a card."""

    question: str = Field(..., description="Vietnamese prompt")
    answer: str = Field(..., description="Translation")
    tags: list[str] = Field(default_factory=list)
    example: str | None = None
    example_translation: str | None = None
    notes: str | None = None


class UpdateCardRequest(BaseModel):
    """Request body for editing a card. Omitted fields stay unchanged."""

    question: str | None = None
    answer: str | None = None
    tags: list[str] | None = None
    example: str | None = None
    example_translation: str | None = None
    notes: str | None = None


# =============================================================================
# Routes
# =============================================================================


@router.get("", response_model=CardListResponse)
async def list_cards(
    session: StudySessionDep,
    card_store: CardStoreDep,
    include_all: bool = Query(False, alias="all"),
) -> CardListResponse:
    """List cards matching the active tag filter (or every card with ?all=true)."""
    raise_for_load_error(card_store.load_error, "flashcards")
    cards = card_store.cards if include_all else session.filtered_cards
    return CardListResponse(cards=[CardResponse.from_card(c) for c in cards], count=len(cards))


@router.post(
    "",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing question, answer or tags"},
        502: {"description": "Backend write failed"},
    },
)
async def create_card(request: CreateCardRequest, card_store: CardStoreDep) -> CardResponse:
    """Create a card. It becomes eligible for the next draw immediately."""
    result = await card_store.create(
        FlashcardDraft(
            question=request.question,
            answer=request.answer,
            tags=tuple(request.tags),
            example=request.example,
            example_translation=request.example_translation,
            notes=request.notes,
        )
    )
    raise_for_result(result)
    return CardResponse.from_card(result.data)


@router.patch(
    "/{card_id}",
    response_model=CardResponse,
    responses={
        400: {"description": "Invalid or empty patch"},
        404: {"description": "Card not found"},
        502: {"description": "Backend write failed"},
    },
)
async def update_card(
    card_id: int, request: UpdateCardRequest, card_store: CardStoreDep
) -> CardResponse:
    """Edit a card. If it is on screen, the edit shows in place."""
    result = await card_store.update(
        card_id,
        FlashcardPatch(
            question=request.question,
            answer=request.answer,
            tags=tuple(request.tags) if request.tags is not None else None,
            example=request.example,
            example_translation=request.example_translation,
            notes=request.notes,
        ),
    )
    raise_for_result(result)
    return CardResponse.from_card(result.data)


@router.delete(
    "/{card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Card not found"},
        502: {"description": "Backend write failed"},
    },
)
async def delete_card(card_id: int, card_store: CardStoreDep) -> Response:
    """Delete a card. If it is on screen, a replacement is drawn immediately."""
    result = await card_store.delete(card_id)
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
