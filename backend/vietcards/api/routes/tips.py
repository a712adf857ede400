"""Study tip API routes."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from vietcards.api.dependencies import TipRotatorDep, TipStoreDep
from vietcards.api.errors import raise_for_load_error, raise_for_result
from vietcards.domain.entities.tip import Tip, TipDraft, TipPatch

router = APIRouter(prefix="/api/tips", tags=["tips"])


class TipResponse(BaseModel):
    """A study tip."""

    id: int
    title: str
    content: str
    category: str | None = None
    tags: list[str] = []

    @classmethod
    def from_tip(cls, tip: Tip) -> "TipResponse":
        return cls(**tip.to_dict())


class TipListResponse(BaseModel):
    tips: list[TipResponse]
    count: int


class CurrentTipResponse(BaseModel):
    """Tip on display; null when there are no tips."""

    tip: TipResponse | None


class CreateTipRequest(BaseModel):
    title: str
    content: str
    category: str | None = None
    tags: list[str] = []


class UpdateTipRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    category: str | None = None
    tags: list[str] | None = None


def _current(tip: Tip | None) -> CurrentTipResponse:
    return CurrentTipResponse(tip=TipResponse.from_tip(tip) if tip else None)


@router.get("", response_model=TipListResponse)
async def list_tips(tip_store: TipStoreDep) -> TipListResponse:
    """List all tips."""
    raise_for_load_error(tip_store.load_error, "tips")
    tips = tip_store.tips
    return TipListResponse(tips=[TipResponse.from_tip(t) for t in tips], count=len(tips))


@router.get("/current", response_model=CurrentTipResponse)
async def get_current_tip(rotator: TipRotatorDep) -> CurrentTipResponse:
    """Get the tip currently on display."""
    return _current(rotator.current_tip)


@router.post("/next", response_model=CurrentTipResponse)
async def next_tip(rotator: TipRotatorDep) -> CurrentTipResponse:
    """Rotate to a different tip."""
    return _current(rotator.rotate())


@router.post("", response_model=TipResponse, status_code=status.HTTP_201_CREATED)
async def create_tip(request: CreateTipRequest, tip_store: TipStoreDep) -> TipResponse:
    """Create a tip."""
    result = await tip_store.create(
        TipDraft(
            title=request.title,
            content=request.content,
            category=request.category,
            tags=tuple(request.tags),
        )
    )
    raise_for_result(result)
    return TipResponse.from_tip(result.data)


@router.patch("/{tip_id}", response_model=TipResponse)
async def update_tip(tip_id: int, request: UpdateTipRequest, tip_store: TipStoreDep) -> TipResponse:
    """Edit a tip."""
    result = await tip_store.update(
        tip_id,
        TipPatch(
            title=request.title,
            content=request.content,
            category=request.category,
            tags=tuple(request.tags) if request.tags is not None else None,
        ),
    )
    raise_for_result(result)
    return TipResponse.from_tip(result.data)


@router.delete("/{tip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tip(tip_id: int, tip_store: TipStoreDep) -> Response:
    """Delete a tip. If it is on display, another one replaces it."""
    result = await tip_store.delete(tip_id)
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
