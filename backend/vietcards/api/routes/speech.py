"""Text-to-speech API route."""

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from vietcards.api.dependencies import SpeechServiceDep

router = APIRouter(prefix="/api/speech", tags=["speech"])


class SpeechRequest(BaseModel):
    """Request body for speaking a card's Vietnamese text."""

    text: str = Field(..., max_length=5000)


class SpeechFallbackResponse(BaseModel):
    """Returned when the browser should speak the text itself."""

    fallback: bool = True
    language: str


@router.post(
    "",
    responses={
        200: {
            "content": {"audio/mpeg": {}},
            "description": "MP3 audio, or a fallback instruction as JSON",
            "model": SpeechFallbackResponse,
        }
    },
)
async def speak(request: SpeechRequest, speech: SpeechServiceDep) -> Response:
    """Synthesize Vietnamese speech.

    Never fails on TTS problems: a missing key or provider error yields
    {"fallback": true} so the client can use its own speech synthesis.
    """
    result = await speech.speak(request.text)
    if result.fallback or result.audio is None:
        body = SpeechFallbackResponse(language=result.language)
        return JSONResponse(body.model_dump())
    return Response(content=result.audio, media_type="audio/mpeg")
