"""
Vietcards Backend - FastAPI Application

Weighted-random Vietnamese flashcards with tag filters, tips and TTS.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (parent of backend/)
# Must happen before importing modules that use environment variables
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from vietcards import __version__  # noqa: E402
from vietcards.api.dependencies import cleanup_dependencies, init_dependencies  # noqa: E402
from vietcards.api.routes import (  # noqa: E402
    background_router,
    cards_router,
    speech_router,
    study_router,
    tips_router,
)
from vietcards.config import (  # noqa: E402
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    get_cors_origins,
    get_log_level,
)

logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for startup/shutdown events.

    Startup:
    - Load cards and tips, show the first card
    - Start tip and background timers

    Shutdown:
    - Stop timers
    - Flush pending last-seen writes
    - Close HTTP connections
    """
    logger.info("Starting vietcards backend...")

    await init_dependencies()
    logger.info("Dependencies initialized")

    yield

    logger.info("Shutting down vietcards backend...")
    await cleanup_dependencies()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Vietcards API",
    description="Weighted-random Vietnamese flashcards",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration - loaded from environment with restrictive defaults
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=CORS_ALLOWED_METHODS,
    allow_headers=CORS_ALLOWED_HEADERS,
)

# Register API routers
app.include_router(study_router)
app.include_router(cards_router)
app.include_router(tips_router)
app.include_router(speech_router)
app.include_router(background_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "vietcards-backend",
        "version": __version__,
    }
