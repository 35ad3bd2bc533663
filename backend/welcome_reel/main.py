from __future__ import annotations
"""WelcomeReel — FastAPI application entry point.

Mounts the API routes and configures CORS for the front-end.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from welcome_reel.api.router import api_router
from welcome_reel.config import get_settings
from welcome_reel.services.credential_gate import get_credential_gate

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: report key availability on startup."""
    logger.info("%s starting up...", settings.APP_NAME)
    logger.info("Veo model: %s (%s)", settings.VEO_MODEL, settings.VEO_RESOLUTION)
    if not await get_credential_gate().has_credential():
        logger.warning("No Gemini API key configured; generation requests will be refused")

    yield

    logger.info("%s shut down", settings.APP_NAME)


app = FastAPI(
    title="WelcomeReel API",
    description="Welcome video generation with Google Veo",
    version="0.1.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount API routes
app.include_router(api_router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "service": settings.APP_NAME,
        "status": "running",
    }


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "model": settings.VEO_MODEL,
        "has_credential": await get_credential_gate().has_credential(),
    }
