"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from editorial.config import settings
from editorial.models.database.base import init_db
from editorial.api.v1.routes import history, translation

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Initialize database
    try:
        await init_db()
    except Exception as e:
        logger.error("Failed to initialize history database: %s", e)

    if not settings.get_api_key():
        logger.warning(
            "No usable API key for provider '%s'. Translation requests will fail "
            "until one is set (e.g. DEEPSEEK_API_KEY in .env.local).",
            settings.llm_provider,
        )

    yield
    # Shutdown: cleanup if needed


app = FastAPI(
    title=settings.app_name,
    description="English to Chinese literary translation and analysis API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(translation.router, prefix="/api/v1", tags=["translation"])
app.include_router(history.router, prefix="/api/v1", tags=["history"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Bilingual Editorial API", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "llm_configured": settings.get_api_key() is not None,
        "history_enabled": settings.history_enabled,
    }
