"""StayHub — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stayhub.api.v1.ai import router as ai_router
from stayhub.api.v1.bookings import router as bookings_router
from stayhub.api.v1.rooms import router as rooms_router
from stayhub.api.v1.webhooks import router as webhooks_router
from stayhub.config import settings

# Configure root logger so all stayhub.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    if not settings.gemini_api_key:
        logging.getLogger(__name__).warning("GEMINI_API_KEY is not set; the booking assistant will not answer")
    yield
    # Shutdown: dispose engine connections
    from stayhub.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Hotel booking API with an AI booking assistant.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(rooms_router)
app.include_router(bookings_router)
app.include_router(ai_router)
app.include_router(webhooks_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


def run() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run("stayhub.main:app", host=settings.host, port=settings.port)
