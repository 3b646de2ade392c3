"""
FastAPI API Server.

REST surface for the smart-input pipeline: stateless parsing, metro
lookup, and per-call chip sessions.

Start with:
    uvicorn callpad.api_server:app --reload --port 8000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from dotenv import load_dotenv
load_dotenv(".env.local")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from callpad.api.middleware import RateLimitMiddleware, RequestIdMiddleware
from callpad.api.parse import router as parse_router
from callpad.api.sessions import close_all_sessions, router as sessions_router
from callpad.config import get_settings
from callpad.logging_config import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle hooks."""
    settings = get_settings()
    logger.info(
        "api_server_starting",
        environment=settings.environment.value,
        fallback_enabled=settings.fallback_enabled,
    )
    yield
    await close_all_sessions()
    logger.info("api_server_stopping")


app = FastAPI(
    title="CallPad Smart-Input API",
    description="Classifies call-center shorthand into structured trip details",
    version="0.1.0",
    lifespan=lifespan,
)

# Outermost first
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(parse_router)
app.include_router(sessions_router)


@app.get("/health", tags=["System"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "callpad-smart-input"}


@app.get("/", tags=["System"])
async def root() -> dict[str, str]:
    return {
        "service": "CallPad Smart-Input",
        "version": "0.1.0",
        "docs": "/docs",
    }
