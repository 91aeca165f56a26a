"""FastAPI application -- console access validator entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import consolecheck.deps as deps
from consolecheck import __version__
from consolecheck.api.tools import router as tools_router
from consolecheck.options import configure_logging, load_options

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load options on startup, drop them on shutdown."""
    options = load_options()
    configure_logging(logging.DEBUG if options.dev_mode else logging.INFO)
    logger.info("Console access validator starting with options: %s", options.model_dump())

    deps._options = options

    yield

    deps._options = None


app = FastAPI(
    title="Console Private Access Validator",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(tools_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
