"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sheetmerge.api.routes import files, health, merge
from sheetmerge.core.config import AppSettings
from sheetmerge.core.exceptions import EntryNotFoundError, MergeError
from sheetmerge.core.logging import configure_logging
from sheetmerge.session import MergeSession


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the in-memory session; it is discarded on shutdown."""
    if not hasattr(app.state, "session"):
        settings = AppSettings()
        configure_logging(settings.log_level)
        app.state.settings = settings
        app.state.session = MergeSession(settings=settings)
    yield
    app.state.session.clear()


def create_app(session: MergeSession | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SheetMerge",
        version="0.1.0",
        lifespan=lifespan,
    )
    if session is not None:
        app.state.settings = session.settings
        app.state.session = session

    @app.exception_handler(EntryNotFoundError)
    async def _entry_not_found(request: Request, exc: EntryNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(MergeError)
    async def _merge_failed(request: Request, exc: MergeError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    app.include_router(health.router)
    app.include_router(files.router, prefix="/files")
    app.include_router(merge.router)
    return app
