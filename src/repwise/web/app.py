"""FastAPI application exposing the progress engine locally."""

import logging
from collections import OrderedDict
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..db import ProgressStateRepository, ProgressStore, init_db
from ..db.engine import get_db_path
from ..exceptions import PersistenceError, ValidationError
from .routers import progress

logger = logging.getLogger(__name__)

# Users whose engines (and write locks) stay cached at once
ENGINE_CACHE_SIZE = 128


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Malformed feedback: 422 with the offending field."""
    return JSONResponse(status_code=422, content=exc.to_dict())


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Store failure: 503 so the client can retry."""
    logger.error("Persistence failure on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=503, content=exc.to_dict())


def create_app(
    store: ProgressStore | None = None,
    db_path: Path | None = None,
    clock: Callable[[], datetime] = datetime.now,
    engine_cache_size: int = ENGINE_CACHE_SIZE,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Progress store to use (default: SQLite at db_path)
        db_path: Database file for the default store
        clock: Returns the current time for every engine
        engine_cache_size: Most per-user engines kept in memory
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler - runs on startup and shutdown."""
        if store is None:
            await init_db(db_path or get_db_path())
        yield

    app = FastAPI(
        title="repwise",
        description="Adaptive training progress engine",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.store = store if store is not None else ProgressStateRepository(
        db_path=db_path,
        history_cap=settings.history_cap,
        weekly_target=settings.weekly_target,
        monthly_target=settings.monthly_target,
    )
    app.state.first_weekday = settings.first_weekday
    app.state.clock = clock
    # One engine per user so writes for a user are serialized
    app.state.engines = OrderedDict()
    app.state.engine_cache_size = engine_cache_size

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)

    app.include_router(progress.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0"}

    return app

