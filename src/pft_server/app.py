"""FastAPI application for the PFT interpretation engine.

``create_app(settings)`` wires up:
  - a lifespan handler that loads ``grading.yaml`` and builds the one
    ``InterpretationEngine`` every request shares
  - CORS, so a browser form on another origin can post measurements
  - the exception handlers from :mod:`pft_server.errors`
  - ``/health`` plus the ``/api/v1`` routers

``uvicorn pft_server.app:app`` serves the module-level ``app``; the
``pft-server`` console script calls :func:`cli`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from pft_interpreter import __version__
from pft_interpreter.engine import InterpretationEngine
from pft_interpreter.grading import GradingStore

from pft_server.config import ServerSettings, load_settings
from pft_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from pft_server.routes import register_routes

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the grading store and engine before the first request.

    A missing or malformed ``grading.yaml`` aborts startup.
    """
    settings: ServerSettings = app.state.settings
    app.state.store = GradingStore(rules_dir=settings.rules_dir).load()
    app.state.engine = InterpretationEngine(app.state.store)
    logger.info(
        "PFT engine ready (%d grading tables, batch limit %d)",
        len(app.state.store.tables), settings.max_batch_size,
    )
    yield


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Return a configured application; settings come from the environment when omitted."""
    settings = settings or load_settings()
    _configure_logging(settings.log_level)

    app = FastAPI(
        title="PFT Interpreter API",
        description="Rule-based pulmonary function test interpretation",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    for exc_type, handler in (
        (ValueError, value_error_handler),
        (KeyError, key_error_handler),
        (Exception, generic_error_handler),
    ):
        app.add_exception_handler(exc_type, handler)

    @app.get("/health")
    async def health(request: Request) -> dict:
        """Readiness probe; reports how many grading tables are loaded."""
        return {"status": "ok", "grading_tables": len(request.app.state.store.tables)}

    register_routes(app)
    return app


app = create_app()


def cli() -> None:
    """``pft-server`` console script: serve ``app`` with uvicorn."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "pft_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
