"""FastAPI dependency injection — provides the engine, grading store and settings.

All three are built once in the lifespan handler and stashed on
``app.state``; they are read-only, so sharing them across requests is safe.
"""

from fastapi import Request

from pft_interpreter.engine import InterpretationEngine
from pft_interpreter.grading import GradingStore

from pft_server.config import ServerSettings


def get_engine(request: Request) -> InterpretationEngine:
    """Return the engine singleton from ``app.state``."""
    return request.app.state.engine


def get_store(request: Request) -> GradingStore:
    """Return the GradingStore singleton from ``app.state``."""
    return request.app.state.store


def get_settings(request: Request) -> ServerSettings:
    """Return the settings the application was created with."""
    return request.app.state.settings
