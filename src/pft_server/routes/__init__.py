"""Versioned API routers: interpretation and grading reference data."""

from fastapi import FastAPI

from pft_server.routes.interpret import router as interpret_router
from pft_server.routes.reference import router as reference_router

API_PREFIX = "/api/v1"

ROUTERS = (interpret_router, reference_router)


def register_routes(app: FastAPI) -> None:
    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)
