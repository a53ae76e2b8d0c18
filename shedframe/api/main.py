"""FastAPI application factory."""

from __future__ import annotations
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shedframe.api.routes import router

API_VERSION = "0.1.0"


def cors_origins() -> list[str]:
    """Comma-separated SHEDFRAME_CORS_ORIGINS, or any origin when unset."""
    raw = os.environ.get("SHEDFRAME_CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def create_app() -> FastAPI:
    app = FastAPI(
        title="Shed Frame Generator",
        description="Wall and roof framing, roof placement and cutting lists for timber outbuildings",
        version=API_VERSION,
    )

    # The configurator front end is served from its own origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")
    return app


app = create_app()
