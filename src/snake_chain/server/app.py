"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_chain.server.routes import router
from snake_chain.server.session_manager import SessionManager
from snake_chain.server.websocket import ws_router


@asynccontextmanager
async def _lifespan(app: FastAPI):
    app.state.session_manager = SessionManager()
    yield
    await app.state.session_manager.cleanup()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Snake Chain API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
