"""REST API route handlers for simulation sessions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_chain.config import SimulationConfig
from snake_chain.server.models import (
    CreateSessionRequest,
    KeyRequest,
    KeyResponse,
    SessionSummary,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Start a new simulation session."""
    manager = _get_manager(request)
    try:
        config = SimulationConfig(
            initial_length=body.initial_length,
            start_x=body.start_x,
            start_y=body.start_y,
            initial_direction=body.initial_direction,
            tick_period=body.tick_period_ms / 1000.0,
            frame_interval=body.frame_interval_ms / 1000.0,
            cell_size=body.cell_size,
        )
        session = manager.create_session(config)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current simulation state."""
    manager = _get_manager(request)
    session = manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    async with session.lock:
        state = session.simulation.get_state()
    return {
        "session_id": session.session_id,
        "status": session.status.value,
        "tick_period_ms": session.tick_period_ms,
        "connections": len(session.sockets),
        "state": state,
    }


@router.post("/{session_id}/keys")
async def press_key(
    session_id: str, body: KeyRequest, request: Request,
) -> KeyResponse:
    """Apply a key press; it takes effect at the next tick."""
    manager = _get_manager(request)
    try:
        session = await manager.press(session_id, body.key)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except RuntimeError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    state = session.simulation.state
    return KeyResponse(
        session_id=session_id,
        key=body.key,
        pending_direction=state.controller.take_pending_direction().name.lower(),
        pending_growth=state.growth.pending,
    )


@router.delete("/{session_id}")
async def stop_session(session_id: str, request: Request) -> dict:
    """Stop a session and release its frame loop."""
    manager = _get_manager(request)
    try:
        await manager.stop_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "stopped", "session_id": session_id}
