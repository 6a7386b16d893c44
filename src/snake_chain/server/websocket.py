"""WebSocket handler for interactive play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_chain.server.models import SessionStatus
from snake_chain.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send ``{"key": ...}`` messages, receive the state after every tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return
    if session.status != SessionStatus.RUNNING:
        await websocket.close(code=4009, reason="Session is not running.")
        return

    await websocket.accept()
    logger.info("Client connected to session %s.", session_id)

    # Send an initial snapshot so the client can draw before the first tick,
    # and only then subscribe to tick broadcasts to keep states in order.
    async with session.lock:
        state = session.simulation.get_state()
    await websocket.send_text(json.dumps(state, separators=(",", ":")))
    session.sockets.append(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            key = msg.get("key")
            if not isinstance(key, str):
                continue

            async with session.lock:
                if session.status == SessionStatus.RUNNING:
                    session.simulation.press(key)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
