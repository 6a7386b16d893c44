"""In-memory session registry and async frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_chain.config import SimulationConfig
from snake_chain.engine import Simulation
from snake_chain.server.models import SessionStatus, SessionSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 64


@dataclass
class SessionInstance:
    """All state for a single running simulation."""

    session_id: str
    simulation: Simulation
    status: SessionStatus = SessionStatus.RUNNING
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def tick_period_ms(self) -> int:
        return round(self.simulation.config.tick_period * 1000)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            length=len(self.simulation.chain),
            tick=self.simulation.tick_count,
            tick_period_ms=self.tick_period_ms,
        )


class SessionManager:
    """Central registry owning every session and its frame loop.

    Only the frame loop and key handlers touch a session's simulation,
    and both hold the session lock while doing so.
    """

    def __init__(self, max_sessions: int = _MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._sessions: dict[str, SessionInstance] = {}
        self._max_sessions = max_sessions

    def create_session(self, config: SimulationConfig) -> SessionInstance:
        """Build a simulation and start its frame loop."""
        running = sum(
            1 for s in self._sessions.values()
            if s.status == SessionStatus.RUNNING
        )
        if running >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        session_id = uuid.uuid4().hex[:12]
        instance = SessionInstance(
            session_id=session_id, simulation=Simulation(config),
        )
        self._sessions[session_id] = instance
        instance._task = asyncio.create_task(self._frame_loop(instance))
        logger.info(
            "Session %s created (length=%d, period=%.3fs).",
            session_id, config.initial_length, config.tick_period,
        )
        return instance

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def press(self, session_id: str, key: str) -> SessionInstance:
        """Apply a key press to a running session."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        if session.status != SessionStatus.RUNNING:
            raise RuntimeError("Session is not running.")
        async with session.lock:
            if not session.simulation.press(key):
                raise ValueError(f"Unbound key: {key!r}.")
        return session

    async def stop_session(self, session_id: str) -> None:
        """Stop the frame loop and drop the session."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        session.status = SessionStatus.STOPPED
        if session._task and not session._task.done():
            session._task.cancel()
            await asyncio.gather(session._task, return_exceptions=True)
        await self._close_connections(session)
        logger.info("Session %s stopped.", session_id)

    async def _frame_loop(self, session: SessionInstance) -> None:
        """Feed real elapsed time to the simulation, broadcasting each tick."""
        interval = session.simulation.config.frame_interval
        last = time.monotonic()
        try:
            while session.status == SessionStatus.RUNNING:
                await asyncio.sleep(interval)
                now = time.monotonic()
                delta, last = now - last, now
                state = None
                async with session.lock:
                    if session.simulation.advance(delta):
                        state = session.simulation.get_state()
                if state is not None:
                    await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)
            session.status = SessionStatus.STOPPED
            self._sessions.pop(session.session_id, None)
        finally:
            if session.status == SessionStatus.STOPPED:
                await self._close_connections(session)

    async def _close_connections(self, session: SessionInstance) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session stopped.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def _broadcast(self, session: SessionInstance, state: dict) -> None:
        """Send state to every connected socket, dropping dead ones."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running frame loops."""
        for session in self._sessions.values():
            session.status = SessionStatus.STOPPED
            if session._task and not session._task.done():
                session._task.cancel()
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
