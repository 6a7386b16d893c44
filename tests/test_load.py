"""Session manager tests: concurrent frame loops and fatal chain errors."""

from __future__ import annotations

import asyncio

import pytest

from snake_chain.config import SimulationConfig
from snake_chain.server.models import SessionStatus
from snake_chain.server.session_manager import SessionManager


def _fast_config(**overrides) -> SimulationConfig:
    return SimulationConfig(tick_period=0.02, frame_interval=0.005, **overrides)


class TestConcurrentSessions:
    @pytest.mark.asyncio
    async def test_30_concurrent_sessions(self):
        """Spin up 30 sessions; every frame loop keeps ticking."""
        manager = SessionManager()
        sessions = [
            manager.create_session(_fast_config(initial_length=1 + i % 5))
            for i in range(30)
        ]

        for _ in range(200):
            await asyncio.sleep(0.02)
            if all(s.simulation.tick_count >= 3 for s in sessions):
                break

        assert all(s.simulation.tick_count >= 3 for s in sessions)
        for s in sessions:
            s.simulation.chain.check_invariants()
        await manager.cleanup()

    @pytest.mark.asyncio
    async def test_session_limit(self):
        manager = SessionManager(max_sessions=2)
        manager.create_session(_fast_config())
        manager.create_session(_fast_config())
        with pytest.raises(ValueError, match="limit"):
            manager.create_session(_fast_config())
        await manager.cleanup()

    def test_invalid_limit(self):
        with pytest.raises(ValueError, match="at least 1"):
            SessionManager(max_sessions=0)


class TestSessionKeys:
    @pytest.mark.asyncio
    async def test_press_unknown_session(self):
        manager = SessionManager()
        with pytest.raises(KeyError):
            await manager.press("missing", "w")

    @pytest.mark.asyncio
    async def test_press_unbound_key(self):
        manager = SessionManager()
        session = manager.create_session(_fast_config())
        with pytest.raises(ValueError, match="Unbound"):
            await manager.press(session.session_id, "z")
        await manager.cleanup()


class TestFatalChainErrors:
    @pytest.mark.asyncio
    async def test_corrupt_chain_stops_session(self):
        manager = SessionManager()
        session = manager.create_session(_fast_config(initial_length=3))
        async with session.lock:
            session.simulation.chain.segment(1).child = None

        for _ in range(100):
            await asyncio.sleep(0.02)
            if session.status == SessionStatus.STOPPED:
                break

        assert session.status == SessionStatus.STOPPED
        assert manager.get_session(session.session_id) is None
        assert manager.list_sessions() == []
        await manager.cleanup()

    @pytest.mark.asyncio
    async def test_crashed_sessions_do_not_accumulate(self):
        manager = SessionManager(max_sessions=2)
        for _ in range(3):
            session = manager.create_session(_fast_config(initial_length=2))
            async with session.lock:
                session.simulation.chain.segment(0).child = None
            for _ in range(100):
                await asyncio.sleep(0.02)
                if session.status == SessionStatus.STOPPED:
                    break
            assert session.status == SessionStatus.STOPPED

        assert manager.list_sessions() == []
        await manager.cleanup()
