"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a simulation session."""

    RUNNING = "running"
    STOPPED = "stopped"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    initial_length: int = Field(default=1, ge=1, le=256)
    start_x: int = 0
    start_y: int = 0
    initial_direction: str = "down"
    tick_period_ms: int = Field(default=500, ge=20, le=5000)
    frame_interval_ms: int = Field(default=16, ge=5, le=1000)
    cell_size: float = Field(default=15.0, gt=0)


class KeyRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/keys."""

    key: str = Field(min_length=1, max_length=16)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    length: int
    tick: int
    tick_period_ms: int


class KeyResponse(BaseModel):
    """Acknowledgement of an applied key press."""

    session_id: str
    key: str
    pending_direction: str
    pending_growth: int
