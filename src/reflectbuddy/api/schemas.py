"""
Pydantic request/response models for the Reflectie-Buddy API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# REQUEST MODELS
# =============================================================================

class StartSessionRequest(BaseModel):
    """Request to start a new reflection session."""
    seed: Optional[int] = Field(None, description="Seed for fallback question selection")


class MessageRequest(BaseModel):
    """A user message for the current phase."""
    content: str = Field(..., description="User's free-text reflection")


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class MessageData(BaseModel):
    """One conversation message."""
    id: str
    role: str
    content: str
    created_at: str
    phase: Optional[str] = None
    emotion: Optional[str] = None
    badge_id: Optional[str] = None


class ProgressData(BaseModel):
    """Progress through the reflective cycle."""
    current_phase: str
    current_phase_name: str
    completed_phases: List[str]
    completed_count: int
    total_phases: int
    cycle_progress: float
    earned_badges: List[str]
    turn_count: int


class StartSessionResponse(BaseModel):
    """Response from starting a new session."""
    session_id: str
    phase: str
    message: MessageData


class MessageResponse(BaseModel):
    """Response from submitting a user message."""
    accepted: bool
    emotion: Optional[str] = None
    answered_phase: Optional[str] = None
    assistant_message: Optional[MessageData] = None
    badge_messages: List[MessageData] = Field(default_factory=list)
    progress: ProgressData


class CatalogResponse(BaseModel):
    """Static catalog entries (phases or badges)."""
    items: List[Dict[str, Any]]
