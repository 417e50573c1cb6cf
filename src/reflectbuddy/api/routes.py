"""
REST API routes for Reflectie-Buddy.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from starlette.responses import Response

from ..content.badges import BADGE_CATALOG
from ..content.phases import PHASES
from ..core.session import ReflectionSession
from ..export.transcript import EXPORT_FORMATS, export_transcript, transcript_filename
from ..viz.progress_chart import create_progress_chart
from .schemas import (
    CatalogResponse,
    MessageData,
    MessageRequest,
    MessageResponse,
    ProgressData,
    StartSessionRequest,
    StartSessionResponse,
)
from .session import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Global session manager (created on first use)
session_manager: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    global session_manager
    if session_manager is None:
        session_manager = SessionManager()
    return session_manager


def _get_session(session_id: str) -> ReflectionSession:
    session = get_session_manager().get_session(session_id)
    if session is None:
        raise HTTPException(404, f"Session {session_id} not found")
    return session


@router.get("/status")
async def status():
    """Check whether the generation service is configured."""
    sm = get_session_manager()
    return {"llm_available": sm.client is not None and sm.client.is_available}


@router.get("/phases", response_model=CatalogResponse)
async def list_phases():
    return CatalogResponse(items=[p.to_dict() for p in PHASES])


@router.get("/badges", response_model=CatalogResponse)
async def list_badges():
    return CatalogResponse(items=[b.to_dict() for b in BADGE_CATALOG])


@router.post("/session/start", response_model=StartSessionResponse)
async def start_session(request: StartSessionRequest = StartSessionRequest()):
    """Start a new reflection session."""
    sm = get_session_manager()
    session_id = sm.create_session(seed=request.seed)
    session = _get_session(session_id)
    welcome = session.messages[0]
    logger.info(f"[API] Started session {session_id}")

    return StartSessionResponse(
        session_id=session_id,
        phase=session.state.current_phase.value,
        message=MessageData(**welcome.to_dict()),
    )


@router.post("/session/{session_id}/message", response_model=MessageResponse)
async def submit_message(session_id: str, request: MessageRequest):
    """Process one user message. Blank or concurrent submissions are ignored."""
    session = _get_session(session_id)
    result = await asyncio.to_thread(session.submit, request.content)

    if result is None:
        return MessageResponse(accepted=False, progress=ProgressData(**session.progress()))

    return MessageResponse(
        accepted=True,
        emotion=result.emotion.value,
        answered_phase=result.answered_phase.value,
        assistant_message=MessageData(**result.assistant_message.to_dict()),
        badge_messages=[MessageData(**m.to_dict()) for m in result.badge_messages],
        progress=ProgressData(**session.progress()),
    )


@router.get("/session/{session_id}/messages")
async def get_messages(session_id: str):
    session = _get_session(session_id)
    return {"messages": [m.to_dict() for m in session.messages]}


@router.get("/session/{session_id}/progress", response_model=ProgressData)
async def get_progress(session_id: str):
    session = _get_session(session_id)
    return ProgressData(**session.progress())


@router.get("/session/{session_id}/progress-chart")
async def get_progress_chart(session_id: str):
    """Plotly figure of the six phases for client-side rendering."""
    session = _get_session(session_id)
    chart = create_progress_chart(session.state.completed_phases, session.state.current_phase)
    return json.loads(chart)


@router.get("/session/{session_id}/export")
async def export_session(session_id: str, fmt: str = Query("markdown", alias="format")):
    """Download the transcript (badge notifications excluded)."""
    session = _get_session(session_id)
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(400, f"Unsupported export format: {fmt}")

    body = export_transcript(
        session.messages,
        completed_count=len(session.state.completed_phases),
        badge_count=len(session.state.earned_badges),
        fmt=fmt,
    )
    media_type = "text/markdown" if fmt == "markdown" else "application/json"
    return Response(
        content=body,
        media_type=f"{media_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{transcript_filename(fmt)}"'},
    )


@router.delete("/session/{session_id}")
async def delete_session(session_id: str):
    sm = get_session_manager()
    if not sm.session_exists(session_id):
        raise HTTPException(404, f"Session {session_id} not found")
    sm.delete_session(session_id)
    return {"deleted": session_id}
