"""
WebSocket handler for real-time Reflectie-Buddy conversations.
"""

from __future__ import annotations

import asyncio

from fastapi import WebSocket, WebSocketDisconnect

from .session import SessionManager


async def websocket_endpoint(
    websocket: WebSocket,
    session_id: str,
    session_manager: SessionManager,
):
    """
    WebSocket handler for a reflection session.

    Protocol:
        Client -> Server:
            {"type": "user_message", "content": "..."}

        Server -> Client:
            {"type": "assistant_message", "content": "...", "phase": "...", "emotion": "..."}
            {"type": "badge_earned", "badge_id": "...", "content": "..."}   (staggered)
            {"type": "progress", "data": {...}}
            {"type": "ignored"}   (blank or non-text content, or turn already in progress)
            {"type": "error", "message": "..."}

    Badge notifications always follow the assistant message of the same turn;
    the delay between them is presentation only, the session state already
    holds them in order.
    """
    await websocket.accept()

    session = session_manager.get_session(session_id)
    if session is None:
        await websocket.send_json({"type": "error", "message": f"Session {session_id} not found"})
        await websocket.close()
        return

    delay = session_manager.settings.badge_notification_delay

    try:
        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict) or data.get("type") != "user_message":
                await websocket.send_json({"type": "error", "message": "Unknown message type"})
                continue

            content = data.get("content", "")
            if not isinstance(content, str):
                await websocket.send_json({"type": "ignored"})
                continue

            # The generation call blocks, so the turn runs off the event loop
            result = await asyncio.to_thread(session.submit, content)
            if result is None:
                await websocket.send_json({"type": "ignored"})
                continue

            await websocket.send_json({
                "type": "assistant_message",
                "content": result.assistant_message.content,
                "phase": result.current_phase.value,
                "emotion": result.emotion.value,
            })

            for badge_message in result.badge_messages:
                if delay > 0:
                    await asyncio.sleep(delay)
                await websocket.send_json({
                    "type": "badge_earned",
                    "badge_id": badge_message.badge_id.value,
                    "content": badge_message.content,
                })

            await websocket.send_json({"type": "progress", "data": session.progress()})

    except WebSocketDisconnect:
        pass
