"""
FastAPI application for Reflectie-Buddy.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, WebSocket

# Configure logging to show INFO from reflectbuddy modules
logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")
logging.getLogger("reflectbuddy").setLevel(logging.INFO)
from fastapi.middleware.cors import CORSMiddleware

from .routes import router, get_session_manager
from .websocket import websocket_endpoint

app = FastAPI(
    title="Reflectie-Buddy",
    description="Guided Gibbs reflective-cycle dialogue for teacher-training students",
    version="0.1.0",
)

# CORS for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    return {"message": "Reflectie-Buddy API", "docs": "/docs"}


@app.websocket("/ws/{session_id}")
async def ws_endpoint(websocket: WebSocket, session_id: str):
    """WebSocket endpoint for real-time reflection."""
    sm = get_session_manager()
    await websocket_endpoint(websocket, session_id, sm)
