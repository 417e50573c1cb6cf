"""
In-memory session manager for Reflectie-Buddy.

Stores active ReflectionSession instances keyed by session_id. Nothing is
persisted: sessions disappear with the process.
"""

from __future__ import annotations

import uuid
from typing import Dict, List, Optional

from ..config import Settings
from ..core.session import ReflectionSession
from ..llm.client import GenerationClient, build_generation_client
from ..llm.composer import ResponseComposer


class SessionManager:
    """
    Manages active reflection sessions in memory.

    All sessions share one generation client; each gets its own composer
    (and random source) and its own state.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[GenerationClient] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.client = client if client is not None else build_generation_client(self.settings)
        self._sessions: Dict[str, ReflectionSession] = {}

    def create_session(self, seed: Optional[int] = None) -> str:
        """Create a new session and return its ID."""
        session_id = str(uuid.uuid4())[:8]
        composer = ResponseComposer(client=self.client, seed=seed)
        self._sessions[session_id] = ReflectionSession(composer=composer)
        return session_id

    def get_session(self, session_id: str) -> Optional[ReflectionSession]:
        return self._sessions.get(session_id)

    def session_exists(self, session_id: str) -> bool:
        return session_id in self._sessions

    def delete_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def list_sessions(self) -> List[str]:
        return list(self._sessions.keys())
