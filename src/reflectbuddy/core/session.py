"""
ReflectionSession: orchestrator for one reflective conversation.

Owns the SessionState and drives one turn end-to-end:

    classify emotion -> evaluate badges -> compose reply -> commit

A turn is atomic from the caller's point of view. Submissions while a turn
is in flight, and blank submissions, are ignored. If anything fails before
the commit, the user message is withdrawn and the error propagates.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set

from ..content.badges import BADGE_CATALOG, Badge, BadgeId
from ..content.phases import FIRST_PHASE, PhaseId, get_phase, next_phase, phase_ids
from ..content.templates import BADGE_NOTIFICATION, WELCOME_MESSAGE
from ..llm.composer import ResponseComposer
from .badge_engine import BadgeTriggerEngine
from .emotion import EmotionLabel, classify_emotion

logger = logging.getLogger(__name__)


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    BADGE = "badge"


@dataclass
class Message:
    """One entry in the conversation. List order is the only ordering guarantee."""
    id: str
    role: MessageRole
    content: str
    created_at: datetime
    phase: Optional[PhaseId] = None
    emotion: Optional[EmotionLabel] = None
    badge_id: Optional[BadgeId] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
            "phase": self.phase.value if self.phase else None,
            "emotion": self.emotion.value if self.emotion else None,
            "badge_id": self.badge_id.value if self.badge_id else None,
        }


@dataclass
class SessionState:
    """Aggregate root for one conversation."""
    messages: List[Message] = field(default_factory=list)
    current_phase: PhaseId = FIRST_PHASE
    completed_phases: Set[PhaseId] = field(default_factory=set)
    earned_badges: List[BadgeId] = field(default_factory=list)
    turn_count: int = 0
    processing: bool = False
    _message_ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    def new_message(
        self,
        role: MessageRole,
        content: str,
        phase: Optional[PhaseId] = None,
        emotion: Optional[EmotionLabel] = None,
        badge_id: Optional[BadgeId] = None,
    ) -> Message:
        message = Message(
            id=str(next(self._message_ids)),
            role=role,
            content=content,
            created_at=datetime.now(timezone.utc),
            phase=phase,
            emotion=emotion,
            badge_id=badge_id,
        )
        self.messages.append(message)
        return message

    def check_invariants(self) -> None:
        all_phases = set(phase_ids())
        assert self.current_phase in all_phases, f"cursor outside cycle: {self.current_phase!r}"
        assert self.completed_phases <= all_phases, f"unknown completed phases: {self.completed_phases}"
        assert len(set(self.earned_badges)) == len(self.earned_badges), "badge awarded twice"
        assert len(self.earned_badges) <= len(BADGE_CATALOG)


@dataclass
class TurnResult:
    """Everything one accepted turn changed."""
    emotion: EmotionLabel
    answered_phase: PhaseId
    current_phase: PhaseId
    user_message: Message
    assistant_message: Message
    badge_messages: List[Message]
    completed_phases: List[PhaseId]
    earned_badges: List[BadgeId]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emotion": self.emotion.value,
            "answered_phase": self.answered_phase.value,
            "current_phase": self.current_phase.value,
            "user_message": self.user_message.to_dict(),
            "assistant_message": self.assistant_message.to_dict(),
            "badge_messages": [m.to_dict() for m in self.badge_messages],
            "completed_phases": [p.value for p in self.completed_phases],
            "earned_badges": [b.value for b in self.earned_badges],
        }


class ReflectionSession:
    """
    Drives the six-phase reflective dialogue for a single user.

    Usage:
        session = ReflectionSession(composer=ResponseComposer(client))
        result = session.submit("Vandaag was de klas erg onrustig")
        # result is None when the submission was ignored
    """

    def __init__(
        self,
        composer: Optional[ResponseComposer] = None,
        badge_engine: Optional[BadgeTriggerEngine] = None,
    ):
        self.composer = composer or ResponseComposer()
        self.badge_engine = badge_engine or BadgeTriggerEngine()
        self.state = SessionState()
        self._turn_lock = threading.Lock()
        self.state.new_message(
            MessageRole.ASSISTANT, WELCOME_MESSAGE, phase=self.state.current_phase
        )

    @property
    def messages(self) -> List[Message]:
        return list(self.state.messages)

    @property
    def is_processing(self) -> bool:
        return self.state.processing

    def submit(self, text: str) -> Optional[TurnResult]:
        """Process one user message. Returns None if the submission is ignored."""
        state = self.state
        if not text or not text.strip():
            return None
        if not self._turn_lock.acquire(blocking=False):
            logger.info("[Session] Turn already in progress, ignoring submission")
            return None

        state.processing = True
        try:
            return self._run_turn(text)
        finally:
            state.processing = False
            self._turn_lock.release()

    def _run_turn(self, text: str) -> TurnResult:
        state = self.state
        phase = state.current_phase

        emotion = classify_emotion(text)
        user_message = state.new_message(MessageRole.USER, text, phase=phase, emotion=emotion)
        try:
            new_badges = self.badge_engine.evaluate(text, phase, state)
            reply = self.composer.compose(text, phase, emotion)
        except Exception:
            state.messages.remove(user_message)
            raise

        # Commit
        state.completed_phases.add(phase)
        state.turn_count += 1
        state.current_phase = next_phase(phase)
        assistant_message = state.new_message(
            MessageRole.ASSISTANT, reply, phase=state.current_phase
        )
        badge_messages = [self._award(badge) for badge in new_badges]
        state.check_invariants()

        logger.info(
            f"[Session] Turn {state.turn_count}: {phase.value} -> {state.current_phase.value} "
            f"(emotion={emotion.value}, badges={len(badge_messages)})"
        )
        return TurnResult(
            emotion=emotion,
            answered_phase=phase,
            current_phase=state.current_phase,
            user_message=user_message,
            assistant_message=assistant_message,
            badge_messages=badge_messages,
            completed_phases=self.completed_in_order(),
            earned_badges=list(state.earned_badges),
        )

    def _award(self, badge: Badge) -> Message:
        if badge.id in self.state.earned_badges:
            raise ValueError(f"Badge {badge.id.value} already earned")
        message = self.state.new_message(
            MessageRole.BADGE,
            BADGE_NOTIFICATION.format(
                icon=badge.icon, name=badge.name, description=badge.description
            ),
            phase=self.state.current_phase,
            badge_id=badge.id,
        )
        self.state.earned_badges.append(badge.id)
        return message

    # -------------------------------------------------------------------------
    # READ SURFACE
    # -------------------------------------------------------------------------

    def completed_in_order(self) -> List[PhaseId]:
        return [p for p in phase_ids() if p in self.state.completed_phases]

    def transcript_messages(self) -> List[Message]:
        """Messages for export: everything except badge notifications."""
        return [m for m in self.state.messages if m.role != MessageRole.BADGE]

    def progress(self) -> Dict[str, Any]:
        state = self.state
        current = get_phase(state.current_phase)
        return {
            "current_phase": current.id.value,
            "current_phase_name": current.name,
            "completed_phases": [p.value for p in self.completed_in_order()],
            "completed_count": len(state.completed_phases),
            "total_phases": len(phase_ids()),
            "cycle_progress": len(state.completed_phases) / len(phase_ids()),
            "earned_badges": [b.value for b in state.earned_badges],
            "turn_count": state.turn_count,
        }
