"""
BadgeTriggerEngine: decides which badges a turn earns.

Predicates are evaluated against the session state as it stood before the
turn is committed. The one exception is the full-cycle predicate, which
looks at the completed-phase set as it will be once the answered phase is
marked complete; otherwise the badge would only fire on the turn after the
cycle closes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, FrozenSet, List, Sequence

from ..content.badges import BADGE_CATALOG, Badge, TriggerKind
from ..content.phases import PhaseId, phase_ids
from .emotion import contains_any

if TYPE_CHECKING:
    from .session import SessionState

logger = logging.getLogger(__name__)


class BadgeTriggerEngine:
    """Evaluates badge predicates in catalog order."""

    def __init__(self, catalog: Sequence[Badge] = BADGE_CATALOG):
        self.catalog = tuple(catalog)
        self._all_phases: FrozenSet[PhaseId] = frozenset(phase_ids())

    def evaluate(
        self,
        user_text: str,
        phase: PhaseId,
        state: "SessionState",
    ) -> List[Badge]:
        """
        Return the badges newly earned by this turn, in catalog order.

        Args:
            user_text: The user's message for this turn
            phase: The phase the user was answering (cursor before advancing)
            state: Pre-commit session state (not modified)
        """
        completed_after = frozenset(state.completed_phases) | {PhaseId(phase)}
        earned = set(state.earned_badges)

        new_badges = []
        for badge in self.catalog:
            if badge.id in earned:
                continue
            if self._triggered(badge, user_text, phase, state.turn_count, completed_after):
                new_badges.append(badge)

        if new_badges:
            logger.info(f"[Badges] Earned this turn: {[b.id.value for b in new_badges]}")
        return new_badges

    def _triggered(
        self,
        badge: Badge,
        user_text: str,
        phase: PhaseId,
        turn_count: int,
        completed_after: FrozenSet[PhaseId],
    ) -> bool:
        kind = badge.trigger
        if kind == TriggerKind.FIRST_TURN:
            return turn_count == 0
        if kind == TriggerKind.PHASE_ENTRY:
            return PhaseId(phase) == badge.trigger_phase
        if kind == TriggerKind.KEYWORD_CONJUNCTION:
            return bool(badge.keyword_groups) and all(
                contains_any(user_text, group) for group in badge.keyword_groups
            )
        if kind == TriggerKind.KEYWORD_DISJUNCTION:
            return contains_any(user_text, badge.keyword_groups[0])
        if kind == TriggerKind.FULL_CYCLE:
            return completed_after >= self._all_phases
        raise ValueError(f"Unknown trigger kind for badge {badge.id}: {kind!r}")
