"""
ResponseComposer: decides what Reflectie-Buddy says after a user turn.

The generation service is asked for a short, empathetic follow-up that fits
the current phase. If that fails in any way, a deterministic fallback is
built from an emotion-keyed empathy phrase plus a question drawn at random
from the phase's question pool. compose() never raises.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..content.phases import PhaseId, get_phase
from ..content.templates import EMPATHY_PREFIXES, GENERATION_PROMPT
from ..core.emotion import EmotionLabel
from .client import GenerationClient, MODEL_HINT_SMART

logger = logging.getLogger(__name__)


def empathy_prefix(emotion: Optional[str]) -> str:
    """Empathy phrase for an emotion; unmapped or missing keys get the neutral phrase."""
    key = emotion.value if isinstance(emotion, EmotionLabel) else emotion
    return EMPATHY_PREFIXES.get(key or "", EMPATHY_PREFIXES[EmotionLabel.NEUTRAL.value])


class ResponseComposer:
    """
    Builds assistant replies.

    Args:
        client: Generation client; None means fallback replies only
        rng: Random source for fallback question selection
        seed: Seed for a fresh numpy Generator when rng is not given
    """

    def __init__(
        self,
        client: Optional[GenerationClient] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.client = client
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def reseed(self, seed: Optional[int] = None) -> None:
        self.rng = np.random.default_rng(seed)

    def build_prompt(self, user_text: str, phase: PhaseId, emotion: EmotionLabel) -> str:
        return GENERATION_PROMPT.format(
            phase_name=get_phase(phase).name,
            emotion=EmotionLabel(emotion).value,
            user_text=user_text.strip(),
        )

    def fallback_reply(self, phase: PhaseId, emotion: Optional[EmotionLabel]) -> str:
        questions = get_phase(phase).questions
        question = questions[int(self.rng.integers(len(questions)))]
        return f"{empathy_prefix(emotion)}{question}"

    def compose(self, user_text: str, phase: PhaseId, emotion: EmotionLabel) -> str:
        """Return reply text for the phase the user just answered."""
        if self.client is None:
            logger.info(f"[Composer] No generation client, using fallback (phase={PhaseId(phase).value})")
            return self.fallback_reply(phase, emotion)

        prompt = self.build_prompt(user_text, phase, emotion)
        try:
            response = self.client.generate(prompt, model_hint=MODEL_HINT_SMART)
            if response and response.strip():
                logger.info(f"[Composer] Generated reply ({len(response)} chars)")
                return response
            logger.warning("[Composer] Empty reply from generation service, using fallback")
        except Exception as e:
            logger.warning(f"[Composer] Generation failed: {e}, using fallback")
        return self.fallback_reply(phase, emotion)
