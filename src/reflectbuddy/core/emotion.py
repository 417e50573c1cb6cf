"""
Keyword-based emotion detection for user messages.

Deliberately simple: case-insensitive substring matching against small
Dutch keyword lists. Categories are tried in a fixed order and the first
category with a hit wins, so "boos en bang" is frustrated, not anxious.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class EmotionLabel(str, Enum):
    FRUSTRATED = "frustrated"
    ANXIOUS = "anxious"
    CONFIDENT = "confident"
    OVERWHELMED = "overwhelmed"
    SAD = "sad"
    NEUTRAL = "neutral"


# Declaration order is the tie-break order
EMOTION_KEYWORDS: Dict[EmotionLabel, Tuple[str, ...]] = {
    EmotionLabel.FRUSTRATED: ("gefrustreerd", "boos", "geïrriteerd", "kwaad"),
    EmotionLabel.ANXIOUS: ("zenuwachtig", "onzeker", "bang", "gestrest"),
    EmotionLabel.CONFIDENT: ("zelfverzekerd", "trots", "goed", "succesvol"),
    EmotionLabel.OVERWHELMED: ("overweldigd", "te veel", "chaos", "druk"),
    EmotionLabel.SAD: ("verdrietig", "teleurgesteld", "down", "somber"),
}


def contains_any(text: str, keywords: Tuple[str, ...]) -> bool:
    """True if the lowercased text contains at least one keyword."""
    lower = text.lower()
    return any(keyword in lower for keyword in keywords)


def classify_emotion(text: str) -> EmotionLabel:
    """Map free text to exactly one EmotionLabel (neutral when nothing matches)."""
    for emotion, keywords in EMOTION_KEYWORDS.items():
        if contains_any(text, keywords):
            return emotion
    return EmotionLabel.NEUTRAL
