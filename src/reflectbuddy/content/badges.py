"""
Badge definitions for Reflectie-Buddy.

Each badge has a tagged trigger: the kind says which predicate applies,
the remaining fields parameterise it. BADGE_CATALOG order is the
evaluation order and therefore the order in which notifications appear
when one turn earns several badges.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .phases import PhaseId


class BadgeId(str, Enum):
    FIRST_REFLECTION = "first_reflection"
    EMOTION_EXPLORER = "emotion_explorer"
    DEEP_THINKER = "deep_thinker"
    ACTION_HERO = "action_hero"
    LEARNER_INSIGHT = "learner_insight"
    THEORY_CONNECTOR = "theory_connector"
    GROWTH_MINDSET = "growth_mindset"
    CYCLE_COMPLETE = "cycle_complete"


class TriggerKind(str, Enum):
    FIRST_TURN = "first_turn"                    # turn counter is 0
    PHASE_ENTRY = "phase_entry"                  # answered phase == trigger_phase
    KEYWORD_CONJUNCTION = "keyword_conjunction"  # a hit in every keyword group
    KEYWORD_DISJUNCTION = "keyword_disjunction"  # a hit in the single keyword group
    FULL_CYCLE = "full_cycle"                    # all six phases completed


@dataclass(frozen=True)
class Badge:
    """A one-time achievement marker."""
    id: BadgeId
    name: str
    description: str
    icon: str
    trigger: TriggerKind
    trigger_phase: Optional[PhaseId] = None
    keyword_groups: Tuple[Tuple[str, ...], ...] = ()

    def to_dict(self) -> Dict:
        return {
            "id": self.id.value,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "trigger": self.trigger.value,
        }


# Keyword groups (lowercase, substring matched)
LEARNER_WORDS = ("leerling", "kind", "student", "klas", "groep")
UNDERSTANDING_WORDS = ("begrijp", "snap", "inzicht", "besef", "realiseer")
THEORY_WORDS = ("theorie", "model", "methode", "didactiek", "pedagogiek", "onderzoek")
GROWTH_WORDS = ("leren", "geleerd", "groei", "ontwikkel", "verbeter")


BADGE_CATALOG: Tuple[Badge, ...] = (
    Badge(
        id=BadgeId.FIRST_REFLECTION,
        name="Eerste Stappen",
        description="Je eerste reflectie gedeeld",
        icon="🌱",
        trigger=TriggerKind.FIRST_TURN,
    ),
    Badge(
        id=BadgeId.EMOTION_EXPLORER,
        name="Emotie Ontdekkingsreiziger",
        description="Je gevoelens erkend en benoemd",
        icon="💭",
        trigger=TriggerKind.PHASE_ENTRY,
        trigger_phase=PhaseId.FEELINGS,
    ),
    Badge(
        id=BadgeId.DEEP_THINKER,
        name="Diepe Denker",
        description="Een situatie grondig geanalyseerd",
        icon="🧠",
        trigger=TriggerKind.PHASE_ENTRY,
        trigger_phase=PhaseId.ANALYSIS,
    ),
    Badge(
        id=BadgeId.ACTION_HERO,
        name="Actie Held",
        description="Concrete actiepunten geformuleerd",
        icon="🎯",
        trigger=TriggerKind.PHASE_ENTRY,
        trigger_phase=PhaseId.ACTION,
    ),
    Badge(
        id=BadgeId.LEARNER_INSIGHT,
        name="Leerling Kenner",
        description="Inzicht getoond in het gedrag van een leerling",
        icon="👀",
        trigger=TriggerKind.KEYWORD_CONJUNCTION,
        keyword_groups=(LEARNER_WORDS, UNDERSTANDING_WORDS),
    ),
    Badge(
        id=BadgeId.THEORY_CONNECTOR,
        name="Theorie Verbinder",
        description="Ervaringen gekoppeld aan pedagogische theorie",
        icon="🔗",
        trigger=TriggerKind.KEYWORD_DISJUNCTION,
        keyword_groups=(THEORY_WORDS,),
    ),
    Badge(
        id=BadgeId.GROWTH_MINDSET,
        name="Groeimindset",
        description="Leren van fouten en uitdagingen",
        icon="📈",
        trigger=TriggerKind.KEYWORD_DISJUNCTION,
        keyword_groups=(GROWTH_WORDS,),
    ),
    Badge(
        id=BadgeId.CYCLE_COMPLETE,
        name="Cyclus Voltooid",
        description="Alle zes fasen van Gibbs' reflectiecyclus doorlopen",
        icon="🏆",
        trigger=TriggerKind.FULL_CYCLE,
    ),
)
