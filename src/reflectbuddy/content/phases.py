"""
The six phases of Gibbs' reflective cycle.

Each phase carries its Dutch display metadata and a pool of follow-up
questions used by the fallback reply. The cycle is fixed: six phases,
always in this order, wrapping from action back to description.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class PhaseId(str, Enum):
    DESCRIPTION = "description"
    FEELINGS = "feelings"
    EVALUATION = "evaluation"
    ANALYSIS = "analysis"
    CONCLUSION = "conclusion"
    ACTION = "action"


@dataclass(frozen=True)
class Phase:
    """One stage of the reflective cycle."""
    id: PhaseId
    name: str                      # Dutch display name
    icon: str
    color: str
    description: str
    questions: Tuple[str, ...]     # Fallback follow-up pool, never empty

    def to_dict(self) -> Dict:
        return {
            "id": self.id.value,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "description": self.description,
            "questions": list(self.questions),
        }


PHASES: Tuple[Phase, ...] = (
    Phase(
        id=PhaseId.DESCRIPTION,
        name="Beschrijving",
        icon="📝",
        color="blue",
        description="Wat gebeurde er precies?",
        questions=(
            "Kun je me vertellen wat er precies gebeurde in de klas?",
            "Welke gedragsproblemen heb je vandaag ervaren?",
            "Beschrijf de situatie zo concreet mogelijk - wie was erbij betrokken?",
        ),
    ),
    Phase(
        id=PhaseId.FEELINGS,
        name="Gevoelens",
        icon="💭",
        color="purple",
        description="Wat dacht en voelde je?",
        questions=(
            "Hoe voelde je je tijdens deze situatie?",
            "Welke emoties kwamen er bij je op?",
            "Wat ging er door je hoofd toen dit gebeurde?",
        ),
    ),
    Phase(
        id=PhaseId.EVALUATION,
        name="Evaluatie",
        icon="⚖️",
        color="green",
        description="Wat ging goed en wat minder goed?",
        questions=(
            "Wat ging er goed in deze situatie?",
            "Wat had beter gekund?",
            "Hoe reageerden de leerlingen op jouw aanpak?",
        ),
    ),
    Phase(
        id=PhaseId.ANALYSIS,
        name="Analyse",
        icon="🔍",
        color="orange",
        description="Hoe kun je de situatie verklaren?",
        questions=(
            "Waarom denk je dat deze situatie zo verliep?",
            "Welke factoren speelden een rol?",
            "Wat was de onderliggende oorzaak van het gedragsprobleem?",
        ),
    ),
    Phase(
        id=PhaseId.CONCLUSION,
        name="Conclusie",
        icon="💡",
        color="teal",
        description="Wat heb je geleerd?",
        questions=(
            "Wat heb je geleerd van deze ervaring?",
            "Welke inzichten heb je gekregen?",
            "Wat zou je anders doen als dit opnieuw gebeurt?",
        ),
    ),
    Phase(
        id=PhaseId.ACTION,
        name="Actieplan",
        icon="🎯",
        color="red",
        description="Wat ga je de volgende keer doen?",
        questions=(
            "Welke concrete stappen ga je nemen?",
            "Hoe ga je dit toepassen in je volgende les?",
            "Welke vaardigheden wil je verder ontwikkelen?",
        ),
    ),
)

_PHASES_BY_ID: Dict[PhaseId, Phase] = {p.id: p for p in PHASES}
_PHASE_ORDER: List[PhaseId] = [p.id for p in PHASES]

FIRST_PHASE: PhaseId = PHASES[0].id


def phase_ids() -> List[PhaseId]:
    """All phase ids in cycle order."""
    return list(_PHASE_ORDER)


def get_phase(phase_id: PhaseId) -> Phase:
    """Look up a phase. A KeyError here means a bad cursor (programming defect)."""
    return _PHASES_BY_ID[PhaseId(phase_id)]


def next_phase(current: PhaseId) -> PhaseId:
    """Cyclic successor: action wraps around to description."""
    idx = _PHASE_ORDER.index(PhaseId(current))
    return _PHASE_ORDER[(idx + 1) % len(_PHASE_ORDER)]
