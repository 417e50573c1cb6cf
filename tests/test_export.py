"""Tests for export/transcript.py and viz/progress_chart.py."""

import json
from datetime import datetime, timezone

import pytest

from reflectbuddy.content.phases import PhaseId
from reflectbuddy.core.session import ReflectionSession
from reflectbuddy.export.transcript import (
    export_markdown,
    export_transcript,
    transcript_filename,
)
from reflectbuddy.llm.composer import ResponseComposer
from reflectbuddy.viz.progress_chart import create_progress_chart, phase_status


@pytest.fixture
def session():
    s = ReflectionSession(composer=ResponseComposer(seed=2))
    s.submit("ik voelde me heel gefrustreerd")
    s.submit("Ik was boos omdat de klas niet luisterde")
    return s


def _export(session, fmt):
    return export_transcript(
        session.messages,
        completed_count=len(session.state.completed_phases),
        badge_count=len(session.state.earned_badges),
        fmt=fmt,
    )


class TestMarkdownExport:
    def test_summary_and_speakers(self, session):
        md = _export(session, "markdown")
        assert md.startswith("# Reflectie met Reflectie-Buddy")
        assert "**Voltooide fasen:** 2/6" in md
        assert "**Behaalde badges:** 2" in md
        assert "**Jij**" in md
        assert "**Reflectie-Buddy**" in md
        assert "ik voelde me heel gefrustreerd" in md

    def test_badges_excluded(self, session):
        md = _export(session, "markdown")
        assert "Nieuwe badge" not in md

    def test_phase_names_shown(self, session):
        md = _export(session, "markdown")
        assert "Beschrijving" in md
        assert "Gevoelens" in md

    def test_fixed_date(self, session):
        when = datetime(2024, 3, 5, tzinfo=timezone.utc)
        md = export_markdown(session.messages, 2, 2, exported_at=when)
        assert "**Datum:** 05-03-2024" in md


class TestJsonExport:
    def test_structure(self, session):
        data = json.loads(_export(session, "json"))
        assert data["summary"] == {"completed_phases": 2, "total_phases": 6, "badges_earned": 2}
        roles = [m["role"] for m in data["messages"]]
        assert "badge" not in roles
        assert roles == ["assistant", "user", "assistant", "user", "assistant"]


class TestExportErrors:
    def test_unknown_format(self, session):
        with pytest.raises(ValueError):
            _export(session, "docx")

    def test_filename(self):
        when = datetime(2024, 3, 5, tzinfo=timezone.utc)
        assert transcript_filename("markdown", when) == "reflectie-2024-03-05.md"
        assert transcript_filename("json", when) == "reflectie-2024-03-05.json"


class TestProgressChart:
    def test_status(self):
        completed = {PhaseId.DESCRIPTION}
        assert phase_status(PhaseId.DESCRIPTION, completed, PhaseId.FEELINGS) == "completed"
        assert phase_status(PhaseId.FEELINGS, completed, PhaseId.FEELINGS) == "active"
        assert phase_status(PhaseId.ACTION, completed, PhaseId.FEELINGS) == "open"

    def test_chart_has_six_bars(self, session):
        chart = json.loads(create_progress_chart(
            session.state.completed_phases, session.state.current_phase
        ))
        bar = chart["data"][0]
        assert len(bar["x"]) == 6
        assert bar["text"][:3] == ["✓ Voltooid", "✓ Voltooid", "● Actief"]
        assert "(2/6)" in chart["layout"]["title"]["text"]
