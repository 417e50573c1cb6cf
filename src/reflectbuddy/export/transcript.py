"""
Transcript export for a reflection session.

Supports:
- Markdown: readable transcript with a short progress summary
- JSON: the same data, machine-readable

Badge notifications are left out; only the dialogue itself is exported.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..content.phases import get_phase, phase_ids
from ..core.session import Message, MessageRole

EXPORT_FORMATS = ("markdown", "json")

SPEAKER_LABELS = {
    MessageRole.USER: "Jij",
    MessageRole.ASSISTANT: "Reflectie-Buddy",
}


def _dialogue(messages: Sequence[Message]) -> List[Message]:
    return [m for m in messages if m.role != MessageRole.BADGE]


def _summary(completed_count: int, badge_count: int) -> Dict[str, Any]:
    return {
        "completed_phases": completed_count,
        "total_phases": len(phase_ids()),
        "badges_earned": badge_count,
    }


def export_markdown(
    messages: Sequence[Message],
    completed_count: int,
    badge_count: int,
    exported_at: Optional[datetime] = None,
) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    summary = _summary(completed_count, badge_count)

    lines = [
        "# Reflectie met Reflectie-Buddy",
        "",
        f"**Datum:** {exported_at.strftime('%d-%m-%Y')}",
        f"**Voltooide fasen:** {summary['completed_phases']}/{summary['total_phases']}",
        f"**Behaalde badges:** {summary['badges_earned']}",
        "",
        "---",
        "",
    ]
    for msg in _dialogue(messages):
        header = f"**{SPEAKER_LABELS[msg.role]}** ({msg.created_at.strftime('%H:%M')})"
        if msg.phase is not None:
            header += f" · {get_phase(msg.phase).name}"
        lines.append(header)
        lines.append("")
        lines.append(msg.content)
        lines.append("")

    return "\n".join(lines)


def export_json(
    messages: Sequence[Message],
    completed_count: int,
    badge_count: int,
    exported_at: Optional[datetime] = None,
) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    data = {
        "exported_at": exported_at.isoformat(),
        "summary": _summary(completed_count, badge_count),
        "messages": [m.to_dict() for m in _dialogue(messages)],
    }
    return json.dumps(data, ensure_ascii=False, indent=2)


def export_transcript(
    messages: Sequence[Message],
    completed_count: int,
    badge_count: int,
    fmt: str = "markdown",
) -> str:
    """Render a transcript in the requested format ("markdown" or "json")."""
    if fmt == "markdown":
        return export_markdown(messages, completed_count, badge_count)
    if fmt == "json":
        return export_json(messages, completed_count, badge_count)
    raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {EXPORT_FORMATS})")


def transcript_filename(fmt: str, exported_at: Optional[datetime] = None) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    extension = "md" if fmt == "markdown" else fmt
    return f"reflectie-{exported_at.strftime('%Y-%m-%d')}.{extension}"
