"""
Plotly chart of progress through the reflective cycle.

Returns Plotly JSON for client-side rendering.
"""

from __future__ import annotations

from typing import Iterable

import plotly.graph_objects as go

from ..content.phases import PHASES, PhaseId

STATUS_COLORS = {
    "completed": "#2ECC71",
    "active": "#4A90D9",
    "open": "rgba(200, 200, 200, 0.5)",
}

STATUS_LABELS = {
    "completed": "✓ Voltooid",
    "active": "● Actief",
    "open": "",
}


def phase_status(phase_id: PhaseId, completed: Iterable[PhaseId], current: PhaseId) -> str:
    if phase_id in set(completed):
        return "completed"
    if phase_id == current:
        return "active"
    return "open"


def create_progress_chart(
    completed: Iterable[PhaseId],
    current: PhaseId,
    title: str = "Reflectie Voortgang",
) -> str:
    """
    Create a six-bar chart, one bar per phase, coloured by status.

    Args:
        completed: Completed phase ids
        current: Phase the cursor points at
        title: Chart title

    Returns:
        JSON string for Plotly.js rendering
    """
    completed = set(completed)
    labels = [f"{p.icon} {p.name}" for p in PHASES]
    statuses = [phase_status(p.id, completed, current) for p in PHASES]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=labels,
        y=[1] * len(PHASES),
        marker=dict(color=[STATUS_COLORS[s] for s in statuses]),
        text=[STATUS_LABELS[s] for s in statuses],
        textposition="inside",
        hovertemplate="%{x}: %{text}<extra></extra>",
        name="Fasen",
    ))

    fig.update_layout(
        title=dict(text=f"{title} ({len(completed)}/{len(PHASES)})", x=0.5, font=dict(size=16)),
        yaxis=dict(visible=False, range=[0, 1]),
        xaxis=dict(tickangle=0),
        showlegend=False,
        bargap=0.15,
        paper_bgcolor="rgba(0, 0, 0, 0)",
        plot_bgcolor="rgba(0, 0, 0, 0)",
        margin=dict(t=60, b=40, l=20, r=20),
        height=220,
    )

    return fig.to_json()
