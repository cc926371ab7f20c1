"""Interactive Plotly charts for season rankings."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import plotly.express as px
import plotly.graph_objects as go
import plotly.io as pio

from .dataset import entries_to_frame, filter_club, group_by_club
from .models import Entry

logger = logging.getLogger(__name__)

RANK_LABEL = "Rank"
SCORE_LABEL = "Points scored"
MAX_SCORE_LABEL = "Max. points"


def _line(frame, *, title: str, y_label: str, color: Optional[str] = None, **kwargs):
    fig = px.line(
        frame.sort_values("rank", kind="stable"),
        x="rank",
        y="score",
        color=color,
        markers=True,
        hover_name="name",
        hover_data={"club": True, "rank": True, "score": ":.2f"},
        labels={"rank": RANK_LABEL, "score": y_label, "club": "Club"},
        **kwargs,
    )
    fig.update_layout(title=title, xaxis_title=RANK_LABEL, yaxis_title=y_label)
    return fig


def _empty_figure(title: str, name: str, y_label: str = SCORE_LABEL) -> go.Figure:
    fig = go.Figure(go.Scatter(x=[], y=[], mode="lines+markers", name=name))
    fig.update_layout(title=title, xaxis_title=RANK_LABEL, yaxis_title=y_label)
    return fig


def rank_score_figure(entries: Iterable[Entry], *, title: Optional[str] = None):
    """Score against rank for every athlete in *entries*."""

    frame = entries_to_frame(entries)
    if frame.empty:
        return _empty_figure(title or "All athletes", "All athletes")
    return _line(frame, title=title or "All athletes", y_label=SCORE_LABEL)


def club_figure(entries: Iterable[Entry], club: str):
    """Score against rank restricted to one club (exact, case-sensitive)."""

    title = f"Athletes of {club}"
    selected = filter_club(entries, club)
    if not selected:
        logger.warning("Club %r has no entries; rendering an empty chart", club)
        return _empty_figure(title, club)
    return _line(entries_to_frame(selected), title=title, y_label=SCORE_LABEL)


def clubs_comparison_figure(entries: Iterable[Entry]):
    """One toggle-able trace per club, ordered alphabetically."""

    groups = group_by_club(entries)
    title = "Clubs compared"
    if not groups:
        return _empty_figure(title, "No clubs", MAX_SCORE_LABEL)

    frame = entries_to_frame(entry for items in groups.values() for entry in items)
    fig = _line(
        frame,
        title=title,
        y_label=MAX_SCORE_LABEL,
        color="club",
        category_orders={"club": list(groups)},
    )
    fig.update_layout(legend_title_text="Club", legend=dict(itemclick="toggle"))
    return fig


def write_figure(fig, path: Path) -> Path:
    """Write *fig* as a standalone HTML page at *path*."""

    path.parent.mkdir(parents=True, exist_ok=True)
    pio.write_html(fig, file=str(path), include_plotlyjs="cdn")
    logger.info("Wrote %s", path.resolve())
    return path
