"""
Plotly chart builders for the IDX Screener terminal.

Figures take the numeric frame from ``idx_screener.display.build_numeric_frame``
so the charts always reflect the current screen view.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from app.ui import ACCENT, ACTION_COLORS, TEXT_MUTED, base_fig


def score_histogram(frame: pd.DataFrame, selected_score: float | None = None, bins: int = 20) -> go.Figure:
    """
    Stacked histogram of scores per action, with the focused stock marked.

    Args:
        frame: Numeric frame with ``score`` and ``action`` columns.
        selected_score: Score of the focused stock, drawn as a vertical line.
        bins: Number of equal-width bins over ``[0, 100]``.
    """
    fig = base_fig("Score distribution", height=260)
    if frame.empty or "score" not in frame.columns:
        return fig

    edges = np.linspace(0.0, 100.0, bins + 1)
    centers = (edges[:-1] + edges[1:]) / 2
    actions = frame["action"].fillna("N/A")
    for action in ["BUY", "HOLD", "AVOID", "N/A"]:
        scores = pd.to_numeric(frame.loc[actions == action, "score"], errors="coerce").dropna()
        if scores.empty:
            continue
        counts, _ = np.histogram(scores.clip(0.0, 100.0), bins=edges)
        fig.add_trace(
            go.Bar(
                x=centers,
                y=counts,
                width=edges[1] - edges[0],
                name=action,
                marker_color=ACTION_COLORS.get(action, TEXT_MUTED),
                hovertemplate=f"<b>{action}</b><br>score %{{x:.0f}}<br>%{{y}} stocks<extra></extra>",
            )
        )
    if selected_score is not None:
        fig.add_vline(x=selected_score, line_color=ACCENT, line_width=2, line_dash="dot")
    fig.update_layout(barmode="stack", bargap=0.05, showlegend=True)
    fig.update_xaxes(range=[0, 100], title_text="score")
    fig.update_yaxes(title_text="stocks")
    return fig


def sector_breakdown(frame: pd.DataFrame, top_n: int = 12) -> go.Figure:
    """Horizontal bar of stock counts per sector for the current view."""
    fig = base_fig("Sectors in view", height=320)
    if frame.empty or "sector" not in frame.columns:
        return fig
    counts = frame["sector"].replace("", "Unclassified").value_counts().head(top_n).sort_values()
    fig.add_trace(
        go.Bar(
            x=counts.values.tolist(),
            y=counts.index.tolist(),
            orientation="h",
            marker_color=ACCENT,
            hovertemplate="%{y}: %{x}<extra></extra>",
        )
    )
    fig.update_layout(showlegend=False)
    return fig


__all__ = ["score_histogram", "sector_breakdown"]
