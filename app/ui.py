"""
Design-system helpers for the IDX Screener terminal.

Provides:
    - inject_global_css()  : single CSS injection for the entire app
    - page_header()        : standard page header with optional right slot
    - metric_row()         : row of styled metric tiles
    - empty_state()        : empty/placeholder state
    - badge()              : inline coloured badge
    - base_fig()           : Plotly figure pre-styled with the design system
"""

from __future__ import annotations

from typing import Any

import plotly.graph_objects as go
import streamlit as st

# ═══════════════════════════════════════════════════════════════════════════════
# DESIGN TOKENS
# ═══════════════════════════════════════════════════════════════════════════════

BG_BASE = "#0A0E14"
BG_SURFACE = "#11161F"
BG_HEADER = "#1E2530"
BORDER_DEFAULT = "#263040"

TEXT_PRIMARY = "#E6E6E6"
TEXT_SECONDARY = "#A0A8B8"
TEXT_MUTED = "#6B7588"

ACCENT = "#FF6B00"
SUCCESS = "#00C97A"
WARNING = "#F0C040"
DANGER = "#FF3B5C"
INFO = "#3BA7FF"

ACTION_COLORS: dict[str, str] = {
    "BUY": SUCCESS,
    "HOLD": WARNING,
    "AVOID": DANGER,
}

FONT_SANS = "'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif"
FONT_MONO = "'JetBrains Mono', 'Roboto Mono', 'Fira Code', 'SF Mono', monospace"


# ═══════════════════════════════════════════════════════════════════════════════
# GLOBAL CSS INJECTION
# ═══════════════════════════════════════════════════════════════════════════════

_GLOBAL_CSS = f"""
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=JetBrains+Mono:wght@400;500;700&display=swap');

html, body, .stApp {{
    font-family: {FONT_SANS} !important;
    background-color: {BG_BASE} !important;
    color: {TEXT_PRIMARY} !important;
}}
.block-container {{
    padding-top: 1.2rem !important;
    padding-bottom: 1rem !important;
    max-width: 1600px !important;
}}
[data-testid="stDataFrame"] td, code, pre, .idx-mono {{
    font-family: {FONT_MONO} !important;
}}

/* ── page header ───────────────────────────────────────────────────────────── */
.idx-page-header {{
    display: flex; justify-content: space-between; align-items: flex-end;
    border-bottom: 1px solid {BORDER_DEFAULT}; padding-bottom: 8px; margin-bottom: 12px;
}}
.idx-title {{ font-size: 1.4rem; font-weight: 700; color: {ACCENT}; letter-spacing: 1px; }}
.idx-subtitle {{ font-size: 0.8rem; color: {TEXT_MUTED}; }}
.idx-right {{ font-family: {FONT_MONO}; color: {TEXT_SECONDARY}; font-size: 0.85rem; }}

/* ── metric tiles ──────────────────────────────────────────────────────────── */
.idx-metric-strip {{ display: flex; gap: 8px; margin-bottom: 10px; }}
.idx-metric-tile {{
    flex: 1; background: {BG_SURFACE}; border: 1px solid {BORDER_DEFAULT};
    border-left: 3px solid var(--accent-color, {BORDER_DEFAULT}); padding: 8px 12px;
}}
.idx-metric-label {{ font-size: 0.65rem; text-transform: uppercase; letter-spacing: 1.4px; color: {TEXT_MUTED}; }}
.idx-metric-value {{ font-family: {FONT_MONO}; font-size: 1.2rem; font-weight: 700; color: {TEXT_PRIMARY}; }}

/* ── empty state ───────────────────────────────────────────────────────────── */
.idx-empty-state {{ text-align: center; padding: 48px 16px; color: {TEXT_MUTED}; }}
.idx-empty-title {{ font-size: 1.1rem; font-weight: 600; margin-bottom: 6px; }}
.idx-empty-hint {{ font-size: 0.85rem; }}

/* ── detail panel ──────────────────────────────────────────────────────────── */
.section-header {{
    background: {BG_HEADER}; color: {ACCENT}; font-size: 0.7rem; font-weight: 700;
    text-transform: uppercase; letter-spacing: 1.2px; padding: 4px 10px; margin-top: 10px;
}}
.metric-row {{
    display: flex; justify-content: space-between; padding: 3px 10px;
    border-bottom: 1px solid {BORDER_DEFAULT}; font-size: 0.82rem;
}}
.metric-row .label {{ color: {TEXT_MUTED}; }}
.metric-row .value {{ font-family: {FONT_MONO}; color: {TEXT_PRIMARY}; }}
.chip {{
    display: inline-block; font-size: 0.7rem; padding: 2px 8px; margin: 2px;
    background: {BG_HEADER}; border: 1px solid {BORDER_DEFAULT};
}}

/* ── value tones ───────────────────────────────────────────────────────────── */
.text-good, .text-up, .trend-up, .score-high {{ color: {SUCCESS} !important; }}
.text-warn, .score-mid {{ color: {WARNING} !important; }}
.text-bad, .text-down, .trend-down, .score-low {{ color: {DANGER} !important; }}
.text-info {{ color: {INFO} !important; }}

/* ── badges ────────────────────────────────────────────────────────────────── */
.badge {{ font-size: 0.7rem; font-weight: 700; padding: 2px 8px; border-radius: 2px; }}
.badge-buy {{ background: {SUCCESS}33; color: {SUCCESS}; }}
.badge-hold {{ background: {WARNING}33; color: {WARNING}; }}
.badge-avoid {{ background: {DANGER}33; color: {DANGER}; }}
.badge-warn {{ background: {WARNING}22; color: {WARNING}; }}
.badge-info {{ background: {INFO}22; color: {INFO}; }}
.badge-good {{ background: {SUCCESS}22; color: {SUCCESS}; }}
.badge-bad {{ background: {DANGER}22; color: {DANGER}; }}
</style>
"""


def inject_global_css() -> None:
    """Inject the global design-system CSS. Call once per page."""
    st.markdown(_GLOBAL_CSS, unsafe_allow_html=True)


# ═══════════════════════════════════════════════════════════════════════════════
# LAYOUT COMPONENTS
# ═══════════════════════════════════════════════════════════════════════════════


def page_header(title: str, subtitle: str = "", right_slot: str = "") -> None:
    """
    Render a standardised page header.

    Args:
        title: Page title.
        subtitle: Muted subtitle text below the title.
        right_slot: Optional HTML for the right-aligned slot (snapshot date).
    """
    right_html = f'<div class="idx-right">{right_slot}</div>' if right_slot else ""
    st.markdown(
        f'<div class="idx-page-header">'
        f'<div><div class="idx-title">{title}</div><div class="idx-subtitle">{subtitle}</div></div>'
        f"{right_html}"
        f"</div>",
        unsafe_allow_html=True,
    )


def metric_row(metrics: list[dict[str, str]]) -> None:
    """
    Render a horizontal row of metric tiles.

    Each item needs ``label`` and ``value``; ``color`` sets the left accent.
    """
    tiles_html = ""
    for m in metrics:
        accent = m.get("color", "")
        accent_style = f'style="--accent-color: {accent};"' if accent else ""
        tiles_html += (
            f'<div class="idx-metric-tile" {accent_style}>'
            f'<div class="idx-metric-label">{m["label"]}</div>'
            f'<div class="idx-metric-value">{m["value"]}</div>'
            f"</div>"
        )
    st.markdown(f'<div class="idx-metric-strip">{tiles_html}</div>', unsafe_allow_html=True)


def empty_state(title: str, hint: str = "") -> None:
    hint_html = f'<div class="idx-empty-hint">{hint}</div>' if hint else ""
    st.markdown(
        f'<div class="idx-empty-state"><div class="idx-empty-title">{title}</div>{hint_html}</div>',
        unsafe_allow_html=True,
    )


def badge(text: str, css_class: str) -> str:
    """Return an HTML string for an inline badge."""
    return f'<span class="badge {css_class}">{text}</span>'


# ═══════════════════════════════════════════════════════════════════════════════
# PLOTLY CHART THEME
# ═══════════════════════════════════════════════════════════════════════════════

PLOTLY_TEMPLATE: dict[str, Any] = dict(
    template="plotly_dark",
    margin=dict(l=16, r=16, t=40, b=16),
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(family=FONT_SANS, color=TEXT_SECONDARY, size=11),
    legend=dict(bgcolor="rgba(0,0,0,0)", font=dict(size=10, color=TEXT_SECONDARY)),
)

_AXIS_STYLE = dict(
    showgrid=True,
    gridcolor=BORDER_DEFAULT,
    zeroline=False,
    tickfont=dict(family=FONT_MONO, size=10, color=TEXT_MUTED),
)


def base_fig(title: str = "", height: int | None = None) -> go.Figure:
    """Create a new empty Figure pre-styled with the design-system theme."""
    fig = go.Figure()
    layout = dict(PLOTLY_TEMPLATE, title=dict(text=title, x=0))
    if height is not None:
        layout["height"] = height
    fig.update_layout(**layout)
    fig.update_xaxes(**_AXIS_STYLE)
    fig.update_yaxes(**_AXIS_STYLE)
    return fig


__all__ = [
    "ACCENT",
    "ACTION_COLORS",
    "BG_SURFACE",
    "DANGER",
    "INFO",
    "SUCCESS",
    "TEXT_MUTED",
    "WARNING",
    "badge",
    "base_fig",
    "empty_state",
    "inject_global_css",
    "metric_row",
    "page_header",
]
