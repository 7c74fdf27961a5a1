"""
Shared sidebar for the IDX Screener terminal.
"""

from __future__ import annotations

import streamlit as st

from app.ui import ACCENT, DANGER, SUCCESS, TEXT_MUTED, WARNING, inject_global_css
from idx_screener import __version__
from idx_screener.common import FetchStatus
from idx_screener.engines import ScreenerSession
from idx_screener.settings import ScreenerSettings

_STATUS_COLORS: dict[FetchStatus, str] = {
    FetchStatus.IDLE: TEXT_MUTED,
    FetchStatus.LOADING: WARNING,
    FetchStatus.READY: SUCCESS,
    FetchStatus.FAILED: DANGER,
}

_KEY_HELP = [
    ("↓ / ↑", "move focus"),
    ("Enter", "open detail"),
    ("Esc", "clear filters"),
    ("F", "focus search"),
]


def render_sidebar(session: ScreenerSession, settings: ScreenerSettings) -> bool:
    """Render logo, snapshot status and key help. Returns ``True`` when Refresh is clicked."""
    inject_global_css()
    with st.sidebar:
        st.markdown(
            f"""
            <div style="text-align:center; padding: 0.5rem 0 0.25rem 0;">
                <span style="font-size:1.4rem; font-weight:800; color:{ACCENT}; letter-spacing:1px;">
                    IDX SCREENER
                </span><br>
                <span style="font-size:0.72rem; color:{TEXT_MUTED}; letter-spacing:1px;">
                    INDONESIA STOCK EXCHANGE
                </span>
            </div>
            """,
            unsafe_allow_html=True,
        )

        st.divider()

        # ── snapshot status ───────────────────────────────────────────────────
        color = _STATUS_COLORS[session.status]
        date = session.snapshot.date if session.snapshot and session.snapshot.date else "-"
        st.markdown("**Snapshot**")
        st.markdown(
            f'<span style="color:{color}; font-weight:700;">● {session.status.value.upper()}</span>'
            f'&nbsp;&nbsp;<code>{date}</code>',
            unsafe_allow_html=True,
        )
        if session.error:
            st.caption(session.error)
        refresh = st.button(
            "⟳ Refresh",
            use_container_width=True,
            disabled=session.is_loading,
            key="idx_refresh",
        )

        st.divider()

        with st.expander("Keys", expanded=False):
            for key, meaning in _KEY_HELP:
                st.markdown(f"`{key}` {meaning}")

        with st.expander("Settings", expanded=False):
            st.markdown(f"**Env:** `{settings.environment}`")
            st.markdown(f"**File:** `{settings.snapshot_path}`")
            st.markdown(f"**Rows:** {settings.row_height:.0f}px · overscan {settings.overscan}")

        st.markdown(
            f"""
            <div style="text-align:center; color:{TEXT_MUTED}; font-size:0.72rem;
                        margin-top:1rem; padding-top:0.5rem;">
                v{__version__} &nbsp;·&nbsp; Powered by idx_screener
            </div>
            """,
            unsafe_allow_html=True,
        )
    return refresh


__all__ = ["render_sidebar"]
