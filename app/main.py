"""
IDX Screener terminal entry point.

Launch with:
    streamlit run app/main.py
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Any

# ── make the repo root and src/ importable ────────────────────────────────────
_REPO_ROOT = Path(__file__).parent.parent
for _p in [str(_REPO_ROOT), str(_REPO_ROOT / "src")]:
    if _p not in sys.path:
        sys.path.insert(0, _p)

import streamlit as st  # noqa: E402  (after sys.path patch)

st.set_page_config(
    page_title="IDX Screener",
    page_icon="📟",
    layout="wide",
    initial_sidebar_state="expanded",
)

from app.charts import score_histogram, sector_breakdown  # noqa: E402
from app.layout import render_sidebar  # noqa: E402
from app.services import get_session, get_settings, poll_fetch, start_fetch  # noqa: E402
from app.ui import ACCENT, INFO, SUCCESS, badge, empty_state, metric_row, page_header  # noqa: E402
from app.utils import css_span, pick_is_stale  # noqa: E402
from idx_screener.common import Action, FetchStatus, Preset, SortDirection, SortField  # noqa: E402
from idx_screener.display import (  # noqa: E402
    build_detail,
    build_numeric_frame,
    build_table_frame,
    format_change,
    format_price,
)
from idx_screener.engines import FilterState, KeyCommand, preset_catalog  # noqa: E402

settings = get_settings()
session = get_session()

# ── widget state ───────────────────────────────────────────────────────────────
_SS_DEFAULTS: dict[str, Any] = {
    "idx_search": "",
    "idx_sectors": [],
    "idx_sub_sectors": [],
    "idx_tags": [],
    "idx_score_range": (0.0, 100.0),
    "idx_table_pick": None,
}
for _k, _v in _SS_DEFAULTS.items():
    if _k not in st.session_state:
        st.session_state[_k] = _v
# Bumped to remount the table so a stale row selection is dropped.
st.session_state.setdefault("idx_table_gen", 0)


def _reset_widgets() -> None:
    for key, value in _SS_DEFAULTS.items():
        st.session_state[key] = value


def _press(key: str) -> None:
    result = session.handle_key(key)
    if result.command is KeyCommand.CLEAR_FILTERS:
        _reset_widgets()


# ── fetch lifecycle ────────────────────────────────────────────────────────────
refresh_clicked = render_sidebar(session, settings)
if session.status is FetchStatus.IDLE or refresh_clicked:
    start_fetch(session)

if poll_fetch(session):
    page_header("IDX SCREENER", "Equity screening terminal", "loading…")
    with st.spinner("Loading latest snapshot…"):
        time.sleep(0.3)
    st.rerun()

snapshot = session.snapshot
page_header(
    "IDX SCREENER",
    "Equity screening terminal",
    f"SNAPSHOT {snapshot.date}" if snapshot is not None and snapshot.date else "",
)

if snapshot is None:
    if session.status is FetchStatus.FAILED:
        st.error(f"Snapshot unavailable: {session.error}")
    else:
        empty_state("LOADING SNAPSHOT", "Waiting for the first fetch to finish")
    st.stop()

if session.status is FetchStatus.FAILED:
    st.warning(f"Refresh failed, showing the previous snapshot: {session.error}")

if snapshot.is_empty:
    empty_state("NO DATA", "The snapshot store has no dated records")
    st.stop()

vocab = snapshot.vocabulary

# ═══════════════════════════════════════════════════════════════════════════════
# TOP BAR
# ═══════════════════════════════════════════════════════════════════════════════
bar_search, bar_sector, bar_sub, bar_tag = st.columns([2, 2, 2, 1])
with bar_search:
    search = st.text_input("Search", key="idx_search", placeholder="Code or name  (F)")
with bar_sector:
    sectors = st.multiselect("Sector", options=list(vocab.sectors), key="idx_sectors", placeholder="All sectors")
if frozenset(sectors) != session.filters.sectors:
    st.session_state["idx_sub_sectors"] = []
with bar_sub:
    sub_options = vocab.sub_sectors_for(snapshot.records, sectors)
    st.session_state["idx_sub_sectors"] = [s for s in st.session_state["idx_sub_sectors"] if s in sub_options]
    sub_sectors = st.multiselect("Sub-sector", options=list(sub_options), key="idx_sub_sectors", placeholder="All")
with bar_tag:
    tags = st.multiselect("Tag", options=list(vocab.tags), key="idx_tags", placeholder="All")

score_col, action_col, clear_col = st.columns([3, 3, 1])
with score_col:
    score_range = st.slider("Score", 0.0, 100.0, key="idx_score_range", step=1.0)
with action_col:
    st.markdown("**Action**")
    action_buttons = st.columns(len(Action))
    for col, action in zip(action_buttons, Action):
        with col:
            active = action in session.filters.actions
            if st.button(action.value, key=f"idx_act_{action.value}", type="primary" if active else "secondary", use_container_width=True):
                session.toggle_action(action)
                st.rerun()
with clear_col:
    st.markdown("&nbsp;", unsafe_allow_html=True)
    st.button("Clear (Esc)", key="idx_clear", use_container_width=True, on_click=_press, args=("Escape",))

preset_cols = st.columns(len(Preset))
for col, preset in zip(preset_cols, preset_catalog()):
    with col:
        active = session.filters.preset is not None and session.filters.preset.value == preset["id"]
        if st.button(
            f"{preset['label']} · {preset['description']}",
            key=f"idx_preset_{preset['id']}",
            type="primary" if active else "secondary",
            use_container_width=True,
        ):
            session.toggle_preset(preset["id"])
            st.rerun()

wanted = FilterState(
    search=search,
    sectors=sectors,
    sub_sectors=sub_sectors,
    tags=tags,
    actions=session.filters.actions,
    score_range=score_range,
    preset=session.filters.preset,
)
if wanted != session.filters:
    session.apply_filters(wanted)

view = session.view
metric_row([
    {"label": "Universe", "value": str(len(snapshot)), "color": INFO},
    {"label": "In view", "value": str(len(view)), "color": ACCENT},
    {"label": "BUY", "value": str(sum(1 for r in view if r.action is Action.BUY)), "color": SUCCESS},
    {"label": "Focused", "value": session.selected.code or "-"},
])

if session.is_no_match:
    empty_state("NO MATCHING STOCKS", "Relax filters")
    st.stop()

# ═══════════════════════════════════════════════════════════════════════════════
# LAYOUT: table | detail
# ═══════════════════════════════════════════════════════════════════════════════
table_col, detail_col = st.columns([3, 1.3], gap="medium")

with table_col:
    # ── sort ──────────────────────────────────────────────────────────────────
    sort_cols = st.columns(len(SortField))
    for col, field in zip(sort_cols, SortField):
        with col:
            active = session.sort.field is field
            arrow = (" ▼" if session.sort.direction is SortDirection.DESC else " ▲") if active else ""
            if st.button(f"{field.value}{arrow}", key=f"idx_sort_{field.value}", type="primary" if active else "secondary", use_container_width=True):
                session.toggle_sort(field)
                st.rerun()

    # ── navigation ────────────────────────────────────────────────────────────
    nav = st.columns([1, 1, 1, 1, 1, 3])
    if nav[0].button("▲ Up", key="idx_up", use_container_width=True):
        _press("ArrowUp")
        st.rerun()
    if nav[1].button("▼ Down", key="idx_down", use_container_width=True):
        _press("ArrowDown")
        st.rerun()
    if nav[2].button("⏎ Open", key="idx_enter", use_container_width=True):
        _press("Enter")
        st.rerun()
    if nav[3].button("⇞ Page", key="idx_pgup", use_container_width=True):
        session.scroll(session.window.offset - session.window.viewport)
        st.rerun()
    if nav[4].button("⇟ Page", key="idx_pgdn", use_container_width=True):
        session.scroll(session.window.offset + session.window.viewport)
        st.rerun()

    # ── windowed table ────────────────────────────────────────────────────────
    rows = [record for item, record in session.visible_rows()]
    window = session.window.range()
    nav[5].caption(f"rows {window.start + 1}–{window.end + 1} of {len(view)} materialized")

    frame = build_table_frame(rows, sort_field=session.sort.field, direction=session.sort.direction)
    focused_code = session.selected.code

    def _highlight(row):
        hit = rows[row.name].code == focused_code
        return [f"background-color: {ACCENT}33" if hit else "" for _ in row]

    if pick_is_stale(st.session_state["idx_table_pick"], focused_code):
        st.session_state["idx_table_pick"] = None
        st.session_state["idx_table_gen"] += 1

    event = st.dataframe(
        frame.style.apply(_highlight, axis=1),
        use_container_width=True,
        hide_index=True,
        height=int(settings.viewport_height),
        on_select="rerun",
        selection_mode="single-row",
        key=f"idx_table_{st.session_state['idx_table_gen']}",
    )
    picked_rows = event.selection.rows if event is not None else []
    if picked_rows and picked_rows[0] < len(rows):
        picked_code = rows[picked_rows[0]].code
        if picked_code != st.session_state["idx_table_pick"]:
            st.session_state["idx_table_pick"] = picked_code
            session.select(picked_code)
            st.rerun()

    with st.expander("Distribution", expanded=False):
        numeric = build_numeric_frame(view)
        focused = session.selected.record
        st.plotly_chart(score_histogram(numeric, focused.score if focused else None), use_container_width=True)
        st.plotly_chart(sector_breakdown(numeric), use_container_width=True)

# ═══════════════════════════════════════════════════════════════════════════════
# DETAIL PANEL
# ═══════════════════════════════════════════════════════════════════════════════
with detail_col:
    record = session.confirmed if session.confirmed is not None and session.confirmed.code in view else session.selected.record
    if record is None:
        empty_state("SELECT A STOCK", "Use ↑↓ or click a row")
    else:
        detail = build_detail(
            record,
            currency_prefix=settings.currency_prefix,
            top_shareholders=settings.top_shareholders,
        )
        head = detail.header
        change = format_change(record.change, record.previous)
        st.markdown(
            f'<div class="idx-mono" style="font-size:1.5rem; font-weight:700; color:{ACCENT};">{head.code} '
            f'{css_span(head.score, head.score_class)} {badge(head.action, head.action_badge)}</div>'
            f'<div class="idx-subtitle">{head.name}</div>'
            f'<div class="idx-subtitle">{head.sector} | {head.sub_sector}</div>'
            f'<div class="idx-mono">{format_price(record.price)} {css_span(change.text + " " + change.pct, change.css_class)}</div>',
            unsafe_allow_html=True,
        )
        if head.warnings:
            st.markdown(" ".join(badge(w.text, w.css_class) for w in head.warnings), unsafe_allow_html=True)
        for section in detail.sections:
            body = "".join(
                f'<div class="metric-row"><span class="label">{row.label}</span>'
                f'<span class="value {row.css_class}">{row.value}</span></div>'
                for row in section.rows
            )
            body += "".join(f'<span class="chip">{chip}</span>' for chip in section.chips)
            st.markdown(f'<div class="section-header">{section.title}</div>{body}', unsafe_allow_html=True)
