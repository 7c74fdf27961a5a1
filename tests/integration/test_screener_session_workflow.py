"""
Integration test: synthetic snapshot file -> store -> session -> display.

Writes a two-day snapshot with the sample generator, loads it through the
file store in every supported format and drives a session the way the
terminal does.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from idx_screener.common import Action, FetchStatus, SortDirection, SortField
from idx_screener.display import build_detail, build_table_frame
from idx_screener.engines import ScreenerSession
from idx_screener.snapshot import open_store
from scripts.build_sample_snapshot import build_rows, write_rows

N_STOCKS = 300


@pytest.fixture(scope="module")
def rows() -> list[dict]:
    rng = np.random.default_rng(seed=7)
    return build_rows(N_STOCKS, "2024-06-02", rng) + build_rows(N_STOCKS, "2024-06-03", rng)


@pytest.fixture(params=["snapshot.json", "snapshot.jsonl", "snapshot.csv", "snapshot.parquet"])
def snapshot_path(request, rows, tmp_path) -> Path:
    path = tmp_path / request.param
    write_rows(rows, path)
    return path


def test_every_format_loads_latest_date(snapshot_path) -> None:
    snapshot = open_store(snapshot_path).fetch_latest_snapshot()
    assert snapshot.date == "2024-06-03"
    assert len(snapshot) == N_STOCKS
    assert snapshot.vocabulary.sectors
    assert list(snapshot.vocabulary.sectors) == sorted(snapshot.vocabulary.sectors)

    with_holders = [r for r in snapshot.records if r.shareholders]
    assert with_holders
    assert all(r.indexes for r in snapshot.records)


def test_full_screening_workflow(snapshot_path) -> None:
    session = ScreenerSession(open_store(snapshot_path), row_height=32, viewport_height=320, overscan=4)
    assert session.refresh() is FetchStatus.READY
    assert len(session.view) == N_STOCKS
    assert session.selected.index == 0

    # Sort by score, highest first.
    session.toggle_sort(SortField.SCORE)
    scores = [r.score or 0 for r in session.view]
    assert scores == sorted(scores, reverse=True)

    # Walk down past the first page; the window keeps the focus visible.
    for _ in range(30):
        session.handle_key("ArrowDown")
    assert session.selected.index == 30
    assert 30 in session.window.range()
    assert session.window.is_fully_visible(30)
    focused_code = session.selected.code

    # Re-sorting ascending keeps the same stock focused at its new position.
    session.toggle_sort(SortField.SCORE)
    assert session.sort.direction is SortDirection.ASC
    assert session.selected.code == focused_code
    assert session.view[session.selected.index].code == focused_code
    assert session.window.is_fully_visible(session.selected.index)

    # Narrow to one sector and BUY only.
    sector = session.snapshot.vocabulary.sectors[0]
    session.set_sectors([sector])
    session.toggle_action(Action.BUY)
    assert all(r.sector == sector and r.action is Action.BUY for r in session.view)
    if not session.view.is_empty:
        assert session.selected.code in session.view

    # Strong-buy preset.
    session.clear_filters()
    session.toggle_preset("strong-buy")
    assert all(r.score is not None and r.score >= 80 for r in session.view)

    # Escape clears everything.
    session.handle_key("Escape")
    assert session.filters.is_default
    assert len(session.view) == N_STOCKS

    # The display layer renders the materialized rows and the focused record.
    rows = [record for _, record in session.visible_rows()]
    frame = build_table_frame(rows, sort_field=session.sort.field, direction=session.sort.direction)
    assert len(frame) == len(session.window.range())
    assert "SCR ▲" in frame.columns

    detail = build_detail(session.selected.record)
    assert detail.header.code == session.selected.code
    assert detail.section("Ownership").rows
