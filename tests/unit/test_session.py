"""Unit tests for idx_screener.engines.session."""

from __future__ import annotations

import pytest

from idx_screener.common import Action, FetchStatus, SortDirection, SortField
from idx_screener.engines import (
    FetchInProgressError,
    KeyCommand,
    ScreenerSession,
    SelectionMismatchError,
    SnapshotFetchError,
)
from idx_screener.settings import ScreenerSettings
from idx_screener.snapshot import InMemorySnapshotStore, Snapshot


class _FailingStore:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def fetch_latest_snapshot(self) -> Snapshot:
        raise self.exc


@pytest.fixture
def session(sample_store) -> ScreenerSession:
    s = ScreenerSession(sample_store)
    s.refresh()
    return s


def test_initial_state(sample_store) -> None:
    s = ScreenerSession(sample_store)
    assert s.status is FetchStatus.IDLE
    assert not s.has_snapshot
    assert s.view.is_empty
    assert s.selected.is_none
    assert not s.is_no_match


def test_refresh_loads_snapshot_and_focuses_first(session) -> None:
    assert session.status is FetchStatus.READY
    assert session.error is None
    assert len(session.view) == 5
    assert session.selected.code == "BBCA"
    assert session.window.count == 5


def test_begin_fetch_twice_is_rejected(sample_store) -> None:
    s = ScreenerSession(sample_store)
    s.begin_fetch()
    assert s.is_loading
    with pytest.raises(FetchInProgressError):
        s.begin_fetch()


def test_fetch_lifecycle_by_hand(sample_store, sample_snapshot) -> None:
    s = ScreenerSession(sample_store)
    s.begin_fetch()
    s.complete_fetch(sample_snapshot)
    assert s.status is FetchStatus.READY
    assert s.snapshot is sample_snapshot


def test_failed_refresh_keeps_previous_snapshot(session) -> None:
    previous = session.snapshot
    session.store = _FailingStore(SnapshotFetchError("store offline"))
    assert session.refresh() is FetchStatus.FAILED
    assert session.error == "store offline"
    assert session.snapshot is previous
    assert len(session.view) == 5


def test_unexpected_fetch_error_is_reraised() -> None:
    s = ScreenerSession(_FailingStore(RuntimeError("boom")))
    with pytest.raises(RuntimeError):
        s.refresh()
    assert s.status is FetchStatus.FAILED
    assert s.error == "boom"


def test_empty_snapshot_is_distinct_from_no_match(sample_store) -> None:
    s = ScreenerSession(InMemorySnapshotStore([]))
    s.refresh()
    assert s.is_empty_snapshot
    assert not s.is_no_match
    assert s.selected.is_none

    s = ScreenerSession(sample_store)
    s.refresh()
    s.set_search("nothing matches this")
    assert s.is_no_match
    assert not s.is_empty_snapshot
    assert s.selected.is_none


def test_filter_change_reresolves_selection(session) -> None:
    session.select("ADRO")
    session.set_actions([Action.BUY])
    assert session.view.codes == ["BBCA", "ADRO"]
    assert (session.selected.code, session.selected.index) == ("ADRO", 1)

    session.toggle_action(Action.BUY)
    session.toggle_action(Action.HOLD)
    assert session.view.codes == ["TLKM", "PANI"]
    assert session.selected.code == "TLKM"


def test_sort_follows_identity(session) -> None:
    session.select("PANI")
    session.toggle_sort(SortField.PBV)
    assert session.sort.direction is SortDirection.DESC
    assert session.selected.code == "PANI"
    assert session.selected.index == 0

    session.toggle_sort("pbv")
    assert session.sort.direction is SortDirection.ASC
    assert session.selected.index == 4


def test_sector_change_clears_sub_sectors(session) -> None:
    session.set_sectors(["Energy"])
    session.set_sub_sectors(["Oil, Gas & Coal"])
    assert session.view.codes == ["ADRO"]
    session.set_sectors(["Financials"])
    assert session.filters.sub_sectors == frozenset()
    assert session.view.codes == ["BBCA"]


def test_presets_tags_and_score_range(session) -> None:
    session.toggle_preset("strong-buy")
    assert session.view.codes == ["BBCA", "ADRO"]
    session.toggle_preset("strong-buy")
    assert session.filters.preset is None

    session.set_tags(["LQ45"])
    assert session.view.codes == ["BBCA", "TLKM"]
    session.set_score_range(75, 100)
    assert session.view.codes == ["BBCA"]
    session.clear_filters()
    assert len(session.view) == 5


def test_clear_filters_keeps_focus_when_still_visible(session) -> None:
    session.set_search("telkom")
    assert session.selected.code == "TLKM"
    session.clear_filters()
    assert (session.selected.code, session.selected.index) == ("TLKM", 1)


def test_keyboard_navigation(session) -> None:
    assert session.handle_key("ArrowDown").command is KeyCommand.MOVE_DOWN
    assert session.selected.code == "TLKM"
    session.handle_key("ArrowUp")
    session.handle_key("ArrowUp")
    assert session.selected.index == 0

    session.handle_key("ArrowDown")
    session.handle_key("Enter")
    assert session.confirmed.code == "TLKM"


def test_keyboard_respects_search_focus(session) -> None:
    session.set_search("a")
    session.handle_key("f")
    assert session.search_focused

    result = session.handle_key("ArrowDown")
    assert not result.consumed
    assert session.selected.index == 0

    session.handle_key("Escape")
    assert not session.search_focused
    assert session.filters.search == "a"

    session.handle_key("Escape")
    assert session.filters.is_default


def test_select_strict_and_lenient(session) -> None:
    assert session.select("TLKM") is True
    session.set_actions(["BUY"])
    assert session.select("TLKM") is False
    with pytest.raises(SelectionMismatchError):
        session.select("TLKM", strict=True)


def test_window_follows_selection(large_records) -> None:
    s = ScreenerSession(InMemorySnapshotStore(large_records), row_height=10, viewport_height=100, overscan=2)
    s.refresh()
    assert s.window.range().start == 0
    for _ in range(25):
        s.move_down()
    assert s.selected.index == 25
    assert s.window.is_fully_visible(25)
    assert s.window.offset == 160

    visible = s.visible_rows()
    assert [item.index for item, _ in visible] == list(s.window.range().indices())
    assert all(record is s.view[item.index] for item, record in visible)


def test_scroll_and_resize(large_records) -> None:
    s = ScreenerSession(InMemorySnapshotStore(large_records), row_height=32, viewport_height=640, overscan=20)
    s.refresh()
    window = s.scroll(3200)
    assert (window.start, window.end) == (80, 140)

    window = s.resize(320)
    # Focus is row 0, so resizing pulls the window back to it.
    assert s.window.offset == 0
    assert window.start == 0


def test_from_settings_and_summary(sample_store) -> None:
    settings = ScreenerSettings(row_height=20.0, viewport_height=200.0, overscan=3)
    s = ScreenerSession.from_settings(sample_store, settings)
    assert s.window.estimate == 20.0
    assert s.window.overscan == 3
    s.refresh()
    summary = s.summary()
    assert summary["status"] == "ready"
    assert summary["date"] == "2024-06-03"
    assert summary["total"] == 5
    assert summary["filtered"] == 5
    assert summary["selected"] == "BBCA"
    assert summary["window"] == (0, 4)


def test_unknown_sector_gives_empty_view_and_no_focus(session) -> None:
    session.set_sectors(["Mining"])
    assert session.view.is_empty
    assert session.selected.is_none
    assert session.is_no_match
    assert session.window.range().is_empty


def test_focused_record_excluded_by_sector_falls_back_to_first(make_record) -> None:
    store = InMemorySnapshotStore(
        [
            make_record("AAAA", sector="Energy"),
            make_record("BBBB", sector="Financials"),
            make_record("CCCC", sector="Energy"),
        ]
    )
    s = ScreenerSession(store)
    s.refresh()
    s.move_down()
    assert (s.selected.code, s.selected.index) == ("BBBB", 1)

    s.set_sectors(["Energy"])
    assert s.view.codes == ["AAAA", "CCCC"]
    assert (s.selected.code, s.selected.index) == ("AAAA", 0)
