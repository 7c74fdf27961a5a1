"""Screener session: the single-threaded update loop tying the engines together.

Each public method handles one input event completely (pipeline, selection and
render window) before returning. The snapshot fetch is the only asynchronous
boundary and is modelled as ``begin_fetch`` / ``complete_fetch`` /
``fail_fetch`` so that a host can run the accessor call elsewhere and hand the
result back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from idx_screener.common.enums import Action, FetchStatus, Preset, SortField
from idx_screener.common.records import StockRecord
from idx_screener.engines.errors import FetchInProgressError, SnapshotFetchError
from idx_screener.engines.keyboard import KeyCommand, KeyResult, dispatch
from idx_screener.engines.pipeline import FilterState, ScreenView, SortState, derive_view
from idx_screener.engines.render_window import RenderWindow, VirtualItem, WindowRange
from idx_screener.engines.selection import Selection, SelectionMachine
from idx_screener.snapshot.models import Snapshot

if TYPE_CHECKING:
    from idx_screener.settings import ScreenerSettings
    from idx_screener.snapshot.store import SnapshotAccessor

LOGGER = logging.getLogger("idx_screener.engines.session")


class ScreenerSession:
    def __init__(
        self,
        store: "SnapshotAccessor",
        *,
        row_height: float = 32.0,
        viewport_height: float = 640.0,
        overscan: int = 20,
    ) -> None:
        self.store = store
        self.status: FetchStatus = FetchStatus.IDLE
        self.error: str | None = None
        self.snapshot: Snapshot | None = None
        self.filters = FilterState()
        self.sort = SortState()
        self.view = ScreenView()
        self.selection = SelectionMachine()
        self.window = RenderWindow(0, estimate=row_height, viewport=viewport_height, overscan=overscan)
        self.search_focused = False
        self.confirmed: StockRecord | None = None

    @classmethod
    def from_settings(cls, store: "SnapshotAccessor", settings: "ScreenerSettings") -> "ScreenerSession":
        return cls(
            store,
            row_height=settings.row_height,
            viewport_height=settings.viewport_height,
            overscan=settings.overscan,
        )

    # ── fetch lifecycle ─────────────────────────────────────────────────────

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def has_snapshot(self) -> bool:
        return self.snapshot is not None

    @property
    def is_empty_snapshot(self) -> bool:
        """Fetch succeeded but the latest date holds no records."""
        return self.status is FetchStatus.READY and self.snapshot is not None and self.snapshot.is_empty

    @property
    def is_no_match(self) -> bool:
        """Snapshot has rows but the current filters exclude all of them."""
        return self.snapshot is not None and not self.snapshot.is_empty and self.view.is_empty

    def begin_fetch(self) -> None:
        if self.status is FetchStatus.LOADING:
            LOGGER.warning("Rejected snapshot fetch: another fetch is in flight")
            raise FetchInProgressError("A snapshot fetch is already in progress")
        self.status = FetchStatus.LOADING
        self.error = None
        LOGGER.info("Fetching latest snapshot")

    def complete_fetch(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self.status = FetchStatus.READY
        self.error = None
        LOGGER.info("Snapshot ready: date=%s records=%d", snapshot.date, len(snapshot.records))
        self._recompute()

    def fail_fetch(self, reason: str) -> None:
        # The previous snapshot, if any, stays in place.
        self.status = FetchStatus.FAILED
        self.error = reason
        LOGGER.error("Snapshot fetch failed: %s", reason)

    def refresh(self) -> FetchStatus:
        self.begin_fetch()
        try:
            snapshot = self.store.fetch_latest_snapshot()
        except SnapshotFetchError as exc:
            self.fail_fetch(str(exc))
            return self.status
        except Exception as exc:
            self.fail_fetch(str(exc) or exc.__class__.__name__)
            raise
        self.complete_fetch(snapshot)
        return self.status

    # ── filters & sort ──────────────────────────────────────────────────────

    def apply_filters(self, filters: FilterState) -> ScreenView:
        self.filters = filters
        return self._recompute()

    def set_search(self, text: str) -> ScreenView:
        return self.apply_filters(self.filters.with_search(text))

    def set_sectors(self, sectors: Iterable[str]) -> ScreenView:
        return self.apply_filters(self.filters.with_sectors(sectors))

    def set_sub_sectors(self, sub_sectors: Iterable[str]) -> ScreenView:
        return self.apply_filters(self.filters.with_sub_sectors(sub_sectors))

    def set_tags(self, tags: Iterable[str]) -> ScreenView:
        return self.apply_filters(self.filters.with_tags(tags))

    def set_actions(self, actions: Iterable[Action | str]) -> ScreenView:
        return self.apply_filters(self.filters.with_actions(actions))

    def toggle_action(self, action: Action | str) -> ScreenView:
        return self.apply_filters(self.filters.toggle_action(action))

    def set_score_range(self, low: float, high: float) -> ScreenView:
        return self.apply_filters(self.filters.with_score_range(low, high))

    def toggle_preset(self, preset: Preset | str) -> ScreenView:
        return self.apply_filters(self.filters.toggle_preset(preset))

    def clear_filters(self) -> ScreenView:
        return self.apply_filters(self.filters.cleared())

    def toggle_sort(self, field: SortField | str) -> ScreenView:
        self.sort = self.sort.toggled(field)
        return self._recompute()

    def set_sort(self, sort: SortState) -> ScreenView:
        self.sort = sort
        return self._recompute()

    # ── selection ───────────────────────────────────────────────────────────

    @property
    def selected(self) -> Selection:
        return self.selection.state

    def select(self, target: StockRecord | str, *, strict: bool = False) -> bool:
        accepted = self.selection.select(target, strict=strict)
        self._follow_selection()
        return accepted

    def move_down(self) -> Selection:
        state = self.selection.move_down()
        self._follow_selection()
        return state

    def move_up(self) -> Selection:
        state = self.selection.move_up()
        self._follow_selection()
        return state

    def confirm(self) -> StockRecord | None:
        self.confirmed = self.selection.confirm()
        return self.confirmed

    # ── keyboard & viewport ─────────────────────────────────────────────────

    def handle_key(self, key: str) -> KeyResult:
        result = dispatch(key, input_focused=self.search_focused)
        command = result.command
        if command is KeyCommand.MOVE_DOWN:
            self.move_down()
        elif command is KeyCommand.MOVE_UP:
            self.move_up()
        elif command is KeyCommand.CONFIRM:
            self.confirm()
        elif command is KeyCommand.CLEAR_FILTERS:
            self.clear_filters()
        elif command is KeyCommand.BLUR_INPUT:
            self.search_focused = False
        elif command is KeyCommand.FOCUS_SEARCH:
            self.search_focused = True
        return result

    def scroll(self, offset: float) -> WindowRange:
        self.window.scroll_to(offset)
        return self.window.range()

    def resize(self, viewport_height: float) -> WindowRange:
        self.window.set_viewport(viewport_height)
        self._follow_selection()
        return self.window.range()

    def visible_rows(self) -> list[tuple[VirtualItem, StockRecord]]:
        return [(item, self.view[item.index]) for item in self.window.virtual_items()]

    def summary(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "error": self.error,
            "date": self.snapshot.date if self.snapshot else None,
            "total": len(self.snapshot.records) if self.snapshot else 0,
            "filtered": len(self.view),
            "selected": self.selected.code,
            "selected_index": self.selected.index,
            "window": (self.window.range().start, self.window.range().end),
        }

    # ── internals ───────────────────────────────────────────────────────────

    def _recompute(self) -> ScreenView:
        self.view = derive_view(self.snapshot, self.filters, self.sort)
        self.selection.on_view_changed(self.view)
        self.window.set_count(len(self.view))
        self._follow_selection()
        return self.view

    def _follow_selection(self) -> None:
        state = self.selection.state
        if state.record is not None:
            self.window.scroll_to_index(state.index)
