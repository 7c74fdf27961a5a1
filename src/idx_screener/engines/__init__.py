from __future__ import annotations

from idx_screener.engines.errors import (
    FetchInProgressError,
    ScreenerError,
    ScreenerValidationError,
    SelectionMismatchError,
    SnapshotFetchError,
)
from idx_screener.engines.keyboard import BINDINGS, KeyCommand, KeyResult, dispatch
from idx_screener.engines.pipeline import (
    FilterState,
    ScreenView,
    SortState,
    apply,
    derive_view,
    sort_records,
)
from idx_screener.engines.presets import PRESET_RULES, PresetRule, preset_catalog, resolve_preset
from idx_screener.engines.render_window import RenderWindow, WindowRange, compute_range
from idx_screener.engines.selection import NONE, Selection, SelectionMachine
from idx_screener.engines.session import ScreenerSession

__all__ = [
    "BINDINGS",
    "FetchInProgressError",
    "FilterState",
    "KeyCommand",
    "KeyResult",
    "NONE",
    "PRESET_RULES",
    "PresetRule",
    "RenderWindow",
    "ScreenView",
    "ScreenerError",
    "ScreenerSession",
    "ScreenerValidationError",
    "Selection",
    "SelectionMachine",
    "SelectionMismatchError",
    "SnapshotFetchError",
    "SortState",
    "WindowRange",
    "apply",
    "compute_range",
    "derive_view",
    "dispatch",
    "preset_catalog",
    "resolve_preset",
    "sort_records",
]
