"""
IDX Screener - equity screening over daily snapshots of the Indonesia Stock Exchange.

Loads the latest snapshot of precomputed stock metrics, narrows it with search,
category, action and preset filters, orders it, and keeps a keyboard-driven
selection and a virtualized render window in sync with the result.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .common import Action, Preset, SortDirection, SortField, StockRecord
from .engines import (
    FilterState,
    ScreenerError,
    ScreenerSession,
    ScreenView,
    SnapshotFetchError,
    SortState,
    apply,
    derive_view,
)
from .settings import ScreenerSettings, load_settings
from .snapshot import FileSnapshotStore, InMemorySnapshotStore, Snapshot, open_store

__all__ = [
    "Action",
    "FileSnapshotStore",
    "FilterState",
    "InMemorySnapshotStore",
    "Preset",
    "ScreenView",
    "ScreenerError",
    "ScreenerSession",
    "ScreenerSettings",
    "Snapshot",
    "SnapshotFetchError",
    "SortDirection",
    "SortField",
    "SortState",
    "StockRecord",
    "__version__",
    "apply",
    "derive_view",
    "load_settings",
    "open_store",
]
