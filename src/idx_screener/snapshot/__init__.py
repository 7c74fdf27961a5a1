"""Snapshot accessors and the immutable snapshot model."""

from __future__ import annotations

from .models import Snapshot, Vocabulary
from .store import (
    FileSnapshotStore,
    InMemorySnapshotStore,
    SnapshotAccessor,
    latest_snapshot_from_records,
    open_store,
    records_from_frame,
)

__all__ = [
    "FileSnapshotStore",
    "InMemorySnapshotStore",
    "Snapshot",
    "SnapshotAccessor",
    "Vocabulary",
    "latest_snapshot_from_records",
    "open_store",
    "records_from_frame",
]
