"""Snapshot accessors.

An accessor returns the latest dated batch of stock records. Stores are passed
explicitly to the session; there is no module-level connection cache.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import pandas as pd

from idx_screener.common.records import StockRecord
from idx_screener.engines.errors import SnapshotFetchError
from idx_screener.snapshot.models import Snapshot

LOGGER = logging.getLogger("idx_screener.snapshot.store")

SUPPORTED_SUFFIXES = (".parquet", ".csv", ".json", ".jsonl", ".ndjson")


@runtime_checkable
class SnapshotAccessor(Protocol):
    def fetch_latest_snapshot(self) -> Snapshot:
        """Return the latest snapshot or raise ``SnapshotFetchError``."""


def _normalize_date(value: Any) -> str | None:
    if value is None or value == "":
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date().isoformat()


def _dedupe_codes(records: Iterable[StockRecord]) -> list[StockRecord]:
    out: list[StockRecord] = []
    seen: set[str] = set()
    for record in records:
        if record.code in seen:
            LOGGER.warning("Duplicate stock code %s in snapshot; keeping first row", record.code)
            continue
        seen.add(record.code)
        out.append(record)
    return out


def latest_snapshot_from_records(records: Iterable[StockRecord]) -> Snapshot:
    """Keep only the records of the most recent date, in their original order."""
    rows = list(records)
    dated = [(r, _normalize_date(r.date)) for r in rows]
    dates = [d for _, d in dated if d is not None]
    if not dates:
        return Snapshot.empty()
    latest = max(dates)
    batch = [r for r, d in dated if d == latest]
    return Snapshot.from_records(latest, _dedupe_codes(batch))


def records_from_frame(frame: pd.DataFrame) -> list[StockRecord]:
    if frame.empty:
        return []
    clean = frame.astype(object).where(frame.notna(), None)
    records: list[StockRecord] = []
    for row in clean.to_dict(orient="records"):
        try:
            records.append(StockRecord.from_mapping(row))
        except ValueError as exc:
            LOGGER.warning("Skipping malformed snapshot row: %s", exc)
    return records


class InMemorySnapshotStore:
    """Accessor over rows already held in memory (tests, demos, API payloads)."""

    def __init__(self, rows: Iterable[StockRecord | Mapping[str, Any]] = ()) -> None:
        self._records = [r if isinstance(r, StockRecord) else StockRecord.from_mapping(r) for r in rows]

    def replace(self, rows: Iterable[StockRecord | Mapping[str, Any]]) -> None:
        self._records = [r if isinstance(r, StockRecord) else StockRecord.from_mapping(r) for r in rows]

    def fetch_latest_snapshot(self) -> Snapshot:
        return latest_snapshot_from_records(self._records)


class FileSnapshotStore:
    """Accessor reading a snapshot table from parquet, CSV, JSON or JSON-lines.

    JSON files may be either a list of rows or the API envelope
    ``{"stocks": [...], "meta": {...}}``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read_frame(self) -> pd.DataFrame:
        suffix = self.path.suffix.lower()
        if suffix == ".parquet":
            return pd.read_parquet(self.path)
        if suffix == ".csv":
            return pd.read_csv(self.path, dtype={"stock_code": str, "date": str})
        if suffix in {".jsonl", ".ndjson"}:
            return pd.read_json(self.path, lines=True, dtype=False, convert_dates=False)
        if suffix == ".json":
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            if isinstance(payload, Mapping):
                payload = payload.get("stocks", [])
            if not isinstance(payload, list):
                raise SnapshotFetchError(f"{self.path}: expected a list of stock rows")
            return pd.DataFrame(payload)
        raise SnapshotFetchError(
            f"Unsupported snapshot format: {self.path.suffix or '<none>'}",
            user_message=f"Snapshot file must be one of {', '.join(SUPPORTED_SUFFIXES)}",
        )

    def fetch_latest_snapshot(self) -> Snapshot:
        if not self.path.exists():
            raise SnapshotFetchError(f"Snapshot file not found: {self.path}")
        try:
            frame = self._read_frame()
        except SnapshotFetchError:
            raise
        except Exception as exc:
            LOGGER.error("Failed to read snapshot %s: %s", self.path, exc)
            raise SnapshotFetchError(f"Failed to read snapshot {self.path}: {exc}") from exc

        if frame.empty:
            return Snapshot.empty()
        if "date" not in frame.columns:
            raise SnapshotFetchError(f"{self.path}: snapshot rows have no 'date' column")
        return latest_snapshot_from_records(records_from_frame(frame))


def open_store(path: str | Path) -> FileSnapshotStore:
    store = FileSnapshotStore(path)
    if store.path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise SnapshotFetchError(f"Unsupported snapshot format: {store.path}")
    return store
