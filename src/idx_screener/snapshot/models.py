from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from idx_screener.common.records import StockRecord


def _distinct_sorted(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted({v for v in values if v}))


@dataclass(frozen=True)
class Vocabulary:
    """Sorted distinct non-empty category values observed in a snapshot."""

    sectors: tuple[str, ...] = ()
    sub_sectors: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    @classmethod
    def from_records(cls, records: Iterable[StockRecord]) -> "Vocabulary":
        rows = list(records)
        return cls(
            sectors=_distinct_sorted(r.sector for r in rows),
            sub_sectors=_distinct_sorted(r.sub_sector for r in rows),
            tags=_distinct_sorted(r.tag for r in rows),
        )

    def sub_sectors_for(self, records: Iterable[StockRecord], sectors: Iterable[str]) -> tuple[str, ...]:
        """Sub-sectors that occur under any of ``sectors`` (all of them if none given)."""
        wanted = set(sectors)
        if not wanted:
            return self.sub_sectors
        return _distinct_sorted(r.sub_sector for r in records if r.sector in wanted)


@dataclass(frozen=True)
class Snapshot:
    """All stock records sharing the most recent snapshot date."""

    date: str | None
    records: tuple[StockRecord, ...] = ()
    vocabulary: Vocabulary = field(default_factory=Vocabulary)

    @classmethod
    def from_records(cls, date: str | None, records: Iterable[StockRecord]) -> "Snapshot":
        rows = tuple(records)
        return cls(date=date, records=rows, vocabulary=Vocabulary.from_records(rows))

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls(date=None)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def __len__(self) -> int:
        return len(self.records)

    def meta(self) -> dict[str, object]:
        return {
            "count": len(self.records),
            "date": self.date,
            "sectors": list(self.vocabulary.sectors),
            "subSectors": list(self.vocabulary.sub_sectors),
            "tags": list(self.vocabulary.tags),
        }
