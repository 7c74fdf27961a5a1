"""Per-record filter predicates.

Every predicate is pure. Numeric predicates treat a missing field as "does not
satisfy" instead of raising.
"""

from __future__ import annotations

from collections.abc import Collection

from idx_screener.common.records import StockRecord


def text_matches(record: StockRecord, query: str) -> bool:
    """Case-insensitive substring match against the stock code and name."""
    needle = (query or "").lower()
    if not needle:
        return True
    return needle in record.code.lower() or needle in (record.name or "").lower()


def member_of(value: object, selected: Collection[object]) -> bool:
    """An empty selection matches everything; otherwise require exact membership."""
    if not selected:
        return True
    return value in selected


def sector_in(record: StockRecord, sectors: Collection[str]) -> bool:
    return member_of(record.sector, sectors)


def sub_sector_in(record: StockRecord, sub_sectors: Collection[str]) -> bool:
    return member_of(record.sub_sector, sub_sectors)


def tag_in(record: StockRecord, tags: Collection[str]) -> bool:
    return member_of(record.tag, tags)


def action_in(record: StockRecord, actions: Collection[object]) -> bool:
    if not actions:
        return True
    if record.action is None:
        return False
    return record.action in actions or record.action.value in actions


# ── numeric thresholds ────────────────────────────────────────────────────────


def at_least(record: StockRecord, field: str, threshold: float) -> bool:
    value = record.numeric(field)
    return value is not None and value >= threshold


def greater_than(record: StockRecord, field: str, threshold: float) -> bool:
    value = record.numeric(field)
    return value is not None and value > threshold


def less_than(record: StockRecord, field: str, threshold: float) -> bool:
    value = record.numeric(field)
    return value is not None and value < threshold


def less_than_field(record: StockRecord, field: str, other: str) -> bool:
    """``record.field < record.other``; fails when either side is missing."""
    left = record.numeric(field)
    right = record.numeric(other)
    if left is None or right is None:
        return False
    return left < right


def score_in_range(record: StockRecord, low: float, high: float) -> bool:
    score = record.score
    return score is not None and low <= score <= high


__all__ = [
    "action_in",
    "at_least",
    "greater_than",
    "less_than",
    "less_than_field",
    "member_of",
    "score_in_range",
    "sector_in",
    "sub_sector_in",
    "tag_in",
    "text_matches",
]
