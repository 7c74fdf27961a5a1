"""Screening pipeline: snapshot records -> ordered view."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from idx_screener.common.enums import Action, Preset, SortDirection, SortField
from idx_screener.common.records import StockRecord
from idx_screener.engines.errors import ScreenerValidationError
from idx_screener.engines.predicates import (
    action_in,
    score_in_range,
    sector_in,
    sub_sector_in,
    tag_in,
    text_matches,
)
from idx_screener.engines.presets import PRESET_RULES, resolve_preset, toggle_preset

if TYPE_CHECKING:
    from idx_screener.snapshot.models import Snapshot

LOGGER = logging.getLogger("idx_screener.engines.pipeline")

DEFAULT_SCORE_RANGE: tuple[float, float] = (0.0, 100.0)


def _text_set(values: Iterable[Any] | None) -> frozenset[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(str(v).strip() for v in values if v is not None and str(v).strip())


def _action_set(values: Iterable[Any] | None) -> frozenset[Action]:
    out: set[Action] = set()
    for raw in _text_set(values):
        action = Action.coerce(raw)
        if action is None:
            raise ScreenerValidationError(f"Unknown action: {raw!r}")
        out.add(action)
    return frozenset(out)


@dataclass(frozen=True)
class FilterState:
    """User-owned filter inputs. Construct with any iterables; they are frozen."""

    search: str = ""
    sectors: frozenset[str] = field(default_factory=frozenset)
    sub_sectors: frozenset[str] = field(default_factory=frozenset)
    tags: frozenset[str] = field(default_factory=frozenset)
    actions: frozenset[Action] = field(default_factory=frozenset)
    score_range: tuple[float, float] = DEFAULT_SCORE_RANGE
    preset: Preset | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "search", self.search or "")
        object.__setattr__(self, "sectors", _text_set(self.sectors))
        object.__setattr__(self, "sub_sectors", _text_set(self.sub_sectors))
        object.__setattr__(self, "tags", _text_set(self.tags))
        object.__setattr__(self, "actions", _action_set(self.actions))
        object.__setattr__(self, "preset", resolve_preset(self.preset))
        low, high = self.score_range
        low, high = float(low), float(high)
        if low > high:
            low, high = high, low
        object.__setattr__(self, "score_range", (low, high))

    @property
    def score_range_active(self) -> bool:
        low, high = self.score_range
        return low > DEFAULT_SCORE_RANGE[0] or high < DEFAULT_SCORE_RANGE[1]

    @property
    def is_default(self) -> bool:
        return self == FilterState()

    def cleared(self) -> "FilterState":
        return FilterState()

    def with_search(self, search: str) -> "FilterState":
        return replace(self, search=search)

    def with_sectors(self, sectors: Iterable[str]) -> "FilterState":
        # A sector change invalidates any sub-sector picked under the old sector.
        return replace(self, sectors=sectors, sub_sectors=frozenset())

    def with_sub_sectors(self, sub_sectors: Iterable[str]) -> "FilterState":
        return replace(self, sub_sectors=sub_sectors)

    def with_tags(self, tags: Iterable[str]) -> "FilterState":
        return replace(self, tags=tags)

    def with_actions(self, actions: Iterable[Any]) -> "FilterState":
        return replace(self, actions=actions)

    def toggle_action(self, action: Action | str) -> "FilterState":
        resolved = Action.coerce(action)
        if resolved is None:
            raise ScreenerValidationError(f"Unknown action: {action!r}")
        return replace(self, actions=self.actions ^ {resolved})

    def with_score_range(self, low: float, high: float) -> "FilterState":
        return replace(self, score_range=(low, high))

    def toggle_preset(self, preset: Preset | str) -> "FilterState":
        chosen = resolve_preset(preset)
        if chosen is None:
            return replace(self, preset=None)
        return replace(self, preset=toggle_preset(self.preset, chosen))


@dataclass(frozen=True)
class SortState:
    field: SortField | None = None
    direction: SortDirection = SortDirection.DESC

    def __post_init__(self) -> None:
        if self.field is not None and not isinstance(self.field, SortField):
            resolved = SortField.coerce(self.field)
            if resolved is None:
                raise ScreenerValidationError(
                    f"Unknown sort field: {self.field!r}",
                    user_message=f"Cannot sort by '{self.field}'. Sortable: {', '.join(f.value for f in SortField)}",
                )
            object.__setattr__(self, "field", resolved)
        if not isinstance(self.direction, SortDirection):
            direction = SortDirection.coerce(self.direction)
            if direction is None:
                raise ScreenerValidationError(f"Unknown sort direction: {self.direction!r}")
            object.__setattr__(self, "direction", direction)

    def toggled(self, field: SortField | str) -> "SortState":
        """Same field flips direction; a new field starts descending."""
        chosen = SortState(field=field).field
        if chosen is self.field:
            return SortState(field=chosen, direction=self.direction.flipped())
        return SortState(field=chosen, direction=SortDirection.DESC)


def _zero_if_missing(value: float | None) -> float:
    return 0.0 if value is None else value


SORT_EXTRACTORS: dict[SortField, Callable[[StockRecord], float]] = {
    SortField.SCORE: lambda r: _zero_if_missing(r.score),
    SortField.PBV: lambda r: _zero_if_missing(r.pbv),
    SortField.PE_TTM: lambda r: _zero_if_missing(r.pe_ttm),
    SortField.ROE: lambda r: _zero_if_missing(r.roe),
    SortField.FCF_TTM: lambda r: _zero_if_missing(r.fcf_ttm),
    SortField.MARKET_CAP: lambda r: _zero_if_missing(r.market_cap),
    SortField.FREE_FLOAT: lambda r: _zero_if_missing(r.free_float),
    SortField.DIVIDEND_YIELD: lambda r: _zero_if_missing(r.dividend_yield),
}


def sort_records(records: Sequence[StockRecord], sort_state: SortState) -> list[StockRecord]:
    if sort_state.field is None:
        return list(records)
    key = SORT_EXTRACTORS[sort_state.field]
    # sorted() is stable for reverse=True as well, so ties keep snapshot order.
    return sorted(records, key=key, reverse=sort_state.direction is SortDirection.DESC)


def apply(
    records: Iterable[StockRecord],
    filter_state: FilterState | None = None,
    sort_state: SortState | None = None,
) -> tuple[StockRecord, ...]:
    """Filter then sort ``records``. Pure and deterministic."""
    filters = filter_state or FilterState()
    sort = sort_state or SortState()
    result = list(records)

    if filters.search:
        result = [r for r in result if text_matches(r, filters.search)]
    if filters.sectors:
        result = [r for r in result if sector_in(r, filters.sectors)]
    if filters.sub_sectors:
        result = [r for r in result if sub_sector_in(r, filters.sub_sectors)]
    if filters.tags:
        result = [r for r in result if tag_in(r, filters.tags)]
    if filters.actions:
        result = [r for r in result if action_in(r, filters.actions)]
    if filters.score_range_active:
        low, high = filters.score_range
        result = [r for r in result if score_in_range(r, low, high)]
    if filters.preset is not None:
        rule = PRESET_RULES[filters.preset]
        result = [r for r in result if rule(r)]

    return tuple(sort_records(result, sort))


@dataclass(frozen=True)
class ScreenView:
    """Ordered output of the pipeline with a code -> position lookup."""

    records: tuple[StockRecord, ...] = ()
    _positions: dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        positions: dict[str, int] = {}
        for idx, record in enumerate(self.records):
            positions.setdefault(record.code, idx)
        object.__setattr__(self, "_positions", positions)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[StockRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> StockRecord:
        return self.records[index]

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def codes(self) -> list[str]:
        return [r.code for r in self.records]

    def index_of(self, code: str) -> int | None:
        return self._positions.get(code)

    def __contains__(self, item: object) -> bool:
        code = item.code if isinstance(item, StockRecord) else item
        return code in self._positions


def derive_view(
    snapshot: "Snapshot | None",
    filter_state: FilterState | None = None,
    sort_state: SortState | None = None,
) -> ScreenView:
    if snapshot is None:
        return ScreenView()
    ordered = apply(snapshot.records, filter_state, sort_state)
    LOGGER.debug("Derived view: %d of %d records", len(ordered), len(snapshot.records))
    return ScreenView(ordered)


__all__ = [
    "DEFAULT_SCORE_RANGE",
    "FilterState",
    "SORT_EXTRACTORS",
    "ScreenView",
    "SortState",
    "apply",
    "derive_view",
    "sort_records",
]
