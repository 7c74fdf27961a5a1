"""Screener table column model and frame builder."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import pandas as pd

from idx_screener.common.enums import SortDirection, SortField
from idx_screener.common.records import StockRecord
from idx_screener.display.formatting import (
    MISSING,
    format_change,
    format_number,
    format_percent,
    format_price,
    format_score,
    trend_icon,
)


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    width: int
    sortable: bool = False
    align: str = "right"
    render: Callable[[StockRecord], str] | None = None

    @property
    def sort_field(self) -> SortField | None:
        return SortField.coerce(self.key) if self.sortable else None

    def cell(self, record: StockRecord) -> str:
        if self.render is None:
            return MISSING
        return self.render(record)


def _text(value: str) -> str:
    return value or MISSING


COLUMNS: tuple[Column, ...] = (
    Column("ticker", "TICKER", 60, align="left", render=lambda r: r.code),
    Column("name", "NAME", 469, align="left", render=lambda r: r.name),
    Column("sector", "SECTOR", 200, render=lambda r: r.sector),
    Column("sub_sector", "SUBSEC", 355, render=lambda r: r.sub_sector),
    Column("group", "GROUP", 239, render=lambda r: _text(r.group)),
    Column("price", "PRICE", 75, render=lambda r: format_price(r.price)),
    Column("change", "CHG%", 75, render=lambda r: format_change(r.change, r.previous).pct or MISSING),
    Column("market_cap", "MCAP", 65, sortable=True, render=lambda r: format_number(r.market_cap)),
    Column("pbv", "PBV", 55, sortable=True, render=lambda r: format_number(r.pbv)),
    Column("pe_ttm", "PE", 55, sortable=True, render=lambda r: format_number(r.pe_ttm, 1)),
    Column("roe", "ROE", 55, sortable=True, render=lambda r: format_percent(r.roe)),
    Column("dividend_yield", "DY%", 50, sortable=True, render=lambda r: format_percent(r.dividend_yield)),
    Column("debt_to_equity", "D/E", 50, render=lambda r: format_number(r.debt_to_equity)),
    Column("free_float", "FF%", 50, sortable=True, render=lambda r: format_percent(r.free_float)),
    Column("intrinsic_price", "INTR", 65, render=lambda r: format_number(r.intrinsic_price, 0)),
    Column("score", "SCR", 45, sortable=True, render=lambda r: format_score(r.score)),
    Column("action", "ACT", 55, render=lambda r: r.action.value if r.action is not None else MISSING),
    Column("trend", "TREND", 65, render=lambda r: trend_icon(r.shareholder_trend_latest).text),
)

COLUMNS_BY_KEY: dict[str, Column] = {column.key: column for column in COLUMNS}

NUMERIC_COLUMNS: tuple[str, ...] = (
    "score",
    "market_cap",
    "pbv",
    "pe_ttm",
    "roe",
    "dividend_yield",
    "free_float",
    "altman_z",
)


def header_label(column: Column, sort_field: SortField | None, direction: SortDirection) -> str:
    """Column label with a ``▼``/``▲`` marker when it is the active sort."""
    if column.sortable and sort_field is not None and column.sort_field is sort_field:
        return f"{column.label} {'▼' if direction is SortDirection.DESC else '▲'}"
    return column.label


def build_table_frame(
    records: Iterable[StockRecord],
    columns: Iterable[Column] = COLUMNS,
    *,
    sort_field: SortField | None = None,
    direction: SortDirection = SortDirection.DESC,
) -> pd.DataFrame:
    """Formatted cells for ``records`` in order, one column per table column."""
    cols = list(columns)
    labels = [header_label(c, sort_field, direction) for c in cols]
    rows = [[c.cell(record) for c in cols] for record in records]
    return pd.DataFrame(rows, columns=labels)


def build_numeric_frame(records: Iterable[StockRecord]) -> pd.DataFrame:
    """Raw numeric values keyed by stock code, for charts and exports."""
    data = [
        {
            "code": r.code,
            "sector": r.sector,
            "action": r.action.value if r.action is not None else None,
            **{name: r.numeric(name) for name in NUMERIC_COLUMNS},
        }
        for r in records
    ]
    frame = pd.DataFrame(data, columns=["code", "sector", "action", *NUMERIC_COLUMNS])
    return frame.set_index("code")
