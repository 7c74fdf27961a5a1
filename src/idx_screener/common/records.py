"""Stock record models for one screening snapshot."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

import numpy as np

from idx_screener.common.enums import Action


def _as_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, bool):
        return float(value)
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if np.isnan(parsed) or np.isinf(parsed):
        return None
    return parsed


def _as_int(value: Any) -> int | None:
    parsed = _as_float(value)
    if parsed is None:
        return None
    return int(parsed)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and not (isinstance(value, float) and math.isnan(value)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on", "y"}
    return False


def _as_list(value: Any) -> list[Any]:
    """Normalize list-like payloads coming from JSON, parquet or CSV rows."""
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            decoded = json.loads(text)
        except ValueError:
            return [item.strip() for item in text.split(",") if item.strip()]
        return decoded if isinstance(decoded, list) else []
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


@dataclass(frozen=True)
class Shareholder:
    name: str
    percentage: float | None = None
    value: str = ""
    badges: tuple[str, ...] = ()
    id: str = ""

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Shareholder":
        return cls(
            name=_as_text(raw.get("name")),
            percentage=_as_float(raw.get("percentage")),
            value=_as_text(raw.get("value")),
            badges=tuple(_as_text(badge) for badge in _as_list(raw.get("badges"))),
            id=_as_text(raw.get("id")),
        )


@dataclass(frozen=True)
class ShareholderTrend:
    shareholder_date: str
    total_share: float | None = None
    change: float | None = None
    change_formatted: str = ""

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ShareholderTrend":
        return cls(
            shareholder_date=_as_text(raw.get("shareholder_date")),
            total_share=_as_float(raw.get("total_share")),
            change=_as_float(raw.get("change")),
            change_formatted=_as_text(raw.get("change_formatted")),
        )


@dataclass(frozen=True)
class Broker:
    broker_name: str
    broker_id: str = ""
    type: str = ""

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Broker":
        return cls(
            broker_name=_as_text(raw.get("broker_name")),
            broker_id=_as_text(raw.get("broker_id")),
            type=_as_text(raw.get("type")),
        )


NUMERIC_FIELDS: tuple[str, ...] = (
    "price",
    "previous",
    "change",
    "ipo_amount",
    "ipo_price",
    "ipo_shares",
    "ipo_free_float",
    "shareholder_top1_pct",
    "shareholder_top3_pct",
    "market_cap",
    "free_float",
    "pe_ttm",
    "pbv",
    "ps",
    "ev_ebitda",
    "earnings_yield",
    "roe",
    "roa",
    "roic",
    "net_margin",
    "operating_margin",
    "fcf_ttm",
    "fcf_per_share",
    "operating_cashflow",
    "revenue_yoy",
    "net_income_yoy",
    "debt_to_equity",
    "interest_coverage",
    "current_ratio",
    "quick_ratio",
    "altman_z",
    "book_value_per_share",
    "eps_ttm",
    "dividend_yield",
    "payout_ratio",
    "fair_pbv",
    "intrinsic_price",
    "score",
)

TEXT_FIELDS: tuple[str, ...] = (
    "icon_url",
    "ipo_board",
    "ipo_date",
    "ipo_registrar",
    "ipo_administrative_bureau",
    "shareholder_trend_latest",
)

BOOL_FIELDS: tuple[str, ...] = (
    "corp_action_active",
    "trading_limit",
    "margin_trading",
    "has_controlling_shareholder",
)


@dataclass(frozen=True)
class StockRecord:
    """One stock in one snapshot, with every upstream metric already computed.

    Numeric fields hold ``None`` when the upstream value is absent, null, NaN
    or not a number. Nothing downstream treats ``None`` as zero except the sort
    comparator.
    """

    code: str
    name: str = ""
    date: str | None = None
    sector: str = ""
    sub_sector: str = ""
    tag: str = ""
    group: str = ""
    indexes: tuple[str, ...] = ()
    action: Action | None = None

    price: float | None = None
    previous: float | None = None
    change: float | None = None
    icon_url: str = ""

    corp_action_active: bool = False
    trading_limit: bool = False
    margin_trading: bool = False
    tradeable: int | None = None

    ipo_amount: float | None = None
    ipo_board: str = ""
    ipo_date: str = ""
    ipo_price: float | None = None
    ipo_registrar: str = ""
    ipo_shares: float | None = None
    ipo_underwriters: tuple[Broker, ...] = ()
    ipo_administrative_bureau: str = ""
    ipo_free_float: float | None = None

    shareholder_top1_pct: float | None = None
    shareholder_top3_pct: float | None = None
    has_controlling_shareholder: bool = False
    shareholder_count: int | None = None
    shareholders: tuple[Shareholder, ...] = ()
    shareholder_trends: tuple[ShareholderTrend, ...] = ()
    shareholder_trend_latest: str = ""

    market_cap: float | None = None
    free_float: float | None = None
    pe_ttm: float | None = None
    pbv: float | None = None
    ps: float | None = None
    ev_ebitda: float | None = None
    earnings_yield: float | None = None
    roe: float | None = None
    roa: float | None = None
    roic: float | None = None
    net_margin: float | None = None
    operating_margin: float | None = None
    fcf_ttm: float | None = None
    fcf_per_share: float | None = None
    operating_cashflow: float | None = None
    revenue_yoy: float | None = None
    net_income_yoy: float | None = None
    debt_to_equity: float | None = None
    interest_coverage: float | None = None
    current_ratio: float | None = None
    quick_ratio: float | None = None
    altman_z: float | None = None
    book_value_per_share: float | None = None
    eps_ttm: float | None = None
    dividend_yield: float | None = None
    payout_ratio: float | None = None
    fair_pbv: float | None = None
    intrinsic_price: float | None = None
    score: float | None = None

    extras: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def numeric(self, name: str) -> float | None:
        """Return a numeric field by name, ``None`` when absent or unknown."""
        if name not in NUMERIC_FIELDS:
            return None
        return getattr(self, name)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "StockRecord":
        code = _as_text(_first(raw, "stock_code", "code", "symbol"))
        if not code:
            raise ValueError("stock record is missing stock_code")

        kwargs: dict[str, Any] = {
            "code": code,
            "name": _as_text(raw.get("name")),
            "date": _as_text(raw.get("date")) or None,
            "sector": _as_text(raw.get("sector")),
            "sub_sector": _as_text(_first(raw, "sub_sector", "subSector")),
            "tag": _as_text(raw.get("tag")),
            "group": _as_text(raw.get("group")),
            "indexes": tuple(_as_text(item) for item in _as_list(raw.get("indexes")) if _as_text(item)),
            "action": Action.coerce(raw.get("action")),
            "tradeable": _as_int(raw.get("tradeable")),
            "shareholder_count": _as_int(raw.get("shareholder_count")),
            "ipo_underwriters": tuple(
                Broker.from_mapping(item) for item in _as_list(raw.get("ipo_underwriters")) if isinstance(item, Mapping)
            ),
            "shareholders": tuple(
                Shareholder.from_mapping(item) for item in _as_list(raw.get("shareholders")) if isinstance(item, Mapping)
            ),
            "shareholder_trends": tuple(
                ShareholderTrend.from_mapping(item)
                for item in _as_list(raw.get("shareholder_trends"))
                if isinstance(item, Mapping)
            ),
        }
        for name in NUMERIC_FIELDS:
            kwargs[name] = _as_float(raw.get(name))
        if kwargs["previous"] is None:
            kwargs["previous"] = _as_float(raw.get("previousPrice"))
        if kwargs["change"] is None and kwargs["price"] is not None and kwargs["previous"] is not None:
            kwargs["change"] = kwargs["price"] - kwargs["previous"]
        for name in TEXT_FIELDS:
            kwargs[name] = _as_text(raw.get(name))
        for name in BOOL_FIELDS:
            kwargs[name] = _as_bool(raw.get(name))

        known = {f.name for f in fields(cls)} | {"stock_code", "subSector", "previousPrice", "symbol", "_id"}
        kwargs["extras"] = {key: value for key, value in raw.items() if key not in known}
        return cls(**kwargs)
