"""
IDX Screener common models.

Record types and enumerations shared by the engines, the snapshot store and
the display layer.
"""

from __future__ import annotations

from .enums import (
    Action,
    FetchStatus,
    Preset,
    RiskLabel,
    ShareholderTrendLabel,
    SortDirection,
    SortField,
)
from .records import Broker, Shareholder, ShareholderTrend, StockRecord

__all__ = [
    "Action",
    "Broker",
    "FetchStatus",
    "Preset",
    "RiskLabel",
    "Shareholder",
    "ShareholderTrend",
    "ShareholderTrendLabel",
    "SortDirection",
    "SortField",
    "StockRecord",
]
