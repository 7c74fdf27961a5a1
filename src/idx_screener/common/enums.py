from __future__ import annotations

from enum import Enum
from typing import Any


class _CoercibleEnum(str, Enum):
    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for member in cls:
                if text == member.value:
                    return member
            lowered = text.lower().replace("_", "-")
            for member in cls:
                if lowered == member.value.lower().replace("_", "-") or lowered == member.name.lower().replace("_", "-"):
                    return member
        return None


class Action(_CoercibleEnum):
    BUY = "BUY"
    HOLD = "HOLD"
    AVOID = "AVOID"


class SortField(_CoercibleEnum):
    SCORE = "score"
    PBV = "pbv"
    PE_TTM = "pe_ttm"
    ROE = "roe"
    FCF_TTM = "fcf_ttm"
    MARKET_CAP = "market_cap"
    FREE_FLOAT = "free_float"
    DIVIDEND_YIELD = "dividend_yield"


class SortDirection(_CoercibleEnum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.ASC if self is SortDirection.DESC else SortDirection.DESC


class Preset(_CoercibleEnum):
    STRONG_BUY = "strong-buy"
    VALUE = "value"
    INCOME = "income"
    LOW_RISK = "low-risk"
    CONTROLLED = "controlled"
    ILLIQUID = "illiquid"


class RiskLabel(_CoercibleEnum):
    LOW = "LOW"
    MED = "MED"
    HIGH = "HIGH"


class ShareholderTrendLabel(_CoercibleEnum):
    ACCUMULATION = "ACCUMULATION"
    DISTRIBUTION = "DISTRIBUTION"


class FetchStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
