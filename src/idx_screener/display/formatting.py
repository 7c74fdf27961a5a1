"""
Formatting helpers shared by the CLI table and the Streamlit shell.

Every formatter returns ``"-"`` for missing values (``None``, NaN, inf).
Grouped numbers follow the Indonesian locale: ``.`` separates thousands and
``,`` separates decimals, with at most three fraction digits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from idx_screener.common.enums import Action, RiskLabel, ShareholderTrendLabel
from idx_screener.common.records import StockRecord

MISSING = "-"
DEFAULT_CURRENCY_PREFIX = "Rp"


@dataclass(frozen=True)
class Styled:
    """Display text plus the CSS class the shell attaches to it."""

    text: str
    css_class: str = ""


def _clean(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(parsed) or math.isinf(parsed):
        return None
    return parsed


# ── numbers ───────────────────────────────────────────────────────────────────


def format_number(value: float | None, decimals: int = 2) -> str:
    """Compact magnitude format, e.g. ``1.5T``, ``2.0B``, ``12.34``."""
    v = _clean(value)
    if v is None:
        return MISSING
    magnitude = abs(v)
    if magnitude >= 1e12:
        return f"{v / 1e12:.1f}T"
    if magnitude >= 1e9:
        return f"{v / 1e9:.1f}B"
    if magnitude >= 1e6:
        return f"{v / 1e6:.1f}M"
    return f"{v:.{decimals}f}"


def format_percent(value: float | None, decimals: int = 1, *, suffix: bool = False) -> str:
    """Render a ratio as a percentage; the table omits the ``%`` sign."""
    v = _clean(value)
    if v is None:
        return MISSING
    text = f"{v * 100:.{decimals}f}"
    return f"{text}%" if suffix else text


def format_detail_percent(value: float | None) -> str:
    return format_percent(value, 2, suffix=True)


def group_number(value: float, max_fraction: int = 3) -> str:
    """Indonesian digit grouping: ``1234567.5`` -> ``1.234.567,5``."""
    text = f"{abs(value):,.{max_fraction}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    whole = whole.replace(",", ".")
    sign = "-" if value < 0 and (whole.strip("0.") or fraction) else ""
    return f"{sign}{whole},{fraction}" if fraction else f"{sign}{whole}"


def format_price(value: float | None) -> str:
    v = _clean(value)
    if v is None:
        return MISSING
    return group_number(v)


def format_currency(value: float | None, prefix: str = DEFAULT_CURRENCY_PREFIX) -> str:
    v = _clean(value)
    if v is None:
        return MISSING
    return f"{prefix} {group_number(v)}"


@dataclass(frozen=True)
class ChangeDisplay:
    text: str
    pct: str
    css_class: str = ""


def format_change(change: float | None, previous: float | None) -> ChangeDisplay:
    """Signed absolute change plus the move relative to ``previous``.

    The percentage is ``0.0`` when ``previous`` is missing or not positive.
    """
    delta = _clean(change)
    if delta is None:
        return ChangeDisplay(MISSING, "")
    base = _clean(previous)
    pct = delta / base * 100 if base is not None and base > 0 else 0.0
    sign = "+" if delta > 0 else ""
    if delta > 0:
        css_class = "text-up"
    elif delta < 0:
        css_class = "text-down"
    else:
        css_class = ""
    return ChangeDisplay(f"{sign}{group_number(delta)}", f"({sign}{pct:.1f}%)", css_class)


# ── labels & badges ───────────────────────────────────────────────────────────

_RISK_CLASSES = {
    RiskLabel.LOW: "text-good",
    RiskLabel.MED: "text-warn",
    RiskLabel.HIGH: "text-bad",
}


def risk_level(altman_z: float | None) -> RiskLabel | None:
    z = _clean(altman_z)
    if z is None:
        return None
    if z >= 3:
        return RiskLabel.LOW
    if z >= 1.8:
        return RiskLabel.MED
    return RiskLabel.HIGH


def risk_label(altman_z: float | None) -> Styled:
    level = risk_level(altman_z)
    if level is None:
        return Styled(MISSING)
    return Styled(level.value, _RISK_CLASSES[level])


def trend_icon(trend: str | None) -> Styled:
    label = ShareholderTrendLabel.coerce(trend)
    if label is ShareholderTrendLabel.ACCUMULATION:
        return Styled("ACC ↑", "trend-up")
    if label is ShareholderTrendLabel.DISTRIBUTION:
        return Styled("DIST ↓", "trend-down")
    return Styled(MISSING)


def score_class(score: float | None) -> str:
    s = _clean(score)
    if s is None:
        return "score-low"
    if s >= 80:
        return "score-high"
    if s >= 50:
        return "score-mid"
    return "score-low"


def format_score(score: float | None) -> str:
    s = _clean(score)
    if s is None:
        return MISSING
    return f"{s:g}"


def action_badge(action: Action | str | None) -> str:
    resolved = Action.coerce(action)
    if resolved is None:
        return ""
    return f"badge-{resolved.value.lower()}"


def warning_badges(record: StockRecord) -> list[Styled]:
    """Header warnings shown above the detail sections."""
    badges: list[Styled] = []
    if record.free_float is not None and record.free_float < 0.2:
        badges.append(Styled(f"LOW FF ({format_detail_percent(record.free_float)})", "badge-warn"))
    if record.has_controlling_shareholder:
        badges.append(Styled("CTRL", "badge-info"))
    if record.fcf_ttm is not None and record.fcf_ttm > 0:
        badges.append(Styled("CASH", "badge-good"))
    if record.altman_z is not None and record.altman_z < 2:
        badges.append(Styled("RISK", "badge-bad"))
    return badges


__all__ = [
    "ChangeDisplay",
    "DEFAULT_CURRENCY_PREFIX",
    "MISSING",
    "Styled",
    "action_badge",
    "format_change",
    "format_currency",
    "format_detail_percent",
    "format_number",
    "format_percent",
    "format_price",
    "format_score",
    "group_number",
    "risk_label",
    "risk_level",
    "score_class",
    "trend_icon",
    "warning_badges",
]
