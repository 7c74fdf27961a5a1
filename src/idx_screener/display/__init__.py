"""Display contract: formatters, detail panel sections and the table model."""

from __future__ import annotations

from .detail import DetailHeader, DetailView, MetricRow, Section, build_detail, detail_sections
from .formatting import (
    ChangeDisplay,
    Styled,
    action_badge,
    format_change,
    format_currency,
    format_detail_percent,
    format_number,
    format_percent,
    format_price,
    format_score,
    risk_label,
    score_class,
    trend_icon,
    warning_badges,
)
from .table import COLUMNS, Column, build_numeric_frame, build_table_frame, header_label

__all__ = [
    "COLUMNS",
    "ChangeDisplay",
    "Column",
    "DetailHeader",
    "DetailView",
    "MetricRow",
    "Section",
    "Styled",
    "action_badge",
    "build_detail",
    "build_numeric_frame",
    "build_table_frame",
    "detail_sections",
    "format_change",
    "format_currency",
    "format_detail_percent",
    "format_number",
    "format_percent",
    "format_price",
    "format_score",
    "header_label",
    "risk_label",
    "score_class",
    "trend_icon",
    "warning_badges",
]
