"""Detail panel model for the focused stock."""

from __future__ import annotations

from dataclasses import dataclass, field

from idx_screener.common.records import StockRecord
from idx_screener.display.formatting import (
    DEFAULT_CURRENCY_PREFIX,
    MISSING,
    Styled,
    action_badge,
    format_currency,
    format_detail_percent,
    format_number,
    format_score,
    score_class,
    warning_badges,
)


@dataclass(frozen=True)
class MetricRow:
    label: str
    value: str
    css_class: str = ""


@dataclass(frozen=True)
class Section:
    title: str
    rows: tuple[MetricRow, ...] = ()
    chips: tuple[str, ...] = ()


@dataclass(frozen=True)
class DetailHeader:
    code: str
    name: str
    sector: str
    sub_sector: str
    score: str
    score_class: str
    action: str
    action_badge: str
    warnings: tuple[Styled, ...] = ()


@dataclass(frozen=True)
class DetailView:
    header: DetailHeader
    sections: tuple[Section, ...] = field(default_factory=tuple)

    def section(self, title: str) -> Section | None:
        for section in self.sections:
            if section.title == title:
                return section
        return None


def _tone(condition: bool, good: str = "text-good", bad: str = "") -> str:
    return good if condition else bad


def _gt(value: float | None, threshold: float) -> bool:
    return value is not None and value > threshold


def _lt(value: float | None, threshold: float) -> bool:
    return value is not None and value < threshold


def _signed_tone(value: float | None) -> str:
    if value is None:
        return ""
    return "text-good" if value > 0 else "text-bad"


def _altman_tone(z: float | None) -> str:
    if z is None:
        return ""
    if z >= 3:
        return "text-good"
    if z >= 1.8:
        return "text-warn"
    return "text-bad"


def _trend_tone(trend: str) -> str:
    if trend == "ACCUMULATION":
        return "text-good"
    if trend == "DISTRIBUTION":
        return "text-bad"
    return ""


def detail_sections(
    record: StockRecord,
    *,
    currency_prefix: str = DEFAULT_CURRENCY_PREFIX,
    top_shareholders: int = 5,
) -> tuple[Section, ...]:
    def money(value: float | None) -> str:
        return format_currency(value, currency_prefix)

    pct = format_detail_percent
    r = record

    overview = [
        MetricRow("Market Cap", format_number(r.market_cap)),
        MetricRow("Free Float", pct(r.free_float), _tone(_lt(r.free_float, 0.2), "text-warn")),
        MetricRow("IPO Date", r.ipo_date or MISSING),
        MetricRow("IPO Price", money(r.ipo_price)),
        MetricRow("IPO Board", r.ipo_board or MISSING),
    ]
    if r.group:
        overview.append(MetricRow("Group", r.group))

    value_tone = _tone(r.pbv is not None and r.fair_pbv is not None and r.pbv < r.fair_pbv)
    valuation = [
        MetricRow("P/E (TTM)", format_number(r.pe_ttm, 1)),
        MetricRow("P/BV", format_number(r.pbv), value_tone),
        MetricRow("Fair P/BV", format_number(r.fair_pbv)),
        MetricRow("P/S", format_number(r.ps)),
        MetricRow("EV/EBITDA", format_number(r.ev_ebitda, 1)),
        MetricRow("Earnings Yield", pct(r.earnings_yield)),
        MetricRow("Intrinsic Price", money(r.intrinsic_price), "text-info"),
    ]
    quality = [
        MetricRow("ROE", pct(r.roe), _tone(_gt(r.roe, 0.15))),
        MetricRow("ROA", pct(r.roa)),
        MetricRow("ROIC", pct(r.roic)),
        MetricRow("Net Margin", pct(r.net_margin)),
        MetricRow("Operating Margin", pct(r.operating_margin)),
        MetricRow("EPS (TTM)", money(r.eps_ttm)),
        MetricRow("Book Value/Share", money(r.book_value_per_share)),
    ]
    cash_flow = [
        MetricRow("FCF (TTM)", format_number(r.fcf_ttm), _signed_tone(r.fcf_ttm)),
        MetricRow("FCF/Share", money(r.fcf_per_share)),
        MetricRow("Operating CF", format_number(r.operating_cashflow)),
    ]
    growth = [
        MetricRow("Revenue YoY", pct(r.revenue_yoy), _signed_tone(r.revenue_yoy)),
        MetricRow("Net Income YoY", pct(r.net_income_yoy), _signed_tone(r.net_income_yoy)),
    ]
    risk = [
        MetricRow("Debt/Equity", format_number(r.debt_to_equity), _tone(_gt(r.debt_to_equity, 1), "text-bad")),
        MetricRow("Interest Coverage", format_number(r.interest_coverage, 1)),
        MetricRow("Current Ratio", format_number(r.current_ratio)),
        MetricRow("Quick Ratio", format_number(r.quick_ratio)),
        MetricRow("Altman Z-Score", format_number(r.altman_z, 1), _altman_tone(r.altman_z)),
    ]
    dividend = [
        MetricRow("Dividend Yield", pct(r.dividend_yield), _tone(_gt(r.dividend_yield, 0.05))),
        MetricRow("Payout Ratio", pct(r.payout_ratio)),
    ]
    ownership = [
        MetricRow("Top 1 Holder", pct(r.shareholder_top1_pct)),
        MetricRow("Top 3 Holders", pct(r.shareholder_top3_pct), _tone(_gt(r.shareholder_top3_pct, 0.75), "text-warn")),
        MetricRow("Shareholder Count", str(r.shareholder_count) if r.shareholder_count is not None else MISSING),
        MetricRow("Trend", r.shareholder_trend_latest or MISSING, _trend_tone(r.shareholder_trend_latest)),
    ]
    ownership.extend(MetricRow(holder.name, pct(holder.percentage)) for holder in r.shareholders[: max(0, top_shareholders)])

    sections = [
        Section("Overview", tuple(overview)),
        Section("Valuation", tuple(valuation)),
        Section("Quality", tuple(quality)),
        Section("Cash Flow", tuple(cash_flow)),
        Section("Growth", tuple(growth)),
        Section("Risk", tuple(risk)),
        Section("Dividend", tuple(dividend)),
        Section("Ownership", tuple(ownership)),
        Section("Indexes", chips=r.indexes),
    ]
    if r.ipo_underwriters:
        sections.append(
            Section(
                "IPO Underwriters",
                tuple(MetricRow(uw.broker_name, uw.broker_id) for uw in r.ipo_underwriters),
            )
        )
    return tuple(sections)


def build_detail(
    record: StockRecord,
    *,
    currency_prefix: str = DEFAULT_CURRENCY_PREFIX,
    top_shareholders: int = 5,
) -> DetailView:
    action = record.action.value if record.action is not None else MISSING
    header = DetailHeader(
        code=record.code,
        name=record.name,
        sector=record.sector,
        sub_sector=record.sub_sector,
        score=format_score(record.score),
        score_class=score_class(record.score),
        action=action,
        action_badge=action_badge(record.action),
        warnings=tuple(warning_badges(record)),
    )
    return DetailView(
        header=header,
        sections=detail_sections(record, currency_prefix=currency_prefix, top_shareholders=top_shareholders),
    )
