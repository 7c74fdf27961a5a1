"""Unit tests for idx_screener.display.formatting."""

from __future__ import annotations

import math

import pytest

from idx_screener.common import Action
from idx_screener.display import (
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
from idx_screener.display.formatting import MISSING, group_number, risk_level


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12.346, "12.35"),
        (999_999, "999999.00"),
        (1_500_000, "1.5M"),
        (2_000_000_000, "2.0B"),
        (1.26e12, "1.3T"),
        (-3.4e9, "-3.4B"),
        (None, MISSING),
        (math.nan, MISSING),
        (math.inf, MISSING),
    ],
)
def test_format_number(value, expected) -> None:
    assert format_number(value) == expected


def test_format_number_decimals() -> None:
    assert format_number(4.06, 1) == "4.1"
    assert format_number(1234.4, 0) == "1234"


def test_format_percent() -> None:
    assert format_percent(0.2134) == "21.3"
    assert format_percent(0.2134, suffix=True) == "21.3%"
    assert format_detail_percent(0.05123) == "5.12%"
    assert format_percent(None) == MISSING
    assert format_detail_percent("bad") == MISSING


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1234567.5, "1.234.567,5"),
        (1000, "1.000"),
        (950, "950"),
        (-5, "-5"),
        (0.125, "0,125"),
        (2.0004, "2"),
    ],
)
def test_group_number(value, expected) -> None:
    assert group_number(value) == expected


def test_price_and_currency() -> None:
    assert format_price(9_250) == "9.250"
    assert format_currency(1_000) == "Rp 1.000"
    assert format_currency(1_000, "IDR") == "IDR 1.000"
    assert format_currency(None) == MISSING


def test_format_change() -> None:
    up = format_change(50, 1000)
    assert (up.text, up.pct, up.css_class) == ("+50", "(+5.0%)", "text-up")

    down = format_change(-25, 500)
    assert (down.text, down.pct, down.css_class) == ("-25", "(-5.0%)", "text-down")

    flat = format_change(0, 100)
    assert (flat.text, flat.pct, flat.css_class) == ("0", "(0.0%)", "")

    no_base = format_change(10, None)
    assert no_base.pct == "(+0.0%)"
    assert format_change(10, 0).pct == "(+0.0%)"

    missing = format_change(None, 100)
    assert (missing.text, missing.pct) == (MISSING, "")


@pytest.mark.parametrize(
    ("z", "label", "css"),
    [
        (3.0, "LOW", "text-good"),
        (4.2, "LOW", "text-good"),
        (1.8, "MED", "text-warn"),
        (2.99, "MED", "text-warn"),
        (1.79, "HIGH", "text-bad"),
        (-1.0, "HIGH", "text-bad"),
    ],
)
def test_risk_label(z, label, css) -> None:
    styled = risk_label(z)
    assert styled.text == label
    assert styled.css_class == css


def test_risk_label_missing() -> None:
    assert risk_level(None) is None
    assert risk_label(None).text == MISSING


def test_trend_icon() -> None:
    assert trend_icon("ACCUMULATION").text == "ACC ↑"
    assert trend_icon("ACCUMULATION").css_class == "trend-up"
    assert trend_icon("DISTRIBUTION").text == "DIST ↓"
    assert trend_icon("NEUTRAL").text == MISSING
    assert trend_icon(None).text == MISSING


def test_score_class_and_format() -> None:
    assert score_class(80) == "score-high"
    assert score_class(79.9) == "score-mid"
    assert score_class(50) == "score-mid"
    assert score_class(49) == "score-low"
    assert score_class(None) == "score-low"
    assert format_score(85.0) == "85"
    assert format_score(72.5) == "72.5"
    assert format_score(None) == MISSING


def test_action_badge() -> None:
    assert action_badge(Action.BUY) == "badge-buy"
    assert action_badge("avoid") == "badge-avoid"
    assert action_badge(None) == ""


def test_warning_badges_order(make_record) -> None:
    record = make_record(
        "PANI",
        free_float=0.12,
        has_controlling_shareholder=True,
        fcf_ttm=1.0e11,
        altman_z=1.5,
    )
    badges = warning_badges(record)
    assert [b.text for b in badges] == ["LOW FF (12.00%)", "CTRL", "CASH", "RISK"]
    assert [b.css_class for b in badges] == ["badge-warn", "badge-info", "badge-good", "badge-bad"]


def test_warning_badges_none_for_healthy_record(make_record) -> None:
    assert warning_badges(make_record("BBCA", free_float=0.42, fcf_ttm=-1.0, altman_z=3.4)) == []
