"""Unit tests for idx_screener.engines.predicates."""

from __future__ import annotations

from idx_screener.common import Action
from idx_screener.engines.predicates import (
    action_in,
    at_least,
    greater_than,
    less_than,
    less_than_field,
    member_of,
    score_in_range,
    text_matches,
)


def test_text_matches_code_or_name_case_insensitive(make_record) -> None:
    record = make_record("BBCA", name="Bank Central Asia")
    assert text_matches(record, "bbc")
    assert text_matches(record, "CENTRAL")
    assert text_matches(record, "")
    assert not text_matches(record, "telkom")


def test_member_of_empty_selection_matches_everything() -> None:
    assert member_of("Energy", [])
    assert member_of("Energy", {"Energy"})
    assert not member_of("Energy", {"Financials"})
    assert not member_of("", {"Energy"})


def test_action_in_accepts_enum_or_text(make_record) -> None:
    record = make_record("A", action="HOLD")
    assert action_in(record, {Action.HOLD})
    assert action_in(record, {"HOLD"})
    assert not action_in(record, {Action.BUY})
    assert not action_in(make_record("B"), {Action.BUY})


def test_numeric_thresholds_fail_on_missing(make_record) -> None:
    record = make_record("A", score=80, dividend_yield=None)
    assert at_least(record, "score", 80)
    assert not greater_than(record, "score", 80)
    assert not greater_than(record, "dividend_yield", 0.0)
    assert not less_than(record, "dividend_yield", 1.0)


def test_less_than_field_requires_both_sides(make_record) -> None:
    assert less_than_field(make_record("A", pbv=1.0, fair_pbv=1.2), "pbv", "fair_pbv")
    assert not less_than_field(make_record("B", pbv=1.2, fair_pbv=1.2), "pbv", "fair_pbv")
    assert not less_than_field(make_record("C", pbv=0.5), "pbv", "fair_pbv")


def test_score_in_range_is_inclusive(make_record) -> None:
    assert score_in_range(make_record("A", score=50), 50, 60)
    assert score_in_range(make_record("B", score=60), 50, 60)
    assert not score_in_range(make_record("C", score=61), 50, 60)
    assert not score_in_range(make_record("D"), 0, 100)
