"""Unit tests for idx_screener.common.records."""

from __future__ import annotations

import math

import numpy as np
import pytest

from idx_screener.common import Action, StockRecord


def test_from_mapping_normalizes_missing_numbers() -> None:
    record = StockRecord.from_mapping(
        {
            "stock_code": " BBRI ",
            "pbv": "",
            "pe_ttm": float("nan"),
            "roe": "n/a",
            "score": "77",
            "market_cap": np.float64(5.1e14),
            "altman_z": math.inf,
        }
    )

    assert record.code == "BBRI"
    assert record.pbv is None
    assert record.pe_ttm is None
    assert record.roe is None
    assert record.altman_z is None
    assert record.score == 77.0
    assert record.market_cap == pytest.approx(5.1e14)


def test_from_mapping_requires_stock_code() -> None:
    with pytest.raises(ValueError, match="stock_code"):
        StockRecord.from_mapping({"name": "no code"})


def test_from_mapping_accepts_alternate_keys() -> None:
    record = StockRecord.from_mapping(
        {"code": "UNVR", "subSector": "Personal Care", "price": 2500, "previousPrice": 2400}
    )

    assert record.sub_sector == "Personal Care"
    assert record.previous == 2400.0
    assert record.change == 100.0


def test_action_is_coerced_case_insensitively() -> None:
    assert StockRecord.from_mapping({"stock_code": "A", "action": "buy"}).action is Action.BUY
    assert StockRecord.from_mapping({"stock_code": "B", "action": "sell"}).action is None


def test_nested_lists_decode_from_json_strings() -> None:
    record = StockRecord.from_mapping(
        {
            "stock_code": "ASII",
            "indexes": '["LQ45", "IDX30"]',
            "shareholders": '[{"name": "Jardine", "percentage": 0.5011}]',
            "ipo_underwriters": [{"broker_id": "CC", "broker_name": "Mandiri Sekuritas"}],
        }
    )

    assert record.indexes == ("LQ45", "IDX30")
    assert record.shareholders[0].name == "Jardine"
    assert record.shareholders[0].percentage == pytest.approx(0.5011)
    assert record.ipo_underwriters[0].broker_id == "CC"


def test_comma_separated_indexes_are_split() -> None:
    record = StockRecord.from_mapping({"stock_code": "ASII", "indexes": "LQ45, IDX30"})
    assert record.indexes == ("LQ45", "IDX30")


def test_bool_fields_accept_strings() -> None:
    record = StockRecord.from_mapping({"stock_code": "X", "has_controlling_shareholder": "true", "margin_trading": 0})
    assert record.has_controlling_shareholder is True
    assert record.margin_trading is False


def test_unknown_keys_land_in_extras() -> None:
    record = StockRecord.from_mapping({"stock_code": "X", "_id": "abc", "custom_metric": 3})
    assert record.extras == {"custom_metric": 3}


def test_numeric_lookup(make_record) -> None:
    record = make_record("X", pbv=1.5)
    assert record.numeric("pbv") == 1.5
    assert record.numeric("fair_pbv") is None
    assert record.numeric("name") is None


def test_out_of_range_integer_is_stored_as_missing() -> None:
    record = StockRecord.from_mapping({"stock_code": "AAAA", "date": "2024-01-02", "market_cap": 10**400, "pbv": 1.2})
    assert record.market_cap is None
    assert record.pbv == 1.2
