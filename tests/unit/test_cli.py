"""Unit tests for the idx-screener command line interface."""

from __future__ import annotations

import json
import logging

import pytest

from idx_screener.cli import main


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def snapshot_file(tmp_path):
    rows = [
        {"stock_code": "BBCA", "name": "Bank Central Asia", "date": "2024-06-03", "sector": "Financials",
         "action": "BUY", "score": 90, "pbv": 4.5, "fair_pbv": 5.0},
        {"stock_code": "TLKM", "name": "Telkom Indonesia", "date": "2024-06-03", "sector": "Infrastructures",
         "action": "HOLD", "score": 70, "pbv": 2.4, "fair_pbv": 2.0},
        {"stock_code": "ADRO", "name": "Adaro Energy", "date": "2024-06-03", "sector": "Energy",
         "action": "BUY", "score": 85, "pbv": 0.9, "fair_pbv": 1.3},
        {"stock_code": "OLD1", "name": "Old Row", "date": "2024-05-31", "sector": "Energy",
         "action": "BUY", "score": 99},
    ]
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"stocks": rows}), encoding="utf-8")
    return path


def _table_codes(output: str) -> list[str]:
    codes = []
    for line in output.splitlines():
        token = line.strip().split(" ")[0] if line.strip() else ""
        if token in {"BBCA", "TLKM", "ADRO", "OLD1"}:
            codes.append(token)
    return codes


def test_no_command_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "idx-screener" in capsys.readouterr().out


def test_info_lists_presets(capsys, snapshot_file) -> None:
    main(["--snapshot", str(snapshot_file), "info"])
    out = capsys.readouterr().out
    assert "strong-buy" in out
    assert "Snapshot Exists: True" in out


def test_validate(capsys, snapshot_file) -> None:
    main(["--snapshot", str(snapshot_file), "validate"])
    out = capsys.readouterr().out
    assert "[OK] Date: 2024-06-03" in out
    assert "Records: 3" in out


def test_validate_missing_file(capsys, tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--snapshot", str(tmp_path / "nope.json"), "validate"])
    assert excinfo.value.code == 1
    assert "[X]" in capsys.readouterr().out


def test_screen_filters_and_sorts(capsys, snapshot_file) -> None:
    main(["--snapshot", str(snapshot_file), "screen", "--action", "BUY", "--sort", "score"])
    out = capsys.readouterr().out
    assert "2 of 3 stocks" in out
    assert "SCR ▼" in out
    assert _table_codes(out) == ["BBCA", "ADRO"]


def test_screen_preset_ascending(capsys, snapshot_file) -> None:
    main(["--snapshot", str(snapshot_file), "screen", "--preset", "value", "--sort", "pbv", "--asc"])
    out = capsys.readouterr().out
    assert _table_codes(out) == ["ADRO", "BBCA"]


def test_screen_no_match(capsys, snapshot_file) -> None:
    main(["--snapshot", str(snapshot_file), "screen", "--search", "zzz"])
    assert "NO MATCHING STOCKS" in capsys.readouterr().out


def test_screen_limit(capsys, snapshot_file) -> None:
    main(["--snapshot", str(snapshot_file), "screen", "--limit", "1"])
    out = capsys.readouterr().out
    assert _table_codes(out) == ["BBCA"]
    assert "... 2 more" in out


def test_screen_unknown_preset_exits_2(capsys, snapshot_file) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--snapshot", str(snapshot_file), "screen", "--preset", "momentum"])
    assert excinfo.value.code == 2
    assert "Unknown preset" in capsys.readouterr().out
