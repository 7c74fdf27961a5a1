"""Unit tests for idx_screener.settings."""

from __future__ import annotations

import pytest

from idx_screener.settings import (
    CONFIG_ENV_VAR,
    DEFAULT_SNAPSHOT_PATH,
    ScreenerSettings,
    SettingsError,
    load_settings,
    load_yaml_settings,
    parse_env_bool,
    parse_env_float,
    parse_env_int,
    parse_env_str,
)


def test_env_parsers_use_given_mapping() -> None:
    env = {"A": " text ", "B": "yes", "C": "42", "D": "nan", "E": "oops"}
    assert parse_env_str("A", environ=env) == "text"
    assert parse_env_str("MISSING", "fallback", environ=env) == "fallback"
    assert parse_env_bool("B", environ=env) is True
    assert parse_env_bool("MISSING", True, environ=env) is True
    assert parse_env_int("C", 1, 0, 10, environ=env) == 10
    assert parse_env_int("E", 5, 0, 10, environ=env) == 5
    assert parse_env_float("D", 2.5, 0.0, 10.0, environ=env) == 2.5
    assert parse_env_float("C", 1.0, 0.0, 100.0, environ=env) == 42.0


def test_defaults() -> None:
    settings = load_settings(environ={})
    assert settings == ScreenerSettings()
    assert settings.snapshot_path == str(DEFAULT_SNAPSHOT_PATH)
    assert settings.row_height == 32.0
    assert settings.overscan == 20


def test_from_env_overrides_and_clamps() -> None:
    env = {
        "IDX_SCREENER_ENV": "Production",
        "IDX_SCREENER_LOG_LEVEL": "debug",
        "IDX_SCREENER_LOG_JSON": "1",
        "IDX_SCREENER_SNAPSHOT_PATH": "/tmp/snap.parquet",
        "IDX_SCREENER_ROW_HEIGHT": "2",
        "IDX_SCREENER_OVERSCAN": "9999",
        "IDX_SCREENER_TOP_SHAREHOLDERS": "3",
    }
    settings = ScreenerSettings.from_env(environ=env)
    assert settings.environment == "production"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.log_file is None
    assert settings.snapshot_path == "/tmp/snap.parquet"
    assert settings.row_height == 8.0
    assert settings.overscan == 500
    assert settings.top_shareholders == 3


def test_yaml_then_env_overlay(tmp_path) -> None:
    config = tmp_path / "screener.yaml"
    config.write_text(
        "screener:\n"
        "  snapshot_path: data/alt.csv\n"
        "  overscan: 5\n"
        "  currency_prefix: IDR\n"
        "  log_json: 'yes'\n",
        encoding="utf-8",
    )
    settings = load_settings(config, environ={"IDX_SCREENER_OVERSCAN": "7"})
    assert settings.snapshot_path == "data/alt.csv"
    assert settings.currency_prefix == "IDR"
    assert settings.log_json is True
    assert settings.overscan == 7


def test_config_path_from_environment(tmp_path) -> None:
    config = tmp_path / "screener.yaml"
    config.write_text("viewport_height: 480\n", encoding="utf-8")
    settings = load_settings(environ={CONFIG_ENV_VAR: str(config)})
    assert settings.viewport_height == 480.0


def test_unknown_keys_are_ignored(caplog) -> None:
    settings = ScreenerSettings.from_mapping({"overscan": 3, "theme": "dark"})
    assert settings.overscan == 3
    assert "theme" in caplog.text


def test_bad_value_raises() -> None:
    with pytest.raises(SettingsError, match="overscan"):
        ScreenerSettings.from_mapping({"overscan": "many"})


def test_yaml_errors(tmp_path) -> None:
    with pytest.raises(SettingsError, match="not found"):
        load_yaml_settings(tmp_path / "nope.yaml")

    broken = tmp_path / "broken.yaml"
    broken.write_text("screener: [unclosed\n", encoding="utf-8")
    with pytest.raises(SettingsError, match="parse"):
        load_yaml_settings(broken)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(SettingsError, match="mapping"):
        load_yaml_settings(listing)

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_yaml_settings(empty) == {}
