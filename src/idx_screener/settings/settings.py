"""Runtime configuration for the screener CLI and shell."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .environment import parse_env_bool, parse_env_float, parse_env_int, parse_env_str

LOGGER = logging.getLogger("idx_screener.settings")

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_SNAPSHOT_PATH = PROJECT_ROOT / "data" / "snapshot.json"
CONFIG_ENV_VAR = "IDX_SCREENER_CONFIG"


class SettingsError(ValueError):
    """Raised when a settings file cannot be read or has the wrong shape."""


def _truthy(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on", "y"}


@dataclass(frozen=True)
class ScreenerSettings:
    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None
    snapshot_path: str = str(DEFAULT_SNAPSHOT_PATH)
    row_height: float = 32.0
    viewport_height: float = 640.0
    overscan: int = 20
    currency_prefix: str = "Rp"
    top_shareholders: int = 5

    @property
    def snapshot_file(self) -> Path:
        return Path(self.snapshot_path).expanduser()

    @classmethod
    def from_env(
        cls,
        *,
        environ: Mapping[str, str] | None = None,
        base: "ScreenerSettings | None" = None,
    ) -> "ScreenerSettings":
        """Build settings from ``IDX_SCREENER_*`` variables on top of ``base``."""
        b = base or cls()
        log_file = parse_env_str("IDX_SCREENER_LOG_FILE", b.log_file or "", environ=environ)
        return cls(
            environment=parse_env_str("IDX_SCREENER_ENV", b.environment, environ=environ).lower(),
            log_level=parse_env_str("IDX_SCREENER_LOG_LEVEL", b.log_level, environ=environ).upper(),
            log_json=parse_env_bool("IDX_SCREENER_LOG_JSON", b.log_json, environ=environ),
            log_file=log_file or None,
            snapshot_path=parse_env_str("IDX_SCREENER_SNAPSHOT_PATH", b.snapshot_path, environ=environ),
            row_height=parse_env_float("IDX_SCREENER_ROW_HEIGHT", b.row_height, 8.0, 200.0, environ=environ),
            viewport_height=parse_env_float(
                "IDX_SCREENER_VIEWPORT_HEIGHT",
                b.viewport_height,
                0.0,
                20_000.0,
                environ=environ,
            ),
            overscan=parse_env_int("IDX_SCREENER_OVERSCAN", b.overscan, 0, 500, environ=environ),
            currency_prefix=parse_env_str("IDX_SCREENER_CURRENCY_PREFIX", b.currency_prefix, environ=environ),
            top_shareholders=parse_env_int(
                "IDX_SCREENER_TOP_SHAREHOLDERS",
                b.top_shareholders,
                0,
                50,
                environ=environ,
            ),
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ScreenerSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            LOGGER.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
        defaults = cls()
        values: dict[str, Any] = {}
        for name in known & set(payload):
            raw = payload[name]
            if raw is None:
                continue
            current = getattr(defaults, name)
            try:
                if isinstance(current, bool):
                    values[name] = raw if isinstance(raw, bool) else _truthy(str(raw))
                elif isinstance(current, int):
                    values[name] = int(raw)
                elif isinstance(current, float):
                    values[name] = float(raw)
                else:
                    values[name] = str(raw)
            except (TypeError, ValueError, OverflowError) as exc:
                raise SettingsError(f"Invalid value for '{name}': {raw!r}") from exc
        return replace(defaults, **values)


def load_yaml_settings(path: str | Path) -> dict[str, Any]:
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise SettingsError(f"Settings file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse settings file {config_path}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise SettingsError(f"Settings file {config_path} must contain a mapping")
    section = payload.get("screener", payload)
    if not isinstance(section, Mapping):
        raise SettingsError(f"'screener' section in {config_path} must be a mapping")
    return dict(section)


def load_settings(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ScreenerSettings:
    """YAML file (explicit path or ``IDX_SCREENER_CONFIG``) overlaid by the environment."""
    path = config_path or parse_env_str(CONFIG_ENV_VAR, "", environ=environ) or None
    base = ScreenerSettings()
    if path:
        base = ScreenerSettings.from_mapping(load_yaml_settings(path))
        LOGGER.debug("Loaded settings file %s", path)
    return ScreenerSettings.from_env(environ=environ, base=base)
