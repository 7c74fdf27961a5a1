from .environment import parse_env_bool, parse_env_float, parse_env_int, parse_env_str
from .settings import (
    CONFIG_ENV_VAR,
    DEFAULT_SNAPSHOT_PATH,
    PROJECT_ROOT,
    ScreenerSettings,
    SettingsError,
    load_settings,
    load_yaml_settings,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_SNAPSHOT_PATH",
    "PROJECT_ROOT",
    "ScreenerSettings",
    "SettingsError",
    "load_settings",
    "load_yaml_settings",
    "parse_env_bool",
    "parse_env_float",
    "parse_env_int",
    "parse_env_str",
]
