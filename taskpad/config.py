from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .errors import ConfigError


logger = logging.getLogger(__name__)

_DATA_FILE_ENVVAR = "TASKPAD_DATA_FILE"
_DATE_FORMAT_ENVVAR = "TASKPAD_DATE_FORMAT"
_DATETIME_FORMAT_ENVVAR = "TASKPAD_DATETIME_FORMAT"

_CONFIG_ENVVAR = "TASKPAD_CONFIG"


_override_config_path: Optional[Path] = None


@dataclass(frozen=True)
class DateFormats:
    input_date_format: str = "%d-%m-%Y"
    input_datetime_format: str = "%d-%m-%Y %H:%M"
    input_date_hint: str = "DD-MM-YYYY"
    input_datetime_hint: str = "DD-MM-YYYY HH:MM"
    display_date_format: str = "%a %d %b %Y"
    display_datetime_format: str = "%a %d %b %Y %H:%M"


@dataclass(frozen=True)
class Colors:
    primary_color: str = "{BRIGHT_CYAN}"
    secondary_color: str = "{YELLOW}"
    error_color: str = "{RED}"


@dataclass(frozen=True)
class KeyBindings:
    enter_insert_mode: str = "i"
    enter_normal_mode: str = "esc"
    quit: str = "q"
    down: str = "j"
    up: str = "k"
    save_changes: str = "enter"
    go_back: str = "b"


def _default_data_file() -> Path:
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "taskpad" / "tasks.json"
    return Path.home() / ".local" / "share" / "taskpad" / "tasks.json"


@dataclass(frozen=True)
class Settings:
    date_formats: DateFormats = DateFormats()
    colors: Colors = Colors()
    keybindings: KeyBindings = KeyBindings()
    data_file: Path = field(default_factory=_default_data_file)


def _default_config_path() -> Optional[Path]:
    p = os.getenv(_CONFIG_ENVVAR)
    if p:
        return Path(p)

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "taskpad" / "config.toml"

    home = Path.home()
    return home / ".config" / "taskpad" / "config.toml"


def _load_toml(path: Path) -> dict:
    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8", errors="replace"))
    except OSError as e:
        raise ConfigError(f"Could not read config {path}: {e}", path=str(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config {path}: {e}", path=str(path)) from e
    if not isinstance(data, dict):
        return {}
    return data


def _replace_strings(base, data: dict, keys: tuple):
    for k in keys:
        if k in data:
            v = data.get(k)
            base = replace(base, **{k: "" if v is None else str(v)})
    return base


def _settings_from_dict(base: Settings, data: dict) -> Settings:
    if not isinstance(data, dict):
        return base

    date_formats = base.date_formats
    dates_data = data.get("date_formats")
    if isinstance(dates_data, dict):
        date_formats = _replace_strings(
            date_formats,
            dates_data,
            (
                "input_date_format",
                "input_datetime_format",
                "input_date_hint",
                "input_datetime_hint",
                "display_date_format",
                "display_datetime_format",
            ),
        )

    colors = base.colors
    colors_data = data.get("colors")
    if isinstance(colors_data, dict):
        colors = _replace_strings(colors, colors_data, ("primary_color", "secondary_color", "error_color"))

    keybindings = base.keybindings
    keys_data = data.get("keybindings")
    if isinstance(keys_data, dict):
        keybindings = _replace_strings(
            keybindings,
            keys_data,
            ("enter_insert_mode", "enter_normal_mode", "quit", "down", "up", "save_changes", "go_back"),
        )

    data_file = base.data_file
    if data.get("data_file"):
        data_file = Path(str(data.get("data_file"))).expanduser()

    return replace(
        base,
        date_formats=date_formats,
        colors=colors,
        keybindings=keybindings,
        data_file=data_file,
    )


def _apply_env_overrides(cfg: Settings) -> Settings:
    date_formats = cfg.date_formats
    data_file = cfg.data_file

    if os.getenv(_DATE_FORMAT_ENVVAR):
        date_formats = replace(date_formats, input_date_format=str(os.getenv(_DATE_FORMAT_ENVVAR)))
    if os.getenv(_DATETIME_FORMAT_ENVVAR):
        date_formats = replace(date_formats, input_datetime_format=str(os.getenv(_DATETIME_FORMAT_ENVVAR)))

    if os.getenv(_DATA_FILE_ENVVAR):
        data_file = Path(str(os.getenv(_DATA_FILE_ENVVAR))).expanduser()

    return replace(cfg, date_formats=date_formats, data_file=data_file)


def load_config(*, config_path: Optional[str | Path] = None) -> Settings:
    cfg = Settings()

    path = Path(config_path) if config_path is not None else _default_config_path()
    if path is not None and path.exists() and path.is_file():
        logger.debug("loading config from %s", path)
        cfg = _settings_from_dict(cfg, _load_toml(path))

    cfg = _apply_env_overrides(cfg)
    return cfg


def configure(*, config_path: Optional[str | Path] = None) -> Settings:
    global _override_config_path

    _override_config_path = Path(config_path) if config_path is not None else None

    get_config.cache_clear()
    return get_config()


@lru_cache(maxsize=1)
def get_config() -> Settings:
    return load_config(config_path=_override_config_path)
