"""Read-only JSON configuration.

Locates ``config.json`` in the per-user config directory and folds valid keys
over built-in defaults. All access is defensive: a missing or malformed file,
or a value of the wrong type, falls back to the default for that key.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from .catalog import DEFAULT_EXCLUDE, DEFAULT_EXTENSION
from .runner import DEFAULT_RUNNER

logger = logging.getLogger(__name__)

APP_NAME = "ujust-picker"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "UJUST_PICKER_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_RECIPE_DIR = Path("/usr/share/ublue-os/just")


@dataclass(frozen=True)
class PickerConfig:
    recipe_dir: Path = DEFAULT_RECIPE_DIR
    extension: str = DEFAULT_EXTENSION
    exclude: str = DEFAULT_EXCLUDE
    runner: str = DEFAULT_RUNNER
    theme: str = "default"
    no_color: bool = False


def config_path() -> Path:
    """Return the config file location, honouring ``UJUST_PICKER_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config_data(path: Path | None = None) -> dict[str, object]:
    """Load the raw JSON object, or an empty dict when unusable."""
    target = config_path() if path is None else path
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", target, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _nonempty_string(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def load_config(path: Path | None = None) -> PickerConfig:
    data = load_config_data(path)
    config = PickerConfig()

    recipe_dir = _nonempty_string(data.get("recipe_dir"))
    if recipe_dir is not None:
        config = replace(config, recipe_dir=Path(recipe_dir).expanduser())
    for key in ("extension", "exclude", "runner", "theme"):
        value = _nonempty_string(data.get(key))
        if value is not None:
            config = replace(config, **{key: value})
    no_color = data.get("no_color")
    if isinstance(no_color, bool):
        config = replace(config, no_color=no_color)
    if os.environ.get("NO_COLOR"):
        config = replace(config, no_color=True)
    return config


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_RECIPE_DIR",
    "PickerConfig",
    "config_path",
    "load_config",
    "load_config_data",
]
