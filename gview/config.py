"""Read-only JSON config for layout, timing, and appearance.

Values come from ``config.json`` in the platform config directory. The file
is never written; malformed or missing entries fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "gview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class GviewConfig:
    left_pane_percent: int = 15
    left_pane_min_percent: int = 15
    left_pane_max_percent: int = 70
    left_pane_step_percent: int = 5
    tick_ms: int = 50
    status_message_seconds: float = 4.0
    theme: str = "default"
    style: str = "monokai"
    log_file: str | None = None


def load_config_data(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path or CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_int(value: object, default: int, low: int, high: int) -> int:
    """Accept real integers inside ``[low, high]``; booleans do not count."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < low or value > high:
        return default
    return value


def _coerce_seconds(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if value > 0 else default


def _coerce_name(value: object, default: str | None) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def config_from_data(data: dict[str, object]) -> GviewConfig:
    defaults = GviewConfig()
    low = _coerce_int(data.get("left_pane_min_percent"), defaults.left_pane_min_percent, 1, 99)
    high = _coerce_int(data.get("left_pane_max_percent"), defaults.left_pane_max_percent, 1, 99)
    if low > high:
        low, high = defaults.left_pane_min_percent, defaults.left_pane_max_percent
    percent = _coerce_int(data.get("left_pane_percent"), defaults.left_pane_percent, 1, 99)
    return GviewConfig(
        left_pane_percent=max(low, min(high, percent)),
        left_pane_min_percent=low,
        left_pane_max_percent=high,
        left_pane_step_percent=_coerce_int(data.get("left_pane_step_percent"), defaults.left_pane_step_percent, 1, 50),
        tick_ms=_coerce_int(data.get("tick_ms"), defaults.tick_ms, 10, 1000),
        status_message_seconds=_coerce_seconds(data.get("status_message_seconds"), defaults.status_message_seconds),
        theme=_coerce_name(data.get("theme"), defaults.theme) or defaults.theme,
        style=_coerce_name(data.get("style"), defaults.style) or defaults.style,
        log_file=_coerce_name(data.get("log_file"), defaults.log_file),
    )


def load_config(path: Path | None = None, **overrides: object) -> GviewConfig:
    """Return the config file's settings with non-``None`` ``overrides`` applied."""
    config = config_from_data(load_config_data(path))
    known = {field.name for field in fields(GviewConfig)}
    changes = {key: value for key, value in overrides.items() if key in known and value is not None}
    return replace(config, **changes) if changes else config
