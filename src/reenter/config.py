"""Settings for the reenter CLI.

Priority, lowest first: built-in defaults, ``~/.reenter/settings.json``,
environment variables (a ``.env`` file is loaded into the environment
first), then CLI flags.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from reenter.log import LOG_LEVELS

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".reenter"

DEFAULT_SUMMARY_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_BRIEFING_MODEL = "claude-sonnet-4-6"

# settings.json key -> Settings attribute
_JSON_FIELDS: dict[str, str] = {
    "summaryModel": "summary_model",
    "briefingModel": "briefing_model",
    "pageSize": "page_size",
    "tickIntervalMs": "tick_interval_ms",
    "logLevel": "log_level",
    "logFile": "log_file",
    "keybindings": "keybindings",
}

# environment variable -> (Settings attribute, converter)
_ENV_FIELDS: dict[str, tuple[str, type]] = {
    "REENTER_SUMMARY_MODEL": ("summary_model", str),
    "REENTER_BRIEFING_MODEL": ("briefing_model", str),
    "REENTER_PAGE_SIZE": ("page_size", int),
    "REENTER_TICK_INTERVAL_MS": ("tick_interval_ms", int),
    "REENTER_LOG_LEVEL": ("log_level", str),
    "REENTER_LOG_FILE": ("log_file", str),
    "ANTHROPIC_API_KEY": ("api_key", str),
}


def default_config_dir() -> Path:
    return Path.home() / CONFIG_DIR_NAME


@dataclass
class Settings:
    summary_model: str = DEFAULT_SUMMARY_MODEL
    briefing_model: str = DEFAULT_BRIEFING_MODEL
    api_key: str | None = None
    page_size: int = 7
    tick_interval_ms: int = 400
    log_level: str = "warning"
    log_file: str = field(default_factory=lambda: str(default_config_dir() / "reenter.log"))
    keybindings: dict[str, Any] = field(default_factory=dict)

    @property
    def tick_interval(self) -> float:
        """Overlay tick interval in seconds."""
        return self.tick_interval_ms / 1000


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


def _load_from_file(path: Path) -> dict[str, Any]:
    """Load settings from a JSON file; a missing or malformed file yields ``{}``."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return data


def _from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name, (attr, convert) in _ENV_FIELDS.items():
        raw = environ.get(name)
        if not raw:
            continue
        try:
            values[attr] = convert(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid %s", name, raw, convert.__name__)
    return values


def _check_log_level(values: dict[str, Any], source: str) -> dict[str, Any]:
    """Drop a log level that logging does not know, so a lower layer applies."""
    level = values.get("log_level")
    if level is None:
        return values
    if isinstance(level, str) and level.lower() in LOG_LEVELS:
        return {**values, "log_level": level.lower()}
    logger.warning(
        "Ignoring log level %r from %s: expected one of %s", level, source, ", ".join(LOG_LEVELS)
    )
    return {k: v for k, v in values.items() if k != "log_level"}


def load_settings(
    *,
    config_dir: Path | None = None,
    overrides: dict[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    dotenv_path: Path | None = None,
) -> Settings:
    """Build the effective settings.

    ``overrides`` holds CLI-level values keyed by ``Settings`` attribute
    name; ``None`` entries are ignored so unset flags fall through.
    """
    if environ is None:
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        environ = os.environ

    settings_path = (config_dir or default_config_dir()) / "settings.json"
    file_values = _load_from_file(settings_path)

    merged: dict[str, Any] = {}
    for json_key, attr in _JSON_FIELDS.items():
        if json_key in file_values:
            merged[attr] = file_values[json_key]

    merged = _check_log_level(merged, str(settings_path))
    merged = deep_merge_settings(merged, _check_log_level(_from_env(environ), "the environment"))
    merged = deep_merge_settings(merged, overrides or {})

    settings = Settings(**merged)
    logger.debug(
        "Loaded settings from %s (summary model %s, briefing model %s)",
        settings_path,
        settings.summary_model,
        settings.briefing_model,
    )
    return settings
