"""Persistent JSON config helpers.

Stores the field list (suggestion and column order), UI theme, and logging
settings. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..table.records import DEFAULT_FIELDS, FieldSpec

APP_NAME = "lazylog"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "INFO"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _parse_field(raw: object) -> FieldSpec | None:
    """Accept ``"title"`` or ``{"title": ..., "keys": [...]}`` entries."""
    if isinstance(raw, str):
        title = raw.strip()
        return FieldSpec(title) if title else None
    if not isinstance(raw, dict):
        return None
    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        return None
    raw_keys = raw.get("keys", ())
    if not isinstance(raw_keys, list):
        raw_keys = []
    keys = tuple(key for key in raw_keys if isinstance(key, str) and key)
    return FieldSpec(title.strip(), keys)


def parse_fields(raw_fields: object) -> tuple[FieldSpec, ...]:
    """Normalize a config ``fields`` value, dropping duplicate titles (first wins)."""
    if not isinstance(raw_fields, list):
        return ()
    fields: dict[str, FieldSpec] = {}
    for raw in raw_fields:
        spec = _parse_field(raw)
        if spec is not None and spec.title not in fields:
            fields[spec.title] = spec
    return tuple(fields.values())


def fields_from_titles(titles: list[str]) -> tuple[FieldSpec, ...]:
    """Build field specs for titles given on the command line.

    Titles matching a default field keep that field's record keys.
    """
    defaults = {spec.title: spec for spec in DEFAULT_FIELDS}
    return tuple(defaults.get(spec.title, spec) for spec in parse_fields(titles))


def load_fields() -> tuple[FieldSpec, ...]:
    """Return configured fields, or the defaults when none are usable."""
    return parse_fields(load_config().get("fields")) or DEFAULT_FIELDS


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_log_level() -> str:
    value = load_config().get("log_level")
    if isinstance(value, str) and value.strip().upper() in LOG_LEVELS:
        return value.strip().upper()
    return DEFAULT_LOG_LEVEL


def load_log_file() -> Path | None:
    """Return the configured log file path, if any."""
    value = load_config().get("log_file")
    if not isinstance(value, str) or not value.strip():
        return None
    return Path(value.strip()).expanduser()


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    "fields_from_titles",
    "load_config",
    "load_fields",
    "load_log_file",
    "load_log_level",
    "load_theme_name",
    "parse_fields",
]
