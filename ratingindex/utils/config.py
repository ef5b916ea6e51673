"""YAML configuration for dataset loading, with ``--set key=value`` overrides."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Iterable, Mapping, MutableMapping

import yaml

DATA_DEFAULTS: Mapping[str, Any] = {
    "source": "builtin",
    "dataset": "ml-100k",
    "root": "data",
    "download_dir": "download",
    "on_malformed": "raise",
    "file": None,
    "sep": ",",
    "header": False,
}

DATA_SOURCES = ("builtin", "csv", "netflix")


def load_config(config_path: Path) -> Mapping[str, Any]:
    """Parse a YAML configuration file; an empty file yields an empty mapping."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, Mapping):
        raise ValueError(f"Configuration root in {config_path} must be a mapping.")
    return loaded


def parse_override(expression: str) -> tuple[str, Any]:
    """
    Split a ``dotted.key=value`` expression; the value is parsed as YAML.

    >>> parse_override("data.header=true")
    ('data.header', True)
    """
    key, sep, raw_value = expression.partition("=")
    key = key.strip()
    if not sep or not key or "" in key.split("."):
        raise ValueError(f"Override must look like 'dotted.key=value', got {expression!r}")
    return key, yaml.safe_load(raw_value)


def _assign(config: MutableMapping[str, Any], dotted_key: str, value: Any) -> None:
    *parents, leaf = dotted_key.split(".")
    current = config
    for depth, key in enumerate(parents):
        child = current.setdefault(key, {})
        if not isinstance(child, MutableMapping):
            prefix = ".".join(parents[: depth + 1])
            raise ValueError(f"Cannot override '{dotted_key}': '{prefix}' is not a section.")
        current = child
    current[leaf] = value


def apply_overrides(config: Mapping[str, Any], expressions: Iterable[str]) -> dict[str, Any]:
    """Return a copy of ``config`` with every ``key=value`` override applied."""
    updated = copy.deepcopy(dict(config))
    for expression in expressions:
        key, value = parse_override(expression)
        _assign(updated, key, value)
    return updated


def data_settings(config: Mapping[str, Any]) -> dict[str, Any]:
    """
    The ``data`` section merged over DATA_DEFAULTS.

    Raises ``ValueError`` for an unknown source, or a csv/netflix source
    without a ``file``.
    """
    section = config.get("data") or {}
    if not isinstance(section, Mapping):
        raise ValueError("'data' configuration section must be a mapping.")
    settings = {**DATA_DEFAULTS, **section}
    if settings["source"] not in DATA_SOURCES:
        raise ValueError(
            f"Unknown data.source '{settings['source']}' (expected one of {DATA_SOURCES})"
        )
    if settings["source"] != "builtin" and not settings["file"]:
        raise ValueError(f"data.file is required when data.source is '{settings['source']}'")
    return settings
