"""Utility helpers shared across modules."""

from .config import (  # noqa: F401
    DATA_DEFAULTS,
    apply_overrides,
    data_settings,
    load_config,
    parse_override,
)
