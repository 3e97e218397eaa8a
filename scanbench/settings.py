"""
Runtime settings with environment overrides.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional


DEFAULT_SETTINGS: Dict[str, Any] = {
    "interval_seconds": 3.0,
    "tick_seconds": 0.1,
    "default_template": "type1",
    "activity_limit": 500,
    "log_level": "WARNING",
}

ENV_OVERRIDES: Dict[str, str] = {
    "interval_seconds": "SCANBENCH_INTERVAL",
    "tick_seconds": "SCANBENCH_TICK",
    "default_template": "SCANBENCH_TEMPLATE",
    "activity_limit": "SCANBENCH_ACTIVITY_LIMIT",
    "log_level": "SCANBENCH_LOG_LEVEL",
}


def _coerce(raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            value = int(raw)
        except ValueError:
            return default
        return value if value >= 0 else default
    if isinstance(default, float):
        try:
            value = float(raw)
        except ValueError:
            return default
        # NaN and non-positive periods are meaningless here
        return value if value > 0 else default
    return raw.strip() or default


def load_settings(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Build the effective settings.

    Args:
        env: Mapping to read overrides from (defaults to os.environ)

    Returns:
        A fresh dict; DEFAULT_SETTINGS is never modified.
    """
    env = os.environ if env is None else env
    settings = dict(DEFAULT_SETTINGS)
    for key, var in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw is not None and raw != "":
            settings[key] = _coerce(raw, DEFAULT_SETTINGS[key])
    settings["log_level"] = str(settings["log_level"]).upper()
    return settings
