"""
Centralized configuration for the wheel spinner.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


# Spin duration bounds (seconds). Requests are clamped into [MIN, MAX];
# unusable input falls back to DEFAULT.
WHEEL_MIN_SPIN_SECONDS = _parse_float("WHEEL_MIN_SPIN_SECONDS", 1.0)
WHEEL_MAX_SPIN_SECONDS = _parse_float("WHEEL_MAX_SPIN_SECONDS", 12.0)
WHEEL_DEFAULT_SPIN_SECONDS = _parse_float("WHEEL_DEFAULT_SPIN_SECONDS", 5.0)

# Full turns per spin: MIN plus up to EXTRA more (uniform)
WHEEL_MIN_ROTATIONS = _parse_float("WHEEL_MIN_ROTATIONS", 5.0)
WHEEL_EXTRA_ROTATIONS = _parse_float("WHEEL_EXTRA_ROTATIONS", 5.0)

# Rendering
WHEEL_IMAGE_SIZE = _parse_int("WHEEL_IMAGE_SIZE", 400)
WHEEL_GIF_FPS = _parse_int("WHEEL_GIF_FPS", 20)
WHEEL_GIF_HOLD_MS = _parse_int("WHEEL_GIF_HOLD_MS", 3000)  # Final frame hold
WHEEL_SHOW_MOTION_TRAILS = _parse_bool("WHEEL_SHOW_MOTION_TRAILS", True)

# Async driver frame rate
WHEEL_RUNNER_FPS = _parse_int("WHEEL_RUNNER_FPS", 60)

WHEEL_OUTPUT_PATH = os.getenv("WHEEL_OUTPUT_PATH", "wheel.gif")

# Starting wheel: (label, value, color)
DEFAULT_SEGMENTS: list[dict[str, Any]] = [
    {"label": "10", "value": 10, "color": "#ff6b6b"},
    {"label": "25", "value": 25, "color": "#ffa94d"},
    {"label": "50", "value": 50, "color": "#ffd43b"},
    {"label": "75", "value": 75, "color": "#69db7c"},
    {"label": "100", "value": 100, "color": "#38d9a9"},
    {"label": "Miss", "value": 0, "color": "#748ffc"},
    {"label": "150", "value": 150, "color": "#9775fa"},
    {"label": "200", "value": 200, "color": "#ff8787"},
]
