"""
Application services layer.

Services drive the wheel model and return Result objects instead of raising
for refused operations.
"""

# Result type for consistent error handling
from services.result import Result

from services.game_service import GameService
from services.segment_service import SegmentService
from services.spin_controller import (
    PythonRandomSource,
    RandomSource,
    SpinController,
    SpinFrame,
    SpinResult,
    SpinSession,
    SpinState,
    WheelSnapshot,
)
from services.spin_runner import run_spin

__all__ = [
    "GameService",
    "SegmentService",
    "SpinController",
    "SpinFrame",
    "SpinResult",
    "SpinSession",
    "SpinState",
    "WheelSnapshot",
    "RandomSource",
    "PythonRandomSource",
    "run_spin",
    "Result",
]
