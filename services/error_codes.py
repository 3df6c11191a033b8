"""
Standard error codes for the service layer.

Callers branch on these instead of parsing Result.error text.

Usage:
    from services.error_codes import SPIN_IN_PROGRESS
    from services.result import Result

    if controller.is_spinning:
        return Result.fail("Wheel is spinning", code=SPIN_IN_PROGRESS)
"""

# General errors
VALIDATION_ERROR = "validation_error"
STATE_ERROR = "state_error"

# Spin errors
SPIN_IN_PROGRESS = "spin_in_progress"
NO_SEGMENTS = "no_segments"

# Segment editing errors
SEGMENT_NOT_FOUND = "segment_not_found"

# Player/turn errors
PLAYER_NOT_FOUND = "player_not_found"
NO_PLAYERS = "no_players"
