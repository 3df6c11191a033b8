"""
Domain models - pure data structures and geometry, no service dependencies.
"""

from domain.models.player import Player
from domain.models.segment import Segment, display_color
from domain.models.wheel import EmptyWheelError, WheelModel

__all__ = ["Player", "Segment", "display_color", "WheelModel", "EmptyWheelError"]
