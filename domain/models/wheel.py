"""
Wheel domain model: segment geometry and pointer resolution.

Angle convention (shared with utils/wheel_drawing.py):

- Slot ``i`` covers wheel-frame angles ``[i * width, (i + 1) * width)``, laid
  out clockwise on screen and starting at the pointer when the angle is 0.
- The renderer turns the wheel on screen by ``-angle``, so increasing the
  angle carries segments under the pointer in index order.
- ``pointer_offset`` is the pointer's fixed position in the wheel frame at
  rest, measured from the start of slot 0.
"""

import math
from collections.abc import Sequence

from domain.models.segment import Segment

TAU = 2 * math.pi


class EmptyWheelError(ValueError):
    """Raised when slot geometry is requested for a wheel with no segments."""


def screen_rotation(angle: float) -> float:
    """Rotation the renderer applies to the wheel for a model angle (radians)."""
    return -angle


class WheelModel:
    """
    Geometry plus one mutable scalar.

    The segment list is borrowed from its owner and only read here; its length
    and order are looked up on every query.
    """

    def __init__(
        self,
        segments: Sequence[Segment],
        angle: float = 0.0,
        pointer_offset: float = 0.0,
    ):
        self.segments = segments
        self.angle = angle
        self.pointer_offset = pointer_offset

    def segment_count(self) -> int:
        return len(self.segments)

    def segment_angular_width(self) -> float:
        count = self.segment_count()
        if count == 0:
            raise EmptyWheelError("Wheel has no segments")
        return TAU / count

    def normalized_angle(self, angle: float, pointer_offset: float | None = None) -> float:
        """
        Position of the pointer in the wheel frame, in [0, 2π).

        The pointer stays fixed while the wheel turns under it, so the screen
        rotation is inverted before the pointer offset is added.
        """
        offset = self.pointer_offset if pointer_offset is None else pointer_offset
        rotation = screen_rotation(angle)
        inverted = ((TAU - (rotation % TAU)) + TAU) % TAU
        return (inverted + offset) % TAU

    def segment_index_at(self, angle: float, pointer_offset: float | None = None) -> int:
        """Index of the segment under the pointer, always within [0, count - 1]."""
        width = self.segment_angular_width()
        index = math.floor(self.normalized_angle(angle, pointer_offset) / width)
        # Float error at exact slot boundaries can land one past either end
        return max(0, min(index, self.segment_count() - 1))

    def segment_at(self, angle: float, pointer_offset: float | None = None) -> Segment:
        return self.segments[self.segment_index_at(angle, pointer_offset)]

    def slot_bounds(self, index: int) -> tuple[float, float]:
        """Wheel-frame start and end angle (radians) of slot ``index``."""
        width = self.segment_angular_width()
        return index * width, (index + 1) * width

    def set_angle(self, angle: float) -> None:
        self.angle = angle
