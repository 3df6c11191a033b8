"""
SegmentService: edits to the wheel's segment list.

The list is shared with the WheelModel, so every edit is refused while a
spin is in progress. Successful edits request a redraw.
"""

import logging
from collections.abc import Callable

from domain.models.segment import Segment, display_color
from domain.models.wheel import WheelModel
from services import error_codes
from services.result import Result
from services.spin_controller import SpinController

logger = logging.getLogger("wheel_spin.services.segments")


class SegmentService:
    """Add, remove and edit segments of one wheel."""

    def __init__(
        self,
        controller: SpinController,
        on_redraw: Callable[[WheelModel], None] | None = None,
    ):
        self.controller = controller
        self.on_redraw = on_redraw

    @property
    def segments(self) -> list[Segment]:
        return self.controller.wheel.segments

    def _guard(self, index: int | None = None) -> Result | None:
        if self.controller.is_spinning:
            logger.warning("Segment edit refused: wheel is spinning")
            return Result.fail("Segments cannot change while the wheel spins", code=error_codes.SPIN_IN_PROGRESS)
        if index is not None and not 0 <= index < len(self.segments):
            return Result.fail(f"No segment at index {index}", code=error_codes.SEGMENT_NOT_FOUND)
        return None

    def _redraw(self) -> None:
        if self.on_redraw:
            self.on_redraw(self.controller.wheel)

    def add_segment(self, label: str = "New", value: int = 0) -> Result[Segment]:
        refused = self._guard()
        if refused is not None:
            return refused
        count = len(self.segments)
        segment = Segment(label=label, color=display_color(count, count + 1), value=value)
        self.segments.append(segment)
        logger.info(f"Added segment {label!r} (value={value}), wheel now has {count + 1}")
        self._redraw()
        return Result.ok(segment)

    def remove_segment(self, index: int) -> Result[Segment]:
        refused = self._guard(index)
        if refused is not None:
            return refused
        segment = self.segments.pop(index)
        logger.info(f"Removed segment {index} ({segment.label!r})")
        self._redraw()
        return Result.ok(segment)

    def update_label(self, index: int, label: str) -> Result[Segment]:
        refused = self._guard(index)
        if refused is not None:
            return refused
        segment = self.segments[index]
        segment.label = label
        self._redraw()
        return Result.ok(segment)

    def update_value(self, index: int, value) -> Result[Segment]:
        refused = self._guard(index)
        if refused is not None:
            return refused
        try:
            parsed = int(value)
        except (TypeError, ValueError, OverflowError):
            return Result.fail(f"Segment value must be a number, got {value!r}", code=error_codes.VALIDATION_ERROR)
        segment = self.segments[index]
        segment.value = parsed
        self._redraw()
        return Result.ok(segment)

    def randomize_color(self, index: int) -> Result[Segment]:
        """Give a segment a random hue drawn from the controller's random source."""
        refused = self._guard(index)
        if refused is not None:
            return refused
        segment = self.segments[index]
        segment.color = display_color(self.controller.random_source.next_uniform() * 360, 360)
        self._redraw()
        return Result.ok(segment)

    def apply(self) -> Result[int]:
        """Fill in missing colors with evenly spaced hues. Returns how many were filled."""
        refused = self._guard()
        if refused is not None:
            return refused
        total = len(self.segments)
        filled = 0
        for i, segment in enumerate(self.segments):
            if not segment.color:
                segment.color = display_color(i, total)
                filled += 1
        self._redraw()
        return Result.ok(filled)
