"""
SpinController: spin lifecycle and time-based trajectory for one wheel.

The controller never schedules itself. A driver (an animation loop, the GIF
renderer, a test) calls tick(now) once per frame with non-decreasing
timestamps until the returned frame reports the spin finished.
"""

from __future__ import annotations

import logging
import math
import random
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from config import (
    WHEEL_DEFAULT_SPIN_SECONDS,
    WHEEL_EXTRA_ROTATIONS,
    WHEEL_MAX_SPIN_SECONDS,
    WHEEL_MIN_ROTATIONS,
    WHEEL_MIN_SPIN_SECONDS,
)
from domain.models.segment import Segment
from domain.models.wheel import TAU, EmptyWheelError, WheelModel
from services import error_codes
from services.result import Result
from utils.debug_logging import debug_log

logger = logging.getLogger("wheel_spin.services.spin_controller")


class SpinState(Enum):
    """Lifecycle states of a controller."""

    IDLE = "idle"
    SPINNING = "spinning"


class RandomSource(ABC):
    """Source of uniform samples used to randomize a spin."""

    @abstractmethod
    def next_uniform(self) -> float:
        """Return a float in [0, 1)."""


class PythonRandomSource(RandomSource):
    """RandomSource backed by random.Random (optionally seeded)."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def next_uniform(self) -> float:
        return self._rng.random()


@dataclass(frozen=True)
class SpinSession:
    """Trajectory parameters of the active spin."""

    start_angle: float
    target_angle: float
    start_time: float
    duration: float  # seconds, already sanitized
    total_rotations: float
    final_offset: float
    spin_id: int = 0  # 1-based count of spins accepted by the controller

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


@dataclass(frozen=True)
class SpinResult:
    """Segment the wheel came to rest on."""

    segment: Segment
    index: int
    angle: float
    duration: float
    spin_id: int = 0

    @property
    def label(self) -> str:
        return self.segment.label

    @property
    def value(self) -> int:
        return self.segment.value


@dataclass(frozen=True)
class SpinFrame:
    """Output of one tick."""

    angle: float
    progress: float
    eased: float
    finished: bool = False
    result: SpinResult | None = None  # None unless finished (or wheel emptied mid-spin)


@dataclass(frozen=True)
class WheelSnapshot:
    """Read-only view for debugging and inspection. Segments are copies."""

    segments: tuple[Segment, ...]
    angle: float
    is_spinning: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "segments": [seg.to_dict() for seg in self.segments],
            "angle": self.angle,
            "is_spinning": self.is_spinning,
        }


def sanitize_duration(
    requested: Any,
    default: float = WHEEL_DEFAULT_SPIN_SECONDS,
    minimum: float = WHEEL_MIN_SPIN_SECONDS,
    maximum: float = WHEEL_MAX_SPIN_SECONDS,
) -> float:
    """
    Turn a raw duration request into seconds within [minimum, maximum].

    Missing, non-numeric, NaN and zero inputs fall back to the default before
    clamping, like an empty or cleared duration field.
    """
    try:
        duration = float(requested)
    except (TypeError, ValueError):
        duration = default
    if math.isnan(duration) or duration == 0:
        duration = default
    return min(max(duration, minimum), maximum)


def ease_out_cubic(t: float) -> float:
    """Fast start, smooth deceleration to a stop at t=1."""
    return 1 - (1 - t) ** 3


class SpinController:
    """
    Drives a WheelModel through randomized spins.

    At most one spin is active at a time. Requests made while spinning, or
    against an empty wheel, are refused with a failed Result and change
    nothing.
    """

    def __init__(
        self,
        wheel: WheelModel,
        random_source: RandomSource | None = None,
        clock: Callable[[], float] | None = None,
        on_redraw: Callable[[WheelModel], None] | None = None,
        on_result: Callable[[SpinResult], None] | None = None,
    ):
        self.wheel = wheel
        self.random_source = random_source or PythonRandomSource()
        self.clock = clock or time.monotonic
        self.on_redraw = on_redraw
        self.on_result = on_result
        self._state = SpinState.IDLE
        self._session: SpinSession | None = None
        self._last_result: SpinResult | None = None
        self._spin_count = 0

    @property
    def state(self) -> SpinState:
        return self._state

    @property
    def is_spinning(self) -> bool:
        return self._state is SpinState.SPINNING

    @property
    def session(self) -> SpinSession | None:
        return self._session

    @property
    def last_result(self) -> SpinResult | None:
        return self._last_result

    def request_spin(self, requested_duration: Any = None, now: float | None = None) -> Result[SpinSession]:
        """
        Start a spin if the wheel is idle and has segments.

        Args:
            requested_duration: Raw duration request in seconds (sanitized here)
            now: Start timestamp in seconds; defaults to the controller clock

        Returns:
            Result with the new SpinSession, or a failure with
            SPIN_IN_PROGRESS / NO_SEGMENTS
        """
        if self.is_spinning:
            logger.info("Spin request ignored: wheel is already spinning")
            return Result.fail("Wheel is already spinning", code=error_codes.SPIN_IN_PROGRESS)

        if self.wheel.segment_count() == 0:
            logger.info("Spin request ignored: wheel has no segments")
            return Result.fail("Wheel has no segments", code=error_codes.NO_SEGMENTS)

        duration = sanitize_duration(requested_duration)
        start_angle = self.wheel.angle
        total_rotations = WHEEL_MIN_ROTATIONS + self.random_source.next_uniform() * WHEEL_EXTRA_ROTATIONS
        final_offset = self.random_source.next_uniform() * TAU
        target_angle = start_angle + TAU * total_rotations + final_offset

        session = SpinSession(
            start_angle=start_angle,
            target_angle=target_angle,
            start_time=self.clock() if now is None else now,
            duration=duration,
            total_rotations=total_rotations,
            final_offset=final_offset,
            spin_id=self._spin_count + 1,
        )
        self._spin_count = session.spin_id
        self._session = session
        self._state = SpinState.SPINNING

        logger.info(
            f"Spin started: duration={duration:.2f}s, rotations={total_rotations:.3f}, "
            f"start={start_angle:.4f}, target={target_angle:.4f}"
        )
        debug_log(
            "spin_start",
            "spin_controller.py:request_spin",
            "spin accepted",
            {
                "requested": repr(requested_duration),
                "duration": duration,
                "start_angle": start_angle,
                "target_angle": target_angle,
                "segments": self.wheel.segment_count(),
            },
            spin_id=session.spin_id,
        )
        return Result.ok(session)

    def progress_at(self, now: float) -> float:
        """Linear progress of the active spin at ``now``, clamped to [0, 1]."""
        session = self._session
        if session is None:
            return 0.0
        if session.duration <= 0 or now >= session.end_time:
            return 1.0
        return min(max((now - session.start_time) / session.duration, 0.0), 1.0)

    def tick(self, now: float) -> SpinFrame | None:
        """
        Advance the active spin to ``now``.

        Writes the interpolated angle into the wheel and requests a redraw.
        On the tick where progress reaches 1, the landed segment is resolved
        and the controller returns to idle.

        Returns:
            SpinFrame for this tick, or None when no spin is active
        """
        session = self._session
        if not self.is_spinning or session is None:
            return None

        progress = self.progress_at(now)
        eased = ease_out_cubic(progress)
        if progress >= 1:
            angle = session.target_angle
        else:
            angle = session.start_angle + (session.target_angle - session.start_angle) * eased

        self.wheel.set_angle(angle)
        if self.on_redraw:
            self.on_redraw(self.wheel)

        if progress < 1:
            return SpinFrame(angle=angle, progress=progress, eased=eased)

        return self._finish(angle, progress, eased)

    def _finish(self, angle: float, progress: float, eased: float) -> SpinFrame:
        session = self._session
        self._state = SpinState.IDLE
        self._session = None

        try:
            index = self.wheel.segment_index_at(angle)
        except EmptyWheelError:
            logger.warning("Spin finished on a wheel whose segments were removed mid-spin")
            return SpinFrame(angle=angle, progress=progress, eased=eased, finished=True)

        result = SpinResult(
            segment=self.wheel.segments[index],
            index=index,
            angle=angle,
            duration=session.duration if session else 0.0,
            spin_id=session.spin_id if session else 0,
        )
        self._last_result = result

        logger.info(f"Spin landed on segment {index} ({result.label!r}) at angle {angle:.4f}")
        debug_log(
            "spin_complete",
            "spin_controller.py:tick",
            "spin resolved",
            {"index": index, "label": result.label, "angle": angle},
            spin_id=result.spin_id,
        )
        if self.on_result:
            self.on_result(result)
        return SpinFrame(angle=angle, progress=progress, eased=eased, finished=True, result=result)

    def snapshot(self) -> WheelSnapshot:
        return WheelSnapshot(
            segments=tuple(replace(seg) for seg in self.wheel.segments),
            angle=self.wheel.angle,
            is_spinning=self.is_spinning,
        )
