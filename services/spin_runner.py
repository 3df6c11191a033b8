"""
Async frame driver for a SpinController.

Stands in for a display's animation loop: requests a spin, then ticks the
controller once per frame until the trajectory completes.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from config import WHEEL_RUNNER_FPS
from services import error_codes
from services.result import Result
from services.spin_controller import SpinController, SpinFrame, SpinResult

logger = logging.getLogger("wheel_spin.services.spin_runner")


async def run_spin(
    controller: SpinController,
    requested_duration: Any = None,
    *,
    fps: int = WHEEL_RUNNER_FPS,
    clock: Callable[[], float] | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    on_frame: Callable[[SpinFrame], None] | None = None,
) -> Result[SpinResult | None]:
    """
    Run one spin to completion.

    Args:
        controller: Controller to drive
        requested_duration: Raw duration request passed to request_spin
        fps: Target frames per second
        clock: Timestamp source in seconds (defaults to the controller clock)
        sleep: Awaitable delay between frames
        on_frame: Called with every SpinFrame

    Returns:
        Result with the SpinResult (None if the wheel was emptied mid-spin),
        or the refusal from request_spin
    """
    clock = clock or controller.clock
    frame_interval = 1.0 / max(1, fps)

    started = controller.request_spin(requested_duration, now=clock())
    if not started:
        return Result.fail(started.error or "Spin refused", code=started.error_code)

    frames = 0
    while True:
        frame = controller.tick(clock())
        if frame is None:
            # Another caller ticked this spin to completion
            last = controller.last_result
            if last is not None and last.spin_id == started.value.spin_id:
                return Result.ok(last)
            return Result.fail("Spin ended outside this runner", code=error_codes.STATE_ERROR)
        frames += 1
        if on_frame:
            on_frame(frame)
        if frame.finished:
            logger.debug(f"Spin completed after {frames} frames")
            return Result.ok(frame.result)
        await sleep(frame_interval)
