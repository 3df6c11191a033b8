"""
Entry point: spin the default wheel once and save the animation.
"""

import logging

# Configure logging before the application modules create their loggers
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,
)
logger = logging.getLogger("wheel_spin")

from config import DEFAULT_SEGMENTS, WHEEL_DEFAULT_SPIN_SECONDS, WHEEL_OUTPUT_PATH  # noqa: E402
from domain.models.segment import Segment  # noqa: E402
from domain.models.wheel import WheelModel  # noqa: E402
from services.spin_controller import SpinController  # noqa: E402
from utils.wheel_drawing import create_spin_gif  # noqa: E402


def build_default_controller() -> SpinController:
    segments = [Segment.from_dict(data) for data in DEFAULT_SEGMENTS]
    return SpinController(WheelModel(segments))


def main() -> int:
    controller = build_default_controller()
    outcome = create_spin_gif(controller, WHEEL_DEFAULT_SPIN_SECONDS)
    if not outcome:
        logger.error(f"Spin failed ({outcome.error_code}): {outcome.error}")
        return 1

    buffer, result = outcome.value
    with open(WHEEL_OUTPUT_PATH, "wb") as f:
        f.write(buffer.getvalue())
    logger.info(f"Landed on {result.label!r} ({result.value} points); animation saved to {WHEEL_OUTPUT_PATH}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
