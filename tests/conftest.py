"""
Pytest fixtures for tests.

Randomness is injected through SequenceRandomSource so spin trajectories are
reproducible: the first sample picks the number of turns, the second the
resting offset within the final turn.
"""

import pytest

from domain.models.segment import Segment
from domain.models.wheel import WheelModel
from services.spin_controller import RandomSource, SpinController
from utils import wheel_drawing


class SequenceRandomSource(RandomSource):
    """Replays a fixed list of samples, cycling when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next_uniform(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


# 5 + 0.05 * 5 = 5.25 turns, resting offset 0
SCENARIO_SAMPLES = (0.05, 0.0)


@pytest.fixture(autouse=True)
def clear_drawing_caches():
    """Drawing caches are process-global; reset them between tests."""
    wheel_drawing._CACHED_STATIC_OVERLAY.clear()
    yield
    wheel_drawing._CACHED_STATIC_OVERLAY.clear()


@pytest.fixture
def sequence_random():
    """Factory for SequenceRandomSource instances."""
    return SequenceRandomSource


@pytest.fixture
def five_segments():
    return [Segment(label=str(v), value=v) for v in (10, 20, 30, 40, 50)]


@pytest.fixture
def wheel(five_segments):
    return WheelModel(five_segments)


@pytest.fixture
def controller(wheel):
    """Controller whose spins land 5.25 turns past the start angle."""
    return SpinController(wheel, random_source=SequenceRandomSource(SCENARIO_SAMPLES))
