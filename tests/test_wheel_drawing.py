"""
Tests for wheel rendering and the spin GIF.
"""

from io import BytesIO

import pytest
from PIL import Image, ImageColor

from domain.models.segment import Segment
from domain.models.wheel import TAU, WheelModel
from services import error_codes
from services.spin_controller import SpinController
from utils.wheel_drawing import (
    create_spin_gif,
    create_wheel_image,
    slot_screen_degrees,
    wheel_image_to_bytes,
)

COLORS = ["#ff0000", "#00ff00", "#0000ff", "#ffff00"]
SIZE = 200
# Inside the rim, just below the pointer tip and above the labels
UNDER_POINTER = (SIZE // 2, 40)


@pytest.fixture
def colored_wheel():
    return WheelModel([Segment(label=chr(65 + i), color=c) for i, c in enumerate(COLORS)])


def _pixel_under_pointer(wheel: WheelModel) -> tuple[int, int, int]:
    img = create_wheel_image(wheel, size=SIZE)
    return img.getpixel(UNDER_POINTER)[:3]


class TestPointerAgreement:
    """The renderer must show the segment the resolver reports."""

    @pytest.mark.parametrize("turns", [0, 3, -2, 41])
    def test_slot_under_pointer_matches_resolver(self, colored_wheel, turns):
        width = colored_wheel.segment_angular_width()
        for i in range(len(COLORS)):
            colored_wheel.set_angle((i + 0.5) * width + turns * TAU)

            assert colored_wheel.segment_index_at(colored_wheel.angle) == i
            assert _pixel_under_pointer(colored_wheel) == ImageColor.getrgb(COLORS[i])

    def test_pointer_offset_respected(self):
        wheel = WheelModel(
            [Segment(label=chr(65 + i), color=c) for i, c in enumerate(COLORS)],
            pointer_offset=TAU / 4,
        )
        width = wheel.segment_angular_width()
        for i in range(len(COLORS)):
            wheel.set_angle((i + 0.5) * width)
            expected = (i + 1) % len(COLORS)

            assert wheel.segment_index_at(wheel.angle) == expected
            assert _pixel_under_pointer(wheel) == ImageColor.getrgb(COLORS[expected])

    def test_slot_degrees_span_one_width(self, colored_wheel):
        colored_wheel.set_angle(1234.5)
        for i in range(len(COLORS)):
            start, end = slot_screen_degrees(colored_wheel, i)
            assert 0 <= start < 360
            assert end - start == pytest.approx(90)


class TestCreateWheelImage:
    def test_returns_rgba_image(self, wheel):
        img = create_wheel_image(wheel, size=SIZE)
        assert img.mode == "RGBA"
        assert img.size == (SIZE, SIZE)

    def test_default_colors_for_missing(self, wheel):
        """Segments without colors still render (hsl hues)."""
        wheel.set_angle(0.5 * wheel.segment_angular_width())
        expected = ImageColor.getrgb(wheel.segments[0].resolved_color(0, 5))[:3]
        assert _pixel_under_pointer(wheel) == expected

    def test_empty_wheel_renders(self):
        img = create_wheel_image(WheelModel([]), size=SIZE)
        assert img.size == (SIZE, SIZE)

    def test_selected_segment_is_highlighted(self, colored_wheel):
        colored_wheel.set_angle(0.5 * colored_wheel.segment_angular_width())
        img = create_wheel_image(colored_wheel, size=SIZE, selected_idx=0)
        assert img.getpixel(UNDER_POINTER)[:3] == (255, 60, 60)

    def test_spinning_frame_renders(self, colored_wheel):
        img = create_wheel_image(colored_wheel, size=SIZE, spinning=True)
        assert img.size == (SIZE, SIZE)

    def test_long_labels_render(self):
        wheel = WheelModel([Segment(label="A very long segment label indeed"), Segment(label="")])
        assert create_wheel_image(wheel, size=SIZE).size == (SIZE, SIZE)

    def test_image_to_bytes_is_png(self, wheel):
        buffer = wheel_image_to_bytes(create_wheel_image(wheel, size=SIZE))
        assert isinstance(buffer, BytesIO)
        assert buffer.tell() == 0
        assert Image.open(buffer).format == "PNG"


class TestCreateSpinGif:
    def test_gif_records_spin(self, controller):
        outcome = create_spin_gif(controller, 1, size=120, fps=10)

        assert outcome.success
        buffer, result = outcome.value
        assert result.index == 1
        assert not controller.is_spinning

        gif = Image.open(buffer)
        assert gif.format == "GIF"
        assert gif.size == (120, 120)
        assert gif.n_frames >= 2

    def test_gif_result_matches_wheel(self, wheel):
        controller = SpinController(wheel)
        _, result = create_spin_gif(controller, 1, size=96, fps=8).unwrap()
        assert result.index == wheel.segment_index_at(wheel.angle)

    def test_gif_refused_when_spinning(self, controller):
        controller.request_spin(5, now=0.0)
        outcome = create_spin_gif(controller, 1, size=96, fps=8)
        assert outcome.error_code == error_codes.SPIN_IN_PROGRESS

    def test_gif_refused_on_empty_wheel(self):
        outcome = create_spin_gif(SpinController(WheelModel([])), 1, size=96)
        assert outcome.error_code == error_codes.NO_SEGMENTS
