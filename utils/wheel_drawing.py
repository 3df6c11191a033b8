"""Wheel image and spin animation generation using Pillow."""

from __future__ import annotations

import io
import math

from PIL import Image, ImageColor, ImageDraw, ImageFont
from pilmoji import Pilmoji

from config import (
    WHEEL_GIF_FPS,
    WHEEL_GIF_HOLD_MS,
    WHEEL_IMAGE_SIZE,
    WHEEL_SHOW_MOTION_TRAILS,
)
from domain.models.wheel import WheelModel, screen_rotation
from services import error_codes
from services.result import Result
from services.spin_controller import SpinController, SpinResult

# Pointer drawn at 12 o'clock (Pillow measures degrees clockwise from 3 o'clock)
POINTER_SCREEN_DEGREES = -90.0

# Cached fonts for performance (loaded once, not per frame)
_CACHED_FONTS: dict[str, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

# Cached static overlay (pointer, hub) - drawn once per size
_CACHED_STATIC_OVERLAY: dict[int, Image.Image] = {}

# Cache for pre-rendered emoji labels (avoids pilmoji calls per GIF frame)
_CACHED_EMOJI_TEXT: dict[tuple[str, int, str], Image.Image] = {}


def _get_cached_font(size: int, bold: bool = True) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Get a cached font, loading it only on first access."""
    cache_key = f"{size}_{'bold' if bold else 'regular'}"
    if cache_key not in _CACHED_FONTS:
        try:
            font_name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
            font_path = f"/usr/share/fonts/truetype/dejavu/{font_name}"
            _CACHED_FONTS[cache_key] = ImageFont.truetype(font_path, size)
        except OSError:
            _CACHED_FONTS[cache_key] = ImageFont.load_default()
    return _CACHED_FONTS[cache_key]


def _has_emoji(text: str) -> bool:
    """Check if text contains emoji characters."""
    return any(ord(c) > 0x1F00 for c in text)


def _get_emoji_text_image(
    text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, size: int, fill: str = "#ffffff"
) -> Image.Image:
    """Pre-render emoji text to a transparent image, cached across frames."""
    cache_key = (text, size, fill)
    if cache_key not in _CACHED_EMOJI_TEXT:
        temp_img = Image.new("RGBA", (size * max(4, len(text)), size * 2), (0, 0, 0, 0))
        with Pilmoji(temp_img) as pilmoji:
            pilmoji.text((0, 0), text, font=font, fill=fill)
        bbox = temp_img.getbbox()
        _CACHED_EMOJI_TEXT[cache_key] = temp_img.crop(bbox) if bbox else temp_img
    return _CACHED_EMOJI_TEXT[cache_key]


def _wheel_geometry(size: int) -> tuple[int, int]:
    """Center and radius for a square image of ``size`` pixels."""
    center = size // 2
    radius = size // 2 - max(10, size // 8)
    return center, radius


def _get_static_overlay(size: int) -> Image.Image:
    """Get cached static overlay with pointer and hub."""
    if size not in _CACHED_STATIC_OVERLAY:
        _CACHED_STATIC_OVERLAY[size] = _create_static_overlay(size)
    return _CACHED_STATIC_OVERLAY[size]


def _create_static_overlay(size: int) -> Image.Image:
    """Create the static overlay (hub and pointer) once."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    center, radius = _wheel_geometry(size)
    hub_radius = max(4, int(radius * 0.12))

    # Center hub
    draw.ellipse(
        [center - hub_radius, center - hub_radius, center + hub_radius, center + hub_radius],
        fill="#222222",
        outline="#444444",
        width=max(1, size // 100),
    )

    # Pointer: downward triangle just outside the rim at 12 o'clock
    tip_y = center - radius + max(6, size // 25)
    base_y = center - radius - max(8, size // 20)
    half_w = max(6, size // 30)
    draw.polygon(
        [(center, tip_y), (center - half_w, base_y), (center + half_w, base_y)],
        fill="#e74c3c",
        outline="#ffffff",
        width=2,
    )

    return img


def slot_screen_degrees(wheel: WheelModel, index: int) -> tuple[float, float]:
    """
    Screen start/end angle (Pillow degrees) of slot ``index`` at the wheel's
    current angle. Must agree with WheelModel.segment_index_at.
    """
    start, end = wheel.slot_bounds(index)
    turn = math.degrees(screen_rotation(wheel.angle) - wheel.pointer_offset)
    start_deg = (POINTER_SCREEN_DEGREES + math.degrees(start) + turn) % 360
    return start_deg, start_deg + math.degrees(end - start)


def _wrap_label(
    draw: ImageDraw.ImageDraw,
    text: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    max_width: float,
) -> list[str]:
    """Greedy word wrap; a single long word stays on its own line."""
    lines: list[str] = []
    line = ""
    for word in text.split(" "):
        candidate = f"{line} {word}".strip()
        width = draw.textlength(candidate, font=font)
        if width > max_width and line:
            lines.append(line)
            line = word
        else:
            line = candidate
    lines.append(line)
    return lines


def _draw_label(
    img: Image.Image,
    draw: ImageDraw.ImageDraw,
    text: str,
    position: tuple[float, float],
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    font_size: int,
    max_width: float,
) -> Image.Image:
    """Draw a centered, shadowed label. Returns the (possibly new) image."""
    text_x, text_y = position

    # Use pilmoji for emoji labels, standard draw for others
    if _has_emoji(text):
        emoji_img = _get_emoji_text_image(text, font, font_size)
        paste_x = int(text_x - emoji_img.width / 2)
        paste_y = int(text_y - emoji_img.height / 2)
        temp = Image.new("RGBA", img.size, (0, 0, 0, 0))
        temp.paste(emoji_img, (paste_x, paste_y), emoji_img)
        return Image.alpha_composite(img, temp)

    lines = _wrap_label(draw, text, font, max_width)
    line_height = font_size + 2
    top = text_y - len(lines) * line_height / 2
    for n, line in enumerate(lines):
        bbox = draw.textbbox((0, 0), line, font=font)
        text_w = bbox[2] - bbox[0]
        x = text_x - text_w / 2
        y = top + n * line_height
        draw.text((x + 1, y + 1), line, fill="#000000", font=font)
        draw.text((x, y), line, fill="#ffffff", font=font)
    return img


def create_wheel_image(
    wheel: WheelModel,
    size: int = WHEEL_IMAGE_SIZE,
    selected_idx: int | None = None,
    spinning: bool = False,
) -> Image.Image:
    """
    Render the wheel at its current angle.

    Args:
        wheel: Model providing segments and angle
        size: Image size in pixels (square)
        selected_idx: Index of a segment to highlight (landed result)
        spinning: Whether to draw motion trails

    Returns:
        RGBA PIL Image
    """
    img = Image.new("RGBA", (size, size), (30, 30, 35, 255))
    draw = ImageDraw.Draw(img)

    center, radius = _wheel_geometry(size)
    box = [center - radius, center - radius, center + radius, center + radius]
    count = wheel.segment_count()

    if count == 0:
        draw.ellipse(box, fill="#3a3a40", outline="#ffffff", width=2)
        return Image.alpha_composite(img, _get_static_overlay(size))

    font_size = max(10, size // 24)
    font = _get_cached_font(font_size)
    arc_width = wheel.segment_angular_width()
    label_max_width = radius * 0.32
    colors = [seg.resolved_color(i, count) for i, seg in enumerate(wheel.segments)]

    # Motion trails lag behind the direction of travel (counter-clockwise on screen)
    if spinning and WHEEL_SHOW_MOTION_TRAILS:
        for trail in range(3, 0, -1):
            trail_img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
            trail_draw = ImageDraw.Draw(trail_img)
            for i in range(count):
                start_deg, end_deg = slot_screen_degrees(wheel, i)
                rgb = ImageColor.getrgb(colors[i])[:3]
                trail_draw.pieslice(
                    box, start_deg + trail * 8, end_deg + trail * 8, fill=(*rgb, 60 - trail * 15)
                )
            img = Image.alpha_composite(img, trail_img)
        draw = ImageDraw.Draw(img)

    for i, segment in enumerate(wheel.segments):
        start_deg, end_deg = slot_screen_degrees(wheel, i)

        fill = ImageColor.getrgb(colors[i])[:3]
        outline_color = "#111111"
        outline_width = 2
        if selected_idx is not None and i == selected_idx:
            fill = tuple(min(255, c + 60) for c in fill)
            outline_color = "#f1c40f"
            outline_width = max(4, size // 60)

        draw.pieslice(box, start_deg, end_deg, fill=fill, outline=outline_color, width=outline_width)

        mid_angle = math.radians(start_deg + math.degrees(arc_width) / 2)
        text_radius = radius * 0.62
        position = (center + text_radius * math.cos(mid_angle), center + text_radius * math.sin(mid_angle))
        img = _draw_label(img, draw, segment.label, position, font, font_size, label_max_width)
        draw = ImageDraw.Draw(img)

    return Image.alpha_composite(img, _get_static_overlay(size))


def wheel_image_to_bytes(img: Image.Image) -> io.BytesIO:
    """Convert PIL Image to a PNG bytes buffer."""
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    buffer.seek(0)
    return buffer


def _to_gif_frame(img: Image.Image) -> Image.Image:
    return img.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE, colors=256)


def create_spin_gif(
    controller: SpinController,
    requested_duration=None,
    size: int = WHEEL_IMAGE_SIZE,
    fps: int = WHEEL_GIF_FPS,
    start_time: float = 0.0,
) -> Result[tuple[io.BytesIO, SpinResult]]:
    """
    Spin the wheel and record the animation as a GIF.

    The controller is driven with synthetic timestamps (one tick per frame at
    ``fps``), so rendering speed does not affect the trajectory. The final
    frame highlights the landed segment and is held.

    Returns:
        Result with (GIF buffer, SpinResult), or the refusal from request_spin
    """
    started = controller.request_spin(requested_duration, now=start_time)
    if not started:
        return Result.fail(started.error or "Spin refused", code=started.error_code)

    wheel = controller.wheel
    frame_ms = max(20, int(1000 / max(1, fps)))
    frames: list[Image.Image] = []
    durations: list[int] = []

    tick_index = 0
    result: SpinResult | None = None
    while True:
        frame = controller.tick(start_time + tick_index / max(1, fps))
        tick_index += 1
        if frame is None:
            break
        if frame.finished:
            result = frame.result
            break
        frames.append(_to_gif_frame(create_wheel_image(wheel, size, spinning=True)))
        durations.append(frame_ms)

    if result is None:
        return Result.fail("Spin finished without a landed segment", code=error_codes.STATE_ERROR)

    frames.append(_to_gif_frame(create_wheel_image(wheel, size, selected_idx=result.index)))
    durations.append(WHEEL_GIF_HOLD_MS)

    buffer = io.BytesIO()
    frames[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=frames[1:],
        duration=durations,
        loop=1,
    )
    buffer.seek(0)
    return Result.ok((buffer, result))
