"""Colour constants, palettes and gradient helpers for wireframe rendering."""

from __future__ import annotations

import math
from dataclasses import dataclass

B_YELLOW = 0xFFFF00
D_PURPLE = 0x301934
OLIVE = 0x808000
S_BROWN = 0x8B4513
PURPLE = 0x800080
WHITE = 0xFFFFFF
BLUE = 0x66CCFF
DARK_BLUE = 0x000066
TILE_BOUNDARY = 0xFF0000

RED_SHIFT = 16
GREEN_SHIFT = 8
CHANNEL_MASK = 0xFF
ALPHA_SHIFT = 24


@dataclass(frozen=True, slots=True)
class Point:
    """A point in map or screen space carrying an RGB colour."""

    x: int
    y: int
    z: int = 0
    color: int = WHITE


def _pack(r: int, g: int, b: int) -> int:
    return (r << RED_SHIFT) | (g << GREEN_SHIFT) | b


def _channels(color: int) -> tuple[int, int, int]:
    return (
        (color >> RED_SHIFT) & CHANNEL_MASK,
        (color >> GREEN_SHIFT) & CHANNEL_MASK,
        color & CHANNEL_MASK,
    )


def hsv_to_rgb(h: float, s: float, v: float) -> int:
    """Convert hue (degrees), saturation and value to a packed 0xRRGGBB int."""
    chroma = v * s
    h_prime = h / 60.0
    x = chroma * (1 - abs(math.fmod(h_prime, 2) - 1))
    m = v - chroma

    r = g = b = 0.0
    if 0 <= h_prime < 1:
        r, g = chroma, x
    elif h_prime < 2:
        r, g = x, chroma
    elif h_prime < 3:
        g, b = chroma, x
    elif h_prime < 4:
        g, b = x, chroma
    elif h_prime < 5:
        r, b = x, chroma
    elif h_prime < 6:
        r, b = chroma, x

    return _pack(int((r + m) * 255), int((g + m) * 255), int((b + m) * 255))


def percentage_in_range(start: int, end: int, value: int) -> float:
    """Position of value between start and end; 1.0 when the range is empty."""
    span = end - start
    if not span:
        return 1.0
    return (value - start) / span


def interpolate_light(start: int, end: int, percentage: float) -> int:
    """Linearly blend two channel intensities, truncating toward zero."""
    return int((1 - percentage) * start + percentage * end)


def interpolate_color(current: Point, start: Point, end: Point, delta: Point) -> int:
    """Colour of a line pixel blended between the line's end colours.

    The blend follows the dominant axis given by ``delta``.
    """
    if current.color == end.color:
        return current.color
    if delta.x > delta.y:
        percentage = percentage_in_range(start.x, end.x, current.x)
    else:
        percentage = percentage_in_range(start.y, end.y, current.y)
    blended = (
        interpolate_light(a, b, percentage)
        for a, b in zip(_channels(start.color), _channels(end.color))
    )
    r, g, b = blended
    return _pack(r, g, b)


def altitude_color(min_z: int, max_z: int, z: int) -> int:
    """Banded palette colour for an altitude within the map's range."""
    percentage = percentage_in_range(min_z, max_z, z)
    if percentage < 0.1:
        return D_PURPLE
    if percentage < 0.3:
        return S_BROWN
    if percentage < 0.5:
        return OLIVE
    if percentage < 0.7:
        return B_YELLOW
    return PURPLE


def rainbow_pulse_color(min_z: int, max_z: int, z: int, color_time: float) -> int:
    """Rainbow hue by altitude, shifted by an animation time in degrees."""
    percentage = percentage_in_range(min_z, max_z, z)
    hue = math.fmod(360.0 * percentage + color_time, 360.0)
    return hsv_to_rgb(hue, 1.0, 1.0)


def blue_gradient_color(min_z: int, max_z: int, z: int) -> int:
    """Gradient from dark blue at the lowest altitude to light blue at the highest."""
    percentage = percentage_in_range(min_z, max_z, z)
    low = _channels(DARK_BLUE)
    high = _channels(BLUE)
    r, g, b = (interpolate_light(a, c, percentage) for a, c in zip(low, high))
    return _pack(r, g, b)