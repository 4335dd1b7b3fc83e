"""View state and the point pipeline: scaling, rotation, projection, shift."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import IntEnum

from fdfview.colors import (
    Point,
    altitude_color,
    blue_gradient_color,
    rainbow_pulse_color,
)
from fdfview.mapfile import HeightMap

WIN_WIDTH = 1920
WIN_HEIGHT = 1080

TRANSLATION_STEP = 1
ROTATION_STEP = 0.01
ZOOM_STEP = 0.1
FLATTEN_STEP = 0.01
SCALE_FACTOR = 10

_ISOMETRIC_ANGLE = 0.52359877559  # 30 degrees


class ColorMode(IntEnum):
    """How point colours are chosen."""

    DEFAULT = 0
    ALTITUDE = 1
    RAINBOW_PULSE = 2
    BLUE_GRADIENT = 3


@dataclass(slots=True)
class View:
    """Camera parameters applied to every map point."""

    shift_x: int = 0
    shift_y: int = 0
    rot_x: float = 0.0
    rot_y: float = 0.0
    rot_z: float = 0.0
    zoom: float = 1.0
    is_isometric: bool = True
    flat_f: float = 1.0
    color_mode: ColorMode = ColorMode.DEFAULT
    color_time: float = 0.0


def default_view(width: int, height: int) -> View:
    """The starting view fitted to a map of the given size."""
    if width <= 0 or height <= 0:
        raise ValueError("Invalid map dimensions")
    zoom = float(max(WIN_WIDTH // width // 2, WIN_HEIGHT // height // 2))
    return View(
        shift_x=WIN_WIDTH // 2,
        shift_y=int((WIN_HEIGHT - height * zoom) / 2),
        zoom=zoom,
    )


def rotate_x(angle: float, y: int, z: int) -> tuple[int, int]:
    """Rotate (y, z) about the x axis, truncating to integers."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return int(y * cos_a + z * sin_a), int(-y * sin_a + z * cos_a)


def rotate_y(angle: float, x: int, z: int) -> tuple[int, int]:
    """Rotate (x, z) about the y axis, truncating to integers."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return int(x * cos_a + z * sin_a), int(-x * sin_a + z * cos_a)


def rotate_z(angle: float, x: int, y: int) -> tuple[int, int]:
    """Rotate (x, y) about the z axis, truncating to integers."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return int(x * cos_a + y * sin_a), int(x * sin_a + y * cos_a)


def isometric(x: int, y: int, z: int) -> tuple[int, int]:
    """Isometric projection of a 3D point onto the screen plane."""
    return (
        int((x - y) * math.cos(_ISOMETRIC_ANGLE)),
        int(-z + (x + y) * math.sin(_ISOMETRIC_ANGLE)),
    )


def parallel(x: int, y: int, z: int) -> tuple[int, int]:
    """Parallel projection: altitude lifts the point straight up."""
    return x, y - z


def project_point(view: View, x: int, y: int, z: int) -> tuple[int, int]:
    """Screen coordinates of a map point under the given view."""
    tx = int(x * view.zoom)
    ty = int(y * view.zoom)
    tz = int(z * (view.zoom / SCALE_FACTOR) * view.flat_f)
    ty, tz = rotate_x(view.rot_x, ty, tz)
    tx, tz = rotate_y(view.rot_y, tx, tz)
    tx, ty = rotate_z(view.rot_z, tx, ty)
    project = isometric if view.is_isometric else parallel
    tx, ty = project(tx, ty, tz)
    return tx + view.shift_x, ty + view.shift_y


def apply_transformations(view: View, point: Point) -> Point:
    """Move a map point to screen space, keeping its altitude and colour."""
    sx, sy = project_point(view, point.x, point.y, point.z)
    return replace(point, x=sx, y=sy)


def map_point(view: View, height_map: HeightMap, x: int, y: int) -> Point:
    """The map point at column x, row y, coloured for the view's colour mode."""
    z = height_map.z[y][x]
    low, high = height_map.min_z, height_map.max_z
    mode = view.color_mode
    if mode == ColorMode.BLUE_GRADIENT:
        color = blue_gradient_color(low, high, z)
    elif mode == ColorMode.RAINBOW_PULSE:
        color = rainbow_pulse_color(low, high, z, view.color_time)
    elif mode == ColorMode.ALTITUDE:
        color = altitude_color(low, high, z)
    elif height_map.is_color:
        color = height_map.colors[y][x]
    else:
        color = altitude_color(low, high, z)
    return Point(x, y, z, color)