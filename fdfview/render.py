"""Rasterising a transformed height map into an in-memory canvas."""

from __future__ import annotations

from array import array
from typing import Iterator

from fdfview.colors import Point, interpolate_color
from fdfview.mapfile import HeightMap
from fdfview.tiles import TileGrid
from fdfview.transform import (
    WIN_HEIGHT,
    WIN_WIDTH,
    View,
    apply_transformations,
    map_point,
)

DEFAULT_POINT_SIZE = 2


class Canvas:
    """A fixed-size grid of packed 0xRRGGBB pixels, black when cleared."""

    def __init__(self, width: int = WIN_WIDTH, height: int = WIN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Canvas dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = self._blank()

    def _blank(self) -> array:
        return array("L", bytes(array("L").itemsize * self.width * self.height))

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the canvas are ignored."""
        if self._contains(x, y):
            self._pixels[y * self.width + x] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Colour of one pixel; raises IndexError outside the canvas."""
        if not self._contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside the canvas")
        return self._pixels[y * self.width + x]

    def clear(self) -> None:
        """Reset every pixel to black."""
        self._pixels = self._blank()


def line_points(start: Point, end: Point) -> Iterator[Point]:
    """Pixels of the Bresenham line from start up to, but not including, end.

    Each pixel's colour is blended between the two end colours.
    """
    dx = abs(end.x - start.x)
    dy = abs(end.y - start.y)
    step_x = 1 if start.x < end.x else -1
    step_y = 1 if start.y < end.y else -1
    delta = Point(dx, dy)
    error = dx - dy
    x, y, color = start.x, start.y, start.color
    while x != end.x or y != end.y:
        color = interpolate_color(Point(x, y, start.z, color), start, end, delta)
        yield Point(x, y, start.z, color)
        twice = error * 2
        if twice > -dy:
            error -= dy
            x += step_x
        if twice < dx:
            error += dx
            y += step_y


def draw_line(canvas: Canvas, start: Point, end: Point) -> None:
    """Draw a colour-blended line onto the canvas."""
    for pixel in line_points(start, end):
        canvas.put_pixel(pixel.x, pixel.y, pixel.color)


def plot_point(canvas: Canvas, x: int, y: int, color: int, size: int) -> None:
    """Fill a square of half-width ``size`` centred on (x, y)."""
    for py in range(y - size, y + size + 1):
        for px in range(x - size, x + size + 1):
            canvas.put_pixel(px, py, color)


def render_map(
    canvas: Canvas,
    view: View,
    height_map: HeightMap,
    tiles: TileGrid,
    points_only: bool = False,
    point_size: int = DEFAULT_POINT_SIZE,
) -> int:
    """Clear the canvas and draw the map's visible tiles.

    Returns the number of map points transformed for this frame.
    """
    canvas.clear()
    if not view.zoom:
        return 0

    tiles.update_visibility(view)
    transformed: dict[tuple[int, int], Point] = {}
    for tile in tiles:
        if not tile.visible:
            continue
        for y in range(tile.start_y, tile.end_y + 1):
            for x in range(tile.start_x, tile.end_x + 1):
                point = map_point(view, height_map, x, y)
                transformed[x, y] = apply_transformations(view, point)

    for (x, y), point in transformed.items():
        if points_only:
            plot_point(canvas, point.x, point.y, point.color, point_size)
            continue
        for neighbour in ((x + 1, y), (x, y + 1)):
            target = transformed.get(neighbour)
            if target is not None:
                draw_line(canvas, point, target)
    return len(transformed)