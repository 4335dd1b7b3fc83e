"""Interactive viewer state: key handling, animation and the program entry point."""

from __future__ import annotations

import sys
from array import array
from enum import IntEnum
from typing import Callable, Sequence

from fdfview.mapfile import HeightMap, MapError, load_map
from fdfview.render import DEFAULT_POINT_SIZE, Canvas, render_map
from fdfview.tiles import DEFAULT_TILE_SIZE, TileGrid, build_tiles
from fdfview.transform import (
    FLATTEN_STEP,
    ROTATION_STEP,
    TRANSLATION_STEP,
    WIN_HEIGHT,
    WIN_WIDTH,
    ZOOM_STEP,
    ColorMode,
    View,
    default_view,
)

INT_MAX = 2147483647
MAX_FLATTEN = 10
MAX_ROTATION_STEP = 0.1
COLOR_TIME_STEP = 2.0
WINDOW_TITLE = "FdF"
ARGS_ERR = "Invalid arguments. Syntax is './fdf map.fdf'"
CLOSED_MESSAGE = "FdF closed cleanly"

Presenter = Callable[[Canvas], None]


class Key(IntEnum):
    """X11 key codes the viewer responds to."""

    ESC = 65307
    TAB = 65289
    A = 97
    C = 99
    D = 100
    I = 105  # noqa: E741
    O = 111  # noqa: E741
    P = 112
    R = 114
    S = 115
    V = 118
    W = 119
    ONE = 49
    TWO = 50
    THREE = 51
    FOUR = 52
    FIVE = 53
    SIX = 54
    SEVEN = 55
    EIGHT = 56


_TRANSLATIONS = {
    Key.W: (0, -5 * TRANSLATION_STEP),
    Key.A: (-5 * TRANSLATION_STEP, 0),
    Key.S: (0, 5 * TRANSLATION_STEP),
    Key.D: (5 * TRANSLATION_STEP, 0),
}

_ROTATIONS = {
    Key.ONE: ("rot_x", 1),
    Key.TWO: ("rot_x", -1),
    Key.THREE: ("rot_y", 1),
    Key.FOUR: ("rot_y", -1),
    Key.FIVE: ("rot_z", 1),
    Key.SIX: ("rot_z", -1),
}


class Display:
    """A height map together with the view, tiles and canvas used to draw it."""

    def __init__(
        self,
        height_map: HeightMap,
        canvas: Canvas | None = None,
        presenter: Presenter | None = None,
        tile_size: int = DEFAULT_TILE_SIZE,
    ) -> None:
        if height_map.width <= 0 or height_map.height <= 0:
            raise ValueError("Invalid map dimensions")
        self.height_map = height_map
        self.canvas = canvas if canvas is not None else Canvas()
        self.presenter = presenter
        self.tile_size = tile_size
        self.closed = False
        self.view: View
        self.tiles: TileGrid
        self.points_only = False
        self.point_size = DEFAULT_POINT_SIZE
        self.needs_redraw = True
        self.reset()

    def reset(self) -> None:
        """Return to the starting view fitted to the map."""
        self.view = default_view(self.height_map.width, self.height_map.height)
        self.points_only = False
        self.point_size = DEFAULT_POINT_SIZE
        self.needs_redraw = True
        self.tiles = build_tiles(self.height_map, self.tile_size)

    def _zoom(self, key: Key) -> None:
        if key == Key.O and self.view.zoom > 0:
            self.view.zoom -= 5 * ZOOM_STEP
        if key == Key.I and self.view.zoom < INT_MAX:
            self.view.zoom += 5 * ZOOM_STEP

    def _translate(self, key: Key) -> None:
        dx, dy = _TRANSLATIONS[key]
        self.view.shift_x += dx
        self.view.shift_y += dy

    def _rotation_step(self) -> float:
        if self.view.zoom == 0:
            return MAX_ROTATION_STEP
        return min(ROTATION_STEP * (100.0 / self.view.zoom), MAX_ROTATION_STEP)

    def _rotate(self, key: Key) -> None:
        axis, direction = _ROTATIONS[key]
        step = self._rotation_step()
        setattr(self.view, axis, getattr(self.view, axis) + direction * step)

    def _flatten(self, key: Key) -> None:
        if key == Key.EIGHT and self.view.flat_f < MAX_FLATTEN:
            self.view.flat_f += 5 * FLATTEN_STEP
        if key == Key.SEVEN and self.view.flat_f > 0:
            self.view.flat_f -= 5 * FLATTEN_STEP

    def handle_key(self, keycode: int) -> bool:
        """Apply one key press; returns False once the viewer should close."""
        try:
            key = Key(keycode)
        except ValueError:
            key = None

        if key == Key.ESC:
            self.closed = True
            return False
        if key == Key.R:
            self.reset()
        elif key == Key.TAB:
            self.view.is_isometric = not self.view.is_isometric
            self.needs_redraw = True
        elif key in (Key.I, Key.O):
            self._zoom(key)
            self.needs_redraw = True
        elif key in _TRANSLATIONS:
            self._translate(key)
            self.needs_redraw = True
        elif key in _ROTATIONS:
            self._rotate(key)
            self.needs_redraw = True
        elif key in (Key.SEVEN, Key.EIGHT):
            self._flatten(key)
            self.needs_redraw = True
        elif key == Key.P:
            self.points_only = not self.points_only
            self.needs_redraw = True
        elif key == Key.C:
            self.view.color_mode = (
                ColorMode.DEFAULT if self.view.color_mode else ColorMode.ALTITUDE
            )
            self.needs_redraw = True
        elif key == Key.V:
            self.view.color_mode = ColorMode((self.view.color_mode + 1) % len(ColorMode))
            self.needs_redraw = True
        self.render()
        return True

    def tick(self) -> None:
        """Advance the rainbow animation by one frame when it is active."""
        if self.view.color_mode != ColorMode.RAINBOW_PULSE:
            return
        self.view.color_time += COLOR_TIME_STEP
        if self.view.color_time >= 360.0:
            self.view.color_time -= 360.0
        self.needs_redraw = True
        self.render()

    def render(self) -> int | None:
        """Redraw the canvas if needed; returns the points transformed, or None."""
        if not self.needs_redraw:
            return None
        count = render_map(
            self.canvas,
            self.view,
            self.height_map,
            self.tiles,
            self.points_only,
            self.point_size,
        )
        if self.presenter is not None:
            self.presenter(self.canvas)
        self.needs_redraw = False
        return count


def _report(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _canvas_bytes(canvas: Canvas) -> bytes:
    opaque = array("I", (pixel | 0xFF000000 for pixel in canvas._pixels))
    return opaque.tobytes()


def _run_window(height_map: HeightMap) -> None:
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((WIN_WIDTH, WIN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        pixel_format = "BGRA" if sys.byteorder == "little" else "ARGB"

        def present(canvas: Canvas) -> None:
            surface = pygame.image.frombuffer(
                _canvas_bytes(canvas), (canvas.width, canvas.height), pixel_format
            )
            screen.blit(surface, (0, 0))
            pygame.display.flip()

        special_keys = {pygame.K_ESCAPE: Key.ESC, pygame.K_TAB: Key.TAB}
        display = Display(height_map, Canvas(WIN_WIDTH, WIN_HEIGHT), present)
        display.render()
        clock = pygame.time.Clock()
        while not display.closed:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    display.closed = True
                elif event.type == pygame.KEYDOWN:
                    display.handle_key(special_keys.get(event.key, event.key))
                if display.closed:
                    break
            if not display.closed:
                display.tick()
                clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the map named on the command line and show it in a window."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        _report(ARGS_ERR)
        return 1
    try:
        height_map = load_map(args[0])
    except MapError as exc:
        _report(str(exc))
        return 1
    _run_window(height_map)
    print(CLOSED_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())