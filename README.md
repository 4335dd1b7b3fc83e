# fdfview

A wireframe viewer for FdF height maps. A map is a plain text grid of
altitudes separated by spaces; each value may carry a colour after a
comma, written in hexadecimal (`10,0xFF0000`). The viewer draws the grid
as a 3D wireframe in an isometric or parallel projection in a
1920x1080 window and lets you move, zoom, rotate and recolour it from
the keyboard.

## Installation

```
pip install .
```

This installs the `fdfview` command and its one dependency, pygame.

## Usage

```
fdfview path/to/map.fdf
```

The command takes exactly one argument. Every row of the map must hold
the same number of values; a map that cannot be opened, is empty or has
rows of different widths is rejected with a line starting `Error:` on
standard error and exit status 1. When the window is closed the command
prints `FdF closed cleanly` and exits with status 0.

Example map:

```
0 0 0 0
0 5 5 0
0 5,0xFF0000 5 0
0 0 0 0
```

When no value in the map carries a colour, points are coloured by
altitude.

## Controls

| Key             | Action                                                          |
|-----------------|-----------------------------------------------------------------|
| `W` `A` `S` `D` | Move the view                                                   |
| `I` / `O`       | Zoom in / out                                                   |
| `1` / `2`       | Rotate around the X axis                                        |
| `3` / `4`       | Rotate around the Y axis                                        |
| `5` / `6`       | Rotate around the Z axis                                        |
| `7` / `8`       | Decrease / increase the flattening factor                       |
| `TAB`           | Toggle isometric and parallel projection                        |
| `P`             | Toggle point-cloud mode                                         |
| `C`             | Switch between the map's colours and altitude colours           |
| `V`             | Cycle colour modes: map, altitude, rainbow pulse, blue gradient |
| `R`             | Reset the view                                                  |
| `ESC`           | Close the viewer (closing the window works too)                 |

The rainbow pulse mode animates while it is active.

## Using it as a library

The pieces work without opening a window:

```python
from fdfview.mapfile import load_map
from fdfview.transform import default_view
from fdfview.tiles import build_tiles
from fdfview.render import Canvas, render_map

height_map = load_map("map.fdf")
view = default_view(height_map.width, height_map.height)
tiles = build_tiles(height_map, 64)
canvas = Canvas()
render_map(canvas, view, height_map, tiles, False, 2)
print(canvas.get_pixel(960, 540))
```

- `fdfview.mapfile`: `load_map`, `parse_dimensions` and the `HeightMap`
  dataclass; malformed maps raise `MapError`.
- `fdfview.colors`: `hsv_to_rgb`, `altitude_color`,
  `rainbow_pulse_color`, `blue_gradient_color` and `interpolate_color`.
- `fdfview.transform`: the `View` dataclass, `ColorMode`, the rotation
  and projection helpers, and `project_point`.
- `fdfview.tiles`: `build_tiles` splits a map into a `TileGrid`;
  tiles whose corners all fall off screen are skipped when rendering.
- `fdfview.render`: `Canvas`, `line_points` (the pixels of a Bresenham
  line), `draw_line`, `plot_point` and `render_map`.
- `fdfview.display`: `Display` holds the viewer state; its
  `handle_key`, `tick` and `render` methods drive it, and an optional
  presenter callable receives the canvas after each redraw.

## What it does not do

The window shows only the rendered map: no list of controls or status
text is drawn on screen. There is no mouse control.

## Running the tests

```
pip install .[test]
pytest
```