import pytest

from fdfview.colors import PURPLE, WHITE, Point
from fdfview.mapfile import HeightMap
from fdfview.render import Canvas, draw_line, line_points, plot_point, render_map
from fdfview.tiles import build_tiles
from fdfview.transform import View


def _flat_map(width=2, height=2):
    z = [[0] * width for _ in range(height)]
    colors = [[WHITE] * width for _ in range(height)]
    return HeightMap(width, height, z, colors, False)


def _view(**kwargs):
    params = dict(shift_x=100, shift_y=100, zoom=10.0, is_isometric=False)
    params.update(kwargs)
    return View(**params)


def test_canvas_put_and_get_pixel():
    canvas = Canvas(10, 10)
    canvas.put_pixel(3, 4, WHITE)
    assert canvas.get_pixel(3, 4) == WHITE
    assert canvas.get_pixel(4, 3) == 0


def test_canvas_ignores_out_of_range_put():
    canvas = Canvas(5, 5)
    canvas.put_pixel(-1, 0, WHITE)
    canvas.put_pixel(5, 5, WHITE)
    assert all(canvas.get_pixel(x, y) == 0 for x in range(5) for y in range(5))


def test_canvas_get_out_of_range_raises():
    canvas = Canvas(5, 5)
    with pytest.raises(IndexError):
        canvas.get_pixel(5, 0)


def test_canvas_rejects_bad_size():
    with pytest.raises(ValueError):
        Canvas(0, 5)


def test_canvas_clear():
    canvas = Canvas(4, 4)
    canvas.put_pixel(1, 1, PURPLE)
    canvas.clear()
    assert canvas.get_pixel(1, 1) == 0


def test_line_points_excludes_end():
    start = Point(0, 0, 0, WHITE)
    end = Point(3, 0, 0, WHITE)
    points = list(line_points(start, end))
    assert [(p.x, p.y) for p in points] == [(0, 0), (1, 0), (2, 0)]
    assert all(p.color == WHITE for p in points)


def test_line_points_zero_length_is_empty():
    p = Point(5, 5, 0, WHITE)
    assert list(line_points(p, p)) == []


@pytest.mark.parametrize("end", [(7, 3), (-4, 9), (2, -6), (-5, -5)])
def test_line_points_steps_are_connected(end):
    start = Point(0, 0, 0, WHITE)
    stop = Point(end[0], end[1], 0, PURPLE)
    points = list(line_points(start, stop))
    assert len(points) == max(abs(end[0]), abs(end[1]))
    assert (points[0].x, points[0].y) == (0, 0)
    trail = [(p.x, p.y) for p in points] + [end]
    for (ax, ay), (bx, by) in zip(trail, trail[1:]):
        assert max(abs(ax - bx), abs(ay - by)) == 1


def test_line_first_pixel_has_start_color():
    start = Point(0, 0, 0, WHITE)
    end = Point(10, 0, 0, PURPLE)
    points = list(line_points(start, end))
    assert points[0].color == WHITE


def test_draw_line_paints_canvas():
    canvas = Canvas(10, 10)
    draw_line(canvas, Point(0, 2, 0, PURPLE), Point(5, 2, 0, PURPLE))
    assert [canvas.get_pixel(x, 2) for x in range(6)] == [PURPLE] * 5 + [0]


def test_plot_point_square_clipped():
    canvas = Canvas(10, 10)
    plot_point(canvas, 0, 0, PURPLE, 2)
    painted = {(x, y) for x in range(10) for y in range(10) if canvas.get_pixel(x, y)}
    assert painted == {(x, y) for x in range(3) for y in range(3)}


def test_render_points_only():
    canvas = Canvas()
    hm = _flat_map()
    count = render_map(canvas, _view(), hm, build_tiles(hm), points_only=True, point_size=0)
    assert count == 4
    for x, y in ((100, 100), (110, 100), (100, 110), (110, 110)):
        assert canvas.get_pixel(x, y) == PURPLE
    assert canvas.get_pixel(105, 100) == 0


def test_render_wireframe_draws_edges_not_diagonals():
    canvas = Canvas()
    hm = _flat_map()
    render_map(canvas, _view(), hm, build_tiles(hm))
    assert canvas.get_pixel(105, 100) == PURPLE
    assert canvas.get_pixel(100, 105) == PURPLE
    assert canvas.get_pixel(105, 105) == 0


def test_render_zero_zoom_draws_nothing():
    canvas = Canvas()
    canvas.put_pixel(100, 100, WHITE)
    hm = _flat_map()
    assert render_map(canvas, _view(zoom=0.0), hm, build_tiles(hm)) == 0
    assert canvas.get_pixel(100, 100) == 0


def test_render_offscreen_tiles_culled():
    canvas = Canvas()
    hm = _flat_map()
    grid = build_tiles(hm)
    count = render_map(canvas, _view(shift_x=-100000), hm, grid)
    assert count == 0
    assert grid.visible_count == 0
    assert canvas.get_pixel(100, 100) == 0