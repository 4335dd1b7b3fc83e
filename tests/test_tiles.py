import pytest

from fdfview.mapfile import HeightMap
from fdfview.tiles import (
    DEFAULT_TILE_SIZE,
    VISIBILITY_MARGIN,
    Tile,
    build_tiles,
    is_tile_visible,
)
from fdfview.transform import WIN_WIDTH, View, default_view


def _height_map(rows):
    width, height = len(rows[0]), len(rows)
    colors = [[0xFFFFFF] * width for _ in rows]
    return HeightMap(width, height, [list(r) for r in rows], colors)


def _sample():
    return _height_map(
        [
            [0, 1, 2, 3, 4],
            [5, -6, 7, 8, 9],
            [10, 11, 12, 13, 40],
        ]
    )


def test_grid_dimensions_round_up():
    grid = build_tiles(_sample(), 2)
    assert (grid.tiles_x, grid.tiles_y) == (3, 2)
    assert grid.total_tiles == grid.tiles_x * grid.tiles_y


def test_last_tile_is_clamped_to_map():
    hm = _sample()
    grid = build_tiles(hm, 2)
    last = grid.tiles[-1][-1]
    assert last.end_x == hm.width - 1
    assert last.end_y == hm.height - 1
    assert last.point_count == 1


def test_point_counts_cover_map():
    hm = _sample()
    grid = build_tiles(hm, 2)
    assert sum(tile.point_count for tile in grid) == hm.width * hm.height


def test_tile_altitude_range_matches_region():
    hm = _sample()
    grid = build_tiles(hm, 2)
    for tile in grid:
        region = [
            hm.z[y][x]
            for y in range(tile.start_y, tile.end_y + 1)
            for x in range(tile.start_x, tile.end_x + 1)
        ]
        assert tile.min_z == min(region)
        assert tile.max_z == max(region)


def test_default_tile_size_gives_single_tile_for_small_map():
    grid = build_tiles(_sample())
    assert grid.tile_size == DEFAULT_TILE_SIZE
    assert grid.total_tiles == 1
    assert grid.visible_count == 1


@pytest.mark.parametrize("size", [0, -3])
def test_non_positive_tile_size_rejected(size):
    with pytest.raises(ValueError):
        build_tiles(_sample(), size)


def test_tile_for_finds_containing_tile():
    grid = build_tiles(_sample(), 2)
    tile = grid.tile_for(3, 2)
    assert tile is grid.tiles[1][1]
    assert tile.start_x <= 3 <= tile.end_x
    assert tile.start_y <= 2 <= tile.end_y


@pytest.mark.parametrize("x,y", [(6, 0), (0, 4), (-1, 0)])
def test_tile_for_outside_grid_is_none(x, y):
    grid = build_tiles(_sample(), 2)
    assert grid.tile_for(x, y) is None


def test_default_view_shows_tile():
    hm = _sample()
    grid = build_tiles(hm, 2)
    view = default_view(hm.width, hm.height)
    assert is_tile_visible(view, grid.tiles[0][0]) is True


def test_far_shifted_view_hides_tile():
    tile = Tile(0, 0, 1, 1, 0, 0, 4)
    view = View(zoom=1.0, shift_x=WIN_WIDTH * 10)
    assert is_tile_visible(view, tile) is False


def test_margin_edge_counts_as_visible():
    tile = Tile(0, 0, 0, 0, 0, 0, 1)
    inside = View(zoom=1.0, shift_x=-VISIBILITY_MARGIN)
    outside = View(zoom=1.0, shift_x=-VISIBILITY_MARGIN - 1)
    assert is_tile_visible(inside, tile) is True
    assert is_tile_visible(outside, tile) is False


def test_update_visibility_counts_visible_tiles():
    hm = _sample()
    grid = build_tiles(hm, 2)
    hidden = View(zoom=1.0, shift_y=-100000)
    assert grid.update_visibility(hidden) == 0
    assert grid.visible_count == 0
    assert not any(tile.visible for tile in grid)

    count = grid.update_visibility(default_view(hm.width, hm.height))
    assert count == sum(tile.visible for tile in grid)
    assert grid.visible_count == count
    assert 0 < count <= grid.total_tiles