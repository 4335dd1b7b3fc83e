"""Splitting a map into tiles and culling the ones that fall off screen."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product

from fdfview.mapfile import HeightMap
from fdfview.transform import WIN_HEIGHT, WIN_WIDTH, View, project_point

DEFAULT_TILE_SIZE = 64
VISIBILITY_MARGIN = 50


@dataclass(slots=True)
class Tile:
    """A rectangular block of map points with its altitude range."""

    start_x: int
    start_y: int
    end_x: int
    end_y: int
    min_z: int
    max_z: int
    point_count: int
    visible: bool = True


@dataclass
class TileGrid:
    """Tiles laid out in rows covering the whole map."""

    tile_size: int
    tiles_x: int
    tiles_y: int
    tiles: list[list[Tile]]
    visible_count: int = field(default=0)

    def __post_init__(self) -> None:
        self.visible_count = sum(tile.visible for row in self.tiles for tile in row)

    @property
    def total_tiles(self) -> int:
        return self.tiles_x * self.tiles_y

    def __iter__(self):
        return (tile for row in self.tiles for tile in row)

    def update_visibility(self, view: View) -> int:
        """Recompute every tile's visibility and return how many are visible."""
        count = 0
        for tile in self:
            tile.visible = is_tile_visible(view, tile)
            count += tile.visible
        self.visible_count = count
        return count

    def tile_for(self, x: int, y: int) -> Tile | None:
        """The tile holding map column x, row y, or None outside the grid."""
        if x < 0 or y < 0:
            return None
        row, col = y // self.tile_size, x // self.tile_size
        if row >= self.tiles_y or col >= self.tiles_x:
            return None
        return self.tiles[row][col]


def build_tiles(height_map: HeightMap, tile_size: int = DEFAULT_TILE_SIZE) -> TileGrid:
    """Cut a height map into tiles of at most tile_size by tile_size points."""
    if tile_size <= 0:
        raise ValueError("tile_size must be positive")
    tiles_x = -(-height_map.width // tile_size)
    tiles_y = -(-height_map.height // tile_size)
    rows = []
    for i in range(tiles_y):
        row = []
        for j in range(tiles_x):
            start_x, start_y = j * tile_size, i * tile_size
            end_x = min(start_x + tile_size - 1, height_map.width - 1)
            end_y = min(start_y + tile_size - 1, height_map.height - 1)
            values = [
                value
                for z_row in height_map.z[start_y:end_y + 1]
                for value in z_row[start_x:end_x + 1]
            ]
            row.append(
                Tile(
                    start_x=start_x,
                    start_y=start_y,
                    end_x=end_x,
                    end_y=end_y,
                    min_z=min(values),
                    max_z=max(values),
                    point_count=(end_x - start_x + 1) * (end_y - start_y + 1),
                )
            )
        rows.append(row)
    return TileGrid(tile_size, tiles_x, tiles_y, rows)


def is_tile_visible(view: View, tile: Tile) -> bool:
    """Whether any corner of the tile's 3D box lands on screen, with a margin."""
    corners = product(
        (tile.min_z, tile.max_z),
        (tile.start_y, tile.end_y),
        (tile.start_x, tile.end_x),
    )
    for z, y, x in corners:
        sx, sy = project_point(view, x, y, z)
        if (
            -VISIBILITY_MARGIN <= sx < WIN_WIDTH + VISIBILITY_MARGIN
            and -VISIBILITY_MARGIN <= sy < WIN_HEIGHT + VISIBILITY_MARGIN
        ):
            return True
    return False