"""Sparse grid storage for placed road tiles."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from ..core.constants import Coord, Direction
from ..core.models import PlacedTile
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class GridStore:
    """Maps integer coordinates to placed tiles, one tile per cell."""

    def __init__(self) -> None:
        self._tiles: Dict[Coord, PlacedTile] = {}
        self._size = 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, tile: PlacedTile) -> bool:
        """Store ``tile``; returns False and leaves the grid untouched if occupied."""

        if tile.coord in self._tiles:
            LOGGER.debug("Ignoring placement on occupied cell %s", tile.coord)
            return False
        self._tiles[tile.coord] = tile
        self._size += 1
        return True

    def reset(self) -> None:
        self._tiles.clear()
        self._size = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def exists(self, x: int, y: int) -> bool:
        return (x, y) in self._tiles

    def get(self, x: int, y: int) -> Optional[PlacedTile]:
        return self._tiles.get((x, y))

    def neighbor(self, tile: PlacedTile, direction: Direction) -> Optional[PlacedTile]:
        x, y = direction.step(tile.coord)
        return self._tiles.get((x, y))

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[PlacedTile]:
        return iter(list(self._tiles.values()))

    def __contains__(self, coord: object) -> bool:
        return coord in self._tiles

    def tiles(self) -> List[PlacedTile]:
        return list(self._tiles.values())

    def free_axes(self, tile: PlacedTile) -> List[Direction]:
        """Axes of ``tile`` whose neighbouring cell is still empty."""

        return [
            axis for axis in tile.shape.axes if not self.exists(*axis.step(tile.coord))
        ]

    def open_tiles(
        self,
        is_terminal: Callable[[PlacedTile], bool],
        include_terminals: bool = False,
    ) -> List[PlacedTile]:
        """Tiles with at least one free axis, in placement order."""

        open_list: List[PlacedTile] = []
        for tile in self._tiles.values():
            if not self.free_axes(tile):
                continue
            if is_terminal(tile) and not include_terminals:
                continue
            open_list.append(tile)
        return open_list

    def bounds(self) -> Optional[tuple]:
        """Return ``(min_x, min_y, max_x, max_y)`` or None for an empty grid."""

        if not self._tiles:
            return None
        xs = [x for x, _ in self._tiles]
        ys = [y for _, y in self._tiles]
        return min(xs), min(ys), max(xs), max(ys)
