"""Deterministic integrity checks for finished road grids."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import List, Set

from ..core.constants import ORIGIN, Coord
from ..core.exceptions import ValidationError
from ..utils.logger import get_logger
from .grid import GridStore


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over the final grid."""

    def validate(self, grid: GridStore) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_unique_cells(grid)
            self._check_closed_axes(grid)
            self._check_reachable(grid)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_unique_cells(self, grid: GridStore) -> None:
        coords = [tile.coord for tile in grid]
        if len(set(coords)) != len(coords):
            raise ValidationError("Grid holds more than one tile on a cell")
        if len(coords) != grid.size():
            raise ValidationError(
                f"Size counter {grid.size()} disagrees with {len(coords)} stored tiles"
            )
        for tile in grid:
            if grid.get(tile.x, tile.y) is not tile:
                raise ValidationError(f"Tile {tile} is stored under the wrong cell")

    def _check_closed_axes(self, grid: GridStore) -> None:
        for tile in grid:
            for axis in tile.shape.axes:
                neighbor = grid.neighbor(tile, axis)
                if neighbor is None:
                    raise ValidationError(f"Open axis '{axis.value}' left on {tile}")
                if not neighbor.shape.exposes(axis.opposite):
                    raise ValidationError(
                        f"{tile} reaches '{axis.value}' into {neighbor} which does not connect back"
                    )

    def _check_reachable(self, grid: GridStore) -> None:
        if not grid.size():
            return
        start = grid.get(*ORIGIN)
        if start is None:
            raise ValidationError("Grid has no start tile at the origin")

        seen: Set[Coord] = {start.coord}
        queue = deque([start])
        while queue:
            tile = queue.popleft()
            for axis in tile.shape.axes:
                neighbor = grid.neighbor(tile, axis)
                if neighbor is None or neighbor.coord in seen:
                    continue
                seen.add(neighbor.coord)
                queue.append(neighbor)

        if len(seen) != grid.size():
            raise ValidationError(
                f"{grid.size() - len(seen)} tiles are not connected to the start tile"
            )
