"""Per-run mutable state shared by every expansion step."""

from __future__ import annotations

import random
from typing import Any, Callable, List, Optional, Sequence

from ..core.constants import Direction
from ..core.exceptions import ConfigurationError
from ..core.models import Candidate, PlacedTile, TileShape
from ..data.catalog import ConnectivityIndex, TileCatalog
from ..utils.logger import get_logger
from .grid import GridStore
from .rules import RuleSet


LOGGER = get_logger(__name__)

PlaceCallback = Callable[[TileShape, int, int, Optional[Direction]], Any]
DiscardCallback = Callable[[List[PlacedTile]], None]


class GenerationSession:
    """Owns the grid, rule matrices, connectivity index and random source of one run."""

    def __init__(
        self,
        catalog: TileCatalog,
        valid_axes: Sequence[Direction],
        rules: Optional[RuleSet] = None,
        rng: Optional[random.Random] = None,
        place: Optional[PlaceCallback] = None,
        discard: Optional[DiscardCallback] = None,
    ) -> None:
        if not valid_axes:
            raise ConfigurationError("At least one valid axis is required")
        self.catalog = catalog
        self.valid_axes = tuple(valid_axes)
        self.index = ConnectivityIndex.build(catalog)
        self.terminal_count = len(catalog.terminals())
        self.grid = GridStore()
        self.rules = rules or RuleSet()
        self.rng = rng or random.Random()
        self.place_callback = place
        self.discard_callback = discard

    # ------------------------------------------------------------------
    # Read accessors for collaborators
    # ------------------------------------------------------------------
    def size(self) -> int:
        return self.grid.size()

    def is_terminal(self, shape: TileShape) -> bool:
        return self.catalog.is_terminal(shape)

    def is_terminal_tile(self, tile: PlacedTile) -> bool:
        return self.catalog.is_terminal(tile.shape)

    @staticmethod
    def axis_offset(direction: Direction, component: str) -> int:
        dx, dy = direction.offset
        if component == "x":
            return dx
        if component == "y":
            return dy
        raise ValueError(f"Unknown offset component: {component!r}")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place(self, candidate: Candidate, parent: Optional[PlacedTile] = None) -> Optional[PlacedTile]:
        """Commit ``candidate`` to the grid and feed it into the rule matrices."""

        if self.grid.exists(candidate.x, candidate.y):
            LOGGER.debug("Cell %s already occupied; skipping %s", candidate.coord, candidate)
            return None
        handle = None
        if self.place_callback is not None:
            handle = self.place_callback(candidate.shape, candidate.x, candidate.y, candidate.axis)
        tile = PlacedTile(
            x=candidate.x,
            y=candidate.y,
            shape=candidate.shape,
            generation_axis=candidate.axis,
            requires_corners=candidate.requires_corners,
            handle=handle,
        )
        self.grid.insert(tile)
        self.rules.impact(parent, tile)
        LOGGER.debug("Placed %s", tile)
        return tile

    def reset(self) -> None:
        if self.discard_callback is not None and self.grid.size():
            self.discard_callback(self.grid.tiles())
        self.grid.reset()
        self.rules.reset()
