"""Shared constants and enumerations for the road generator."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from .exceptions import CatalogError


Coord = Tuple[int, int]


class Direction(str, Enum):
    """Connector directions a road tile can expose."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UP_RIGHT = "upright"
    UP_LEFT = "upleft"
    DOWN_RIGHT = "downright"
    DOWN_LEFT = "downleft"

    @classmethod
    def parse(cls, name: str) -> "Direction":
        """Resolve an axis name from catalog data, failing loudly on typos."""

        try:
            return cls(name.strip().lower())
        except (AttributeError, ValueError):
            raise CatalogError(f"Unknown axis name: {name!r}") from None

    @property
    def opposite(self) -> "Direction":
        return OPPOSITES[self]

    @property
    def offset(self) -> Coord:
        return OFFSETS[self]

    @property
    def orthogonals(self) -> Tuple["Direction", "Direction"]:
        return ORTHOGONALS[self]

    @property
    def is_diagonal(self) -> bool:
        return self in DIAGONAL_DIRECTIONS

    def step(self, coord: Coord, distance: int = 1) -> Coord:
        dx, dy = OFFSETS[self]
        return coord[0] + dx * distance, coord[1] + dy * distance


class GenerationRule(str, Enum):
    """Layout rules that filter candidate connections while growing."""

    SEPARATION = "separation"
    LINEARITY = "linearity"


class GrowthMode(str, Enum):
    """How the growing phase decides when to stop."""

    PASSES = "passes"
    TARGET = "target"


CARDINAL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)
DIAGONAL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.UP_RIGHT,
    Direction.UP_LEFT,
    Direction.DOWN_RIGHT,
    Direction.DOWN_LEFT,
)
ALL_DIRECTIONS: Tuple[Direction, ...] = CARDINAL_DIRECTIONS + DIAGONAL_DIRECTIONS

# y grows upward, x grows to the right.
OFFSETS: Dict[Direction, Coord] = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP_RIGHT: (1, 1),
    Direction.UP_LEFT: (-1, 1),
    Direction.DOWN_RIGHT: (1, -1),
    Direction.DOWN_LEFT: (-1, -1),
}

OPPOSITES: Dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP_RIGHT: Direction.DOWN_LEFT,
    Direction.DOWN_LEFT: Direction.UP_RIGHT,
    Direction.UP_LEFT: Direction.DOWN_RIGHT,
    Direction.DOWN_RIGHT: Direction.UP_LEFT,
}

ORTHOGONALS: Dict[Direction, Tuple[Direction, Direction]] = {
    Direction.UP: (Direction.LEFT, Direction.RIGHT),
    Direction.DOWN: (Direction.LEFT, Direction.RIGHT),
    Direction.LEFT: (Direction.UP, Direction.DOWN),
    Direction.RIGHT: (Direction.UP, Direction.DOWN),
    Direction.UP_RIGHT: (Direction.UP_LEFT, Direction.DOWN_RIGHT),
    Direction.DOWN_LEFT: (Direction.UP_LEFT, Direction.DOWN_RIGHT),
    Direction.UP_LEFT: (Direction.UP_RIGHT, Direction.DOWN_LEFT),
    Direction.DOWN_RIGHT: (Direction.UP_RIGHT, Direction.DOWN_LEFT),
}

ORIGIN: Coord = (0, 0)
