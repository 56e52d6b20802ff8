"""Ready-made road tile sets."""

from __future__ import annotations

from typing import List

from ..core.constants import Direction
from ..core.models import TileShape
from .catalog import TileCatalog


UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT
UP_RIGHT, UP_LEFT = Direction.UP_RIGHT, Direction.UP_LEFT
DOWN_RIGHT, DOWN_LEFT = Direction.DOWN_RIGHT, Direction.DOWN_LEFT


def square_roads() -> List[TileShape]:
    return [
        TileShape("Vertical", (UP, DOWN)),
        TileShape("Horizontal", (LEFT, RIGHT)),
        TileShape("TurnUpRight", (UP, RIGHT)),
        TileShape("TurnUpLeft", (UP, LEFT)),
        TileShape("TurnDownRight", (DOWN, RIGHT)),
        TileShape("TurnDownLeft", (DOWN, LEFT)),
        TileShape("TeeUp", (UP, LEFT, RIGHT)),
        TileShape("TeeDown", (DOWN, LEFT, RIGHT)),
        TileShape("TeeLeft", (UP, DOWN, LEFT)),
        TileShape("TeeRight", (UP, DOWN, RIGHT)),
        TileShape("Cross", (UP, DOWN, LEFT, RIGHT)),
    ]


def square_terminals() -> List[TileShape]:
    # Named after the single connector each one exposes.
    return [
        TileShape("Up", (UP,), terminal=True),
        TileShape("Down", (DOWN,), terminal=True),
        TileShape("Left", (LEFT,), terminal=True),
        TileShape("Right", (RIGHT,), terminal=True),
    ]


def diagonal_roads() -> List[TileShape]:
    return [
        TileShape("DiagonalRising", (UP_RIGHT, DOWN_LEFT)),
        TileShape("DiagonalFalling", (UP_LEFT, DOWN_RIGHT)),
        TileShape("DiagonalCross", (UP_RIGHT, UP_LEFT, DOWN_RIGHT, DOWN_LEFT)),
    ]


def diagonal_terminals() -> List[TileShape]:
    return [
        TileShape("UpRight", (UP_RIGHT,), terminal=True),
        TileShape("UpLeft", (UP_LEFT,), terminal=True),
        TileShape("DownRight", (DOWN_RIGHT,), terminal=True),
        TileShape("DownLeft", (DOWN_LEFT,), terminal=True),
    ]


def corner_pieces() -> List[TileShape]:
    return [
        TileShape("CornerUpRight", (UP_RIGHT,), corner=True),
        TileShape("CornerUpLeft", (UP_LEFT,), corner=True),
        TileShape("CornerDownRight", (DOWN_RIGHT,), corner=True),
        TileShape("CornerDownLeft", (DOWN_LEFT,), corner=True),
    ]


def default_catalog() -> TileCatalog:
    """Square and diagonal road sets with their terminals and corner pieces."""

    return TileCatalog(
        square_roads()
        + diagonal_roads()
        + square_terminals()
        + diagonal_terminals()
        + corner_pieces()
    )


def square_catalog() -> TileCatalog:
    return TileCatalog(square_roads() + square_terminals())
