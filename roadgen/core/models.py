"""Data models supporting the road generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from .constants import ALL_DIRECTIONS, Coord, Direction


def canonical_axes(axes: Iterable[Direction]) -> Tuple[Direction, ...]:
    """Deduplicate axes and order them by the fixed direction order."""

    wanted = set(axes)
    return tuple(direction for direction in ALL_DIRECTIONS if direction in wanted)


@dataclass(frozen=True)
class TileShape:
    """Immutable descriptor of a road piece and the connectors it exposes."""

    name: str
    axes: Tuple[Direction, ...]
    terminal: bool = False
    corner: bool = False
    handle: Any = field(default=None, compare=False, hash=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "axes", canonical_axes(self.axes))

    def exposes(self, direction: Direction) -> bool:
        return direction in self.axes

    @property
    def is_diagonal(self) -> bool:
        return any(axis.is_diagonal for axis in self.axes)

    @property
    def is_branch(self) -> bool:
        return len(self.axes) >= 3

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PlacedTile:
    """A grid cell occupied by a shape, remembering the axis it grew along."""

    x: int
    y: int
    shape: TileShape
    generation_axis: Optional[Direction] = None
    requires_corners: bool = False
    handle: Any = field(default=None, compare=False, repr=False)

    @property
    def coord(self) -> Coord:
        return self.x, self.y

    def __str__(self) -> str:
        axis = self.generation_axis.value if self.generation_axis else "-"
        return f"{self.shape.name} ({self.x}, {self.y}) => {axis}"


@dataclass(frozen=True)
class Candidate:
    """A proposed placement off an existing tile."""

    x: int
    y: int
    axis: Direction
    shape: TileShape
    requires_corners: bool = False

    @property
    def coord(self) -> Coord:
        return self.x, self.y

    def __str__(self) -> str:
        return f"({self.x}, {self.y}) on {self.axis.value} => {self.shape.name}"
