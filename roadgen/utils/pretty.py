"""Pretty-print helpers for road grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable

from ..core.constants import Direction
from ..engine.grid import GridStore

if TYPE_CHECKING:
    from ..core.models import PlacedTile
    from ..engine.generator import GenerationResult


UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT

SYMBOLS: Dict[FrozenSet[Direction], str] = {
    frozenset({UP, DOWN}): "│",
    frozenset({LEFT, RIGHT}): "─",
    frozenset({UP, RIGHT}): "└",
    frozenset({UP, LEFT}): "┘",
    frozenset({DOWN, RIGHT}): "┌",
    frozenset({DOWN, LEFT}): "┐",
    frozenset({UP, LEFT, RIGHT}): "┴",
    frozenset({DOWN, LEFT, RIGHT}): "┬",
    frozenset({UP, DOWN, LEFT}): "┤",
    frozenset({UP, DOWN, RIGHT}): "├",
    frozenset({UP, DOWN, LEFT, RIGHT}): "┼",
    frozenset({UP}): "╵",
    frozenset({DOWN}): "╷",
    frozenset({LEFT}): "╴",
    frozenset({RIGHT}): "╶",
    frozenset({Direction.UP_RIGHT, Direction.DOWN_LEFT}): "/",
    frozenset({Direction.UP_LEFT, Direction.DOWN_RIGHT}): "\\",
    frozenset(
        {Direction.UP_RIGHT, Direction.UP_LEFT, Direction.DOWN_RIGHT, Direction.DOWN_LEFT}
    ): "X",
}


def tile_symbol(tile: PlacedTile) -> str:
    symbol = SYMBOLS.get(frozenset(tile.shape.axes))
    if symbol:
        return symbol
    if len(tile.shape.axes) == 1:
        return "·"
    return "*"


def _as_grid(tiles: Iterable[PlacedTile]) -> GridStore:
    grid = GridStore()
    for tile in tiles:
        grid.insert(tile)
    return grid


def format_tiles(tiles: Iterable[PlacedTile]) -> str:
    grid = _as_grid(tiles)
    bounds = grid.bounds()
    if bounds is None:
        return "(empty grid)"
    min_x, min_y, max_x, max_y = bounds
    lines = []
    # y grows upward, so the top row is printed first.
    for y in range(max_y, min_y - 1, -1):
        row = []
        for x in range(min_x, max_x + 1):
            tile = grid.get(x, y)
            row.append(tile_symbol(tile) if tile else " ")
        lines.append(f"{y:>4} | {''.join(row)}")
    return "\n".join(lines)


def pretty_print_tiles(tiles: Iterable[PlacedTile], *, label: str | None = None, stream=None) -> None:
    """Print the road grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_tiles(tiles), file=stream)


def print_generation_stats(result: GenerationResult, *, stream=None) -> None:
    """Print grid + stats for a completed generation."""

    stream = stream or sys.stdout
    label = f"Attempt {result.attempts}" if result.attempts > 1 else None
    pretty_print_tiles(result.tiles, label=label, stream=stream)

    shapes = Counter(tile.shape.name for tile in result.tiles)
    terminals = sum(1 for tile in result.tiles if tile.shape.terminal)
    branches = sum(1 for tile in result.tiles if tile.shape.is_branch)
    bounds = _as_grid(result.tiles).bounds()

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Tiles:         {result.size}", file=stream)
    if bounds is not None:
        min_x, min_y, max_x, max_y = bounds
        print(f"  Extent:        {max_x - min_x + 1} x {max_y - min_y + 1}", file=stream)
    print(f"  Terminals:     {terminals}", file=stream)
    print(f"  Branches:      {branches}", file=stream)
    print(f"  Attempts:      {result.attempts}", file=stream)
    print(f"  Term. passes:  {result.termination_passes}", file=stream)

    print(file=stream)
    print("--- Shapes ---", file=stream)
    for name, count in sorted(shapes.items(), key=lambda item: (-item[1], item[0])):
        print(f"  {name:<16}{count:>4}", file=stream)

    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
