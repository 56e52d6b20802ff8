"""Grid growth: seeding, expansion passes and terminal closure."""

from __future__ import annotations

from typing import List, Optional

from ..core.constants import ORIGIN, Direction, GrowthMode
from ..core.exceptions import GenerationError
from ..core.models import Candidate, PlacedTile, TileShape
from ..utils.logger import get_logger
from .session import GenerationSession


LOGGER = get_logger(__name__)


class ExpansionEngine:
    """Grows a connected road grid inside a :class:`GenerationSession`."""

    def __init__(self, session: GenerationSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Structural checks
    # ------------------------------------------------------------------
    def is_valid_at(self, shape: TileShape, x: int, y: int) -> bool:
        """Check ``shape`` at ``(x, y)`` against every occupied neighbour."""

        session = self.session
        if any(axis not in session.valid_axes for axis in shape.axes):
            return False

        for direction in session.valid_axes:
            nx, ny = direction.step((x, y))
            existing = session.grid.get(nx, ny)
            if existing is None:
                continue
            neighbor_wants = existing.shape.exposes(direction.opposite)
            shape_wants = shape.exposes(direction)
            # Neither side reaches across: the two run parallel.
            if not neighbor_wants and not shape_wants:
                continue
            if not (neighbor_wants and shape_wants):
                return False
        return True

    def valid_connections(self, tile: PlacedTile) -> List[Candidate]:
        """All structurally valid placements off ``tile``'s free axes."""

        session = self.session
        candidates: List[Candidate] = []
        for axis in session.index.axes_for(tile.shape):
            x, y = axis.step(tile.coord)
            if session.grid.exists(x, y):
                continue
            for shape in session.index.matches(tile.shape, axis):
                if not self.is_valid_at(shape, x, y):
                    continue
                candidates.append(
                    Candidate(x=x, y=y, axis=axis, shape=shape, requires_corners=shape.is_diagonal)
                )
        return candidates

    def select(self, candidates: List[Candidate]) -> Candidate:
        """Uniform draw that re-rolls terminals a bounded number of times."""

        session = self.session
        chosen = session.rng.choice(candidates)
        attempts = 0
        while session.is_terminal(chosen.shape):
            if attempts >= session.terminal_count:
                break
            chosen = session.rng.choice(candidates)
            attempts += 1
        return chosen

    # ------------------------------------------------------------------
    # Seed
    # ------------------------------------------------------------------
    def seed(self) -> PlacedTile:
        session = self.session
        direction = session.rng.choice(session.valid_axes)
        shape = session.catalog.terminal_for(direction)
        if shape is None:
            raise GenerationError(f"No terminal closes axis '{direction.value}' for the start tile")

        start = session.place(
            Candidate(
                x=ORIGIN[0],
                y=ORIGIN[1],
                axis=shape.axes[0],
                shape=shape,
                requires_corners=shape.is_diagonal,
            )
        )
        if start is None:
            raise GenerationError("Start cell is already occupied; reset the session first")
        LOGGER.info("Seeded start tile %s", start)

        candidates = self.valid_connections(start)
        if not candidates:
            raise GenerationError(f"Start tile {start.shape.name} has no valid connections")
        session.place(self.select(candidates), parent=start)
        return start

    # ------------------------------------------------------------------
    # Growing
    # ------------------------------------------------------------------
    def grow_pass(self, target: Optional[float] = None) -> int:
        """Grow one tile off every open tile; returns the number placed."""

        session = self.session
        placed = 0
        for tile in session.grid.open_tiles(session.is_terminal_tile):
            if target is not None and session.size() > target:
                break
            if not session.grid.free_axes(tile):
                continue
            candidates = self.valid_connections(tile)
            candidates = session.rules.apply(tile, candidates, session.rng)
            if not candidates:
                LOGGER.debug("Dead end at %s this pass", tile)
                continue
            if session.place(self.select(candidates), parent=tile) is not None:
                placed += 1
        return placed

    def grow(
        self,
        depth: int,
        target: Optional[float] = None,
        mode: GrowthMode = GrowthMode.PASSES,
    ) -> int:
        """Run growth passes; returns the number of passes executed."""

        session = self.session
        passes = 0
        if mode is GrowthMode.PASSES:
            for _ in range(depth):
                placed = self.grow_pass(target)
                passes += 1
                LOGGER.debug("Pass %d placed %d tiles (size %d)", passes, placed, session.size())
        else:
            if target is None:
                raise GenerationError("Target growth mode needs a target size")
            while session.size() <= target:
                placed = self.grow_pass(target)
                passes += 1
                LOGGER.debug("Pass %d placed %d tiles (size %d)", passes, placed, session.size())
                if not placed:
                    LOGGER.warning(
                        "Growth stalled at %d tiles before reaching target %.1f",
                        session.size(),
                        target,
                    )
                    break
        LOGGER.info("Growing finished after %d passes with %d tiles", passes, session.size())
        return passes

    # ------------------------------------------------------------------
    # Terminating
    # ------------------------------------------------------------------
    def terminate(self, pass_limit: int = 1000) -> int:
        """Close every free axis with terminals; returns the number of passes."""

        session = self.session
        passes = 0
        while True:
            passes += 1
            if passes > pass_limit:
                raise GenerationError(f"Termination did not converge within {pass_limit} passes")
            repass = False
            for tile in session.grid.open_tiles(session.is_terminal_tile):
                for axis in tile.shape.axes:
                    x, y = axis.step(tile.coord)
                    if session.grid.exists(x, y):
                        continue
                    terminal = session.catalog.terminal_for(axis)
                    if terminal is not None and self.is_valid_at(terminal, x, y):
                        session.place(
                            Candidate(
                                x=x,
                                y=y,
                                axis=axis,
                                shape=terminal,
                                requires_corners=terminal.is_diagonal,
                            ),
                            parent=tile,
                        )
                        continue

                    LOGGER.debug("Terminal rejected at (%d, %d); growing %s instead", x, y, tile)
                    if self._grow_instead(tile, axis):
                        repass = True
            if not repass:
                break
            LOGGER.debug("Termination pass %d opened new axes; re-passing", passes)
        LOGGER.info("Terminated grid in %d passes with %d tiles", passes, session.size())
        return passes

    def _grow_instead(self, tile: PlacedTile, axis: Direction) -> bool:
        """Place a non-terminal off ``tile``; True when it may open new axes."""

        session = self.session
        connections = self.valid_connections(tile)
        candidates = [candidate for candidate in connections if candidate.axis == axis] or connections
        pool = [
            candidate for candidate in candidates if not session.is_terminal(candidate.shape)
        ] or candidates
        if not pool:
            LOGGER.debug("No valid connection left for %s", tile)
            return False
        chosen = session.rng.choice(pool)
        placed = session.place(chosen, parent=tile)
        return placed is not None and not session.is_terminal(chosen.shape)
