"""Rule matrices that bias which connections get grown.

Two sparse matrices shape the random walk:

- :class:`SeparationMatrix` stores, per cell, the distance to the nearest
  branch tile measured across the branch's generation axis. Candidates that
  would create a new branch closer than the configured threshold are dropped.
- :class:`LinearityMatrix` stores, per cell and axis, the probability that a
  road keeps going straight. Each straight continuation feeds the current
  value through a response curve to derive the next cell's value.

:class:`RuleSet` applies both in priority order and updates them after each
accepted placement.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import Coord, Direction, GenerationRule
from ..core.exceptions import ConfigurationError
from ..core.models import Candidate, PlacedTile
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

# Marks a linearity entry whose continuation has already been spent.
CONSUMED = -1.0

ResponseCurve = Callable[[float], float]

RESPONSE_CURVES: Dict[str, ResponseCurve] = {
    "linear": lambda value: value,
    "ease_in": lambda value: value * value,
    "ease_out": lambda value: 1.0 - (1.0 - value) * (1.0 - value),
    "smoothstep": lambda value: value * value * (3.0 - 2.0 * value),
}


def resolve_curve(curve: str | ResponseCurve) -> ResponseCurve:
    if callable(curve):
        return curve
    try:
        return RESPONSE_CURVES[curve]
    except KeyError:
        known = ", ".join(sorted(RESPONSE_CURVES))
        raise ConfigurationError(f"Unknown linearity curve '{curve}' (known: {known})") from None


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class SeparationMatrix:
    """Distance from each marked cell to the closest branch tile."""

    def __init__(self) -> None:
        self._values: Dict[Coord, int] = {}

    def get(self, coord: Coord) -> Optional[int]:
        return self._values.get(coord)

    def mark(self, coord: Coord, value: int) -> None:
        current = self._values.get(coord)
        if current is None or value < current:
            self._values[coord] = value

    def impact(self, tile: PlacedTile, radius: int) -> None:
        """Record ``tile`` as a branch point and spread the distance across its axis."""

        if not tile.shape.is_branch or tile.generation_axis is None:
            return
        self.mark(tile.coord, 0)
        for direction in tile.generation_axis.orthogonals:
            for distance in range(1, radius + 1):
                self.mark(direction.step(tile.coord, distance), distance)

    def allows(self, candidate: Candidate, threshold: int) -> bool:
        """True unless ``candidate`` would open a branch too close to another.

        Only branch-shaped candidates are ever rejected. Straights, turns and
        terminals pass regardless of the marked distance, so the arms of an
        existing junction can still be grown and closed.
        """

        if not candidate.shape.is_branch:
            return True
        value = self._values.get(candidate.coord)
        return value is None or value >= threshold

    def filter(self, candidates: Iterable[Candidate], threshold: int) -> List[Candidate]:
        return [candidate for candidate in candidates if self.allows(candidate, threshold)]

    def reset(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)


class LinearityMatrix:
    """Per cell and axis probability that growth continues straight."""

    def __init__(
        self,
        coefficient: float,
        curve: str | ResponseCurve = "linear",
        decay: float = 0.0,
    ) -> None:
        self.coefficient = coefficient
        self.curve = resolve_curve(curve)
        self.decay = decay
        self._values: Dict[Tuple[Coord, Direction], float] = {}

    def get(self, coord: Coord, axis: Direction) -> Optional[float]:
        return self._values.get((coord, axis))

    def probability(self, coord: Coord, axis: Optional[Direction]) -> float:
        if axis is None:
            return 0.0
        value = self._values.get((coord, axis))
        if value is None:
            return self.coefficient
        if value == CONSUMED:
            return 0.0
        return value

    def next_value(self, current: float) -> float:
        return _clamp(self.curve(_clamp(current - self.decay)))

    def impact(self, parent: Optional[PlacedTile], tile: PlacedTile) -> None:
        axis = tile.generation_axis
        if parent is None or axis is None:
            return
        current = self.probability(parent.coord, axis)
        self._values[(tile.coord, axis)] = self.next_value(current)
        self._values[(parent.coord, axis)] = CONSUMED

    def reset(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)


class RuleSet:
    """Applies separation and linearity rules in priority order."""

    def __init__(
        self,
        separation: int = 0,
        separation_radius: Optional[int] = None,
        linearity_coefficient: float = 0.0,
        linearity_curve: str | ResponseCurve = "linear",
        linearity_decay: float = 0.0,
        priorities: Optional[Mapping[GenerationRule, int]] = None,
    ) -> None:
        self.separation = separation
        self.separation_radius = separation if separation_radius is None else separation_radius
        self.separation_matrix = SeparationMatrix()
        self.linearity_matrix = LinearityMatrix(
            linearity_coefficient, linearity_curve, linearity_decay
        )
        self.order = self.priority_order(priorities)

    @staticmethod
    def priority_order(priorities: Optional[Mapping[GenerationRule, int]]) -> Sequence[GenerationRule]:
        """Highest priority first; rules without an explicit priority keep declaration order."""

        weights = dict(priorities or {})
        rules = list(GenerationRule)
        return sorted(rules, key=lambda rule: (-weights.get(rule, 0), rules.index(rule)))

    @property
    def separation_enabled(self) -> bool:
        return self.separation > 0

    @property
    def linearity_enabled(self) -> bool:
        return self.linearity_matrix.coefficient > 0

    def apply(
        self,
        tile: PlacedTile,
        candidates: List[Candidate],
        rng: random.Random,
    ) -> List[Candidate]:
        filtered = list(candidates)
        for rule in self.order:
            if not filtered:
                break
            if rule is GenerationRule.SEPARATION:
                filtered = self._apply_separation(filtered)
            elif rule is GenerationRule.LINEARITY:
                filtered = self._apply_linearity(tile, filtered, rng)
        return filtered

    def _apply_separation(self, candidates: List[Candidate]) -> List[Candidate]:
        if not self.separation_enabled:
            return candidates
        kept = self.separation_matrix.filter(candidates, self.separation)
        if len(kept) != len(candidates):
            LOGGER.debug("Separation rule dropped %d candidates", len(candidates) - len(kept))
        return kept

    def _apply_linearity(
        self,
        tile: PlacedTile,
        candidates: List[Candidate],
        rng: random.Random,
    ) -> List[Candidate]:
        if not self.linearity_enabled:
            return candidates
        probability = self.linearity_matrix.probability(tile.coord, tile.generation_axis)
        if rng.random() >= probability:
            return candidates
        straight = [candidate for candidate in candidates if candidate.axis == tile.generation_axis]
        LOGGER.debug(
            "Linearity rule kept %d straight candidates at %s (p=%.2f)",
            len(straight),
            tile.coord,
            probability,
        )
        return straight

    def impact(self, parent: Optional[PlacedTile], tile: PlacedTile) -> None:
        if self.separation_enabled:
            self.separation_matrix.impact(tile, self.separation_radius)
        if self.linearity_enabled:
            self.linearity_matrix.impact(parent, tile)

    def reset(self) -> None:
        self.separation_matrix.reset()
        self.linearity_matrix.reset()
