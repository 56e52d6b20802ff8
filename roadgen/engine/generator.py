"""Main road generator orchestration.

A run seeds a start terminal at the origin, grows the grid pass by pass
under the separation and linearity rules, then closes every dangling
connector with terminals. Grids that fail validation or land outside the
configured size range are discarded and regenerated.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import (ALL_DIRECTIONS, CARDINAL_DIRECTIONS, DIAGONAL_DIRECTIONS,
                              Direction, GenerationRule, GrowthMode)
from ..core.exceptions import CatalogError, ConfigurationError, GenerationError, ValidationError
from ..core.models import PlacedTile, TileShape, canonical_axes
from ..data.builtin import default_catalog
from ..data.catalog import TileCatalog
from ..utils.logger import get_logger
from .expansion import ExpansionEngine
from .rules import RESPONSE_CURVES, RuleSet
from .session import DiscardCallback, GenerationSession, PlaceCallback
from .validator import GridValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    depth: int = 10
    magnitude: float = 1.0
    min_magnitude: Optional[float] = None
    max_magnitude: Optional[float] = None
    growth_mode: GrowthMode | str = GrowthMode.PASSES
    use_only_square: bool = False
    use_only_diagonal: bool = False
    valid_axes: Optional[Sequence[Direction | str]] = None
    separation: int = 0
    separation_radius: Optional[int] = None
    linearity_coefficient: float = 0.0
    linearity_curve: str = "linear"
    linearity_decay: float = 0.0
    rule_priorities: Mapping[GenerationRule | str, int] = field(default_factory=dict)
    seed: Optional[int] = None
    max_retries: int = 10
    termination_pass_limit: int = 1000

    @property
    def target_size(self) -> float:
        return self.depth * self.magnitude

    def size_bounds(self) -> Tuple[Optional[float], Optional[float]]:
        low = self.depth * self.min_magnitude if self.min_magnitude is not None else None
        high = self.depth * self.max_magnitude if self.max_magnitude is not None else None
        return low, high

    def accepts_size(self, size: int) -> bool:
        low, high = self.size_bounds()
        if low is not None and size < low:
            return False
        if high is not None and size > high:
            return False
        return True

    def resolve_growth_mode(self) -> GrowthMode:
        try:
            return GrowthMode(self.growth_mode)
        except ValueError:
            raise ConfigurationError(f"Unknown growth mode: {self.growth_mode!r}") from None

    def resolve_valid_axes(self) -> Tuple[Direction, ...]:
        if self.use_only_square and self.use_only_diagonal:
            raise ConfigurationError(
                "Cannot use only square roads and only diagonal roads at once"
            )
        if self.valid_axes is not None:
            try:
                axes = canonical_axes(
                    axis if isinstance(axis, Direction) else Direction.parse(axis)
                    for axis in self.valid_axes
                )
            except CatalogError as exc:
                raise ConfigurationError(str(exc)) from exc
            if not axes:
                raise ConfigurationError("Explicit valid axes must not be empty")
            return axes
        if self.use_only_square:
            return CARDINAL_DIRECTIONS
        if self.use_only_diagonal:
            return DIAGONAL_DIRECTIONS
        return ALL_DIRECTIONS

    def resolve_priorities(self) -> Dict[GenerationRule, int]:
        priorities: Dict[GenerationRule, int] = {}
        for rule, priority in self.rule_priorities.items():
            try:
                priorities[GenerationRule(rule)] = int(priority)
            except ValueError:
                raise ConfigurationError(f"Unknown generation rule: {rule!r}") from None
        return priorities

    def validate(self) -> None:
        self.resolve_valid_axes()
        self.resolve_growth_mode()
        self.resolve_priorities()
        if self.depth < 0:
            raise ConfigurationError("Depth must not be negative")
        if self.magnitude <= 0:
            raise ConfigurationError("Magnitude must be positive")
        low, high = self.min_magnitude, self.max_magnitude
        if low is not None and high is not None and low > high:
            raise ConfigurationError(f"Minimum magnitude {low} exceeds maximum {high}")
        if self.separation < 0:
            raise ConfigurationError("Separation must not be negative")
        if self.separation_radius is not None and self.separation_radius < 0:
            raise ConfigurationError("Separation radius must not be negative")
        if not 0.0 <= self.linearity_coefficient <= 1.0:
            raise ConfigurationError("Linearity coefficient must lie in [0, 1]")
        if not 0.0 <= self.linearity_decay <= 1.0:
            raise ConfigurationError("Linearity decay must lie in [0, 1]")
        if self.linearity_curve not in RESPONSE_CURVES:
            raise ConfigurationError(f"Unknown linearity curve '{self.linearity_curve}'")
        if self.max_retries < 1:
            raise ConfigurationError("At least one generation attempt is required")
        if self.termination_pass_limit < 1:
            raise ConfigurationError("Termination pass limit must be positive")

    def to_rule_set(self) -> RuleSet:
        return RuleSet(
            separation=self.separation,
            separation_radius=self.separation_radius,
            linearity_coefficient=self.linearity_coefficient,
            linearity_curve=self.linearity_curve,
            linearity_decay=self.linearity_decay,
            priorities=self.resolve_priorities(),
        )


@dataclass
class GenerationResult:
    tiles: List[PlacedTile]
    attempts: int
    termination_passes: int
    seed: Optional[int] = None
    validation_messages: List[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.tiles)

    def shape_map(self) -> Dict[Tuple[int, int], str]:
        return {tile.coord: tile.shape.name for tile in self.tiles}

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "attempts": self.attempts,
            "size": self.size,
            "termination_passes": self.termination_passes,
            "tiles": [
                {
                    "x": tile.x,
                    "y": tile.y,
                    "shape": tile.shape.name,
                    "axis": tile.generation_axis.value if tile.generation_axis else None,
                    "requires_corners": tile.requires_corners,
                }
                for tile in self.tiles
            ],
            "validation": self.validation_messages,
        }


class RoadGenerator:
    """High-level driver: seed, grow, terminate, then validate or retry."""

    def __init__(
        self,
        config: GeneratorConfig,
        catalog: Optional[TileCatalog] = None,
        place: Optional[PlaceCallback] = None,
        discard: Optional[DiscardCallback] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        config.validate()
        self.config = config
        self.catalog = catalog if catalog is not None else default_catalog()
        self.valid_axes = config.resolve_valid_axes()
        self.growth_mode = config.resolve_growth_mode()

        scoped = self.catalog.scoped(self.valid_axes)
        if not len(scoped):
            raise ConfigurationError("No catalog shapes fit the configured valid axes")
        scoped.require_terminals(self.valid_axes)

        self.rng = rng or random.Random(config.seed)
        self.session = GenerationSession(
            scoped,
            self.valid_axes,
            rules=config.to_rule_set(),
            rng=self.rng,
            place=place,
            discard=discard,
        )
        self.engine = ExpansionEngine(self.session)
        self.validator = GridValidator()

    # ------------------------------------------------------------------
    # Accessors for collaborators
    # ------------------------------------------------------------------
    def size(self) -> int:
        return self.session.size()

    def is_terminal(self, shape: TileShape) -> bool:
        return self.session.is_terminal(shape)

    @staticmethod
    def axis_offset(direction: Direction, component: str) -> int:
        return GenerationSession.axis_offset(direction, component)

    def reset(self) -> None:
        self.session.reset()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self) -> GenerationResult:
        config = self.config
        LOGGER.info(
            "Generation target => %.1f tiles (depth %d x magnitude %.2f)",
            config.target_size,
            config.depth,
            config.magnitude,
        )
        for attempt in range(1, config.max_retries + 1):
            LOGGER.info("Generation attempt %s/%s", attempt, config.max_retries)
            self.reset()
            try:
                self.engine.seed()
                self.engine.grow(config.depth, config.target_size, self.growth_mode)
                passes = self.engine.terminate(config.termination_pass_limit)
                validation = self.validator.validate(self.session.grid)
                if not validation.ok:
                    raise ValidationError(f"Grid validation failed: {validation.messages}")
            except (GenerationError, ValidationError) as exc:
                LOGGER.warning("Generation attempt failed: %s", exc)
                continue

            size = self.size()
            if not config.accepts_size(size):
                low, high = config.size_bounds()
                LOGGER.warning(
                    "Discarding grid of %d tiles outside accepted range [%s, %s]",
                    size,
                    low,
                    high,
                )
                continue

            LOGGER.info("Road generation completed with %d tiles", size)
            return GenerationResult(
                tiles=self.session.grid.tiles(),
                attempts=attempt,
                termination_passes=passes,
                seed=config.seed,
                validation_messages=validation.messages,
            )
        raise GenerationError(
            f"Unable to generate road grid after {config.max_retries} attempts"
        )
