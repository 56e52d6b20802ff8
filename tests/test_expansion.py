import random
import unittest

from roadgen.core.constants import CARDINAL_DIRECTIONS, DIAGONAL_DIRECTIONS, Direction, GrowthMode
from roadgen.core.exceptions import GenerationError
from roadgen.core.models import Candidate, PlacedTile
from roadgen.data.builtin import default_catalog, square_catalog
from roadgen.data.catalog import TileCatalog
from roadgen.engine.expansion import ExpansionEngine
from roadgen.engine.session import GenerationSession
from roadgen.engine.validator import GridValidator

from tests.helpers import FirstChoiceRandom, ScriptedRandom, straight_catalog


def make_engine(catalog: TileCatalog = None, axes=CARDINAL_DIRECTIONS, rng=None) -> ExpansionEngine:
    scoped = (catalog or square_catalog()).scoped(axes)
    session = GenerationSession(scoped, axes, rng=rng or random.Random(1))
    return ExpansionEngine(session)


class ValidityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.catalog = self.engine.session.catalog
        self.grid = self.engine.session.grid
        self.grid.insert(PlacedTile(0, 0, self.catalog.get("Vertical"), Direction.UP))

    def test_required_connection_materializes(self) -> None:
        self.assertTrue(self.engine.is_valid_at(self.catalog.get("Vertical"), 0, 1))
        self.assertTrue(self.engine.is_valid_at(self.catalog.get("Down"), 0, 1))

    def test_missing_required_connection_rejected(self) -> None:
        self.assertFalse(self.engine.is_valid_at(self.catalog.get("Horizontal"), 0, 1))

    def test_one_sided_connection_rejected(self) -> None:
        # Horizontal at (1, 0) reaches left into a vertical that does not reach back.
        self.assertFalse(self.engine.is_valid_at(self.catalog.get("Horizontal"), 1, 0))

    def test_parallel_neighbors_are_fine(self) -> None:
        self.assertTrue(self.engine.is_valid_at(self.catalog.get("Vertical"), 1, 0))

    def test_axis_outside_valid_set_rejected(self) -> None:
        diagonal = default_catalog().get("DiagonalRising")
        self.assertFalse(self.engine.is_valid_at(diagonal, 5, 5))


class ConnectionTests(unittest.TestCase):
    def test_valid_connections_cover_both_free_axes(self) -> None:
        engine = make_engine()
        vertical = PlacedTile(0, 0, engine.session.catalog.get("Vertical"), Direction.UP)
        engine.session.grid.insert(vertical)
        candidates = engine.valid_connections(vertical)
        self.assertEqual(len(candidates), 16)
        for candidate in candidates:
            self.assertEqual(candidate.coord, candidate.axis.step(vertical.coord))
            self.assertTrue(candidate.shape.exposes(candidate.axis.opposite))
            self.assertFalse(candidate.requires_corners)

    def test_valid_connections_skip_occupied_cells(self) -> None:
        engine = make_engine()
        catalog = engine.session.catalog
        vertical = PlacedTile(0, 0, catalog.get("Vertical"), Direction.UP)
        engine.session.grid.insert(vertical)
        engine.session.grid.insert(PlacedTile(0, 1, catalog.get("Down"), Direction.UP))
        candidates = engine.valid_connections(vertical)
        self.assertEqual({candidate.axis for candidate in candidates}, {Direction.DOWN})
        self.assertEqual(len(candidates), 8)


class SelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        catalog = square_catalog()
        self.terminal = Candidate(0, 1, Direction.UP, catalog.get("Down"))
        self.other_terminal = Candidate(0, -1, Direction.DOWN, catalog.get("Up"))
        self.straight = Candidate(0, 1, Direction.UP, catalog.get("Vertical"))

    def test_terminals_are_redrawn(self) -> None:
        engine = make_engine(rng=ScriptedRandom(indices=[0, 0, 1]))
        self.assertEqual(engine.select([self.terminal, self.straight]), self.straight)

    def test_redraws_are_bounded_by_terminal_count(self) -> None:
        rng = ScriptedRandom(indices=[0, 1, 0, 1, 0, 1])
        engine = make_engine(rng=rng)
        self.assertEqual(engine.session.terminal_count, 4)
        chosen = engine.select([self.terminal, self.other_terminal])
        self.assertEqual(chosen, self.terminal)
        self.assertEqual(rng._indices, [1])


class SeedTests(unittest.TestCase):
    def test_seed_places_start_terminal_and_one_road(self) -> None:
        engine = make_engine(rng=FirstChoiceRandom())
        start = engine.seed()
        grid = engine.session.grid
        self.assertEqual(start.coord, (0, 0))
        self.assertEqual(start.shape.name, "Down")
        self.assertEqual(grid.size(), 2)
        follower = grid.get(0, -1)
        self.assertEqual(follower.shape.name, "Vertical")
        self.assertEqual(follower.generation_axis, Direction.DOWN)

    def test_seed_requires_empty_origin(self) -> None:
        engine = make_engine(rng=FirstChoiceRandom())
        engine.seed()
        with self.assertRaises(GenerationError):
            engine.seed()

    def test_diagonal_roads_require_corners(self) -> None:
        engine = make_engine(default_catalog(), DIAGONAL_DIRECTIONS, random.Random(4))
        engine.seed()
        tiles = engine.session.grid.tiles()
        self.assertEqual(len(tiles), 2)
        self.assertTrue(all(tile.requires_corners for tile in tiles))


class GrowthTests(unittest.TestCase):
    def test_straight_scenario_is_colinear(self) -> None:
        engine = make_engine(straight_catalog(), (Direction.UP, Direction.DOWN), FirstChoiceRandom())
        engine.seed()
        engine.grow(3, target=3.0)
        engine.terminate()
        tiles = engine.session.grid.tiles()
        self.assertEqual(len(tiles), 5)
        self.assertEqual({tile.x for tile in tiles}, {0})
        names = [engine.session.grid.get(0, y).shape.name for y in range(0, -5, -1)]
        self.assertEqual(names, ["TerminalUp", "Straight", "Straight", "Straight", "TerminalDown"])

    def test_budget_stops_growth(self) -> None:
        engine = make_engine(rng=random.Random(11))
        engine.seed()
        engine.grow(50, target=6.0)
        # One open tile may still grow per pass before the budget check trips.
        self.assertLessEqual(engine.session.size(), 7)
        self.assertGreater(engine.session.size(), 2)

    def test_target_mode_reaches_target(self) -> None:
        engine = make_engine(rng=random.Random(5))
        engine.seed()
        passes = engine.grow(0, target=25.0, mode=GrowthMode.TARGET)
        self.assertGreater(passes, 0)
        self.assertGreater(engine.session.size(), 25)


class TerminationTests(unittest.TestCase):
    def test_termination_closes_every_axis(self) -> None:
        validator = GridValidator()
        for seed in range(8):
            engine = make_engine(rng=random.Random(seed))
            engine.seed()
            engine.grow(6)
            passes = engine.terminate()
            grid = engine.session.grid
            self.assertGreaterEqual(passes, 1)
            self.assertEqual(grid.open_tiles(lambda tile: False), [])
            result = validator.validate(grid)
            self.assertTrue(result.ok, result.messages)

    def test_invalid_terminal_is_replaced_by_a_road(self) -> None:
        engine = make_engine(rng=random.Random(3))
        catalog = engine.session.catalog
        grid = engine.session.grid
        grid.insert(PlacedTile(0, 0, catalog.get("Vertical"), Direction.UP))
        grid.insert(PlacedTile(0, -1, catalog.get("Up"), Direction.DOWN))
        grid.insert(PlacedTile(-1, 1, catalog.get("Horizontal"), Direction.LEFT))

        passes = engine.terminate()

        grown = grid.get(0, 1)
        self.assertIn(grown.shape.name, {"TurnDownLeft", "TeeDown", "TeeLeft", "Cross"})
        self.assertGreaterEqual(passes, 2)
        self.assertTrue(GridValidator().validate(grid).ok)

    def test_pass_limit_raises(self) -> None:
        engine = make_engine(rng=random.Random(3))
        catalog = engine.session.catalog
        grid = engine.session.grid
        grid.insert(PlacedTile(0, 0, catalog.get("Vertical"), Direction.UP))
        grid.insert(PlacedTile(0, -1, catalog.get("Up"), Direction.DOWN))
        grid.insert(PlacedTile(-1, 1, catalog.get("Horizontal"), Direction.LEFT))
        with self.assertRaises(GenerationError):
            engine.terminate(pass_limit=1)


class SessionAccessorTests(unittest.TestCase):
    def test_axis_offset(self) -> None:
        self.assertEqual(GenerationSession.axis_offset(Direction.RIGHT, "x"), 1)
        self.assertEqual(GenerationSession.axis_offset(Direction.DOWN_LEFT, "y"), -1)
        with self.assertRaises(ValueError):
            GenerationSession.axis_offset(Direction.UP, "z")

    def test_is_terminal(self) -> None:
        engine = make_engine()
        catalog = engine.session.catalog
        self.assertTrue(engine.session.is_terminal(catalog.get("Left")))
        self.assertFalse(engine.session.is_terminal(catalog.get("Cross")))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
