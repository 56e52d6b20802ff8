import io
import unittest

from roadgen.core.constants import Direction
from roadgen.core.models import PlacedTile
from roadgen.data.builtin import square_catalog
from roadgen.engine.generator import GenerationResult
from roadgen.engine.grid import GridStore
from roadgen.engine.validator import GridValidator
from roadgen.utils.pretty import format_tiles, print_generation_stats


class GridValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = square_catalog()
        self.grid = GridStore()
        self.validator = GridValidator()

    def _closed_run(self) -> None:
        self.grid.insert(PlacedTile(0, 0, self.catalog.get("Down"), Direction.DOWN))
        self.grid.insert(PlacedTile(0, -1, self.catalog.get("Vertical"), Direction.DOWN))
        self.grid.insert(PlacedTile(0, -2, self.catalog.get("Up"), Direction.DOWN))

    def test_closed_grid_passes(self) -> None:
        self._closed_run()
        result = self.validator.validate(self.grid)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_empty_grid_passes(self) -> None:
        self.assertTrue(self.validator.validate(self.grid).ok)

    def test_open_axis_fails(self) -> None:
        self.grid.insert(PlacedTile(0, 0, self.catalog.get("Down"), Direction.DOWN))
        self.grid.insert(PlacedTile(0, -1, self.catalog.get("Vertical"), Direction.DOWN))
        result = self.validator.validate(self.grid)
        self.assertFalse(result.ok)
        self.assertIn("Open axis", result.messages[0])

    def test_one_sided_connection_fails(self) -> None:
        self.grid.insert(PlacedTile(0, 0, self.catalog.get("Right"), Direction.RIGHT))
        self.grid.insert(PlacedTile(1, 0, self.catalog.get("Vertical"), Direction.RIGHT))
        result = self.validator.validate(self.grid)
        self.assertFalse(result.ok)

    def test_disconnected_island_fails(self) -> None:
        self._closed_run()
        self.grid.insert(PlacedTile(5, 0, self.catalog.get("Right"), Direction.RIGHT))
        self.grid.insert(PlacedTile(6, 0, self.catalog.get("Left"), Direction.RIGHT))
        result = self.validator.validate(self.grid)
        self.assertFalse(result.ok)
        self.assertIn("not connected", result.messages[0])

    def test_missing_origin_fails(self) -> None:
        self.grid.insert(PlacedTile(3, 0, self.catalog.get("Right"), Direction.RIGHT))
        self.grid.insert(PlacedTile(4, 0, self.catalog.get("Left"), Direction.RIGHT))
        self.assertFalse(self.validator.validate(self.grid).ok)


class PrettyTests(unittest.TestCase):
    def test_format_tiles_puts_highest_row_first(self) -> None:
        catalog = square_catalog()
        tiles = [
            PlacedTile(0, 0, catalog.get("Down"), Direction.DOWN),
            PlacedTile(0, -1, catalog.get("Up"), Direction.DOWN),
        ]
        lines = format_tiles(tiles).splitlines()
        self.assertEqual(lines, ["   0 | ╷", "  -1 | ╵"])
        self.assertEqual(format_tiles([]), "(empty grid)")

    def test_stats_include_shape_counts(self) -> None:
        catalog = square_catalog()
        tiles = [
            PlacedTile(0, 0, catalog.get("Right"), Direction.RIGHT),
            PlacedTile(1, 0, catalog.get("Left"), Direction.RIGHT),
        ]
        stream = io.StringIO()
        print_generation_stats(GenerationResult(tiles, attempts=2, termination_passes=1, seed=3), stream=stream)
        text = stream.getvalue()
        self.assertTrue(text.startswith("Attempt 2\n"))
        self.assertIn("Tiles:         2", text)
        self.assertIn("Extent:        2 x 1", text)
        self.assertIn("Attempts:      2", text)
        self.assertIn("Seed: 3", text)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
