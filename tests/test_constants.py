import unittest

from roadgen.core.constants import (ALL_DIRECTIONS, CARDINAL_DIRECTIONS, DIAGONAL_DIRECTIONS,
                                    OFFSETS, OPPOSITES, ORTHOGONALS, Direction)
from roadgen.core.exceptions import CatalogError


class DirectionTableTests(unittest.TestCase):
    def test_tables_are_total(self) -> None:
        for table in (OFFSETS, OPPOSITES, ORTHOGONALS):
            self.assertEqual(set(table), set(ALL_DIRECTIONS))

    def test_opposite_is_involution(self) -> None:
        for direction in ALL_DIRECTIONS:
            self.assertNotEqual(direction.opposite, direction)
            self.assertEqual(direction.opposite.opposite, direction)

    def test_opposite_offsets_cancel(self) -> None:
        for direction in ALL_DIRECTIONS:
            dx, dy = direction.offset
            ox, oy = direction.opposite.offset
            self.assertEqual((dx + ox, dy + oy), (0, 0))

    def test_orthogonals_are_perpendicular(self) -> None:
        for direction in ALL_DIRECTIONS:
            dx, dy = direction.offset
            for other in direction.orthogonals:
                ox, oy = other.offset
                self.assertEqual(dx * ox + dy * oy, 0, f"{direction} vs {other}")

    def test_diagonal_split(self) -> None:
        self.assertTrue(all(d.is_diagonal for d in DIAGONAL_DIRECTIONS))
        self.assertFalse(any(d.is_diagonal for d in CARDINAL_DIRECTIONS))

    def test_step_uses_offset(self) -> None:
        self.assertEqual(Direction.UP.step((2, 3)), (2, 4))
        self.assertEqual(Direction.DOWN_LEFT.step((0, 0), 3), (-3, -3))


class DirectionParseTests(unittest.TestCase):
    def test_parse_accepts_catalog_names(self) -> None:
        self.assertIs(Direction.parse("upright"), Direction.UP_RIGHT)
        self.assertIs(Direction.parse(" Left "), Direction.LEFT)

    def test_parse_rejects_unknown_axis(self) -> None:
        with self.assertRaises(CatalogError):
            Direction.parse("sideways")

    def test_parse_rejects_non_string(self) -> None:
        with self.assertRaises(CatalogError):
            Direction.parse(None)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
