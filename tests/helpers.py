import random
from typing import Iterable, List

from roadgen.core.constants import Direction
from roadgen.core.models import TileShape
from roadgen.data.catalog import TileCatalog


class FirstChoiceRandom(random.Random):
    """Always picks the first element and never triggers probability rolls."""

    def choice(self, seq):
        return seq[0]

    def random(self) -> float:
        return 0.99


class ScriptedRandom(random.Random):
    """Replays fixed choice indices and uniform samples."""

    def __init__(self, indices: Iterable[int] = (), samples: Iterable[float] = ()) -> None:
        super().__init__(0)
        self._indices: List[int] = list(indices)
        self._samples: List[float] = list(samples)

    def choice(self, seq):
        index = self._indices.pop(0) if self._indices else 0
        return seq[index]

    def random(self) -> float:
        return self._samples.pop(0) if self._samples else 0.99


def straight_catalog() -> TileCatalog:
    return TileCatalog(
        [
            TileShape("Straight", (Direction.UP, Direction.DOWN)),
            TileShape("TerminalUp", (Direction.DOWN,), terminal=True),
            TileShape("TerminalDown", (Direction.UP,), terminal=True),
        ]
    )
