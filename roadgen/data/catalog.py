"""Tile catalog loading and the connector compatibility index."""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import Direction
from ..core.exceptions import CatalogError, ConfigurationError
from ..core.models import TileShape
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def _flag(name: str, payload: Mapping[str, Any], key: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise CatalogError(f"Shape '{name}' flag '{key}' must be true or false, got {value!r}")
    return value


def shape_from_mapping(payload: Mapping[str, Any]) -> TileShape:
    """Build a :class:`TileShape` from a JSON-style mapping."""

    if not isinstance(payload, Mapping):
        raise CatalogError(f"Shape entry must be a mapping, got {payload!r}")
    name = payload.get("name")
    if not name or not isinstance(name, str):
        raise CatalogError(f"Shape entry missing a name: {payload!r}")
    raw_axes = payload.get("axes", [])
    if isinstance(raw_axes, str):
        raw_axes = [raw_axes]
    if not isinstance(raw_axes, list):
        raise CatalogError(f"Shape '{name}' axes must be a name or a list of names, got {raw_axes!r}")
    axes = [Direction.parse(axis) for axis in raw_axes]
    if not axes:
        raise CatalogError(f"Shape '{name}' does not expose any axes")
    return TileShape(
        name=name,
        axes=tuple(axes),
        terminal=_flag(name, payload, "terminal"),
        corner=_flag(name, payload, "corner"),
        handle=payload.get("handle"),
    )


class TileCatalog:
    """Ordered, name-unique collection of tile shapes."""

    def __init__(self, shapes: Iterable[TileShape]) -> None:
        self._shapes: List[TileShape] = []
        self._by_name: Dict[str, TileShape] = {}
        for shape in shapes:
            if shape.name in self._by_name:
                raise CatalogError(f"Duplicate shape name: {shape.name}")
            self._by_name[shape.name] = shape
            self._shapes.append(shape)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def from_mappings(cls, entries: Iterable[Mapping[str, Any]]) -> "TileCatalog":
        return cls(shape_from_mapping(entry) for entry in entries)

    @classmethod
    def from_json(cls, path: Path | str) -> "TileCatalog":
        source = Path(path)
        if not source.exists():
            raise CatalogError(f"Missing catalog file: {source}")
        try:
            payload = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogError(f"Unreadable catalog {source}: {exc}") from exc
        entries = payload.get("shapes") if isinstance(payload, dict) else payload
        if not isinstance(entries, list):
            raise CatalogError(f"Catalog {source} has no 'shapes' list")
        catalog = cls.from_mappings(entries)
        LOGGER.info("Loaded %d tile shapes from %s", len(catalog), source)
        return catalog

    def to_jsonable(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "shapes": [
                {
                    "name": shape.name,
                    "axes": [axis.value for axis in shape.axes],
                    "terminal": shape.terminal,
                    "corner": shape.corner,
                }
                for shape in self._shapes
            ]
        }

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[TileShape]:
        return iter(self._shapes)

    def __contains__(self, shape: object) -> bool:
        return shape in self._shapes

    def get(self, name: str) -> Optional[TileShape]:
        return self._by_name.get(name)

    def scoped(self, valid_axes: Sequence[Direction]) -> "TileCatalog":
        """Return the structural shapes whose axes all lie in ``valid_axes``."""

        allowed = set(valid_axes)
        return TileCatalog(
            shape
            for shape in self._shapes
            if not shape.corner and all(axis in allowed for axis in shape.axes)
        )

    def terminals(self) -> List[TileShape]:
        return [shape for shape in self._shapes if shape.terminal]

    def is_terminal(self, shape: TileShape) -> bool:
        return shape.terminal and shape in self._shapes

    def terminal_for(self, direction: Direction) -> Optional[TileShape]:
        """Return the terminal that closes a connection grown along ``direction``."""

        wanted = (direction.opposite,)
        for shape in self._shapes:
            if shape.terminal and shape.axes == wanted:
                return shape
        return None

    def require_terminals(self, valid_axes: Sequence[Direction]) -> None:
        missing = [axis.value for axis in valid_axes if self.terminal_for(axis) is None]
        if missing:
            raise ConfigurationError(
                f"Catalog has no terminal shape closing axes: {', '.join(missing)}"
            )


@dataclass
class ConnectivityIndex:
    """Per shape and axis, the shapes that can sit across that connector."""

    connections: Dict[TileShape, Dict[Direction, List[TileShape]]]

    @classmethod
    def build(cls, catalog: TileCatalog) -> "ConnectivityIndex":
        connections: Dict[TileShape, Dict[Direction, List[TileShape]]] = defaultdict(dict)
        for shape in catalog:
            for axis in shape.axes:
                connections[shape][axis] = [
                    other for other in catalog if other.exposes(axis.opposite)
                ]
        LOGGER.debug("Built connectivity index for %d shapes", len(connections))
        return cls(connections=dict(connections))

    def axes_for(self, shape: TileShape) -> Tuple[Direction, ...]:
        return tuple(self.connections.get(shape, {}).keys())

    def matches(self, shape: TileShape, axis: Direction) -> List[TileShape]:
        return list(self.connections.get(shape, {}).get(axis, ()))
