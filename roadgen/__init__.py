"""Procedural road-tile grid generator.

This package exposes the public API surface via:

- ``roadgen.engine.generator.RoadGenerator``: seeds, grows and closes a grid.
- ``roadgen.data.catalog.TileCatalog``: loads tile shapes and their connectors.
- ``roadgen.data.builtin`` helpers: ready-made square and diagonal road sets.
"""

from .engine.generator import GenerationResult, GeneratorConfig, RoadGenerator
from .data.catalog import ConnectivityIndex, TileCatalog

__all__ = [
    "RoadGenerator",
    "GeneratorConfig",
    "GenerationResult",
    "TileCatalog",
    "ConnectivityIndex",
]

__version__ = "0.1.0"
