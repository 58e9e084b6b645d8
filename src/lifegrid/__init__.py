"""Cellular automata package with Conway's Game of Life implementation."""

__version__ = "0.1.0"

from .core.cell import Cell
from .core.grid import Grid
from .core.world import SimulationConfig, World, simulate
from .core import codec, zoo
from .core.errors import (
    FormatError,
    InvalidArgumentError,
    InvalidShapeError,
    LifeGridError,
    NotFoundError,
    OutOfRangeError,
    TruncatedDataError,
    WriteFailureError,
)

__all__ = [
    "Cell",
    "Grid",
    "World",
    "SimulationConfig",
    "simulate",
    "codec",
    "zoo",
    "LifeGridError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "NotFoundError",
    "WriteFailureError",
    "FormatError",
    "InvalidShapeError",
    "TruncatedDataError",
]
