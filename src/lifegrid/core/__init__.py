"""Core cellular automata logic."""

from .cell import Cell
from .grid import Grid
from .world import SimulationConfig, World, simulate
from . import codec, zoo

__all__ = ["Cell", "Grid", "World", "SimulationConfig", "simulate", "codec", "zoo"]
