"""Conway's Game of Life implementation."""

import logging
from dataclasses import dataclass
from typing import Optional

from .cell import Cell
from .errors import InvalidArgumentError, OutOfRangeError
from .grid import Grid

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    width: int = 50
    height: int = 50
    toroidal: bool = False
    steps: int = 0
    pattern_x: int = 0
    pattern_y: int = 0


class World:
    """Conway's Game of Life simulation engine.

    Implements the classic B3/S23 rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    The world is double buffered: each step writes the whole next
    generation into a scratch grid and then swaps the two grids.
    """

    UPPER_POPULATION_LIMIT = 3
    LOWER_POPULATION_LIMIT = 2

    def __init__(self, width: int = 0, height: Optional[int] = None) -> None:
        """Initialize an all-dead world.

        Args:
            width: Number of columns
            height: Number of rows, defaults to ``width`` for a square world
        """
        self._current_state = Grid(width, height)
        self._next_state = Grid(width, height)
        self._generation = 0

    @classmethod
    def from_grid(cls, initial_state: Grid) -> "World":
        """Create a world seeded with a copy of ``initial_state``."""
        world = cls(initial_state.width, initial_state.height)
        world._current_state = initial_state.copy()
        return world

    @classmethod
    def from_config(cls, config: SimulationConfig, initial_state: Optional[Grid] = None) -> "World":
        """Create a world sized by ``config``.

        Args:
            config: Simulation configuration
            initial_state: Optional pattern placed at (pattern_x, pattern_y)

        Raises:
            InvalidArgumentError: If the pattern does not fit in the world
        """
        world = cls(config.width, config.height)
        if initial_state is not None:
            world._current_state.merge(initial_state, config.pattern_x, config.pattern_y)
        return world

    @property
    def width(self) -> int:
        return self._current_state.width

    @property
    def height(self) -> int:
        return self._current_state.height

    @property
    def total_cells(self) -> int:
        return self._current_state.total_cells

    @property
    def state(self) -> Grid:
        """The current generation.

        The grid object is replaced on every step, so hold on to a copy if
        an earlier generation is needed.
        """
        return self._current_state

    @property
    def generation(self) -> int:
        """Number of steps taken since the world was created."""
        return self._generation

    def alive_count(self) -> int:
        return self._current_state.alive_count()

    def dead_count(self) -> int:
        return self._current_state.dead_count()

    def resize(self, new_width: int, new_height: Optional[int] = None) -> None:
        """Resize both buffers, keeping the overlapping part of the current state."""
        self._current_state.resize(new_width, new_height)
        self._next_state.resize(new_width, new_height)
        logger.debug("Resized world to %dx%d", self.width, self.height)

    def neighbor_count(self, x: int, y: int, toroidal: bool = False) -> int:
        """Count living neighbors of a cell in the current state.

        Args:
            x: Column coordinate
            y: Row coordinate
            toroidal: Wrap edges around instead of treating off-grid cells
                as dead

        Returns:
            Number of living neighbors (0-8)

        Raises:
            OutOfRangeError: If (x, y) is not a cell of the world
        """
        grid = self._current_state
        if not grid.contains(x, y):
            raise OutOfRangeError(f"Coordinates ({x}, {y}) out of bounds")

        cells = grid.cells
        count = 0
        for dx in [-1, 0, 1]:
            for dy in [-1, 0, 1]:
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy

                if toroidal:
                    nx = nx % grid.width
                    ny = ny % grid.height
                    count += int(cells[ny, nx])
                elif grid.contains(nx, ny):
                    count += int(cells[ny, nx])

        return count

    def step(self, toroidal: bool = False) -> None:
        """Advance the simulation by one generation.

        Args:
            toroidal: Wrap edges around (the grid becomes a torus)
        """
        # The state grid may have been resized directly; scratch content is discarded
        if self._next_state.shape != self._current_state.shape:
            self._next_state.resize(*self._current_state.shape)

        cells = self._current_state.cells
        neighbor_counts = self._current_state.count_all_neighbors(toroidal)

        alive = cells == Cell.ALIVE
        survive = (
            alive
            & (neighbor_counts >= self.LOWER_POPULATION_LIMIT)
            & (neighbor_counts <= self.UPPER_POPULATION_LIMIT)
        )
        birth = ~alive & (neighbor_counts == self.UPPER_POPULATION_LIMIT)

        self._next_state.cells[:] = survive | birth

        self._current_state, self._next_state = self._next_state, self._current_state
        self._generation += 1

    def advance(self, steps: int, toroidal: bool = False) -> None:
        """Apply ``steps`` generations.

        Args:
            steps: Number of generations, zero does nothing
            toroidal: Wrap edges around (the grid becomes a torus)

        Raises:
            InvalidArgumentError: If steps is negative
        """
        if steps < 0:
            raise InvalidArgumentError(f"Cannot advance a negative number of steps ({steps})")

        for _ in range(steps):
            self.step(toroidal)

        logger.debug(
            "Advanced %d step(s) to generation %d, population %d",
            steps,
            self._generation,
            self.alive_count(),
        )

    def __str__(self) -> str:
        return str(self._current_state)


def simulate(config: SimulationConfig, initial_state: Optional[Grid] = None) -> World:
    """Build a world from ``config`` and run it for ``config.steps`` generations.

    Args:
        config: Simulation configuration
        initial_state: Optional pattern placed at (pattern_x, pattern_y)

    Returns:
        The world after the run
    """
    world = World.from_config(config, initial_state)
    world.advance(config.steps, toroidal=config.toroidal)
    return world
