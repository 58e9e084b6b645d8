"""Tests for the World class."""

import numpy as np
import pytest

from lifegrid.core import zoo
from lifegrid.core.cell import Cell
from lifegrid.core.errors import InvalidArgumentError, OutOfRangeError
from lifegrid.core.grid import Grid
from lifegrid.core.world import SimulationConfig, World, simulate


def world_with(width, height, cells):
    """Build a world with the given living (x, y) cells."""
    grid = Grid(width, height)
    for x, y in cells:
        grid.set(x, y, Cell.ALIVE)
    return World.from_grid(grid)


def living_cells(world):
    """Set of living (x, y) coordinates in the current state."""
    ys, xs = np.nonzero(world.state.cells)
    return {(int(x), int(y)) for x, y in zip(xs, ys)}


class TestWorld:
    """Test cases for the World class."""

    def test_initialization(self):
        """Test world initialization."""
        world = World(10, 20)
        assert world.width == 10
        assert world.height == 20
        assert world.total_cells == 200
        assert world.alive_count() == 0
        assert world.dead_count() == 200
        assert world.generation == 0

    def test_default_and_square(self):
        """Test empty and square construction."""
        assert World().total_cells == 0
        world = World(6)
        assert (world.width, world.height) == (6, 6)

    def test_from_grid_copies(self):
        """Test the initial grid is copied, not aliased."""
        grid = zoo.glider()
        world = World.from_grid(grid)

        assert world.state == grid
        assert world.state is not grid

        grid.clear()
        assert world.alive_count() == 5

    def test_resize(self):
        """Test resizing keeps the current state and both buffers in step."""
        world = world_with(4, 4, [(1, 1), (3, 3)])
        world.resize(6, 2)

        assert (world.width, world.height) == (6, 2)
        assert living_cells(world) == {(1, 1)}

        world.step()
        assert (world.width, world.height) == (6, 2)

        world.resize(3)
        world.step()
        assert (world.width, world.height) == (3, 3)

    def test_step_after_resizing_state_directly(self):
        """Test stepping still works when the state grid was resized on its own."""
        world = World(5, 5)
        world.state.resize(7, 7)
        world.state.merge(zoo.blinker(), 4, 5)

        world.step()

        assert (world.width, world.height) == (7, 7)
        assert living_cells(world) == {(5, 4), (5, 5), (5, 6)}

        world.step()
        assert living_cells(world) == {(4, 5), (5, 5), (6, 5)}


class TestNeighborCount:
    """Test cases for per-cell neighbor counting."""

    def test_bounded(self):
        """Test neighbor counting without wraparound."""
        world = world_with(5, 5, [(1, 1), (1, 2), (2, 1)])

        assert world.neighbor_count(0, 0) == 1
        assert world.neighbor_count(2, 2) == 3
        assert world.neighbor_count(1, 1) == 2  # the cell itself doesn't count
        assert world.neighbor_count(3, 3) == 0

    def test_toroidal(self):
        """Test neighbor counting with wraparound."""
        world = world_with(4, 4, [(0, 0), (3, 3)])

        assert world.neighbor_count(0, 0, toroidal=True) == 1
        assert world.neighbor_count(3, 3, toroidal=True) == 1
        assert world.neighbor_count(0, 0, toroidal=False) == 0

    def test_full_neighborhood(self):
        """Test the maximum count is eight."""
        grid = Grid.from_array(np.ones((3, 3), dtype=np.int8))
        world = World.from_grid(grid)
        assert world.neighbor_count(1, 1) == 8

    def test_out_of_range(self):
        """Test counting outside the world fails."""
        world = World(3, 3)
        with pytest.raises(OutOfRangeError):
            world.neighbor_count(-1, 0)
        with pytest.raises(OutOfRangeError):
            world.neighbor_count(3, 0, toroidal=True)

    @pytest.mark.parametrize("toroidal", [False, True])
    def test_matches_vectorized_counts(self, toroidal):
        """Test per-cell counts agree with the convolution used by step()."""
        rng = np.random.default_rng(7)
        grid = Grid.from_array(rng.integers(0, 2, size=(6, 9)))
        world = World.from_grid(grid)

        counts = grid.count_all_neighbors(toroidal)
        for y in range(grid.height):
            for x in range(grid.width):
                assert world.neighbor_count(x, y, toroidal) == counts[y, x]


class TestStep:
    """Test cases for stepping the simulation."""

    def test_still_life_block(self):
        """Test that a block pattern is stable (still life)."""
        block = {(4, 4), (4, 5), (5, 4), (5, 5)}
        world = world_with(10, 10, block)

        world.advance(5)

        assert living_cells(world) == block
        assert world.generation == 5

    def test_oscillator_blinker(self):
        """Test blinker oscillator (period 2)."""
        vertical = {(5, 4), (5, 5), (5, 6)}
        horizontal = {(4, 5), (5, 5), (6, 5)}
        world = world_with(10, 10, vertical)

        world.step()
        assert living_cells(world) == horizontal

        world.step()
        assert living_cells(world) == vertical

    def test_glider_translates(self):
        """Test a glider moves one cell diagonally every four steps."""
        world = World(10, 10)
        world.state.merge(zoo.glider(), 2, 2)
        start = living_cells(world)

        for _ in range(4):
            world.step()

        assert living_cells(world) == {(x + 1, y + 1) for x, y in start}

    def test_glider_wraps_on_torus(self):
        """Test a glider returns to its start after crossing a torus."""
        world = World(8, 8)
        world.state.merge(zoo.glider(), 5, 5)
        start = world.state.copy()

        world.advance(4 * 8, toroidal=True)

        assert world.state == start

    def test_edge_behavior(self):
        """Test births across the edge only happen on a torus."""
        vertical_at_edge = [(0, 1), (0, 2), (0, 3)]

        bounded = world_with(5, 5, vertical_at_edge)
        bounded.step(toroidal=False)
        assert living_cells(bounded) == {(0, 2), (1, 2)}

        wrapped = world_with(5, 5, vertical_at_edge)
        wrapped.step(toroidal=True)
        assert living_cells(wrapped) == {(4, 2), (0, 2), (1, 2)}

    def test_underpopulation_and_overcrowding(self):
        """Test lonely and crowded cells die."""
        world = world_with(5, 5, [(0, 0), (2, 1), (1, 2), (2, 2), (3, 2), (2, 3)])
        world.step()

        assert world.state.get(0, 0) is Cell.DEAD  # no neighbors
        assert world.state.get(2, 2) is Cell.DEAD  # four neighbors

    def test_step_swaps_buffers(self):
        """Test stepping exchanges the grids instead of copying."""
        world = world_with(5, 5, [(1, 2), (2, 2), (3, 2)])
        first = world.state

        world.step()
        second = world.state
        assert second is not first

        world.step()
        assert world.state is first
        assert world.generation == 2

    def test_step_empty_world(self):
        """Test stepping a 0x0 world."""
        world = World()
        world.step()
        world.step(toroidal=True)
        assert world.total_cells == 0

    def test_advance_zero(self):
        """Test advance(0) leaves everything unchanged."""
        world = world_with(5, 5, [(1, 2), (2, 2), (3, 2)])
        before = world.state.copy()

        world.advance(0)

        assert world.state == before
        assert world.generation == 0

    def test_advance_negative(self):
        """Test a negative step count is rejected."""
        with pytest.raises(InvalidArgumentError):
            World(3, 3).advance(-1)

    def test_advance_matches_steps(self):
        """Test advance(n) equals n calls to step()."""
        stepped = World(12, 12)
        stepped.state.merge(zoo.r_pentomino(), 5, 5)
        advanced = World.from_grid(stepped.state)

        for _ in range(7):
            stepped.step(toroidal=True)
        advanced.advance(7, toroidal=True)

        assert advanced.state == stepped.state


class TestConfig:
    """Test cases for configured runs."""

    def test_from_config(self):
        """Test world construction from a config."""
        config = SimulationConfig(width=20, height=15, pattern_x=3, pattern_y=4)
        world = World.from_config(config, zoo.block())

        assert (world.width, world.height) == (20, 15)
        assert living_cells(world) == {(3, 4), (4, 4), (3, 5), (4, 5)}

    def test_from_config_pattern_too_large(self):
        """Test a pattern that does not fit is rejected."""
        config = SimulationConfig(width=2, height=2)
        with pytest.raises(InvalidArgumentError):
            World.from_config(config, zoo.glider())

    def test_simulate(self):
        """Test simulate runs the configured number of steps."""
        config = SimulationConfig(width=10, height=10, steps=4, pattern_x=1, pattern_y=1)
        world = simulate(config, zoo.glider())

        assert world.generation == 4
        expected = World(10, 10)
        expected.state.merge(zoo.glider(), 2, 2)
        assert world.state == expected.state
