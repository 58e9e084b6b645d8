"""Grid data structure for cellular automata."""

from typing import Any, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell
from .errors import InvalidArgumentError, OutOfRangeError


# Moore neighbourhood, centre cell excluded
_NEIGHBOR_KERNEL = (
    torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
)


def _check_size(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise InvalidArgumentError(f"Grid dimensions must be non-negative, got {width}x{height}")


def _to_cell(value: Any) -> Cell:
    try:
        return Cell(value)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid cell value {value!r}") from exc


class Grid:
    """Represents a 2D grid of binary cells.

    Cells live in a numpy array of shape (height, width), so the flat
    buffer is row-major: cell (x, y) sits at index ``x + y * width``.
    Every public access path is bounds-checked.
    """

    def __init__(self, width: int = 0, height: Optional[int] = None) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows, defaults to ``width`` for a square grid

        Raises:
            InvalidArgumentError: If either dimension is negative
        """
        if height is None:
            height = width
        _check_size(width, height)

        self._width = width
        self._height = height
        self._cells = np.zeros((height, width), dtype=np.int8)

    @classmethod
    def from_array(cls, cells: Any) -> "Grid":
        """Build a grid from a 2D array-like of 0/1 values indexed ``[y][x]``.

        Raises:
            InvalidArgumentError: If the data is not 2D or holds other values
        """
        arr = np.asarray(cells)
        if arr.ndim != 2:
            raise InvalidArgumentError(f"Expected 2D cell data, got {arr.ndim} dimension(s)")
        if arr.size and not np.isin(arr, (0, 1)).all():
            raise InvalidArgumentError("Cell data may only contain 0/1 values")

        grid = cls(arr.shape[1], arr.shape[0])
        grid._cells[:] = arr
        return grid

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def total_cells(self) -> int:
        """Number of cells, width * height."""
        return self._width * self._height

    @property
    def cells(self) -> np.ndarray:
        """The underlying (height, width) cell array, indexed ``[y, x]``."""
        return self._cells

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return self.alive_count()

    def alive_count(self) -> int:
        """Count living cells."""
        return int(np.count_nonzero(self._cells == Cell.ALIVE))

    def dead_count(self) -> int:
        """Count dead cells."""
        return int(np.count_nonzero(self._cells == Cell.DEAD))

    def contains(self, x: int, y: int) -> bool:
        """Whether (x, y) is a valid coordinate of this grid."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _index(self, x: int, y: int) -> Tuple[int, int]:
        if not self.contains(x, y):
            raise OutOfRangeError(
                f"Coordinates ({x}, {y}) out of bounds for {self._width}x{self._height} grid"
            )
        return (y, x)

    def __getitem__(self, key: Tuple[int, int]) -> Cell:
        x, y = key
        return Cell(int(self._cells[self._index(x, y)]))

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        x, y = key
        self._cells[self._index(x, y)] = _to_cell(value)

    def get(self, x: int, y: int) -> Cell:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Cell.ALIVE or Cell.DEAD

        Raises:
            OutOfRangeError: If coordinates are out of bounds
        """
        return self[x, y]

    def set(self, x: int, y: int, value: Any) -> None:
        """Set the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            value: A Cell, or a bool meaning alive/dead

        Raises:
            OutOfRangeError: If coordinates are out of bounds
            InvalidArgumentError: If value is not a valid cell state
        """
        self[x, y] = value

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(Cell.DEAD)

    def copy(self) -> "Grid":
        """Return an independent grid with the same size and cells."""
        duplicate = Grid(self._width, self._height)
        duplicate._cells[:] = self._cells
        return duplicate

    def __copy__(self) -> "Grid":
        return self.copy()

    def resize(self, new_width: int, new_height: Optional[int] = None) -> None:
        """Resize the grid in place.

        Cells inside the rectangle shared by the old and new sizes keep their
        state, every other cell is dead.

        Args:
            new_width: New number of columns
            new_height: New number of rows, defaults to ``new_width``

        Raises:
            InvalidArgumentError: If either dimension is negative
        """
        if new_height is None:
            new_height = new_width
        _check_size(new_width, new_height)

        if (new_width, new_height) == self.shape:
            return

        keep_width = min(self._width, new_width)
        keep_height = min(self._height, new_height)

        cells = np.zeros((new_height, new_width), dtype=np.int8)
        cells[:keep_height, :keep_width] = self._cells[:keep_height, :keep_width]

        self._cells = cells
        self._width = new_width
        self._height = new_height

    def crop(self, x0: int, y0: int, x1: int, y1: int) -> "Grid":
        """Copy the half-open window [x0, x1) x [y0, y1) into a new grid.

        Args:
            x0: Left column (inclusive), must lie inside the grid
            y0: Top row (inclusive), must lie inside the grid
            x1: Right column (exclusive)
            y1: Bottom row (exclusive)

        Returns:
            New grid of size (x1 - x0) x (y1 - y0)

        Raises:
            OutOfRangeError: If the origin is outside the grid, x1/y1 is
                negative, the window has negative size, or a non-empty window
                reaches past the grid edge
        """
        if not self.contains(x0, y0) or x1 < 0 or y1 < 0:
            raise OutOfRangeError(f"Crop window ({x0}, {y0}, {x1}, {y1}) is out of bounds")
        if x1 < x0 or y1 < y0:
            raise OutOfRangeError(f"Crop window ({x0}, {y0}, {x1}, {y1}) has negative size")

        cropped = Grid(x1 - x0, y1 - y0)

        # An empty window copies nothing, so its far corner is never checked
        if cropped.total_cells:
            if x1 > self._width or y1 > self._height:
                raise OutOfRangeError(
                    f"Crop window ({x0}, {y0}, {x1}, {y1}) extends past the "
                    f"{self._width}x{self._height} grid"
                )
            cropped._cells[:] = self._cells[y0:y1, x0:x1]

        return cropped

    def merge(self, other: "Grid", x0: int, y0: int, alive_only: bool = False) -> None:
        """Overlay another grid onto this one with its origin at (x0, y0).

        Args:
            other: Grid to copy cells from (not modified)
            x0: Column where other's left edge lands
            y0: Row where other's top edge lands
            alive_only: Only overwrite cells that are currently dead

        Raises:
            InvalidArgumentError: If other does not fit inside this grid
        """
        if (
            x0 < 0
            or y0 < 0
            or x0 + other.width > self._width
            or y0 + other.height > self._height
        ):
            raise InvalidArgumentError(
                f"{other.width}x{other.height} grid at ({x0}, {y0}) does not fit in "
                f"{self._width}x{self._height} grid"
            )

        region = self._cells[y0 : y0 + other.height, x0 : x0 + other.width]
        if alive_only:
            # ALIVE > DEAD, so the maximum never kills a living cell
            np.maximum(region, other.cells, out=region)
        else:
            region[:] = other.cells

    def rotate(self, rotation: int) -> "Grid":
        """Return a new grid rotated clockwise by ``rotation * 90`` degrees.

        Args:
            rotation: Any integer number of quarter turns, negative for
                anticlockwise

        Returns:
            New rotated grid
        """
        # Python's modulo is already in [0, 4) for negative rotations
        rotation %= 4

        new_grid = self.copy()
        if rotation == 1:
            return self._x_flip(self._swap_coordinates(new_grid))
        if rotation == 2:
            return self._x_flip(self._y_flip(new_grid))
        if rotation == 3:
            return self._y_flip(self._swap_coordinates(new_grid))
        return new_grid

    @staticmethod
    def _x_flip(old_grid: "Grid") -> "Grid":
        if old_grid.width == 1:
            return old_grid
        new_grid = Grid(old_grid.width, old_grid.height)
        new_grid._cells[:] = old_grid._cells[:, ::-1]
        return new_grid

    @staticmethod
    def _y_flip(old_grid: "Grid") -> "Grid":
        if old_grid.height == 1:
            return old_grid
        new_grid = Grid(old_grid.width, old_grid.height)
        new_grid._cells[:] = old_grid._cells[::-1, :]
        return new_grid

    @staticmethod
    def _swap_coordinates(old_grid: "Grid") -> "Grid":
        new_grid = Grid(old_grid.height, old_grid.width)
        new_grid._cells[:] = old_grid._cells.T
        return new_grid

    def count_all_neighbors(self, toroidal: bool = False) -> np.ndarray:
        """Count living neighbors for all cells using a PyTorch convolution.

        Args:
            toroidal: Wrap edges around instead of treating off-grid cells
                as dead

        Returns:
            (height, width) array with the neighbor count of each cell
        """
        if self.total_cells == 0:
            return np.zeros((self._height, self._width), dtype=np.int8)

        tensor = torch.from_numpy(self._cells.astype(np.float32)).unsqueeze(0).unsqueeze(0)

        if toroidal:
            padded = F.pad(tensor, (1, 1, 1, 1), mode="circular")
            neighbors = F.conv2d(padded, _NEIGHBOR_KERNEL)
        else:
            neighbors = F.conv2d(tensor, _NEIGHBOR_KERNEL, padding=1)

        return neighbors[0, 0].numpy().astype(np.int8)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        ys, xs = np.nonzero(self._cells)
        if len(xs) == 0:
            return None

        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def render(
        self, alive: str = Cell.ALIVE.symbol, dead: str = Cell.DEAD.symbol, border: bool = True
    ) -> str:
        """Render the grid as text, one line per row.

        Args:
            alive: Character for living cells
            dead: Character for dead cells
            border: Frame the rows with +---+ edges and | sides

        Returns:
            Rendered text, every line terminated by a newline
        """
        rows = ["".join(alive if cell else dead for cell in row) for row in self._cells]
        if not border:
            return "".join(row + "\n" for row in rows)

        edge = "+" + "-" * self._width + "+\n"
        return edge + "".join(f"|{row}|\n" for row in rows) + edge

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, population={self.population})"

    def __str__(self) -> str:
        """Bordered rendering with '#' for living cells and ' ' for dead ones."""
        return self.render()
