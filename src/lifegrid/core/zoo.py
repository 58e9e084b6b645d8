"""Named Game of Life creatures."""

from typing import Callable, Dict, List, Tuple

from .cell import Cell
from .grid import Grid


class Pattern:
    """Represents a Game of Life pattern."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
        """
        self.name = name
        self.cells = list(cells)
        self.description = description

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size.

        Returns:
            Tuple of (width, height)
        """
        if not self.cells:
            return (0, 0)

        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates normalized to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description)

        min_x, min_y, _, _ = self.get_bounding_box()
        normalized_cells = [(x - min_x, y - min_y) for x, y in self.cells]

        return Pattern(self.name, normalized_cells, self.description)

    def to_grid(self) -> Grid:
        """Build a fresh grid the size of the pattern's bounding box."""
        pattern = self.normalize()
        grid = Grid(*pattern.get_size())
        for x, y in pattern.cells:
            grid[x, y] = Cell.ALIVE
        return grid


GLIDER = Pattern(
    "Glider",
    [(0, 2), (1, 0), (1, 2), (2, 1), (2, 2)],
    "Smallest spaceship, period-4",
)

R_PENTOMINO = Pattern(
    "R-pentomino",
    [(0, 1), (1, 0), (1, 1), (1, 2), (2, 0)],
    "Famous methuselah that stabilizes after 1103 generations",
)

LIGHT_WEIGHT_SPACESHIP = Pattern(
    "Lightweight Spaceship",
    [(0, 1), (0, 2), (0, 3), (1, 0), (1, 3), (2, 3), (3, 3), (4, 0), (4, 2)],
    "LWSS - Period-4 spaceship",
)

BLOCK = Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block")

BEEHIVE = Pattern(
    "Beehive",
    [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)],
    "Beehive still life",
)

BLINKER = Pattern("Blinker", [(0, 0), (1, 0), (2, 0)], "Period-2 oscillator")


def glider() -> Grid:
    return GLIDER.to_grid()


def r_pentomino() -> Grid:
    return R_PENTOMINO.to_grid()


def light_weight_spaceship() -> Grid:
    return LIGHT_WEIGHT_SPACESHIP.to_grid()


def block() -> Grid:
    return BLOCK.to_grid()


def beehive() -> Grid:
    return BEEHIVE.to_grid()


def blinker() -> Grid:
    return BLINKER.to_grid()


CREATURES: Dict[str, Callable[[], Grid]] = {
    "glider": glider,
    "r_pentomino": r_pentomino,
    "light_weight_spaceship": light_weight_spaceship,
    "block": block,
    "beehive": beehive,
    "blinker": blinker,
}


def creature(name: str) -> Grid:
    """Build the named creature.

    Args:
        name: Key of CREATURES, e.g. "glider"

    Raises:
        KeyError: If no creature has that name
    """
    try:
        factory = CREATURES[name]
    except KeyError:
        raise KeyError(f"Unknown creature {name!r}, expected one of {sorted(CREATURES)}") from None
    return factory()
