"""Binary cell state."""

from enum import IntEnum


class Cell(IntEnum):
    """State of a single cell: dead or alive."""

    DEAD = 0
    ALIVE = 1

    @property
    def symbol(self) -> str:
        """Character used for this state in text renderings and .gol files."""
        return "#" if self is Cell.ALIVE else " "

    @classmethod
    def from_symbol(cls, char: str) -> "Cell":
        """Map a text character back to a cell state.

        Raises:
            ValueError: If the character is neither '#' nor ' '
        """
        if char == "#":
            return cls.ALIVE
        if char == " ":
            return cls.DEAD
        raise ValueError(f"Invalid cell character {char!r}")
