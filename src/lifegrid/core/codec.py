"""Reading and writing grids as .gol (ASCII) and .bgol (packed binary) files.

ASCII layout::

    <width> <height>\\n
    <width characters from '#' and ' '>\\n    (repeated height times)

Binary layout::

    bytes [0, 4)   width, signed 32-bit little-endian
    bytes [4, 8)   height, signed 32-bit little-endian
    bytes [8, ...) ceil(width * height / 8) payload bytes

Payload bits follow row-major cell order (index ``x + y * width``), least
significant bit first within each byte. Unused high bits of the final byte
are written as zero and ignored when reading.
"""

import logging
import os
import re
from pathlib import Path
from typing import Union

import numpy as np

from .cell import Cell
from .errors import (
    FormatError,
    InvalidArgumentError,
    InvalidShapeError,
    NotFoundError,
    TruncatedDataError,
    WriteFailureError,
)
from .grid import Grid

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

ASCII_SUFFIX = ".gol"
BINARY_SUFFIX = ".bgol"

_HEADER_DTYPE = np.dtype("<i4")
_HEADER_SIZE = 2 * _HEADER_DTYPE.itemsize
_INT32_MAX = np.iinfo(np.int32).max

_ASCII_HEADER = re.compile(r"\s*([+-]?\d+)\s+([+-]?\d+)")


def payload_size(width: int, height: int) -> int:
    """Number of payload bytes needed for a width x height grid."""
    return (width * height + 7) // 8


def _read(path: PathLike, binary: bool) -> Union[str, bytes]:
    try:
        if binary:
            with open(path, "rb") as f:
                return f.read()
        with open(path, "r", encoding="ascii", newline="") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise FormatError(f"File '{path}' is not an ASCII grid file") from exc
    except OSError as exc:
        raise NotFoundError(f"File '{path}' not found") from exc


def _write(path: PathLike, data: Union[str, bytes]) -> None:
    try:
        if isinstance(data, bytes):
            with open(path, "wb") as f:
                f.write(data)
        else:
            with open(path, "w", encoding="ascii", newline="") as f:
                f.write(data)
    except OSError as exc:
        raise WriteFailureError(f"Cannot write to file '{path}'") from exc


def _check_shape(path: PathLike, width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise InvalidShapeError(f"Invalid grid shape {width}x{height} in file '{path}'")


def load_ascii(path: PathLike) -> Grid:
    """Load a grid from a .gol text file.

    Args:
        path: File to read

    Returns:
        The loaded grid

    Raises:
        NotFoundError: If the file cannot be opened
        InvalidShapeError: If the header declares a negative size
        TruncatedDataError: If the file ends before the last row
        FormatError: If the header or a row is malformed
    """
    text = _read(path, binary=False)

    header = _ASCII_HEADER.match(text)
    if header is None:
        raise FormatError(f"File '{path}' has no '<width> <height>' header")

    width, height = int(header.group(1)), int(header.group(2))
    _check_shape(path, width, height)

    pos = header.end()
    if pos >= len(text):
        raise TruncatedDataError(f"File '{path}' ends after its header")
    if text[pos] != "\n":
        raise FormatError(f"File '{path}' is invalid: header must end with a newline")
    pos += 1

    # Every row is width characters plus its newline
    if len(text) - pos < height * (width + 1):
        raise TruncatedDataError(
            f"File '{path}' is too short for a {width}x{height} grid"
        )

    cells = np.zeros((height, width), dtype=np.int8)
    for y in range(height):
        row = text[pos : pos + width]
        if len(row) < width:
            raise TruncatedDataError(f"File '{path}' ends in row {y}")
        try:
            cells[y] = [Cell.from_symbol(char) for char in row]
        except ValueError as exc:
            raise FormatError(f"File '{path}' is invalid: {exc} in row {y}") from exc
        pos += width

        if pos >= len(text):
            raise TruncatedDataError(f"File '{path}' ends in row {y}")
        if text[pos] != "\n":
            raise FormatError(f"File '{path}' is invalid: row {y} is not {width} characters long")
        pos += 1

    logger.debug("Loaded %dx%d grid from %s", width, height, path)
    return Grid.from_array(cells)


def save_ascii(path: PathLike, grid: Grid) -> None:
    """Save a grid as a .gol text file.

    Raises:
        WriteFailureError: If the file cannot be written
    """
    text = f"{grid.width} {grid.height}\n" + grid.render(border=False)
    _write(path, text)
    logger.debug("Saved %dx%d grid to %s", grid.width, grid.height, path)


def load_binary(path: PathLike) -> Grid:
    """Load a grid from a .bgol packed binary file.

    Args:
        path: File to read

    Returns:
        The loaded grid

    Raises:
        NotFoundError: If the file cannot be opened
        InvalidShapeError: If the header declares a negative size
        TruncatedDataError: If the header or payload is incomplete
    """
    data = _read(path, binary=True)

    if len(data) < _HEADER_SIZE:
        raise TruncatedDataError(f"File '{path}' is too short for a grid header")

    width, height = (int(v) for v in np.frombuffer(data, dtype=_HEADER_DTYPE, count=2))
    _check_shape(path, width, height)

    total_cells = width * height
    size = payload_size(width, height)
    payload = data[_HEADER_SIZE : _HEADER_SIZE + size]
    if len(payload) < size:
        raise TruncatedDataError(
            f"File '{path}' holds {len(payload)} payload byte(s), expected {size}"
        )

    packed = np.frombuffer(payload, dtype=np.uint8) if size else np.zeros(0, dtype=np.uint8)
    bits = np.unpackbits(packed, count=total_cells, bitorder="little")

    logger.debug("Loaded %dx%d grid from %s", width, height, path)
    return Grid.from_array(bits.reshape(height, width))


def save_binary(path: PathLike, grid: Grid) -> None:
    """Save a grid as a .bgol packed binary file.

    Raises:
        InvalidArgumentError: If a dimension does not fit in 32 bits
        WriteFailureError: If the file cannot be written
    """
    if grid.width > _INT32_MAX or grid.height > _INT32_MAX:
        raise InvalidArgumentError(
            f"Grid {grid.width}x{grid.height} is too large for {BINARY_SUFFIX}"
        )

    header = np.array([grid.width, grid.height], dtype=_HEADER_DTYPE).tobytes()
    payload = np.packbits(grid.cells.ravel().astype(np.uint8), bitorder="little").tobytes()
    _write(path, header + payload)
    logger.debug(
        "Saved %dx%d grid to %s (%d payload bytes)", grid.width, grid.height, path, len(payload)
    )


def load(path: PathLike) -> Grid:
    """Load a grid, choosing the format from the file suffix."""
    suffix = Path(path).suffix.lower()
    if suffix == ASCII_SUFFIX:
        return load_ascii(path)
    if suffix == BINARY_SUFFIX:
        return load_binary(path)
    raise InvalidArgumentError(f"Unknown grid file suffix {suffix!r}")


def save(path: PathLike, grid: Grid) -> None:
    """Save a grid, choosing the format from the file suffix."""
    suffix = Path(path).suffix.lower()
    if suffix == ASCII_SUFFIX:
        save_ascii(path, grid)
    elif suffix == BINARY_SUFFIX:
        save_binary(path, grid)
    else:
        raise InvalidArgumentError(f"Unknown grid file suffix {suffix!r}")
