"""Exceptions raised by grids, worlds and the file codecs."""


class LifeGridError(Exception):
    """Base class for all lifegrid errors."""


class OutOfRangeError(LifeGridError, IndexError):
    """A coordinate lies outside the grid."""


class InvalidArgumentError(LifeGridError, ValueError):
    """An argument is not acceptable for the requested operation."""


class NotFoundError(LifeGridError, FileNotFoundError):
    """A file could not be opened for reading."""


class WriteFailureError(LifeGridError, OSError):
    """A file could not be opened or written for saving."""


class FormatError(LifeGridError, ValueError):
    """File content is malformed."""


class InvalidShapeError(FormatError):
    """A file header declares a negative width or height."""


class TruncatedDataError(FormatError):
    """File content ended before all required data was read."""
