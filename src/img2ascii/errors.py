from enum import IntEnum


class InvalidDimensions(ValueError):
    """A source or target size is zero, or a scale-down collapses to nothing."""

    def __init__(self, width: int, height: int, message: str | None = None):
        self.width = width
        self.height = height
        super().__init__(message or f"Invalid dimensions: {width}x{height}")


class ExitCode(IntEnum):
    OK = 0
    IO_ERROR = 1
    NOT_FOUND = 2
    UNSUPPORTED = 3
    ZERO_DIMENSION = 4
