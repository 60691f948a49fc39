"""
Error taxonomy for cube transformations.

Every error is fatal for a run: the command line reports it and exits
with a non-zero status without writing partial output.
"""

from pathlib import Path
from typing import Optional


class CubingError(Exception):
    """Base class for all errors raised by the cubing package."""


class InputUnreadable(CubingError, OSError):
    """The input file is missing or cannot be opened."""

    def __init__(self, path: str | Path, reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot open input file: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NoCubes(CubingError, ValueError):
    """A CNF export was requested but the formula contains no cubes."""

    def __init__(self):
        super().__init__("No cubes found in file")


class IndexOutOfRange(CubingError, IndexError):
    """An explicit 1-based cube index falls outside the cube list."""

    def __init__(self, index: int, num_cubes: int):
        self.index = index
        self.num_cubes = num_cubes
        super().__init__(
            f"Cube index out of range: {index} (file has {num_cubes} cubes)"
        )


class MalformedLiteral(CubingError, ValueError):
    """A token where a literal was expected is not an integer."""

    def __init__(self, token: str, line: str):
        self.token = token
        self.line = line
        super().__init__(f"Invalid literal '{token}' in line: {line}")
