"""Writing transformed lines."""

from pathlib import Path
from typing import Iterable, TextIO


def emit(lines: Iterable[str], stream: TextIO) -> None:
    """Write each line followed by a newline."""
    for line in lines:
        stream.write(line + '\n')


def write_lines(lines: Iterable[str], filepath: str | Path) -> None:
    """
    Write lines to a file.

    Args:
        lines: Output lines without terminators
        filepath: Output file path; parent directories are created
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w', encoding='utf-8', errors='surrogateescape', newline='') as f:
        emit(lines, f)
