"""
Parser for augmented DIMACS CNF files with cubes.

This module classifies the lines of a cube-and-conquer input file. Besides
the usual DIMACS content, such files carry cube lines describing the case
splits of the search space:

- Lines starting with 'c' are comments
- Problem line: 'p cnf <num_vars> <num_clauses>'
- Cube lines: 'a <lit_1> ... <lit_k> 0'
- Everything else (including empty lines) is clause content

Lines are classified once and keep their original text, so retained lines
are written back exactly as they were read.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional
import logging
import re

from ..errors import InputUnreadable, MalformedLiteral

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r'p\s+cnf\s+(\d+)\s+(\d+)')
_LITERAL_RE = re.compile(r'[+-]?[0-9]+', re.ASCII)


class LineKind(Enum):
    COMMENT = 'c'
    HEADER = 'p'
    CUBE = 'a'
    CLAUSE = ''


_MARKERS = {
    'c': LineKind.COMMENT,
    'p': LineKind.HEADER,
    'a': LineKind.CUBE,
}


def classify(line: str) -> LineKind:
    """Return the kind of a raw line, judged by its first character only."""
    if not line:
        return LineKind.CLAUSE
    return _MARKERS.get(line[0], LineKind.CLAUSE)


@dataclass(frozen=True)
class Line:
    """A raw input line together with its kind."""
    text: str
    kind: LineKind

    @classmethod
    def from_text(cls, text: str) -> 'Line':
        return cls(text=text, kind=classify(text))


def parse_literal(token: str) -> Optional[int]:
    """Return the integer value of a DIMACS literal token, or None if it is not one."""
    if not _LITERAL_RE.fullmatch(token):
        return None
    return int(token)


def parse_cube(line: str) -> List[int]:
    """
    Parse the literals of a cube line.

    The leading marker is skipped and whitespace-separated integers are
    collected until the terminating 0 (which is not returned) or the end of
    the line.

    Args:
        line: A cube line such as 'a 1 -2 0'

    Returns:
        The cube literals in their original order. 'a 0' gives an empty list.

    Raises:
        MalformedLiteral: If a token before the terminator is not an integer
    """
    literals = []
    for token in line[1:].split():
        literal = parse_literal(token)
        if literal is None:
            raise MalformedLiteral(token, line)
        if literal == 0:
            break
        literals.append(literal)
    return literals


@dataclass
class Formula:
    """
    An augmented CNF file held in memory as classified lines.

    Attributes:
        lines: All input lines in file order
        source: Optional path the formula was read from
    """
    lines: List[Line] = field(default_factory=list)
    source: Optional[Path] = None

    @property
    def cubes(self) -> List[str]:
        """Cube lines in file order."""
        return [line.text for line in self.lines if line.kind is LineKind.CUBE]

    @property
    def non_cube_lines(self) -> List[str]:
        """Comments, header and clause lines in file order."""
        return [line.text for line in self.lines if line.kind is not LineKind.CUBE]

    @property
    def clause_lines(self) -> List[str]:
        return [line.text for line in self.lines if line.kind is LineKind.CLAUSE]

    @property
    def num_cubes(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.CUBE)

    def _header_match(self) -> Optional[re.Match]:
        for line in self.lines:
            if line.kind is LineKind.HEADER:
                return _HEADER_RE.match(line.text)
        return None

    @property
    def declared_variables(self) -> Optional[int]:
        """Variable count from the 'p cnf' line, if there is a valid one."""
        match = self._header_match()
        return int(match.group(1)) if match else None

    @property
    def declared_clauses(self) -> Optional[int]:
        match = self._header_match()
        return int(match.group(2)) if match else None


def split_lines(content: str) -> List[str]:
    """
    Split text into lines the way a line reader does.

    A final newline does not produce an extra empty line; interior empty
    lines and carriage returns are kept.
    """
    lines = content.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


def parse_formula_string(content: str) -> Formula:
    """
    Parse an augmented DIMACS CNF string.

    Args:
        content: String containing the file contents

    Returns:
        Formula with every line classified
    """
    return Formula(lines=[Line.from_text(text) for text in split_lines(content)])


def parse_formula(filepath: str | Path) -> Formula:
    """
    Read and classify an augmented DIMACS CNF file.

    Args:
        filepath: Path to the input file

    Returns:
        Formula with every line classified

    Raises:
        InputUnreadable: If the file does not exist or cannot be read
    """
    filepath = Path(filepath)

    try:
        with open(filepath, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
            content = f.read()
    except OSError as e:
        raise InputUnreadable(filepath, getattr(e, 'strerror', None) or str(e)) from e

    formula = parse_formula_string(content)
    formula.source = filepath
    logger.debug(
        f"Read {len(formula.lines)} lines ({formula.num_cubes} cubes) from {filepath}"
    )
    return formula
