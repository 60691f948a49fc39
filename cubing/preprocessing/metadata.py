"""
Header metadata for CNF output.

When a cube is folded into the clause set a new 'p cnf' line has to be
written. The values are recomputed from the lines themselves; the header
declared in the input file is never trusted for new output.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence
import logging

from .cnf_parser import Formula, LineKind, classify, parse_literal

logger = logging.getLogger(__name__)


def clause_literals(line: str) -> List[int]:
    """
    Return the literals of a clause line.

    Tokens are read as integers until the terminating 0, the first token
    that is not an integer, or the end of the line. Unlike cube parsing this
    never fails.
    """
    literals = []
    for token in line.split():
        literal = parse_literal(token)
        if literal is None or literal == 0:
            break
        literals.append(literal)
    return literals


def max_variable(lines: Iterable[str], cubes: Iterable[Sequence[int]] = ()) -> int:
    """
    Compute the largest variable index used by clauses and cubes.

    Args:
        lines: Raw lines; only clause lines contribute
        cubes: Literal sequences of the cubes relevant to the output

    Returns:
        The maximum absolute literal value, or 0 if there are no literals
    """
    largest = 0
    for line in lines:
        if classify(line) is not LineKind.CLAUSE:
            continue
        for literal in clause_literals(line):
            largest = max(largest, abs(literal))

    for cube in cubes:
        for literal in cube:
            largest = max(largest, abs(literal))

    return largest


def clause_count(lines: Iterable[str]) -> int:
    """
    Count clause lines.

    Every line that is not a comment, header or cube counts once, blank
    lines included.
    """
    return sum(1 for line in lines if classify(line) is LineKind.CLAUSE)


@dataclass
class FormulaStats:
    """
    Declared and recomputed size of a formula.

    Attributes:
        declared_variables: Variable count of the 'p cnf' line (None if absent)
        declared_clauses: Clause count of the 'p cnf' line (None if absent)
        num_variables: Maximum variable index over clauses and all cubes
        num_clauses: Number of clause lines
        num_cubes: Number of cube lines
    """
    declared_variables: Optional[int]
    declared_clauses: Optional[int]
    num_variables: int
    num_clauses: int
    num_cubes: int

    @property
    def header_matches(self) -> bool:
        return (
            self.declared_variables == self.num_variables
            and self.declared_clauses == self.num_clauses
        )


def formula_stats(formula: Formula) -> FormulaStats:
    """
    Summarize a formula.

    Cube literals are read leniently here, so a malformed cube does not
    fail the summary.
    """
    lines = [line.text for line in formula.lines]
    cubes = [clause_literals(cube[1:]) for cube in formula.cubes]

    stats = FormulaStats(
        declared_variables=formula.declared_variables,
        declared_clauses=formula.declared_clauses,
        num_variables=max_variable(lines, cubes),
        num_clauses=clause_count(lines),
        num_cubes=len(cubes),
    )
    if not stats.header_matches:
        logger.debug(
            f"Declared header ({stats.declared_variables}, {stats.declared_clauses}) "
            f"differs from recomputed ({stats.num_variables}, {stats.num_clauses})"
        )
    return stats
