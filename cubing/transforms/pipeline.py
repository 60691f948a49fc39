"""
Cube transforms.

Three mutually exclusive operations are supported:

- shuffle (default): all cubes, in random order
- sample: a random subset of n cubes
- cube to CNF: one cube turned into unit clauses appended to the clauses,
  under a freshly computed 'p cnf' header

Each operation returns the complete list of output lines. Nothing is
written until the whole result is known, so errors never leave partial
output behind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import logging

from ..errors import IndexOutOfRange, NoCubes
from ..preprocessing.cnf_parser import Formula, parse_cube
from ..preprocessing.metadata import clause_count, max_variable
from .randomization import CubeRandom

logger = logging.getLogger(__name__)


class Mode(Enum):
    SHUFFLE = 'shuffle'
    SAMPLE = 'sample'
    AS_CNF = 'as_cnf'


@dataclass
class TransformOptions:
    """
    Operation selectors for a run.

    Attributes:
        sample: Number of cubes to keep (sample mode)
        as_cnf: 1-based index of the cube to export as CNF
        as_cnf_random: Export a randomly chosen cube as CNF

    At most one selector may be active. With none the cubes are shuffled.
    """
    sample: Optional[int] = None
    as_cnf: Optional[int] = None
    as_cnf_random: bool = False

    def __post_init__(self):
        active = [
            name for name, value in (
                ('sample', self.sample is not None),
                ('as_cnf', self.as_cnf is not None),
                ('as_cnf_random', self.as_cnf_random),
            ) if value
        ]
        if len(active) > 1:
            raise ValueError(f"Options are mutually exclusive: {', '.join(active)}")
        if self.sample is not None and self.sample < 0:
            raise ValueError(f"Sample count must be non-negative, got {self.sample}")

    @property
    def mode(self) -> Mode:
        if self.sample is not None:
            return Mode.SAMPLE
        if self.as_cnf is not None or self.as_cnf_random:
            return Mode.AS_CNF
        return Mode.SHUFFLE


def sample_cubes(formula: Formula, n: int, rng: CubeRandom) -> List[str]:
    """
    Keep a random subset of the cubes.

    Args:
        formula: Parsed input
        n: Number of cubes to keep; more than available keeps all of them
        rng: Random source

    Returns:
        Non-cube lines in original order followed by the chosen cubes
    """
    if n < 0:
        raise ValueError(f"Sample count must be non-negative, got {n}")

    cubes = rng.shuffle(formula.cubes)
    kept = cubes[:min(n, len(cubes))]
    logger.info(f"Keeping {len(kept)} of {len(cubes)} cubes")
    return formula.non_cube_lines + kept


def shuffle_cubes(formula: Formula, rng: CubeRandom) -> List[str]:
    """Return the formula with its cubes in random order."""
    return sample_cubes(formula, formula.num_cubes, rng)


def resolve_cube_index(
    formula: Formula,
    index: Optional[int] = None,
    rng: Optional[CubeRandom] = None,
) -> int:
    """
    Pick the cube to export.

    Args:
        formula: Parsed input
        index: 1-based cube index; None draws one at random
        rng: Random source, required when index is None

    Returns:
        0-based position of the cube in the formula's cube list

    Raises:
        NoCubes: If the formula has no cubes
        IndexOutOfRange: If index is outside 1..num_cubes
    """
    num_cubes = formula.num_cubes
    if num_cubes == 0:
        raise NoCubes()

    if index is None:
        if rng is None:
            raise ValueError("A random source is needed to pick a random cube")
        position = rng.uniform_index(num_cubes)
        logger.info(f"Randomly selected cube {position + 1} of {num_cubes}")
        return position

    position = index - 1
    if position < 0 or position >= num_cubes:
        raise IndexOutOfRange(index, num_cubes)
    return position


def cube_to_cnf(
    formula: Formula,
    index: Optional[int] = None,
    rng: Optional[CubeRandom] = None,
) -> List[str]:
    """
    Turn one cube into unit clauses of a standalone CNF instance.

    Comments, the original header and all cube lines are dropped. The
    output is a new header, the clause lines verbatim, then one unit clause
    per cube literal in cube order.

    Raises:
        NoCubes: If the formula has no cubes
        IndexOutOfRange: If index is outside 1..num_cubes
        MalformedLiteral: If the chosen cube has a non-integer literal
    """
    position = resolve_cube_index(formula, index, rng)
    literals = parse_cube(formula.cubes[position])

    clauses = formula.clause_lines
    num_variables = max_variable(clauses, [literals])
    num_clauses = clause_count(clauses) + len(literals)

    output = [f"p cnf {num_variables} {num_clauses}"]
    output.extend(clauses)
    output.extend(f"{literal} 0" for literal in literals)
    return output


def transform(
    formula: Formula,
    options: Optional[TransformOptions] = None,
    rng: Optional[CubeRandom] = None,
) -> List[str]:
    """
    Run the operation selected by the options.

    Args:
        formula: Parsed input
        options: Operation selectors (default: shuffle)
        rng: Random source (default: unseeded)

    Returns:
        All output lines, without line terminators
    """
    if options is None:
        options = TransformOptions()
    if rng is None:
        rng = CubeRandom()

    mode = options.mode
    logger.debug(f"Running {mode.value} on {formula.num_cubes} cubes")

    if mode is Mode.SAMPLE:
        return sample_cubes(formula, options.sample, rng)
    if mode is Mode.AS_CNF:
        return cube_to_cnf(formula, options.as_cnf, rng)
    return shuffle_cubes(formula, rng)
