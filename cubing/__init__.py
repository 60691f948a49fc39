"""
Cube tools for cube-and-conquer SAT solving.

Reads augmented DIMACS CNF files whose 'a ... 0' lines describe cubes and
shuffles, samples or exports those cubes.

Submodules:
- preprocessing: line classification, cube parsing, header metadata
- transforms: random source, shuffle/sample/CNF export, output writing
- config: run options (OmegaConf)
- cli: command line entry point
"""

from .errors import (
    CubingError,
    IndexOutOfRange,
    InputUnreadable,
    MalformedLiteral,
    NoCubes,
)
from .preprocessing import (
    Formula,
    LineKind,
    classify,
    clause_count,
    max_variable,
    parse_cube,
    parse_formula,
    parse_formula_string,
)
from .transforms import (
    CubeRandom,
    TransformOptions,
    cube_to_cnf,
    emit,
    sample_cubes,
    shuffle_cubes,
    transform,
)

__all__ = [
    # Errors
    'CubingError',
    'IndexOutOfRange',
    'InputUnreadable',
    'MalformedLiteral',
    'NoCubes',
    # Parsing
    'Formula',
    'LineKind',
    'classify',
    'clause_count',
    'max_variable',
    'parse_cube',
    'parse_formula',
    'parse_formula_string',
    # Transforms
    'CubeRandom',
    'TransformOptions',
    'cube_to_cnf',
    'emit',
    'sample_cubes',
    'shuffle_cubes',
    'transform',
]
