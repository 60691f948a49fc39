"""
Transforms over the cubes of an augmented CNF formula.

Provides the seedable random source, the shuffle/sample/CNF export
operations and the line emitter.
"""

from .emitter import emit, write_lines
from .pipeline import (
    Mode,
    TransformOptions,
    cube_to_cnf,
    resolve_cube_index,
    sample_cubes,
    shuffle_cubes,
    transform,
)
from .randomization import CubeRandom

__all__ = [
    'CubeRandom',
    'Mode',
    'TransformOptions',
    'cube_to_cnf',
    'emit',
    'resolve_cube_index',
    'sample_cubes',
    'shuffle_cubes',
    'transform',
    'write_lines',
]
