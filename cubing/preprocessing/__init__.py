"""
Preprocessing utilities for augmented CNF formulas.

Provides:
- Line classification and cube parsing (augmented DIMACS format)
- Header metadata recomputation
"""

from .cnf_parser import (
    Formula,
    Line,
    LineKind,
    classify,
    parse_cube,
    parse_literal,
    parse_formula,
    parse_formula_string,
    split_lines,
)
from .metadata import (
    FormulaStats,
    clause_count,
    clause_literals,
    formula_stats,
    max_variable,
)

__all__ = [
    # Parsing
    'Formula',
    'Line',
    'LineKind',
    'classify',
    'parse_cube',
    'parse_literal',
    'parse_formula',
    'parse_formula_string',
    'split_lines',
    # Metadata
    'FormulaStats',
    'clause_count',
    'clause_literals',
    'formula_stats',
    'max_variable',
]
