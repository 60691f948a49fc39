"""
Command line entry point.

Usage:
    cubing-tools formula.icnf
    cubing-tools formula.icnf --seed 7 --sample 100
    cubing-tools formula.icnf --as-cnf 3 --output cube3.cnf
    cubing-tools formula.icnf --as-cnf-random --config conf/config.yaml
"""

import argparse
import logging
import sys
from typing import List, Optional

from omegaconf.errors import OmegaConfBaseException

from .config import LOG_LEVELS, load_config, to_transform_options
from .errors import CubingError
from .preprocessing.cnf_parser import parse_formula
from .preprocessing.metadata import formula_stats
from .transforms.emitter import emit, write_lines
from .transforms.pipeline import transform
from .transforms.randomization import CubeRandom

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cubing-tools',
        description="Shuffle, sample or export the cubes of an augmented DIMACS CNF file",
    )
    parser.add_argument("filename", help="Input file with 'a ... 0' cube lines")
    parser.add_argument("--seed", type=_non_negative_int, default=None, help="Set random seed")

    selectors = parser.add_mutually_exclusive_group()
    selectors.add_argument(
        "--sample", type=_non_negative_int, default=None, metavar="N",
        help="Sample N cubes from the formula",
    )
    selectors.add_argument(
        "--as-cnf", type=int, default=None, metavar="I",
        help="Output as CNF with the I-th cube (1-based) as unit clauses",
    )
    selectors.add_argument(
        "--as-cnf-random", action="store_true", default=None,
        help="Output as CNF with a random cube as unit clauses",
    )

    parser.add_argument("--output", "-o", default=None, help="Write to a file instead of stdout")
    parser.add_argument("--config", default=None, help="YAML file with default options")
    parser.add_argument(
        "--log-level", default=None,
        choices=LOG_LEVELS,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Same as --log-level DEBUG")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        'seed': args.seed,
        'sample': args.sample,
        'as_cnf': args.as_cnf,
        'as_cnf_random': args.as_cnf_random,
        'output': args.output,
        'log_level': 'DEBUG' if args.verbose else args.log_level,
    }
    try:
        config = load_config(args.config, overrides)
        options = to_transform_options(config)
    except (ValueError, OSError, OmegaConfBaseException) as e:
        parser.error(str(e))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    rng = CubeRandom(config.seed)
    if not rng.seeded:
        logger.info("No seed given, output is not reproducible")

    try:
        formula = parse_formula(args.filename)
        logger.info(f"Loaded {formula.num_cubes} cubes from {formula.source}")
        if logger.isEnabledFor(logging.DEBUG):
            stats = formula_stats(formula)
            logger.debug(
                f"Formula: {stats.num_variables} variables, {stats.num_clauses} clauses, "
                f"{stats.num_cubes} cubes"
            )
        lines = transform(formula, options, rng)
    except CubingError as e:
        logger.debug(f"Transform failed: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.output is not None:
        try:
            write_lines(lines, config.output)
        except OSError as e:
            print(f"Error writing {config.output}: {e}", file=sys.stderr)
            return 1
        logger.info(f"Wrote {len(lines)} lines to {config.output}")
    else:
        # undecodable input bytes round-trip as surrogates
        sys.stdout.reconfigure(encoding='utf-8', errors='surrogateescape')
        emit(lines, sys.stdout)

    return 0


if __name__ == "__main__":
    sys.exit(main())
