"""
Run configuration.

Options are described by a structured OmegaConf config. Defaults come from
CubingConfig, can be overridden by a YAML file, and finally by explicit
values from the command line.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from omegaconf import OmegaConf

from .transforms.pipeline import TransformOptions

logger = logging.getLogger(__name__)

SELECTOR_KEYS = ('sample', 'as_cnf', 'as_cnf_random')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class CubingConfig:
    """
    Options for one run.

    Attributes:
        seed: Random seed; None seeds from system entropy
        sample: Number of cubes to sample
        as_cnf: 1-based index of the cube to export as CNF
        as_cnf_random: Export a random cube as CNF
        output: Output file; None writes to stdout
        log_level: Logging level name
    """
    seed: Optional[int] = None
    sample: Optional[int] = None
    as_cnf: Optional[int] = None
    as_cnf_random: bool = False
    output: Optional[str] = None
    log_level: str = 'WARNING'


def load_config(
    path: Optional[str | Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> CubingConfig:
    """
    Build the run configuration.

    Args:
        path: Optional YAML file with option values
        overrides: Explicit values; entries set to None are ignored. If any
                   operation selector is given, selectors from the file are
                   discarded so the explicit one wins.

    Returns:
        Validated CubingConfig

    Raises:
        ValueError: If seed or sample is negative or the log level is unknown
        omegaconf.errors.OmegaConfBaseException: If a key is unknown or a
            value has the wrong type
    """
    cfg = OmegaConf.structured(CubingConfig)

    if path is not None:
        logger.debug(f"Loading configuration from {path}")
        cfg = OmegaConf.merge(cfg, OmegaConf.load(path))

    explicit = {k: v for k, v in (overrides or {}).items() if v is not None}
    if any(key in explicit for key in SELECTOR_KEYS):
        cfg.sample = None
        cfg.as_cnf = None
        cfg.as_cnf_random = False
    cfg = OmegaConf.merge(cfg, explicit)

    config = OmegaConf.to_object(cfg)

    if config.seed is not None and config.seed < 0:
        raise ValueError(f"Seed must be non-negative, got {config.seed}")
    if config.sample is not None and config.sample < 0:
        raise ValueError(f"Sample count must be non-negative, got {config.sample}")
    if config.log_level.upper() not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level '{config.log_level}', expected one of {', '.join(LOG_LEVELS)}"
        )
    config.log_level = config.log_level.upper()

    return config


def to_transform_options(config: CubingConfig) -> TransformOptions:
    """Extract the operation selectors from a configuration."""
    return TransformOptions(
        sample=config.sample,
        as_cnf=config.as_cnf,
        as_cnf_random=config.as_cnf_random,
    )
