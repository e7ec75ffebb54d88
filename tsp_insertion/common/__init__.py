"""Shared tolerances, seeds and configuration."""

from tsp_insertion.common.config import SolverConfig
from tsp_insertion.common.constants import (
    DEFAULT_SEED,
    RNG_SEEDS,
    THRESHOLD,
    TOL_NUM,
    make_rng,
    seed_everywhere,
)

__all__ = [
    "SolverConfig",
    "DEFAULT_SEED",
    "RNG_SEEDS",
    "THRESHOLD",
    "TOL_NUM",
    "make_rng",
    "seed_everywhere",
]
