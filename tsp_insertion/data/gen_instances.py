"""Synthetic point-set generation for solver tests and benchmarks.

``InstanceConfig`` declares the family and its knobs; ``draw_points`` samples
coordinates from a ``numpy.random.Generator`` so that instances regenerate
exactly from the same seed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

Point = Tuple[float, ...]

FAMILIES = ("uniform", "clustered", "ring")


@dataclass(frozen=True)
class InstanceConfig:
    """Configuration bundle for instance families."""

    family: str = "uniform"
    n_points: int = 50
    dim: int = 2
    extent: float = 100.0
    n_clusters: int = 4
    cluster_spread: float = 0.05  # fraction of extent
    ring_noise: float = 0.02  # fraction of extent

    def __post_init__(self) -> None:
        if self.family not in FAMILIES:
            raise ValueError(f"Unknown family {self.family!r}; expected one of {FAMILIES}")
        if self.n_points < 1:
            raise ValueError("n_points must be positive")
        if self.dim not in (2, 3):
            raise ValueError("dim must be 2 or 3")
        if not math.isfinite(self.extent) or self.extent <= 0.0:
            raise ValueError("extent must be finite and positive")
        if self.n_clusters < 1:
            raise ValueError("n_clusters must be positive")
        if self.cluster_spread <= 0.0 or self.ring_noise < 0.0:
            raise ValueError("cluster_spread must be positive and ring_noise non-negative")


def _uniform(config: InstanceConfig, rng: np.random.Generator) -> np.ndarray:
    return rng.uniform(0.0, config.extent, size=(config.n_points, config.dim))


def _clustered(config: InstanceConfig, rng: np.random.Generator) -> np.ndarray:
    centres = rng.uniform(0.0, config.extent, size=(config.n_clusters, config.dim))
    labels = rng.integers(0, config.n_clusters, size=config.n_points)
    noise = rng.normal(0.0, config.cluster_spread * config.extent, size=(config.n_points, config.dim))
    return np.clip(centres[labels] + noise, 0.0, config.extent)


def _ring(config: InstanceConfig, rng: np.random.Generator) -> np.ndarray:
    radius = config.extent / 2.0
    angles = rng.uniform(0.0, 2.0 * math.pi, size=config.n_points)
    radii = radius + rng.normal(0.0, config.ring_noise * config.extent, size=config.n_points)
    pts = np.zeros((config.n_points, config.dim))
    pts[:, 0] = radius + radii * np.cos(angles)
    pts[:, 1] = radius + radii * np.sin(angles)
    if config.dim == 3:
        pts[:, 2] = rng.normal(0.0, config.ring_noise * config.extent, size=config.n_points)
    return pts


def draw_points(config: InstanceConfig, rng: np.random.Generator) -> List[Point]:
    """Sample ``config.n_points`` points of ``config.dim`` coordinates."""
    if config.family == "uniform":
        arr = _uniform(config, rng)
    elif config.family == "clustered":
        arr = _clustered(config, rng)
    else:
        arr = _ring(config, rng)
    return [tuple(float(c) for c in row) for row in arr]


__all__ = ["InstanceConfig", "FAMILIES", "draw_points"]
