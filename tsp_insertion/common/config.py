"""Configuration bundle for the best-first insertion solver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VARIANTS = ("min_clones", "limited")


@dataclass(frozen=True)
class SolverConfig:
    """Knobs that trade accuracy for runtime.

    ``variant`` selects the circuit state implementation: ``"min_clones"`` keeps
    every (vertex, edge) candidate, ``"limited"`` keeps only the ``limit``
    cheapest edges per interior vertex. ``max_clones`` caps how many forked
    states the search may create before it settles on the best state so far.
    """

    variant: str = "min_clones"
    limit: int = 3
    max_clones: Optional[int] = None
    dedupe: bool = True

    def __post_init__(self) -> None:
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown circuit variant: {self.variant!r}")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")
        if self.max_clones is not None and self.max_clones < 0:
            raise ValueError("max_clones must be non-negative")


__all__ = ["SolverConfig", "VARIANTS"]
