"""Tour validation and summary statistics for solver outputs."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from tsp_insertion.common.constants import TOL_NUM

__all__ = [
    "tour_length",
    "validate_tour",
    "gap_pct",
    "run_summary",
]


def tour_length(points: Sequence[Sequence[float]]) -> float:
    """Length of the closed tour through ``points`` in order."""
    if len(points) < 2:
        return 0.0
    arr = np.asarray(points, dtype=float)
    deltas = np.roll(arr, -1, axis=0) - arr
    return float(np.sqrt((deltas * deltas).sum(axis=1)).sum())


def validate_tour(
    tour: Sequence[Sequence[float]],
    points: Sequence[Sequence[float]],
    *,
    reported_length: float | None = None,
    tol: float = TOL_NUM,
) -> None:
    """Raise ``ValueError`` unless ``tour`` visits every point exactly once.

    Points are matched by coordinates within ``tol``; ``points`` is expected to
    be free of duplicates. When ``reported_length`` is given it must agree
    with the recomputed tour length.
    """
    if len(tour) != len(points):
        raise ValueError(f"Tour has {len(tour)} vertices, expected {len(points)}")
    remaining = [np.asarray(p, dtype=float) for p in points]
    for stop in tour:
        arr = np.asarray(stop, dtype=float)
        for i, candidate in enumerate(remaining):
            if candidate.shape == arr.shape and np.all(np.abs(candidate - arr) <= tol):
                del remaining[i]
                break
        else:
            raise ValueError(f"Tour vertex {tuple(stop)!r} is not an input point or is visited twice")
    if reported_length is not None:
        actual = tour_length(tour)
        if abs(actual - reported_length) > tol * max(1.0, actual):
            raise ValueError(f"Reported length {reported_length:.9f} does not match tour length {actual:.9f}")


def gap_pct(length: float, reference: float) -> float:
    """Percentage by which ``length`` exceeds ``reference``."""
    if reference <= 0.0:
        return 0.0
    return 100.0 * (length - reference) / max(reference, 1e-9)


def run_summary(values: Sequence[float]) -> dict[str, float]:
    if not values:
        return {"count": 0}
    arr = np.array(values, dtype=float)
    return {
        "count": float(arr.size),
        "mean": float(arr.mean()),
        "p50": float(np.percentile(arr, 50)),
        "p95": float(np.percentile(arr, 95)),
        "max": float(arr.max()),
    }
