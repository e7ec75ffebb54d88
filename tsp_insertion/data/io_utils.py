from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

Point = Tuple[float, ...]


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def read_points_json(path: str | Path) -> List[Point]:
    """Read points from either a bare JSON list of coordinate lists or ``{"points": [...]}``."""
    with Path(path).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        payload = payload.get("points")
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of points or an object with a 'points' list")
    points: List[Point] = []
    for i, raw in enumerate(payload):
        if not isinstance(raw, (list, tuple)) or len(raw) not in (2, 3):
            raise ValueError(f"{path}: point {i} must have 2 or 3 coordinates, got {raw!r}")
        points.append(tuple(float(c) for c in raw))
    return points


def write_points_json(path: str | Path, points: Sequence[Sequence[float]]) -> None:
    target = Path(path)
    _ensure_parent(target)
    with target.open("w", encoding="utf-8") as handle:
        json.dump({"points": [list(map(float, p)) for p in points]}, handle, allow_nan=False)


def write_tour_json(
    path: str | Path,
    tour: Sequence[Sequence[float]],
    length: float,
    meta: Optional[Dict[str, Any]] = None,
) -> None:
    target = Path(path)
    _ensure_parent(target)
    payload: Dict[str, Any] = {
        "tour": [list(map(float, p)) for p in tour],
        "length": float(length),
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }
    if meta:
        payload["meta"] = dict(meta)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True, allow_nan=False)


def vertex_coords(vertex: Any) -> Point:
    """Coordinates of a ``Vertex2D``/``Vertex3D`` as a plain tuple."""
    if hasattr(vertex, "z"):
        return (vertex.x, vertex.y, vertex.z)
    return (vertex.x, vertex.y)


__all__ = ["read_points_json", "write_points_json", "write_tour_json", "vertex_coords"]
