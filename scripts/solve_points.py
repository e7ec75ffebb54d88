#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from tsp_insertion.common.config import VARIANTS, SolverConfig
from tsp_insertion.common.constants import RNG_SEEDS, make_rng, seed_everywhere
from tsp_insertion.data.gen_instances import FAMILIES, InstanceConfig, draw_points
from tsp_insertion.data.io_utils import read_points_json, vertex_coords, write_points_json, write_tour_json
from tsp_insertion.solver.heap_solver import solve

logger = logging.getLogger("solve_points")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a short closed tour through a set of points.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--points", type=Path, help="JSON file with a list of [x, y] or [x, y, z] points.")
    source.add_argument("--generate", type=int, metavar="N", help="Generate N random points instead.")
    parser.add_argument("--family", choices=FAMILIES, default="uniform")
    parser.add_argument("--dim", type=int, choices=[2, 3], default=2)
    parser.add_argument("--seed", type=int, default=RNG_SEEDS["data"])
    parser.add_argument("--variant", choices=VARIANTS, default="min_clones")
    parser.add_argument("--limit", type=int, default=3, help="Candidates per vertex for the limited variant.")
    parser.add_argument("--max-clones", type=int, default=None, help="Stop branching after this many forks.")
    parser.add_argument("--no-dedupe", action="store_true", help="Keep coincident points.")
    parser.add_argument("--out", type=Path, default=None, help="Write the tour as JSON to this path.")
    parser.add_argument("--save-points", type=Path, default=None, help="Also write the input points as JSON.")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.points is not None:
        points = read_points_json(args.points)
    else:
        seed_everywhere(args.seed)
        points = draw_points(
            InstanceConfig(family=args.family, n_points=args.generate, dim=args.dim),
            make_rng(args.seed),
        )
    if args.save_points is not None:
        write_points_json(args.save_points, points)

    try:
        config = SolverConfig(
            variant=args.variant,
            limit=args.limit,
            max_clones=args.max_clones,
            dedupe=not args.no_dedupe,
        )
        result = solve(points, config=config)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    tour = [vertex_coords(v) for v in result.tour]
    if args.out is not None:
        write_tour_json(
            args.out,
            tour,
            result.length,
            meta={
                "variant": args.variant,
                "iterations": result.iterations,
                "clones": result.clones,
                "truncated": result.truncated,
            },
        )
        logger.info("Wrote tour to %s", args.out)
    else:
        for coords in tour:
            print(" ".join(f"{c:g}" for c in coords))
    print(f"length={result.length:.6f} vertices={len(tour)} iterations={result.iterations} clones={result.clones}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
