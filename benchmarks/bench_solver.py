from __future__ import annotations

import argparse
import logging
import statistics
import time
from typing import List

from tsp_insertion.common.config import VARIANTS, SolverConfig
from tsp_insertion.common.constants import RNG_SEEDS, make_rng, seed_everywhere
from tsp_insertion.data.gen_instances import FAMILIES, InstanceConfig, draw_points
from tsp_insertion.data.io_utils import vertex_coords
from tsp_insertion.eval.metrics import run_summary, validate_tour
from tsp_insertion.model.vertex_utils import deduplicate_vertices
from tsp_insertion.solver.heap_solver import solve, to_vertices


def main() -> None:
    parser = argparse.ArgumentParser(description="Timing benchmark for the best-first insertion solver.")
    parser.add_argument("--n", type=int, default=20, help="Number of timed instances.")
    parser.add_argument("--points", type=int, default=40, help="Points per instance.")
    parser.add_argument("--dim", type=int, choices=[2, 3], default=2)
    parser.add_argument("--family", choices=FAMILIES, default="uniform")
    parser.add_argument("--variant", choices=VARIANTS, default="min_clones")
    parser.add_argument("--limit", type=int, default=3)
    parser.add_argument("--max-clones", type=int, default=None)
    parser.add_argument("--seed", type=int, default=RNG_SEEDS["bench"])
    parser.add_argument("--validate", action="store_true", help="Check every tour against its input points.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    seed_everywhere(args.seed)
    rng = make_rng(args.seed)
    instance_config = InstanceConfig(family=args.family, n_points=args.points, dim=args.dim)
    solver_config = SolverConfig(variant=args.variant, limit=args.limit, max_clones=args.max_clones)

    warmup = 2
    durations: List[float] = []
    lengths: List[float] = []
    clones: List[float] = []

    for iteration in range(warmup + args.n):
        points = draw_points(instance_config, rng)
        start = time.perf_counter()
        result = solve(points, config=solver_config)
        elapsed = time.perf_counter() - start

        if args.validate:
            unique = [vertex_coords(v) for v in deduplicate_vertices(to_vertices(points))]
            tour = [vertex_coords(v) for v in result.tour]
            validate_tour(tour, unique, reported_length=result.length)

        if iteration >= warmup:
            durations.append(elapsed)
            lengths.append(result.length)
            clones.append(float(result.clones))

    durations.sort()
    timing = run_summary(durations)
    print(
        f"family={args.family} dim={args.dim} points={args.points} variant={args.variant} runs={len(durations)} "
        f"mean={timing['mean']:.6f}s p50={timing['p50']:.6f}s p95={timing['p95']:.6f}s max={timing['max']:.6f}s"
        if durations
        else "No runs recorded."
    )
    if lengths:
        print(f"length mean={statistics.fmean(lengths):.4f} clones mean={statistics.fmean(clones):.1f} max={max(clones):.0f}")


if __name__ == "__main__":
    main()
