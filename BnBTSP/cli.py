from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from typing import Iterable

from BnBTSP.config import DEFAULT_PROBLEM_SIZE, DEFAULT_TIME_BUDGET
from BnBTSP.errors import InvalidInput
from BnBTSP.problem import build_cost_matrix, generate_problem
from BnBTSP.solvers import SOLVER_REGISTRY, get_solver


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bnbtsp",
        description="Generate a random Euclidean TSP instance and solve it with branch and bound.",
    )
    parser.add_argument("--cities", type=int, default=DEFAULT_PROBLEM_SIZE, help="Number of cities.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: fresh entropy).")
    parser.add_argument(
        "--time-limit",
        type=float,
        default=DEFAULT_TIME_BUDGET,
        help="Wall clock budget in seconds.",
    )
    parser.add_argument(
        "--solver",
        choices=sorted(SOLVER_REGISTRY.keys()),
        default="branch_and_bound",
        help="Solver to run.",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as a JSON object.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        graph = generate_problem(args.cities, seed=args.seed)
        dist_matrix = build_cost_matrix(graph)
        result = get_solver(args.solver).solve(dist_matrix, time_limit=args.time_limit)
    except InvalidInput as exc:
        parser.error(str(exc))

    if args.json:
        record = asdict(result)
        record["terminated_by"] = result.terminated_by.value
        print(json.dumps(record))
        return 0

    print("Route:", " -> ".join(map(str, result.route)))
    print(f"Cost: {result.cost:.6f}")
    print(f"Elapsed: {result.elapsed:.3f}s ({result.terminated_by.value})")
    print("Peak agenda size:", result.peak_agenda_size)
    for key, value in result.metadata.items():
        print(f"{key}: {value}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
