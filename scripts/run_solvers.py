#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from dataclasses import asdict
from typing import Iterable, Iterator

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from BnBTSP.errors import InvalidInput
from BnBTSP.problem import build_cost_matrix
from BnBTSP.solvers import SOLVER_REGISTRY, SolveResult, get_solver

logger = logging.getLogger("run_solvers")


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run TSP solvers on generated problem instances.")
    parser.add_argument(
        "--problems",
        type=pathlib.Path,
        default=pathlib.Path("data/problems.jsonl"),
        help="JSONL file containing problem instances.",
    )
    parser.add_argument(
        "--results",
        type=pathlib.Path,
        default=pathlib.Path("data/results.jsonl"),
        help="Destination JSONL file for solver outcomes.",
    )
    parser.add_argument(
        "--solvers",
        nargs="+",
        choices=sorted(SOLVER_REGISTRY.keys()),
        help="Subset of solvers to execute (default: all).",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=60.0,
        help="Per-solver time budget in seconds.",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Re-run solvers even if results already exist for a problem.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging verbosity (default: INFO).")
    return parser.parse_args(raw_args)


def iter_jsonl(path: pathlib.Path) -> Iterator[dict]:
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def load_existing_results(path: pathlib.Path) -> dict[tuple[str, str], dict]:
    records: dict[tuple[str, str], dict] = {}
    if not path.exists():
        return records
    for row in iter_jsonl(path):
        pid = row.get("problem_id")
        solver = row.get("solver")
        if not pid or not solver:
            continue
        records[(pid, solver)] = row
    return records


def serialize_result(problem: dict, solver_name: str, result: SolveResult) -> dict:
    record = asdict(result)
    record.update(
        {
            "solver": solver_name,
            "problem_id": problem.get("problem_id"),
            "num_cities": problem.get("num_cities"),
            "terminated_by": result.terminated_by.value,
        }
    )
    return record


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if not args.problems.exists():
        raise SystemExit(f"Problem file not found: {args.problems}")

    selected = args.solvers or list(SOLVER_REGISTRY.keys())
    existing = load_existing_results(args.results)
    appended = 0
    reused = 0
    args.results.parent.mkdir(parents=True, exist_ok=True)

    with args.results.open("a", encoding="utf-8") as out:
        for problem in iter_jsonl(args.problems):
            problem_id = problem.get("problem_id", "?")
            try:
                dist_matrix = build_cost_matrix(problem)
            except InvalidInput as exc:
                logger.warning("Skipping problem %s: %s", problem_id, exc)
                continue
            for solver_name in selected:
                key = (problem_id, solver_name)
                if not args.overwrite and key in existing:
                    reused += 1
                    logger.info("%s on problem %s -> cached", solver_name, problem_id)
                    continue
                result = get_solver(solver_name).solve(dist_matrix, time_limit=args.time_limit)
                record = serialize_result(problem, solver_name, result)
                out.write(json.dumps(record))
                out.write("\n")
                existing[key] = record
                appended += 1
                logger.info(
                    "%s on problem %s (cities=%s) -> %s, cost %.6f",
                    solver_name,
                    problem_id,
                    problem.get("num_cities"),
                    result.terminated_by.value,
                    result.cost,
                )

    logger.info("Completed %d new runs. Reused %d cached results.", appended, reused)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
