#!/usr/bin/env python3
"""Write seeded unit-square instances as JSONL, one problem per line."""
from __future__ import annotations

import argparse
import hashlib
import json
import pathlib
import sys
from typing import Iterable, Iterator

import numpy as np

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from BnBTSP.problem import generate_problem

# exact branch and bound stays tractable up to roughly this many cities
DEFAULT_COUNTS = [5, 8, 10, 12, 15, 20, 25]


def iter_problems(counts: Iterable[int], per_count: int, seed: int) -> Iterator[dict]:
    rng = np.random.default_rng(seed)
    for num_cities in counts:
        for _ in range(per_count):
            instance_seed = int(rng.integers(0, 2**31 - 1))
            coordinates = generate_problem(num_cities, seed=instance_seed).coordinates()
            yield {
                "problem_id": hashlib.sha1(coordinates.tobytes()).hexdigest(),
                "num_cities": num_cities,
                "instance_seed": instance_seed,
                "coordinates": coordinates.tolist(),
            }


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate seeded TSP instances for the batch solver.")
    parser.add_argument("--counts", nargs="+", type=int, default=DEFAULT_COUNTS, help="City counts to generate.")
    parser.add_argument("--per-count", type=int, default=5, help="Instances per city count.")
    parser.add_argument("--seed", type=int, default=42, help="Master seed (default: 42).")
    parser.add_argument(
        "--output",
        type=pathlib.Path,
        default=pathlib.Path("data/problems.jsonl"),
        help="Destination JSONL file.",
    )
    return parser.parse_args(raw_args)


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with args.output.open("w", encoding="utf-8") as fh:
        for problem in iter_problems(args.counts, args.per_count, args.seed):
            fh.write(json.dumps(problem))
            fh.write("\n")
            written += 1
    print(f"Wrote {written} problems to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
