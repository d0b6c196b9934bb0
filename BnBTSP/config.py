from __future__ import annotations

import math
from dataclasses import dataclass

from BnBTSP.errors import InvalidInput

DEFAULT_TIME_BUDGET = 60.0
DEFAULT_PROGRESS_INTERVAL = 10_000
DEFAULT_PROBLEM_SIZE = 25


@dataclass(frozen=True)
class SolverConfig:
    """Tunable knobs for a branch-and-bound run."""

    time_budget: float = DEFAULT_TIME_BUDGET
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    def validate(self) -> "SolverConfig":
        if math.isnan(self.time_budget) or self.time_budget < 0:
            raise InvalidInput(f"time_budget must be >= 0, got {self.time_budget}")
        if self.progress_interval <= 0:
            raise InvalidInput(f"progress_interval must be positive, got {self.progress_interval}")
        return self

    def with_budget(self, time_budget: float) -> "SolverConfig":
        return SolverConfig(time_budget=float(time_budget), progress_interval=self.progress_interval)


__all__ = ["DEFAULT_PROBLEM_SIZE", "DEFAULT_PROGRESS_INTERVAL", "DEFAULT_TIME_BUDGET", "SolverConfig"]
