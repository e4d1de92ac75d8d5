"""
tsp_sa.py
---------
Simulated Annealing for the symmetric TSP.

- Initial tour: uniform random permutation of the city indices.
- Neighbor: swap of two distinct positions (or a 2-opt segment reversal).
- Acceptance: improvements always, worse moves with probability exp(-delta / T).
- Cooling: geometric, T_k = T0 * alpha^k, applied once per iteration.

All randomness (shuffle, neighbor positions, acceptance draws) comes from one
`RandomSource`, so a fixed seed reproduces a run exactly:
    res = run_sa(points, SAConfig(max_iterations=20000), RandomSource(seed=7))
    res["route"], res["best_cost"]
"""

from __future__ import annotations
import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from tsp_utils import NEIGHBORS, ConvergenceTracker, Point, tour_cost

logger = logging.getLogger(__name__)


class RandomSource:
    """Single seeded stream shared by the initial shuffle, the neighbor moves and the acceptance test."""

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.SystemRandom().randrange(2**32)
        self.seed = int(seed)
        self._rng = random.Random(self.seed)

    def next_uniform(self) -> float:
        return self._rng.random()

    def randrange(self, n: int) -> int:
        return self._rng.randrange(n)

    def shuffle(self, seq: Iterable[int]) -> List[int]:
        out = list(seq)
        self._rng.shuffle(out)
        return out


@dataclass(frozen=True)
class SAConfig:
    max_iterations: int = 10000
    initial_temperature: float = 10000.0
    cooling_rate: float = 0.995
    neighbor: str = "swap"
    time_limit: Optional[float] = None  # seconds, None = iteration budget only

    def __post_init__(self):
        if self.max_iterations < 0:
            raise ValueError("max_iterations must be >= 0.")
        if not self.initial_temperature > 0:
            raise ValueError("initial_temperature must be positive.")
        if not 0 < self.cooling_rate < 1:
            raise ValueError("cooling_rate must lie in (0, 1).")
        if self.neighbor not in NEIGHBORS:
            raise ValueError(f"Unknown neighbor '{self.neighbor}', expected one of {sorted(NEIGHBORS)}.")
        if self.time_limit is not None and not self.time_limit > 0:
            raise ValueError("time_limit must be positive or None.")


class Solution(NamedTuple):
    tour: Tuple[int, ...]
    cost: float


def temperature_at(config: SAConfig, k: int) -> float:
    return config.initial_temperature * config.cooling_rate ** k


def accept_move(delta: float, temperature: float, rng: RandomSource) -> bool:
    if delta < 0:
        return True
    if temperature <= 0.0:
        # schedule underflowed: only strict improvements are taken
        return False
    return rng.next_uniform() < math.exp(-delta / temperature)


def anneal_step(points: Sequence[Point],
                current: Solution,
                best: Solution,
                temperature: float,
                rng: RandomSource,
                neighbor: str = "swap") -> Tuple[Solution, Solution, bool]:
    """
    One Propose -> Evaluate -> AcceptOrReject transition.
    Returns (current, best, accepted); the inputs are never modified.
    """
    candidate_tour = NEIGHBORS[neighbor](current.tour, rng)
    candidate = Solution(tuple(candidate_tour), tour_cost(points, candidate_tour))
    delta = candidate.cost - current.cost
    if not accept_move(delta, temperature, rng):
        return current, best, False
    if candidate.cost < best.cost:
        best = candidate
    return candidate, best, True


def initial_solution(points: Sequence[Point], rng: RandomSource) -> Solution:
    tour = rng.shuffle(range(len(points)))
    return Solution(tuple(tour), tour_cost(points, tour))


def run_sa(points: Sequence[Point],
           config: SAConfig = SAConfig(),
           rng: Optional[RandomSource] = None) -> Dict[str, Any]:
    if len(points) < 2:
        raise ValueError("Not enough cities to calculate a tour (need at least 2).")
    if rng is None:
        rng = RandomSource()

    current = initial_solution(points, rng)
    best = current
    T = config.initial_temperature
    logger.info("SA start: n=%d iters=%d T0=%g alpha=%g neighbor=%s seed=%d",
                len(points), config.max_iterations, T, config.cooling_rate,
                config.neighbor, rng.seed)

    tracker = ConvergenceTracker()
    tracker.update(0, best.cost)

    status = "complete"
    executed = 0
    t0 = time.perf_counter()
    deadline = t0 + config.time_limit if config.time_limit is not None else None
    for it in range(1, config.max_iterations + 1):
        if deadline is not None and time.perf_counter() >= deadline:
            status = "timeout"
            break
        current, best, accepted = anneal_step(points, current, best, T, rng, config.neighbor)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("iter=%d T=%.6g accepted=%s current=%.3f best=%.3f",
                         it, T, accepted, current.cost, best.cost)
        tracker.update(it, best.cost)
        T *= config.cooling_rate
        executed = it
    tracker.close(executed)
    runtime = time.perf_counter() - t0

    logger.info("SA %s after %d iterations: best cost %.3f (%.2fs)",
                status, executed, best.cost, runtime)
    return {"route": list(best.tour), "best_cost": best.cost, "history": tracker.history,
            "time_convergence_iter": tracker.time_convergence_iter, "runtime": runtime,
            "iterations": executed, "final_temperature": T, "seed": rng.seed,
            "status": status}


def run_sa_restarts(points: Sequence[Point],
                    config: SAConfig = SAConfig(),
                    seeds: Iterable[int] = (0, 1, 2, 3)) -> Dict[str, Any]:
    """
    Independent restarts, one `RandomSource` per seed. The run with the lowest
    best cost wins (first seed on ties); `runs` summarises every restart.
    """
    best_res = None
    runs = []
    t0 = time.perf_counter()
    for seed in seeds:
        res = run_sa(points, config, RandomSource(seed))
        runs.append({"seed": seed, "best_cost": res["best_cost"], "runtime": res["runtime"],
                     "time_convergence_iter": res["time_convergence_iter"],
                     "status": res["status"]})
        if best_res is None or res["best_cost"] < best_res["best_cost"]:
            best_res = res
    if best_res is None:
        raise ValueError("At least one seed is required.")
    out = dict(best_res)
    out["runs"] = runs
    out["total_runtime"] = time.perf_counter() - t0
    return out
