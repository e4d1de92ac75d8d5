import math
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

Point = Sequence[int]
Tour = List[int]


def euclidean_distance(a: Point, b: Point) -> float:
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


def is_permutation(tour: Sequence[int], n: int) -> bool:
    return len(tour) == n and set(tour) == set(range(n))


def tour_cost(points: Sequence[Point],
              tour: Sequence[int],
              distance: Callable[[Point, Point], float] = euclidean_distance) -> float:
    """Cyclic length of `tour`, closing edge from the last city back to the first included."""
    assert is_permutation(tour, len(points)), "tour must be a permutation of the point indices"
    n = len(tour)
    total = 0.0
    for i in range(n):
        total += distance(points[tour[i]], points[tour[(i + 1) % n]])
    return total


def _two_positions(n: int, rng) -> Tuple[int, int]:
    # offset in [1, n-1] keeps the positions distinct for any n >= 2
    i = rng.randrange(n)
    j = (i + 1 + rng.randrange(n - 1)) % n
    return i, j


def swap_neighbor(tour: Sequence[int], rng) -> Tour:
    new_tour = list(tour)
    i, j = _two_positions(len(new_tour), rng)
    new_tour[i], new_tour[j] = new_tour[j], new_tour[i]
    return new_tour


def two_opt(route: Sequence[int], i: int, k: int) -> Tour:
    return list(route[:i]) + list(reversed(route[i:k+1])) + list(route[k+1:])


def two_opt_neighbor(tour: Sequence[int], rng) -> Tour:
    i, k = sorted(_two_positions(len(tour), rng))
    return two_opt(tour, i, k)


NEIGHBORS: Dict[str, Callable] = {
    "swap": swap_neighbor,
    "two_opt": two_opt_neighbor,
}


class ConvergenceTracker:
    def __init__(self):
        self.best_cost = float("inf")
        self.best_iter = -1
        self.history = []

    def update(self, iter_idx: int, cost: float):
        if cost < self.best_cost - 1e-12:
            self.best_cost = cost
            self.best_iter = iter_idx
            self.history.append((iter_idx, self.best_cost))

    def close(self, iter_idx: int):
        # final point so the curve spans the whole run
        if not self.history or self.history[-1][0] != iter_idx:
            self.history.append((iter_idx, self.best_cost))

    @property
    def time_convergence_iter(self) -> int:
        return self.best_iter + 1


def generate_simulated_coords(n: int, seed: int = 0, scale: int = 100) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, scale + 1, size=(n, 2))
