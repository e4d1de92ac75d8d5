from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt

from tsp_loader import check_enough_cities, load_tsp_cities
from tsp_sa import RandomSource, SAConfig, run_sa, run_sa_restarts
from tsp_utils import NEIGHBORS

# ------------------------------- Visualization --------------------------------

def plot_tour(coords: np.ndarray,
              route: List[int],
              title: str = "TSP: Best Tour"):
    """
    Spatial overlay:
      - cities as dots, the first city of the tour as a star
      - the closed tour as a single polyline (last city back to the first)
    """
    coords = np.asarray(coords)
    xs, ys = coords[:, 0], coords[:, 1]
    closed = list(route) + [route[0]]
    fig, ax = plt.subplots()
    ax.scatter(xs, ys, s=20, label="cities")
    ax.scatter([xs[route[0]]], [ys[route[0]]], marker="*", s=180, label="start")
    ax.plot(xs[closed], ys[closed], color="C1", linewidth=1.6, label="tour")
    ax.set_title(title)
    ax.set_xlabel("x"); ax.set_ylabel("y")
    ax.legend(); ax.grid(True); ax.set_aspect("equal", adjustable="datalim")
    fig.tight_layout()
    return fig


def plot_convergence(history: Sequence[Tuple[int, float]],
                     title: str = "SA Convergence"):
    iters = [h[0] for h in history]; bests = [h[1] for h in history]
    fig, ax = plt.subplots()
    ax.step(iters, bests, where="post")
    ax.set_xlabel("Iteration"); ax.set_ylabel("Best cost so far"); ax.set_title(title)
    ax.grid(True, linestyle=":")
    fig.tight_layout()
    return fig

# ------------------------------- Runner --------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TSP solver (Simulated Annealing) + tour plots")
    parser.add_argument("--instance", type=str, required=True,
                        help="Path to a TSPLIB-style .tsp file with a NODE_COORD_SECTION")
    parser.add_argument("--iters", type=int, default=10000, help="SA iterations")
    parser.add_argument("--t0", type=float, default=10000.0, help="Initial temperature")
    parser.add_argument("--alpha", type=float, default=0.995, help="Cooling rate in (0, 1)")
    parser.add_argument("--neighbor", type=str, default="swap", choices=sorted(NEIGHBORS),
                        help="Neighbor move")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: drawn from system entropy)")
    parser.add_argument("--restarts", type=int, default=1,
                        help="Independent restarts, seeds seed..seed+restarts-1")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Wall-clock limit per run in seconds")
    parser.add_argument("--outdir", type=str, default="outputs", help="Directory to save figures")
    parser.add_argument("--no-plot", action="store_true", help="Skip saving figures")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # 1) Load instance
    try:
        coords = load_tsp_cities(args.instance)
        check_enough_cities(coords)
        config = SAConfig(max_iterations=args.iters,
                          initial_temperature=args.t0,
                          cooling_rate=args.alpha,
                          neighbor=args.neighbor,
                          time_limit=args.time_limit)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Loaded: {args.instance} | cities={len(coords)}")

    # 2) Solve
    if args.restarts > 1:
        base = args.seed if args.seed is not None else RandomSource().seed
        res = run_sa_restarts(coords, config, seeds=range(base, base + args.restarts))
        for run in res["runs"]:
            print(f"  seed={run['seed']} | cost={run['best_cost']:.3f} | {run['runtime']:.2f}s")
    else:
        res = run_sa(coords, config, RandomSource(args.seed))
    print(f"Final cost: {res['best_cost']:.3f} | seed={res['seed']} | "
          f"iters={res['iterations']} ({res['status']}) | Runtime: {res['runtime']:.2f}s")
    print("Best tour: " + " ".join(str(c) for c in res["route"]))

    # 3) Figures
    if not args.no_plot:
        outdir = Path(args.outdir); outdir.mkdir(parents=True, exist_ok=True)
        stem = Path(args.instance).stem
        fig1 = plot_tour(coords, res["route"],
                         title=f"SA tour ({Path(args.instance).name}, cost {res['best_cost']:.1f})")
        f1 = outdir / f"{stem}_tour.png"
        fig1.savefig(f1, dpi=150)
        print(f"Saved: {f1}")

        fig2 = plot_convergence(res["history"], title=f"SA Convergence ({Path(args.instance).name})")
        f2 = outdir / f"{stem}_convergence.png"
        fig2.savefig(f2, dpi=150)
        print(f"Saved: {f2}")
        plt.close("all")
    return 0

if __name__ == "__main__":
    sys.exit(main())
