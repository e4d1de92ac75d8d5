
"""
Run SA experiments over varying instance sizes, seeds and neighbor moves.
Generates instances, runs the annealer, records best costs, runtimes, and time-convergence iters.
Saves summary CSV and plots into outputs/.
"""
from pathlib import Path
import pandas as pd
import matplotlib
matplotlib.use("Agg")  # headless backend for tests / CI
import matplotlib.pyplot as plt

from tsp_utils import generate_simulated_coords
from tsp_sa import RandomSource, SAConfig, run_sa

NEIGHBOR_MOVES = ("swap", "two_opt")

# sizes=(50, 100, 200, 400, 800)
def run_suite(sizes=(20, 50, 100), seeds=(0, 1, 2), outdir=Path("outputs"),
              iters=None, T0=100.0, alpha=0.9995):
    rows = []
    outdir = Path(outdir)
    for n in sizes:
        for seed in seeds:
            # deterministic per-size seed derived from provided seed
            cur_seed = int(seed) + int(n)
            coords = generate_simulated_coords(n, seed=cur_seed)
            n_iters = iters if iters is not None else max(20000, n * 200)

            print(f"=== N={n} (seed={cur_seed}) ===")
            for move in NEIGHBOR_MOVES:
                config = SAConfig(max_iterations=n_iters, initial_temperature=T0,
                                  cooling_rate=alpha, neighbor=move)
                res = run_sa(coords, config, RandomSource(cur_seed))
                rows.append({
                    "n": n,
                    "seed": cur_seed,
                    "neighbor": move,
                    "best_cost": res["best_cost"],
                    "runtime_sec": res["runtime"],
                    "time_convergence_iter": res["time_convergence_iter"],
                })

    df = pd.DataFrame(rows)
    outdir.mkdir(exist_ok=True, parents=True)
    csv_path = outdir / "tsp_sa_summary.csv"
    df.to_csv(csv_path, index=False)

    agg = df.groupby(["neighbor", "n"], as_index=False)[["best_cost", "runtime_sec"]].mean()

    # Plot mean best cost vs n
    plt.figure()
    for move in agg["neighbor"].unique():
        sub = agg[agg["neighbor"] == move]
        plt.plot(sub["n"], sub["best_cost"], marker="o", label=move)
    plt.xlabel("Cities (n)"); plt.ylabel("Mean best cost"); plt.title("SA best cost vs n")
    plt.legend(); plt.grid(True); plt.tight_layout()
    plt.savefig(outdir / "tsp_sa_cost_vs_n.png")

    # Plot mean runtime vs n
    plt.figure()
    for move in agg["neighbor"].unique():
        sub = agg[agg["neighbor"] == move]
        plt.plot(sub["n"], sub["runtime_sec"], marker="o", label=move)
    plt.xlabel("Cities (n)"); plt.ylabel("Mean runtime (s)")
    plt.title("SA runtime vs n")
    plt.legend(); plt.grid(True); plt.tight_layout()
    plt.savefig(outdir / "tsp_sa_runtime_vs_n.png")
    plt.close("all")

    print(agg.to_string(index=False, float_format=lambda v: f"{v:.3f}"))
    return csv_path

if __name__ == "__main__":
    run_suite()
