
import numpy as np
import pandas as pd
import streamlit as st
import matplotlib.pyplot as plt

from tsp_utils import generate_simulated_coords, NEIGHBORS
from tsp_loader import parse_tsp_lines, check_enough_cities
from tsp_sa import RandomSource, SAConfig, run_sa, run_sa_restarts
from viz_tsp import plot_tour, plot_convergence


def explain_sa_params():
    with st.expander("What do these parameters mean?"):
        st.markdown(
            "- **Iterations**: number of propose/evaluate/accept/cool cycles; the only stopping rule.\n"
            "- **Initial temperature**: higher values accept more worsening moves early on.\n"
            "- **Cooling rate**: temperature is multiplied by this factor every iteration; smaller = faster cooling.\n"
            "- **Neighbor move**: `swap` exchanges two cities, `two_opt` reverses a segment of the tour.\n"
            "- **Restarts**: independent runs with consecutive seeds; the best tour is kept.\n"
            "- **Random seed**: fixes the shuffle and every acceptance draw for reproducible results."
        )


def sa_controls(key: str) -> SAConfig:
    c1, c2, c3 = st.columns(3)
    with c1:
        iters = st.number_input("Iterations", value=10000, min_value=0, step=500, key=f"iters_{key}")
    with c2:
        T0 = st.number_input("Initial temperature", value=10000.0, min_value=1e-6, step=100.0, key=f"t0_{key}")
    with c3:
        alpha = st.number_input("Cooling rate", value=0.995, min_value=0.5, max_value=0.999999,
                                step=0.0005, format="%.6f", key=f"alpha_{key}")
    move = st.selectbox("Neighbor move", sorted(NEIGHBORS), key=f"move_{key}")
    return SAConfig(max_iterations=int(iters), initial_temperature=float(T0),
                    cooling_rate=float(alpha), neighbor=move)


def solve_and_render(coords: np.ndarray, config: SAConfig, seed: int, restarts: int, title: str):
    if restarts > 1:
        res = run_sa_restarts(coords, config, seeds=range(seed, seed + restarts))
    else:
        res = run_sa(coords, config, RandomSource(seed))

    st.subheader("Summary")
    df = pd.DataFrame([{
        "Cities": len(coords),
        "Best cost": res["best_cost"],
        "Runtime (s)": res["runtime"],
        "Converged after iter ≥": res["time_convergence_iter"],
        "Final temperature": res["final_temperature"],
        "Seed": res["seed"],
    }])
    st.dataframe(df, use_container_width=True)
    if "runs" in res:
        st.markdown("**Restarts**")
        st.dataframe(pd.DataFrame(res["runs"]), use_container_width=True)

    c1, c2 = st.columns(2)
    with c1:
        st.pyplot(plot_tour(coords, res["route"], title=title))
    with c2:
        st.pyplot(plot_convergence(res["history"]))
    plt.close("all")

    with st.expander("Best tour (city indices)"):
        st.code(" ".join(str(c) for c in res["route"]))


st.set_page_config(page_title="TSP Simulated Annealing", layout="wide")
st.title("TSP Simulated Annealing Dashboard")

tab1, tab2 = st.tabs(["Simulated Cities", "TSPLIB File"])

# ---------- Simulated TSP ----------
with tab1:
    st.header("Simulated Cities")
    n = st.slider("Number of cities n (<= 800)", 2, 800, 100, step=1)
    seed = st.number_input("Random seed", value=0, step=1, key="seed_sim")
    restarts = st.number_input("Restarts", value=1, min_value=1, max_value=32, step=1, key="restarts_sim")
    config = sa_controls("sim")
    explain_sa_params()
    if st.button("Run SA (Simulated)"):
        coords = generate_simulated_coords(n, seed=int(seed))
        solve_and_render(coords, config, int(seed), int(restarts), "Simulated TSP: Best Tour")

# ---------- TSPLIB upload ----------
with tab2:
    st.header("TSPLIB File")
    st.markdown(
        "Upload a `.tsp` file with a `NODE_COORD_SECTION` of `<id> <x> <y>` integer lines. "
        "Malformed lines are skipped. **Minimum 2 cities.**"
    )
    uploaded = st.file_uploader("TSP instance", type=["tsp", "txt"])
    seed2 = st.number_input("Random seed", value=0, step=1, key="seed_file")
    restarts2 = st.number_input("Restarts", value=1, min_value=1, max_value=32, step=1, key="restarts_file")
    config2 = sa_controls("file")
    if st.button("Run SA (File)", key="run_file") and uploaded is not None:
        text = uploaded.getvalue().decode("utf-8", errors="ignore")
        coords = parse_tsp_lines(text.splitlines())
        try:
            check_enough_cities(coords)
        except ValueError as exc:
            st.error(str(exc))
        else:
            solve_and_render(coords, config2, int(seed2), int(restarts2), f"{uploaded.name}: Best Tour")
