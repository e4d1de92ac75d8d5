import pytest

from viz_tsp import main, plot_convergence, plot_tour

SQUARE_TSP = "\n".join([
    "NAME : square",
    "TYPE : TSP",
    "NODE_COORD_SECTION",
    "1 0 0",
    "2 0 10",
    "3 10 10",
    "4 10 0",
    "EOF",
    "",
])


@pytest.fixture
def square_file(tmp_path):
    path = tmp_path / "square.tsp"
    path.write_text(SQUARE_TSP, encoding="utf-8")
    return path


def test_plots_return_figures(square):
    fig = plot_tour(square, [0, 1, 2, 3])
    assert len(fig.axes) == 1
    fig2 = plot_convergence([(0, 48.3), (1, 40.0)])
    assert fig2.axes[0].get_xlabel() == "Iteration"


def test_cli_solves_square(square_file, capsys):
    rc = main(["--instance", str(square_file), "--iters", "2000", "--t0", "1000",
               "--alpha", "0.995", "--seed", "3", "--no-plot"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Final cost: 40.000" in out
    tour = out.split("Best tour:")[1].split()
    assert sorted(int(c) for c in tour) == [0, 1, 2, 3]


def test_cli_restarts_and_figures(square_file, tmp_path, capsys):
    outdir = tmp_path / "figs"
    rc = main(["--instance", str(square_file), "--iters", "300", "--seed", "1",
               "--restarts", "3", "--neighbor", "two_opt", "--outdir", str(outdir)])
    out = capsys.readouterr().out
    assert rc == 0
    assert out.count("seed=") >= 3
    assert (outdir / "square_tour.png").exists()
    assert (outdir / "square_convergence.png").exists()


def test_cli_rejects_single_city(tmp_path, capsys):
    path = tmp_path / "one.tsp"
    path.write_text("NODE_COORD_SECTION\n1 5 5\nEOF\n", encoding="utf-8")
    assert main(["--instance", str(path), "--no-plot"]) == 1
    assert "Not enough cities" in capsys.readouterr().err


def test_cli_missing_file(tmp_path):
    assert main(["--instance", str(tmp_path / "missing.tsp"), "--no-plot"]) == 1


def test_cli_bad_cooling_rate(square_file, capsys):
    assert main(["--instance", str(square_file), "--alpha", "1.5", "--no-plot"]) == 1
    assert "cooling_rate" in capsys.readouterr().err


def test_import_keeps_caller_backend():
    import importlib

    import matplotlib
    import viz_tsp

    matplotlib.use("svg")
    try:
        importlib.reload(viz_tsp)
        assert matplotlib.get_backend().lower() == "svg"
    finally:
        matplotlib.use("Agg")


def test_convergence_is_step_plot():
    fig = plot_convergence([(0, 48.3), (7, 40.0), (100, 40.0)])
    line = fig.axes[0].lines[0]
    assert line.get_drawstyle() == "steps-post"
    assert list(line.get_xdata()) == [0, 7, 100]
