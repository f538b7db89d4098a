"""Experiment entry points run end to end on small inputs."""

import re

from equipment_lab.experiments.coherence_sweep import SweepConfig, build_argparser, default_out_csv, run_sweep
from equipment_lab.experiments.two_object_report import build_report

CHECKS = ["functor_laws", "companion", "conjoint", "pentagon", "triangle", "fold_grouping"]


def test_two_object_report():
    report = build_report()
    assert report["objects"] == ["•", "★"]
    assert report["companion_identity"]
    assert report["companion"].startswith("Companion found at •")
    assert report["companion_witness"] == "left"
    assert report["conjoint_witness"] == "right"
    assert report["density_holds"]
    assert report["pentagon_holds"] and report["triangle_holds"]
    assert report["left_unitor_invertible"] and report["right_unitor_invertible"]


def test_small_sweep_passes_every_check():
    df = run_sweep(SweepConfig(n_layers=3, layer_size=2, p_forward=0.7, trials=3, seed=1))
    assert list(df["trial"]) == [0, 1, 2]
    for col in CHECKS:
        assert df[col].all(), col
    assert (df["n_issues"] == 0).all()


def test_sweep_is_reproducible():
    cfg = SweepConfig(n_layers=3, layer_size=2, trials=2, seed=7)
    first, second = run_sweep(cfg), run_sweep(cfg)
    assert list(first["graph_seed"]) == list(second["graph_seed"])
    assert list(first["n_arrows"]) == list(second["n_arrows"])


def test_sweep_argparser_defaults():
    args = build_argparser().parse_args([])
    assert args.trials == SweepConfig().trials
    assert args.out_csv is None


def test_default_output_matches_aggregator_pattern():
    name = default_out_csv(SweepConfig(p_forward=0.5, seed=3))
    assert name == "pf0.5_seed3.csv"
    m = re.search(r"pf(?P<pf>[0-9.]+)_seed(?P<seed>\d+)\.csv$", name)
    assert m is not None
    assert (float(m.group("pf")), int(m.group("seed"))) == (0.5, 3)
