#!/usr/bin/env python3
"""
Aggregate CSVs produced by equipment_lab/experiments/coherence_sweep.py.

This script only reads the per-trial rows already written by the sweep. It
does NOT re-run any checks.

It outputs:
- results/run_level_coherence.csv
- results/shape_level_coherence.csv
- results/fig_pass_rates.png
"""
from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import List, Tuple

import pandas as pd
import matplotlib.pyplot as plt


CHECKS = ["functor_laws", "companion", "conjoint", "pentagon", "triangle", "fold_grouping"]
PF_SEED_RE = re.compile(r"pf(?P<pf>[0-9.]+)_seed(?P<seed>\d+)\.csv$")


def parse_pf_seed(path: Path) -> Tuple[float, int]:
    m = PF_SEED_RE.search(path.name)
    if not m:
        raise ValueError(f"Could not parse pf/seed from filename: {path.name}")
    return float(m.group("pf")), int(m.group("seed"))


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--runs_dir", type=str, default="runs", help="Directory containing sweep CSVs.")
    ap.add_argument("--pattern", type=str, default="pf*_seed*.csv", help="Glob pattern within runs_dir.")
    ap.add_argument("--out_dir", type=str, default="results", help="Where to write CSVs/figures.")
    args = ap.parse_args()

    runs_dir = Path(args.runs_dir)
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = sorted(runs_dir.glob(args.pattern))
    if not paths:
        raise SystemExit(f"No files matched {runs_dir}/{args.pattern}")

    frames: List[pd.DataFrame] = []
    for p in paths:
        pf, seed = parse_pf_seed(p)
        df = pd.read_csv(p)
        df["pf"] = pf
        df["seed"] = seed
        df["file"] = p.name
        frames.append(df)

    run_df = pd.concat(frames, ignore_index=True).sort_values(["pf", "seed", "trial"])
    run_csv = out_dir / "run_level_coherence.csv"
    run_df.to_csv(run_csv, index=False)

    # pass rate per density, plus mean category size
    present = [c for c in CHECKS if c in run_df.columns]
    agg = run_df.groupby("pf")[present].mean()
    agg["mean_arrows"] = run_df.groupby("pf")["n_arrows"].mean()
    agg["trials"] = run_df.groupby("pf").size()
    pf_df = agg.reset_index().sort_values("pf")
    pf_csv = out_dir / "shape_level_coherence.csv"
    pf_df.to_csv(pf_csv, index=False)

    fig = plt.figure()
    x = pf_df["pf"].values
    for col in present:
        plt.plot(x, pf_df[col].values, marker="o", label=col)
    plt.xlabel("p_forward")
    plt.ylabel("pass rate")
    plt.ylim(-0.05, 1.05)
    plt.legend()
    plt.title("Coherence checks vs generating-graph density")
    fig.tight_layout()
    fig_path = out_dir / "fig_pass_rates.png"
    fig.savefig(fig_path, dpi=200)
    plt.close(fig)

    print(f"Wrote {run_csv}")
    print(f"Wrote {pf_csv}")
    print(f"Saved {fig_path}")
    failing = run_df[~run_df[present].all(axis=1)]
    if len(failing):
        print(f">> {len(failing)} trial(s) failed at least one check.")
    else:
        print(">> Every trial passed every check.")


if __name__ == "__main__":
    main()
