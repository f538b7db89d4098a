from __future__ import annotations

"""Coherence sweep over random path categories.

Each trial draws a layered DAG, virtualizes its path category and checks:
- functor laws of a random constant functor (sampled composable pairs)
- companion and conjoint discovery along that functor
- pentagon and triangle coherence for a random loose chain
- grouping insensitivity of a three-cell vertical fold

One row per trial is written to a CSV.
"""

import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from ..bicategory import analyze_bicategory_pentagon, analyze_bicategory_triangle, bicategory_from_equipment
from ..category import FiniteCategory, layered_random_dag
from ..companions import companion_via_identity_restrictions, conjoint_via_identity_restrictions
from ..equipment import Proarrow, VirtualEquipment, vertical_compose_cells, virtualize_category
from ..street import compare_street_composites, compose_vertical_chain
from ..tight import SamplingConfig, check_functor_laws, constant_functor, functor_samples


@dataclass
class SweepConfig:
    # random category shape
    n_layers: int = 4
    layer_size: int = 3
    p_forward: float = 0.5
    p_skip2: float = 0.1

    # functor-law sampling
    max_enumerate_pairs: int = 4096
    sample_pairs: int = 512

    # trials
    trials: int = 20
    seed: Optional[int] = 0


def fold_grouping_issues(equipment: VirtualEquipment, f: Proarrow) -> List[str]:
    """Fold λ⁻¹, λ, λ⁻¹ as [a,b,c], [ab,c] and [a,bc]; collect disagreements."""
    weak = equipment.weak_composition
    a, b, c = weak.left_unitor_inverse(f), weak.left_unitor(f), weak.left_unitor_inverse(f)
    if a is None or b is None or c is None:
        return ["Unitor cells were unavailable."]
    ab = vertical_compose_cells(equipment, b, a)
    bc = vertical_compose_cells(equipment, c, b)
    if ab is None or bc is None:
        return ["Intermediate vertical composites were unavailable."]
    flat = compose_vertical_chain(equipment, [a, b, c], "Fold [a,b,c]")
    left = compose_vertical_chain(equipment, [ab, c], "Fold [ab,c]")
    right = compose_vertical_chain(equipment, [a, bc], "Fold [a,bc]")
    issues = flat.issues + left.issues + right.issues
    if issues:
        return issues
    issues.extend(compare_street_composites(equipment, flat.composite, left.composite, "Fold grouping (ab,c)"))
    issues.extend(compare_street_composites(equipment, flat.composite, right.composite, "Fold grouping (a,bc)"))
    return issues


def run_trial(cfg: SweepConfig, trial: int, rng: np.random.Generator) -> Dict:
    graph_seed = int(rng.integers(0, 2**31 - 1))
    cat = FiniteCategory(
        layered_random_dag(cfg.n_layers, cfg.layer_size, cfg.p_forward, cfg.p_skip2, seed=graph_seed),
        name=f"trial{trial}",
    )
    equipment = virtualize_category(cat, weak_composition=True)
    objects = list(cat.objects)
    x = objects[int(rng.integers(0, len(objects)))]
    c = objects[int(rng.integers(0, len(objects)))]
    collapse = constant_functor(cat, c)

    samples = functor_samples(
        cat,
        SamplingConfig(max_enumerate_pairs=cfg.max_enumerate_pairs, sample_pairs=cfg.sample_pairs, seed=graph_seed),
    )
    laws = check_functor_laws(cat, cat, collapse, samples)

    identity = equipment.tight.identity
    f = Proarrow(x, c, collapse)
    g = Proarrow(c, c, identity)
    h = Proarrow(c, c, collapse)
    k = Proarrow(c, c, identity)
    bicategory = bicategory_from_equipment(equipment).bicategory
    pentagon = analyze_bicategory_pentagon(bicategory, f, g, h, k)
    triangle = analyze_bicategory_triangle(bicategory, f, g)

    companion = companion_via_identity_restrictions(equipment, collapse)
    conjoint = conjoint_via_identity_restrictions(equipment, collapse)
    grouping = fold_grouping_issues(equipment, f)

    return {
        "trial": trial,
        "graph_seed": graph_seed,
        "n_objects": len(objects),
        "n_arrows": len(cat.arrows),
        "n_pairs_checked": len(samples.composable_pairs),
        "functor_laws": laws.holds,
        "companion": companion.available,
        "conjoint": conjoint.available,
        "pentagon": pentagon.holds,
        "triangle": triangle.holds,
        "fold_grouping": not grouping,
        "n_issues": len(pentagon.issues) + len(triangle.issues) + len(grouping),
    }


def run_sweep(cfg: Optional[SweepConfig] = None) -> pd.DataFrame:
    if cfg is None:
        cfg = SweepConfig()
    rng = np.random.default_rng(cfg.seed)
    rows = [run_trial(cfg, t, rng) for t in range(int(cfg.trials))]
    return pd.DataFrame(rows)


def default_out_csv(cfg: SweepConfig) -> str:
    """File name picked up by analysis/aggregate_coherence_runs.py."""
    return f"pf{cfg.p_forward}_seed{cfg.seed}.csv"


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Coherence sweep over random layered path categories.")
    p.add_argument("--n_layers", type=int, default=4)
    p.add_argument("--layer_size", type=int, default=3)
    p.add_argument("--p_forward", type=float, default=0.5)
    p.add_argument("--p_skip2", type=float, default=0.1)
    p.add_argument("--max_enumerate_pairs", type=int, default=4096)
    p.add_argument("--sample_pairs", type=int, default=512)
    p.add_argument("--trials", type=int, default=20)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--out_csv", type=str, default=None, help="Defaults to pf{p_forward}_seed{seed}.csv.")
    return p


def main() -> None:
    args = build_argparser().parse_args()
    cfg = SweepConfig(
        n_layers=args.n_layers,
        layer_size=args.layer_size,
        p_forward=args.p_forward,
        p_skip2=args.p_skip2,
        max_enumerate_pairs=args.max_enumerate_pairs,
        sample_pairs=args.sample_pairs,
        trials=args.trials,
        seed=args.seed,
    )
    out_csv = args.out_csv or default_out_csv(cfg)
    df = run_sweep(cfg)
    df.to_csv(out_csv, index=False)
    checks = ["functor_laws", "companion", "conjoint", "pentagon", "triangle", "fold_grouping"]
    print({col: float(df[col].mean()) for col in checks})
    print(f"Wrote {out_csv}")


if __name__ == "__main__":
    main()
