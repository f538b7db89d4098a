from __future__ import annotations

"""Two-object report.

Virtualizes the category {•, ★} with one arrow • → ★ and reports:
- Companion and conjoint searches along the identity and the constant-at-★ functor.
- Density of the constant functor at ★.
- Pentagon and triangle coherence for a short chain of loose arrows.
- Left/right unitor invertibility.
"""

import argparse

from ..bicategory import (
    analyze_bicategory_pentagon,
    analyze_bicategory_triangle,
    analyze_left_unitor_invertibility,
    analyze_right_unitor_invertibility,
    bicategory_from_equipment,
)
from ..category import two_object_category
from ..companions import companion_via_identity_restrictions, conjoint_via_identity_restrictions
from ..absoluteness import analyze_density_via_identity_restrictions
from ..equipment import Proarrow, virtualize_category
from ..tight import constant_functor


def build_report(target: str = "★") -> dict:
    cat = two_object_category()
    equipment = virtualize_category(cat, weak_composition=True)
    identity = equipment.tight.identity
    collapse = constant_functor(cat, target)

    f = Proarrow("•", target, collapse)
    g = Proarrow(target, target, identity)
    h = Proarrow(target, target, collapse)
    k = Proarrow(target, target, identity)

    bicategory = bicategory_from_equipment(equipment).bicategory
    pentagon = analyze_bicategory_pentagon(bicategory, f, g, h, k)
    triangle = analyze_bicategory_triangle(bicategory, f, g)

    companion_id = companion_via_identity_restrictions(equipment, identity)
    companion = companion_via_identity_restrictions(equipment, collapse)
    conjoint = conjoint_via_identity_restrictions(equipment, collapse)
    density = analyze_density_via_identity_restrictions(equipment, target, collapse)

    return {
        "objects": list(equipment.objects),
        "companion_identity": companion_id.available,
        "companion": companion.details,
        "companion_witness": getattr(companion.representability, "orientation", None),
        "conjoint": conjoint.details,
        "conjoint_witness": getattr(conjoint.representability, "orientation", None),
        "density_holds": density.holds,
        "pentagon_holds": pentagon.holds,
        "triangle_holds": triangle.holds,
        "left_unitor_invertible": analyze_left_unitor_invertibility(bicategory, f).holds,
        "right_unitor_invertible": analyze_right_unitor_invertibility(bicategory, f).holds,
    }


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Companions, density and coherence on the two-object category.")
    p.add_argument("--target", choices=["•", "★"], default="★", help="Object the constant functor collapses onto.")
    return p


def main() -> None:
    args = build_argparser().parse_args()
    report = build_report(args.target)
    for key, value in report.items():
        print(f"{key}: {value}")


if __name__ == "__main__":
    main()
