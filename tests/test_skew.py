"""Skew-multicategory substitution of unary cells into the slots of an outer cell."""

from equipment_lab.equipment import (
    Cell,
    Frame,
    VerticalBoundary,
    horizontal_compose_cells,
    identity_cell,
)
from equipment_lab.skew import LooseSkewMultimorphism, analyze_loose_skew_composition


def _outer(equipment, chain):
    f, g, _, _ = chain
    return horizontal_compose_cells(equipment, identity_cell(equipment, g), identity_cell(equipment, f))


def test_identity_inners_substitute(equipment, chain):
    f, g, _, _ = chain
    outer = _outer(equipment, chain)
    inners = [identity_cell(equipment, f), identity_cell(equipment, g)]
    report = analyze_loose_skew_composition(equipment, outer, inners)
    assert report.holds, report.issues
    assert "admits substitution of 2" in report.details


def test_arity_mismatch(equipment, chain):
    f = chain[0]
    outer = LooseSkewMultimorphism(_outer(equipment, chain), "extension")
    report = analyze_loose_skew_composition(equipment, outer, [identity_cell(equipment, f)])
    assert not report.holds
    assert report.issues[0] == "extension expects 2 inner multimorphism(s) to substitute; received 1."


def test_inner_with_wrong_endpoints(equipment, chain):
    f, g, _, _ = chain
    outer = _outer(equipment, chain)
    swapped = [LooseSkewMultimorphism(identity_cell(equipment, g), "first"), identity_cell(equipment, g)]
    report = analyze_loose_skew_composition(equipment, outer, swapped)
    assert not report.holds
    assert "first (slot #0) source arrow runs ★ → ★; expected • → ★." in report.issues
    assert "first (slot #0) target arrow runs ★ → ★; expected • → ★." in report.issues


def test_inner_must_be_unary_with_identity_boundaries(equipment, chain, collapse):
    f, g, _, _ = chain
    outer = _outer(equipment, chain)
    base = identity_cell(equipment, f)
    binary = Cell(
        Frame((f, g), "•", "★"),
        base.target,
        VerticalBoundary("•", "★", collapse),
        base.right,
        base.evidence,
    )
    report = analyze_loose_skew_composition(equipment, outer, [binary, identity_cell(equipment, g)])
    assert not report.holds
    assert "inner multimorphism #0 (slot #0) source should be a single-arrow frame; found 2 arrow(s)." in report.issues
    assert any("left boundary should be the identity vertical boundary on •" in issue for issue in report.issues)
