"""Loose monoid and loose adjunction framing."""

from equipment_lab.equipment import (
    Cell,
    Proarrow,
    RepresentabilityWitness,
    TightEvidence,
    frame_from_proarrow,
    frame_from_sequence,
    identity_proarrow,
    identity_vertical_boundary,
)
from equipment_lab.loose import (
    LooseAdjunctionData,
    LooseMonoidData,
    analyze_loose_adjunction,
    analyze_loose_monoid_shape,
)
from equipment_lab.tight import identity_nat


def _cell(equipment, source, target, left_obj, right_obj):
    return Cell(
        source,
        target,
        identity_vertical_boundary(equipment, left_obj),
        identity_vertical_boundary(equipment, right_obj),
        TightEvidence(identity_nat(equipment.tight.identity)),
    )


def _monoid(equipment, collapse) -> LooseMonoidData:
    loose = Proarrow("★", "★", collapse)
    single = frame_from_proarrow(loose)
    mult = _cell(equipment, frame_from_sequence([loose, loose], "★", "★"), single, "★", "★")
    unit = _cell(equipment, frame_from_proarrow(identity_proarrow(equipment, "★")), single, "★", "★")
    return LooseMonoidData("★", loose, mult, unit)


def test_loose_monoid_shape(equipment, collapse):
    report = analyze_loose_monoid_shape(equipment, _monoid(equipment, collapse))
    assert report.holds, report.issues
    assert "Loose monoid satisfies" in report.details


def test_loose_monoid_with_bad_unit(equipment, collapse):
    data = _monoid(equipment, collapse)
    bad_unit = Cell(
        data.unit.source,
        data.unit.target,
        data.unit.left,
        identity_vertical_boundary(equipment, "•"),
        data.unit.evidence,
    )
    report = analyze_loose_monoid_shape(equipment, LooseMonoidData("★", data.loose_cell, data.multiplication, bad_unit))
    assert not report.holds
    assert any(issue.startswith("Unit right boundary") for issue in report.issues)


def test_loose_monoid_with_unary_multiplication(equipment, collapse):
    data = _monoid(equipment, collapse)
    report = analyze_loose_monoid_shape(equipment, LooseMonoidData("★", data.loose_cell, data.unit, data.unit))
    assert not report.holds
    assert "Multiplication source should contain 2 arrow(s); found 1." in report.issues


def test_loose_monoid_on_wrong_object(equipment, collapse):
    data = _monoid(equipment, collapse)
    report = analyze_loose_monoid_shape(equipment, LooseMonoidData("•", data.loose_cell, data.multiplication, data.unit))
    assert not report.holds
    assert report.issues[0].startswith("Loose monoid carrier should be an endo-arrow on •")


def _adjunction(equipment, witness=None) -> LooseAdjunctionData:
    ident = equipment.tight.identity
    left = Proarrow("•", "★", ident)
    right = Proarrow("★", "•", ident)
    unit = _cell(
        equipment,
        frame_from_proarrow(identity_proarrow(equipment, "•")),
        frame_from_sequence([left, right], "•", "•"),
        "•",
        "•",
    )
    counit = _cell(
        equipment,
        frame_from_sequence([right, left], "★", "★"),
        frame_from_proarrow(identity_proarrow(equipment, "★")),
        "★",
        "★",
    )
    return LooseAdjunctionData(left, right, unit, counit, witness)


def test_adjunction_with_representable_right_adjoint(equipment):
    witness = RepresentabilityWitness("right", equipment.tight.identity, "•")
    analysis = analyze_loose_adjunction(equipment, _adjunction(equipment, witness))
    assert analysis.holds, analysis.issues
    assert analysis.left_is_map
    assert "representable" in analysis.details


def test_adjunction_without_witness(equipment):
    analysis = analyze_loose_adjunction(equipment, _adjunction(equipment))
    assert analysis.holds
    assert not analysis.left_is_map
    assert "no representability witness" in analysis.details


def test_adjunction_with_left_oriented_witness(equipment):
    witness = RepresentabilityWitness("left", equipment.tight.identity, "•")
    analysis = analyze_loose_adjunction(equipment, _adjunction(equipment, witness))
    assert not analysis.left_is_map


def test_adjunction_with_swapped_cells(equipment):
    data = _adjunction(equipment)
    swapped = LooseAdjunctionData(data.left, data.right, data.counit, data.unit)
    analysis = analyze_loose_adjunction(equipment, swapped)
    assert not analysis.holds
    assert not analysis.left_is_map
    assert any(issue.startswith("Adjunction unit source") for issue in analysis.issues)
