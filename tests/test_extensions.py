"""Right extension and right lift framing analyzers."""

from equipment_lab.equipment import (
    Cell,
    Frame,
    Proarrow,
    TightEvidence,
    frame_from_proarrow,
    identity_vertical_boundary,
)
from equipment_lab.extensions import (
    RightExtensionData,
    RightLiftData,
    analyze_right_extension,
    analyze_right_extension_lift_compatibility,
    analyze_right_lift,
)
from equipment_lab.tight import identity_nat


def _setup(equipment, collapse):
    loose = Proarrow("•", "★", collapse)
    along = collapse
    candidate = Proarrow("★", "★", equipment.tight.identity)
    evidence = TightEvidence(identity_nat(collapse))
    left = identity_vertical_boundary(equipment, "•")
    right = identity_vertical_boundary(equipment, "★")
    counit = Cell(frame_from_proarrow(loose), frame_from_proarrow(candidate), left, right, evidence)
    unit = Cell(frame_from_proarrow(candidate), frame_from_proarrow(loose), left, right, evidence)
    return loose, along, candidate, counit, unit


def test_well_framed_right_extension(equipment, collapse):
    loose, along, ext, counit, _ = _setup(equipment, collapse)
    report = analyze_right_extension(equipment, RightExtensionData(loose, along, ext, counit))
    assert report.holds, report.issues
    assert report.details == "Right extension counit passes the framing checks."


def test_swapped_counit_boundaries_are_reported(equipment, collapse):
    loose, along, ext, counit, _ = _setup(equipment, collapse)
    swapped = Cell(
        counit.source,
        counit.target,
        identity_vertical_boundary(equipment, "★"),
        identity_vertical_boundary(equipment, "•"),
        counit.evidence,
    )
    report = analyze_right_extension(equipment, RightExtensionData(loose, along, ext, swapped))
    assert not report.holds
    assert any("vertical boundary" in issue for issue in report.issues)
    assert report.details.startswith("Right extension framing issues: ")


def test_extension_with_wrong_domain(equipment, collapse):
    loose, _, ext, counit, _ = _setup(equipment, collapse)
    report = analyze_right_extension(equipment, RightExtensionData(loose, equipment.tight.identity, ext, counit))
    assert not report.holds
    assert any("obtained by applying the tight leg" in issue for issue in report.issues)


def test_extension_with_empty_counit_target(equipment, collapse):
    loose, along, ext, counit, _ = _setup(equipment, collapse)
    hollow = Cell(counit.source, Frame((), "★", "★"), counit.left, counit.right, counit.evidence)
    report = analyze_right_extension(equipment, RightExtensionData(loose, along, ext, hollow))
    assert "Right extension counit target should contain at least the extension arrow." in report.issues


def test_well_framed_right_lift(equipment, collapse):
    loose, along, lift, _, unit = _setup(equipment, collapse)
    report = analyze_right_lift(equipment, RightLiftData(loose, along, lift, unit))
    assert report.holds, report.issues


def test_lift_unit_with_wrong_target(equipment, collapse):
    loose, along, lift, _, unit = _setup(equipment, collapse)
    bad = Cell(unit.source, unit.source, unit.left, unit.right, unit.evidence)
    report = analyze_right_lift(equipment, RightLiftData(loose, along, lift, bad))
    assert not report.holds
    assert any(issue.startswith("Right lift unit target") for issue in report.issues)


def test_extension_lift_compatibility(equipment, collapse):
    loose, along, candidate, counit, unit = _setup(equipment, collapse)
    extension = RightExtensionData(loose, along, candidate, counit)
    lift = RightLiftData(loose, along, candidate, unit)
    assert analyze_right_extension_lift_compatibility(equipment, extension, lift).holds

    other_leg = RightLiftData(loose, equipment.tight.identity, candidate, unit)
    report = analyze_right_extension_lift_compatibility(equipment, extension, other_leg)
    assert not report.holds
    assert "Right extension and right lift should share the same tight leg." in report.issues
