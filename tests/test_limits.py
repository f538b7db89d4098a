"""Weighted cones, cocones and their restriction analyzers."""

from equipment_lab.equipment import (
    Cell,
    TightEvidence,
    VerticalBoundary,
    identity_proarrow,
    identity_vertical_boundary,
)
from equipment_lab.extensions import RightExtensionData
from equipment_lab.limits import (
    LeftExtensionFromColimitData,
    WeightedCoconeData,
    WeightedConeData,
    analyze_left_extension_from_weighted_colimit,
    analyze_weighted_cocone,
    analyze_weighted_colimit_restriction,
    analyze_weighted_cone,
    analyze_weighted_limit_restriction,
    compare_vertical_boundary,
)
from equipment_lab.tight import identity_nat


def test_weighted_cone_framing(equipment, collapse, cone_data):
    report = analyze_weighted_cone(equipment, cone_data)
    assert report.holds, report.issues


def test_weighted_cone_with_foreign_diagram(equipment, collapse, cone_data):
    data = cone_data
    foreign = WeightedConeData(data.weight, equipment.tight.identity, data.apex, data.cone)
    report = analyze_weighted_cone(equipment, foreign)
    assert not report.holds
    assert "Weighted cone left vertical boundary should reuse the supplied tight diagram." in report.issues


def test_weighted_cocone_framing(equipment, collapse, cocone_data):
    report = analyze_weighted_cocone(equipment, cocone_data)
    assert report.holds, report.issues


def test_weighted_cocone_apex_mismatch(equipment, collapse, cocone_data):
    data = cocone_data
    wrong_apex = identity_proarrow(equipment, "★")
    report = analyze_weighted_cocone(equipment, WeightedCoconeData(data.weight, data.diagram, wrong_apex, data.cocone))
    assert not report.holds
    assert report.details.startswith("Weighted cocone framing issues: ")


def test_limit_restriction_reuses_cone_boundaries(equipment, collapse, cone_data):
    data = cone_data
    restriction = equipment.restrictions.left(collapse, data.apex)
    report = analyze_weighted_limit_restriction(equipment, data, restriction)
    assert report.holds, report.issues


def test_colimit_restriction_reuses_cocone_boundaries(equipment, collapse, cocone_data):
    data = cocone_data
    restriction = equipment.restrictions.right(data.apex, collapse)
    report = analyze_weighted_colimit_restriction(equipment, data, restriction)
    assert report.holds, report.issues


def test_colimit_restriction_with_wrong_orientation(equipment, collapse, cocone_data):
    data = cocone_data
    restriction = equipment.restrictions.left(collapse, identity_proarrow(equipment, "★"))
    report = analyze_weighted_colimit_restriction(equipment, data, restriction)
    assert not report.holds
    assert report.issues


def test_compare_vertical_boundary_messages(equipment, collapse):
    ident = identity_vertical_boundary(equipment, "★")
    issues = compare_vertical_boundary(equipment, VerticalBoundary("•", "★", collapse), ident, "Check")
    assert "Check should run from ★ to ★ but found • → ★." in issues
    assert "Check should reuse the expected tight 1-cell witness." in issues


def test_left_extension_from_weighted_colimit(equipment, collapse, cocone_data):
    colimit = cocone_data
    counit = Cell(
        colimit.weight,
        colimit.cocone.target,
        VerticalBoundary("•", "★", collapse),
        identity_vertical_boundary(equipment, "★"),
        TightEvidence(identity_nat(collapse)),
    )
    extension = RightExtensionData(colimit.apex, collapse, colimit.apex, counit)
    data = LeftExtensionFromColimitData(colimit, extension)
    assert analyze_left_extension_from_weighted_colimit(equipment, data).holds

    unrelated = RightExtensionData(identity_proarrow(equipment, "★"), collapse, colimit.apex, counit)
    report = analyze_left_extension_from_weighted_colimit(equipment, LeftExtensionFromColimitData(colimit, unrelated))
    assert not report.holds
    assert any("mirroring the weight domain" in issue for issue in report.issues)
