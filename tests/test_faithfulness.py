"""Fully faithful tight 1-cells and the left extensions they induce."""

from equipment_lab.equipment import Cell
from equipment_lab.faithfulness import (
    FullyFaithfulInput,
    FullyFaithfulLeftExtensionInput,
    analyze_fully_faithful_left_extension,
    analyze_fully_faithful_tight_1cell,
    analyze_pointwise_left_extension_lift_correspondence,
)
from equipment_lab.limits import LeftExtensionFromColimitData
from equipment_lab.tight import constant_functor


def _inverse(counit) -> Cell:
    return Cell(counit.target, counit.source, counit.left, counit.right, counit.evidence)


def test_identity_is_fully_faithful(equipment):
    analysis = analyze_fully_faithful_tight_1cell(equipment, FullyFaithfulInput(equipment.tight.identity, "•", "•"))
    assert analysis.holds, analysis.issues
    assert analysis.witness.left.orientation == "left"
    assert analysis.witness.right.orientation == "right"


def test_missing_left_restriction_is_reported(equipment, two_object):
    onto_bullet = constant_functor(two_object, "•")
    analysis = analyze_fully_faithful_tight_1cell(equipment, FullyFaithfulInput(onto_bullet, "•", "★"))
    assert not analysis.holds
    assert analysis.witness is None
    assert any("left restriction B(f,1)" in issue for issue in analysis.issues)


def test_wrong_codomain_is_reported(equipment, collapse):
    analysis = analyze_fully_faithful_tight_1cell(equipment, FullyFaithfulInput(collapse, "•", "•"))
    assert not analysis.holds


def test_fully_faithful_left_extension(equipment, collapse, extension_data):
    data = FullyFaithfulLeftExtensionInput(
        FullyFaithfulInput(collapse, "•", "★"),
        extension_data,
        _inverse(extension_data.counit),
    )
    report = analyze_fully_faithful_left_extension(equipment, data)
    assert report.holds, report.issues


def test_left_extension_with_misframed_inverse(equipment, collapse, extension_data):
    counit = extension_data.counit
    wrong = Cell(counit.source, counit.target, counit.left, counit.right, counit.evidence)
    data = FullyFaithfulLeftExtensionInput(FullyFaithfulInput(collapse, "•", "★"), extension_data, wrong)
    report = analyze_fully_faithful_left_extension(equipment, data)
    assert not report.holds
    assert any(issue.startswith("Proposed inverse source") for issue in report.issues)
    assert "Vertical composite of the counit followed by its proposed inverse should exist." in report.issues


def test_pointwise_extension_lift_correspondence(equipment, collapse, cocone_data, extension_data, lift_data):
    extension = LeftExtensionFromColimitData(cocone_data, extension_data)
    assert analyze_pointwise_left_extension_lift_correspondence(equipment, extension, lift_data).holds

    other = type(lift_data)(lift_data.loose, equipment.tight.identity, lift_data.lift, lift_data.unit)
    report = analyze_pointwise_left_extension_lift_correspondence(equipment, extension, other)
    assert not report.holds
    assert "Pointwise left extension and lift should use the same tight 1-cell j." in report.issues
