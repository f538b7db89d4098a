from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .absoluteness import representability_issue
from .equipment import (
    AnalysisReport,
    Cell,
    RestrictionResult,
    VirtualEquipment,
    compare_frames,
    identity_proarrow,
    is_identity_vertical_boundary,
    object_equality,
    vertical_compose_cells,
)
from .extensions import RightExtensionData, RightLiftData
from .limits import LeftExtensionFromColimitData


@dataclass(frozen=True)
class FullyFaithfulInput:
    tight: Any
    domain: Any
    codomain: Any


@dataclass(frozen=True)
class RestrictionExpectation:
    orientation: str
    result: RestrictionResult
    domain: Any
    codomain: Any


@dataclass(frozen=True)
class FullyFaithfulWitness:
    left: RestrictionExpectation
    right: RestrictionExpectation


@dataclass(frozen=True)
class FullyFaithfulAnalysis:
    holds: bool
    issues: List[str]
    details: str
    witness: Optional[FullyFaithfulWitness] = None


@dataclass(frozen=True)
class FullyFaithfulLeftExtensionInput:
    fully_faithful: FullyFaithfulInput
    extension: RightExtensionData
    inverse: Cell


def _restriction_issues(
    equipment: VirtualEquipment,
    orientation: str,
    restriction: RestrictionResult,
    domain: Any,
    codomain: Any,
) -> List[str]:
    same = object_equality(equipment)
    label = "Left restriction" if orientation == "left" else "Right restriction"
    issues: List[str] = []
    if not same(restriction.restricted.src, domain):
        issues.append(f"{label} should originate at {domain} but found {restriction.restricted.src}.")
    if not same(restriction.restricted.dst, codomain):
        issues.append(f"{label} should land at {codomain} but found {restriction.restricted.dst}.")
    if restriction.cartesian.boundary.direction != orientation:
        issues.append(f"{label} cartesian boundary should be oriented {orientation}.")
    issue = representability_issue(restriction.representability, orientation)
    if issue is not None:
        issues.append(issue)
    return issues


def analyze_fully_faithful_tight_1cell(equipment: VirtualEquipment, data: FullyFaithfulInput) -> FullyFaithfulAnalysis:
    """A fully faithful tight 1-cell has both identity restrictions, each representable."""
    issues: List[str] = []
    left = equipment.restrictions.left(data.tight, identity_proarrow(equipment, data.codomain))
    right = equipment.restrictions.right(identity_proarrow(equipment, data.domain), data.tight)
    if left is None:
        issues.append(
            "Fully faithful tight 1-cells should admit the left restriction B(f,1) of the identity loose arrow."
        )
    if right is None:
        issues.append(
            "Fully faithful tight 1-cells should admit the right restriction B(1,f) of the identity loose arrow."
        )
    if left is not None:
        issues.extend(_restriction_issues(equipment, "left", left, data.domain, data.codomain))
        if not is_identity_vertical_boundary(equipment, left.cartesian.right, data.codomain):
            issues.append(
                "Left restriction should keep the codomain boundary an identity vertical cell on the codomain object."
            )
    if right is not None:
        issues.extend(_restriction_issues(equipment, "right", right, data.domain, data.codomain))
        if not is_identity_vertical_boundary(equipment, right.cartesian.left, data.domain):
            issues.append(
                "Right restriction should keep the domain boundary an identity vertical cell on the domain object."
            )

    if issues:
        return FullyFaithfulAnalysis(False, issues, f"Fully faithful analysis issues: {'; '.join(issues)}")
    witness = FullyFaithfulWitness(
        RestrictionExpectation("left", left, data.domain, data.codomain),
        RestrictionExpectation("right", right, data.domain, data.codomain),
    )
    return FullyFaithfulAnalysis(
        True,
        [],
        "Identity restrictions exhibit the companion and conjoint required for a fully faithful tight 1-cell.",
        witness,
    )


def analyze_pointwise_left_extension_lift_correspondence(
    equipment: VirtualEquipment,
    extension: LeftExtensionFromColimitData,
    lift: RightLiftData,
) -> AnalysisReport:
    same = object_equality(equipment)
    ext = extension.extension
    issues: List[str] = []
    if not same(ext.loose.src, lift.loose.src):
        issues.append(
            f"Pointwise left extension loose arrow should match the loose arrow used for the lift; "
            f"expected {ext.loose.src} but found {lift.loose.src}."
        )
    if not same(ext.loose.dst, lift.loose.dst):
        issues.append(
            f"Pointwise left extension loose codomain should match the lift codomain; "
            f"expected {ext.loose.dst} but found {lift.loose.dst}."
        )
    if ext.along is not lift.along:
        issues.append("Pointwise left extension and lift should use the same tight 1-cell j.")
    issues.extend(compare_frames(equipment, lift.unit.target, ext.counit.source, "Left lift unit target"))
    issues.extend(compare_frames(equipment, lift.unit.source, ext.counit.target, "Left lift unit source"))
    if not same(lift.unit.left.src, ext.counit.left.src):
        issues.append("Left lift unit left boundary should agree with the left extension counit's boundary.")
    holds = not issues
    details = (
        "Left lift unit and left extension counit share framing data."
        if holds
        else f"Pointwise left extension/left lift issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)


def analyze_fully_faithful_left_extension(equipment: VirtualEquipment, data: FullyFaithfulLeftExtensionInput) -> AnalysisReport:
    """Along a fully faithful j the extension counit must be invertible."""
    same = object_equality(equipment)
    issues: List[str] = []
    ff = analyze_fully_faithful_tight_1cell(equipment, data.fully_faithful)
    if not ff.holds:
        issues.append("Fully faithful witness failed the restriction checks required before proving invertibility.")
        issues.extend(ff.issues)

    ext, inverse = data.extension, data.inverse
    if ext.along is not data.fully_faithful.tight:
        issues.append("Left extension should be computed along the fully faithful tight 1-cell j.")
    if not same(ext.loose.src, data.fully_faithful.domain):
        issues.append(
            f"Left extension loose domain should equal the fully faithful domain {data.fully_faithful.domain}; "
            f"found {ext.loose.src} instead."
        )
    if not same(ext.loose.dst, data.fully_faithful.codomain):
        issues.append(
            f"Left extension loose codomain should equal the fully faithful codomain {data.fully_faithful.codomain}; "
            f"found {ext.loose.dst} instead."
        )
    issues.extend(compare_frames(equipment, inverse.source, ext.counit.target, "Proposed inverse source"))
    issues.extend(compare_frames(equipment, inverse.target, ext.counit.source, "Proposed inverse target"))

    def boundaries_coincide(a, b) -> bool:
        return same(a.src, b.src) and same(a.dst, b.dst)

    if not (boundaries_coincide(inverse.left, ext.counit.left) and boundaries_coincide(inverse.right, ext.counit.right)):
        issues.append(
            "Inverse 2-cell should share the same vertical boundaries as the extension counit to witness an isomorphism."
        )
    if vertical_compose_cells(equipment, inverse, ext.counit) is None:
        issues.append("Vertical composite of the counit followed by its proposed inverse should exist.")
    if vertical_compose_cells(equipment, ext.counit, inverse) is None:
        issues.append("Vertical composite of the inverse followed by the counit should exist.")
    holds = not issues
    details = (
        "Left extension counit is invertible with the supplied inverse."
        if holds
        else f"Fully faithful left extension issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)
