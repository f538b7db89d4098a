from __future__ import annotations

"""Density, absolute colimit and pointwise lift analyzers."""

from dataclasses import dataclass
from typing import Any, List, Optional

from .equipment import (
    AnalysisReport,
    CartesianCell,
    Cell,
    RepresentabilityWitness,
    VirtualEquipment,
    compare_frames,
    frame_from_proarrow,
    identity_proarrow,
    is_identity_vertical_boundary,
)
from .extensions import RightLiftData, analyze_right_lift
from .limits import (
    LeftExtensionFromColimitData,
    WeightedConeData,
    WeightedCoconeData,
    analyze_left_extension_from_weighted_colimit,
)


@dataclass(frozen=True)
class AbsoluteColimitWitnessData:
    j: Any
    f: Any
    colimit: WeightedCoconeData
    comparison: Cell


@dataclass(frozen=True)
class AbsoluteColimitPreservationData:
    absolute: AbsoluteColimitWitnessData
    extension: LeftExtensionFromColimitData


@dataclass(frozen=True)
class PointwiseLeftLiftData:
    lift: RightLiftData
    along: Any
    cone: Optional[WeightedConeData] = None


def representability_issue(witness: Optional[RepresentabilityWitness], orientation: str) -> Optional[str]:
    if witness is None:
        return f"Expected a {orientation}-oriented representability witness."
    if witness.orientation != orientation:
        return f"Representability witness should be {orientation}-oriented but found {witness.orientation}."
    return None


def analyze_density_via_identity_restrictions(equipment: VirtualEquipment, obj: Any, tight: Any) -> AnalysisReport:
    """Both B(f,1) and B(1,f) of the identity loose arrow at ``obj`` must exist and be well formed."""
    issues: List[str] = []
    identity = identity_proarrow(equipment, obj)

    left = equipment.restrictions.left(tight, identity)
    if left is None:
        issues.append("Left restriction B(f,1) of the identity loose arrow should exist for a dense tight 1-cell.")
    else:
        if left.cartesian.boundary.direction != "left":
            issues.append("Left restriction cartesian boundary should be oriented to the left.")
        if left.cartesian.left.tight is not tight:
            issues.append("Left restriction should reuse the supplied tight 1-cell as its boundary witness.")
        if not is_identity_vertical_boundary(equipment, left.cartesian.right, identity.dst):
            issues.append("Left restriction right boundary should be the identity on the codomain object.")
        issue = representability_issue(left.representability, "left")
        if issue is not None:
            issues.append(issue)

    right = equipment.restrictions.right(identity, tight)
    if right is None:
        issues.append("Right restriction B(1,f) of the identity loose arrow should exist for a dense tight 1-cell.")
    else:
        if right.cartesian.boundary.direction != "right":
            issues.append("Right restriction cartesian boundary should be oriented to the right.")
        if right.cartesian.right.tight is not tight:
            issues.append("Right restriction should reuse the supplied tight 1-cell as its boundary witness.")
        if not is_identity_vertical_boundary(equipment, right.cartesian.left, identity.src):
            issues.append("Right restriction left boundary should be the identity on the domain object.")
        issue = representability_issue(right.representability, "right")
        if issue is not None:
            issues.append(issue)

    holds = not issues
    details = (
        "Identity loose arrow admits both B(f,1) and B(1,f) restrictions with representability witnesses."
        if holds
        else f"Density issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)


def analyze_absolute_colimit_witness(equipment: VirtualEquipment, data: AbsoluteColimitWitnessData) -> AnalysisReport:
    issues: List[str] = []
    comparison = data.comparison
    if not isinstance(comparison, CartesianCell) or not comparison.cartesian:
        issues.append("Absolute colimit comparison cell should be cartesian (left-opcartesian).")
    if isinstance(comparison, CartesianCell):
        if comparison.boundary.direction != "left":
            issues.append("Absolute colimit comparison boundary should be oriented to the left.")
        if comparison.boundary.vertical.tight is not data.j:
            issues.append("Absolute colimit cartesian boundary should witness the tight 1-cell j.")
    if comparison.left.tight is not data.colimit.diagram:
        issues.append("Absolute colimit comparison should reuse the diagram tight 1-cell on its left boundary.")
    if comparison.right.tight is not data.f:
        issues.append("Absolute colimit comparison should land in the supplied tight 1-cell f.")
    issues.extend(
        compare_frames(equipment, comparison.source, data.colimit.cocone.source, "Absolute colimit comparison source")
    )
    issues.extend(
        compare_frames(equipment, comparison.target, data.colimit.cocone.target, "Absolute colimit comparison target")
    )
    holds = not issues
    details = (
        "Left-opcartesian comparison reuses the weighted cocone boundaries."
        if holds
        else f"Absolute colimit issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)


def analyze_left_extension_preserves_absolute(
    equipment: VirtualEquipment,
    data: AbsoluteColimitPreservationData,
) -> AnalysisReport:
    issues: List[str] = []
    issues.extend(analyze_absolute_colimit_witness(equipment, data.absolute).issues)
    issues.extend(analyze_left_extension_from_weighted_colimit(equipment, data.extension).issues)
    if data.extension.colimit is not data.absolute.colimit:
        issues.append(
            "Left extension preservation should analyse the same weighted cocone that witnesses the absolute colimit."
        )
    if data.extension.extension.counit.left.tight is not data.absolute.colimit.diagram:
        issues.append(
            "Left extension counit should factor through the diagram that appears in the absolute colimit witness."
        )
    holds = not issues
    details = (
        "Weighted left extension reuses the absolute colimit data."
        if holds
        else f"Left extension preservation issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)


def analyze_pointwise_left_lift(equipment: VirtualEquipment, data: PointwiseLeftLiftData) -> AnalysisReport:
    issues: List[str] = []
    if data.lift.along is not data.along:
        issues.append("Pointwise left lift should be computed along the supplied tight 1-cell j.")
    lift = analyze_right_lift(equipment, data.lift)
    if not lift.holds:
        issues.append(
            "Underlying right lift must satisfy its framing before claiming pointwise behaviour: "
            + "; ".join(lift.issues)
        )
    if data.cone is not None:
        issues.extend(
            compare_frames(
                equipment,
                data.cone.cone.target,
                frame_from_proarrow(data.lift.lift),
                "Pointwise left lift comparison target",
            )
        )
    holds = not issues
    details = (
        "Right lift framing aligns with the designated tight 1-cell, providing a pointwise left lift."
        if holds
        else f"Pointwise left lift issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)
