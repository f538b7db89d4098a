from __future__ import annotations

"""Weighted cone/cocone records and their framing analyzers.

A weighted cone over a weight frame W along a tight diagram D is a 2-cell
from W into a frame ending in the apex loose arrow, whose left boundary
reuses D and whose right boundary is the identity on the apex codomain.
Cocones are the mirror image.
"""

from dataclasses import dataclass
from typing import Any, List

from .equipment import (
    AnalysisReport,
    Cell,
    Frame,
    Proarrow,
    RestrictionResult,
    VerticalBoundary,
    VirtualEquipment,
    compare_frames,
    frame_from_proarrow,
    is_identity_vertical_boundary,
    object_equality,
)
from .extensions import RightExtensionData


@dataclass(frozen=True)
class WeightedConeData:
    weight: Frame
    diagram: Any
    apex: Proarrow
    cone: Cell


@dataclass(frozen=True)
class WeightedCoconeData:
    weight: Frame
    diagram: Any
    apex: Proarrow
    cocone: Cell


@dataclass(frozen=True)
class LeftExtensionFromColimitData:
    colimit: WeightedCoconeData
    extension: RightExtensionData


def compare_vertical_boundary(
    equipment: VirtualEquipment,
    boundary: VerticalBoundary,
    expected: VerticalBoundary,
    label: str,
) -> List[str]:
    same = object_equality(equipment)
    issues: List[str] = []
    if not (same(boundary.src, expected.src) and same(boundary.dst, expected.dst)):
        issues.append(
            f"{label} should run from {expected.src} to {expected.dst} but found {boundary.src} → {boundary.dst}."
        )
    if boundary.tight is not expected.tight:
        issues.append(f"{label} should reuse the expected tight 1-cell witness.")
    return issues


def _apex_target_issues(equipment: VirtualEquipment, target: Frame, apex: Proarrow, label: str) -> List[str]:
    same = object_equality(equipment)
    issues: List[str] = []
    if not same(target.left_boundary, apex.src):
        issues.append(
            f"{label} should begin at the apex domain {apex.src} but found {target.left_boundary}."
        )
    if not same(target.right_boundary, apex.dst):
        issues.append(
            f"{label} should end at the apex codomain {apex.dst} but found {target.right_boundary}."
        )
    if not target.arrows:
        issues.append(f"{label} should at least contain the apex loose arrow.")
    else:
        last = target.arrows[-1]
        if not (same(last.src, apex.src) and same(last.dst, apex.dst)):
            issues.append(f"{label} terminal arrow should match the apex {apex.src} → {apex.dst}.")
    return issues


def _report(issues: List[str], ok: str, prefix: str) -> AnalysisReport:
    holds = not issues
    return AnalysisReport(holds, issues, ok if holds else f"{prefix}: {'; '.join(issues)}")


def analyze_weighted_cone(equipment: VirtualEquipment, data: WeightedConeData) -> AnalysisReport:
    same = object_equality(equipment)
    issues = compare_frames(equipment, data.cone.source, data.weight, "Weighted cone source frame")
    issues.extend(_apex_target_issues(equipment, data.cone.target, data.apex, "Weighted cone target"))
    if data.cone.left.tight is not data.diagram:
        issues.append("Weighted cone left vertical boundary should reuse the supplied tight diagram.")
    if not same(data.cone.left.src, data.weight.left_boundary):
        issues.append(
            f"Weighted cone left boundary should originate at {data.weight.left_boundary} reflecting the weight domain."
        )
    if not same(data.cone.left.dst, data.apex.src):
        issues.append(
            f"Weighted cone left boundary should land at the apex domain {data.apex.src} "
            f"but found {data.cone.left.dst}."
        )
    if not is_identity_vertical_boundary(equipment, data.cone.right, data.apex.dst):
        issues.append("Weighted cone right vertical boundary should be the identity on the apex codomain.")
    return _report(
        issues,
        "Weighted cone framing holds: the weight supplies the source and the apex codomain boundary is identity.",
        "Weighted cone framing issues",
    )


def analyze_weighted_cocone(equipment: VirtualEquipment, data: WeightedCoconeData) -> AnalysisReport:
    same = object_equality(equipment)
    issues = compare_frames(equipment, data.cocone.source, data.weight, "Weighted cocone source frame")
    issues.extend(_apex_target_issues(equipment, data.cocone.target, data.apex, "Weighted cocone target"))
    if not is_identity_vertical_boundary(equipment, data.cocone.left, data.apex.src):
        issues.append("Weighted cocone left vertical boundary should be the identity on the apex domain.")
    if data.cocone.right.tight is not data.diagram:
        issues.append("Weighted cocone right vertical boundary should reuse the supplied tight diagram.")
    if not same(data.cocone.right.src, data.weight.right_boundary):
        issues.append(
            f"Weighted cocone right boundary should originate at {data.weight.right_boundary} "
            "reflecting the weight codomain."
        )
    if not same(data.cocone.right.dst, data.apex.dst):
        issues.append(
            f"Weighted cocone right boundary should land at the apex codomain {data.apex.dst} "
            f"but found {data.cocone.right.dst}."
        )
    return _report(
        issues,
        "Weighted cocone framing holds: the weight supplies the source and the apex domain boundary is identity.",
        "Weighted cocone framing issues",
    )


def _restriction_issues(
    equipment: VirtualEquipment,
    restriction: RestrictionResult,
    apex: Proarrow,
    cell: Cell,
    label: str,
) -> List[str]:
    cartesian = restriction.cartesian
    issues = compare_frames(equipment, cartesian.target, frame_from_proarrow(apex), f"{label} restriction cartesian target")
    issues.extend(compare_vertical_boundary(equipment, cartesian.left, cell.left, f"{label} restriction left boundary"))
    issues.extend(compare_vertical_boundary(equipment, cartesian.right, cell.right, f"{label} restriction right boundary"))
    expected = cell.left if cartesian.boundary.direction == "left" else cell.right
    issues.extend(compare_vertical_boundary(equipment, cartesian.boundary.vertical, expected, f"{label} cartesian boundary"))
    return issues


def analyze_weighted_colimit_restriction(
    equipment: VirtualEquipment,
    cocone: WeightedCoconeData,
    restriction: RestrictionResult,
) -> AnalysisReport:
    issues = _restriction_issues(equipment, restriction, cocone.apex, cocone.cocone, "Weighted colimit")
    return _report(
        issues,
        "Restriction cartesian cell reuses the weighted cocone boundaries.",
        "Weighted colimit restriction issues",
    )


def analyze_weighted_limit_restriction(
    equipment: VirtualEquipment,
    cone: WeightedConeData,
    restriction: RestrictionResult,
) -> AnalysisReport:
    issues = _restriction_issues(equipment, restriction, cone.apex, cone.cone, "Weighted limit")
    return _report(
        issues,
        "Restriction cartesian cell reuses the weighted cone boundaries.",
        "Weighted limit restriction issues",
    )


def analyze_left_extension_from_weighted_colimit(
    equipment: VirtualEquipment,
    data: LeftExtensionFromColimitData,
) -> AnalysisReport:
    same = object_equality(equipment)
    issues: List[str] = []
    loose = data.extension.loose
    weight = data.colimit.weight
    if not same(loose.src, weight.left_boundary):
        issues.append(
            f"Left extension loose arrow should originate at {weight.left_boundary} mirroring the weight domain."
        )
    if not same(loose.dst, weight.right_boundary):
        issues.append(
            f"Left extension loose arrow should land at {weight.right_boundary} mirroring the weight codomain."
        )
    issues.extend(compare_frames(equipment, data.extension.counit.source, weight, "Left extension counit source"))
    issues.extend(
        compare_frames(
            equipment,
            data.extension.counit.target,
            data.colimit.cocone.target,
            "Left extension counit target",
        )
    )
    if data.extension.counit.left.tight is not data.colimit.diagram:
        issues.append("Left extension counit should reuse the diagram tight 1-cell from the weighted cocone.")
    return _report(
        issues,
        "Left extension inherits its counit framing from the weighted colimit.",
        "Left extension framing issues",
    )
