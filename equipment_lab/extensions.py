from __future__ import annotations

"""Framing analyzers for right extensions and right lifts.

Checks accumulate: every mismatch is reported, nothing short-circuits.
"""

from dataclasses import dataclass
from typing import Any, List

from .equipment import (
    AnalysisReport,
    Cell,
    Proarrow,
    VirtualEquipment,
    compare_frames,
    frame_from_proarrow,
    identity_boundary_issue,
    object_equality,
)


@dataclass(frozen=True)
class RightExtensionData:
    loose: Proarrow
    along: Any
    extension: Proarrow
    counit: Cell


@dataclass(frozen=True)
class RightLiftData:
    loose: Proarrow
    along: Any
    lift: Proarrow
    unit: Cell


def _endpoint_issues(equipment: VirtualEquipment, loose: Proarrow, along: Any, candidate: Proarrow, label: str) -> List[str]:
    same = object_equality(equipment)
    issues: List[str] = []
    expected_domain = along.on_obj(loose.src)
    if not same(expected_domain, candidate.src):
        issues.append(
            f"{label} should originate at {expected_domain} obtained by applying the tight leg to {loose.src}."
        )
    if not same(loose.dst, candidate.dst):
        issues.append(f"{label} codomain {candidate.dst} should equal the loose arrow codomain {loose.dst}.")
    return issues


def _boundary_issues(equipment: VirtualEquipment, cell: Cell, loose: Proarrow, label: str) -> List[str]:
    issues: List[str] = []
    for boundary, obj, side in ((cell.left, loose.src, "left"), (cell.right, loose.dst, "right")):
        issue = identity_boundary_issue(equipment, boundary, obj, f"{label} {side} vertical boundary")
        if issue is not None:
            issues.append(issue)
    return issues


def analyze_right_extension(equipment: VirtualEquipment, data: RightExtensionData) -> AnalysisReport:
    same = object_equality(equipment)
    issues = _endpoint_issues(equipment, data.loose, data.along, data.extension, "Right extension")
    issues.extend(
        compare_frames(equipment, data.counit.source, frame_from_proarrow(data.loose), "Right extension counit source")
    )
    if not data.counit.target.arrows:
        issues.append("Right extension counit target should contain at least the extension arrow.")
    else:
        last = data.counit.target.arrows[-1]
        if not same(last.src, data.extension.src):
            issues.append(
                f"Right extension composite should reach {data.extension.src} before the extension arrow "
                f"but found {last.src}."
            )
        if not same(last.dst, data.extension.dst):
            issues.append(f"Right extension arrow should land at {data.extension.dst} but found {last.dst}.")
    issues.extend(_boundary_issues(equipment, data.counit, data.loose, "Right extension"))
    holds = not issues
    details = (
        "Right extension counit passes the framing checks."
        if holds
        else f"Right extension framing issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)


def analyze_right_lift(equipment: VirtualEquipment, data: RightLiftData) -> AnalysisReport:
    same = object_equality(equipment)
    issues = _endpoint_issues(equipment, data.loose, data.along, data.lift, "Right lift")
    issues.extend(
        compare_frames(equipment, data.unit.target, frame_from_proarrow(data.loose), "Right lift unit target")
    )
    if not data.unit.source.arrows:
        issues.append("Right lift unit source should contain the lift arrow.")
    else:
        last = data.unit.source.arrows[-1]
        if not same(last.src, data.lift.src):
            issues.append(
                f"Right lift composite should enter {data.lift.src} before the lift arrow but found {last.src}."
            )
        if not same(last.dst, data.lift.dst):
            issues.append(f"Right lift arrow should land at {data.lift.dst} but found {last.dst}.")
    issues.extend(_boundary_issues(equipment, data.unit, data.loose, "Right lift"))
    holds = not issues
    details = "Right lift unit passes the framing checks." if holds else f"Right lift framing issues: {'; '.join(issues)}"
    return AnalysisReport(holds, issues, details)


def analyze_right_extension_lift_compatibility(
    equipment: VirtualEquipment,
    extension: RightExtensionData,
    lift: RightLiftData,
) -> AnalysisReport:
    same = object_equality(equipment)
    issues: List[str] = []
    if not (same(extension.loose.src, lift.loose.src) and same(extension.loose.dst, lift.loose.dst)):
        issues.append("Right extension and right lift should be computed for the same loose arrow.")
    if extension.along is not lift.along:
        issues.append("Right extension and right lift should share the same tight leg.")
    if not same(extension.extension.src, lift.lift.src):
        issues.append(
            f"Right extension domain {extension.extension.src} should match the right lift domain {lift.lift.src}."
        )
    if not same(extension.extension.dst, lift.lift.dst):
        issues.append(
            f"Right extension codomain {extension.extension.dst} should match the right lift codomain {lift.lift.dst}."
        )
    ext_arrows = extension.counit.target.arrows
    lift_arrows = lift.unit.source.arrows
    if ext_arrows and lift_arrows:
        ext_prefix, lift_prefix = ext_arrows[:-1], lift_arrows[:-1]
        if len(ext_prefix) != len(lift_prefix):
            issues.append(
                "The compared composites should share the same loose length before their terminal arrows."
            )
        else:
            for i, (a, b) in enumerate(zip(ext_prefix, lift_prefix)):
                if not (same(a.src, b.src) and same(a.dst, b.dst)):
                    issues.append(
                        f"Composite arrow #{i} differs between the right extension and right lift framing."
                    )
                    break
    holds = not issues
    details = (
        "Right extension and right lift share matching domains, codomains, and composites."
        if holds
        else f"Right extension/right lift compatibility issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)
