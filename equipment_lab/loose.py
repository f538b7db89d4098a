from __future__ import annotations

"""Loose monoids and loose adjunctions.

A loose monoid on an object A is a loose arrow E: A ⇸ A with a
multiplication E E => E and a unit 1_A => E, both framed by identity
boundaries on A. A loose adjunction pairs l: A ⇸ B with r: B ⇸ A through
a unit and counit; the left arrow is a map when the right adjoint comes
with a right-oriented representability witness.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .equipment import (
    AnalysisReport,
    Cell,
    Proarrow,
    RepresentabilityWitness,
    VirtualEquipment,
    compare_frames,
    frame_from_proarrow,
    frame_from_sequence,
    identity_boundary_issue,
    identity_proarrow,
    object_equality,
)


@dataclass(frozen=True)
class LooseMonoidData:
    object: Any
    loose_cell: Proarrow
    multiplication: Cell
    unit: Cell


@dataclass(frozen=True)
class LooseAdjunctionData:
    left: Proarrow
    right: Proarrow
    unit: Cell
    counit: Cell
    right_representability: Optional[RepresentabilityWitness] = None


@dataclass(frozen=True)
class LooseAdjunctionAnalysis:
    holds: bool
    issues: List[str] = field(default_factory=list)
    details: str = ""
    left_is_map: bool = False


def _identity_boundaries(equipment: VirtualEquipment, cell: Cell, obj: Any, label: str) -> List[str]:
    issues: List[str] = []
    for boundary, side in ((cell.left, "left"), (cell.right, "right")):
        issue = identity_boundary_issue(equipment, boundary, obj, f"{label} {side} boundary")
        if issue is not None:
            issues.append(issue)
    return issues


def analyze_loose_monoid_shape(equipment: VirtualEquipment, data: LooseMonoidData) -> AnalysisReport:
    same = object_equality(equipment)
    obj, loose = data.object, data.loose_cell
    issues: List[str] = []
    if not (same(loose.src, obj) and same(loose.dst, obj)):
        issues.append(f"Loose monoid carrier should be an endo-arrow on {obj}; found {loose.src} ⇸ {loose.dst}.")

    single = frame_from_proarrow(loose)
    doubled = frame_from_sequence([loose, loose], obj, obj)
    issues.extend(compare_frames(equipment, data.multiplication.source, doubled, "Multiplication source"))
    issues.extend(compare_frames(equipment, data.multiplication.target, single, "Multiplication target"))
    issues.extend(_identity_boundaries(equipment, data.multiplication, obj, "Multiplication"))

    unit_frame = frame_from_proarrow(identity_proarrow(equipment, obj))
    issues.extend(compare_frames(equipment, data.unit.source, unit_frame, "Unit source"))
    issues.extend(compare_frames(equipment, data.unit.target, single, "Unit target"))
    issues.extend(_identity_boundaries(equipment, data.unit, obj, "Unit"))

    holds = not issues
    details = (
        f"Loose monoid satisfies the multiplication and unit framing on {obj}."
        if holds
        else f"Loose monoid framing issues: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)


def analyze_loose_adjunction(equipment: VirtualEquipment, data: LooseAdjunctionData) -> LooseAdjunctionAnalysis:
    """Unit 1_A => l;r and counit r;l => 1_B, with identity boundaries."""
    same = object_equality(equipment)
    left, right = data.left, data.right
    a, b = left.src, left.dst
    issues: List[str] = []
    if not (same(right.src, b) and same(right.dst, a)):
        issues.append(f"Right adjoint should run {b} ⇸ {a}; found {right.src} ⇸ {right.dst}.")

    issues.extend(
        compare_frames(equipment, data.unit.source, frame_from_proarrow(identity_proarrow(equipment, a)), "Adjunction unit source")
    )
    issues.extend(compare_frames(equipment, data.unit.target, frame_from_sequence([left, right], a, a), "Adjunction unit target"))
    issues.extend(_identity_boundaries(equipment, data.unit, a, "Adjunction unit"))

    issues.extend(
        compare_frames(equipment, data.counit.source, frame_from_sequence([right, left], b, b), "Adjunction counit source")
    )
    issues.extend(
        compare_frames(equipment, data.counit.target, frame_from_proarrow(identity_proarrow(equipment, b)), "Adjunction counit target")
    )
    issues.extend(_identity_boundaries(equipment, data.counit, b, "Adjunction counit"))

    witness = data.right_representability
    left_is_map = False
    if witness is None:
        note = "no representability witness for the right adjoint was supplied"
    elif witness.orientation != "right":
        note = f"right adjoint witness is {witness.orientation}-oriented, so the left arrow is not certified as a map"
    else:
        left_is_map = True
        note = "right adjoint is representable, so the left arrow is a map"

    holds = not issues
    if holds:
        details = f"Loose adjunction framing holds; {note}."
    else:
        details = f"Loose adjunction issues: {'; '.join(issues)}; {note}."
    return LooseAdjunctionAnalysis(holds, issues, details, left_is_map and holds)
