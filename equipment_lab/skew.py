from __future__ import annotations

"""Substitution check for the loose skew-multicategory.

An outer multimorphism with n source arrows accepts exactly n inner
multimorphisms, one per slot. Each inner cell must be a unary, endpoint
preserving cell on its slot with identity vertical boundaries.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .equipment import (
    AnalysisReport,
    Cell,
    Frame,
    Proarrow,
    VirtualEquipment,
    identity_boundary_issue,
    object_equality,
)


@dataclass(frozen=True)
class LooseSkewMultimorphism:
    cell: Cell
    label: str = "multimorphism"


def _as_multimorphism(value, default_label: str) -> LooseSkewMultimorphism:
    if isinstance(value, LooseSkewMultimorphism):
        return value
    return LooseSkewMultimorphism(value, default_label)


def _singleton_issue(equipment: VirtualEquipment, frame: Frame, slot: Proarrow, label: str) -> Optional[str]:
    same = object_equality(equipment)
    if len(frame.arrows) != 1:
        return f"{label} should be a single-arrow frame; found {len(frame.arrows)} arrow(s)."
    arrow = frame.arrows[0]
    if not (same(arrow.src, slot.src) and same(arrow.dst, slot.dst)):
        return f"{label} arrow runs {arrow.src} → {arrow.dst}; expected {slot.src} → {slot.dst}."
    return None


def analyze_loose_skew_composition(
    equipment: VirtualEquipment,
    outer,
    inners: Sequence,
) -> AnalysisReport:
    """Check that ``inners`` can be substituted into the source slots of ``outer``.

    ``outer`` and each inner may be a bare :class:`Cell` or a
    :class:`LooseSkewMultimorphism` carrying a label for the diagnostics.
    """
    outer = _as_multimorphism(outer, "outer multimorphism")
    inners = [_as_multimorphism(inner, f"inner multimorphism #{i}") for i, inner in enumerate(inners)]
    slots = outer.cell.source.arrows
    issues: List[str] = []
    if len(slots) != len(inners):
        issues.append(
            f"{outer.label} expects {len(slots)} inner multimorphism(s) to substitute; received {len(inners)}."
        )
    for index, (slot, inner) in enumerate(zip(slots, inners)):
        prefix = f"{inner.label} (slot #{index})"
        for frame, role in ((inner.cell.source, "source"), (inner.cell.target, "target")):
            issue = _singleton_issue(equipment, frame, slot, f"{prefix} {role}")
            if issue is not None:
                issues.append(issue)
        for boundary, obj, side in ((inner.cell.left, slot.src, "left"), (inner.cell.right, slot.dst, "right")):
            issue = identity_boundary_issue(equipment, boundary, obj, f"{prefix} {side} boundary")
            if issue is not None:
                issues.append(issue)
    holds = not issues
    details = (
        f"{outer.label} admits substitution of {len(inners)} inner multimorphism(s)."
        if holds
        else f"Skew substitution issues for {outer.label}: {'; '.join(issues)}"
    )
    return AnalysisReport(holds, issues, details)
