from __future__ import annotations

"""Street calculus: fold pasting diagrams of 2-cells and compare two of them.

Folds run strictly left to right and stop at the first step that fails,
reporting that step's index. Comparisons collect every mismatch.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .equipment import (
    Cell,
    Frame,
    VerticalBoundary,
    VirtualEquipment,
    horizontal_compose_cells,
    object_equality,
    vertical_compose_cells,
)


@dataclass(frozen=True)
class StreetCompositeEvaluation:
    holds: bool
    issues: List[str] = field(default_factory=list)
    details: str = ""
    composite: Optional[Cell] = None


@dataclass(frozen=True)
class StreetComparisonEvaluation:
    holds: bool
    issues: List[str] = field(default_factory=list)
    details: str = ""
    red: Optional[Cell] = None
    green: Optional[Cell] = None


def compose_vertical_chain(equipment: VirtualEquipment, chain: Sequence[Cell], label: str) -> StreetCompositeEvaluation:
    """Stack cells bottom to top: chain[0] first, each next cell on top."""
    if not chain:
        return StreetCompositeEvaluation(False, [f"{label} requires at least one 2-cell."], f"{label} is empty.")
    composite = chain[0]
    for i in range(1, len(chain)):
        step = vertical_compose_cells(equipment, chain[i], composite)
        if step is None:
            issue = (
                f"{label} vertical step #{i} could not be formed; "
                "intermediate boundaries did not align for Street pasting."
            )
            return StreetCompositeEvaluation(False, [issue], f"{label} vertical fold stopped at step #{i}.")
        composite = step
    return StreetCompositeEvaluation(True, [], f"{label} vertical fold produced a composite.", composite)


def compose_horizontal_chain(equipment: VirtualEquipment, chain: Sequence[Cell], label: str) -> StreetCompositeEvaluation:
    """Juxtapose cells left to right."""
    if not chain:
        return StreetCompositeEvaluation(False, [f"{label} requires at least one 2-cell."], f"{label} is empty.")
    composite = chain[0]
    for i in range(1, len(chain)):
        step = horizontal_compose_cells(equipment, chain[i], composite)
        if step is None:
            issue = (
                f"{label} horizontal step #{i} could not be formed; "
                "intermediate frames did not align for Street pasting."
            )
            return StreetCompositeEvaluation(False, [issue], f"{label} horizontal fold stopped at step #{i}.")
        composite = step
    return StreetCompositeEvaluation(True, [], f"{label} horizontal fold produced a composite.", composite)


def evaluate_pasting_side(
    equipment: VirtualEquipment,
    grid: Sequence[Sequence[Cell]],
    label: str,
) -> StreetCompositeEvaluation:
    """Collapse rows horizontally, then the resulting column vertically."""
    issues: List[str] = []
    column: List[Cell] = []
    for i, row in enumerate(grid):
        slice_eval = compose_horizontal_chain(equipment, row, f"{label} horizontal slice #{i}")
        issues.extend(slice_eval.issues)
        if slice_eval.composite is not None:
            column.append(slice_eval.composite)
    if issues:
        return StreetCompositeEvaluation(False, issues, f"{label} could not collapse every horizontal slice.")
    vertical = compose_vertical_chain(equipment, column, label)
    if vertical.composite is None:
        return StreetCompositeEvaluation(False, issues + vertical.issues, f"{label} vertical pasting failed.")
    return StreetCompositeEvaluation(True, [], f"{label} pasting collapsed to a single 2-cell.", vertical.composite)


def _compare_frame_shapes(equipment: VirtualEquipment, red: Frame, green: Frame, label: str, role: str) -> List[str]:
    same = object_equality(equipment)
    issues: List[str] = []
    if not same(red.left_boundary, green.left_boundary):
        issues.append(
            f"{label} {role} frame left boundary mismatch: red={red.left_boundary}, green={green.left_boundary}."
        )
    if not same(red.right_boundary, green.right_boundary):
        issues.append(
            f"{label} {role} frame right boundary mismatch: red={red.right_boundary}, green={green.right_boundary}."
        )
    if len(red.arrows) != len(green.arrows):
        issues.append(
            f"{label} {role} frame arrow count mismatch: red={len(red.arrows)}, green={len(green.arrows)}."
        )
        return issues
    for i, (r, g) in enumerate(zip(red.arrows, green.arrows)):
        if not same(r.src, g.src):
            issues.append(f"{label} {role} frame arrow #{i} domain mismatch: red={r.src}, green={g.src}.")
        if not same(r.dst, g.dst):
            issues.append(f"{label} {role} frame arrow #{i} codomain mismatch: red={r.dst}, green={g.dst}.")
    return issues


def _compare_vertical_boundaries(
    equipment: VirtualEquipment,
    red: VerticalBoundary,
    green: VerticalBoundary,
    label: str,
    side: str,
) -> List[str]:
    same = object_equality(equipment)
    tight_equal = equipment.tight.tight_equality()
    issues: List[str] = []
    if not same(red.src, green.src):
        issues.append(f"{label} {side} boundary source mismatch: red={red.src}, green={green.src}.")
    if not same(red.dst, green.dst):
        issues.append(f"{label} {side} boundary target mismatch: red={red.dst}, green={green.dst}.")
    if not tight_equal(red.tight, green.tight):
        issues.append(f"{label} {side} boundary tight witnesses differ.")
    return issues


def compare_street_composites(equipment: VirtualEquipment, red: Cell, green: Cell, label: str) -> List[str]:
    issues: List[str] = []
    issues.extend(_compare_frame_shapes(equipment, red.source, green.source, label, "source"))
    issues.extend(_compare_frame_shapes(equipment, red.target, green.target, label, "target"))
    issues.extend(_compare_vertical_boundaries(equipment, red.left, green.left, label, "left"))
    issues.extend(_compare_vertical_boundaries(equipment, red.right, green.right, label, "right"))
    return issues


def evaluate_street_pasting_comparison(
    equipment: VirtualEquipment,
    red_grid: Sequence[Sequence[Cell]],
    green_grid: Sequence[Sequence[Cell]],
    label: str,
) -> StreetComparisonEvaluation:
    red = evaluate_pasting_side(equipment, red_grid, f"{label} (red)")
    green = evaluate_pasting_side(equipment, green_grid, f"{label} (green)")
    issues: List[str] = list(red.issues) + list(green.issues)
    if red.composite is None:
        issues.append(f"{label} (red) composite was unavailable.")
    if green.composite is None:
        issues.append(f"{label} (green) composite was unavailable.")
    if red.composite is not None and green.composite is not None:
        issues.extend(compare_street_composites(equipment, red.composite, green.composite, label))
    holds = not issues
    details = f"{label} red/green pastings coincide." if holds else f"{label} comparison issues: {'; '.join(issues)}"
    return StreetComparisonEvaluation(holds, issues, details, red.composite, green.composite)


def evaluate_street_comparison(
    equipment: VirtualEquipment,
    red_chain: Sequence[Cell],
    green_chain: Sequence[Cell],
    label: str,
) -> StreetComparisonEvaluation:
    """Compare two vertical chains, each cell being its own one-cell row."""
    return evaluate_street_pasting_comparison(
        equipment,
        [[cell] for cell in red_chain],
        [[cell] for cell in green_chain],
        label,
    )
