from __future__ import annotations

"""Bicategory view of an equipment with weak composition, and the pentagon
and triangle coherence checks built on Street calculus.

Coherence cells live between single-arrow frames: a bracketed composite
such as ((k h) g) f is one loose arrow, and whiskering collapses the
whiskered frames back to a single composite arrow so that both sides of
each law end up with comparable shapes.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .equipment import (
    AnalysisReport,
    Cell,
    Proarrow,
    VirtualEquipment,
    compare_frames,
    frame_from_proarrow,
    horizontal_compose_many_proarrows,
    horizontal_compose_proarrows,
    identity_proarrow,
    object_equality,
    vertical_compose_cells,
    whisker_left_cell,
    whisker_right_cell,
)
from .street import StreetComparisonEvaluation, evaluate_street_comparison


@dataclass(frozen=True, eq=False)
class Bicategory:
    equipment: VirtualEquipment
    associator: Callable[[Proarrow, Proarrow, Proarrow], Optional[Cell]]
    left_unitor: Callable[[Proarrow], Optional[Cell]]
    right_unitor: Callable[[Proarrow], Optional[Cell]]
    associator_inverse: Optional[Callable[[Proarrow, Proarrow, Proarrow], Optional[Cell]]] = None
    left_unitor_inverse: Optional[Callable[[Proarrow], Optional[Cell]]] = None
    right_unitor_inverse: Optional[Callable[[Proarrow], Optional[Cell]]] = None

    def compose1(self, g: Proarrow, f: Proarrow) -> Optional[Proarrow]:
        if not object_equality(self.equipment)(f.dst, g.src):
            return None
        return horizontal_compose_proarrows(self.equipment, g, f)

    def identity1(self, obj: Any) -> Proarrow:
        return identity_proarrow(self.equipment, obj)

    def _collapse(self, cell: Optional[Cell]) -> Optional[Cell]:
        if cell is None:
            return None
        source = horizontal_compose_many_proarrows(self.equipment, cell.source.arrows)
        target = horizontal_compose_many_proarrows(self.equipment, cell.target.arrows)
        if source is None or target is None:
            return None
        return Cell(frame_from_proarrow(source), frame_from_proarrow(target), cell.left, cell.right, cell.evidence)

    def whisker_left(self, f: Proarrow, cell: Cell) -> Optional[Cell]:
        """alpha ⋆ id_f : X f => Y f."""
        return self._collapse(whisker_left_cell(self.equipment, f, cell))

    def whisker_right(self, cell: Cell, k: Proarrow) -> Optional[Cell]:
        """id_k ⋆ alpha : k X => k Y."""
        return self._collapse(whisker_right_cell(self.equipment, cell, k))


@dataclass(frozen=True)
class BicategoryConstruction:
    bicategory: Optional[Bicategory]
    issues: List[str] = field(default_factory=list)
    details: str = ""


@dataclass(frozen=True)
class CoherenceAnalysis:
    holds: bool
    issues: List[str] = field(default_factory=list)
    details: str = ""
    comparison: Optional[StreetComparisonEvaluation] = None


def bicategory_from_equipment(equipment: VirtualEquipment) -> BicategoryConstruction:
    weak = equipment.weak_composition
    if weak is None:
        return BicategoryConstruction(
            None,
            [
                "Equipment is missing weak_composition.associator.",
                "Equipment is missing weak_composition.left_unitor.",
                "Equipment is missing weak_composition.right_unitor.",
            ],
            "Virtual equipment did not provide weak composition data; associator/unitors unavailable.",
        )
    missing: List[str] = []
    if weak.associator is None:
        missing.append("Equipment is missing weak_composition.associator.")
    if weak.left_unitor is None:
        missing.append("Equipment is missing weak_composition.left_unitor.")
    if weak.right_unitor is None:
        missing.append("Equipment is missing weak_composition.right_unitor.")
    if missing:
        return BicategoryConstruction(
            None,
            missing,
            f"Virtual equipment weak composition was incomplete: {', '.join(missing)}",
        )
    bicategory = Bicategory(
        equipment=equipment,
        associator=weak.associator,
        left_unitor=weak.left_unitor,
        right_unitor=weak.right_unitor,
        associator_inverse=weak.associator_inverse,
        left_unitor_inverse=weak.left_unitor_inverse,
        right_unitor_inverse=weak.right_unitor_inverse,
    )
    return BicategoryConstruction(bicategory, [], "Equipment exposes associator and unitors for bicategorical reasoning.")


def _require(value, label: str, issues: List[str], what: str):
    if value is None:
        issues.append(f"{label} {what}")
    return value


def _finish(bicategory: Bicategory, left: List[Cell], right: List[Cell], issues: List[str], label: str) -> CoherenceAnalysis:
    if issues:
        return CoherenceAnalysis(False, issues, f"{label} could not be assembled: {'; '.join(issues)}")
    comparison = evaluate_street_comparison(bicategory.equipment, left, right, label)
    return CoherenceAnalysis(comparison.holds, list(comparison.issues), comparison.details, comparison)


def analyze_bicategory_pentagon(bicategory: Bicategory, f: Proarrow, g: Proarrow, h: Proarrow, k: Proarrow) -> CoherenceAnalysis:
    """Compare the two re-associations of ((k h) g) f into k (h (g f))."""
    label = "Bicategory pentagon"
    issues: List[str] = []

    def arrow(value, name):
        return _require(value, name, issues, "composite could not be formed.")

    gf = arrow(bicategory.compose1(g, f), "g ∘ f")
    hg = arrow(bicategory.compose1(h, g), "h ∘ g")
    kh = arrow(bicategory.compose1(k, h), "k ∘ h")
    kh_g = arrow(bicategory.compose1(kh, g), "(k ∘ h) ∘ g") if kh is not None else None
    if kh_g is not None:
        arrow(bicategory.compose1(kh_g, f), "((k ∘ h) ∘ g) ∘ f")
    k_hg = arrow(bicategory.compose1(k, hg), "k ∘ (h ∘ g)") if hg is not None else None
    if k_hg is not None:
        arrow(bicategory.compose1(k_hg, f), "(k ∘ (h ∘ g)) ∘ f")
    if issues:
        return CoherenceAnalysis(False, issues, f"{label} could not be assembled: {'; '.join(issues)}")

    def cell(value, name):
        return _require(value, name, issues, "was unavailable.")

    left: List[Cell] = []
    right: List[Cell] = []

    first = cell(bicategory.associator(kh, g, f), "α_{k∘h,g,f}")
    second = cell(bicategory.associator(k, h, gf), "α_{k,h,g∘f}")
    if first is not None and second is not None:
        left = [first, second]

    inner = cell(bicategory.associator(k, h, g), "α_{k,h,g}")
    whiskered = cell(bicategory.whisker_left(f, inner), "(α_{k,h,g} ⋆ id_f)") if inner is not None else None
    middle = cell(bicategory.associator(k, hg, f), "α_{k,h∘g,f}")
    tail = cell(bicategory.associator(h, g, f), "α_{h,g,f}")
    tail_whiskered = cell(bicategory.whisker_right(tail, k), "(id_k ⋆ α_{h,g,f})") if tail is not None else None
    if whiskered is not None and middle is not None and tail_whiskered is not None:
        right = [whiskered, middle, tail_whiskered]

    return _finish(bicategory, left, right, issues, label)


def analyze_bicategory_triangle(bicategory: Bicategory, f: Proarrow, g: Proarrow) -> CoherenceAnalysis:
    """Compare (g 1) f => g (1 f) => g f with (g 1) f => g f."""
    label = "Bicategory triangle"
    issues: List[str] = []
    unit = bicategory.identity1(f.dst)

    def arrow(value, name):
        return _require(value, name, issues, "composite could not be formed.")

    g1 = arrow(bicategory.compose1(g, unit), "g ∘ 1")
    arrow(bicategory.compose1(unit, f), "1 ∘ f")
    arrow(bicategory.compose1(g, f), "g ∘ f")
    if g1 is not None:
        arrow(bicategory.compose1(g1, f), "(g ∘ 1) ∘ f")
    if issues:
        return CoherenceAnalysis(False, issues, f"{label} could not be assembled: {'; '.join(issues)}")

    def cell(value, name):
        return _require(value, name, issues, "was unavailable.")

    left: List[Cell] = []
    right: List[Cell] = []
    assoc = cell(bicategory.associator(g, unit, f), "α_{g,1,f}")
    lam = cell(bicategory.left_unitor(f), "λ_f")
    lam_whiskered = cell(bicategory.whisker_right(lam, g), "(id_g ⋆ λ_f)") if lam is not None else None
    if assoc is not None and lam_whiskered is not None:
        left = [assoc, lam_whiskered]
    rho = cell(bicategory.right_unitor(g), "ρ_g")
    rho_whiskered = cell(bicategory.whisker_left(f, rho), "(ρ_g ⋆ id_f)") if rho is not None else None
    if rho_whiskered is not None:
        right = [rho_whiskered]

    return _finish(bicategory, left, right, issues, label)


def analyze_invertible_cell(
    equipment: VirtualEquipment,
    cell: Optional[Cell],
    inverse: Optional[Cell],
    label: str,
) -> AnalysisReport:
    """Both vertical composites exist and run from a frame back to itself."""
    issues: List[str] = []
    if cell is None:
        issues.append(f"{label} was unavailable.")
    if inverse is None:
        issues.append(f"{label} inverse was unavailable.")
    if cell is not None and inverse is not None:
        there_and_back = vertical_compose_cells(equipment, inverse, cell)
        back_and_there = vertical_compose_cells(equipment, cell, inverse)
        if there_and_back is None:
            issues.append(f"{label} followed by its inverse could not be composed.")
        else:
            issues.extend(compare_frames(equipment, there_and_back.target, cell.source, f"{label} round trip"))
        if back_and_there is None:
            issues.append(f"{label} inverse followed by {label} could not be composed.")
        else:
            issues.extend(compare_frames(equipment, back_and_there.target, inverse.source, f"{label} inverse round trip"))
    holds = not issues
    details = f"{label} is invertible." if holds else f"{label} invertibility issues: {'; '.join(issues)}"
    return AnalysisReport(holds, issues, details)


def analyze_left_unitor_invertibility(bicategory: Bicategory, f: Proarrow) -> AnalysisReport:
    inverse = bicategory.left_unitor_inverse(f) if bicategory.left_unitor_inverse is not None else None
    return analyze_invertible_cell(bicategory.equipment, bicategory.left_unitor(f), inverse, "λ_f")


def analyze_right_unitor_invertibility(bicategory: Bicategory, f: Proarrow) -> AnalysisReport:
    inverse = bicategory.right_unitor_inverse(f) if bicategory.right_unitor_inverse is not None else None
    return analyze_invertible_cell(bicategory.equipment, bicategory.right_unitor(f), inverse, "ρ_f")
