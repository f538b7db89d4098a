from __future__ import annotations

"""Virtual equipment core.

An equipment bundles a tight layer (strict functors and natural
transformations), loose proarrows with partial horizontal composition,
left/right restriction along tight 1-cells, and a calculus of 2-cells
bounded by frames and vertical boundaries.

Every partial operation returns ``None`` when endpoints do not line up;
nothing here raises for a structural mismatch.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from .tight import CatFunctor, TightLayer, default_tight_layer, extensional_equality, identity_functor

O = TypeVar("O")
A = TypeVar("A")
P = TypeVar("P")
E = TypeVar("E")


# ---------------------------------------------------------------------------
# records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Proarrow(Generic[O, P]):
    src: O
    dst: O
    payload: P

    def __repr__(self) -> str:
        return f"Proarrow({self.src} ⇸ {self.dst})"


@dataclass(frozen=True)
class Frame(Generic[O, P]):
    """Un-collapsed horizontal composite, arrows listed in composable order."""

    arrows: Tuple[Proarrow, ...]
    left_boundary: O
    right_boundary: O


@dataclass(frozen=True)
class VerticalBoundary(Generic[O, A]):
    src: O
    dst: O
    tight: A
    details: str = ""


@dataclass(frozen=True)
class TightEvidence:
    cell: Any


@dataclass(frozen=True)
class CartesianEvidence:
    direction: str
    tight: Any
    boundary: VerticalBoundary
    details: str = ""
    cell: Any = None


CellEvidence = Union[TightEvidence, CartesianEvidence]


@dataclass(frozen=True)
class Cell(Generic[O, A, P, E]):
    source: Frame
    target: Frame
    left: VerticalBoundary
    right: VerticalBoundary
    evidence: E


@dataclass(frozen=True)
class CartesianBoundary:
    direction: str
    vertical: VerticalBoundary
    details: str = ""


@dataclass(frozen=True)
class CartesianCell(Cell):
    boundary: CartesianBoundary
    cartesian: bool = True


@dataclass(frozen=True)
class RepresentabilityWitness:
    orientation: str
    tight: Any
    object: Any
    details: str = ""


@dataclass(frozen=True)
class RestrictionResult:
    restricted: Proarrow
    cartesian: CartesianCell
    representability: Optional[RepresentabilityWitness] = None
    details: str = ""


@dataclass(frozen=True)
class AnalysisReport:
    holds: bool
    issues: List[str] = field(default_factory=list)
    details: str = ""


# ---------------------------------------------------------------------------
# the aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ProarrowCalculus:
    identity: Callable[[Any], Proarrow]
    compose: Callable[[Proarrow, Proarrow], Optional[Proarrow]]
    compose_many: Optional[Callable[[Sequence[Proarrow]], Optional[Proarrow]]] = None


@dataclass(frozen=True, eq=False)
class RestrictionCalculus:
    left: Callable[[Any, Proarrow], Optional[RestrictionResult]]
    right: Callable[[Proarrow, Any], Optional[RestrictionResult]]


@dataclass(frozen=True, eq=False)
class CellCalculus:
    identity: Callable[[Frame, VerticalBoundary, VerticalBoundary], Any]
    vertical_compose: Callable[[Cell, Cell], Optional[Any]]
    horizontal_compose: Callable[[Cell, Cell], Optional[Any]]
    whisker_left: Callable[[Frame, Cell], Optional[Any]]
    whisker_right: Callable[[Cell, Frame], Optional[Any]]


@dataclass(frozen=True, eq=False)
class WeakComposition:
    """Optional coherence data; every operator may return None."""

    associator: Optional[Callable[[Proarrow, Proarrow, Proarrow], Optional[Cell]]] = None
    left_unitor: Optional[Callable[[Proarrow], Optional[Cell]]] = None
    right_unitor: Optional[Callable[[Proarrow], Optional[Cell]]] = None
    associator_inverse: Optional[Callable[[Proarrow, Proarrow, Proarrow], Optional[Cell]]] = None
    left_unitor_inverse: Optional[Callable[[Proarrow], Optional[Cell]]] = None
    right_unitor_inverse: Optional[Callable[[Proarrow], Optional[Cell]]] = None


@dataclass(frozen=True, eq=False)
class VirtualEquipment(Generic[O, A, P, E]):
    objects: Tuple[Any, ...]
    tight: TightLayer
    proarrows: ProarrowCalculus
    restrictions: RestrictionCalculus
    cells: Optional[CellCalculus]
    equals_objects: Optional[Callable[[Any, Any], bool]] = None
    weak_composition: Optional[WeakComposition] = None


def default_object_equality(a: Any, b: Any) -> bool:
    return a == b


def object_equality(equipment: VirtualEquipment) -> Callable[[Any, Any], bool]:
    if equipment.equals_objects is not None:
        return equipment.equals_objects
    return default_object_equality


def tight_cell_of(evidence: CellEvidence) -> Optional[Any]:
    """Underlying tight 2-cell of tight evidence; cartesian evidence does not compose."""
    if isinstance(evidence, TightEvidence):
        return evidence.cell
    if isinstance(evidence, CartesianEvidence):
        return None
    raise TypeError(f"Unknown cell evidence: {evidence!r}")


# ---------------------------------------------------------------------------
# proarrows and frames
# ---------------------------------------------------------------------------

def identity_proarrow(equipment: VirtualEquipment, obj: Any) -> Proarrow:
    arrow = equipment.proarrows.identity(obj)
    return replace(arrow, src=obj, dst=obj)


def horizontal_compose_proarrows(equipment: VirtualEquipment, g: Proarrow, f: Proarrow) -> Optional[Proarrow]:
    """g after f, defined only when f ends where g starts."""
    if not object_equality(equipment)(f.dst, g.src):
        return None
    composite = equipment.proarrows.compose(g, f)
    if composite is None:
        return None
    return replace(composite, src=f.src, dst=g.dst)


def horizontal_compose_many_proarrows(equipment: VirtualEquipment, chain: Sequence[Proarrow]) -> Optional[Proarrow]:
    """Collapse a composable chain.

    Tries the equipment's bulk composer first. When there is none, or it
    returns None, folds from the first arrow onward, so [a, b, c] becomes
    c after (b after a).
    """
    arrows = list(chain)
    if not arrows:
        return None
    if len(arrows) == 1:
        return arrows[0]
    if equipment.proarrows.compose_many is not None:
        composed = equipment.proarrows.compose_many(arrows)
        if composed is not None:
            return composed
    acc = arrows[0]
    for nxt in arrows[1:]:
        acc = horizontal_compose_proarrows(equipment, nxt, acc)
        if acc is None:
            return None
    return acc


def frame_from_proarrow(arrow: Proarrow) -> Frame:
    return Frame((arrow,), arrow.src, arrow.dst)


def frame_from_sequence(arrows: Sequence[Proarrow], fallback_left: Any, fallback_right: Any) -> Frame:
    arrows = tuple(arrows)
    if not arrows:
        return Frame((), fallback_left, fallback_right)
    return Frame(arrows, arrows[0].src, arrows[-1].dst)


def juxtapose_identity_proarrows(equipment: VirtualEquipment, obj: Any, count: int) -> Frame:
    """Frame of ``count`` identity proarrows on ``obj``."""
    return frame_from_sequence([identity_proarrow(equipment, obj) for _ in range(count)], obj, obj)


def frames_share_boundaries(equipment: VirtualEquipment, a: Frame, b: Frame) -> bool:
    same = object_equality(equipment)
    return same(a.left_boundary, b.left_boundary) and same(a.right_boundary, b.right_boundary)


def compare_frames(equipment: VirtualEquipment, candidate: Frame, expected: Frame, label: str) -> List[str]:
    """Issues describing where ``candidate`` departs from ``expected``."""
    same = object_equality(equipment)
    issues: List[str] = []
    if not same(candidate.left_boundary, expected.left_boundary):
        issues.append(
            f"{label} left boundary {candidate.left_boundary} differs from expected {expected.left_boundary}."
        )
    if not same(candidate.right_boundary, expected.right_boundary):
        issues.append(
            f"{label} right boundary {candidate.right_boundary} differs from expected {expected.right_boundary}."
        )
    if len(candidate.arrows) != len(expected.arrows):
        issues.append(
            f"{label} should contain {len(expected.arrows)} arrow(s); found {len(candidate.arrows)}."
        )
        return issues
    for i, (got, want) in enumerate(zip(candidate.arrows, expected.arrows)):
        if not (same(got.src, want.src) and same(got.dst, want.dst)):
            issues.append(
                f"{label} arrow #{i} has endpoints {got.src} → {got.dst}; expected {want.src} → {want.dst}."
            )
    return issues


# ---------------------------------------------------------------------------
# vertical boundaries
# ---------------------------------------------------------------------------

def identity_vertical_boundary(equipment: VirtualEquipment, obj: Any, details: Optional[str] = None) -> VerticalBoundary:
    return VerticalBoundary(
        obj,
        obj,
        equipment.tight.identity,
        details if details is not None else "Identity vertical boundary.",
    )


def is_identity_vertical_boundary(equipment: VirtualEquipment, boundary: VerticalBoundary, obj: Any) -> bool:
    same = object_equality(equipment)
    return (
        same(boundary.src, obj)
        and same(boundary.dst, obj)
        and boundary.tight is equipment.tight.identity
    )


def vertical_boundaries_equal(equipment: VirtualEquipment, a: VerticalBoundary, b: VerticalBoundary) -> bool:
    """Same endpoints and literally the same tight 1-cell."""
    same = object_equality(equipment)
    return same(a.src, b.src) and same(a.dst, b.dst) and a.tight is b.tight


def compose_vertical_boundaries(
    equipment: VirtualEquipment,
    lower: VerticalBoundary,
    upper: VerticalBoundary,
) -> Optional[VerticalBoundary]:
    """Stack ``upper`` on top of ``lower``."""
    if not object_equality(equipment)(lower.dst, upper.src):
        return None
    return VerticalBoundary(
        lower.src,
        upper.dst,
        equipment.tight.compose(upper.tight, lower.tight),
        "Vertical composite of boundaries.",
    )


def identity_boundary_issue(equipment: VirtualEquipment, boundary: VerticalBoundary, obj: Any, label: str) -> Optional[str]:
    if is_identity_vertical_boundary(equipment, boundary, obj):
        return None
    return (
        f"{label} should be the identity vertical boundary on {obj}; "
        f"found {boundary.src} → {boundary.dst} instead."
    )


# ---------------------------------------------------------------------------
# 2-cells
# ---------------------------------------------------------------------------

def _require_cells(equipment: VirtualEquipment) -> CellCalculus:
    if equipment.cells is None:
        raise RuntimeError("Equipment cell calculus was never attached.")
    return equipment.cells


def identity_cell(equipment: VirtualEquipment, arrow: Proarrow) -> Cell:
    frame = frame_from_proarrow(arrow)
    left = identity_vertical_boundary(equipment, arrow.src)
    right = identity_vertical_boundary(equipment, arrow.dst)
    evidence = _require_cells(equipment).identity(frame, left, right)
    return Cell(frame, frame, left, right, evidence)


def vertical_compose_cells(equipment: VirtualEquipment, beta: Cell, alpha: Cell) -> Optional[Cell]:
    """beta on top of alpha."""
    if compare_frames(equipment, beta.source, alpha.target, "Vertical interface"):
        return None
    left = compose_vertical_boundaries(equipment, alpha.left, beta.left)
    right = compose_vertical_boundaries(equipment, alpha.right, beta.right)
    if left is None or right is None:
        return None
    evidence = _require_cells(equipment).vertical_compose(beta, alpha)
    if evidence is None:
        return None
    return Cell(alpha.source, beta.target, left, right, evidence)


def horizontal_compose_cells(equipment: VirtualEquipment, beta: Cell, alpha: Cell) -> Optional[Cell]:
    """Place ``alpha`` to the left of ``beta``."""
    same = object_equality(equipment)
    if not same(alpha.source.right_boundary, beta.source.left_boundary):
        return None
    if not same(alpha.target.right_boundary, beta.target.left_boundary):
        return None
    if not vertical_boundaries_equal(equipment, alpha.right, beta.left):
        return None
    source_arrows = alpha.source.arrows + beta.source.arrows
    target_arrows = alpha.target.arrows + beta.target.arrows
    if horizontal_compose_many_proarrows(equipment, source_arrows) is None:
        return None
    if horizontal_compose_many_proarrows(equipment, target_arrows) is None:
        return None
    evidence = _require_cells(equipment).horizontal_compose(beta, alpha)
    if evidence is None:
        return None
    return Cell(
        Frame(source_arrows, alpha.source.left_boundary, beta.source.right_boundary),
        Frame(target_arrows, alpha.target.left_boundary, beta.target.right_boundary),
        alpha.left,
        beta.right,
        evidence,
    )


def whisker_left_cell(equipment: VirtualEquipment, arrow: Proarrow, cell: Cell) -> Optional[Cell]:
    """Prepend ``arrow`` to both frames of ``cell``.

    The cell's left boundary must be the identity where ``arrow`` lands.
    """
    same = object_equality(equipment)
    if not (same(arrow.dst, cell.source.left_boundary) and same(arrow.dst, cell.target.left_boundary)):
        return None
    if not is_identity_vertical_boundary(equipment, cell.left, arrow.dst):
        return None
    source_arrows = (arrow,) + cell.source.arrows
    target_arrows = (arrow,) + cell.target.arrows
    if horizontal_compose_many_proarrows(equipment, source_arrows) is None:
        return None
    if horizontal_compose_many_proarrows(equipment, target_arrows) is None:
        return None
    evidence = _require_cells(equipment).whisker_left(frame_from_proarrow(arrow), cell)
    if evidence is None:
        return None
    return Cell(
        Frame(source_arrows, arrow.src, cell.source.right_boundary),
        Frame(target_arrows, arrow.src, cell.target.right_boundary),
        identity_vertical_boundary(equipment, arrow.src),
        cell.right,
        evidence,
    )


def whisker_right_cell(equipment: VirtualEquipment, cell: Cell, arrow: Proarrow) -> Optional[Cell]:
    """Append ``arrow`` to both frames of ``cell``."""
    same = object_equality(equipment)
    if not (same(arrow.src, cell.source.right_boundary) and same(arrow.src, cell.target.right_boundary)):
        return None
    if not is_identity_vertical_boundary(equipment, cell.right, arrow.src):
        return None
    source_arrows = cell.source.arrows + (arrow,)
    target_arrows = cell.target.arrows + (arrow,)
    if horizontal_compose_many_proarrows(equipment, source_arrows) is None:
        return None
    if horizontal_compose_many_proarrows(equipment, target_arrows) is None:
        return None
    evidence = _require_cells(equipment).whisker_right(cell, frame_from_proarrow(arrow))
    if evidence is None:
        return None
    return Cell(
        Frame(source_arrows, cell.source.left_boundary, arrow.dst),
        Frame(target_arrows, cell.target.left_boundary, arrow.dst),
        cell.left,
        identity_vertical_boundary(equipment, arrow.dst),
        evidence,
    )


# ---------------------------------------------------------------------------
# degenerate equipment on a strict category
# ---------------------------------------------------------------------------

def compose_frame_payloads(tight: TightLayer, frame: Frame) -> CatFunctor:
    acc = tight.identity
    for arrow in frame.arrows:
        acc = tight.compose(arrow.payload, acc)
    return acc


def virtualize_tight_category(
    tight: TightLayer,
    objects: Sequence[Any],
    equals: Optional[Callable[[Any, Any], bool]] = None,
    weak_composition: bool = False,
) -> VirtualEquipment:
    """Degenerate equipment: proarrows carry tight 1-cells, 2-cells carry tight 2-cells.

    A proarrow ``x ⇸ y`` is expected to carry a payload sending ``x`` to ``y``.
    Restriction pre- or post-composes with the requested tight 1-cell and
    reports representability exactly when the restricted proarrow carries
    the identity payload.
    """
    objects = tuple(objects)
    same = equals if equals is not None else default_object_equality

    def identity(obj: Any) -> Proarrow:
        return Proarrow(obj, obj, tight.identity)

    def compose(g: Proarrow, f: Proarrow) -> Optional[Proarrow]:
        return Proarrow(f.src, g.dst, tight.compose(g.payload, f.payload))

    def restrict_left(tight_cell: CatFunctor, arrow: Proarrow) -> Optional[RestrictionResult]:
        if not same(arrow.payload.on_obj(arrow.src), arrow.dst):
            return None
        preimage = None
        for obj in objects:
            if same(tight_cell.on_obj(obj), arrow.src):
                preimage = obj
                break
        if preimage is None:
            return None
        restricted_payload = tight.compose(arrow.payload, tight_cell)
        restricted_to = restricted_payload.on_obj(preimage)
        if not same(restricted_to, arrow.dst):
            return None
        restricted = Proarrow(preimage, restricted_to, restricted_payload)
        left = VerticalBoundary(
            preimage,
            arrow.src,
            tight_cell,
            "Left restriction boundary induced by the supplied tight 1-cell.",
        )
        right = VerticalBoundary(restricted_to, arrow.dst, tight.identity, "Identity boundary on the untouched side.")
        evidence = CartesianEvidence(
            direction="left",
            tight=tight_cell,
            boundary=left,
            details="Left restriction precomposes the loose arrow with the tight 1-cell.",
            cell=tight.identity2(restricted_payload),
        )
        cartesian = CartesianCell(
            frame_from_proarrow(restricted),
            frame_from_proarrow(arrow),
            left,
            right,
            evidence,
            boundary=CartesianBoundary(
                "left",
                left,
                "Left restriction reuses the supplied tight 1-cell as the cartesian boundary witness.",
            ),
        )
        representability = None
        if arrow.payload is tight.identity:
            representability = RepresentabilityWitness(
                "left",
                tight_cell,
                arrow.src,
                "Restricting the identity loose arrow on the left is represented by the tight 1-cell.",
            )
        return RestrictionResult(restricted, cartesian, representability, "Left restriction computed by precomposition.")

    def restrict_right(arrow: Proarrow, tight_cell: CatFunctor) -> Optional[RestrictionResult]:
        if not same(arrow.payload.on_obj(arrow.src), arrow.dst):
            return None
        restricted_payload = tight.compose(tight_cell, arrow.payload)
        restricted_to = restricted_payload.on_obj(arrow.src)
        restricted = Proarrow(arrow.src, restricted_to, restricted_payload)
        left = VerticalBoundary(arrow.src, arrow.src, tight.identity, "Identity boundary on the untouched side.")
        right = VerticalBoundary(
            arrow.dst,
            restricted_to,
            tight_cell,
            "Right restriction boundary induced by the supplied tight 1-cell.",
        )
        evidence = CartesianEvidence(
            direction="right",
            tight=tight_cell,
            boundary=right,
            details="Right restriction postcomposes the loose arrow with the tight 1-cell.",
            cell=tight.identity2(restricted_payload),
        )
        cartesian = CartesianCell(
            frame_from_proarrow(restricted),
            frame_from_proarrow(arrow),
            left,
            right,
            evidence,
            boundary=CartesianBoundary(
                "right",
                right,
                "Right restriction reuses the supplied tight 1-cell as the cartesian boundary witness.",
            ),
        )
        representability = None
        if arrow.payload is tight.identity:
            representability = RepresentabilityWitness(
                "right",
                tight_cell,
                arrow.dst,
                "Restricting the identity loose arrow on the right is represented by the tight 1-cell.",
            )
        return RestrictionResult(restricted, cartesian, representability, "Right restriction computed by postcomposition.")

    def cell_identity(frame: Frame, left: VerticalBoundary, right: VerticalBoundary) -> TightEvidence:
        return TightEvidence(tight.identity2(compose_frame_payloads(tight, frame)))

    def cell_vertical(beta: Cell, alpha: Cell) -> Optional[TightEvidence]:
        lower, upper = tight_cell_of(alpha.evidence), tight_cell_of(beta.evidence)
        if lower is None or upper is None:
            return None
        return TightEvidence(tight.vertical_compose2(lower, upper))

    def cell_horizontal(beta: Cell, alpha: Cell) -> Optional[TightEvidence]:
        first, second = tight_cell_of(alpha.evidence), tight_cell_of(beta.evidence)
        if first is None or second is None:
            return None
        return TightEvidence(tight.horizontal_compose2(first, second))

    def cell_whisker_left(frame: Frame, cell: Cell) -> Optional[TightEvidence]:
        inner = tight_cell_of(cell.evidence)
        if inner is None:
            return None
        return TightEvidence(tight.whisker_left(compose_frame_payloads(tight, frame), inner))

    def cell_whisker_right(cell: Cell, frame: Frame) -> Optional[TightEvidence]:
        inner = tight_cell_of(cell.evidence)
        if inner is None:
            return None
        return TightEvidence(tight.whisker_right(inner, compose_frame_payloads(tight, frame)))

    equipment = VirtualEquipment(
        objects=objects,
        tight=tight,
        proarrows=ProarrowCalculus(identity=identity, compose=compose),
        restrictions=RestrictionCalculus(left=restrict_left, right=restrict_right),
        cells=CellCalculus(
            identity=cell_identity,
            vertical_compose=cell_vertical,
            horizontal_compose=cell_horizontal,
            whisker_left=cell_whisker_left,
            whisker_right=cell_whisker_right,
        ),
        equals_objects=equals,
    )
    if weak_composition:
        equipment = replace(equipment, weak_composition=strict_weak_composition(equipment))
    return equipment


def virtualize_category(
    category: Any,
    objects: Optional[Sequence[Any]] = None,
    equals_objects: Optional[Callable[[Any, Any], bool]] = None,
    weak_composition: bool = False,
) -> VirtualEquipment:
    """Degenerate equipment over the endofunctors of a finite category."""
    tight = default_tight_layer(
        category,
        identity_functor(category),
        equals_1cell=extensional_equality(category),
    )
    if objects is None:
        objects = getattr(category, "objects", ())
    return virtualize_tight_category(tight, objects, equals_objects, weak_composition=weak_composition)


def strict_weak_composition(equipment: VirtualEquipment) -> WeakComposition:
    """Identity associators and unitors for an on-the-nose associative equipment.

    Each coherence cell goes between single-arrow frames holding the two
    bracketings of the same composite.
    """
    tight = equipment.tight

    def coherence_cell(source: Optional[Proarrow], target: Optional[Proarrow]) -> Optional[Cell]:
        if source is None or target is None:
            return None
        if not frames_share_boundaries(equipment, frame_from_proarrow(source), frame_from_proarrow(target)):
            return None
        left = identity_vertical_boundary(equipment, source.src)
        right = identity_vertical_boundary(equipment, source.dst)
        return Cell(
            frame_from_proarrow(source),
            frame_from_proarrow(target),
            left,
            right,
            TightEvidence(tight.identity2(source.payload)),
        )

    def bracketings(h: Proarrow, g: Proarrow, f: Proarrow):
        hg = horizontal_compose_proarrows(equipment, h, g)
        gf = horizontal_compose_proarrows(equipment, g, f)
        if hg is None or gf is None:
            return None, None
        return (
            horizontal_compose_proarrows(equipment, hg, f),
            horizontal_compose_proarrows(equipment, h, gf),
        )

    def associator(h: Proarrow, g: Proarrow, f: Proarrow) -> Optional[Cell]:
        left_bracket, right_bracket = bracketings(h, g, f)
        return coherence_cell(left_bracket, right_bracket)

    def associator_inverse(h: Proarrow, g: Proarrow, f: Proarrow) -> Optional[Cell]:
        left_bracket, right_bracket = bracketings(h, g, f)
        return coherence_cell(right_bracket, left_bracket)

    def left_unitor(f: Proarrow) -> Optional[Cell]:
        return coherence_cell(horizontal_compose_proarrows(equipment, identity_proarrow(equipment, f.dst), f), f)

    def left_unitor_inverse(f: Proarrow) -> Optional[Cell]:
        return coherence_cell(f, horizontal_compose_proarrows(equipment, identity_proarrow(equipment, f.dst), f))

    def right_unitor(f: Proarrow) -> Optional[Cell]:
        return coherence_cell(horizontal_compose_proarrows(equipment, f, identity_proarrow(equipment, f.src)), f)

    def right_unitor_inverse(f: Proarrow) -> Optional[Cell]:
        return coherence_cell(f, horizontal_compose_proarrows(equipment, f, identity_proarrow(equipment, f.src)))

    return WeakComposition(
        associator=associator,
        left_unitor=left_unitor,
        right_unitor=right_unitor,
        associator_inverse=associator_inverse,
        left_unitor_inverse=left_unitor_inverse,
        right_unitor_inverse=right_unitor_inverse,
    )
