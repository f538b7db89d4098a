from __future__ import annotations

"""Finite span equipment.

Objects are finite sets given as tuples of element names. A proarrow
X ⇸ Y is a span X <- S -> Y whose apex elements remember the atomic apex
elements they were built from ("leaves"). Composition is the pullback over
matching legs, so it is associative and unital only up to the leaf
bijections used as associators and unitors.

The equipment is built in two phases: the proarrow layer first, then the
cell calculus and weak composition closing over it, then frozen with
``dataclasses.replace``.
"""

import itertools
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .bicategory import Bicategory, bicategory_from_equipment
from .equipment import (
    Cell,
    CellCalculus,
    Frame,
    Proarrow,
    ProarrowCalculus,
    RestrictionCalculus,
    VirtualEquipment,
    WeakComposition,
    frame_from_proarrow,
    horizontal_compose_many_proarrows,
    horizontal_compose_proarrows,
    identity_proarrow,
    identity_vertical_boundary,
)
from .tight import default_tight_layer, identity_functor

FiniteSet = Tuple[str, ...]

_span_ids = itertools.count(1)


def _mint_span_id() -> str:
    return f"span#{next(_span_ids)}"


@dataclass(frozen=True)
class SpanPayload:
    span_id: str
    apex: Tuple[str, ...]
    left_leg: Tuple[int, ...]
    right_leg: Tuple[int, ...]
    leaves: Tuple[Tuple[str, ...], ...]


@dataclass(frozen=True)
class SpanIso:
    """Bijection between apex elements: source index -> target index."""

    mapping: Tuple[int, ...]
    details: str = ""


def create_finite_span(
    domain: FiniteSet,
    codomain: FiniteSet,
    left_leg: Sequence[int],
    right_leg: Sequence[int],
    apex: Optional[Sequence[str]] = None,
) -> Proarrow:
    """Span domain <- apex -> codomain; legs are element indices."""
    left_leg, right_leg = tuple(int(i) for i in left_leg), tuple(int(i) for i in right_leg)
    if len(left_leg) != len(right_leg):
        raise ValueError(f"Span legs must have equal length; got {len(left_leg)} and {len(right_leg)}.")
    if any(i < 0 or i >= len(domain) for i in left_leg):
        raise ValueError("Left leg points outside the domain.")
    if any(i < 0 or i >= len(codomain) for i in right_leg):
        raise ValueError("Right leg points outside the codomain.")
    span_id = _mint_span_id()
    if apex is None:
        apex = [f"s{i}" for i in range(len(left_leg))]
    apex = tuple(apex)
    if len(apex) != len(left_leg):
        raise ValueError("Apex names must match the leg length.")
    leaves = tuple((f"{span_id}:{i}",) for i in range(len(apex)))
    return Proarrow(tuple(domain), tuple(codomain), SpanPayload(span_id, apex, left_leg, right_leg, leaves))


def identity_span(obj: FiniteSet) -> Proarrow:
    n = len(obj)
    leaves = tuple((f"id:{','.join(obj)}:{i}",) for i in range(n))
    payload = SpanPayload(_mint_span_id(), tuple(obj), tuple(range(n)), tuple(range(n)), leaves)
    return Proarrow(tuple(obj), tuple(obj), payload)


def compose_spans(g: Proarrow, f: Proarrow) -> Proarrow:
    """Pullback of f: X ⇸ Y and g: Y ⇸ Z, apex ordered by (f element, g element)."""
    fp, gp = f.payload, g.payload
    apex: List[str] = []
    left: List[int] = []
    right: List[int] = []
    leaves: List[Tuple[str, ...]] = []
    for i in range(len(fp.apex)):
        for j in range(len(gp.apex)):
            if fp.right_leg[i] == gp.left_leg[j]:
                apex.append(f"({fp.apex[i]},{gp.apex[j]})")
                left.append(fp.left_leg[i])
                right.append(gp.right_leg[j])
                leaves.append(fp.leaves[i] + gp.leaves[j])
    payload = SpanPayload(_mint_span_id(), tuple(apex), tuple(left), tuple(right), tuple(leaves))
    return Proarrow(f.src, g.dst, payload)


def build_mapping(source: SpanPayload, target: SpanPayload, ignore_identity: bool = False) -> Optional[Tuple[int, ...]]:
    """Leg-preserving bijection matching apex elements by leaf provenance."""
    if len(source.apex) != len(target.apex):
        return None

    def key(payload: SpanPayload, idx: int):
        leaves = payload.leaves[idx]
        if ignore_identity:
            leaves = tuple(t for t in leaves if not t.startswith("id:"))
        return leaves, payload.left_leg[idx], payload.right_leg[idx]

    buckets: Dict[tuple, List[int]] = {}
    for idx in range(len(target.apex)):
        buckets.setdefault(key(target, idx), []).append(idx)
    mapping: List[int] = []
    for idx in range(len(source.apex)):
        bucket = buckets.get(key(source, idx))
        if not bucket:
            return None
        mapping.append(bucket.pop(0))
    return tuple(mapping)


def _leaf_index(payload: SpanPayload) -> Dict[Tuple[str, ...], int]:
    return {leaves: idx for idx, leaves in enumerate(payload.leaves)}


def _split_mapping(
    source: SpanPayload,
    target: SpanPayload,
    left_source: SpanPayload,
    left_target: SpanPayload,
    left_map: Sequence[int],
    right_source: SpanPayload,
    right_target: SpanPayload,
    right_map: Sequence[int],
) -> Optional[Tuple[int, ...]]:
    """Act by ``left_map`` on the left leaves and ``right_map`` on the right leaves."""
    if not source.apex:
        return () if not target.apex else None
    width = len(left_source.leaves[0]) if left_source.leaves else 0
    left_idx, right_idx, target_idx = _leaf_index(left_source), _leaf_index(right_source), _leaf_index(target)
    mapping: List[int] = []
    for leaves in source.leaves:
        i = left_idx.get(leaves[:width])
        j = right_idx.get(leaves[width:])
        if i is None or j is None:
            return None
        image = left_target.leaves[left_map[i]] + right_target.leaves[right_map[j]]
        t = target_idx.get(image)
        if t is None:
            return None
        mapping.append(t)
    return tuple(mapping)


def _span_cells(base: VirtualEquipment) -> CellCalculus:
    def composite(arrows) -> Optional[SpanPayload]:
        arrow = horizontal_compose_many_proarrows(base, arrows)
        return None if arrow is None else arrow.payload

    def evidence_of(cell: Cell) -> Optional[SpanIso]:
        return cell.evidence if isinstance(cell.evidence, SpanIso) else None

    def identity(frame: Frame, left, right) -> SpanIso:
        payload = composite(frame.arrows)
        n = 0 if payload is None else len(payload.apex)
        return SpanIso(tuple(range(n)), "Identity span bijection.")

    def vertical_compose(beta: Cell, alpha: Cell) -> Optional[SpanIso]:
        upper, lower = evidence_of(beta), evidence_of(alpha)
        if upper is None or lower is None or len(upper.mapping) != len(lower.mapping):
            return None
        return SpanIso(tuple(upper.mapping[i] for i in lower.mapping), "Vertical composite of span bijections.")

    def side(cell: Cell):
        return composite(cell.source.arrows), composite(cell.target.arrows), evidence_of(cell)

    def horizontal_compose(beta: Cell, alpha: Cell) -> Optional[SpanIso]:
        a_src, a_tgt, a_ev = side(alpha)
        b_src, b_tgt, b_ev = side(beta)
        src = composite(alpha.source.arrows + beta.source.arrows)
        tgt = composite(alpha.target.arrows + beta.target.arrows)
        if None in (a_src, a_tgt, a_ev, b_src, b_tgt, b_ev, src, tgt):
            return None
        mapping = _split_mapping(src, tgt, a_src, a_tgt, a_ev.mapping, b_src, b_tgt, b_ev.mapping)
        if mapping is None:
            return None
        return SpanIso(mapping, "Horizontal composite of span bijections.")

    def whisker_left(frame: Frame, cell: Cell) -> Optional[SpanIso]:
        w = composite(frame.arrows)
        c_src, c_tgt, c_ev = side(cell)
        src = composite(frame.arrows + cell.source.arrows)
        tgt = composite(frame.arrows + cell.target.arrows)
        if None in (w, c_src, c_tgt, c_ev, src, tgt):
            return None
        mapping = _split_mapping(src, tgt, w, w, range(len(w.apex)), c_src, c_tgt, c_ev.mapping)
        return None if mapping is None else SpanIso(mapping, "Left whiskered span bijection.")

    def whisker_right(cell: Cell, frame: Frame) -> Optional[SpanIso]:
        w = composite(frame.arrows)
        c_src, c_tgt, c_ev = side(cell)
        src = composite(cell.source.arrows + frame.arrows)
        tgt = composite(cell.target.arrows + frame.arrows)
        if None in (w, c_src, c_tgt, c_ev, src, tgt):
            return None
        mapping = _split_mapping(src, tgt, c_src, c_tgt, c_ev.mapping, w, w, range(len(w.apex)))
        return None if mapping is None else SpanIso(mapping, "Right whiskered span bijection.")

    return CellCalculus(
        identity=identity,
        vertical_compose=vertical_compose,
        horizontal_compose=horizontal_compose,
        whisker_left=whisker_left,
        whisker_right=whisker_right,
    )


def _span_weak_composition(base: VirtualEquipment) -> WeakComposition:
    def iso_cell(source: Optional[Proarrow], target: Optional[Proarrow], ignore_identity: bool, details: str) -> Optional[Cell]:
        if source is None or target is None:
            return None
        mapping = build_mapping(source.payload, target.payload, ignore_identity=ignore_identity)
        if mapping is None:
            return None
        return Cell(
            frame_from_proarrow(source),
            frame_from_proarrow(target),
            identity_vertical_boundary(base, source.src),
            identity_vertical_boundary(base, source.dst),
            SpanIso(mapping, details),
        )

    def bracketings(h: Proarrow, g: Proarrow, f: Proarrow):
        hg = horizontal_compose_proarrows(base, h, g)
        gf = horizontal_compose_proarrows(base, g, f)
        if hg is None or gf is None:
            return None, None
        return horizontal_compose_proarrows(base, hg, f), horizontal_compose_proarrows(base, h, gf)

    def associator(h, g, f):
        src, tgt = bracketings(h, g, f)
        return iso_cell(src, tgt, False, "Associator reassociates leaf provenance.")

    def associator_inverse(h, g, f):
        src, tgt = bracketings(h, g, f)
        return iso_cell(tgt, src, False, "Inverse associator.")

    def unit_left(f):
        return horizontal_compose_proarrows(base, identity_proarrow(base, f.dst), f)

    def unit_right(f):
        return horizontal_compose_proarrows(base, f, identity_proarrow(base, f.src))

    return WeakComposition(
        associator=associator,
        left_unitor=lambda f: iso_cell(unit_left(f), f, True, "Left unitor drops the identity leg."),
        right_unitor=lambda f: iso_cell(unit_right(f), f, True, "Right unitor drops the identity leg."),
        associator_inverse=associator_inverse,
        left_unitor_inverse=lambda f: iso_cell(f, unit_left(f), True, "Inverse left unitor."),
        right_unitor_inverse=lambda f: iso_cell(f, unit_right(f), True, "Inverse right unitor."),
    )


def fold_from_last(chain: Sequence[Proarrow]) -> Optional[Proarrow]:
    """Bulk composer bracketing as a;(b;c): composes from the last arrow backwards."""
    arrows = list(chain)
    if not arrows:
        return None
    acc = arrows[-1]
    for prev in reversed(arrows[:-1]):
        if prev.dst != acc.src:
            return None
        acc = compose_spans(acc, prev)
    return acc


def make_finite_span_equipment(objects: Sequence[FiniteSet], bulk_from_last: bool = False) -> VirtualEquipment:
    objects = tuple(tuple(obj) for obj in objects)
    tight = default_tight_layer("FinSet", identity_functor("FinSet"))
    base = VirtualEquipment(
        objects=objects,
        tight=tight,
        proarrows=ProarrowCalculus(
            identity=identity_span,
            compose=compose_spans,
            compose_many=fold_from_last if bulk_from_last else None,
        ),
        restrictions=RestrictionCalculus(left=lambda tight_cell, arrow: None, right=lambda arrow, tight_cell: None),
        cells=None,
    )
    return replace(base, cells=_span_cells(base), weak_composition=_span_weak_composition(base))


def make_finite_span_bicategory(objects: Sequence[FiniteSet], bulk_from_last: bool = False) -> Bicategory:
    construction = bicategory_from_equipment(make_finite_span_equipment(objects, bulk_from_last))
    if construction.bicategory is None:
        raise RuntimeError(f"Finite span bicategory could not be constructed: {construction.details}")
    return construction.bicategory
