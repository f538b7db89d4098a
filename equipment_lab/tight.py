from __future__ import annotations

"""Tight layer: functors, natural transformations and the adapter shape the
equipment core consumes.

Conventions:
- ``compose(g, f)`` is "g after f" for arrows and functors alike.
- For ``alpha: F => G`` (C -> D) and ``beta: H => K`` (D -> E) the
  horizontal composite has components ``beta_{G x} . H(alpha_x)``.
- ``whisker_left(F, beta)`` precomposes: ``beta F : G F => H F``.
- ``whisker_right(beta, F)`` postcomposes: ``F beta : F G => F H``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

import numpy as np


@dataclass(frozen=True, eq=False)
class Functor:
    """Plain object/morphism actions, without declared endpoints."""

    on_obj: Callable[[Any], Any]
    on_mor: Callable[[Any], Any]


@dataclass(frozen=True, eq=False)
class CatFunctor:
    """Functor with declared source and target categories.

    Equality is identity; extensional comparison goes through
    :func:`extensional_equality`.
    """

    source: Any
    target: Any
    on_obj: Callable[[Any], Any]
    on_mor: Callable[[Any], Any]
    name: str = "F"

    def __repr__(self) -> str:
        return f"CatFunctor({self.name})"


def identity_functor(category: Any) -> CatFunctor:
    return CatFunctor(category, category, lambda x: x, lambda a: a, name="id")


def constant_functor(category: Any, obj: Hashable) -> CatFunctor:
    """Collapse everything onto ``obj`` and its identity arrow."""
    ident = category.id(obj)
    return CatFunctor(category, category, lambda _x: obj, lambda _a: ident, name=f"const[{obj}]")


def compose_functors(g: CatFunctor, f: CatFunctor) -> CatFunctor:
    """g after f."""
    return CatFunctor(
        f.source,
        g.target,
        lambda x: g.on_obj(f.on_obj(x)),
        lambda a: g.on_mor(f.on_mor(a)),
        name=f"{g.name}.{f.name}",
    )


def extensional_equality(category: Any) -> Callable[[CatFunctor, CatFunctor], bool]:
    """Functor equality by comparing actions on every object and arrow of a finite category."""

    def equals(a: CatFunctor, b: CatFunctor) -> bool:
        if a is b:
            return True
        if all(a.on_obj(x) == b.on_obj(x) for x in category.objects):
            return all(a.on_mor(m) == b.on_mor(m) for m in category.arrows)
        return False

    return equals


# ---------------------------------------------------------------------------
# natural transformations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class NatTrans:
    source: CatFunctor
    target: CatFunctor
    component: Callable[[Any], Any]

    def components(self, objects) -> Dict[Any, Any]:
        return {x: self.component(x) for x in objects}


def identity_nat(functor: CatFunctor) -> NatTrans:
    cat = functor.target
    return NatTrans(functor, functor, lambda x: cat.id(functor.on_obj(x)))


def vertical_compose_nat(alpha: NatTrans, beta: NatTrans) -> NatTrans:
    """beta . alpha for alpha: F => G, beta: G => H."""
    cat = alpha.source.target
    return NatTrans(alpha.source, beta.target, lambda x: cat.compose(beta.component(x), alpha.component(x)))


def horizontal_compose_nat(
    alpha: NatTrans,
    beta: NatTrans,
    compose: Callable[[CatFunctor, CatFunctor], CatFunctor] = compose_functors,
) -> NatTrans:
    cat = beta.target.target
    G = alpha.target
    H = beta.source
    return NatTrans(
        compose(beta.source, alpha.source),
        compose(beta.target, alpha.target),
        lambda x: cat.compose(beta.component(G.on_obj(x)), H.on_mor(alpha.component(x))),
    )


def whisker_left_nat(
    functor: CatFunctor,
    beta: NatTrans,
    compose: Callable[[CatFunctor, CatFunctor], CatFunctor] = compose_functors,
) -> NatTrans:
    return NatTrans(
        compose(beta.source, functor),
        compose(beta.target, functor),
        lambda x: beta.component(functor.on_obj(x)),
    )


def whisker_right_nat(
    beta: NatTrans,
    functor: CatFunctor,
    compose: Callable[[CatFunctor, CatFunctor], CatFunctor] = compose_functors,
) -> NatTrans:
    return NatTrans(
        compose(functor, beta.source),
        compose(functor, beta.target),
        lambda x: functor.on_mor(beta.component(x)),
    )


def nat_components_equal(a: NatTrans, b: NatTrans, objects) -> bool:
    return all(a.component(x) == b.component(x) for x in objects)


# ---------------------------------------------------------------------------
# functor laws
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FunctorSamples:
    objects: Tuple[Any, ...]
    # (f, g) with g composable after f
    composable_pairs: Tuple[Tuple[Any, Any], ...] = ()


@dataclass(frozen=True)
class FunctorLawReport:
    preserves_identities: bool
    preserves_composition: bool
    holds: bool
    details: List[str] = field(default_factory=list)


@dataclass
class SamplingConfig:
    # exhaustive below this many composable pairs, sampled above
    max_enumerate_pairs: int = 4096
    sample_pairs: int = 512

    # random seed
    seed: Optional[int] = 0


def functor_samples(category: Any, cfg: Optional[SamplingConfig] = None) -> FunctorSamples:
    """Objects plus composable pairs of a finite category, enumerated or sampled."""
    if cfg is None:
        cfg = SamplingConfig()
    pairs = category.composable_pairs()
    if len(pairs) > cfg.max_enumerate_pairs:
        rng = np.random.default_rng(cfg.seed)
        n = min(len(pairs), max(1, int(cfg.sample_pairs)))
        idx = rng.choice(len(pairs), size=n, replace=False)
        pairs = [pairs[int(i)] for i in sorted(idx)]
    return FunctorSamples(objects=tuple(category.objects), composable_pairs=tuple(pairs))


def check_functor_laws(source: Any, target: Any, functor: Functor, samples: FunctorSamples) -> FunctorLawReport:
    preserves_identities = all(
        functor.on_mor(source.id(x)) == target.id(functor.on_obj(x)) for x in samples.objects
    )
    preserves_composition = all(
        functor.on_mor(source.compose(g, f)) == target.compose(functor.on_mor(g), functor.on_mor(f))
        for (f, g) in samples.composable_pairs
    )
    details: List[str] = []
    if not preserves_identities:
        details.append("Functor failed to preserve identity arrows for at least one sampled object.")
    if not preserves_composition:
        details.append("Functor failed to preserve composition for at least one sampled arrow pair.")
    return FunctorLawReport(
        preserves_identities=preserves_identities,
        preserves_composition=preserves_composition,
        holds=preserves_identities and preserves_composition,
        details=details,
    )


def promote_functor(
    source: Any,
    target: Any,
    functor: Functor,
    samples: FunctorSamples,
    name: str = "F",
) -> Tuple[CatFunctor, FunctorLawReport]:
    report = check_functor_laws(source, target, functor, samples)
    return CatFunctor(source, target, functor.on_obj, functor.on_mor, name=name), report


def demote_functor(functor: CatFunctor) -> Functor:
    return Functor(functor.on_obj, functor.on_mor)


# ---------------------------------------------------------------------------
# tight layer adapter
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class TightLayer:
    """Fixed shape the equipment core uses to talk to a strict 2-category."""

    category: Any
    identity: CatFunctor
    compose: Callable[[CatFunctor, CatFunctor], CatFunctor]
    identity2: Callable[[CatFunctor], NatTrans]
    vertical_compose2: Callable[[NatTrans, NatTrans], NatTrans]
    horizontal_compose2: Callable[[NatTrans, NatTrans], NatTrans]
    whisker_left: Callable[[CatFunctor, NatTrans], NatTrans]
    whisker_right: Callable[[NatTrans, CatFunctor], NatTrans]
    equals_1cell: Optional[Callable[[CatFunctor, CatFunctor], bool]] = None

    def tight_equality(self) -> Callable[[CatFunctor, CatFunctor], bool]:
        if self.equals_1cell is not None:
            return self.equals_1cell
        return lambda a, b: a is b


def default_tight_layer(
    category: Any,
    identity: CatFunctor,
    compose: Callable[[CatFunctor, CatFunctor], CatFunctor] = compose_functors,
    equals_1cell: Optional[Callable[[CatFunctor, CatFunctor], bool]] = None,
) -> TightLayer:
    """Tight layer over functors and natural transformations.

    Composition is strict: composing with ``identity`` returns the other
    functor itself.
    """

    def compose_strict(g: CatFunctor, f: CatFunctor) -> CatFunctor:
        if g is identity:
            return f
        if f is identity:
            return g
        return compose(g, f)

    return TightLayer(
        category=category,
        identity=identity,
        compose=compose_strict,
        identity2=identity_nat,
        vertical_compose2=vertical_compose_nat,
        horizontal_compose2=lambda alpha, beta: horizontal_compose_nat(alpha, beta, compose_strict),
        whisker_left=lambda functor, beta: whisker_left_nat(functor, beta, compose_strict),
        whisker_right=lambda beta, functor: whisker_right_nat(beta, functor, compose_strict),
        equals_1cell=equals_1cell,
    )
