"""Tight layer: functors, natural transformations, law checks and sampling."""

from equipment_lab.category import FiniteCategory, layered_random_dag, path_category
from equipment_lab.tight import (
    CatFunctor,
    Functor,
    NatTrans,
    SamplingConfig,
    check_functor_laws,
    compose_functors,
    constant_functor,
    default_tight_layer,
    demote_functor,
    extensional_equality,
    functor_samples,
    horizontal_compose_nat,
    identity_functor,
    identity_nat,
    nat_components_equal,
    promote_functor,
    vertical_compose_nat,
    whisker_left_nat,
    whisker_right_nat,
)


def _collapse_to_star(two_object):
    star = two_object.id("★")
    return Functor(lambda _x: "★", lambda _a: star)


def test_promote_then_demote_reproduces_actions(two_object):
    plain = _collapse_to_star(two_object)
    samples = functor_samples(two_object)
    promoted, report = promote_functor(two_object, two_object, plain, samples, name="K")
    assert report.holds
    assert promoted.source is two_object and promoted.name == "K"
    back = demote_functor(promoted)
    for x in samples.objects:
        assert back.on_obj(x) == plain.on_obj(x)
    for f, g in samples.composable_pairs:
        assert back.on_mor(f) == plain.on_mor(f)
        assert back.on_mor(g) == plain.on_mor(g)


def test_law_check_flags_broken_identity(two_object):
    # objects land on ★ but every arrow lands on id•
    stuck = two_object.id("•")
    broken = Functor(lambda _x: "★", lambda _a: stuck)
    report = check_functor_laws(two_object, two_object, broken, functor_samples(two_object))
    assert not report.preserves_identities
    assert report.preserves_composition
    assert not report.holds
    assert any("identity arrows" in d for d in report.details)


def test_law_check_flags_broken_composition():
    cat = path_category([("a", "b", "p"), ("a", "b", "q"), ("b", "c", "r")])
    pr, qr = sorted(cat.hom("a", "c"), key=lambda m: m.path)
    # endpoints are kept but the composite r.p is sent to r.q
    broken = Functor(lambda x: x, lambda m: qr if m == pr else m)
    report = check_functor_laws(cat, cat, broken, functor_samples(cat))
    assert report.preserves_identities
    assert not report.preserves_composition
    assert any("composition" in d for d in report.details)


def test_sampling_draws_without_replacement_when_large():
    cat = FiniteCategory(layered_random_dag(4, 3, 0.8, p_skip2=0.3, seed=1))
    everything = functor_samples(cat)
    assert len(everything.composable_pairs) == len(cat.composable_pairs())
    cfg = SamplingConfig(max_enumerate_pairs=3, sample_pairs=5, seed=11)
    sampled = functor_samples(cat, cfg)
    assert len(sampled.composable_pairs) == min(5, len(cat.composable_pairs()))
    assert len(set(sampled.composable_pairs)) == len(sampled.composable_pairs)
    again = functor_samples(cat, cfg)
    assert sampled.composable_pairs == again.composable_pairs


def test_compose_functors_is_g_after_f(two_object):
    collapse = constant_functor(two_object, "★")
    ident = identity_functor(two_object)
    gf = compose_functors(collapse, ident)
    assert gf.on_obj("•") == "★"
    assert gf.source is two_object and gf.target is two_object


def test_extensional_equality_ignores_identity_of_objects(two_object):
    a = constant_functor(two_object, "★")
    b = constant_functor(two_object, "★")
    equals = extensional_equality(two_object)
    assert a is not b
    assert equals(a, b)
    assert not equals(a, identity_functor(two_object))


def test_strict_tight_layer_returns_other_functor(two_object):
    ident = identity_functor(two_object)
    layer = default_tight_layer(two_object, ident)
    collapse = constant_functor(two_object, "★")
    assert layer.compose(ident, collapse) is collapse
    assert layer.compose(collapse, ident) is collapse
    assert layer.compose(ident, ident) is ident
    assert layer.tight_equality()(collapse, collapse)
    assert not layer.tight_equality()(collapse, constant_functor(two_object, "★"))


def _unique_nat(two_object, source: CatFunctor, target: CatFunctor) -> NatTrans:
    # the only arrows are identities and f, so components are forced
    return NatTrans(source, target, lambda x: two_object.hom(source.on_obj(x), target.on_obj(x))[0])


def test_natural_transformation_composites(two_object):
    ident = identity_functor(two_object)
    collapse = constant_functor(two_object, "★")
    alpha = _unique_nat(two_object, ident, collapse)
    f = two_object.hom("•", "★")[0]

    assert alpha.components(two_object.objects) == {"•": f, "★": two_object.id("★")}
    assert nat_components_equal(vertical_compose_nat(identity_nat(ident), alpha), alpha, two_object.objects)
    assert nat_components_equal(vertical_compose_nat(alpha, identity_nat(collapse)), alpha, two_object.objects)

    beta = identity_nat(collapse)
    hc = horizontal_compose_nat(alpha, beta)
    # (beta * alpha)_x = beta_{G x} . H(alpha_x) with H = collapse
    assert hc.component("•") == two_object.id("★")

    whiskered_left = whisker_left_nat(collapse, alpha)
    assert whiskered_left.component("•") == alpha.component("★")
    whiskered_right = whisker_right_nat(alpha, collapse)
    assert whiskered_right.component("•") == two_object.id("★")
