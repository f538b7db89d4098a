"""Finite path categories generated by acyclic multigraphs."""

import networkx as nx
import pytest

from equipment_lab.category import Arrow, FiniteCategory, layered_random_dag, path_category


def test_two_object_category_shape(two_object):
    assert two_object.objects == ("•", "★")
    assert len(two_object.arrows) == 3
    assert two_object.hom("•", "★") == [Arrow("•", "★", ("f",))]
    assert two_object.hom("★", "•") == []


def test_identities_are_units(two_object):
    f = two_object.hom("•", "★")[0]
    assert two_object.compose(f, two_object.id("•")) == f
    assert two_object.compose(two_object.id("★"), f) == f
    assert two_object.id("•").is_identity


def test_compose_rejects_mismatched_arrows(two_object):
    f = two_object.hom("•", "★")[0]
    with pytest.raises(ValueError):
        two_object.compose(f, f)


def test_unknown_object_raises(two_object):
    with pytest.raises(ValueError):
        two_object.id("◆")


def test_cyclic_graph_rejected():
    G = nx.MultiDiGraph()
    G.add_edge("a", "b", label="x")
    G.add_edge("b", "a", label="y")
    with pytest.raises(ValueError):
        FiniteCategory(G)


def test_parallel_edges_give_distinct_arrows():
    cat = path_category([("a", "b", "p"), ("a", "b", "q"), ("b", "c", "r")])
    assert len(cat.hom("a", "b")) == 2
    assert {a.path for a in cat.hom("a", "c")} == {("p", "r"), ("q", "r")}


def test_composition_concatenates_paths():
    cat = path_category([("a", "b", "p"), ("b", "c", "r")])
    p, r = cat.hom("a", "b")[0], cat.hom("b", "c")[0]
    assert cat.compose(r, p) == cat.hom("a", "c")[0]


def test_composable_pairs_are_composable(two_object):
    pairs = two_object.composable_pairs()
    assert pairs
    for f, g in pairs:
        assert f.dst == g.src
    # id•, f, id★ : (id•,id•), (id•,f), (f,id★), (id★,id★)
    assert len(pairs) == 4


def test_layered_random_dag_is_seeded_and_acyclic():
    a = layered_random_dag(4, 3, 0.5, p_skip2=0.2, seed=7)
    b = layered_random_dag(4, 3, 0.5, p_skip2=0.2, seed=7)
    assert sorted(a.edges(keys=True)) == sorted(b.edges(keys=True))
    assert a.number_of_nodes() == 12
    assert nx.is_directed_acyclic_graph(a)
    FiniteCategory(a)
