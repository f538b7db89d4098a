from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Tuple

import networkx as nx
import numpy as np


@dataclass(frozen=True)
class Arrow:
    """A morphism of a path category: a path of edge labels from src to dst."""

    src: Hashable
    dst: Hashable
    path: Tuple[str, ...] = ()

    @property
    def is_identity(self) -> bool:
        return len(self.path) == 0

    def __repr__(self) -> str:
        if self.is_identity:
            return f"id[{self.src}]"
        return f"{self.src}-{'.'.join(self.path)}->{self.dst}"


class FiniteCategory:
    """Free (path) category on a finite acyclic multigraph.

    Objects are the nodes; arrows are directed edge paths, labelled by the
    edge attribute ``label`` (falling back to the edge key). Identities are
    empty paths. Acyclicity keeps the arrow set finite.
    """

    def __init__(self, graph: nx.MultiDiGraph, name: str = "C"):
        if not nx.is_directed_acyclic_graph(graph):
            raise ValueError("Path categories require an acyclic generating graph.")
        self.name = name
        self.graph = graph
        self.objects: Tuple[Hashable, ...] = tuple(graph.nodes())
        self._hom: Dict[Tuple[Hashable, Hashable], List[Arrow]] = {}
        for u in self.objects:
            self._hom[(u, u)] = [Arrow(u, u)]
        for u in self.objects:
            for v in self.objects:
                if u == v:
                    continue
                paths = []
                for edge_path in nx.all_simple_edge_paths(graph, u, v):
                    paths.append(Arrow(u, v, tuple(self._label(e) for e in edge_path)))
                self._hom[(u, v)] = sorted(paths, key=lambda a: a.path)
        self.arrows: Tuple[Arrow, ...] = tuple(a for key in self._hom for a in self._hom[key])

    def _label(self, edge: Tuple) -> str:
        u, v, k = edge
        label = self.graph.edges[u, v, k].get("label")
        return str(label) if label is not None else f"{u}>{v}#{k}"

    def id(self, obj: Hashable) -> Arrow:
        if obj not in self.graph:
            raise ValueError(f"Unknown object: {obj!r}")
        return Arrow(obj, obj)

    def src(self, arrow: Arrow) -> Hashable:
        return arrow.src

    def dst(self, arrow: Arrow) -> Hashable:
        return arrow.dst

    def compose(self, g: Arrow, f: Arrow) -> Arrow:
        """g after f."""
        if f.dst != g.src:
            raise ValueError(f"Cannot compose {g!r} after {f!r}: codomain/domain mismatch.")
        return Arrow(f.src, g.dst, f.path + g.path)

    def hom(self, a: Hashable, b: Hashable) -> List[Arrow]:
        return list(self._hom.get((a, b), []))

    def composable_pairs(self) -> List[Tuple[Arrow, Arrow]]:
        """All (f, g) with dst(f) == src(g)."""
        out = []
        for f in self.arrows:
            for g in self.arrows:
                if f.dst == g.src:
                    out.append((f, g))
        return out

    def __repr__(self) -> str:
        return f"FiniteCategory({self.name}, objects={len(self.objects)}, arrows={len(self.arrows)})"


def path_category(edges: List[Tuple[Hashable, Hashable, str]], objects: Optional[List[Hashable]] = None,
                  name: str = "C") -> FiniteCategory:
    """Build a path category from labelled edges (u, v, label)."""
    G = nx.MultiDiGraph()
    if objects is not None:
        G.add_nodes_from(objects)
    for u, v, label in edges:
        G.add_edge(u, v, label=label)
    return FiniteCategory(G, name=name)


def two_object_category() -> FiniteCategory:
    """{•, ★} with a single non-identity arrow • → ★."""
    return path_category([("•", "★", "f")], objects=["•", "★"], name="TwoObject")


def layered_random_dag(
    n_layers: int,
    layer_size: int,
    p_forward: float,
    p_skip2: float = 0.0,
    seed: Optional[int] = None,
) -> nx.MultiDiGraph:
    """Layered DAG used as a generating graph for random path categories.

    Nodes are labeled by integer id = layer*layer_size + i.

    Edges:
    - forward:  ℓ -> ℓ+1 with prob p_forward
    - skip2:    ℓ -> ℓ+2 with prob p_skip2
    """
    rng = np.random.default_rng(seed)
    n = n_layers * layer_size
    G = nx.MultiDiGraph()
    G.add_nodes_from(range(n))

    def nid(layer: int, i: int) -> int:
        return layer * layer_size + i

    for layer in range(n_layers):
        for i in range(layer_size):
            u = nid(layer, i)
            if layer + 1 < n_layers:
                for j in range(layer_size):
                    if rng.random() < p_forward:
                        v = nid(layer + 1, j)
                        G.add_edge(u, v, label=f"e{u}_{v}")
            if p_skip2 > 0 and layer + 2 < n_layers:
                for j in range(layer_size):
                    if rng.random() < p_skip2:
                        v = nid(layer + 2, j)
                        G.add_edge(u, v, label=f"s{u}_{v}")
    return G
