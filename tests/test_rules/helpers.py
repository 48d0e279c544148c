import random
from dataclasses import dataclass
from fractions import Fraction
from typing import List, Sequence, Tuple

from zxsimp.graph.zxgraph import ZXGraph
from zxsimp.rules import MatchSet, Rule
from zxsimp.utils import EdgeType, VertexType


@dataclass
class BialgebraFixture:
    graph: ZXGraph
    x: int
    z: int
    ps: List[int]
    qs: List[int]
    boundaries: List[int]


def make_bialgebra_fixture() -> BialgebraFixture:
    """
    X spider x and Z spider z joined by a simple edge. x has the phase-free Z
    neighbors p1, p2 and z has the phase-free X neighbors q1, q2. Every p and q
    has its own boundary.
    """
    g = ZXGraph()
    x = g.add_vertex(VertexType.X)
    z = g.add_vertex(VertexType.Z)
    ps = [g.add_vertex(VertexType.Z) for _ in range(2)]
    qs = [g.add_vertex(VertexType.X) for _ in range(2)]
    boundaries = [g.add_vertex(VertexType.BOUNDARY) for _ in range(4)]

    g.add_edge((x, z))
    for p in ps:
        g.add_edge((x, p))
    for q in qs:
        g.add_edge((z, q))
    for v, b in zip(ps + qs, boundaries):
        g.add_edge((v, b))

    g.set_inputs(boundaries[:2])
    g.set_outputs(boundaries[2:])
    return BialgebraFixture(g, x, z, ps, qs, boundaries)


def make_spider_path(phases: Sequence[Fraction], ty: VertexType = VertexType.Z) -> ZXGraph:
    """A path of spiders of one colour joined by simple edges."""
    g = ZXGraph()
    vs = [g.add_vertex(ty, phase=p) for p in phases]
    for a, b in zip(vs, vs[1:]):
        g.add_edge((a, b))
    return g


def random_diagram(seed: int, n_vertices: int = 14, n_edges: int = 26) -> ZXGraph:
    """A random multigraph with parallel edges, self-loops and mixed edge types."""
    rng = random.Random(seed)
    g = ZXGraph()
    types = [VertexType.Z, VertexType.Z, VertexType.X, VertexType.X,
             VertexType.BOUNDARY, VertexType.H_BOX]
    vs = [
        g.add_vertex(rng.choice(types), phase=rng.choice([0, 0, Fraction(1, 2), 1]))
        for _ in range(n_vertices)
    ]
    for _ in range(n_edges):
        s, t = rng.choice(vs), rng.choice(vs)
        et = EdgeType.SIMPLE if rng.random() < 0.7 else EdgeType.HADAMARD
        g.add_edge((s, t), et)
    return g


def match_participants(rule: Rule, matches: MatchSet) -> List[Tuple[int, ...]]:
    return [tuple(set(rule.participants(m))) for m in matches]
