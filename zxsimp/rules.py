# zxsimp - rewrite-rule based simplification of ZX-diagrams
# Copyright (C) 2018 - Aleks Kissinger and John van de Wetering

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#    http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
This module contains the rewrite rules on ZX-diagrams.

Each rule consists of two phases: a matcher and a rewriter.
The matcher finds as many non-overlapping places where the rule can be applied,
and returns them as a :class:`MatchSet`. No two match records of a set share a vertex,
so all of them can be rewritten at once without caring about their order.
The rewriter takes that match set and describes the necessary changes as a
:class:`RewriteDelta` (vertices to remove, edges to remove, edges to add, phases to add)
without touching the graph. The delta is then fed to :func:`apply_delta`.

Dealing with this protocol is done using either :func:`apply_rule` or :func:`zxsimp.simplify.simp`.

Example:
    rule = SpiderFusion()
    matches = rule.match(g)
    if matches:
        apply_delta(g, rule.rewrite(g, matches))
"""

__all__ = [
    'RewriteDelta',
    'MatchSet',
    'Rule',
    'SpiderFusion',
    'Bialgebra',
    'SelfLoopRemoval',
    'apply_delta',
    'apply_rule',
    'get_rule',
    'RULES',
]

from collections import Counter
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, Generic, Iterator, List, Set, Tuple, Type, TypeVar

from .errors import GraphInvariantError, StaleMatchError
from .graph.zxgraph import ET, VT, ZXGraph
from .utils import EdgeType, FractionLike, VertexType, upair, vertex_is_spider

MatchObject = TypeVar('MatchObject')
MatchSpiderType = Tuple[VT, VT]
MatchBialgType = Tuple[VT, VT]
MatchSelfLoopType = VT


@dataclass
class RewriteDelta:
    """The net effect of one rewrite pass.

    ``etab`` maps an unordered vertex pair to ``[n_simple, n_hadamard]``,
    the number of edges of each type to add between the pair.
    ``phases`` maps a vertex to the phase that has to be added to it.
    """

    rem_verts: Set[VT] = field(default_factory=set)
    rem_edges: List[ET] = field(default_factory=list)
    etab: Dict[Tuple[VT, VT], List[int]] = field(default_factory=dict)
    phases: Dict[VT, Fraction] = field(default_factory=dict)

    def remove_vertex(self, v: VT) -> None:
        self.rem_verts.add(v)

    def remove_edge(self, s: VT, t: VT, et: EdgeType, n: int = 1) -> None:
        edge = upair(s, t) + (et,)
        self.rem_edges.extend([edge] * n)

    def add_edges(self, s: VT, t: VT, n_simple: int = 0, n_hadamard: int = 0) -> None:
        if n_simple == 0 and n_hadamard == 0:
            return
        counts = self.etab.setdefault(upair(s, t), [0, 0])
        counts[0] += n_simple
        counts[1] += n_hadamard

    def add_phase(self, v: VT, phase: FractionLike) -> None:
        self.phases[v] = self.phases.get(v, Fraction(0)) + phase

    def is_empty(self) -> bool:
        return not (self.rem_verts or self.rem_edges or self.etab
                    or any(p != 0 for p in self.phases.values()))

    def validate(self, g: ZXGraph) -> None:
        """Checks that the delta can be applied to ``g`` as a whole.

        Raises :class:`GraphInvariantError` if it refers to a vertex or an edge
        that does not exist, or adds edges or phases to a vertex it removes."""
        for v in self.rem_verts:
            if v not in g:
                raise GraphInvariantError(f"Cannot remove vertex {v}: not in the graph")
        for (s, t, et), n in Counter(self.rem_edges).items():
            if s in self.rem_verts or t in self.rem_verts:
                raise GraphInvariantError(f"Edge {s}-{t} is removed together with its endpoint")
            if s not in g or t not in g or g.edge_count(s, t, et) < n:
                raise GraphInvariantError(f"Cannot remove {n} {EdgeType(et).name} edge(s) {s}-{t}")
        for s, t in self.etab:
            for v in (s, t):
                if v not in g:
                    raise GraphInvariantError(f"Edge table refers to missing vertex {v}")
                if v in self.rem_verts:
                    raise GraphInvariantError(f"Edge table refers to removed vertex {v}")
        for v in self.phases:
            if v not in g or v in self.rem_verts:
                raise GraphInvariantError(f"Phase update for missing or removed vertex {v}")


@dataclass(frozen=True)
class MatchSet(Generic[MatchObject]):
    """The result of a single :meth:`Rule.match` call.

    ``graph`` is the uid of the graph the matches were found on and ``version``
    its version at that moment, so a match set can only be rewritten on that
    same graph while it is unchanged."""

    rule: str
    graph: int
    version: int
    matches: Tuple[MatchObject, ...] = ()

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[MatchObject]:
        return iter(self.matches)


class Rule(Generic[MatchObject]):
    """Shared match/rewrite protocol of all simplification rules.

    Subclasses implement :meth:`find_matches` and :meth:`rewrite_match`.
    Bookkeeping of which vertices are taken is local to a single
    :meth:`find_matches` call. The only state kept on the rule is the last
    produced delta, which :meth:`reset` throws away.
    """

    name: str = 'rule'

    def __init__(self) -> None:
        self.delta = RewriteDelta()

    def reset(self) -> None:
        self.delta = RewriteDelta()

    def match(self, g: ZXGraph) -> MatchSet[MatchObject]:
        return MatchSet(self.name, g.uid, g.version, tuple(self.find_matches(g)))

    def rewrite(self, g: ZXGraph, matches: MatchSet[MatchObject]) -> RewriteDelta:
        if matches.rule != self.name:
            raise StaleMatchError(f"Match set of rule '{matches.rule}' given to rule '{self.name}'")
        if matches.graph != g.uid:
            raise StaleMatchError(
                f"Match set was found on graph {matches.graph}, not on graph {g.uid}")
        if matches.version != g.version:
            raise StaleMatchError(
                f"Graph changed since matching (version {matches.version}, now {g.version})")
        self.reset()
        for m in matches:
            self.rewrite_match(g, m, self.delta)
        return self.delta

    def find_matches(self, g: ZXGraph) -> List[MatchObject]:
        raise NotImplementedError

    def rewrite_match(self, g: ZXGraph, m: MatchObject, delta: RewriteDelta) -> None:
        raise NotImplementedError

    @staticmethod
    def participants(m: MatchObject) -> Tuple[VT, ...]:
        """The vertices named by a match record."""
        if isinstance(m, tuple):
            return tuple(m)
        return (m,)  # type: ignore

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _absorb_self_loops(g: ZXGraph, v: VT, target: VT, delta: RewriteDelta) -> None:
    """Moves the self-loops of ``v`` onto ``target``.

    Simple self-loops on a spider are the identity and disappear. Every pair of
    Hadamard self-loops becomes a pi phase on ``target``. An odd Hadamard
    self-loop is left as a single Hadamard self-loop on ``target``."""
    s = g.self_loops(v, EdgeType.SIMPLE)
    h = g.self_loops(v, EdgeType.HADAMARD)
    pairs, rest = divmod(h, 2)
    if pairs:
        delta.add_phase(target, pairs)
    if v == target:
        if s:
            delta.remove_edge(v, v, EdgeType.SIMPLE, s)
        if pairs:
            delta.remove_edge(v, v, EdgeType.HADAMARD, 2 * pairs)
    elif rest:
        delta.add_edges(target, target, 0, rest)


class SpiderFusion(Rule[MatchSpiderType]):
    """Fuses two spiders of the same colour connected by a simple edge."""

    name = 'spider_fusion'

    def find_matches(self, g: ZXGraph) -> List[MatchSpiderType]:
        """Greedy scan over the edges in their canonical order.

        Once ``(v0, v1)`` is accepted, every edge touching ``v0``, ``v1`` or
        one of their neighbors is no longer a candidate."""
        types = g.types()
        taken: Set[VT] = set()
        m: List[MatchSpiderType] = []
        for v0, v1, et in g.edges():
            if v0 in taken or v1 in taken:
                continue
            if et != EdgeType.SIMPLE:
                continue
            if not (types[v0] == types[v1] and vertex_is_spider(types[v0])):
                continue
            m.append((v0, v1))
            taken.update((v0, v1))
            taken.update(g.neighbors(v0))
            taken.update(g.neighbors(v1))
        return m

    def rewrite_match(self, g: ZXGraph, m: MatchSpiderType, delta: RewriteDelta) -> None:
        v0, v1 = m
        if v0 == v1:
            _absorb_self_loops(g, v0, v0, delta)
            return
        delta.add_phase(v0, g.phase(v1))
        for n in g.neighbors(v1):
            if n == v1:
                _absorb_self_loops(g, v1, v0, delta)
            elif n == v0:
                # simple edges between v0 and v1 turn into simple self-loops and vanish
                delta.add_edges(v0, v0, 0, g.edge_count(v0, v1, EdgeType.HADAMARD))
            else:
                delta.add_edges(v0, n,
                                g.edge_count(v1, n, EdgeType.SIMPLE),
                                g.edge_count(v1, n, EdgeType.HADAMARD))
        delta.remove_vertex(v1)


class SelfLoopRemoval(Rule[MatchSelfLoopType]):
    """Removes simple self-loops and pairs of Hadamard self-loops from spiders."""

    name = 'self_loop_removal'

    def find_matches(self, g: ZXGraph) -> List[MatchSelfLoopType]:
        types = g.types()
        m: List[MatchSelfLoopType] = []
        for v in sorted(g.vertices()):
            if not vertex_is_spider(types[v]):
                continue
            if g.self_loops(v, EdgeType.SIMPLE) > 0 or g.self_loops(v, EdgeType.HADAMARD) >= 2:
                m.append(v)
        return m

    def rewrite_match(self, g: ZXGraph, m: MatchSelfLoopType, delta: RewriteDelta) -> None:
        _absorb_self_loops(g, m, m, delta)


class Bialgebra(Rule[MatchBialgType]):
    """Phase-free bialgebra rule on simple edges.

    A Z spider and an X spider connected by a simple edge, whose other neighbors
    are all phase-free spiders of the opposite colour, are replaced by a complete
    bipartite graph between those neighbors."""

    name = 'bialgebra'

    def _is_candidate(self, g: ZXGraph, v0: VT, v1: VT) -> bool:
        types = g.types()
        if g.phase(v0) != 0 or g.phase(v1) != 0:
            return False
        if not ((types[v0] == VertexType.X and types[v1] == VertexType.Z)
                or (types[v0] == VertexType.Z and types[v1] == VertexType.X)):
            return False
        # a spider with a single wire is a ground
        if g.degree(v0) < 2 or g.degree(v1) < 2:
            return False
        for v, other in ((v0, v1), (v1, v0)):
            nbrs = g.neighbors_of(v)
            if any(et != EdgeType.SIMPLE for _, et in nbrs):
                return False
            ids = [n for n, _ in nbrs]
            if len(set(ids)) != len(ids):
                return False
            if not all(types[n] == types[other] and g.phase(n) == 0 for n in ids):
                return False
        return True

    def find_matches(self, g: ZXGraph) -> List[MatchBialgType]:
        taken: Set[VT] = set()
        m: List[MatchBialgType] = []
        for v0, v1, et in g.edges():
            if et != EdgeType.SIMPLE or v0 == v1:
                continue
            if v0 in taken or v1 in taken:
                continue
            if not self._is_candidate(g, v0, v1):
                continue
            m.append((v0, v1))
            taken.update(g.neighbors(v0))
            taken.update(g.neighbors(v1))
        return m

    def rewrite_match(self, g: ZXGraph, m: MatchBialgType, delta: RewriteDelta) -> None:
        v0, v1 = m
        delta.remove_vertex(v0)
        delta.remove_vertex(v1)
        for n0 in g.neighbors(v0):
            if n0 == v1:
                continue
            for n1 in g.neighbors(v1):
                if n1 == v0:
                    continue
                delta.add_edges(n0, n1, 1, 0)


def apply_delta(g: ZXGraph, delta: RewriteDelta) -> None:
    """Applies a rewrite delta to ``g`` in place.

    The delta is validated before anything is changed, so a bad delta raises
    :class:`GraphInvariantError` and leaves the graph untouched."""
    delta.validate(g)
    for v, p in delta.phases.items():
        if p != 0:
            g.add_to_phase(v, p)
    g.remove_edges(delta.rem_edges)
    g.remove_vertices(delta.rem_verts)
    g.add_edge_table(delta.etab)


def apply_rule(g: ZXGraph, rule: Rule) -> int:
    """Runs one match, rewrite and apply pass of ``rule`` on ``g``.

    Returns:
        The number of matches that were rewritten."""
    matches = rule.match(g)
    if len(matches) == 0:
        return 0
    apply_delta(g, rule.rewrite(g, matches))
    return len(matches)


RULES: Dict[str, Type[Rule]] = {
    SpiderFusion.name: SpiderFusion,
    SelfLoopRemoval.name: SelfLoopRemoval,
    Bialgebra.name: Bialgebra,
}


def get_rule(name: str) -> Rule:
    """Returns a fresh instance of the rule registered under ``name``."""
    key = name.strip().lower().replace('-', '_')
    if key not in RULES:
        raise ValueError(f"Unknown rewrite rule: '{name}'. Available rules: {list(RULES)}")
    return RULES[key]()
