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
In-memory multigraph holding a ZX-diagram.

Vertices are stable integer ids handed out by a counter that never goes
back, so a removed id is never reused during the lifetime of a graph.
Adjacency is stored as ``graph[v][n] -> Edge`` where the same :class:`Edge`
object is registered under both ``graph[v][n]`` and ``graph[n][v]``. The
neighbor relation is therefore symmetric by construction. A self-loop
lives in ``graph[v][v]`` and every loop in it counts once.
"""

import itertools
from fractions import Fraction
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..errors import GraphInvariantError
from ..utils import EdgeType, FloatInt, FractionLike, VertexType, normalize_phase, upair, vertex_is_spider

VT = int
ET = Tuple[int, int, EdgeType]

_graph_ids = itertools.count()


class Edge:
    """Counts of the parallel edges between a single pair of vertices."""

    __slots__ = ('s', 'h')

    def __init__(self, s: int = 0, h: int = 0) -> None:
        self.s = s
        self.h = h

    def count(self, et: EdgeType) -> int:
        return self.s if et == EdgeType.SIMPLE else self.h

    def add(self, et: EdgeType, n: int = 1) -> None:
        if et == EdgeType.SIMPLE:
            self.s += n
        elif et == EdgeType.HADAMARD:
            self.h += n
        else:
            raise ValueError(f"Unsupported edge type: {et!r}")

    def remove(self, et: EdgeType, n: int = 1) -> None:
        if self.count(et) < n:
            raise GraphInvariantError(
                f"Cannot remove {n} {EdgeType(et).name} edge(s), only {self.count(et)} present")
        if et == EdgeType.SIMPLE:
            self.s -= n
        else:
            self.h -= n

    def types(self) -> Iterator[EdgeType]:
        """Yields the type of every edge instance, simple edges first."""
        for _ in range(self.s):
            yield EdgeType.SIMPLE
        for _ in range(self.h):
            yield EdgeType.HADAMARD

    def is_empty(self) -> bool:
        return self.s == 0 and self.h == 0

    def __repr__(self) -> str:
        return f"Edge(s={self.s}, h={self.h})"


class ZXGraph:
    """A ZX-diagram as a typed multigraph with exact phases."""

    backend = 'zxsimp'

    def __init__(self) -> None:
        self.graph: Dict[VT, Dict[VT, Edge]] = dict()
        self.ty: Dict[VT, VertexType] = dict()
        self._phase: Dict[VT, Fraction] = dict()
        self._qindex: Dict[VT, FloatInt] = dict()
        self._rindex: Dict[VT, FloatInt] = dict()
        self._vindex: int = 0
        self._inputs: Tuple[VT, ...] = tuple()
        self._outputs: Tuple[VT, ...] = tuple()
        self._version: int = 0
        self._uid: int = next(_graph_ids)

    def _check_vertex(self, v: VT) -> None:
        if v not in self.graph:
            raise GraphInvariantError(f"Vertex {v} is not in the graph")

    def _touch(self) -> None:
        self._version += 1

    @property
    def version(self) -> int:
        """Increases on every mutation of the graph."""
        return self._version

    @property
    def uid(self) -> int:
        """Identifies this graph instance. A copy gets its own uid."""
        return self._uid

    def __contains__(self, v: object) -> bool:
        return v in self.graph

    def __str__(self) -> str:
        return self.stats()

    def stats(self) -> str:
        return f"Graph({self.num_vertices()} vertices, {self.num_edges()} edges)"

    def copy(self) -> 'ZXGraph':
        """Returns a copy with the same vertex ids."""
        g = ZXGraph()
        g.ty = dict(self.ty)
        g._phase = dict(self._phase)
        g._qindex = dict(self._qindex)
        g._rindex = dict(self._rindex)
        g._vindex = self._vindex
        g._inputs = self._inputs
        g._outputs = self._outputs
        g.graph = {v: dict() for v in self.graph}
        for s, t, e in self._edge_objects():
            ne = Edge(e.s, e.h)
            g.graph[s][t] = ne
            g.graph[t][s] = ne
        return g

    # ==========================================
    # Vertices
    # ==========================================

    def vindex(self) -> int:
        """The id the next added vertex will get."""
        return self._vindex

    def add_vertex(
        self,
        ty: VertexType = VertexType.BOUNDARY,
        qubit: FloatInt = -1,
        row: FloatInt = -1,
        phase: Optional[FractionLike] = None,
    ) -> VT:
        v = self._vindex
        self._vindex += 1
        self.graph[v] = dict()
        self.ty[v] = ty
        self._phase[v] = normalize_phase(phase) if phase is not None else Fraction(0)
        self._qindex[v] = qubit
        self._rindex[v] = row
        self._touch()
        return v

    def add_vertices(self, amount: int) -> List[VT]:
        """Adds ``amount`` boundary vertices and returns their ids."""
        return [self.add_vertex() for _ in range(amount)]

    def remove_vertex(self, v: VT) -> None:
        """Removes ``v`` together with every edge incident to it."""
        self._check_vertex(v)
        for n in self.graph[v]:
            if n != v:
                del self.graph[n][v]
        del self.graph[v]
        del self.ty[v]
        del self._phase[v]
        del self._qindex[v]
        del self._rindex[v]
        if v in self._inputs:
            self._inputs = tuple(i for i in self._inputs if i != v)
        if v in self._outputs:
            self._outputs = tuple(o for o in self._outputs if o != v)
        self._touch()

    def remove_vertices(self, vertices: Iterable[VT]) -> None:
        for v in vertices:
            self.remove_vertex(v)

    def vertices(self) -> List[VT]:
        return list(self.graph)

    def num_vertices(self) -> int:
        return len(self.graph)

    def type(self, v: VT) -> VertexType:
        self._check_vertex(v)
        return self.ty[v]

    def types(self) -> Mapping[VT, VertexType]:
        return self.ty

    def set_type(self, v: VT, t: VertexType) -> None:
        self._check_vertex(v)
        self.ty[v] = t
        self._touch()

    def phase(self, v: VT) -> Fraction:
        """Boundaries and H-boxes always report a zero phase."""
        self._check_vertex(v)
        if not vertex_is_spider(self.ty[v]):
            return Fraction(0)
        return self._phase[v]

    def set_phase(self, v: VT, phase: FractionLike) -> None:
        self._check_vertex(v)
        self._phase[v] = normalize_phase(phase)
        self._touch()

    def add_to_phase(self, v: VT, phase: FractionLike) -> None:
        self.set_phase(v, self.phase(v) + phase)

    def qubit(self, v: VT) -> FloatInt:
        self._check_vertex(v)
        return self._qindex[v]

    def set_qubit(self, v: VT, q: FloatInt) -> None:
        self._check_vertex(v)
        self._qindex[v] = q

    def row(self, v: VT) -> FloatInt:
        self._check_vertex(v)
        return self._rindex[v]

    def set_row(self, v: VT, r: FloatInt) -> None:
        self._check_vertex(v)
        self._rindex[v] = r

    def inputs(self) -> Tuple[VT, ...]:
        return self._inputs

    def set_inputs(self, inputs: Sequence[VT]) -> None:
        for v in inputs:
            self._check_vertex(v)
        self._inputs = tuple(inputs)

    def outputs(self) -> Tuple[VT, ...]:
        return self._outputs

    def set_outputs(self, outputs: Sequence[VT]) -> None:
        for v in outputs:
            self._check_vertex(v)
        self._outputs = tuple(outputs)

    # ==========================================
    # Edges
    # ==========================================

    def add_edge(self, edge_pair: Tuple[VT, VT], edgetype: EdgeType = EdgeType.SIMPLE, n: int = 1) -> ET:
        """Adds ``n`` parallel edges of type ``edgetype`` between the pair,
        which may be the same vertex twice for a self-loop."""
        s, t = edge_pair
        self._check_vertex(s)
        self._check_vertex(t)
        e = self.graph[s].get(t)
        if e is None:
            e = Edge()
            self.graph[s][t] = e
            self.graph[t][s] = e
        e.add(edgetype, n)
        self._touch()
        return upair(s, t) + (edgetype,)

    def add_edges(self, edge_pairs: Iterable[Tuple[VT, VT]], edgetype: EdgeType = EdgeType.SIMPLE) -> None:
        for ep in edge_pairs:
            self.add_edge(ep, edgetype)

    def add_edge_table(self, etab: Mapping[Tuple[VT, VT], Sequence[int]]) -> None:
        """Adds ``etab[(s, t)] == [n_simple, n_hadamard]`` edges for every pair."""
        for (s, t), (ns, nh) in etab.items():
            if ns:
                self.add_edge((s, t), EdgeType.SIMPLE, ns)
            if nh:
                self.add_edge((s, t), EdgeType.HADAMARD, nh)

    def remove_edge(self, edge: ET) -> None:
        """Removes a single instance of the given ``(s, t, type)`` edge."""
        s, t, et = edge
        self._check_vertex(s)
        self._check_vertex(t)
        e = self.graph[s].get(t)
        if e is None:
            raise GraphInvariantError(f"No edge between {s} and {t}")
        e.remove(et)
        if e.is_empty():
            del self.graph[s][t]
            if s != t:
                del self.graph[t][s]
        self._touch()

    def remove_edges(self, edges: Iterable[ET]) -> None:
        for e in edges:
            self.remove_edge(e)

    def _edge_objects(self) -> Iterator[Tuple[VT, VT, Edge]]:
        for v0 in sorted(self.graph):
            adj = self.graph[v0]
            for v1 in sorted(adj):
                if v1 >= v0:
                    yield v0, v1, adj[v1]

    def edges(self, s: Optional[VT] = None, t: Optional[VT] = None) -> Iterator[ET]:
        """Iterates over every edge instance, each parallel edge yielded once.

        The order is canonical: by smallest endpoint, then largest endpoint,
        then simple edges before Hadamard edges. Passing ``s`` and ``t``
        restricts the iteration to edges between that pair."""
        if s is not None and t is not None:
            self._check_vertex(s)
            self._check_vertex(t)
            e = self.graph[s].get(t)
            if e is not None:
                pair = upair(s, t)
                for et in e.types():
                    yield pair + (et,)
            return
        for v0, v1, e in self._edge_objects():
            for et in e.types():
                yield (v0, v1, et)

    all_edges = edges

    def num_edges(self) -> int:
        return sum(e.s + e.h for _, _, e in self._edge_objects())

    def edge_count(self, s: VT, t: VT, et: Optional[EdgeType] = None) -> int:
        """Number of edges between ``s`` and ``t``, optionally of one type only."""
        self._check_vertex(s)
        self._check_vertex(t)
        e = self.graph[s].get(t)
        if e is None:
            return 0
        if et is None:
            return e.s + e.h
        return e.count(et)

    def connected(self, s: VT, t: VT) -> bool:
        self._check_vertex(s)
        return t in self.graph[s]

    def self_loops(self, v: VT, et: Optional[EdgeType] = None) -> int:
        return self.edge_count(v, v, et)

    def neighbors_of(self, v: VT) -> List[Tuple[VT, EdgeType]]:
        """The neighbor multiset of ``v`` as ``(neighbor, edge type)`` pairs,
        one entry per edge instance. A self-loop contributes ``(v, type)`` once."""
        self._check_vertex(v)
        return [(n, et) for n in sorted(self.graph[v]) for et in self.graph[v][n].types()]

    def neighbors(self, v: VT) -> List[VT]:
        """Distinct neighbors of ``v``, including ``v`` itself when it has a self-loop."""
        self._check_vertex(v)
        return sorted(self.graph[v])

    def incident_edges(self, v: VT) -> List[ET]:
        return [upair(v, n) + (et,) for n, et in self.neighbors_of(v)]

    def degree(self, v: VT) -> int:
        self._check_vertex(v)
        return sum(e.s + e.h for e in self.graph[v].values())

    def check(self) -> None:
        """Audits the whole structure and raises :class:`GraphInvariantError`
        on the first inconsistency found."""
        for v, adj in self.graph.items():
            if v not in self.ty or v not in self._phase:
                raise GraphInvariantError(f"Vertex {v} has no vertex data")
            for n, e in adj.items():
                if n not in self.graph:
                    raise GraphInvariantError(f"Vertex {v} refers to removed neighbor {n}")
                if self.graph[n].get(v) is not e:
                    raise GraphInvariantError(f"Edge {v}-{n} is not symmetric")
                if e.is_empty():
                    raise GraphInvariantError(f"Edge {v}-{n} has no instances left")
        for v in self._inputs + self._outputs:
            if v not in self.graph:
                raise GraphInvariantError(f"Boundary vertex {v} is not in the graph")
