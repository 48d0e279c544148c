"""Conversion between :class:`ZXGraph` and PyZX graphs.

Diagram construction (from circuits, QASM, random generators) is done with
PyZX; these functions move a diagram into the rewrite engine and back.
"""

from fractions import Fraction
from typing import Dict, Optional

import pyzx as zx
from pyzx.graph.base import BaseGraph

from ..utils import EdgeType, VertexType
from .zxgraph import VT, ZXGraph

SUPPORTED_VERTEX_TYPES = (VertexType.BOUNDARY, VertexType.Z, VertexType.X, VertexType.H_BOX)
SUPPORTED_EDGE_TYPES = (EdgeType.SIMPLE, EdgeType.HADAMARD)


def from_pyzx(pg: BaseGraph) -> ZXGraph:
    """Copies a PyZX graph into a new :class:`ZXGraph`.

    Vertices are renumbered in the order ``pg.vertices()`` yields them. Every
    edge yielded by ``pg.edges()`` becomes one edge instance.

    Raises:
        ValueError: for vertex or edge types other than boundary/Z/X/H-box and
            simple/Hadamard, or for symbolic phases
    """
    g = ZXGraph()
    vmap: Dict[VT, VT] = {}
    for v in pg.vertices():
        ty = pg.type(v)
        if ty not in SUPPORTED_VERTEX_TYPES:
            raise ValueError(f"Unsupported vertex type {ty!r} on vertex {v}")
        try:
            phase = Fraction(pg.phase(v))
        except TypeError:
            raise ValueError(f"Vertex {v} has a non-numeric phase {pg.phase(v)!r}")
        vmap[v] = g.add_vertex(ty, qubit=pg.qubit(v), row=pg.row(v), phase=phase)

    for e in pg.edges():
        s, t = pg.edge_st(e)
        et = pg.edge_type(e)
        if et not in SUPPORTED_EDGE_TYPES:
            raise ValueError(f"Unsupported edge type {et!r} on edge {s}-{t}")
        g.add_edge((vmap[s], vmap[t]), et)

    g.set_inputs([vmap[v] for v in pg.inputs()])
    g.set_outputs([vmap[v] for v in pg.outputs()])
    return g


def to_pyzx(g: ZXGraph, backend: Optional[str] = None) -> BaseGraph:
    """Copies ``g`` into a new PyZX graph.

    Parallel edges and self-loops need ``backend='multigraph'``; the default
    simple-graph backend raises ``ValueError`` for them.
    """
    multigraph = backend == 'multigraph'
    if not multigraph:
        for s, t, _ in g.edges():
            if s == t or g.edge_count(s, t) > 1:
                raise ValueError(
                    f"Edge {s}-{t} is a self-loop or parallel edge, use backend='multigraph'")

    pg = zx.Graph(backend)
    if multigraph:
        pg.set_auto_simplify(False)

    vmap: Dict[VT, VT] = {}
    for v in sorted(g.vertices()):
        vmap[v] = pg.add_vertex(g.type(v), qubit=g.qubit(v), row=g.row(v), phase=g.phase(v))
    for s, t, et in g.edges():
        pg.add_edge((vmap[s], vmap[t]), et)

    pg.set_inputs(tuple(vmap[v] for v in g.inputs()))
    pg.set_outputs(tuple(vmap[v] for v in g.outputs()))
    return pg
