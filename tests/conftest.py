# tests/conftest.py
import uuid
from fractions import Fraction

import pytest

from zxsimp.graph.zxgraph import ZXGraph
from zxsimp.utils import EdgeType, VertexType


@pytest.fixture
def unique_graph_id() -> str:
    return f"test_graph_{uuid.uuid4().hex}"


@pytest.fixture(autouse=True)
def _clean_zxsimp_env(monkeypatch):
    for key in ("ZXSIMP_RULES", "ZXSIMP_MAX_ITERATIONS", "ZXSIMP_QUIET"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def circuit_like_graph() -> ZXGraph:
    """
    Two qubit diagram. Each wire carries Z, Z, X spiders between its boundaries,
    the second Z of qubit 0 has a simple edge to the X of qubit 1 and the first
    Z spiders of the two wires share a Hadamard edge.

    Vertex ids: inputs 0, 1; qubit 0: 2, 3, 4; qubit 1: 5, 6, 7; outputs 8, 9.
    """
    g = ZXGraph()
    ins = [g.add_vertex(VertexType.BOUNDARY, qubit=q, row=0) for q in range(2)]
    wires = []
    for q in range(2):
        wires.append([
            g.add_vertex(VertexType.Z, qubit=q, row=1, phase=Fraction(1, 4) if q == 0 else 0),
            g.add_vertex(VertexType.Z, qubit=q, row=2),
            g.add_vertex(VertexType.X, qubit=q, row=3),
        ])
    outs = [g.add_vertex(VertexType.BOUNDARY, qubit=q, row=4) for q in range(2)]
    for q in range(2):
        chain = [ins[q]] + wires[q] + [outs[q]]
        for a, b in zip(chain, chain[1:]):
            g.add_edge((a, b))
    g.add_edge((wires[0][1], wires[1][2]))
    g.add_edge((wires[0][0], wires[1][0]), EdgeType.HADAMARD)
    g.set_inputs(ins)
    g.set_outputs(outs)
    return g
