# tests/test_graph/test_edges.py
from zxsimp.utils import EdgeType, VertexType

from tests.test_graph._base_unittest import GraphUnitTestCase


class TestEdges(GraphUnitTestCase):
    def test_edges_canonical_order(self):
        g = self.g
        a, b, c = self.add_spiders(3)
        g.add_edge((c, a))
        g.add_edge((b, a), EdgeType.HADAMARD)
        g.add_edge((a, b))
        g.add_edge((b, b))

        self.assertEqual(
            list(g.edges()),
            [
                (a, b, EdgeType.SIMPLE),
                (a, b, EdgeType.HADAMARD),
                (a, c, EdgeType.SIMPLE),
                (b, b, EdgeType.SIMPLE),
            ],
        )
        self.assertEqual(list(g.all_edges()), list(g.edges()))

    def test_edges_between_pair(self):
        g = self.g
        a, b, c = self.add_spiders(3)
        g.add_edge((a, b), n=2)
        g.add_edge((b, c))

        self.assertEqual(list(g.edges(b, a)), [(a, b, EdgeType.SIMPLE)] * 2)
        self.assertEqual(list(g.edges(a, c)), [])

    def test_incident_edges(self):
        g = self.g
        a, b = self.add_spiders(2)
        g.add_edge((b, a), EdgeType.HADAMARD)
        g.add_edge((b, b))

        self.assertEqual(
            g.incident_edges(b),
            [(a, b, EdgeType.HADAMARD), (b, b, EdgeType.SIMPLE)],
        )

    def test_num_edges_counts_instances(self):
        g = self.g
        a, b = self.add_spiders(2)
        g.add_edge((a, b), EdgeType.SIMPLE, 3)
        g.add_edge((a, a), EdgeType.HADAMARD, 2)

        self.assertEqual(g.num_edges(), 5)
        self.assertEqual(len(list(g.edges())), 5)
        self.assertEqual(g.stats(), "Graph(2 vertices, 5 edges)")

    def test_copy_is_independent(self):
        g = self.g
        a = g.add_vertex(VertexType.Z, phase=1)
        b = g.add_vertex(VertexType.X)
        g.add_edge((a, b))

        h = g.copy()
        h.add_edge((a, b), EdgeType.HADAMARD)
        h.remove_vertex(b)
        h.check()

        self.assertEqual(g.num_edges(), 1)
        self.assertIn(b, g)
        self.assertEqual(h.phase(a), 1)
        self.assertEqual(h.add_vertex(), g.vindex())
