# tests/test_rules/test_bialgebra.py
from fractions import Fraction

from zxsimp.rules import Bialgebra, apply_delta
from zxsimp.utils import EdgeType, VertexType

from tests.test_rules._base_unittest import RuleUnitTestCase
from tests.test_rules.helpers import make_bialgebra_fixture, random_diagram


class TestBialgebraFixture(RuleUnitTestCase):
    rule_class = Bialgebra

    def setUp(self):
        super().setUp()
        self.fx = make_bialgebra_fixture()
        self.g = self.fx.graph

    def test_fixture_matches_once(self):
        matches = self.rule.match(self.g)

        self.assertEqual(list(matches), [(self.fx.x, self.fx.z)])

    def test_bipartite_law(self):
        g, fx = self.g, self.fx

        self.run_pass()

        self.assertNotIn(fx.x, g)
        self.assertNotIn(fx.z, g)
        for p in fx.ps:
            for q in fx.qs:
                self.assertEqual(g.edge_count(p, q, EdgeType.SIMPLE), 1)
                self.assertEqual(g.edge_count(p, q, EdgeType.HADAMARD), 0)
        self.assertFalse(g.connected(fx.ps[0], fx.ps[1]))
        self.assertFalse(g.connected(fx.qs[0], fx.qs[1]))
        pq_edges = [
            (s, t) for s, t, _ in g.edges()
            if {s, t} & set(fx.ps) and {s, t} & set(fx.qs)
        ]
        self.assertEqual(len(pq_edges), 4)
        # the four boundary wires are untouched
        self.assertEqual(g.num_edges(), 8)
        self.assertEqual(g.inputs(), tuple(fx.boundaries[:2]))

    def test_nonzero_phase_is_excluded(self):
        self.g.set_phase(self.fx.z, Fraction(1, 2))

        self.assertEqual(len(self.rule.match(self.g)), 0)

    def test_nonzero_phase_on_neighbor_is_excluded(self):
        self.g.set_phase(self.fx.qs[1], 1)

        self.assertEqual(len(self.rule.match(self.g)), 0)

    def test_hadamard_edge_is_excluded(self):
        g, fx = self.g, self.fx
        g.remove_edge((fx.x, fx.ps[0], EdgeType.SIMPLE))
        g.add_edge((fx.x, fx.ps[0]), EdgeType.HADAMARD)

        self.assertEqual(len(self.rule.match(g)), 0)

    def test_duplicated_neighbor_is_excluded(self):
        g, fx = self.g, self.fx
        g.add_edge((fx.z, fx.qs[0]))

        self.assertEqual(len(self.rule.match(g)), 0)

    def test_wrong_neighbor_type_is_excluded(self):
        g, fx = self.g, self.fx
        b = g.add_vertex(VertexType.BOUNDARY)
        g.add_edge((fx.x, b))

        self.assertEqual(len(self.rule.match(g)), 0)


class TestBialgebraMatch(RuleUnitTestCase):
    rule_class = Bialgebra

    def test_degree_one_spider_is_excluded(self):
        g = self.g
        x = g.add_vertex(VertexType.X)
        z = g.add_vertex(VertexType.Z)
        q1 = g.add_vertex(VertexType.X)
        q2 = g.add_vertex(VertexType.X)
        g.add_edge((x, z))
        g.add_edge((z, q1))
        g.add_edge((z, q2))

        self.assertEqual(g.degree(x), 1)
        self.assertEqual(len(self.rule.match(g)), 0)

    def test_degree_one_excluded_on_random_diagrams(self):
        for seed in range(25):
            g = random_diagram(seed)
            for v0, v1 in self.rule.match(g):
                self.assertGreaterEqual(g.degree(v0), 2)
                self.assertGreaterEqual(g.degree(v1), 2)

    def test_two_disjoint_patterns_match_together(self):
        first = make_bialgebra_fixture()
        g = first.graph
        offset = g.vindex()
        second = make_bialgebra_fixture()
        vmap = {}
        for v in second.graph.vertices():
            vmap[v] = g.add_vertex(second.graph.type(v))
        for s, t, et in second.graph.edges():
            g.add_edge((vmap[s], vmap[t]), et)
        self.g = g

        matches = self.rule.match(g)

        self.assertEqual(list(matches), [(first.x, first.z), (offset + second.x, offset + second.z)])
        self.assertNonInteracting(matches)
        self.run_pass()
        self.assertEqual(g.num_vertices(), 2 * (10 - 2))

    def test_overlapping_patterns_take_one_per_pass(self):
        g = self.g
        # x0 - z - x1 where z's neighbors are all X spiders and both x's
        # only have z and a Z spider as neighbors
        x0 = g.add_vertex(VertexType.X)
        z = g.add_vertex(VertexType.Z)
        x1 = g.add_vertex(VertexType.X)
        p0 = g.add_vertex(VertexType.Z)
        p1 = g.add_vertex(VertexType.Z)
        g.add_edge((x0, z))
        g.add_edge((z, x1))
        g.add_edge((x0, p0))
        g.add_edge((x1, p1))

        matches = self.rule.match(g)

        self.assertEqual(list(matches), [(x0, z)])
        self.assertNonInteracting(matches)

    def test_non_interaction_on_random_diagrams(self):
        for seed in range(25):
            g = random_diagram(seed, n_vertices=10, n_edges=14)
            matches = self.rule.match(g)
            self.assertNonInteracting(matches)
            apply_delta(g, self.rule.rewrite(g, matches))
            g.check()
