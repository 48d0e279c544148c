from fractions import Fraction
from typing import Any, Dict, List, Optional

from neo4j import GraphDatabase

from ..config import Neo4jConfig
from ..utils import EdgeType, VertexType
from .zxgraph import VT, ZXGraph


class GraphNeo4jStore:
    """Keeps ZX-diagrams in a Neo4j database, one diagram per ``graph_id``.

    A diagram is stored as ``(:Node)-[:Wire]->(:Node)`` with one relationship
    per edge instance. Boundary designation is kept as ``:Input``/``:Output``
    labels with an ``io_index`` property that preserves the order.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        graph_id: Optional[str] = None,
        database: Optional[str] = None,
    ):
        config = Neo4jConfig.from_env()
        self.uri = uri if uri is not None else config.uri
        self.user = user if user is not None else config.user
        self.password = password if password is not None else config.password
        self.database = database if database is not None else config.database
        self._driver = None

        self.graph_id = graph_id if graph_id is not None else "graph_" + str(id(self))

    @property
    def driver(self):
        """Create driver only when needed"""
        if self._driver is None:
            self._driver = GraphDatabase.driver(
                self.uri, auth=(self.user, self.password)
            )
        return self._driver

    def _get_session(self):
        if self.database:
            return self.driver.session(database=self.database)
        return self.driver.session()

    def close(self):
        """Explicitly close the driver"""
        if self._driver is not None:
            self._driver.close()
            self._driver = None

    def _phase_to_str(self, phase) -> str:
        if phase is None:
            return "0"
        return str(phase)

    def save(self, g: ZXGraph) -> int:
        """Replaces whatever is stored under ``graph_id`` with ``g``.

        Returns:
            The number of vertices written
        """
        all_vertices = [
            {
                "id": v,
                "t": int(g.type(v)),
                "phase": self._phase_to_str(g.phase(v)),
                "qubit": g.qubit(v),
                "row": g.row(v),
            }
            for v in sorted(g.vertices())
        ]
        all_edges = [{"s": s, "t": t, "et": int(et)} for s, t, et in g.edges()]
        input_ids = [{"id": v, "idx": i} for i, v in enumerate(g.inputs())]
        output_ids = [{"id": v, "idx": i} for i, v in enumerate(g.outputs())]

        graph_id = self.graph_id

        def write_full_graph(tx):
            tx.run(
                "MATCH (n:Node {graph_id: $graph_id}) DETACH DELETE n",
                graph_id=graph_id,
            )

            if all_vertices:
                tx.run(
                    """
                    UNWIND $vertices AS v
                    CREATE (n:Node {
                        graph_id: $graph_id,
                        id: v.id,
                        t: v.t,
                        phase: v.phase,
                        qubit: v.qubit,
                        row: v.row
                    })
                """,
                    graph_id=graph_id,
                    vertices=all_vertices,
                )

            if all_edges:
                tx.run(
                    """
                    UNWIND $edges AS e
                    MATCH (n1:Node {graph_id: $graph_id, id: e.s})
                    MATCH (n2:Node {graph_id: $graph_id, id: e.t})
                    CREATE (n1)-[:Wire {t: e.et}]->(n2)
                """,
                    graph_id=graph_id,
                    edges=all_edges,
                )

            if input_ids:
                tx.run(
                    """
                    UNWIND $ids AS vid
                    MATCH (n:Node {graph_id: $graph_id, id: vid.id})
                    SET n:Input, n.io_index = vid.idx
                """,
                    graph_id=graph_id,
                    ids=input_ids,
                )

            if output_ids:
                tx.run(
                    """
                    UNWIND $ids AS vid
                    MATCH (n:Node {graph_id: $graph_id, id: vid.id})
                    SET n:Output, n.io_index = vid.idx
                """,
                    graph_id=graph_id,
                    ids=output_ids,
                )

        with self._get_session() as session:
            session.execute_write(write_full_graph)

        return len(all_vertices)

    def load(self) -> ZXGraph:
        """Reads the diagram stored under ``graph_id`` into a new :class:`ZXGraph`.

        Vertices get fresh ids in the order of their stored ids.
        """
        node_query = """
        MATCH (n:Node {graph_id: $graph_id})
        RETURN n.id AS id, n.t AS t, n.phase AS phase, n.qubit AS qubit, n.row AS row,
               n:Input AS is_input, n:Output AS is_output, n.io_index AS io_index
        ORDER BY n.id
        """
        wire_query = """
        MATCH (n1:Node {graph_id: $graph_id})-[r:Wire]->(n2:Node {graph_id: $graph_id})
        RETURN n1.id AS s, n2.id AS t, r.t AS et
        """
        with self._get_session() as session:
            nodes: List[Dict[str, Any]] = session.execute_read(
                lambda tx: tx.run(node_query, graph_id=self.graph_id).data()
            )
            wires: List[Dict[str, Any]] = session.execute_read(
                lambda tx: tx.run(wire_query, graph_id=self.graph_id).data()
            )

        g = ZXGraph()
        vmap: Dict[VT, VT] = {}
        inputs = []
        outputs = []
        for rec in nodes:
            v = g.add_vertex(
                VertexType(rec["t"]),
                qubit=rec.get("qubit", -1),
                row=rec.get("row", -1),
                phase=Fraction(rec.get("phase") or "0"),
            )
            vmap[rec["id"]] = v
            if rec.get("is_input"):
                inputs.append((rec.get("io_index") or 0, v))
            if rec.get("is_output"):
                outputs.append((rec.get("io_index") or 0, v))

        for rec in wires:
            g.add_edge((vmap[rec["s"]], vmap[rec["t"]]), EdgeType(rec["et"]))

        g.set_inputs([v for _, v in sorted(inputs)])
        g.set_outputs([v for _, v in sorted(outputs)])
        return g

    def delete(self) -> None:
        """Removes the stored diagram."""
        with self._get_session() as session:
            session.execute_write(
                lambda tx: tx.run(
                    "MATCH (n:Node {graph_id: $graph_id}) DETACH DELETE n",
                    graph_id=self.graph_id,
                )
            )

    def num_vertices(self) -> int:
        query = "MATCH (n:Node {graph_id: $graph_id}) RETURN count(n) AS count"
        with self._get_session() as session:
            result = session.execute_read(
                lambda tx: tx.run(query, graph_id=self.graph_id).single()
            )
        return result["count"] if result else 0
