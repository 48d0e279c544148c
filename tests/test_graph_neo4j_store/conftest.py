# tests/test_graph_neo4j_store/conftest.py
import os

import pytest

from zxsimp.config import Neo4jConfig
from zxsimp.graph.graph_neo4j import GraphNeo4jStore


@pytest.fixture
def neo4j_store_unit(unique_graph_id):
    """
    Unit-test store: DB calls should be mocked per-test.
    """
    store = GraphNeo4jStore(
        uri="bolt://unit-test-does-not-connect",
        user="neo4j",
        password="password",
        graph_id=unique_graph_id,
        database=os.getenv("NEO4J_DATABASE"),
    )
    yield store
    store.close()


@pytest.fixture
def neo4j_store_e2e(unique_graph_id):
    """
    End-to-end store: requires reachable Neo4j; skips if not available.
    """
    config = Neo4jConfig.from_env()
    if not config.is_complete():
        pytest.skip("Neo4j env vars missing (NEO4J_URI/NEO4J_USER/NEO4J_PASSWORD).")

    store = GraphNeo4jStore(graph_id=unique_graph_id)

    # sanity-check connection
    try:
        with store._get_session() as session:
            session.run("RETURN 1").single()
    except Exception as e:
        store.close()
        pytest.skip(f"Neo4j not reachable: {e}")

    yield store

    store.delete()
    store.close()
