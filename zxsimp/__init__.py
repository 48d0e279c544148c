"""Rewrite-rule based simplification of ZX-diagrams."""

__version__ = "0.1.0"

from .errors import GraphInvariantError, StaleMatchError
from .graph.zxgraph import ZXGraph
from .rules import (
    Bialgebra,
    MatchSet,
    RewriteDelta,
    Rule,
    SelfLoopRemoval,
    SpiderFusion,
    apply_delta,
    apply_rule,
    get_rule,
)
from .simplify import Stats, bialg_simp, self_loop_simp, simp, simplify, spider_simp
from .utils import EdgeType, VertexType, normalize_phase
