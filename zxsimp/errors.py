"""Exceptions raised by the graph model and the rewrite rules."""


class GraphInvariantError(AssertionError):
    """The graph or a rewrite delta is in a state that should be impossible.

    Raised for dangling or stale vertex ids, edges that are not present,
    and deltas that reference vertices they also remove. These are logic
    bugs, never transient conditions, so nothing in the package catches them.
    """


class StaleMatchError(ValueError):
    """A match set was handed to a rule that did not produce it, or the graph
    was mutated after the match set was computed."""
