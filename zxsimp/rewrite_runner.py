"""
Rewrite runner for ZX-diagram rules

Run the registered rewrite rules on a :class:`~zxsimp.graph.zxgraph.ZXGraph` with:
- Run individual rewrites or sequences of rules
- Performance timing for each pass
- Result collection and statistics

Example usage:
    from zxsimp.rewrite_runner import run_rewrite, run_rewrites

    # Run a single pass of one rule
    count, elapsed = run_rewrite(g, "spider_fusion")

    # Run multiple rules
    results = run_rewrites(
        g,
        rules=["spider_fusion", "bialgebra"],
        measure_time=True,
    )
"""

import time
from typing import Any, Dict, List, Optional, Tuple

from .graph.zxgraph import ZXGraph
from .rules import RULES, Rule, apply_rule, get_rule


def list_available_rules() -> List[str]:
    """
    List all available rewrite rule names.

    Returns:
        List of rule names that can be used with run_rewrite()
    """
    return list(RULES)


def run_rewrite(
    g: ZXGraph,
    rule_name: str,
    measure_time: bool = True,
    quiet: bool = True,
) -> Tuple[int, Optional[float]]:
    """
    Execute a single match/rewrite/apply pass of a rule on the graph.

    Args:
        g: Graph to rewrite, modified in place
        rule_name: Name of the rewrite rule (e.g., 'spider_fusion')
        measure_time: If True, measure and return execution time
        quiet: If False, print execution details

    Returns:
        Tuple of (count, elapsed_seconds) where:
        - count: Number of matches rewritten in this pass
        - elapsed_seconds: Execution time (or None if measure_time=False)

    Raises:
        ValueError: If rule_name is not a registered rule

    Example:
        count, elapsed = run_rewrite(g, "spider_fusion")
        print(f"Applied {count} spider fusions in {elapsed:.3f}s")
    """
    rule = get_rule(rule_name)

    start = time.perf_counter() if measure_time else 0.0
    count = apply_rule(g, rule)
    elapsed = (time.perf_counter() - start) if measure_time else None

    if not quiet:
        print(f"Rule '{rule.name}': {count} rewrites applied", end="")
        if elapsed is not None:
            print(f" ({elapsed:.3f}s)")
        else:
            print()

    return (count, elapsed)


def run_rewrites(
    g: ZXGraph,
    rules: Optional[List[str]] = None,
    measure_time: bool = True,
    quiet: bool = False,
) -> List[Dict[str, Any]]:
    """
    Execute one pass of each of several rules sequentially on a graph.

    This is useful for simplification passes and performance benchmarking.
    A rule that cannot be run (unknown name) is recorded as failed and the
    remaining rules still run.

    Args:
        g: Graph to rewrite
        rules: List of rule names to apply (default: all available rules)
        measure_time: If True, measure execution time for each rule
        quiet: If False, print progress information

    Returns:
        List of dictionaries with keys:
        - 'rule': Rule name
        - 'count': Number of rewrites applied
        - 'elapsed_sec': Execution time (or None if measure_time=False)
        - 'success': True if execution succeeded
        - 'error': The error message, only present on failure
    """
    rule_list = rules or list_available_rules()

    if not quiet:
        print(f"Running {len(rule_list)} rewrite rules on {g.stats()}...")

    results = []
    for rule_name in rule_list:
        try:
            count, elapsed = run_rewrite(
                g,
                rule_name,
                measure_time=measure_time,
                quiet=quiet,
            )
            results.append({
                "rule": rule_name,
                "count": count,
                "elapsed_sec": elapsed,
                "success": True,
            })
        except ValueError as e:
            if not quiet:
                print(f"Error running rule '{rule_name}': {e}")
            results.append({
                "rule": rule_name,
                "count": None,
                "elapsed_sec": None,
                "success": False,
                "error": str(e),
            })

    if not quiet:
        successful = sum(1 for r in results if r.get("success") is True)
        total_count = sum(r["count"] or 0 for r in results if r.get("success") is True)
        print(f"Completed: {successful}/{len(rule_list)} rules, {total_count} total rewrites")

    return results


def run_rewrite_until_complete(
    g: ZXGraph,
    rule_name: str,
    max_iterations: int = 100,
    quiet: bool = True,
) -> Tuple[int, int]:
    """
    Repeatedly apply a rewrite rule until no more matches are found.

    Args:
        g: Graph to rewrite
        rule_name: Name of the rewrite rule to apply
        max_iterations: Maximum number of passes to prevent infinite loops
        quiet: If False, print progress information

    Returns:
        Tuple of (total_rewrites, passes), where passes counts only the
        passes that rewrote something

    Example:
        total, passes = run_rewrite_until_complete(g, "spider_fusion")
        print(f"Applied {total} spider fusions in {passes} passes")
    """
    rule: Rule = get_rule(rule_name)
    if not quiet:
        print(f"Applying rule '{rule.name}' until completion...")

    total_rewrites = 0
    passes = 0

    for iteration in range(1, max_iterations + 1):
        count = apply_rule(g, rule)
        if count == 0:
            break

        total_rewrites += count
        passes = iteration

        if not quiet:
            print(f"  Iteration {iteration}: {count} rewrites")

    if not quiet:
        print(f"Completed after {passes} passes: {total_rewrites} total rewrites")

    return (total_rewrites, passes)
