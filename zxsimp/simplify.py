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
Simplification strategies for ZX-diagrams.

Each strategy repeatedly applies one or more rules from :mod:`zxsimp.rules`
until none of them finds a match anymore. The main procedures are
:func:`spider_simp`, :func:`bialg_simp` and :func:`simplify`, which runs a
configurable list of rules round robin.

Example usage:
    from zxsimp.simplify import simplify, Stats

    stats = Stats()
    simplify(g, rules=["spider_fusion", "bialgebra"], quiet=False, stats=stats)
    print(stats)
"""

__all__ = [
    'Stats',
    'simp',
    'spider_simp',
    'self_loop_simp',
    'bialg_simp',
    'simplify',
]

import threading
from typing import Dict, List, Optional, Sequence, Union

from .config import SimplifyConfig
from .graph.zxgraph import ZXGraph
from .rules import Bialgebra, Rule, SelfLoopRemoval, SpiderFusion, apply_rule, get_rule


class Stats:
    """Statistics tracker for rewrite operations."""

    def __init__(self) -> None:
        self.num_rewrites: Dict[str, int] = {}

    def count_rewrites(self, rule: str, n: int) -> None:
        """Record that n rewrites of the given rule were applied."""
        if rule in self.num_rewrites:
            self.num_rewrites[rule] += n
        else:
            self.num_rewrites[rule] = n

    def total(self) -> int:
        return sum(self.num_rewrites.values())

    def __str__(self) -> str:
        s = "REWRITES\n"
        nt = 0
        for r, n in self.num_rewrites.items():
            nt += n
            s += "%s %s\n" % (str(n).rjust(6), r)
        s += "%s TOTAL" % str(nt).rjust(6)
        return s


def simp(
    g: ZXGraph,
    rule: Rule,
    quiet: bool = True,
    stats: Optional[Stats] = None,
    max_iterations: Optional[int] = None,
    stop: Optional[threading.Event] = None,
) -> int:
    """
    Apply ``rule`` to ``g`` pass after pass until a pass finds no matches.

    Every pass is a full match, rewrite and apply cycle, so the graph is always
    in a consistent state between passes.

    Args:
        g: The graph to simplify, modified in place
        rule: The rule to apply
        quiet: If False, print the number of matches of every pass
        stats: Optional statistics tracker
        max_iterations: Stop after this many passes even if matches remain
        stop: Event checked before each pass; once set, no further pass starts

    Returns:
        Number of passes that rewrote at least one match
    """
    num_iterations = 0
    while max_iterations is None or num_iterations < max_iterations:
        if stop is not None and stop.is_set():
            if not quiet:
                print(f"{rule.name}: stopped after {num_iterations} iterations")
            break

        num_rewrites = apply_rule(g, rule)
        if num_rewrites == 0:
            break

        num_iterations += 1
        if num_iterations == 1 and not quiet:
            print(f"{rule.name}: ", end="")
        if not quiet:
            print(num_rewrites, end=". ")
        if stats is not None:
            stats.count_rewrites(rule.name, num_rewrites)

    if not quiet and num_iterations > 0:
        print(f" {num_iterations} iterations")
    return num_iterations


def spider_simp(
    g: ZXGraph,
    quiet: bool = True,
    stats: Optional[Stats] = None,
    stop: Optional[threading.Event] = None,
) -> int:
    """
    Fuse adjacent spiders of the same colour, then clean up the self-loops
    that fusion leaves behind. Repeats until neither rule applies.

    Returns:
        Total number of passes of both rules
    """
    fusion = SpiderFusion()
    loops = SelfLoopRemoval()
    total = 0
    while True:
        i1 = simp(g, fusion, quiet=quiet, stats=stats, stop=stop)
        i2 = simp(g, loops, quiet=quiet, stats=stats, stop=stop)
        total += i1 + i2
        if i2 == 0 or (stop is not None and stop.is_set()):
            break
    return total


def self_loop_simp(g: ZXGraph, quiet: bool = True, stats: Optional[Stats] = None) -> int:
    return simp(g, SelfLoopRemoval(), quiet=quiet, stats=stats)


def bialg_simp(g: ZXGraph, quiet: bool = True, stats: Optional[Stats] = None) -> int:
    return simp(g, Bialgebra(), quiet=quiet, stats=stats)


def simplify(
    g: ZXGraph,
    rules: Optional[Sequence[Union[str, Rule]]] = None,
    quiet: Optional[bool] = None,
    stats: Optional[Stats] = None,
    max_iterations: Optional[int] = None,
    stop: Optional[threading.Event] = None,
) -> int:
    """
    Apply a list of rules round robin until a whole round rewrites nothing.

    Rules may be given as :class:`~zxsimp.rules.Rule` instances or by name.
    Anything left as None is taken from :class:`~zxsimp.config.SimplifyConfig`.

    Returns:
        Total number of rewrites applied
    """
    if rules is None or quiet is None or max_iterations is None:
        config = SimplifyConfig.from_env()
        if rules is None:
            rules = config.rules
        if quiet is None:
            quiet = config.quiet
        if max_iterations is None:
            max_iterations = config.max_iterations
    rule_list: List[Rule] = [get_rule(r) if isinstance(r, str) else r for r in rules]

    local_stats = Stats()
    rounds = 0
    while True:
        rounds += 1
        before = local_stats.total()
        for rule in rule_list:
            simp(g, rule, quiet=quiet, stats=local_stats, max_iterations=max_iterations, stop=stop)
        if local_stats.total() == before or (stop is not None and stop.is_set()):
            break

    if stats is not None:
        for name, n in local_stats.num_rewrites.items():
            stats.count_rewrites(name, n)
    if not quiet:
        print(f"simplify: {local_stats.total()} rewrites in {rounds} rounds")
    return local_stats.total()
