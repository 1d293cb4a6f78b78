"""Fixpoint reductions of directed graphs.

Each reduction repeatedly finds an instance of a structural pattern and removes
it, until no instance is left. They all return True if they changed the graph at
least once, and raise EmptyGraphError when called on a graph with no vertices.

* basic: remove vertices that are loops or sinks.
* intermediate: remove bypass vertices, rewiring their neighbors directly.
* advanced: remove edges that do not lie on any cycle.

Removing a loop or sink can never turn another loop or sink into something
else, and removing an acyclic edge never breaks a cycle, so the basic and
advanced reductions remove everything found in a scan before scanning again.
The intermediate reduction is order-dependent: it always rewires the first
bypass vertex and then scans again from the start.
"""

from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)

from dicograph.errors import EmptyGraphError

if TYPE_CHECKING:
    # pylint: disable=cyclic-import
    from dicograph.graph import Graph

# Any value can be a vertex, so "no vertex" needs its own marker.
NOT_FOUND = object()


def require_vertices(graph: Graph, operation: str):
    """Raise EmptyGraphError if graph has no vertices."""
    if graph.num_vertices() == 0:
        raise EmptyGraphError(operation)


def basic_reduction(graph: Graph) -> bool:
    """Remove loops and sinks until there are none left."""
    require_vertices(graph, "basic_reduction")
    applied = False
    while True:
        doomed = [u for u in graph if graph.loop(u) or graph.sink(u)]
        if not doomed:
            return applied
        logging.debug("basic reduction: removing %d vertices", len(doomed))
        for u in doomed:
            graph.remove_vertex(u)
        applied = True


def intermediate_reduction(graph: Graph) -> bool:
    """Remove bypass vertices until there are none left.

    If the bypass vertex u has a single successor s, every predecessor p gets an
    edge (p, s). Otherwise it has a single predecessor p, and every successor s
    gets an edge (p, s). Then u is removed.
    """
    require_vertices(graph, "intermediate_reduction")
    applied = False
    while True:
        u = _first_bypass(graph)
        if u is NOT_FOUND:
            return applied
        successors = graph.successors(u)
        predecessors = graph.predecessors(u)
        if len(successors) == 1 and predecessors:
            (s,) = successors
            for p in sorted(predecessors):
                graph.insert_edge(p, s)
        else:
            (p,) = predecessors
            for s in sorted(successors):
                graph.insert_edge(p, s)
        logging.debug("intermediate reduction: bypassing %r", u)
        graph.remove_vertex(u)
        applied = True


def _first_bypass(graph: Graph):
    """Return the first non-loop bypass vertex, or NOT_FOUND if there is none."""
    # Mirrors Graph.bypass, with all in-degrees counted in one scan.
    in_degrees: Dict = {u: 0 for u in graph.adjacency}
    for successors in graph.adjacency.values():
        for s in successors:
            in_degrees[s] += 1
    for u in graph:
        if graph.loop(u):
            continue
        out_degree = graph.out_degree(u)
        in_degree = in_degrees[u]
        if (out_degree == 1 and in_degree > 0) or (
            in_degree == 1 and out_degree > 0
        ):
            return u
    return NOT_FOUND


def advanced_reduction(graph: Graph) -> bool:
    """Remove acyclic edges until every edge lies on a cycle."""
    require_vertices(graph, "advanced_reduction")
    applied = False
    while True:
        removed = 0
        for u, v in list(graph.edges()):
            if graph.edge(u, v) and graph.acyclic(u, v):
                graph.remove_edge(u, v)
                removed += 1
        if not removed:
            return applied
        logging.debug("advanced reduction: removed %d edges", removed)
        applied = True


PASSES: Dict[str, Callable[[Graph], bool]] = {
    "basic": basic_reduction,
    "intermediate": intermediate_reduction,
    "advanced": advanced_reduction,
}


class ReductionReport(NamedTuple):

    """Outcome of reduce_graph."""

    # Number of rounds run (each round runs every pass once).
    rounds: int
    # For each pass, the number of rounds in which it changed the graph.
    changed: Dict[str, int]
    # Vertex and edge counts before and after.
    before: Tuple[int, int]
    after: Tuple[int, int]


def reduce_graph(
    graph: Graph,
    passes: Sequence[str] = ("basic",),
    max_rounds: Optional[int] = None,
) -> ReductionReport:
    """Run the named passes in order until none of them changes the graph.

    Stops early if the graph becomes empty (the reductions are not defined on
    an empty graph) or after max_rounds rounds. Raises ValueError for unknown
    pass names.
    """
    unknown = [name for name in passes if name not in PASSES]
    if unknown:
        raise ValueError(f"unknown reduction pass: {', '.join(unknown)}")
    before = (graph.num_vertices(), graph.num_edges())
    changed = {name: 0 for name in passes}
    rounds = 0
    progress = True
    while progress and graph.num_vertices() > 0:
        if max_rounds is not None and rounds >= max_rounds:
            logging.info("stopping after %d rounds", rounds)
            break
        rounds += 1
        progress = False
        for name in passes:
            if PASSES[name](graph):
                changed[name] += 1
                progress = True
                logging.debug("round %d: %s reduction -> %r", rounds, name, graph)
            if graph.num_vertices() == 0:
                logging.info("graph is empty after %s reduction", name)
                break
    after = (graph.num_vertices(), graph.num_edges())
    logging.info(
        "reduced %d vertices/%d edges to %d/%d in %d rounds",
        *before,
        *after,
        rounds,
    )
    return ReductionReport(rounds, changed, before, after)
