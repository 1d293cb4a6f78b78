"""Reference scenario for checking the reductions end to end."""

import logging
from typing import Callable, List, Tuple

from dicograph.graph import Graph

REFERENCE_EDGES = {
    0: [5],
    1: [0, 2, 6, 7],
    3: [2, 4, 8, 9],
    4: [10, 13],
    5: [1],
    6: [11],
    7: [3],
    8: [13],
    9: [13],
    10: [4],
    11: [5, 7, 11, 12],
    12: [7, 13],
}

FIRST_EDGES = [
    (0, 5),
    (1, 0),
    (1, 7),
    (3, 4),
    (4, 10),
    (5, 1),
    (7, 3),
    (10, 4),
    (12, 7),
]
FINAL_EDGES = [(0, 5), (1, 0), (5, 1)]


def reference_graph() -> Graph[int]:
    """Return the 14-vertex reference graph."""
    graph: Graph[int] = Graph()
    for i in range(14):
        graph.insert_vertex(i)
    for u, successors in REFERENCE_EDGES.items():
        for v in successors:
            graph.insert_edge(u, v)
    return graph


def run_selftest() -> int:
    """Run the reference scenario and return the number of failed checks.

    One basic reduction must leave 8 vertices and 9 edges. Removing the edge
    (4, 10) and reducing again must leave the 3-cycle 0 -> 5 -> 1 -> 0.
    """
    graph = reference_graph()
    checks: List[Tuple[str, Callable[[], bool]]] = []

    def has_edges(edges: List[Tuple[int, int]]) -> Callable[[], bool]:
        return lambda: all(graph.edge(u, v) for u, v in edges)

    graph.basic_reduction()
    checks.append(("I", lambda: graph.num_vertices() == 8))
    checks.append(("II", lambda: graph.num_edges() == 9))
    checks.append(("III", has_edges(FIRST_EDGES)))
    errors = count_failures(checks)

    graph.remove_edge(4, 10)
    graph.basic_reduction()
    checks = [
        ("IV", lambda: graph.num_vertices() == 3),
        ("V", lambda: graph.num_edges() == 3),
        ("VI", has_edges(FINAL_EDGES)),
    ]
    errors += count_failures(checks)

    if errors == 0:
        print("\t==> OK")
    return errors


def count_failures(checks: List[Tuple[str, Callable[[], bool]]]) -> int:
    errors = 0
    for label, check in checks:
        if not check():
            logging.error("FAILURE - %s", label)
            errors += 1
    return errors
