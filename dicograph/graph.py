"""Generic directed graph structure."""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Protocol,
    Set,
    Tuple,
    TypeVar,
)

from dicograph import reduction, render
from dicograph.errors import EmptyGraphError


class Ordered(Protocol):

    """Vertices must be hashable and totally ordered."""

    def __lt__(self, other: Any) -> bool:
        ...

    def __hash__(self) -> int:
        ...


T = TypeVar("T", bound=Ordered)


class Graph(Generic[T]):

    """A directed graph.

    Vertices are objects of type T. The graph is stored as an adjacency mapping
    from each vertex to the set of its successors, so an edge (u, v) exists
    exactly when v is in adjacency[u]. Every endpoint of an edge is a key of the
    mapping (possibly with no successors).

    Scans and output always visit vertices (and successors) in ascending order,
    which makes reductions and rendering deterministic. The to_str function
    converts vertices to text when rendering the graph.
    """

    def __init__(self, to_str: Callable[[T], str] = str):
        self.adjacency: Dict[T, Set[T]] = {}
        self.to_str = to_str

    def __repr__(self) -> str:
        return f"Graph(V={self.num_vertices()}, E={self.num_edges()})"

    def __len__(self) -> int:
        return len(self.adjacency)

    def __contains__(self, u: object) -> bool:
        return u in self.adjacency

    def __iter__(self) -> Iterator[T]:
        """Iterate over a snapshot of the vertices in ascending order."""
        return iter(sorted(self.adjacency))

    def copy(self) -> Graph[T]:
        """Return an independent copy of this graph."""
        other: Graph[T] = Graph(self.to_str)
        other.adjacency = {u: set(s) for u, s in self.adjacency.items()}
        return other

    # Modifiers

    def insert_vertex(self, u: T):
        """Insert u with no successors. Does nothing if u already exists."""
        self.adjacency.setdefault(u, set())

    def insert_edge(self, u: T, v: T):
        """Insert the edge (u, v), inserting the vertices if necessary."""
        self.insert_vertex(u)
        self.insert_vertex(v)
        self.adjacency[u].add(v)

    def remove_vertex(self, u: T):
        """Remove u and every edge into or out of it."""
        if u not in self.adjacency:
            return
        for p in self.predecessors(u):
            self.adjacency[p].discard(u)
        del self.adjacency[u]

    def remove_edge(self, u: T, v: T):
        """Remove the edge (u, v) if it exists. Both vertices are kept."""
        if self.edge(u, v):
            self.adjacency[u].remove(v)

    def remove_edge_pair(self, u: T, v: T):
        """Remove both (u, v) and (v, u) if either of them exists."""
        if self.edge(u, v) or self.edge(v, u):
            self.remove_edge(u, v)
            self.remove_edge(v, u)

    # Characteristics

    def num_vertices(self) -> int:
        return len(self.adjacency)

    def num_edges(self) -> int:
        return sum(len(s) for s in self.adjacency.values())

    def vertices(self) -> List[T]:
        """Return the vertices in ascending order."""
        return sorted(self.adjacency)

    def edges(self) -> Iterator[Tuple[T, T]]:
        """Iterate over all edges (u, v) in ascending order."""
        for u in sorted(self.adjacency):
            for v in sorted(self.adjacency[u]):
                yield u, v

    def predecessors(self, u: T) -> Set[T]:
        """Return all p such that the edge (p, u) exists.

        This scans the whole graph, since only successors are stored.
        """
        return {p for p, s in self.adjacency.items() if u in s}

    def successors(self, u: T) -> Set[T]:
        """Return all s such that the edge (u, s) exists."""
        return set(self.adjacency.get(u, ()))

    def in_degree(self, u: T) -> int:
        return len(self.predecessors(u))

    def out_degree(self, u: T) -> int:
        return len(self.adjacency.get(u, ()))

    def edge(self, u: T, v: T) -> bool:
        """Return true if (u, v) is an edge of the graph."""
        return u in self.adjacency and v in self.adjacency[u]

    # Predicates

    def loop(self, u: T) -> bool:
        """Return true if the edge (u, u) exists."""
        return self.edge(u, u)

    def sink(self, u: T) -> bool:
        """Return true if u has no successors (or is not in the graph)."""
        return self.out_degree(u) == 0

    def bypass(self, u: T) -> bool:
        """Return true if traffic through u can be rewired around it.

        That is the case when u has exactly one successor and some predecessor,
        or exactly one predecessor and some successor.
        """
        out_degree = self.out_degree(u)
        in_degree = self.in_degree(u)
        return (out_degree == 1 and in_degree > 0) or (
            in_degree == 1 and out_degree > 0
        )

    def cyclic(self, u: T, v: T) -> bool:
        """Return true if there is a path from v back to u.

        For an edge (u, v), this means the edge lies on a cycle. Raises
        EmptyGraphError on an empty graph and KeyError if either vertex is
        missing.
        """
        if not self.adjacency:
            raise EmptyGraphError("cyclic")
        for w in (u, v):
            if w not in self.adjacency:
                raise KeyError(w)
        visited = {v}
        stack = [v]
        while stack:
            w = stack.pop()
            if w == u:
                return True
            for s in self.adjacency[w]:
                if s not in visited:
                    visited.add(s)
                    stack.append(s)
        return False

    def acyclic(self, u: T, v: T) -> bool:
        """Return true if no cycle goes through the edge (u, v)."""
        return not self.cyclic(u, v)

    # Reductions

    def basic_reduction(self) -> bool:
        """Remove loops and sinks until there are none left."""
        return reduction.basic_reduction(self)

    def intermediate_reduction(self) -> bool:
        """Remove bypass vertices until there are none left."""
        return reduction.intermediate_reduction(self)

    def advanced_reduction(self) -> bool:
        """Remove acyclic edges until every edge lies on a cycle."""
        return reduction.advanced_reduction(self)

    def graphviz(self) -> str:
        """Return a description of the graph for the dot command."""
        return render.graphviz(self)
