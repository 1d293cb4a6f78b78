"""Graph errors."""


class GraphError(Exception):

    """Base class for errors raised by graph operations."""


class EmptyGraphError(GraphError):

    """An operation that needs at least one vertex was called on an empty graph."""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: graph has no vertices")
        self.operation = operation
