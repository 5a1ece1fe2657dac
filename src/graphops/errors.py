"""
Exceptions raised by the graph algorithms and storage backends.
"""


class GraphError(Exception):
    """Base class for all errors raised by graphops."""


class InvalidIndexError(GraphError, IndexError):
    def __init__(self, index, num_vertices: int):
        self.index = index
        self.num_vertices = num_vertices
        super().__init__(
            f"Vertex index {index} is out of range for a graph with {num_vertices} vertices."
        )


class EdgeNotFoundError(GraphError, KeyError):
    def __init__(self, u: int, v: int):
        self.u = u
        self.v = v
        super().__init__(f"Edge ({u}, {v}) does not exist.")

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0])


class EmptyGraphError(GraphError, ValueError):
    """Raised when an operation needs at least one edge to sample from."""


class UnsatisfiableSwapRequest(GraphError, RuntimeError):
    """
    The randomizer gave up before accepting the requested number of swaps.

    Swaps accepted before giving up stay applied to the graph.
    """
    def __init__(self, requested: int, accepted: int, attempts: int):
        self.requested = requested
        self.accepted = accepted
        self.attempts = attempts
        super().__init__(
            f"Accepted only {accepted} of {requested} requested swaps "
            f"after {attempts} attempts."
        )
