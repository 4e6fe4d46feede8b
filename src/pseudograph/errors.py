from __future__ import annotations


class GraphError(Exception):
    """Base exception for all graph, parse and argument errors."""
    pass


# ------------------------------------------------------------------ #
# Specification errors
# ------------------------------------------------------------------ #
class InvalidSpecError(GraphError, ValueError):
    """Arguments could not be normalized into an entity."""
    pass


class InvalidNodeSpecError(InvalidSpecError):
    pass


class InvalidEdgeSpecError(InvalidSpecError):
    pass


class NodeNotFoundError(GraphError, LookupError):
    """A traversal or query was started from an id that is not in the graph."""
    pass


# ------------------------------------------------------------------ #
# Structural errors
# ------------------------------------------------------------------ #
class StructuralViolationError(GraphError):
    """The graph does not have the shape an operation requires."""
    pass


class NotATreeError(StructuralViolationError):
    """A node has more than one parent where at most one is expected."""
    pass


class CyclicGraphError(StructuralViolationError):
    """A traversal that requires an acyclic graph met a cycle."""
    pass


# ------------------------------------------------------------------ #
# Parse errors
# ------------------------------------------------------------------ #
class ParseError(GraphError, ValueError):
    pass


class PayloadError(ParseError):
    """A `{...}` payload is not a flat literal object."""
    pass


class PseudoCypherSyntaxError(ParseError):
    pass


class ParameterRedefinedError(ParseError):
    """A named node was redefined with a different type or payload."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Parameter '{name}' is redefined with a different type or payload."
        )
        self.name = name


class FormatError(ParseError):
    """Input in one of the import formats is malformed."""
    pass
