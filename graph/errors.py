"""
errors.py — Graph Error Taxonomy
=================================
Every domain failure raised by the store or the step engine derives from
GraphError, so the web layer can map the whole family to a 400 in one place.

All of them subclass ValueError: each one means "the caller handed us a
value we can't accept", and nothing is applied when they are raised.
"""


class GraphError(ValueError):
    """Base class for graph-engine failures."""


class ImportValidationError(GraphError):
    """Import payload is malformed — the live graph is left untouched."""


class InvalidStartVertex(GraphError):
    """Traversal requested on an empty graph or from an unknown vertex."""


class InvalidReference(GraphError):
    """An operation referenced a vertex id that isn't in the graph."""
