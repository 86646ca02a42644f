"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Vertex, Edge, GraphStore
    from graph import ImportValidationError, InvalidStartVertex, InvalidReference
"""

from graph.errors import GraphError, ImportValidationError, InvalidStartVertex, InvalidReference
from graph.vertex import Vertex, vertex_label
from graph.edge   import Edge
from graph.graph  import Graph
from graph.store  import GraphStore, DEFAULT_HISTORY_LIMIT, validate_payload

__all__ = [
    "Vertex",     "vertex_label",
    "Edge",
    "Graph",
    "GraphStore", "DEFAULT_HISTORY_LIMIT", "validate_payload",
    "GraphError", "ImportValidationError", "InvalidStartVertex", "InvalidReference",
]
