"""
graph.py — Graph Value & Generator
===================================
The canonical graph value.  The store owns the live instance; the step
engine and the playback layer only ever read snapshots of it.

Responsibilities:
  1. CRUD on vertices & edges                (add / remove / get)
  2. Adjacency queries                       (neighbours, degree)
  3. Representations                         (adjacency matrix / list)
  4. Structural analysis                     (connectivity, cycles)
  5. Serialisation round-trip                (to_dict / from_dict)
  6. Random-graph factory                    (generate_random)

Design decisions:
  - Vertices are kept in a dict keyed by id; dicts preserve insertion
    order, which is also label and display order.
  - Edges are a plain list (edge order drives DFS neighbour order) plus a
    set of (source, target) pairs for O(1) duplicate checks.
  - `is_directed` is global.  Undirected graphs interpret (a, b) as both
    a → b and b → a without storing a reverse record.
  - Self-loops are legal records but never count as neighbours.
"""

import random
from typing import Dict, List, Optional, Set, Tuple

from graph.edge import Edge
from graph.errors import InvalidReference
from graph.vertex import Vertex, vertex_label


class Graph:
    """
    Attributes:
        vertices    : {vertex_id: Vertex}   (insertion ordered)
        edges       : [Edge, …]             (insertion ordered)
        is_directed : bool – global edge semantics
        _pairs      : {(source, target), …} – duplicate guard
    """

    def __init__(self, is_directed: bool = False):
        self.vertices:    Dict[str, Vertex]     = {}
        self.edges:       List[Edge]            = []
        self.is_directed: bool                  = is_directed
        self._pairs:      Set[Tuple[str, str]]  = set()

    # ==================================================================
    # VERTEX CRUD
    # ==================================================================
    def add_vertex(self, vertex: Vertex) -> Vertex:
        if vertex.id in self.vertices:
            raise ValueError(f"Duplicate vertex id: {vertex.id}")
        self.vertices[vertex.id] = vertex
        return vertex

    def next_vertex_index(self) -> int:
        """N for the next `v<N>` id: the vertex count, bumped past ids in use."""
        n = len(self.vertices)
        while f"v{n}" in self.vertices:
            n += 1
        return n

    def create_vertex(self, x: float, y: float) -> Vertex:
        """Convenience: allocate id + label, then add."""
        n = self.next_vertex_index()
        return self.add_vertex(Vertex(f"v{n}", vertex_label(n), x, y))

    def remove_vertex(self, vertex_id: str) -> bool:
        """Remove a vertex and every edge touching it.  False if unknown."""
        if vertex_id not in self.vertices:
            return False
        self.edges = [e for e in self.edges if not e.touches(vertex_id)]
        self._pairs = {e.pair for e in self.edges}
        del self.vertices[vertex_id]
        return True

    def get_vertex(self, vertex_id: str) -> Optional[Vertex]:
        return self.vertices.get(vertex_id)

    def has_vertex(self, vertex_id: str) -> bool:
        return vertex_id in self.vertices

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, source: str, target: str) -> bool:
        """Append (source, target).  False (no change) if the pair exists."""
        for vid in (source, target):
            if vid not in self.vertices:
                raise InvalidReference(f"Unknown vertex '{vid}' in edge {source} → {target}")
        if (source, target) in self._pairs:
            return False
        self.edges.append(Edge(source, target))
        self._pairs.add((source, target))
        return True

    def remove_edge(self, source: str, target: str) -> bool:
        if (source, target) not in self._pairs:
            return False
        self.edges = [e for e in self.edges if e.pair != (source, target)]
        self._pairs.discard((source, target))
        return True

    def has_edge(self, source: str, target: str) -> bool:
        return (source, target) in self._pairs

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, vertex_id: str) -> List[Tuple[str, Edge]]:
        """[(neighbour_id, edge)] in edge order, honouring directedness."""
        result = []
        for e in self.edges:
            if e.is_self_loop:
                continue
            other = e.other_end(vertex_id, self.is_directed)
            if other is not None:
                result.append((other, e))
        return result

    def neighbour_ids(self, vertex_id: str) -> List[str]:
        return [nbr for nbr, _ in self.neighbours(vertex_id)]

    def degree(self, vertex_id: str) -> int:
        return len(self.neighbours(vertex_id))

    # ==================================================================
    # REPRESENTATIONS
    # ==================================================================
    def adjacency_matrix(self) -> List[List[int]]:
        """0/1 matrix in vertex order.  Undirected edges are mirrored."""
        index = {vid: i for i, vid in enumerate(self.vertices)}
        n = len(index)
        matrix = [[0] * n for _ in range(n)]
        for e in self.edges:
            i, j = index[e.source], index[e.target]
            matrix[i][j] = 1
            if not self.is_directed:
                matrix[j][i] = 1
        return matrix

    def adjacency_list(self) -> Dict[str, List[str]]:
        """{label: [neighbour labels]} in vertex order."""
        return {
            v.label: [self.vertices[nbr].label for nbr in self.neighbour_ids(v.id)]
            for v in self.vertices.values()
        }

    # ==================================================================
    # ANALYSIS
    # ==================================================================
    def reachable_from(self, start: str) -> Set[str]:
        seen = {start}
        frontier = [start]
        while frontier:
            vid = frontier.pop()
            for nbr in self.neighbour_ids(vid):
                if nbr not in seen:
                    seen.add(nbr)
                    frontier.append(nbr)
        return seen

    def is_connected(self) -> bool:
        """Every vertex reachable from the first one (empty graph → True)."""
        if not self.vertices:
            return True
        first = next(iter(self.vertices))
        return len(self.reachable_from(first)) == len(self.vertices)

    def has_cycle(self) -> bool:
        if any(e.is_self_loop for e in self.edges):
            return True
        if self.is_directed:
            return self._has_directed_cycle()
        return self._has_undirected_cycle()

    def _has_directed_cycle(self) -> bool:
        # white / grey / black colouring, iterative so long paths don't hit the recursion limit
        colour: Dict[str, int] = {vid: 0 for vid in self.vertices}
        for root in self.vertices:
            if colour[root]:
                continue
            colour[root] = 1
            stack = [(root, iter(self.neighbour_ids(root)))]
            while stack:
                vid, it = stack[-1]
                nxt = next(it, None)
                if nxt is None:
                    colour[vid] = 2
                    stack.pop()
                elif colour[nxt] == 1:
                    return True
                elif colour[nxt] == 0:
                    colour[nxt] = 1
                    stack.append((nxt, iter(self.neighbour_ids(nxt))))
        return False

    def _has_undirected_cycle(self) -> bool:
        # union-find; (a, b) and (b, a) are the same undirected connection
        parent = {vid: vid for vid in self.vertices}

        def find(v: str) -> str:
            while parent[v] != v:
                parent[v] = parent[parent[v]]
                v = parent[v]
            return v

        seen: Set[frozenset] = set()
        for e in self.edges:
            key = frozenset(e.pair)
            if key in seen:
                continue
            seen.add(key)
            ra, rb = find(e.source), find(e.target)
            if ra == rb:
                return True
            parent[ra] = rb
        return False

    # ==================================================================
    # COPY & COMPARISON
    # ==================================================================
    def copy(self) -> "Graph":
        """Deep copy — history snapshots and traces never share state with the live graph."""
        g = Graph(is_directed=self.is_directed)
        g.vertices = {vid: v.copy() for vid, v in self.vertices.items()}
        g.edges    = [Edge(e.source, e.target) for e in self.edges]
        g._pairs   = set(self._pairs)
        return g

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Graph)
            and self.is_directed == other.is_directed
            and list(self.vertices.values()) == list(other.vertices.values())
            and self.edges == other.edges
        )

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "vertices":   [v.to_dict() for v in self.vertices.values()],
            "edges":      [e.to_dict() for e in self.edges],
            "isDirected": self.is_directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """Trusting constructor — GraphStore.import_graph validates first."""
        g = cls(is_directed=data.get("isDirected", False))
        for vd in data.get("vertices", []):
            g.add_vertex(Vertex.from_dict(vd))
        for ed in data.get("edges", []):
            g.add_edge(ed["from"], ed["to"])
        return g

    # ==================================================================
    # GENERATOR
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        num_vertices: int = 6,
        num_edges: int = 7,
        is_directed: bool = False,
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        `num_vertices` vertices at random positions and `num_edges` distinct
        non-loop edges (capped at the maximum the vertex count allows).
        """
        rng = random.Random(seed)
        g = cls(is_directed=is_directed)
        margin = 50

        for _ in range(num_vertices):
            x = rng.uniform(margin, canvas_w - margin)
            y = rng.uniform(margin, canvas_h - margin)
            g.create_vertex(round(x, 1), round(y, 1))

        ids = list(g.vertices)
        max_edges = num_vertices * (num_vertices - 1)
        if not is_directed:
            max_edges = max_edges // 2
        wanted = min(num_edges, max_edges)

        seen: Set = set()
        while len(seen) < wanted:
            a, b = rng.sample(range(num_vertices), 2)
            key = (a, b) if is_directed else frozenset((a, b))
            if key in seen:
                continue
            seen.add(key)
            g.add_edge(ids[a], ids[b])

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def vertex_ids(self) -> List[str]:
        return list(self.vertices.keys())

    def label_of(self, vertex_id: str) -> str:
        v = self.vertices.get(vertex_id)
        return v.label if v else vertex_id

    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count}, edges={self.edge_count}, directed={self.is_directed})"
