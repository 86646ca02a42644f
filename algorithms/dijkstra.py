"""
dijkstra.py — Dijkstra's Algorithm (stub)
==========================================
Edges carry no weights yet, so there is nothing for Dijkstra to minimise.
Listed in the registry as "coming soon".
"""

from typing import List

from graph import Graph
from algorithms.step import Step


PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start):",                          # 0
    "    dist ← {v: ∞}; dist[start] ← 0",                   # 1
    "    pq ← [(0, start)]",                                # 2
    "    while pq is not empty:",                           # 3
    "        (d, node) ← pq.pop_min()",                     # 4
    "        for (nbr, w) in adj(node):",                   # 5
    "            if d + w < dist[nbr]:",                    # 6
    "                dist[nbr] ← d + w; pq.push(nbr)",      # 7
    "    return dist",                                      # 8
]


def dijkstra_steps(graph: Graph, start: str) -> List[Step]:
    raise NotImplementedError("Dijkstra will be implemented once edges carry weights")
