"""
bfs.py — Breadth-First Search (stub)
=====================================
Registered so the algorithm picker can list it; the step engine for it is
not written yet.  Only DFS produces traces today.
"""

from typing import List

from graph import Graph
from algorithms.step import Step


PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                   # 0
    "    queue ← [start]",                      # 1
    "    visited ← {start}",                    # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        for nbr in adj(node):",            # 5
    "            if nbr not visited:",          # 6
    "                visited.add(nbr)",         # 7
    "                queue.enqueue(nbr)",       # 8
    "    return visited",                       # 9
]


def bfs_steps(graph: Graph, start: str) -> List[Step]:
    raise NotImplementedError("BFS will be implemented in a future update")
