"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over the grid with a FIFO frontier.  On a unit-weight
grid the first time the end cell is dequeued its parent chain is a
shortest path.

Cells are marked visited at ENQUEUE time, so no cell enters the queue twice
and Visit events come out in discovery order (the start cell first).

Yields:
  1. Visit      – each cell as it is discovered
  2. PathMark   – start → end once the end cell is dequeued

Returns a SearchOutcome.
"""

from collections import deque
from typing import Deque, Dict, List, Optional, Set

from models.cell import Coord
from models.grid import GridSnapshot
from algorithms.step import EventStream, Visit
from algorithms.grid_search import SearchOutcome, mark_path, neighbours, reconstruct


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(grid, start, end):",               # 0
    "    queue ← [start]",                      # 1
    "    visited ← {start}",                    # 2
    "    while queue is not empty:",            # 3
    "        cell ← queue.dequeue()",           # 4
    "        if cell == end: return path",      # 5
    "        for nbr in adj(cell):",            # 6
    "            if nbr not visited:",          # 7
    "                visited.add(nbr)",         # 8
    "                prev[nbr] ← cell",         # 9
    "                queue.enqueue(nbr)",       # 10
    "    return NOT FOUND",                     # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(grid: GridSnapshot) -> EventStream:
    start, end = grid.start, grid.end

    dist:   Dict[Coord, int]             = {start: 0}
    parent: Dict[Coord, Optional[Coord]] = {start: None}

    if start == end:
        yield from mark_path([start])
        return SearchOutcome(reached=True, path=[start], distances=dist, previous=parent)

    queue:   Deque[Coord] = deque([start])
    visited: Set[Coord]   = {start}
    yield Visit(*start)

    while queue:
        cell = queue.popleft()

        if cell == end:
            path = reconstruct(parent, end)
            yield from mark_path(path)
            return SearchOutcome(reached=True, path=path, distances=dist, previous=parent)

        for nbr in neighbours(grid, cell):
            if nbr in visited:
                continue
            visited.add(nbr)
            parent[nbr] = cell
            dist[nbr]   = dist[cell] + 1
            queue.append(nbr)
            yield Visit(*nbr)

    return SearchOutcome(reached=False, distances=dist, previous=parent)
