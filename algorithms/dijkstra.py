"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over the grid using a min-heap (heapq).

Yields:
  1. Visit      – each cell as it is popped and FINALISED (exactly once)
  2. PathMark   – start → end once the end cell is finalised

Returns a SearchOutcome.

Tie-break: heap entries are (distance, insertion counter, cell), so among
equal distances the cell inserted first wins.  Stale heap entries (a
cell already finalised) are skipped silently.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from models.cell import Coord
from models.grid import GridSnapshot
from algorithms.step import EventStream, Visit
from algorithms.grid_search import SearchOutcome, mark_path, neighbours, reconstruct


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, start, end):",             # 0
    "    dist ← {start: 0}",                       # 1
    "    pq ← [(0, start)]",                       # 2
    "    while pq is not empty:",                  # 3
    "        (d, cell) ← pq.pop_min()",            # 4
    "        if cell finalised: continue",         # 5
    "        finalise(cell)",                      # 6
    "        if cell == end: return path",         # 7
    "        for nbr in adj(cell):",               # 8
    "            if dist[cell] + 1 < dist[nbr]:",  # 9
    "                dist[nbr] ← dist[cell] + 1",  # 10
    "                prev[nbr] ← cell",            # 11
    "                pq.push((dist[nbr], nbr))",   # 12
    "    return NOT FOUND",                        # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(grid: GridSnapshot) -> EventStream:
    start, end = grid.start, grid.end

    dist:   Dict[Coord, int]             = {start: 0}
    parent: Dict[Coord, Optional[Coord]] = {start: None}

    if start == end:
        yield from mark_path([start])
        return SearchOutcome(reached=True, path=[start], distances=dist, previous=parent)

    counter = itertools.count()
    pq: List[Tuple[int, int, Coord]] = [(0, next(counter), start)]
    finalised: Set[Coord] = set()

    while pq:
        d, _, cell = heapq.heappop(pq)
        if cell in finalised:
            continue

        finalised.add(cell)
        yield Visit(*cell)

        if cell == end:
            path = reconstruct(parent, end)
            yield from mark_path(path)
            return SearchOutcome(reached=True, path=path, distances=dist, previous=parent)

        for nbr in neighbours(grid, cell):
            if nbr in finalised:
                continue
            new_dist = d + 1
            if new_dist < dist.get(nbr, new_dist + 1):
                dist[nbr]   = new_dist
                parent[nbr] = cell
                heapq.heappush(pq, (new_dist, next(counter), nbr))

    return SearchOutcome(reached=False, distances=dist, previous=parent)
