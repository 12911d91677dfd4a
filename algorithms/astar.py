"""
astar.py — A* Search
=====================
Generator-based A* over the grid, ordered by f = g + h with the Manhattan
heuristic.  Manhattan never overestimates on a unit-cost 4-connected grid,
so the path found is optimal and its length equals Dijkstra's.

Yields the same events as Dijkstra:
  1. Visit      – each cell as it is popped and closed
  2. PathMark   – start → end once the end cell is closed

Returns a SearchOutcome with f_scores populated.

Tie-break: (f, insertion counter); the first inserted entry wins.
A closed cell is reopened only if a strictly smaller g is found for it.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set, Tuple

from models.cell import Coord
from models.grid import GridSnapshot
from algorithms.step import EventStream, Visit
from algorithms.grid_search import SearchOutcome, manhattan, mark_path, neighbours, reconstruct


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(grid, start, end):",                # 0
    "    g[start] ← 0",                            # 1
    "    f[start] ← h(start, end)",                # 2
    "    open_set ← [(f[start], start)]",          # 3
    "    while open_set:",                         # 4
    "        (_, cell) ← open_set.pop_min()",      # 5
    "        if cell in closed: continue",         # 6
    "        closed.add(cell)",                    # 7
    "        if cell == end: return path",         # 8
    "        for nbr in adj(cell):",               # 9
    "            tentative_g ← g[cell] + 1",       # 10
    "            if tentative_g < g[nbr]:",        # 11
    "                prev[nbr] ← cell",            # 12
    "                g[nbr] ← tentative_g",        # 13
    "                f[nbr] ← g[nbr] + h(nbr)",    # 14
    "                open_set.push((f[nbr], nbr))",# 15
    "    return NOT FOUND",                        # 16
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(grid: GridSnapshot) -> EventStream:
    start, end = grid.start, grid.end

    g_score: Dict[Coord, int]             = {start: 0}
    f_score: Dict[Coord, int]             = {start: manhattan(start, end)}
    parent:  Dict[Coord, Optional[Coord]] = {start: None}

    if start == end:
        yield from mark_path([start])
        return SearchOutcome(reached=True, path=[start], distances=g_score,
                             previous=parent, f_scores=f_score)

    counter = itertools.count()
    open_set: List[Tuple[int, int, Coord]] = [(f_score[start], next(counter), start)]
    closed: Set[Coord] = set()

    while open_set:
        f, _, cell = heapq.heappop(open_set)
        if cell in closed or f > f_score[cell]:
            continue

        closed.add(cell)
        yield Visit(*cell)

        if cell == end:
            path = reconstruct(parent, end)
            yield from mark_path(path)
            return SearchOutcome(reached=True, path=path, distances=g_score,
                                 previous=parent, f_scores=f_score)

        for nbr in neighbours(grid, cell):
            tentative_g = g_score[cell] + 1
            if tentative_g >= g_score.get(nbr, tentative_g + 1):
                continue
            # strictly better: (re)open
            closed.discard(nbr)
            parent[nbr]  = cell
            g_score[nbr] = tentative_g
            f_score[nbr] = tentative_g + manhattan(nbr, end)
            heapq.heappush(open_set, (f_score[nbr], next(counter), nbr))

    return SearchOutcome(reached=False, distances=g_score, previous=parent, f_scores=f_score)
