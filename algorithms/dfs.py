"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack of (cell, neighbour iterator)
frames, so it explores in exactly the order a recursive DFS would without
touching Python's recursion limit.

Neighbour priority is Up, Right, Down, Left.  DFS does NOT guarantee a
shortest path; it is here for exploration.

Yields:
  1. Visit      – each cell the first time it is entered
  2. PathMark   – the cells of the successful branch, start → end

Only the branch still on the stack when the end is entered is marked, so
dead ends that were backtracked out of never appear in the path.

Returns a SearchOutcome.
"""

from typing import Dict, Iterator, List, Optional, Set, Tuple

from models.cell import Coord
from models.grid import GridSnapshot
from algorithms.step import EventStream, Visit
from algorithms.grid_search import SearchOutcome, mark_path, neighbours


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",               # 0
    "    stack ← [start]",                      # 1
    "    visited ← {start}",                    # 2
    "    while stack is not empty:",            # 3
    "        cell ← stack.top()",               # 4
    "        if cell == end: return stack",     # 5
    "        nbr ← next unvisited adj(cell)",   # 6
    "        if nbr exists:",                   # 7
    "            visited.add(nbr)",             # 8
    "            stack.push(nbr)",              # 9
    "        else: stack.pop()   # backtrack",  # 10
    "    return NOT FOUND",                     # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(grid: GridSnapshot) -> EventStream:
    start, end = grid.start, grid.end

    dist:   Dict[Coord, int]             = {start: 0}
    parent: Dict[Coord, Optional[Coord]] = {start: None}

    if start == end:
        yield from mark_path([start])
        return SearchOutcome(reached=True, path=[start], distances=dist, previous=parent)

    visited: Set[Coord] = {start}
    stack: List[Tuple[Coord, Iterator[Coord]]] = [(start, neighbours(grid, start))]
    yield Visit(*start)

    while stack:
        cell, pending = stack[-1]

        if cell == end:
            path = [frame[0] for frame in stack]
            yield from mark_path(path)
            return SearchOutcome(reached=True, path=path, distances=dist, previous=parent)

        nbr = next((n for n in pending if n not in visited), None)
        if nbr is None:
            stack.pop()
            continue

        visited.add(nbr)
        parent[nbr] = cell
        dist[nbr]   = dist[cell] + 1
        stack.append((nbr, neighbours(grid, nbr)))
        yield Visit(*nbr)

    return SearchOutcome(reached=False, distances=dist, previous=parent)
