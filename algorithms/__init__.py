"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs":    AlgoInfo(key, label, kind="pathfinding", fn, pseudocode, …),
        "bubble": AlgoInfo(key, label, kind="sorting", fn, pseudocode, …),
        …
    }

Pathfinding generators take a GridSnapshot; sorting generators take a list
of ints.  Adding an algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.dijkstra       import dijkstra       as _dijkstra,  PSEUDOCODE as _dij_pc
from algorithms.astar          import astar          as _astar,     PSEUDOCODE as _ast_pc
from algorithms.bfs            import bfs            as _bfs,       PSEUDOCODE as _bfs_pc
from algorithms.dfs            import dfs            as _dfs,       PSEUDOCODE as _dfs_pc
from algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bub_pc
from algorithms.insertion_sort import insertion_sort as _insertion, PSEUDOCODE as _ins_pc
from algorithms.merge_sort     import merge_sort     as _merge,     PSEUDOCODE as _mrg_pc
from algorithms.quick_sort     import quick_sort     as _quick,     PSEUDOCODE as _qck_pc


PATHFINDING = "pathfinding"
SORTING     = "sorting"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    kind:              str                    # PATHFINDING or SORTING
    fn:                Callable               # the generator function
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)
    optimal:           bool     = False       # pathfinding: guarantees a shortest path
    stable:            bool     = False       # sorting: keeps equal values in order
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "kind":             self.kind,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "optimal":          self.optimal,
            "stable":           self.stable,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", kind=PATHFINDING, fn=_dijkstra, pseudocode=_dij_pc,
        tags=["priority-queue", "shortest-path"], optimal=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily finalises the closest cell. Optimal on the unit-weight grid.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", kind=PATHFINDING, fn=_astar, pseudocode=_ast_pc,
        tags=["priority-queue", "shortest-path", "heuristic"], optimal=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Dijkstra guided by the Manhattan heuristic. Optimal and usually visits fewer cells.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", kind=PATHFINDING, fn=_bfs, pseudocode=_bfs_pc,
        tags=["queue", "shortest-path", "traversal"], optimal=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer. Finds the shortest path by step count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", kind=PATHFINDING, fn=_dfs, pseudocode=_dfs_pc,
        tags=["stack", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives Up, Right, Down, Left before backtracking. Does NOT guarantee a shortest path.",
    ),

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", kind=SORTING, fn=_bubble, pseudocode=_bub_pc,
        tags=["comparison", "in-place", "adaptive"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps adjacent out-of-order pairs; stops after a pass with no swap.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", kind=SORTING, fn=_insertion, pseudocode=_ins_pc,
        tags=["comparison", "in-place", "adaptive"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Shifts larger values right and drops each value into its slot.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", kind=SORTING, fn=_merge, pseudocode=_mrg_pc,
        tags=["comparison", "divide-and-conquer"], stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits at the midpoint and merges sorted halves, left head first on ties.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", kind=SORTING, fn=_quick, pseudocode=_qck_pc,
        tags=["comparison", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element of each range.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str, kind: Optional[str] = None) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key (optionally restricted to one kind), or None."""
    info = REGISTRY.get(key)
    if info is None or (kind is not None and info.kind != kind):
        return None
    return info


def list_algorithms(kind: Optional[str] = None) -> List[AlgoInfo]:
    """Return registered algorithms in insertion order."""
    return [a for a in REGISTRY.values() if kind is None or a.kind == kind]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "PATHFINDING",
    "SORTING",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
