"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run headlessly (no delays, no callbacks),
then computes the metrics the analytics panel and Comparison Mode need.

Usage:
    rec = Recorder()
    rec.start("dijkstra", grid)         # Grid / GridSnapshot, or a list / ArrayModel for sorts
    rec.run_to_completion()             # exhausts the generator
    metrics = rec.get_metrics()
    rec.export()                        # JSON-ready trace + metrics

Comparison Mode:
    Run two Recorders on the SAME input, then compare(rec1, rec2).
"""

import logging
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, PATHFINDING, get_algorithm
from algorithms.step import StepEvent
from engine.stepper import Stepper
from models.grid import Grid, GridSnapshot
from models.sequence import ArrayModel

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    kind:          str   = ""
    total_steps:   int   = 0          # number of events yielded
    wall_time_ms:  float = 0.0
    # pathfinding
    cells_visited: int   = 0
    path_length:   int   = 0          # number of moves on the final path
    path_found:    bool  = False
    # sorting
    comparisons:   int   = 0
    swaps:         int   = 0
    writes:        int   = 0
    final_values:  List[int] = field(default_factory=list)


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    winner_steps:  str = ""   # fewer events overall
    winner_visits: str = ""   # fewer cells visited (pathfinding)
    winner_path:   str = ""   # shorter path (pathfinding)
    winner_ops:    str = ""   # fewer swaps + writes (sorting)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        events  : Full list of StepEvents from the run.
        result  : Generator return value (SearchOutcome or sorted list).
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The underlying Stepper.
    """

    def __init__(self):
        self.events:  List[StepEvent]      = []
        self.result:  Any                  = None
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._algo_info: Optional[AlgoInfo] = None
        self._input:     Any                = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, subject: Any) -> None:
        """Snapshot the subject and attach a Stepper to a fresh generator."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        if info.kind == PATHFINDING:
            snapshot = subject.snapshot() if isinstance(subject, Grid) else subject
            if not isinstance(snapshot, GridSnapshot):
                raise TypeError(f"{info.label} needs a Grid or GridSnapshot, got {type(subject).__name__}")
            self._input = snapshot
        else:
            values = subject.snapshot() if isinstance(subject, ArrayModel) else list(subject)
            self._input = values

        self._algo_info = info
        self.events     = []
        self.result     = None
        self.metrics    = None

        self.stepper = Stepper()
        self.stepper.start(info.fn(self._input))

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every event, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.stepper.jump_to_end()
        self.events = list(self.stepper.events)
        self.result = self.stepper.result
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info("Recorded %s: %d events in %.2f ms",
                    self.metrics.algo_key, self.metrics.total_steps, self.metrics.wall_time_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        info = self._algo_info
        data: Dict[str, Any] = {
            "algo_key": info.key if info else "",
            "kind":     info.kind if info else "",
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "events":   [e.to_dict() for e in self.events],
        }
        if info is not None and info.kind == PATHFINDING and self.result is not None:
            data["path"] = [list(c) for c in self.result.path]
        return data

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        counts: Dict[str, int] = {}
        for e in self.events:
            counts[e.kind] = counts.get(e.kind, 0) + 1

        metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            kind=info.kind,
            total_steps=len(self.events),
            wall_time_ms=round(wall_ms, 2),
        )
        if info.kind == PATHFINDING:
            metrics.cells_visited = counts.get("visit", 0)
            metrics.path_found    = bool(self.result and self.result.reached)
            metrics.path_length   = self.result.path_length if self.result else 0
        else:
            metrics.comparisons  = counts.get("compare", 0)
            metrics.swaps        = counts.get("swap", 0)
            metrics.writes       = counts.get("overwrite", 0)
            metrics.final_values = list(self.result or [])
        return metrics


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    result = ComparisonResult(left=l, right=r, winner_steps=winner(l.total_steps, r.total_steps))
    if l.kind == r.kind == PATHFINDING:
        result.winner_visits = winner(l.cells_visited, r.cells_visited)
        if l.path_found and r.path_found:
            result.winner_path = winner(l.path_length, r.path_length)
    elif l.kind == r.kind:
        result.winner_ops = winner(l.swaps + l.writes, r.swaps + r.writes)
    return result
