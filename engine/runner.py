"""
runner.py — Run Orchestration
==============================
The entry points a UI calls to animate an algorithm on a live model:

    handle = await runner.run_pathfinding(grid, "astar", on_end=..., on_event=...)
    handle = await runner.run_sorting(array, "merge", on_end=...)
    runner.cancel(handle)
    result = await handle.wait()

Rules enforced here:
  - One active run per model.  Starting a new run on a model first cancels
    the in-flight one and waits until it has observed the cancellation.
  - The model is locked for the whole run, so tool edits raise
    ConcurrentRunRejected instead of racing the engine.
  - Every event is applied to the model before the presentation callback
    sees it.  The end callback fires only when the run completes naturally.
  - The model is unlocked whatever happens.
"""

import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from algorithms import PATHFINDING, SORTING, AlgoInfo, get_algorithm
from algorithms.step import StepEvent
from engine.player import CancellationToken, EventCallback, StepPlayer
from engine.stepper import DEFAULT_DELAY_MS, clamp_delay
from models.grid import Grid
from models.sequence import ArrayModel

logger = logging.getLogger(__name__)

COMPLETED = "completed"
CANCELLED = "cancelled"

_run_ids = itertools.count(1)


@dataclass
class RunResult:
    run_id:    int
    algo_key:  str
    kind:      str
    status:    str        # COMPLETED or CANCELLED
    delivered: int        # events applied and shown
    outcome:   Any = None # SearchOutcome / sorted list when completed

    @property
    def completed(self) -> bool:
        return self.status == COMPLETED


class RunHandle:
    """Cancellable reference to one in-flight run."""

    def __init__(self, algo_key: str, kind: str, model: Any):
        self.run_id:   int               = next(_run_ids)
        self.algo_key: str               = algo_key
        self.kind:     str               = kind
        self.model:    Any               = model
        self.token:    CancellationToken = CancellationToken()
        self.task:     Optional["asyncio.Task[RunResult]"] = None

    def cancel(self) -> None:
        self.token.cancel()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def done(self) -> bool:
        return self.task is not None and self.task.done()

    async def wait(self) -> RunResult:
        return await self.task

    def __repr__(self) -> str:
        return f"RunHandle(id={self.run_id}, algo={self.algo_key}, cancelled={self.cancelled}, done={self.done})"


class Runner:
    """
    Attributes:
        delay_ms : Default pause between events, clamped to the slider range.
    """

    def __init__(self, delay_ms: float = DEFAULT_DELAY_MS):
        self.delay_ms: float = clamp_delay(delay_ms)
        self._active: Dict[int, RunHandle] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def run_pathfinding(
        self,
        grid: Grid,
        algorithm: str,
        on_end: Optional[Callable[[RunResult], None]] = None,
        on_event: Optional[EventCallback] = None,
        delay_ms: Optional[float] = None,
    ) -> RunHandle:
        info = self._lookup(algorithm, PATHFINDING)
        await self._cancel_and_wait(grid)

        snapshot = grid.snapshot()          # InvalidGridState before anything is touched
        grid.clear_trace()
        handle = self._launch(info, grid, info.fn(snapshot), on_end, on_event, delay_ms)
        logger.info("Run %d: %s from %s to %s", handle.run_id, info.key, snapshot.start, snapshot.end)
        return handle

    async def run_sorting(
        self,
        array: ArrayModel,
        algorithm: str,
        on_end: Optional[Callable[[RunResult], None]] = None,
        on_event: Optional[EventCallback] = None,
        delay_ms: Optional[float] = None,
    ) -> RunHandle:
        info = self._lookup(algorithm, SORTING)
        await self._cancel_and_wait(array)

        array.clear_annotations()
        handle = self._launch(info, array, info.fn(array.snapshot()), on_end, on_event, delay_ms)
        logger.info("Run %d: %s on %d values", handle.run_id, info.key, len(array))
        return handle

    def cancel(self, handle: RunHandle) -> None:
        handle.cancel()

    def active(self, model: Any) -> Optional[RunHandle]:
        return self._active.get(id(model))

    def is_running(self, model: Any) -> bool:
        return id(model) in self._active

    async def shutdown(self) -> None:
        """Cancel every in-flight run and wait for them to finish."""
        for handle in list(self._active.values()):
            handle.cancel()
            await self._wait_quietly(handle)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _lookup(key: str, kind: str) -> AlgoInfo:
        info = get_algorithm(key, kind)
        if info is None:
            raise ValueError(f"Unknown {kind} algorithm: {key}")
        return info

    async def _cancel_and_wait(self, model: Any) -> None:
        prior = self._active.get(id(model))
        if prior is None:
            return
        logger.debug("Cancelling run %d before starting a new one", prior.run_id)
        prior.cancel()
        await self._wait_quietly(prior)

    @staticmethod
    async def _wait_quietly(handle: RunHandle) -> None:
        try:
            await handle.wait()
        except Exception:
            logger.debug("Run %d ended with an error, already logged", handle.run_id)

    def _launch(self, info, model, stream, on_end, on_event, delay_ms) -> RunHandle:
        model.lock()
        handle = RunHandle(info.key, info.kind, model)
        self._active[id(model)] = handle
        delay = self.delay_ms if delay_ms is None else clamp_delay(delay_ms)
        handle.task = asyncio.create_task(self._drive(handle, stream, on_event, on_end, delay))
        return handle

    async def _drive(self, handle: RunHandle, stream, on_event, on_end, delay_ms: float) -> RunResult:
        model = handle.model

        def present(event: StepEvent):
            model.apply(event)
            if on_event is not None:
                return on_event(event)
            return None

        try:
            playback = await StepPlayer(delay_ms).play(stream, present, handle.token)
            if playback.completed:
                if handle.kind == PATHFINDING:
                    model.record_outcome(playback.result)
                else:
                    model.clear_annotations()
        except Exception:
            logger.exception("Run %d (%s) failed", handle.run_id, handle.algo_key)
            raise
        finally:
            model.unlock()
            if self._active.get(id(model)) is handle:
                del self._active[id(model)]

        result = RunResult(
            run_id=handle.run_id,
            algo_key=handle.algo_key,
            kind=handle.kind,
            status=COMPLETED if playback.completed else CANCELLED,
            delivered=playback.delivered,
            outcome=playback.result,
        )
        logger.info("Run %d %s after %d events", handle.run_id, result.status, result.delivered)
        if result.completed and on_end is not None:
            on_end(result)
        return result
