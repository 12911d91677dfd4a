"""
player.py — Paced Step Player
==============================
Drains an event generator one event at a time on an asyncio loop:

    for each event:
        check the cancellation token   ← suspension point guard
        pull the event, hand it to the presentation callback
        await the configured delay

Cancellation is cooperative.  Once the token is set the player stops
before the next event: nothing more is pulled from the generator and no
further callbacks fire.  All timing lives here; engines are pure.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generator, Optional, Union

from algorithms.step import StepEvent
from engine.stepper import DEFAULT_DELAY_MS
from models.errors import ConcurrentRunRejected

logger = logging.getLogger(__name__)


EventCallback = Callable[[StepEvent], Union[None, Awaitable[None]]]


class CancellationToken:
    """One-way flag shared by whoever starts a run and whoever stops it."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"


@dataclass
class PlaybackResult:
    delivered: int           # events handed to the callback
    completed: bool          # True if the stream was exhausted
    result:    Any = None    # generator return value when completed


class StepPlayer:
    """
    Attributes:
        delay_ms : Pause after each delivered event.  0 still yields to the loop.
        busy     : True while play() is running; a second play() is rejected.
    """

    def __init__(self, delay_ms: float = DEFAULT_DELAY_MS, sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.delay_ms: float = delay_ms
        self.busy:     bool  = False
        self._sleep = sleep

    async def play(
        self,
        stream: Generator[StepEvent, None, Any],
        on_event: EventCallback,
        token: Optional[CancellationToken] = None,
    ) -> PlaybackResult:
        if self.busy:
            raise ConcurrentRunRejected("Player is already draining a sequence")
        token = token or CancellationToken()
        self.busy = True
        delivered = 0
        try:
            while True:
                if token.cancelled:
                    logger.debug("Playback cancelled after %d events", delivered)
                    stream.close()
                    return PlaybackResult(delivered=delivered, completed=False)
                try:
                    event = next(stream)
                except StopIteration as stop:
                    return PlaybackResult(delivered=delivered, completed=True, result=stop.value)

                outcome = on_event(event)
                if inspect.isawaitable(outcome):
                    await outcome
                delivered += 1
                await self._sleep(max(self.delay_ms, 0) / 1000)
        except asyncio.CancelledError:
            logger.debug("Playback task cancelled after %d events", delivered)
            stream.close()
            raise
        finally:
            self.busy = False
