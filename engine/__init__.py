"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder, compare
    from engine import StepPlayer, CancellationToken, Runner, RunHandle
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS, MIN_DELAY_MS, MAX_DELAY_MS, DEFAULT_DELAY_MS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare
from engine.player   import StepPlayer, CancellationToken, PlaybackResult
from engine.runner   import Runner, RunHandle, RunResult, COMPLETED, CANCELLED

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "MIN_DELAY_MS",
    "MAX_DELAY_MS",
    "DEFAULT_DELAY_MS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "StepPlayer",
    "CancellationToken",
    "PlaybackResult",
    "Runner",
    "RunHandle",
    "RunResult",
    "COMPLETED",
    "CANCELLED",
]
