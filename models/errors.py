"""
errors.py — Recoverable error kinds
====================================
Every error here is reported to the caller without touching model state.
"Target unreachable" is NOT an error: pathfinding reports it through the
absence of PathMark events.
"""


class VisualizerError(Exception):
    """Base class for every error raised by the models and engine."""


class InvalidInput(VisualizerError, ValueError):
    """Malformed user-supplied numeric input."""


class InvalidGridState(VisualizerError):
    """A run was requested on a grid without exactly one start and one end."""


class ConcurrentRunRejected(VisualizerError):
    """A mutation or second run was attempted while a run is active."""
