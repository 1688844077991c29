"""
engine/
-------
Playback, interactive execution & recording layer.

    from engine import PlaybackController, execute, Recorder
"""

from engine.run_context import RunContext, SPEED_PRESETS, BASE_DELAY, resolve_speed
from engine.executor    import ExecutionContext, execute, dispatch
from engine.playback    import PlaybackController, PlaybackState, PlaybackMode
from engine.recorder    import Recorder, RunMetrics

__all__ = [
    "RunContext",
    "SPEED_PRESETS",
    "BASE_DELAY",
    "resolve_speed",
    "ExecutionContext",
    "execute",
    "dispatch",
    "PlaybackController",
    "PlaybackState",
    "PlaybackMode",
    "Recorder",
    "RunMetrics",
]
