"""
run_context.py — Per-run Scheduling State
==========================================
One RunContext exists per run.  It is the *only* thing a running loop
consults to decide whether to keep going, how long to wait and whether to
park for an explicit advance.  A new run gets a new RunContext; the old
one is cancelled, so any resumption still pending on it wakes up to
`active == False` and becomes a no-op.

Suspension primitive:

    await run.checkpoint()   →  True to continue, False once cancelled

checkpoint() performs, in order:
    1. the speed delay (BASE_DELAY / speed seconds) unless in step mode
    2. wait while paused
    3. in step mode, park until advance() is called

Every wait is cancellable: cancel() drops the timer handle and releases
the pause and advance waits immediately.

Not thread-safe; all calls must come from the event loop's thread.
"""

import asyncio
import logging
from typing import Optional, Union


log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed presets (steps per second; delay = BASE_DELAY / speed)
# ---------------------------------------------------------------------------
BASE_DELAY = 1.0

SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 2.5,
    "fast":   6.0,    # demo mode
    "turbo":  20.0,
}


def resolve_speed(speed: Union[str, float]) -> float:
    """Preset name or positive number → speed multiplier."""
    if isinstance(speed, str):
        if speed in SPEED_PRESETS:
            return SPEED_PRESETS[speed]
        try:
            speed = float(speed)
        except ValueError:
            raise ValueError(
                f"Unknown speed '{speed}'. Use a number or one of: {', '.join(SPEED_PRESETS)}"
            ) from None
    if speed <= 0:
        raise ValueError("Speed must be greater than zero")
    return float(speed)


def _release(fut: Optional[asyncio.Future]) -> bool:
    if fut is not None and not fut.done():
        fut.set_result(None)
        return True
    return False


# ---------------------------------------------------------------------------
# RunContext
# ---------------------------------------------------------------------------
class RunContext:
    """
    Attributes:
        active    : Live cancellation flag, read at every resumption.
        speed     : Speed multiplier (see SPEED_PRESETS).
        step_mode : When True, every checkpoint parks until advance().
    """

    def __init__(self, speed: float = SPEED_PRESETS["medium"], step_mode: bool = False):
        self.active:    bool  = True
        self.speed:     float = resolve_speed(speed)
        self.step_mode: bool  = step_mode

        self._resume  = asyncio.Event()
        self._resume.set()
        self._timer:   Optional[asyncio.TimerHandle] = None
        self._sleeper: Optional[asyncio.Future]      = None
        self._advance: Optional[asyncio.Future]      = None

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def delay(self) -> float:
        return BASE_DELAY / self.speed

    @property
    def paused(self) -> bool:
        return not self._resume.is_set()

    @property
    def waiting_for_advance(self) -> bool:
        return self._advance is not None and not self._advance.done()

    # ------------------------------------------------------------------
    # Suspension
    # ------------------------------------------------------------------
    async def checkpoint(self) -> bool:
        if not self.active:
            return False

        if not self.step_mode:
            await self._sleep(self.delay)

        if self.active and self.paused:
            await self._resume.wait()

        if self.active and self.step_mode:
            self._advance = asyncio.get_running_loop().create_future()
            try:
                await self._advance
            finally:
                self._advance = None

        return self.active

    async def _sleep(self, seconds: float) -> None:
        loop = asyncio.get_running_loop()
        self._sleeper = loop.create_future()
        self._timer = loop.call_later(seconds, _release, self._sleeper)
        try:
            await self._sleeper
        finally:
            self._timer.cancel()
            self._timer = None
            self._sleeper = None

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def cancel(self) -> None:
        """Invalidate the run and release every pending wait."""
        if not self.active:
            return
        self.active = False
        if self._timer is not None:
            self._timer.cancel()
        _release(self._sleeper)
        _release(self._advance)
        self._resume.set()
        log.debug("run cancelled")

    def pause(self) -> None:
        self._resume.clear()

    def resume(self) -> None:
        self._resume.set()

    def advance(self) -> bool:
        """
        Release a pending step-mode wait.  Returns True if a waiting
        checkpoint was released; calling it again before the next park
        is a no-op returning False.
        """
        return _release(self._advance)

    def set_step_mode(self, enabled: bool) -> None:
        self.step_mode = enabled
        if not enabled:
            # leaving step mode must not strand a parked checkpoint
            _release(self._advance)

    def set_speed(self, speed: Union[str, float]) -> None:
        self.speed = resolve_speed(speed)
