"""
playback.py — Playback Controller
==================================
The PlaybackController is the ONLY object a front end talks to during a
run.  It owns the loaded algorithm + inputs, the current position, and
the play / pause / step-mode / speed / replay controls.

State machine:
    IDLE      →  start()            →  RUNNING
    RUNNING   →  pause()            →  PAUSED
    PAUSED    →  pause() / start()  →  RUNNING
    RUNNING   →  (run exhausted)    →  COMPLETED
    any       →  reset()            →  IDLE
    any       →  replay()           →  RUNNING (from step 0)

`step_mode` is orthogonal: while on, a running loop parks after every
unit of work until next_step() is called.  Turning it on mid-run takes
effect at the next checkpoint.

Two ways to run:

    REPLAY       index-driven walk over the precomputed step trace
    INTERACTIVE  engine.executor.execute() with this controller supplying
                 the hooks; live `array` / counters are updated by the
                 hooks themselves

Precondition-fix:
    start() on an algorithm whose input requirement is unmet (binary
    search on an unsorted array) corrects the input, sets `message` and
    stays IDLE.  The next start() runs.

Interleaved runs:
    every run gets its own RunContext.  Loading, resetting, replaying or
    starting again cancels the previous one, so its pending resumptions
    wake up inactive and touch nothing.

start() / replay() schedule the run as a task and therefore need a
running event loop.  `await controller.wait()` joins the current run.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Union

from algorithms import fix_precondition, require_algorithm, run_algorithm
from algorithms.step import OpKind, Step, StepKind
from engine.executor import ExecutionContext, execute
from engine.run_context import RunContext, resolve_speed


log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"


class PlaybackMode(Enum):
    REPLAY      = "replay"
    INTERACTIVE = "interactive"


# ---------------------------------------------------------------------------
# Hook context for one interactive run
# ---------------------------------------------------------------------------
class _LiveRun(ExecutionContext):
    """
    Hooks bound to a single RunContext.  `is_sorting` reads that run's
    live flag, so a superseded run stops at its next check.
    """

    def __init__(self, controller: "PlaybackController", run: RunContext):
        self._ctl = controller
        self._run = run

    @property
    def is_sorting(self) -> bool:
        return self._run.active

    def show(self, step: Step) -> None:
        self._ctl._observe(self._run, step)

    async def compare_elements(self, i: int, j: int, value: Optional[float] = None) -> bool:
        ctl = self._ctl
        ctl.comparisons += 1
        greater = ctl.array[i] > (ctl.array[j] if value is None else value)
        await self._run.checkpoint()
        return greater

    async def swap_elements(self, i: int, j: int) -> None:
        if await self._run.checkpoint():
            arr = self._ctl.array
            arr[i], arr[j] = arr[j], arr[i]
            self._ctl.swaps += 1

    async def write_element(self, index: int, value: float) -> None:
        if await self._run.checkpoint():
            self._ctl.array[index] = value
            self._ctl.swaps += 1

    async def mark_sorted(self, indices: Iterable[int]) -> None:
        done = self._ctl.sorted_indices
        done.extend(k for k in indices if k not in done)

    async def compare_element(self, index: int, target: float) -> bool:
        ctl = self._ctl
        ctl.comparisons += 1
        value = ctl.array[index] if ctl.family is StepKind.SEARCH else index
        await self._run.checkpoint()
        return value == target

    async def mark_visited(self, index: int) -> None:
        if index not in self._ctl.visited:
            self._ctl.visited.append(index)
        await self._run.checkpoint()

    async def mark_found(self, index: int) -> None:
        self._ctl.found_index = index


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state          : Current PlaybackState.
        mode           : PlaybackMode used by the next start().
        step_mode      : Park after every unit of work until next_step().
        speed          : Speed multiplier (see engine.run_context).
        message        : User-facing note (e.g. the precondition fix).
        steps          : Step trace of the loaded input.
        current_index  : Index of the step last shown (-1 before the first).
        on_step        : Optional callback(Step), fired in production order.

    Live data (updated while running):
        array, sorted_indices, visited, found_index, comparisons, swaps
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Step], None]] = None,
        speed: Union[str, float] = "medium",
        mode: PlaybackMode = PlaybackMode.REPLAY,
        step_mode: bool = False,
    ):
        self.state:     PlaybackState = PlaybackState.IDLE
        self.mode:      PlaybackMode  = mode
        self.step_mode: bool          = step_mode
        self.speed:     float         = resolve_speed(speed)
        self.on_step:   Optional[Callable[[Step], None]] = on_step
        self.message:   str           = ""

        self.key:    Optional[str]   = None
        self.inputs: Dict[str, Any]  = {}
        self.steps:  List[Step]      = []
        self.family: Optional[StepKind] = None

        self.current_index: int            = -1
        self._current:      Optional[Step] = None
        self._result:       Any            = None
        self.result:        Any            = None

        self.array:          List[float]   = []
        self.sorted_indices: List[int]     = []
        self.visited:        List[int]     = []
        self.found_index:    Optional[int] = None
        self.comparisons:    int           = 0
        self.swaps:          int           = 0

        self._run:  Optional[RunContext]   = None
        self._task: Optional[asyncio.Task] = None
        # superseded tasks, held until they wind down
        self._retired: Set[asyncio.Task]   = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, key: str, **inputs) -> None:
        """Select algorithm + input.  Cancels any run in flight."""
        info = require_algorithm(key)
        self._cancel_run()
        self.key    = key
        self.family = info.family
        self._prepare(dict(inputs))
        self.message = ""
        self._set_state(PlaybackState.IDLE)
        log.info("loaded %s (%d steps)", key, len(self.steps))

    def start(self) -> bool:
        """
        Begin (or resume) the run.  Returns True if the controller is now
        running; False when there was nothing to do or when the
        precondition-fix fired instead.
        """
        self._require_loaded()

        if self.state is PlaybackState.PAUSED:
            self.pause()
            return True
        if self.state is not PlaybackState.IDLE:
            return False

        fixed, note = fix_precondition(self.key, self.inputs)
        if note:
            self._prepare(fixed)
            self.message = note
            log.info("precondition fixed for %s: %s", self.key, note)
            return False

        self._begin()
        return True

    def pause(self) -> PlaybackState:
        """Toggle RUNNING ⇄ PAUSED.  Other states are left alone."""
        if self.state is PlaybackState.RUNNING:
            self._run.pause()
            self._set_state(PlaybackState.PAUSED)
        elif self.state is PlaybackState.PAUSED:
            self._run.resume()
            self._set_state(PlaybackState.RUNNING)
        return self.state

    def reset(self) -> None:
        """Back to IDLE at step 0, keeping the loaded input."""
        self._cancel_run()
        self._reset_live()
        self.message = ""
        self._set_state(PlaybackState.IDLE)

    def replay(self) -> bool:
        """Restart from step 0 with the same input, whatever the state."""
        self._require_loaded()
        fixed, note = fix_precondition(self.key, self.inputs)
        if note:
            self._prepare(fixed)
        self._begin()
        if note:
            self.message = note
        return True

    # ------------------------------------------------------------------
    # Speed / step mode
    # ------------------------------------------------------------------
    def set_speed(self, speed: Union[str, float]) -> float:
        self.speed = resolve_speed(speed)
        if self._run is not None:
            self._run.set_speed(self.speed)
        return self.speed

    def toggle_step_mode(self) -> bool:
        self.step_mode = not self.step_mode
        if self._run is not None:
            self._run.set_step_mode(self.step_mode)
        log.info("step mode %s", "on" if self.step_mode else "off")
        return self.step_mode

    def next_step(self) -> bool:
        """Release one parked step-mode wait.  Idempotent until the next park."""
        if self._run is None or not self._run.active:
            return False
        return self._run.advance()

    async def wait(self) -> Any:
        """Join the current run; returns the result (None if cancelled)."""
        if self._task is not None:
            await self._task
        return self.result

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        return self._current

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_running(self) -> bool:
        return self.state is PlaybackState.RUNNING

    @property
    def waiting_for_advance(self) -> bool:
        return self._run is not None and self._run.waiting_for_advance

    def snapshot(self) -> Dict[str, Any]:
        return {
            "algorithm":      self.key,
            "state":          self.state.value,
            "mode":           self.mode.value,
            "step_mode":      self.step_mode,
            "speed":          self.speed,
            "message":        self.message,
            "current_index":  self.current_index,
            "total_steps":    self.total_steps,
            "comparisons":    self.comparisons,
            "swaps":          self.swaps,
            "array":          list(self.array),
            "sorted_indices": list(self.sorted_indices),
            "visited":        list(self.visited),
            "found_index":    self.found_index,
        }

    # ------------------------------------------------------------------
    # Run loops
    # ------------------------------------------------------------------
    def _begin(self) -> None:
        loop = asyncio.get_running_loop()
        self._cancel_run()
        self._reset_live()
        self.message = ""
        run = RunContext(speed=self.speed, step_mode=self.step_mode)
        self._run = run
        self._set_state(PlaybackState.RUNNING)
        if self.mode is PlaybackMode.INTERACTIVE:
            self._task = loop.create_task(self._interactive_loop(run))
        else:
            self._task = loop.create_task(self._replay_loop(run))

    async def _replay_loop(self, run: RunContext) -> None:
        last = len(self.steps) - 1
        for idx, step in enumerate(self.steps):
            if not run.active:
                return
            self._show(idx, step)
            if idx < last and not await run.checkpoint():
                return
        if run.active:
            self._finish(run, self._result)

    async def _interactive_loop(self, run: RunContext) -> None:
        result = await execute(_LiveRun(self, run), self.key, **self.inputs)
        if run.active:
            self._finish(run, result)

    def _finish(self, run: RunContext, result: Any) -> None:
        if run is not self._run:
            return
        self.result = result
        self._set_state(PlaybackState.COMPLETED)

    # ------------------------------------------------------------------
    # Step observation
    # ------------------------------------------------------------------
    def _show(self, idx: int, step: Step) -> None:
        """Replay mode: position + live data come from the step itself."""
        self.current_index = idx
        self._current = step
        self._apply(step)
        self._emit(step)

    def _observe(self, run: RunContext, step: Step) -> None:
        """Interactive mode: live data comes from the hooks."""
        if run is not self._run:
            return
        self.current_index += 1
        self._current = step
        self._emit(step)

    def _apply(self, step: Step) -> None:
        if step.kind is StepKind.SORT:
            self.array = list(step.array)
            self.sorted_indices = list(step.sorted_indices)
        elif step.kind is StepKind.SEARCH:
            self.array = list(step.array)
            self.visited = list(step.visited)
            if step.found_index is not None:
                self.found_index = step.found_index
        elif step.kind is StepKind.GRAPH:
            self.visited = list(step.visited)
        elif step.kind is StepKind.TREE:
            self.visited = list(step.visited_nodes)

        for op in step.ops:
            if op.kind in (OpKind.COMPARE, OpKind.INSPECT):
                self.comparisons += 1
            elif op.kind in (OpKind.SWAP, OpKind.WRITE):
                self.swaps += 1
            elif op.kind is OpKind.FOUND:
                self.found_index = op.indices[0]

    def _emit(self, step: Step) -> None:
        log.debug("step %d/%d: %s", self.current_index + 1, self.total_steps, step.description)
        if self.on_step is not None:
            self.on_step(step)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _prepare(self, inputs: Dict[str, Any]) -> None:
        self.inputs = inputs
        self._result, self.steps = run_algorithm(self.key, **inputs)
        self._reset_live()

    def _reset_live(self) -> None:
        self.current_index  = -1
        self._current       = None
        self.result         = None
        self.array          = list(self.inputs.get("array") or ())
        self.sorted_indices = []
        self.visited        = []
        self.found_index    = None
        self.comparisons    = 0
        self.swaps          = 0

    def _cancel_run(self) -> None:
        if self._run is not None:
            self._run.cancel()
        if self._task is not None and not self._task.done():
            self._retired.add(self._task)
            self._task.add_done_callback(self._retired.discard)
        self._run  = None
        self._task = None

    def _require_loaded(self) -> None:
        if self.key is None:
            raise RuntimeError("No algorithm loaded; call load() first")

    def _set_state(self, state: PlaybackState) -> None:
        if state is not self.state:
            log.info("%s: %s → %s", self.key, self.state.value, state.value)
        self.state = state
