"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the counters
the stats panel shows: comparisons, swaps, writes, nodes visited.

Usage:
    rec = Recorder()
    metrics = rec.record("bubble", array=[5, 2, 9, 1, 6])
    rec.export()                     # serialisable snapshot for save/replay

A Recorder can also sit on a PlaybackController's `on_step` hook
(`controller.on_step = rec.record_step`) to capture a live run.
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, require_algorithm, run_algorithm
from algorithms.step import OpKind, Step, StepKind
from graph import Graph
from tree import TreeNode, tree_to_dict


log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the stats panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    family:        str   = ""
    total_steps:   int   = 0          # number of Steps yielded
    comparisons:   int   = 0          # COMPARE + INSPECT ops
    swaps:         int   = 0
    writes:        int   = 0
    visited_count: int   = 0          # visited indices / nodes at the final step
    result:        Any   = None       # the algorithm's return value
    wall_time_ms:  float = 0.0        # wall-clock time to run to completion
    memory_bytes:  int   = 0          # approx size of the step buffer


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after record()).
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo] = None
        self._inputs:    Dict[str, Any]     = {}

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def record(self, algo_key: str, **inputs) -> RunMetrics:
        """Run `algo_key` to completion, keep every step, compute metrics."""
        self._algo_info = require_algorithm(algo_key)
        self._inputs    = dict(inputs)

        started = time.monotonic()
        result, self.steps = run_algorithm(algo_key, **inputs)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(result, wall_ms)
        log.debug("recorded %s: %d steps in %.2f ms", algo_key, len(self.steps), wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Step access (for live playback recording)
    # ------------------------------------------------------------------
    def record_step(self, step: Step) -> None:
        self.steps.append(step)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "inputs":   {name: _plain_input(v) for name, v in self._inputs.items()},
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, result: Any, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        counts = {kind: 0 for kind in OpKind}
        for step in self.steps:
            for op in step.ops:
                counts[op.kind] += 1

        visited = 0
        if last is not None:
            if last.kind is StepKind.SORT:
                visited = len(last.sorted_indices)
            elif last.kind is StepKind.TREE:
                visited = len(last.visited_nodes)
            else:
                visited = len(last.visited)

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            family=info.family.value,
            total_steps=len(self.steps),
            comparisons=counts[OpKind.COMPARE] + counts[OpKind.INSPECT],
            swaps=counts[OpKind.SWAP],
            writes=counts[OpKind.WRITE],
            visited_count=visited,
            result=_plain_input(result),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )


def _plain_input(value: Any) -> Any:
    if isinstance(value, Graph):
        return value.to_dict()
    if isinstance(value, TreeNode):
        return tree_to_dict(value)
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, dict):
        return {str(k): list(v) if isinstance(v, (list, tuple)) else v for k, v in value.items()}
    return value
