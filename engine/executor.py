"""
executor.py — Interactive Execution
====================================
Runs an algorithm *live*: instead of collecting the step trace, every
operation a step announces is handed to an awaited hook on an
ExecutionContext.  The hook's await is the only place the run suspends;
between hooks the generator runs synchronously.

    result = await execute(context, "bubble", array=[5, 2, 9])

The generator driven here is the same one `generate_steps` drains, so a
live run and a replayed trace perform identical comparisons and swaps in
identical order.

Cancellation is cooperative: `context.is_sorting` is re-read before every
step is pulled and before every hook call.  Once it reads False the run
stops and `execute` returns None.
"""

from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

from algorithms import make_generator
from algorithms.step import Operation, OpKind, Step


# ---------------------------------------------------------------------------
# Hook surface
# ---------------------------------------------------------------------------
class ExecutionContext:
    """
    Base context.  Every hook is a no-op; subclasses override the ones
    they care about.  Hook return values are informational only: the
    algorithm's control flow is decided by the generator.
    """

    @property
    def is_sorting(self) -> bool:
        """Live run flag.  Must be computed on access, never cached."""
        return True

    def show(self, step: Step) -> None:
        """Called synchronously with each step before its hooks run."""

    # -- arrays -----------------------------------------------------------
    async def compare_elements(self, i: int, j: int, value: Optional[float] = None) -> bool:
        """arr[i] > arr[j]; when `value` is set (insertion sort's key) it
        stands in for arr[j], whose slot may already hold a shifted copy."""
        return False

    async def swap_elements(self, i: int, j: int) -> None:
        pass

    async def write_element(self, index: int, value: float) -> None:
        pass

    async def mark_sorted(self, indices: Iterable[int]) -> None:
        pass

    # -- search / graph / tree -------------------------------------------
    async def compare_element(self, index: int, target: float) -> bool:
        return False

    async def mark_visited(self, index: int) -> None:
        pass

    async def mark_found(self, index: int) -> None:
        pass


# ---------------------------------------------------------------------------
# Dispatch table: OpKind → hook call
# ---------------------------------------------------------------------------
_HOOKS: Dict[OpKind, Callable[[ExecutionContext, Operation], Awaitable[Any]]] = {
    OpKind.COMPARE:     lambda ctx, op: ctx.compare_elements(op.indices[0], op.indices[1], op.value),
    OpKind.SWAP:        lambda ctx, op: ctx.swap_elements(op.indices[0], op.indices[1]),
    OpKind.WRITE:       lambda ctx, op: ctx.write_element(op.indices[0], op.value),
    OpKind.MARK_SORTED: lambda ctx, op: ctx.mark_sorted(list(op.indices)),
    OpKind.INSPECT:     lambda ctx, op: ctx.compare_element(op.indices[0], op.value),
    OpKind.VISIT:       lambda ctx, op: ctx.mark_visited(op.indices[0]),
    OpKind.FOUND:       lambda ctx, op: ctx.mark_found(op.indices[0]),
}


async def dispatch(context: ExecutionContext, op: Operation) -> Any:
    """Await the hook matching `op`."""
    return await _HOOKS[op.kind](context, op)


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------
async def execute(context: ExecutionContext, key: str, **inputs) -> Any:
    """
    Drive algorithm `key` over `inputs`, awaiting one hook per operation.

    Returns the algorithm's result (as `run_algorithm` would), or None if
    the run was cancelled through `context.is_sorting`.
    Raises ValueError for an unknown key or missing inputs.
    """
    gen = make_generator(key, **inputs)
    try:
        while True:
            if not context.is_sorting:
                return None
            try:
                step = next(gen)
            except StopIteration as stop:
                return stop.value

            context.show(step)
            for op in step.ops:
                if not context.is_sorting:
                    return None
                await dispatch(context, op)
    finally:
        gen.close()
