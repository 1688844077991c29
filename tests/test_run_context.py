import asyncio

import pytest

from engine import BASE_DELAY, SPEED_PRESETS, RunContext, resolve_speed


async def until(condition, timeout=2.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() > deadline:
            raise AssertionError("condition never became true")
        await asyncio.sleep(0.001)


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def test_resolve_speed():
    assert resolve_speed("fast") == SPEED_PRESETS["fast"]
    assert resolve_speed("2") == 2.0
    assert resolve_speed(3) == 3.0


@pytest.mark.parametrize("speed", [0, -1, "warp", "0"])
def test_resolve_speed_rejects(speed):
    with pytest.raises(ValueError):
        resolve_speed(speed)


def test_delay_follows_speed():
    async def scenario():
        run = RunContext(speed=4)
        assert run.delay == BASE_DELAY / 4
        run.set_speed("slow")
        assert run.delay == BASE_DELAY / SPEED_PRESETS["slow"]

    asyncio.run(scenario())


# ---------------------------------------------------------------------------
# Checkpoint
# ---------------------------------------------------------------------------
def test_checkpoint_continues_while_active():
    async def scenario():
        run = RunContext(speed=1000)
        assert await run.checkpoint() is True

    asyncio.run(scenario())


def test_cancel_releases_a_sleeping_checkpoint():
    async def scenario():
        run = RunContext(speed=0.01)          # 100 s delay
        task = asyncio.ensure_future(run.checkpoint())
        await asyncio.sleep(0)
        run.cancel()
        assert await asyncio.wait_for(task, 1.0) is False
        assert await run.checkpoint() is False

    asyncio.run(scenario())


def test_pause_holds_the_checkpoint_until_resume():
    async def scenario():
        run = RunContext(speed=1000)
        run.pause()
        task = asyncio.ensure_future(run.checkpoint())
        await asyncio.sleep(0.02)
        assert run.paused
        assert not task.done()

        run.resume()
        assert await asyncio.wait_for(task, 1.0) is True

    asyncio.run(scenario())


def test_cancel_releases_a_paused_checkpoint():
    async def scenario():
        run = RunContext(speed=1000)
        run.pause()
        task = asyncio.ensure_future(run.checkpoint())
        await asyncio.sleep(0.01)
        run.cancel()
        assert await asyncio.wait_for(task, 1.0) is False

    asyncio.run(scenario())


# ---------------------------------------------------------------------------
# Step mode
# ---------------------------------------------------------------------------
def test_advance_releases_exactly_one_park():
    async def scenario():
        run = RunContext(step_mode=True)
        assert run.advance() is False           # nothing parked yet

        task = asyncio.ensure_future(run.checkpoint())
        await until(lambda: run.waiting_for_advance)
        assert run.advance() is True
        assert run.advance() is False
        assert await asyncio.wait_for(task, 1.0) is True
        assert not run.waiting_for_advance

    asyncio.run(scenario())


def test_leaving_step_mode_releases_a_parked_checkpoint():
    async def scenario():
        run = RunContext(step_mode=True)
        task = asyncio.ensure_future(run.checkpoint())
        await until(lambda: run.waiting_for_advance)

        run.set_step_mode(False)
        assert await asyncio.wait_for(task, 1.0) is True

    asyncio.run(scenario())


def test_cancel_releases_a_parked_checkpoint():
    async def scenario():
        run = RunContext(step_mode=True)
        task = asyncio.ensure_future(run.checkpoint())
        await until(lambda: run.waiting_for_advance)

        run.cancel()
        assert await asyncio.wait_for(task, 1.0) is False
        assert run.advance() is False

    asyncio.run(scenario())
