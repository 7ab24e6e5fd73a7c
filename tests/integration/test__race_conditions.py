# tests/integration/test__race_conditions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import asyncio
import random

import pytest
from async_timeout import timeout

from replayfsm import FSM, TransitionInProgressError, log_transitions, make_states, run_fsm

STATES = make_states("START", "WORK", "END")


def make_worker(steps: int) -> FSM:
    async def work(n):
        await asyncio.sleep(random.uniform(0, 0.005))
        if n >= steps:
            return [STATES.END, n]
        return [STATES.WORK, n + 1]

    fsm = FSM(STATES.START)
    fsm.add_transition(STATES.START, next_state=STATES.WORK, transition_fn=lambda n: [n])
    fsm.add_transition(STATES.WORK, transition_fn=work)
    return fsm


@pytest.mark.asyncio
async def test_independent_instances_run_concurrently():
    machines = [make_worker(steps) for steps in range(1, 9)]
    logs = [log_transitions(m) for m in machines]
    async with timeout(5):
        results = await asyncio.gather(*(run_fsm(m, [STATES.END], 0) for m in machines))
    for steps, (result, log) in enumerate(zip(results, logs), start=1):
        assert result == (STATES.END, steps)
        assert len(log) == steps + 2
    assert all(not m.in_transition for m in machines)


@pytest.mark.asyncio
async def test_concurrent_advance_calls_on_one_instance():
    fsm = make_worker(3)
    gate = asyncio.Event()

    async def hold(_):
        await gate.wait()

    fsm.on("pretransition", hold)
    first = asyncio.ensure_future(fsm.advance(0))
    await asyncio.sleep(0)

    others = await asyncio.gather(*(fsm.advance(0) for _ in range(5)), return_exceptions=True)
    assert all(isinstance(r, TransitionInProgressError) for r in others)

    gate.set()
    async with timeout(1):
        assert await first == (STATES.WORK, 0)
    assert fsm.in_transition is False


@pytest.mark.asyncio
async def test_stalled_transition_can_be_bounded_by_caller():
    states = make_states("A", "B")
    fsm = FSM(states.A)
    fsm.add_transition(states.A, transition_fn=lambda: asyncio.Event().wait(), next_state=states.B)

    with pytest.raises(asyncio.TimeoutError):
        async with timeout(0.05):
            await fsm.advance()
    assert fsm.in_transition is False
    assert fsm.current_state is states.A
