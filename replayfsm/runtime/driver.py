# replayfsm/runtime/driver.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Sequence, Tuple

from replayfsm.core.machine import FSM
from replayfsm.core.states import ERROR, get_label
from replayfsm.interfaces.types import AdvanceResult
from replayfsm.runtime.transition_log import TransitionRecord, find_resume_args

logger = logging.getLogger(__name__)


def _normalize_final_states(final_states: Any) -> Tuple[Any, ...]:
    if isinstance(final_states, (list, tuple, set, frozenset)):
        return tuple(final_states)
    return (final_states, ERROR)


async def run_fsm(fsm: FSM, final_states: Any, *transition_input: Any) -> AdvanceResult:
    """
    Keep advancing fsm until a final state is reached.

    The output of each step is passed as input to the next one. At least one
    step is always taken.

    :param fsm: The machine to drive.
    :param final_states: A collection of stopping states, or a single state
                         (in which case ERROR also stops the run).
    :param transition_input: Input of the first step.
    :return: The last ``(state, *output)`` returned by advance().
    """
    final_states = _normalize_final_states(final_states)
    args = transition_input
    while True:
        result = await fsm.advance(*args)
        state, *args = result
        logger.debug("Run step reached %s", get_label(state))
        if state in final_states:
            return result


async def rerun_fsm(
    fsm: FSM,
    resume_state: Any,
    final_states: Any,
    log: Sequence[TransitionRecord] = (),
) -> AdvanceResult:
    """
    Resume a run from resume_state using a previously recorded transition log.

    The input of the first step is the output of the last logged transition
    into resume_state. The machine is moved to resume_state directly, without
    running hooks or transition functions.

    :param fsm: The machine to drive, usually a fresh one.
    :param resume_state: State to continue from.
    :param final_states: As for run_fsm().
    :param log: Records produced by log_transitions() on an earlier run.
    :return: The last ``(state, *output)`` returned by advance().
    """
    args = find_resume_args(log, resume_state)
    logger.info("Resuming at %s with %d argument(s)", get_label(resume_state), len(args))
    fsm.current_state = resume_state
    return await run_fsm(fsm, final_states, *args)
