# replayfsm/runtime/transition_log.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from replayfsm.core.hooks import TransitionEvent
from replayfsm.core.machine import FSM, PostTransition
from replayfsm.core.transitions import TransitionRule
from replayfsm.interfaces.types import TransitionInput, TransitionOutput


@dataclass(frozen=True)
class TransitionRecord:
    """One committed transition, as appended to a transition log."""

    time: datetime
    from_state: Any
    to_state: Any
    rule: TransitionRule
    input: TransitionInput
    output: TransitionOutput


def log_transitions(fsm: FSM, log: Optional[List[TransitionRecord]] = None) -> List[TransitionRecord]:
    """
    Record every committed transition of fsm into a list.

    :param fsm: The machine to observe.
    :param log: List to append to. A new list is created if omitted.
    :return: The log list; it keeps growing as the machine advances.
    """
    if log is None:
        log = []

    def _record(event: PostTransition) -> None:
        log.append(
            TransitionRecord(
                time=datetime.now(timezone.utc),
                from_state=event.from_state,
                to_state=event.to_state,
                rule=event.rule,
                input=event.input,
                output=event.output,
            )
        )

    fsm.on(TransitionEvent.POSTTRANSITION, _record)
    return log


def find_resume_args(log: Sequence[TransitionRecord], state: Any) -> TransitionOutput:
    """
    Return the output of the most recent transition into state, or () if the
    log never reached it.
    """
    for record in reversed(log):
        if record.to_state == state:
            return tuple(record.output)
    return ()
