"""replayfsm: asynchronous finite state machine engine with transition logging and resumption.

A machine holds a current state and, per state, a priority-ordered list of
transition rules. advance() performs one transition, run_fsm() advances until a
final state, and rerun_fsm() resumes a run from a recorded transition log.

Example::

    states = make_states("A", "B")
    fsm = FSM(states.A)
    fsm.add_transition(states.A, next_state=states.B)
    state, *output = await fsm.advance()
"""

from .core import (
    EMPTY,
    ERROR,
    FSM,
    FSMError,
    InvalidTransitionError,
    NoValidTransitionError,
    PostTransition,
    PreTransition,
    State,
    TransitionEvent,
    TransitionInProgressError,
    TransitionRule,
    get_label,
    make_states,
)
from .runtime import TransitionRecord, find_resume_args, log_transitions, rerun_fsm, run_fsm

__version__ = "0.1.0"

__all__ = [
    "EMPTY",
    "ERROR",
    "FSM",
    "FSMError",
    "InvalidTransitionError",
    "NoValidTransitionError",
    "PostTransition",
    "PreTransition",
    "State",
    "TransitionEvent",
    "TransitionInProgressError",
    "TransitionRule",
    "TransitionRecord",
    "find_resume_args",
    "get_label",
    "log_transitions",
    "make_states",
    "rerun_fsm",
    "run_fsm",
]
