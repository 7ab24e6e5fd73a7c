"""
Runtime helpers that drive an FSM: the run loop, transition logging and
resumption from a log.
"""

from .driver import rerun_fsm, run_fsm
from .transition_log import TransitionRecord, find_resume_args, log_transitions

__all__ = ["run_fsm", "rerun_fsm", "log_transitions", "find_resume_args", "TransitionRecord"]
