"""
Core package: state tokens, transition rules, the callback registry and the
FSM engine.
"""

from .errors import FSMError, InvalidTransitionError, NoValidTransitionError, TransitionInProgressError
from .hooks import CallbackRegistry, TransitionEvent
from .machine import FSM, PostTransition, PreTransition
from .states import EMPTY, ERROR, State, StateVocabulary, get_label, make_states
from .transitions import NOT_APPLICABLE, NotApplicable, Resolved, TransitionRule, TransitionTable, classify_result

__all__ = [
    # States
    "State",
    "StateVocabulary",
    "EMPTY",
    "ERROR",
    "get_label",
    "make_states",
    # Errors
    "FSMError",
    "InvalidTransitionError",
    "NoValidTransitionError",
    "TransitionInProgressError",
    # Transitions
    "TransitionRule",
    "TransitionTable",
    "NotApplicable",
    "NOT_APPLICABLE",
    "Resolved",
    "classify_result",
    # Machine
    "FSM",
    "PreTransition",
    "PostTransition",
    "CallbackRegistry",
    "TransitionEvent",
]
