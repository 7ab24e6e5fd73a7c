# replayfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any


class FSMError(Exception):
    """
    Base exception class for structural errors raised by the state machine
    engine itself (misuse of the API, as opposed to failures of user code).
    """


class TransitionInProgressError(FSMError):
    """
    Raised when advance() is called while a previous advance() on the same
    machine has not settled yet.
    """


class InvalidTransitionError(FSMError):
    """
    Raised when a transition rule defines neither a transition function nor a
    next state.
    """


class NoValidTransitionError(FSMError):
    """
    Raised when no registered rule resolves a next state from the current state.
    """

    def __init__(self, message: str, state: Any = None) -> None:
        super().__init__(message)
        self.state = state
