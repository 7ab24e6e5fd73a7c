# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, List

import pytest

from replayfsm.core.machine import FSM
from replayfsm.core.states import make_states


class RecordingHook:
    """Collects the payloads it is called with."""

    def __init__(self) -> None:
        self.calls: List[Any] = []

    def __call__(self, payload: Any) -> None:
        self.calls.append(payload)


@pytest.fixture
def states():
    """A small vocabulary of distinct states."""
    return make_states("A", "B", "C", "ERR1", "ERR2")


@pytest.fixture
def machine(states):
    """A machine starting in states.A with no rules."""
    return FSM(states.A)


@pytest.fixture
def recording_hook():
    return RecordingHook()


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from replayfsm.core.errors import (
        FSMError,
        InvalidTransitionError,
        NoValidTransitionError,
        TransitionInProgressError,
    )

    return (FSMError, InvalidTransitionError, NoValidTransitionError, TransitionInProgressError)
