# replayfsm/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator


class State:
    """
    Opaque state token. Two tokens are equal only if they are the same object,
    so states with identical names never collide in transition tables.

    The name is used for diagnostics only (see get_label).
    """

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Descriptive name of the state."""
        return self._name

    def __repr__(self) -> str:
        return f"State({self._name!r})"

    def __str__(self) -> str:
        return self._name


# Process-wide sentinels, compared by identity.
EMPTY = State("EMPTY")
ERROR = State("ERROR")


def get_label(state: Any) -> str:
    """
    Return a human readable label for any state value.

    Uses the state's ``name`` attribute when it is a non-empty string (State
    tokens, enum members), otherwise falls back to ``str(state)``.
    """
    name = getattr(state, "name", None)
    if isinstance(name, str) and name:
        return name
    return str(state)


class StateVocabulary(Mapping):
    """
    Read-only mapping from label to state, with attribute access::

        states = make_states("IDLE", "RUNNING")
        states.IDLE is states["IDLE"]
    """

    def __init__(self, states: Dict[str, Any]) -> None:
        object.__setattr__(self, "_states", dict(states))

    def __getitem__(self, label: str) -> Any:
        return self._states[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __getattr__(self, label: str) -> Any:
        if label.startswith("_"):
            raise AttributeError(label)
        try:
            return self._states[label]
        except KeyError:
            raise AttributeError(f"no state labelled {label!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("StateVocabulary is read-only")

    def __repr__(self) -> str:
        return f"StateVocabulary({', '.join(self._states)})"


def make_states(*states: Any) -> StateVocabulary:
    """
    Build a vocabulary of mutually distinct states.

    :param states: Names (a new State token is created for each) or existing
                   state values (kept as-is and keyed by their label).
    :return: A StateVocabulary keyed by label.
    :raises ValueError: If two states share the same label.
    """
    vocabulary: Dict[str, Any] = {}
    for state in states:
        if isinstance(state, str):
            state = State(state)
        label = get_label(state)
        if label in vocabulary:
            raise ValueError(f"duplicate state label: {label}")
        vocabulary[label] = state
    return StateVocabulary(vocabulary)
