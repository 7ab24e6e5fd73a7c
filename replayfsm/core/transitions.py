# replayfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from replayfsm.core.errors import InvalidTransitionError
from replayfsm.interfaces.types import TransitionFn, TransitionOutput


@dataclass(frozen=True, eq=False)
class TransitionRule:
    """
    A candidate transition out of one starting state.

    :param transition_fn: Called with the transition input. When next_state is
                          not set, its return value decides the next state:
                          a falsy value means the rule does not apply, a
                          list/tuple is read as ``[next_state, *output]``, and
                          any other value is the next state itself.
    :param next_state: Static destination. When set, it wins over the return
                       value of transition_fn, which then becomes output.
    :param error_state: Destination when transition_fn raises. Defaults to ERROR.
    """

    transition_fn: Optional[TransitionFn] = None
    next_state: Any = None
    error_state: Any = None

    def __post_init__(self) -> None:
        if self.transition_fn is None and self.next_state is None:
            raise InvalidTransitionError("transition rule requires a transition_fn or next_state")


@dataclass(frozen=True)
class NotApplicable:
    """The rule did not produce a next state; the next candidate is tried."""


@dataclass(frozen=True)
class Resolved:
    """The rule produced a next state and the output to hand back to the caller."""

    state: Any
    output: TransitionOutput = ()


NOT_APPLICABLE = NotApplicable()

TransitionOutcome = Union[NotApplicable, Resolved]


_SIZED_VALUES = (str, bytes, list, tuple, dict, set, frozenset)


def _is_empty(result: Any) -> bool:
    if result is None or isinstance(result, bool):
        return not result
    if isinstance(result, (int, float, complex) + _SIZED_VALUES):
        return not result
    return False


def classify_result(result: Any, next_state: Any = None) -> TransitionOutcome:
    """
    Turn the return value of a transition function into an outcome.

    :param result: Whatever the transition function returned (already awaited).
                   Only None, False, numeric zero and empty builtin containers
                   count as empty; any other object is a value, whatever its
                   __bool__ does.
    :param next_state: The rule's static next state, if any.
    :return: NOT_APPLICABLE or a Resolved outcome.
    """
    has_static = next_state is not None
    if _is_empty(result):
        return Resolved(next_state) if has_static else NOT_APPLICABLE
    if isinstance(result, (list, tuple)):
        if has_static:
            return Resolved(next_state, tuple(result))
        state, *output = result
        if state is None:
            return NOT_APPLICABLE
        return Resolved(state, tuple(output))
    if has_static:
        return Resolved(next_state, (result,))
    return Resolved(result)


class TransitionTable:
    """
    Ordered transition rules per starting state. Earlier rules have higher
    priority. No reachability or determinism checks are made.
    """

    def __init__(self) -> None:
        self._rules: Dict[Any, List[TransitionRule]] = {}

    def add(self, state: Any, rule: TransitionRule, prepend: bool = False) -> TransitionRule:
        """
        Register a rule for a starting state.

        :param state: The state the rule applies from.
        :param rule: The rule to add.
        :param prepend: If True, the rule gets the highest priority for this state.
        """
        rules = self._rules.setdefault(state, [])
        if prepend:
            rules.insert(0, rule)
        else:
            rules.append(rule)
        return rule

    def rules_for(self, state: Any) -> Tuple[TransitionRule, ...]:
        """Rules for a starting state, highest priority first."""
        return tuple(self._rules.get(state, ()))

    def states(self) -> Tuple[Any, ...]:
        """Starting states that have at least one rule."""
        return tuple(self._rules)

    def __contains__(self, state: Any) -> bool:
        return state in self._rules

    def __len__(self) -> int:
        return len(self._rules)
