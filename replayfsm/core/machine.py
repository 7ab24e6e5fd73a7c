# replayfsm/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from replayfsm.core.errors import InvalidTransitionError, NoValidTransitionError, TransitionInProgressError
from replayfsm.core.hooks import CallbackRegistry, TransitionEvent, invoke
from replayfsm.core.states import EMPTY, ERROR, get_label
from replayfsm.core.transitions import (
    NotApplicable,
    Resolved,
    TransitionRule,
    TransitionTable,
    classify_result,
)
from replayfsm.interfaces.types import AdvanceResult, HookFn, TransitionFn, TransitionInput, TransitionOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreTransition:
    """Payload of the pretransition event."""

    from_state: Any
    input: TransitionInput


@dataclass(frozen=True)
class PostTransition:
    """Payload of the posttransition event."""

    from_state: Any
    to_state: Any
    rule: TransitionRule
    input: TransitionInput
    output: TransitionOutput


class FSM:
    """
    A finite state machine driven one transition at a time by advance().

    States are opaque values. Each starting state has an ordered list of
    TransitionRules; advance() tries them in order until one resolves a next
    state. Hooks registered with on() run before and after every transition.

    A machine is not reentrant: only one advance() may be pending at a time.
    """

    def __init__(self, initial_state: Any = EMPTY) -> None:
        """
        :param initial_state: The state in which this machine begins. Defaults to EMPTY.
        """
        self.current_state = initial_state
        self._transitions = TransitionTable()
        self._callbacks = CallbackRegistry()
        self._in_transition = False

    @property
    def in_transition(self) -> bool:
        """True while an advance() call is pending."""
        return self._in_transition

    @property
    def transitions(self) -> TransitionTable:
        return self._transitions

    @property
    def callbacks(self) -> CallbackRegistry:
        """The hook registry fed by on(); use handlers(event) to inspect it."""
        return self._callbacks

    def on(self, event: str, handler: HookFn) -> HookFn:
        """
        Register a lifecycle hook.

        pretransition handlers receive a PreTransition, posttransition handlers
        a PostTransition. Handlers may be coroutine functions.
        """
        return self._callbacks.on(event, handler)

    def add_transition(
        self,
        state: Any,
        transition_fn: Optional[TransitionFn] = None,
        next_state: Any = None,
        error_state: Any = None,
        prepend: bool = False,
    ) -> TransitionRule:
        """
        Add a transition rule from a starting state.

        :param state: State from which the transition is applicable.
        :param transition_fn: Transition function, see TransitionRule.
        :param next_state: Static next state. transition_fn is still called if
                           given, but unless it raises, next_state wins.
        :param error_state: State to go to if transition_fn raises. Defaults to ERROR.
        :param prepend: If True, the new rule has the highest priority from state.
        :return: The created rule.
        :raises InvalidTransitionError: If neither transition_fn nor next_state is given.
        """
        try:
            rule = TransitionRule(transition_fn=transition_fn, next_state=next_state, error_state=error_state)
        except InvalidTransitionError:
            raise InvalidTransitionError(
                f"cannot add transition from {get_label(state)} without a transition_fn or next_state defined"
            ) from None
        return self._transitions.add(state, rule, prepend)

    def add_rule(self, state: Any, rule: TransitionRule, prepend: bool = False) -> TransitionRule:
        """Add a prebuilt TransitionRule from a starting state."""
        return self._transitions.add(state, rule, prepend)

    async def advance(self, *transition_input: Any) -> AdvanceResult:
        """
        Perform a single transition.

        :param transition_input: Arguments passed to the transition function.
        :return: A tuple ``(new_state, *output)``.
        :raises TransitionInProgressError: If another advance() is pending.
        :raises NoValidTransitionError: If no rule resolves a next state.
        """
        if self._in_transition:
            raise TransitionInProgressError("cannot advance while in transition")
        self._in_transition = True
        try:
            await self._callbacks.fire(
                TransitionEvent.PRETRANSITION,
                PreTransition(from_state=self.current_state, input=transition_input),
            )
            rule, outcome = await self._resolve(transition_input)
        except BaseException:
            self._in_transition = False
            raise

        if outcome is None:
            self._in_transition = False
            raise NoValidTransitionError(
                f"No valid transition from state {get_label(self.current_state)}", state=self.current_state
            )

        previous_state = self.current_state
        self.current_state = outcome.state
        logger.debug("Transition %s -> %s", get_label(previous_state), get_label(outcome.state))

        # posttransition handlers may raise; the committed state is kept either way
        try:
            await self._callbacks.fire(
                TransitionEvent.POSTTRANSITION,
                PostTransition(
                    from_state=previous_state,
                    to_state=outcome.state,
                    rule=rule,
                    input=transition_input,
                    output=outcome.output,
                ),
            )
            return (self.current_state, *outcome.output)
        finally:
            self._in_transition = False

    async def _resolve(self, transition_input: TransitionInput):
        """Try the rules of the current state in order; return (rule, Resolved) or (None, None)."""
        for rule in self._transitions.rules_for(self.current_state):
            if rule.transition_fn is None:
                return rule, Resolved(rule.next_state)
            try:
                result = await invoke(rule.transition_fn, *transition_input)
            except Exception as e:
                error_state = ERROR if rule.error_state is None else rule.error_state
                logger.debug(
                    "Transition function from %s raised %r, routing to %s",
                    get_label(self.current_state),
                    e,
                    get_label(error_state),
                )
                return rule, Resolved(error_state, (e,))
            outcome = classify_result(result, rule.next_state)
            if isinstance(outcome, NotApplicable):
                logger.debug("Rule from %s not applicable, trying next", get_label(self.current_state))
                continue
            return rule, outcome
        return None, None

    def __repr__(self) -> str:
        return f"FSM(current_state={get_label(self.current_state)}, in_transition={self._in_transition})"
