# replayfsm/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from replayfsm.interfaces.types import HookFn

logger = logging.getLogger(__name__)


class TransitionEvent(str, Enum):
    """Lifecycle events fired by the state machine around each transition."""

    PRETRANSITION = "pretransition"
    POSTTRANSITION = "posttransition"


async def invoke(fn: Any, *args: Any) -> Any:
    """
    Call a sync or async callable and return its result.

    A synchronous raise and an awaitable that raises both surface as an
    exception from this coroutine.
    """
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def _settle(fn: Any, *args: Any) -> Optional[Exception]:
    """Run a handler to completion and return what it raised, or None. Its return value is discarded."""
    try:
        await invoke(fn, *args)
    except Exception as e:
        return e
    return None


class CallbackRegistry:
    """
    Keeps an ordered list of handlers per event name and fires them jointly.
    Handlers may be plain callables or return awaitables.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[HookFn]] = {}

    def on(self, event: str, handler: HookFn) -> HookFn:
        """
        Register a handler for an event. Handlers are kept in registration order.

        :param event: Event name, e.g. TransitionEvent.POSTTRANSITION or "posttransition".
        :param handler: Callable receiving the arguments passed to fire().
        :return: The registered handler.
        """
        self._handlers.setdefault(self._key(event), []).append(handler)
        return handler

    def handlers(self, event: str) -> Tuple[HookFn, ...]:
        """Return a snapshot of the handlers registered for an event."""
        return tuple(self._handlers.get(self._key(event), ()))

    async def fire(self, event: str, *args: Any) -> None:
        """
        Invoke every handler of an event with the same arguments and wait for
        all of them to settle.

        :raises Exception: The first failure, in registration order, once all
                           handlers have finished.
        """
        handlers = self.handlers(event)
        if not handlers:
            return
        outcomes = await asyncio.gather(*(_settle(h, *args) for h in handlers))
        failures = [error for error in outcomes if error is not None]
        if not failures:
            return
        for extra in failures[1:]:
            logger.debug("Additional %s handler failure: %r", self._key(event), extra)
        raise failures[0]

    @staticmethod
    def _key(event: str) -> str:
        return event.value if isinstance(event, TransitionEvent) else event
