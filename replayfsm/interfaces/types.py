# replayfsm/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Awaitable, Callable, Tuple, Union

# Transition data
TransitionInput = Tuple[Any, ...]
TransitionOutput = Tuple[Any, ...]
AdvanceResult = Tuple[Any, ...]

# Callback Types
TransitionFn = Callable[..., Union[Any, Awaitable[Any]]]
HookFn = Callable[..., Union[None, Awaitable[None]]]
