# result_command/types.py
from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar, Union

from .result import Result
from .states import CommandState

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")
V = TypeVar("V")

ActionOutcome = Union[Result[T], Awaitable[Result[T]]]
"""What an action returns: a Result, or an awaitable resolving to one."""

CommandAction = Callable[..., ActionOutcome[T]]
CommandAction0 = Callable[[], ActionOutcome[T]]
CommandAction1 = Callable[[A], ActionOutcome[T]]
CommandAction2 = Callable[[A, B], ActionOutcome[T]]

CancelCallback = Callable[[], Any]
"""Invoked synchronously by Command.cancel() while the command is running."""

ObserverListener = Callable[[CommandState[Any]], Any]
"""Process-wide hook receiving every accepted transition of every Command."""

Metadata = Mapping[str, Any]
