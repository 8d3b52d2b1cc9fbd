# result_command/typed_commands.py
"""
Fixed-arity front ends for Command.

Each class binds the call-time arguments to its stored action and hands the
bound call to the shared Command engine. They add no state of their own.
"""

from __future__ import annotations

import functools
from typing import Generic, TypeVar

from .command import Command
from .history import DEFAULT_MAX_HISTORY_LENGTH
from .types import CancelCallback, CommandAction0, CommandAction1, CommandAction2

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")


class Command0(Command[T]):
    """A Command whose action takes no arguments."""

    def __init__(
        self,
        action: CommandAction0[T],
        on_cancel: CancelCallback | None = None,
        max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH,
        *,
        name: str | None = None,
        timeout: float | None = None,
    ):
        super().__init__(action, on_cancel, max_history_length, name=name, timeout=timeout)

    async def execute(self, *, timeout: float | None = None) -> None:  # type: ignore[override]
        await self._execute(functools.partial(self._action), timeout=timeout)


class Command1(Command[T], Generic[T, A]):
    """A Command whose action takes one argument."""

    def __init__(
        self,
        action: CommandAction1[T, A],
        on_cancel: CancelCallback | None = None,
        max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH,
        *,
        name: str | None = None,
        timeout: float | None = None,
    ):
        super().__init__(action, on_cancel, max_history_length, name=name, timeout=timeout)

    async def execute(self, argument: A, *, timeout: float | None = None) -> None:  # type: ignore[override]
        await self._execute(functools.partial(self._action, argument), timeout=timeout)


class Command2(Command[T], Generic[T, A, B]):
    """A Command whose action takes two arguments."""

    def __init__(
        self,
        action: CommandAction2[T, A, B],
        on_cancel: CancelCallback | None = None,
        max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH,
        *,
        name: str | None = None,
        timeout: float | None = None,
    ):
        super().__init__(action, on_cancel, max_history_length, name=name, timeout=timeout)

    async def execute(  # type: ignore[override]
        self,
        first: A,
        second: B,
        *,
        timeout: float | None = None,
    ) -> None:
        await self._execute(functools.partial(self._action, first, second), timeout=timeout)
