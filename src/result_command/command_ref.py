# result_command/command_ref.py
"""
CommandRef - a Command whose input is derived from other observables.

    count = ObservableValue(0)
    doubled = CommandRef(lambda ref: ref(count), double)

    count.value = 5      # schedules doubled.execute() with input 5

`derive` receives a `ref` function. Every observable passed to `ref` is tracked
and subscribed once; `ref` returns its current value. Any tracked observable
notifying schedules a new execution, which re-runs `derive` (and may discover
more observables). The usual "already running" guard applies.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .command import Command
from .history import DEFAULT_MAX_HISTORY_LENGTH
from .observable import ValueListenable
from .types import CancelCallback, CommandAction1

logger = logging.getLogger(__name__)

T = TypeVar("T")
W = TypeVar("W")
V = TypeVar("V")

Ref = Callable[[ValueListenable[V]], V]
"""Reads an observable's value and tracks it as a dependency."""


class CommandRef(Command[T], Generic[T, W]):
    def __init__(
        self,
        derive: Callable[[Ref[Any]], W],
        action: CommandAction1[T, W],
        on_cancel: CancelCallback | None = None,
        max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH,
        *,
        name: str | None = None,
        timeout: float | None = None,
    ):
        super().__init__(action, on_cancel, max_history_length, name=name, timeout=timeout)
        self._derive = derive
        self._tracked: list[ValueListenable[Any]] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._disposed = False

        # Discover dependencies without executing
        self._derive(self._ref)

    @property
    def tracked(self) -> tuple[ValueListenable[Any], ...]:
        """Observables this command currently listens to."""
        return tuple(self._tracked)

    def _ref(self, listenable: ValueListenable[V]) -> V:
        if not self._disposed and not any(t is listenable for t in self._tracked):
            self._tracked.append(listenable)
            listenable.add_listener(self._on_dependency_changed)
            logger.debug(f"CommandRef '{self.name}' now tracks {listenable!r}")
        return listenable.value

    def _on_dependency_changed(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"CommandRef '{self.name}': no running event loop, change ignored")
            return

        task = loop.create_task(self.execute())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def execute(self, *, timeout: float | None = None) -> None:  # type: ignore[override]
        """Derive the input from the tracked observables and run the action."""
        await self._execute(lambda: self._action(self._derive(self._ref)), timeout=timeout)

    async def wait_for_pending(self) -> None:
        """Wait for executions scheduled by dependency changes to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def dispose(self) -> None:
        """
        Unsubscribe from every tracked observable and cancel executions that
        dependency changes scheduled. Safe to call more than once.
        """
        for task in list(self._tasks):
            task.cancel()
        for listenable in self._tracked:
            listenable.remove_listener(self._on_dependency_changed)
        if self._tracked:
            logger.debug(f"CommandRef '{self.name}' released {len(self._tracked)} observables")
        self._tracked.clear()
        self._disposed = True
        super().dispose()
