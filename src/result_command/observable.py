# result_command/observable.py
"""
Minimal observer primitives shared by commands, projections and inputs.

Listeners are zero-argument callables. A listener that raises is logged and
skipped; the remaining listeners still run. Coroutine functions are scheduled
on the running event loop instead of being called inline.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from .exceptions import DisposedError

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

Listener = Callable[[], Any]


@runtime_checkable
class ValueListenable(Protocol[T_co]):
    """Anything exposing a current `value` plus change notifications."""

    @property
    def value(self) -> T_co: ...

    def add_listener(self, listener: Listener) -> None: ...

    def remove_listener(self, listener: Listener) -> None: ...


class ChangeNotifier:
    """Holds a list of listeners and fans out change notifications."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._pending_tasks: set[asyncio.Task[Any]] = set()
        self._disposed = False

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def add_listener(self, listener: Listener) -> None:
        if self._disposed:
            raise DisposedError(f"{type(self).__name__} was used after being disposed")
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Remove the first registration of `listener`. Unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def notify_listeners(self) -> None:
        # Copy so listeners may unsubscribe themselves while being notified
        for listener in list(self._listeners):
            try:
                if inspect.iscoroutinefunction(listener):
                    task = asyncio.get_running_loop().create_task(listener())
                    self._pending_tasks.add(task)
                    task.add_done_callback(self._on_listener_task_done)
                else:
                    listener()
            except Exception as exc:
                logger.warning(f"Listener error in {type(self).__name__}: {exc!r}")

    def _on_listener_task_done(self, task: asyncio.Task[Any]) -> None:
        self._pending_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"Listener error in {type(self).__name__}: {exc!r}")

    def dispose(self) -> None:
        """Drop every listener. Safe to call more than once."""
        self._listeners.clear()
        self._disposed = True


class ObservableValue(ChangeNotifier, Generic[T]):
    """
    A mutable value that notifies listeners on every assignment.

    Assigning an equal value still notifies, so dependants re-run on each write.
    """

    def __init__(self, value: T) -> None:
        super().__init__()
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._value = new_value
        self.notify_listeners()

    def __repr__(self) -> str:
        return f"ObservableValue({self._value!r})"
