# result_command/command.py
"""
Command - observable wrapper around an asynchronous action.

A Command runs a user-supplied action that returns a Result, and exposes the
lifecycle of that action as a CommandState:

    Idle --execute--> Running --Success(v)--> SuccessCommand(v)
                      Running --Failure(e) / raise--> FailureCommand(e)
                      Running --cancel() / timeout--> CancelledCommand
    Success | Failure | Cancelled --reset()--> Idle

Every accepted transition is recorded in the command's CommandHistory, sent to
the process-wide observer (if one is registered) and fanned out to local
listeners. A transition is accepted only when its kind differs from the current
state's kind, so back-to-back states of the same kind collapse into one entry.

Cancellation is cooperative: cancel() only changes the observable state and
calls on_cancel. Stopping the underlying work is the callback's job. A result
that arrives after cancellation is discarded.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any, ClassVar, Generic, TypeVar

from .config import CommandConfig
from .exceptions import (
    CancelCallbackError,
    CommandTimeoutError,
    ConfigValidationError,
    UnexpectedActionError,
)
from .filtered import FilteredObservable
from .history import DEFAULT_MAX_HISTORY_LENGTH, CommandHistory, CommandHistoryEntry
from .observable import ChangeNotifier, Listener
from .result import Failure, Result
from .states import (
    CancelledCommand,
    CommandState,
    FailureCommand,
    IdleCommand,
    RunningCommand,
    SuccessCommand,
)
from .types import ActionOutcome, CancelCallback, CommandAction, Metadata, ObserverListener

logger = logging.getLogger(__name__)

T = TypeVar("T")
W = TypeVar("W")
C = TypeVar("C", bound="Command[Any]")


class Command(Generic[T]):
    """
    Stateful, observable wrapper around an action returning Result[T].

    Use Command0 / Command1 / Command2 for typed call signatures, or CommandRef
    to derive the action's input from other observables.
    """

    _observer: ClassVar[ObserverListener | None] = None

    def __init__(
        self,
        action: CommandAction[T],
        on_cancel: CancelCallback | None = None,
        max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH,
        *,
        name: str | None = None,
        timeout: float | None = None,
    ):
        if timeout is not None and timeout <= 0:
            raise ConfigValidationError("timeout must be positive")

        self._action = action
        self._on_cancel = on_cancel
        self.name: str = name or getattr(action, "__name__", type(self).__name__)
        self.timeout = timeout
        """Default timeout (seconds) used when execute() is called without one."""

        self._history: CommandHistory[T] = CommandHistory(max_history_length)
        self._notifier = ChangeNotifier()

        self._state: CommandState[T] = IdleCommand()
        self._cached_success: T | None = None
        self._cached_failure: Exception | None = None

        # History is empty, so this first Idle is always recorded
        self.set_state(IdleCommand(), metadata={"reason": "Command created"})

    @classmethod
    def from_config(
        cls: type[C],
        config: CommandConfig,
        *callables: Callable[..., Any],
        on_cancel: CancelCallback | None = None,
    ) -> C:
        """
        Build a command from a CommandConfig.

        `callables` are the positional callables the concrete class expects:
        the action for Command0/1/2, or (derive, action) for CommandRef.
        """
        return cls(
            *callables,
            on_cancel=on_cancel,
            max_history_length=config.max_history_length,
            name=config.name,
            timeout=config.timeout_secs,
        )

    # ------------------------------------------------------------------ #
    # Process-wide observer
    # ------------------------------------------------------------------ #
    @classmethod
    def set_observer_listener(cls, listener: ObserverListener | None) -> None:
        """
        Register the observer that receives every accepted transition of every
        command. Only one observer exists; the last registration wins.
        """
        Command._observer = listener

    @classmethod
    def clear_observer_listener(cls) -> None:
        Command._observer = None

    def _notify_observer(self, state: CommandState[T]) -> None:
        observer = Command._observer
        if observer is None:
            return
        try:
            observer(state)
        except Exception as exc:
            logger.warning(f"Observer error for command '{self.name}': {exc!r}")

    # ------------------------------------------------------------------ #
    # Inspection
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> CommandState[T]:
        """Current state."""
        return self._state

    @property
    def value(self) -> CommandState[T]:
        """Alias of `state`, so a Command can be used as a ValueListenable."""
        return self._state

    @property
    def state_history(self) -> tuple[CommandHistoryEntry[T], ...]:
        """Snapshot of recorded transitions, oldest first."""
        return self._history.snapshot()

    @property
    def max_history_length(self) -> int:
        return self._history.max_length

    def get_cached_success(self) -> T | None:
        """Payload of the last Success seen since the last reset()."""
        return self._cached_success

    def get_cached_failure(self) -> Exception | None:
        """Error of the last Failure seen since the last reset()."""
        return self._cached_failure

    @property
    def is_idle(self) -> bool:
        return self._state.is_idle

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def is_success(self) -> bool:
        return self._state.is_success

    @property
    def is_failure(self) -> bool:
        return self._state.is_failure

    @property
    def is_cancelled(self) -> bool:
        return self._state.is_cancelled

    # ------------------------------------------------------------------ #
    # Subscription
    # ------------------------------------------------------------------ #
    def add_listener(self, listener: Listener) -> None:
        self._notifier.add_listener(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._notifier.remove_listener(listener)

    @property
    def has_listeners(self) -> bool:
        return self._notifier.has_listeners

    def add_when_listener(
        self,
        *,
        on_idle: Callable[[], Any] | None = None,
        on_running: Callable[[], Any] | None = None,
        on_success: Callable[[T], Any] | None = None,
        on_failure: Callable[[Exception], Any] | None = None,
        on_cancelled: Callable[[], Any] | None = None,
        or_else: Callable[[], Any] | None = None,
    ) -> Callable[[], None]:
        """
        Subscribe per-state handlers.

        The handlers run once right away for the current state, then on every
        accepted transition. Returns a function that unsubscribes them.
        """

        def listener() -> None:
            self._state.maybe_when(
                idle=on_idle,
                running=on_running,
                success=on_success,
                failure=on_failure,
                cancelled=on_cancelled,
                or_else=or_else,
            )

        self.add_listener(listener)
        try:
            listener()
        except Exception as exc:
            logger.warning(f"When-listener error for command '{self.name}': {exc!r}")

        def remove() -> None:
            self.remove_listener(listener)

        return remove

    def filter(
        self,
        default_value: W,
        transform: Callable[[CommandState[T]], W | None],
    ) -> FilteredObservable[W]:
        """
        Derive an observable that only updates on states `transform` maps to a
        non-None value.

        Example:
            errors = command.filter("", lambda s: str(s.error) if s.is_failure else None)
        """
        return FilteredObservable(default_value, self, transform)

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #
    def set_state(self, new_state: CommandState[T], metadata: Metadata | None = None) -> bool:
        """
        Move to `new_state` and publish it.

        The success/failure cache is always updated. The transition itself is
        dropped when `new_state` has the same kind as the current state (unless
        nothing has been recorded yet); in that case the current state, its
        payload included, is kept and nobody is notified.

        Returns True if the transition was accepted.
        """
        if new_state.is_success:
            self._cached_success = new_state.value  # type: ignore[attr-defined]
        elif new_state.is_failure:
            self._cached_failure = new_state.error  # type: ignore[attr-defined]

        if self._history and new_state.same_kind(self._state):
            logger.debug(
                f"Command '{self.name}': already {self._state.instance_name}, "
                f"not recording {new_state!r}"
            )
            return False

        previous = self._state
        self._state = new_state
        self._history.record(new_state, metadata)
        logger.debug(f"Command '{self.name}': {previous.instance_name} -> {new_state.instance_name}")

        self._notify_observer(new_state)
        self._notifier.notify_listeners()
        return True

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    async def execute(self, *args: Any, timeout: float | None = None) -> None:
        """
        Run the action with `args`.

        Does nothing if the command is already running. Never raises for action
        failures; observe `state` for the outcome.

        Args:
            *args: Positional arguments passed to the action.
            timeout: Seconds to wait before cancelling. Defaults to self.timeout.
        """
        await self._execute(functools.partial(self._action, *args), timeout=timeout)

    async def _execute(
        self,
        invoke: Callable[[], ActionOutcome[T]],
        *,
        timeout: float | None = None,
    ) -> None:
        # Ensure the action can't launch multiple times
        if self._state.is_running:
            logger.debug(f"Command '{self.name}' is already running → ignoring execute()")
            return

        if timeout is None:
            timeout = self.timeout

        self.set_state(RunningCommand(), metadata={"status": "Execution started"})

        # cancel() or a timeout may move us off Running while awaiting; any
        # outcome arriving after that is dropped
        try:
            result = await self._run_action(invoke, timeout)
            if not isinstance(result, Result):
                raise TypeError(
                    f"Action for command '{self.name}' must return a Result, "
                    f"got {type(result).__name__}"
                )

        except asyncio.CancelledError:
            logger.info(f"Command '{self.name}' was cancelled in async context")
            self.cancel()
            return

        except Exception as exc:
            if not self._state.is_running:
                logger.debug(
                    f"Command '{self.name}': discarding late action error {exc!r}, "
                    f"state is already {self._state.instance_name}"
                )
                return
            logger.exception(f"Command '{self.name}' action raised")
            self.set_state(
                FailureCommand(UnexpectedActionError(exc)),
                metadata=_error_metadata(exc),
            )
            return

        new_state: CommandState[T] = result.fold(SuccessCommand, FailureCommand)

        if not self._state.is_running:
            logger.debug(
                f"Command '{self.name}': discarding stale {new_state.instance_name}, "
                f"state is already {self._state.instance_name}"
            )
            return

        self.set_state(new_state, metadata={"status": "Execution completed"})

    async def _run_action(
        self,
        invoke: Callable[[], ActionOutcome[T]],
        timeout: float | None,
    ) -> Result[T]:
        """Invoke the action, racing it against `timeout` when one is given."""
        outcome = invoke()
        if not inspect.isawaitable(outcome):
            return outcome

        if timeout is None:
            return await outcome

        task = asyncio.ensure_future(outcome)
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.add_done_callback(self._discard_late_completion)
            raise

        if task in done:
            return task.result()

        logger.info(f"Command '{self.name}' timed out after {timeout}s")
        self.cancel(metadata={"reason": "Execution timed out", "timeout": timeout})
        task.add_done_callback(self._discard_late_completion)
        # Never applied: cancel() already left Running
        return Failure(CommandTimeoutError(timeout))

    def _discard_late_completion(self, task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug(f"Command '{self.name}': discarding late action error {exc!r}")
        else:
            logger.debug(f"Command '{self.name}': discarding late action result")

    # ------------------------------------------------------------------ #
    # Control
    # ------------------------------------------------------------------ #
    def cancel(self, metadata: Metadata | None = None) -> None:
        """
        Cancel the running execution.

        No-op unless running. Calls on_cancel first; if it raises, the command
        ends in FailureCommand instead of CancelledCommand.
        """
        if not self._state.is_running:
            logger.debug(f"Command '{self.name}' is not running → nothing to cancel")
            return

        if self._on_cancel is not None:
            try:
                self._on_cancel()
            except Exception as exc:
                logger.warning(f"on_cancel for command '{self.name}' raised: {exc!r}")
                self.set_state(
                    FailureCommand(CancelCallbackError(exc)),
                    metadata={**(metadata or {}), **_error_metadata(exc)},
                )
                return

        logger.info(f"Command '{self.name}' cancelled")
        self.set_state(CancelledCommand(), metadata=metadata or {"reason": "Manually cancelled"})

    def reset(self, metadata: Metadata | None = None) -> None:
        """Clear cached results and return to Idle. No-op while running."""
        if self._state.is_running:
            logger.debug(f"Command '{self.name}' is running → ignoring reset()")
            return

        self._cached_success = None
        self._cached_failure = None
        self.set_state(IdleCommand(), metadata=metadata or {"reason": "Command reset"})

    def dispose(self) -> None:
        """Release all listeners. Safe to call more than once."""
        logger.debug(f"Disposing command '{self.name}'")
        self._notifier.dispose()

    # ------------------------------------------------------------------ #
    # Representation
    # ------------------------------------------------------------------ #
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"state={self._state.instance_name}, history={len(self._history)})"
        )


def _error_metadata(exc: BaseException) -> dict[str, str]:
    return {
        "error": str(exc),
        "error_type": type(exc).__name__,
        "stack_trace": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }
