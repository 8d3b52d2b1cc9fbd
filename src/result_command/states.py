# result_command/states.py
"""
Lifecycle states of a Command.

A Command is always in exactly one of five states. Each state class carries a
StateKind discriminant; predicates and when()/maybe_when() dispatch on that tag
rather than on the concrete class.

    Idle -> Running -> Success | Failure | Cancelled -> (reset) -> Idle
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class StateKind(Enum):
    """Discriminant of a CommandState."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


class CommandState(Generic[T]):
    """
    Base class of all command states.

    Two states are "the same transition" when their kinds match, regardless of
    payload. See same_kind(). Regular == compares payloads as well.
    """

    kind: ClassVar[StateKind]
    instance_name: ClassVar[str]

    # ------------------------------------------------------------------ #
    # Predicates
    # ------------------------------------------------------------------ #
    @property
    def is_idle(self) -> bool:
        return self.kind is StateKind.IDLE

    @property
    def is_running(self) -> bool:
        return self.kind is StateKind.RUNNING

    @property
    def is_success(self) -> bool:
        return self.kind is StateKind.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.kind is StateKind.FAILURE

    @property
    def is_cancelled(self) -> bool:
        return self.kind is StateKind.CANCELLED

    @property
    def is_finished(self) -> bool:
        return self.kind in {StateKind.SUCCESS, StateKind.FAILURE, StateKind.CANCELLED}

    def same_kind(self, other: CommandState[Any] | None) -> bool:
        """Tag-only comparison used for transition suppression."""
        return other is not None and other.kind is self.kind

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #
    def _dispatch(
        self,
        idle: Callable[[], R] | None,
        running: Callable[[], R] | None,
        success: Callable[[T], R] | None,
        failure: Callable[[Exception], R] | None,
        cancelled: Callable[[], R] | None,
        or_else: Callable[[], R] | None,
    ) -> R | None:
        kind = self.kind
        if kind is StateKind.SUCCESS:
            if success is not None:
                return success(self.value)  # type: ignore[attr-defined]
        elif kind is StateKind.FAILURE:
            if failure is not None:
                return failure(self.error)  # type: ignore[attr-defined]
        else:
            handler = {
                StateKind.IDLE: idle,
                StateKind.RUNNING: running,
                StateKind.CANCELLED: cancelled,
            }[kind]
            if handler is not None:
                return handler()
        return or_else() if or_else is not None else None

    def when(
        self,
        *,
        or_else: Callable[[], R],
        idle: Callable[[], R] | None = None,
        running: Callable[[], R] | None = None,
        success: Callable[[T], R] | None = None,
        failure: Callable[[Exception], R] | None = None,
        cancelled: Callable[[], R] | None = None,
    ) -> R:
        """
        Map the state to a value, falling back to or_else for unhandled states.

        Example:
            label = command.state.when(
                success=lambda data: f"Loaded {data}",
                running=lambda: "Loading...",
                or_else=lambda: "Press to load",
            )
        """
        return self._dispatch(idle, running, success, failure, cancelled, or_else)  # type: ignore[return-value]

    def maybe_when(
        self,
        *,
        idle: Callable[[], R] | None = None,
        running: Callable[[], R] | None = None,
        success: Callable[[T], R] | None = None,
        failure: Callable[[Exception], R] | None = None,
        cancelled: Callable[[], R] | None = None,
        or_else: Callable[[], R] | None = None,
    ) -> R | None:
        """
        Like when(), but every handler is optional.

        Returns None when the matching handler and or_else are both absent.
        """
        return self._dispatch(idle, running, success, failure, cancelled, or_else)

    # ------------------------------------------------------------------ #
    # Conditional actions (chainable)
    # ------------------------------------------------------------------ #
    def if_idle(self, action: Callable[[], Any]) -> CommandState[T]:
        if self.is_idle:
            action()
        return self

    def if_running(self, action: Callable[[], Any]) -> CommandState[T]:
        if self.is_running:
            action()
        return self

    def if_success(self, action: Callable[[T], Any]) -> CommandState[T]:
        if self.is_success:
            action(self.value)  # type: ignore[attr-defined]
        return self

    def if_failure(self, action: Callable[[Exception], Any]) -> CommandState[T]:
        if self.is_failure:
            action(self.error)  # type: ignore[attr-defined]
        return self

    def if_cancelled(self, action: Callable[[], Any]) -> CommandState[T]:
        if self.is_cancelled:
            action()
        return self


@dataclass(frozen=True)
class IdleCommand(CommandState[T]):
    """Ready to execute. Initial state and state after reset()."""

    kind: ClassVar[StateKind] = StateKind.IDLE
    instance_name: ClassVar[str] = "IdleCommand"


@dataclass(frozen=True)
class RunningCommand(CommandState[T]):
    """The action is in flight."""

    kind: ClassVar[StateKind] = StateKind.RUNNING
    instance_name: ClassVar[str] = "RunningCommand"


@dataclass(frozen=True)
class SuccessCommand(CommandState[T]):
    """The action completed with a value."""

    value: T
    kind: ClassVar[StateKind] = StateKind.SUCCESS
    instance_name: ClassVar[str] = "SuccessCommand"


@dataclass(frozen=True)
class FailureCommand(CommandState[T]):
    """The action reported an error, raised, or its cancel callback failed."""

    error: Exception
    kind: ClassVar[StateKind] = StateKind.FAILURE
    instance_name: ClassVar[str] = "FailureCommand"


@dataclass(frozen=True)
class CancelledCommand(CommandState[T]):
    """Execution was cancelled before the action completed."""

    kind: ClassVar[StateKind] = StateKind.CANCELLED
    instance_name: ClassVar[str] = "CancelledCommand"
