# result_command/result.py
"""
Two-variant result container returned by command actions.

An action reports its outcome as Success(value) or Failure(error) instead of
raising. The command engine folds the result into a CommandState.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class Result(ABC, Generic[T]):
    """Base class of Success and Failure. Not instantiated directly."""

    __slots__ = ()

    @property
    def is_success(self) -> bool:
        return isinstance(self, Success)

    @property
    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    @abstractmethod
    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[Exception], R]) -> R:
        """Collapse both variants into a single value."""

    @abstractmethod
    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """Transform the success value; failures pass through untouched."""

    @abstractmethod
    def map_error(self, fn: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error; successes pass through untouched."""

    def get_or_none(self) -> T | None:
        return self.fold(lambda value: value, lambda _: None)

    def exception_or_none(self) -> Exception | None:
        return self.fold(lambda _: None, lambda error: error)


@dataclass(frozen=True)
class Success(Result[T]):
    value: T

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[Exception], R]) -> R:
        return on_success(self.value)

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        return Success(fn(self.value))

    def map_error(self, fn: Callable[[Exception], Exception]) -> Result[T]:
        return self


@dataclass(frozen=True)
class Failure(Result[T]):
    error: Exception

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[Exception], R]) -> R:
        return on_failure(self.error)

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        return Failure(self.error)

    def map_error(self, fn: Callable[[Exception], Exception]) -> Result[T]:
        return Failure(fn(self.error))
