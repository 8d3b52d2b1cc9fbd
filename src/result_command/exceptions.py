# result_command/exceptions.py
"""
Custom exception hierarchy for result_command.

All result_command-specific exceptions inherit from ResultCommandError to enable
catch-all error handling while still providing specific exception types
for different error conditions.

Errors raised by actions and cancel callbacks never escape Command.execute();
they are wrapped in one of these types and stored in a FailureCommand state.
"""

from __future__ import annotations


class ResultCommandError(Exception):
    """
    Base exception for all result_command errors.

    Catch this to handle any result_command-specific error.
    """

    pass


class UnexpectedActionError(ResultCommandError):
    """
    Wraps an exception raised by a command action.

    Actions are expected to report failures by returning Failure(...).
    Anything they raise instead ends up here.

    Attributes:
        original: The exception the action raised
    """

    def __init__(self, original: BaseException):
        self.original = original
        self.__cause__ = original
        super().__init__(f"Unexpected error: {original}")


class CancelCallbackError(ResultCommandError):
    """
    Wraps an exception raised by a command's on_cancel callback.

    A failing cancel callback turns the cancellation into a failure.

    Attributes:
        original: The exception the callback raised
    """

    def __init__(self, original: BaseException):
        self.original = original
        self.__cause__ = original
        super().__init__(f"Error while cancelling command: {original}")


class CommandTimeoutError(ResultCommandError):
    """
    Raised internally when an execution exceeds its timeout.

    Attributes:
        timeout: The timeout that elapsed, in seconds
    """

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout}s")


class ConfigValidationError(ResultCommandError):
    """
    Raised when CommandConfig validation fails.

    Example:
        >>> CommandConfig(max_history_length=0)
        ConfigValidationError: max_history_length must be at least 1
    """

    pass


class DisposedError(ResultCommandError):
    """Raised when a listener is added to a notifier that was already disposed."""

    pass
