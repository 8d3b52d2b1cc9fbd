import logging

__version__ = "0.4.0"

from .command import Command
from .command_ref import CommandRef
from .config import CommandConfig
from .exceptions import (
    CancelCallbackError,
    CommandTimeoutError,
    ConfigValidationError,
    DisposedError,
    ResultCommandError,
    UnexpectedActionError,
)
from .filtered import FilteredObservable
from .history import CommandHistory, CommandHistoryEntry
from .load_config import load_config
from .logging_config import disable_logging, get_log_file_path, setup_logging
from .observable import ChangeNotifier, ObservableValue, ValueListenable
from .result import Failure, Result, Success
from .states import (
    CancelledCommand,
    CommandState,
    FailureCommand,
    IdleCommand,
    RunningCommand,
    StateKind,
    SuccessCommand,
)
from .typed_commands import Command0, Command1, Command2

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core Components
    "Command",
    "Command0",
    "Command1",
    "Command2",
    "CommandRef",
    "CommandConfig",
    "CommandHistory",
    "CommandHistoryEntry",
    "FilteredObservable",
    "load_config",
    # States
    "CommandState",
    "StateKind",
    "IdleCommand",
    "RunningCommand",
    "SuccessCommand",
    "FailureCommand",
    "CancelledCommand",
    # Result
    "Result",
    "Success",
    "Failure",
    # Observables
    "ChangeNotifier",
    "ObservableValue",
    "ValueListenable",
    # Logging
    "setup_logging",
    "disable_logging",
    "get_log_file_path",
    # Exceptions
    "ResultCommandError",
    "UnexpectedActionError",
    "CancelCallbackError",
    "CommandTimeoutError",
    "ConfigValidationError",
    "DisposedError",
]
