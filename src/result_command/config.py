# result_command/config.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from .exceptions import ConfigValidationError
from .history import DEFAULT_MAX_HISTORY_LENGTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandConfig:
    """
    Immutable settings for a single command.
    Used both when loading from TOML and when passed programmatically
    to Command.from_config().
    """

    name: str | None = None
    """Name used in log records and repr. Defaults to the action's __name__."""

    max_history_length: int = DEFAULT_MAX_HISTORY_LENGTH
    """
    How many state transitions to keep.
    Oldest entries are evicted first once the limit is reached.
    """

    timeout_secs: float | None = None
    """
    Default timeout applied when execute() is called without one.
    None = no timeout (default).
    """

    def __post_init__(self) -> None:
        label = self.name or "<unnamed>"
        if self.name is not None and not self.name.strip():
            logger.warning("Invalid config: Command name cannot be blank")
            raise ConfigValidationError("Command name cannot be blank")
        if isinstance(self.max_history_length, bool) or not isinstance(self.max_history_length, int):
            logger.warning(f"Invalid config for '{label}': max_history_length must be an integer")
            raise ConfigValidationError("max_history_length must be an integer")
        if self.max_history_length < 1:
            logger.warning(f"Invalid config for '{label}': max_history_length must be at least 1")
            raise ConfigValidationError("max_history_length must be at least 1")
        if self.timeout_secs is not None and self.timeout_secs <= 0:
            logger.warning(f"Invalid config for '{label}': timeout_secs must be positive")
            raise ConfigValidationError("timeout_secs must be positive")
