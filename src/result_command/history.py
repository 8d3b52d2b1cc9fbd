# result_command/history.py
"""
Bounded log of accepted state transitions.

Each Command owns one CommandHistory. Entries are immutable once recorded and
are only ever removed by FIFO eviction when max_length is exceeded.
"""

from __future__ import annotations

import datetime
import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from .exceptions import ConfigValidationError
from .states import CommandState

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_HISTORY_LENGTH = 10


@dataclass(frozen=True)
class CommandHistoryEntry(Generic[T]):
    """One accepted transition of a Command."""

    state: CommandState[T]
    """The state the command moved into."""

    timestamp: datetime.datetime = field(default_factory=datetime.datetime.now)
    """When the transition was recorded."""

    metadata: Mapping[str, Any] | None = None
    """Optional extra information (reason, error text, stack trace...). Read-only."""

    def __post_init__(self) -> None:
        if self.metadata is not None and not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __repr__(self) -> str:
        metadata = dict(self.metadata) if self.metadata is not None else None
        return (
            f"CommandHistoryEntry(state={self.state!r}, "
            f"timestamp={self.timestamp.isoformat()}, metadata={metadata!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "state": self.state.kind.value,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }


class CommandHistory(Generic[T]):
    """
    Append-only, bounded sequence of CommandHistoryEntry.

    When a new entry pushes the length past max_length, the oldest entries are
    dropped one at a time until the limit is met again.
    """

    def __init__(self, max_length: int = DEFAULT_MAX_HISTORY_LENGTH):
        if max_length < 1:
            raise ConfigValidationError("max_history_length must be at least 1")
        self._max_length = max_length
        self._entries: deque[CommandHistoryEntry[T]] = deque()

    @property
    def max_length(self) -> int:
        return self._max_length

    def record(
        self,
        state: CommandState[T],
        metadata: Mapping[str, Any] | None = None,
    ) -> CommandHistoryEntry[T]:
        """Append an entry for `state` stamped with the current time."""
        entry = CommandHistoryEntry(state=state, metadata=metadata)
        self._entries.append(entry)
        while len(self._entries) > self._max_length:
            dropped = self._entries.popleft()
            logger.debug(f"History full ({self._max_length}), evicting {dropped.state.instance_name}")
        return entry

    def snapshot(self) -> tuple[CommandHistoryEntry[T], ...]:
        """Immutable copy of the current entries, oldest first."""
        return tuple(self._entries)

    @property
    def last(self) -> CommandHistoryEntry[T] | None:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"CommandHistory(len={len(self._entries)}, max_length={self._max_length})"
