# result_command/filtered.py
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from .observable import ChangeNotifier, ValueListenable

logger = logging.getLogger(__name__)

S = TypeVar("S")
W = TypeVar("W")


class FilteredObservable(ChangeNotifier, Generic[W]):
    """
    Read-only observable derived from a source through `transform`.

    Starts at `default_value`. On each source notification the transform is
    applied to the source's value; a non-None result becomes the new value and
    listeners are notified, None is ignored without notifying.
    """

    def __init__(
        self,
        default_value: W,
        source: ValueListenable[S],
        transform: Callable[[S], W | None],
    ) -> None:
        super().__init__()
        self._value = default_value
        self._source = source
        self._transform = transform
        source.add_listener(self._on_source_changed)

    @property
    def value(self) -> W:
        return self._value

    def _on_source_changed(self) -> None:
        new_value = self._transform(self._source.value)
        if new_value is None:
            return
        self._value = new_value
        self.notify_listeners()

    def dispose(self) -> None:
        """Stop following the source and drop listeners. Safe to call more than once."""
        self._source.remove_listener(self._on_source_changed)
        super().dispose()

    def __repr__(self) -> str:
        return f"FilteredObservable({self._value!r})"
