# tests/conftest.py
import asyncio
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import pytest

from result_command import Command, Failure, Success


@pytest.fixture(autouse=True)
def reset_observer():
    """The process-wide observer is shared state; never leak it between tests."""
    Command.clear_observer_listener()
    yield
    Command.clear_observer_listener()


@pytest.fixture
def make_action():
    """
    Factory for async actions.
    Use it like:
        action = make_action(value="done", delay=0.05)
        action = make_action(error=ValueError("nope"))
        action = make_action(raises=RuntimeError("boom"))
    """
    def _make(value=None, error=None, raises=None, delay=0.0):
        async def action(*args):
            if delay:
                await asyncio.sleep(delay)
            if raises is not None:
                raise raises
            if error is not None:
                return Failure(error)
            return Success(value)

        return action

    return _make


@pytest.fixture
def record_states():
    """Subscribe to a command and collect every state it notifies."""
    def _record(command):
        states = []
        command.add_listener(lambda: states.append(command.state))
        return states

    return _record


@pytest.fixture
def observable_values():
    """Factory for async iterators over an observable."""
    return _observable_values


async def _observable_values(listenable):
    """
    Async iterator over an observable: yields the current value, then each
    notified value until the consumer stops.
    """
    queue: asyncio.Queue = asyncio.Queue()

    def listener():
        queue.put_nowait(listenable.value)

    queue.put_nowait(listenable.value)
    listenable.add_listener(listener)
    try:
        while True:
            yield await queue.get()
    finally:
        listenable.remove_listener(listener)
