# tests/test_command/conftest.py
import asyncio

import pytest

from result_command import Success


@pytest.fixture
def counting_action():
    """
    Action that sleeps, then returns Success("success N") on its N-th call.
    The call count is exposed as action.calls.
    """
    def _make(delay=0.05):
        async def action():
            action.calls += 1
            await asyncio.sleep(delay)
            return Success(f"success {action.calls}")

        action.calls = 0
        return action

    return _make


async def start(command, *args, **kwargs):
    """Launch execute() in the background and wait until it is Running."""
    task = asyncio.create_task(command.execute(*args, **kwargs))
    for _ in range(100):
        if command.state.is_running:
            break
        await asyncio.sleep(0.001)
    return task


@pytest.fixture
def start_command():
    return start
