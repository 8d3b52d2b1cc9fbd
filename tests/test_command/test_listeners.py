# tests/test_command/test_listeners.py
"""Local listeners, add_when_listener() and dispose()."""

import asyncio
import logging

import pytest

from result_command import Command0, DisposedError, Failure, RunningCommand, Success, SuccessCommand


def test_add_when_listener_runs_immediately_for_current_state():
    command = Command0(lambda: Success("test"))
    called = []

    command.add_when_listener(on_idle=lambda: called.append("idle"))

    assert called == ["idle"]


@pytest.mark.asyncio
async def test_add_when_listener_on_success():
    command = Command0(lambda: Success("test value"))
    received = []

    command.add_when_listener(on_success=received.append)
    await command.execute()

    assert received == ["test value"]


@pytest.mark.asyncio
async def test_add_when_listener_on_failure():
    error = Exception("test error")
    command = Command0(lambda: Failure(error))
    received = []

    command.add_when_listener(on_failure=received.append)
    await command.execute()

    assert received == [error]


@pytest.mark.asyncio
async def test_add_when_listener_on_running(make_action):
    command = Command0(make_action(value="test", delay=0.02))
    seen = []

    command.add_when_listener(on_running=lambda: seen.append("running"))
    await command.execute()

    assert seen == ["running"]


@pytest.mark.asyncio
async def test_add_when_listener_on_cancelled(make_action, start_command):
    command = Command0(make_action(value="test", delay=0.05))
    seen = []

    command.add_when_listener(on_cancelled=lambda: seen.append("cancelled"))
    task = await start_command(command)
    command.cancel()

    assert seen == ["cancelled"]
    await task


@pytest.mark.asyncio
async def test_add_when_listener_or_else_fallback():
    command = Command0(lambda: Success("test"))
    fallback = []

    command.add_when_listener(on_failure=lambda e: None, or_else=lambda: fallback.append(command.state))
    await command.execute()

    # Idle (immediate call), Running, Success
    assert len(fallback) == 3
    assert fallback[-1] == SuccessCommand("test")


@pytest.mark.asyncio
async def test_add_when_listener_remover():
    command = Command0(lambda: Success("test"))
    count = []

    remove = command.add_when_listener(on_success=count.append)
    await command.execute()
    assert len(count) == 1

    remove()
    command.reset()
    await command.execute()
    assert len(count) == 1


@pytest.mark.asyncio
async def test_multiple_independent_when_listeners():
    command = Command0(lambda: Success("test"))
    first, second = [], []

    command.add_when_listener(on_success=first.append)
    remove_second = command.add_when_listener(on_success=second.append)
    await command.execute()
    assert first == second == ["test"]

    command.reset()
    remove_second()
    await command.execute()
    assert first == ["test", "test"]
    assert second == ["test"]


@pytest.mark.asyncio
async def test_listener_exceptions_are_contained(record_states, caplog):
    command = Command0(lambda: Success("test"))

    def broken():
        raise RuntimeError("Listener error")

    def broken_success(value):
        raise ValueError("boom")

    command.add_listener(broken)
    command.add_when_listener(on_success=broken_success)
    states = record_states(command)

    with caplog.at_level(logging.WARNING, logger="result_command"):
        await command.execute()

    assert command.state == SuccessCommand("test")
    assert states == [RunningCommand(), SuccessCommand("test")]
    assert len(command.state_history) == 3
    assert "Listener error" in caplog.text


@pytest.mark.asyncio
async def test_remove_listener():
    command = Command0(lambda: Success(1))
    calls = []

    def listener():
        calls.append(command.state)

    command.add_listener(listener)
    command.remove_listener(listener)
    command.remove_listener(listener)  # unknown listeners are ignored
    await command.execute()

    assert calls == []
    assert not command.has_listeners


@pytest.mark.asyncio
async def test_coroutine_listeners_are_scheduled():
    command = Command0(lambda: Success(1))
    calls = []

    async def listener():
        calls.append("called")

    command.add_listener(listener)
    await command.execute()
    await asyncio.sleep(0.01)

    assert calls == ["called", "called"]


def test_dispose_releases_listeners():
    command = Command0(lambda: Success(1))
    command.add_listener(lambda: None)

    command.dispose()
    command.dispose()

    assert not command.has_listeners
    with pytest.raises(DisposedError):
        command.add_listener(lambda: None)
