# tests/test_command/test_error_handling.py
"""Exceptions raised by actions never escape execute()."""

import logging

import pytest

from result_command import (
    Command0,
    CommandConfig,
    ConfigValidationError,
    FailureCommand,
    IdleCommand,
    RunningCommand,
    Success,
    UnexpectedActionError,
)


@pytest.mark.asyncio
async def test_raising_action_becomes_wrapped_failure(make_action, record_states):
    original = Exception("Unexpected exception")
    command = Command0(make_action(raises=original, delay=0.01))
    states = record_states(command)

    await command.execute()  # does not raise

    assert [type(s) for s in states] == [RunningCommand, FailureCommand]
    error = command.state.error
    assert isinstance(error, UnexpectedActionError)
    assert error.original is original
    assert error.__cause__ is original
    assert "Unexpected exception" in str(error)
    assert command.get_cached_failure() is error

    history = command.state_history
    assert [type(e.state) for e in history] == [IdleCommand, RunningCommand, FailureCommand]
    assert "FailureCommand" in repr(history[-1])
    assert "Unexpected exception" in repr(history[-1])

    metadata = history[-1].metadata
    assert metadata["error"] == "Unexpected exception"
    assert metadata["error_type"] == "Exception"
    assert "Traceback" in metadata["stack_trace"]


@pytest.mark.asyncio
async def test_synchronously_raising_action():
    def explode():
        raise KeyError("sync")

    command = Command0(explode)
    await command.execute()

    assert command.state.is_failure
    assert isinstance(command.state.error.original, KeyError)


@pytest.mark.asyncio
async def test_unexpected_errors_are_logged(make_action, caplog):
    command = Command0(make_action(raises=RuntimeError("kaboom")), name="Risky")

    with caplog.at_level(logging.ERROR, logger="result_command"):
        await command.execute()

    assert "Command 'Risky' action raised" in caplog.text


@pytest.mark.asyncio
async def test_command_recovers_after_unexpected_error():
    calls = {"n": 0}

    async def flaky():
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("first call fails")
        return Success("second call works")

    command = Command0(flaky)
    await command.execute()
    assert command.state.is_failure

    await command.execute()
    assert command.state.is_success


def test_invalid_timeout_rejected():
    with pytest.raises(ConfigValidationError):
        Command0(lambda: None, timeout=0)


def test_invalid_history_length_rejected():
    with pytest.raises(ConfigValidationError):
        Command0(lambda: None, max_history_length=0)


@pytest.mark.asyncio
async def test_from_config(make_action):
    config = CommandConfig(name="Loader", max_history_length=2, timeout_secs=0.05)
    command = Command0.from_config(config, make_action(value="slow", delay=1))

    assert command.name == "Loader"
    assert command.max_history_length == 2
    assert command.timeout == 0.05

    await command.execute()
    assert command.state.is_cancelled
    assert len(command.state_history) == 2
