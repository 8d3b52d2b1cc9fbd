# tests/test_logging_config.py

import logging

import pytest

from result_command import Command0, Success, disable_logging, get_log_file_path, setup_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger("result_command")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_console_logging(restore_package_logger):
    logger = setup_logging(level="DEBUG")

    assert logger is restore_package_logger
    assert logger.level == logging.DEBUG
    assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    assert get_log_file_path() is None


def test_setup_file_logging(tmp_path):
    setup_logging(level="DEBUG", console=False, file=True, log_dir=tmp_path, format="detailed")

    path = get_log_file_path()
    assert path == (tmp_path / "result_command.log").resolve()

    Command0(lambda: Success(1), name="Logged")
    for handler in logging.getLogger("result_command").handlers:
        handler.flush()

    text = path.read_text(encoding="utf-8")
    assert "Command 'Logged': IdleCommand -> IdleCommand" in text
    assert "command.py:" in text


def test_custom_format_and_propagation():
    logger = setup_logging(level=logging.WARNING, format_string="[%(levelname)s] %(message)s", propagate=False)

    assert logger.propagate is False
    assert logger.handlers[0].formatter._fmt == "[%(levelname)s] %(message)s"


def test_unknown_format():
    with pytest.raises(ValueError, match="Unknown log format"):
        setup_logging(format="fancy")


def test_disable_logging():
    setup_logging(level="DEBUG", console=True)
    disable_logging()

    logger = logging.getLogger("result_command")
    assert logger.level > logging.CRITICAL
    assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
    assert get_log_file_path() is None
