# result_command/logging_config.py
"""
Opt-in logging setup for result_command.

The library only installs a NullHandler. Applications that want to see
transition logs call setup_logging(); tests usually call disable_logging().
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "result_command"

FORMATS = {
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}

_log_file_path: Path | None = None


def _package_logger() -> logging.Logger:
    return logging.getLogger(PACKAGE_LOGGER)


def setup_logging(
    level: int | str = "INFO",
    *,
    console: bool = True,
    file: bool = False,
    log_dir: str | Path = ".result_command",
    format: str = "simple",
    format_string: str | None = None,
    propagate: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level name or number.
        console: Attach a StreamHandler.
        file: Attach a FileHandler writing to <log_dir>/result_command.log.
        log_dir: Directory for the log file (created if missing).
        format: "simple" or "detailed". Ignored when format_string is given.
        format_string: Custom logging format string.
        propagate: Whether records also reach the root logger. Set to False
            to avoid double output when the root logger is configured too.

    Returns:
        The configured "result_command" logger.
    """
    global _log_file_path

    if format_string is None:
        if format not in FORMATS:
            raise ValueError(f"Unknown log format '{format}'. Choose from: {', '.join(FORMATS)}")
        format_string = FORMATS[format]
    formatter = logging.Formatter(format_string)

    logger = _package_logger()
    _remove_handlers(logger)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = propagate

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if file:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        _log_file_path = (directory / "result_command.log").resolve()
        file_handler = logging.FileHandler(_log_file_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    else:
        _log_file_path = None

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def disable_logging() -> None:
    """Silence the package logger entirely."""
    global _log_file_path
    logger = _package_logger()
    _remove_handlers(logger)
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
    logger.propagate = False
    _log_file_path = None


def get_log_file_path() -> Path | None:
    """Path of the active log file, or None when file logging is off."""
    return _log_file_path


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
