"""Logging helpers shared by the pipeline and the CLI."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "precompile_signatures"
_CONSOLE_FORMAT = "[precompile_signatures] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger nested under ``precompile_signatures``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install console (and optionally file) handlers on the package logger.

    ``verbose`` wins over ``quiet`` when both are given.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


def log_exception(logger: logging.Logger, message: str, exc: BaseException) -> None:
    """Log ``exc`` as a warning, with the traceback only when debugging."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.warning("%s: %s", message, exc, exc_info=exc)
    else:
        logger.warning("%s: %s", message, exc)


__all__ = ["configure_logging", "get_logger", "log_exception"]
