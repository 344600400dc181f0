"""Logging setup shared by the extraction pipeline and the CLI.

Console records are tagged with the pipeline component that emitted them
(``[opdocs:pipeline]``, ``[opdocs:matcher]``). The optional run log always
records at DEBUG so per-file decisions survive a quiet console.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "opdocs"
_CONSOLE_FORMAT = "[%(component)s] %(levelname)s %(message)s"
_RUN_LOG_FORMAT = "%(asctime)s %(levelname)s %(component)s: %(message)s"


class ComponentFormatter(logging.Formatter):
    """Formatter exposing ``%(component)s``, the logger name relative to opdocs."""

    def format(self, record: logging.LogRecord) -> str:
        record.component = component_name(record.name)
        return super().format(record)


def component_name(logger_name: str) -> str:
    if logger_name == _LOGGER_NAME:
        return _LOGGER_NAME
    prefix = f"{_LOGGER_NAME}."
    if logger_name.startswith(prefix):
        return f"{_LOGGER_NAME}:{logger_name[len(prefix):]}"
    return logger_name


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger under the opdocs hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach the console handler and, when ``log_file`` is set, a DEBUG run log.

    ``verbose`` takes precedence over ``quiet``. Calling this again replaces
    the handlers installed by the previous call.
    """
    level = console_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(ComponentFormatter(_CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(ComponentFormatter(_RUN_LOG_FORMAT))
        logger.addHandler(file_handler)
        level = logging.DEBUG

    logger.setLevel(level)
    return logger


__all__ = ["ComponentFormatter", "configure_logging", "console_level", "get_logger"]
