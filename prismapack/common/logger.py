"""
prismapack Logging

Thin layer over the standard ``logging`` module:
- ``get_logger(__name__)`` at module level, everywhere
- ``configure_logging()`` once, from the CLI or the host integration
- A per-function context (the function currently being packaged) that is
  attached to every record, so a failure can be traced to its function from
  the last reported line

Usage:
    from prismapack.common.logger import get_logger, set_function_context

    logger = get_logger(__name__)
    set_function_context("createUser")
    logger.info("Generate prisma client")
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Optional

ROOT_LOGGER_NAME = "prismapack"

_function_context: ContextVar[Optional[str]] = ContextVar("prismapack_function", default=None)


def set_function_context(function_name: str) -> None:
    """Mark the function whose build directory is being processed."""
    _function_context.set(function_name)


def get_function_context() -> Optional[str]:
    """Return the function currently being processed, if any."""
    return _function_context.get()


def clear_function_context() -> None:
    _function_context.set(None)


class FunctionContextFilter(logging.Filter):
    """Attach the current function name to each record as ``function``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.function = get_function_context() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for CI log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "function": getattr(record, "function", "-"),
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class PrismapackLogger(logging.LoggerAdapter):
    """
    Logger adapter that prefixes messages with the current function.

    Messages emitted outside a function context are passed through unchanged.
    """

    def process(self, msg, kwargs):
        function_name = get_function_context()
        if function_name:
            msg = f"[{function_name}] {msg}"
        return msg, kwargs


def get_logger(name: str) -> PrismapackLogger:
    """
    Get a logger under the ``prismapack`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        PrismapackLogger wrapping ``logging.getLogger(name)``
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return PrismapackLogger(logging.getLogger(name), {})


def configure_logging(level: str = "info", json_format: bool = False, stream=None) -> logging.Logger:
    """
    Configure the ``prismapack`` root logger.

    Calling it again replaces the previously installed handler, so the CLI
    can reconfigure verbosity per command.

    Args:
        level: debug, info, warn or error
        json_format: Emit JSON lines instead of plain text
        stream: Output stream (defaults to stderr)

    Returns:
        The configured root logger
    """
    level_name = level.upper()
    if level_name == "WARN":
        level_name = "WARNING"

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(FunctionContextFilter())
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    return root


__all__ = [
    "PrismapackLogger",
    "get_logger",
    "configure_logging",
    "set_function_context",
    "get_function_context",
    "clear_function_context",
]
