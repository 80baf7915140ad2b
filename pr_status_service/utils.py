# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import logging
from collections.abc import Sequence
from typing import Any, Optional

logger = logging.getLogger(__name__)

LoggingLevel = int


class only_once:
    """
    Use as a function decorator to run function only once.
    """

    def __init__(self, func):
        self.func = func
        self.configured = False

    def __call__(self, *args, **kwargs):
        if self.configured:
            logger.debug(f"Function {self.func.__name__} already called. Skipping.")
            return None

        self.configured = True
        logger.debug(
            f"Function {self.func.__name__} called for the first time with "
            f"args: {args} and kwargs: {kwargs}",
        )
        return self.func(*args, **kwargs)


class PrStatusFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(
            fmt="%(asctime)s.%(msecs).03d %(filename)-17s %(levelname)-6s %(message)s",
            datefmt="%H:%M:%S",
        )


def set_logging(
    logger_name: str = "pr_status_service",
    level: LoggingLevel = logging.INFO,
    handler_class: type = logging.StreamHandler,
) -> logging.Logger:
    """
    Set personal logger for this library.

    Args:
        logger_name: Name of the logger to configure.
        level: Logging level.
        handler_class: Class of the handler to attach, a stream handler by default.

    Returns:
        The configured logger.
    """
    configured_logger = logging.getLogger(logger_name)
    configured_logger.setLevel(level)

    if not any(isinstance(h, handler_class) for h in configured_logger.handlers):
        handler = handler_class()
        handler.setFormatter(PrStatusFormatter())
        configured_logger.addHandler(handler)

    return configured_logger


def fix_empty(value: Optional[str]) -> Optional[str]:
    """Return None for a missing or blank string, the stripped string otherwise."""
    if value is None or not value.strip():
        return None
    return value.strip()


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, Sequence):
        return len(value) == 0
    return False
