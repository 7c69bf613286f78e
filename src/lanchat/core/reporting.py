"""Reporting of errors to the user."""

import logging
from typing import Protocol

# Separate logger, so a user interface can route these messages to the screen
user_logger = logging.getLogger("lanchat.user")


class ErrorReporter(Protocol):
    """Shows error messages to the user. Must never raise."""

    def report(self, message: str) -> None: ...


class LoggingErrorReporter:
    """Reports errors through the log, for when no user interface is available."""

    def report(self, message: str) -> None:
        user_logger.error(message)
