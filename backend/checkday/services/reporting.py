"""
Error reporting for non-fatal store failures
"""
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    def report(self, operation: str, error: Exception) -> None:
        ...


class LoggingErrorReporter:
    """Sends store failures to the application log"""

    def report(self, operation: str, error: Exception) -> None:
        logger.error(f"{operation} failed: {type(error).__name__} - {error}")
