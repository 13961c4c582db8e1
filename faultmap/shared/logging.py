"""
Logging configuration for the application.

Sets up structured logging with a consistent format.
Server fault entries carry their log entry id so a response body can be
matched to the log line that holds the traceback; other entries show "-".
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(log_entry_id)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NO_LOG_ENTRY_ID = "-"


class LogEntryIdFilter(logging.Filter):
    """Gives every record a ``log_entry_id`` attribute so LOG_FORMAT always renders."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "log_entry_id"):
            record.log_entry_id = NO_LOG_ENTRY_ID
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(LogEntryIdFilter())

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
