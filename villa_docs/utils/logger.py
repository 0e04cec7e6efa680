"""
Logging utility for the guest document relay.
"""
import logging
import sys
from typing import Optional
from colorama import Fore, Style, init
import structlog

from .models import ReminderRunResult

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class ColorizedFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.MAGENTA + Style.BRIGHT,
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logger(
    name: str = "villa_docs",
    level: str = "INFO",
    log_file: Optional[str] = None
) -> structlog.BoundLogger:
    """
    Set up structured logging with colorized console output.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging to file

    Returns:
        Configured structured logger
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_file else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Component loggers are children of the root "villa_docs" logger
    stdlib_logger = logging.getLogger(name)
    stdlib_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not stdlib_logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColorizedFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        stdlib_logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            stdlib_logger.addHandler(file_handler)

    return structlog.get_logger(name)


def get_logger(name: str = "villa_docs") -> structlog.BoundLogger:
    """
    Get a component logger.

    Args:
        name: Component name, nested under the "villa_docs" logger

    Returns:
        Structured logger
    """
    if name != "villa_docs" and not name.startswith("villa_docs."):
        name = f"villa_docs.{name}"
    return structlog.get_logger(name)


class ReminderRunLogger:
    """Tracks the outcome of one reminder run and logs a summary."""

    def __init__(self, logger: structlog.BoundLogger):
        self.logger = logger
        self.result = ReminderRunResult()
        self.skipped = 0

    def log_candidates(self, count: int):
        self.result.candidates = count
        self.logger.info("Upcoming bookings fetched", candidates=count)

    def log_selected(self, count: int):
        self.result.processed = count
        self.logger.info(f"Found {count} bookings needing document reminders")

    def log_skipped(self, booking_id: str, reason: str):
        self.skipped += 1
        self.logger.warning("Booking skipped", booking_id=booking_id, reason=reason)

    def log_sent(self, booking_id: str, recipient: Optional[str]):
        self.result.sent += 1
        self.logger.info("Reminder sent", booking_id=booking_id, recipient=recipient)

    def log_failed(self, booking_id: str, error: Optional[str]):
        self.result.failed += 1
        self.logger.error("Reminder failed", booking_id=booking_id, error=error)

    def print_summary(self):
        self.logger.info(
            f"Successfully sent {self.result.sent} of {self.result.processed} document reminders",
            candidates=self.result.candidates,
            failed=self.result.failed,
            skipped=self.skipped,
        )
