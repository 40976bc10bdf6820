# utils/logger.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Logging utility for clock transitions and trace replay with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for clock tracking."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class ClockLogger:
    """Centralized logger for vector clock tracking with structured output."""

    def __init__(self, name: str = "chronicle", level: LogLevel = LogLevel.INFO):
        """Initialize the clock logger.

        Args:
            name: Logger name
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(ClockFormatter())

        self.logger.addHandler(console_handler)
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    def is_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for clock events
    def node_initialized(self, node: str, tstamp: str):
        self.debug(f"    ➕ node {node} tracked at {tstamp}")

    def node_removed(self, node: str):
        self.debug(f"    ➖ node {node} no longer tracked")

    def snapshot_taken(self, snapshot: str):
        self.debug(f"      snapshot: {snapshot}")

    def event_recorded(self, event: str, previous: str, current: str):
        """Log a completed clock transition for the impacted node."""
        self.debug(f"    🕒 {event}: {previous} → {current}")

    def conflict_detected(self, event: str, receiver: str, sender: str):
        """Log a rejected RECEIVE whose sender clock is concurrent."""
        self.info(f"⚡ Concurrent conflict on {event}: receiver={receiver}, sender={sender}")

    def not_comparable(self, event: str, receiver: str, sender: str):
        """Log a RECEIVE whose sender tracks a different node set."""
        self.warning(
            f"⚠️  {event}: sender clock {sender} is not comparable with receiver {receiver}"
        )

    def query_result(self, query: str, holds: bool):
        """Log the outcome of a causal query."""
        mark = "✅" if holds else "❌"
        self.info(f"  {mark} {query}")

    def replay_summary(self, events: int, conflicts: int, halted: bool):
        """Log trace replay totals."""
        self.info(f"\n📊 Events processed: {events}")
        self.info(f"⚡ Conflicts detected: {conflicts}")
        if halted:
            self.info("⏹  Replay halted on first conflict")


class ClockFormatter(logging.Formatter):
    """Custom formatter with clean output for INFO and above."""

    def format(self, record):
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[ClockLogger] = None


def get_logger(name: str = "chronicle") -> ClockLogger:
    """Get or create the global clock logger instance.

    Args:
        name: Logger name (default: "chronicle")

    Returns:
        ClockLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = ClockLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
