# utils/__init__.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Utility module exports

from .logger import (
    LogLevel,
    ClockLogger,
    get_logger,
    set_log_level,
    configure_logging,
)

__all__ = [
    "LogLevel",
    "ClockLogger",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
