"""Utility functions for the multigrid solver."""

from .logging_utils import setup_logging, LoggingContext, silence_logger
from .performance import Timer

__all__ = [
    "setup_logging",
    "LoggingContext",
    "silence_logger",
    "Timer",
]
