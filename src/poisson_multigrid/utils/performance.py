"""Performance timing utilities."""

import time
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class Timer:
    """Simple timer for measuring elapsed time."""

    def __init__(self, name: str = "Timer"):
        """Initialize timer."""
        self.name = name
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.elapsed_time: Optional[float] = None

    def start(self) -> 'Timer':
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.end_time = None
        self.elapsed_time = None
        return self

    def stop(self) -> float:
        """Stop the timer and return elapsed time."""
        if self.start_time is None:
            raise RuntimeError("Timer not started")

        self.end_time = time.perf_counter()
        self.elapsed_time = self.end_time - self.start_time
        return self.elapsed_time

    def __enter__(self) -> 'Timer':
        """Enter context manager."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager."""
        self.stop()
        logger.debug(f"{self.name}: {self.elapsed_time:.3f}s")
