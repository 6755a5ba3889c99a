"""
Bounded working memory for calculation records.

The process startup sequence creates one ``Arena`` and hands it to the
matrix runner. Running out of arena space is terminal: the exhaustion
policy halts the process instead of returning an error.
"""

import logging
import sys
from contextlib import contextmanager

from .constants import HEAP_SIZE


__all__ = ["Arena", "halt"]


logger = logging.getLogger(__name__)


def halt(arena, size):
    """
    Default exhaustion policy: log and stop the process.
    """
    logger.critical("Working memory exhausted: %d bytes requested, %d of %d in use",
                    size, arena.used, arena.capacity)
    sys.exit("working memory exhausted")


class Arena:
    """
    Fixed-capacity byte budget.

    Parameters
    ----------
    capacity : int
        Size of the arena in bytes.
    on_exhausted : callable
        Called as ``on_exhausted(arena, size)`` when an allocation does not
        fit. Must not return.
    """
    def __init__(self, capacity=HEAP_SIZE, on_exhausted=halt):
        if capacity <= 0:
            raise ValueError(f"Arena capacity must be positive, not {capacity!r}")
        self.capacity = capacity
        self.used = 0
        self.peak = 0
        self._on_exhausted = on_exhausted

    @property
    def available(self):
        return self.capacity - self.used

    @contextmanager
    def allocate(self, size):
        """
        Reserves ``size`` bytes for the duration of the ``with`` block.
        """
        if size > self.available:
            self._on_exhausted(self, size)
            raise AssertionError("Arena exhaustion policy returned")
        self.used += size
        self.peak = max(self.peak, self.used)
        try:
            yield
        finally:
            self.used -= size

    def __repr__(self):
        return f"Arena(capacity={self.capacity}, used={self.used})"
