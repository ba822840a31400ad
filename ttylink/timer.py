"""Elapsed-time measurement used for read timeouts."""

from __future__ import annotations

import time
from typing import Callable

__all__ = ["Timer"]


class Timer:
    """Measures whole milliseconds elapsed since the last reset.

    ``clock`` returns the current time in seconds. It defaults to
    :func:`time.monotonic`. The timer starts when it is created.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock: Callable[[], float] = clock if clock is not None else time.monotonic
        self._start = self._clock()

    def reset(self) -> None:
        """Restart the measurement from the current time."""
        self._start = self._clock()

    def elapsed_ms(self) -> int:
        """Return the whole milliseconds elapsed since the last reset."""
        # Work at microsecond resolution first so float noise does not
        # drop a millisecond that has in fact elapsed.
        micros = round((self._clock() - self._start) * 1_000_000)
        return max(0, micros // 1000)