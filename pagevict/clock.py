"""Hybrid logical clock timestamps used to order page accesses."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from .errors import SequenceExhaustedError

__all__ = ["HlcTimestamp", "HlcGenerator", "COUNTER_BITS", "MAX_COUNTER", "MAX_MILLIS"]

COUNTER_BITS = 22
MAX_COUNTER = (1 << COUNTER_BITS) - 1
MAX_MILLIS = (1 << (64 - COUNTER_BITS)) - 1


@dataclass(frozen=True, order=True)
class HlcTimestamp:
    """Wall-clock milliseconds paired with a logical counter.

    Ordering is by milliseconds first, then by counter. Subtracting two
    timestamps yields the difference of their physical parts in milliseconds.
    """

    millis: int = 0
    counter: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.millis <= MAX_MILLIS:
            raise ValueError(f"millis out of range: {self.millis}")
        if not 0 <= self.counter <= MAX_COUNTER:
            raise ValueError(f"counter out of range: {self.counter}")

    def as_int(self) -> int:
        """Pack the timestamp into a single 64-bit integer."""
        return (self.millis << COUNTER_BITS) | self.counter

    def shifted(self, millis: int) -> HlcTimestamp:
        """Return a copy moved forward by the given number of milliseconds."""
        return HlcTimestamp(self.millis + millis, self.counter)

    def __sub__(self, other: object) -> int:
        if not isinstance(other, HlcTimestamp):
            return NotImplemented
        return self.millis - other.millis


class HlcGenerator:
    """Thread-safe source of strictly increasing timestamps."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = HlcTimestamp()

    def next_timestamp(self) -> HlcTimestamp:
        """Return a timestamp greater than every one returned before.

        Raises SequenceExhaustedError when no further timestamp can be encoded.
        """
        now = time.time_ns() // 1_000_000
        with self._lock:
            last = self._last
            if now > last.millis:
                if now > MAX_MILLIS:
                    raise SequenceExhaustedError()
                stamp = HlcTimestamp(now, 0)
            elif last.counter < MAX_COUNTER:
                stamp = HlcTimestamp(last.millis, last.counter + 1)
            else:
                raise SequenceExhaustedError()
            self._last = stamp
            return stamp