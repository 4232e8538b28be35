"""LRU-K page replacement.

Each frame keeps the timestamps of up to ``k`` most recent uncorrelated
references. The victim is the evictable frame with the largest backward
k-distance; frames with fewer than ``k`` recorded references are treated as
infinitely distant and are evicted first, oldest first.
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Optional

from .clock import HlcGenerator, HlcTimestamp
from .errors import (
    FrameReplacerFullError,
    InvalidFrameIdError,
    PinnedFrameRemovalError,
    SequenceExhaustedError,
)
from .policy import AccessType, EvictionPolicy

__all__ = [
    "LRUK_REPLACER_K",
    "LRUK_REPLACER_REF_PERIOD",
    "LruKConfig",
    "LruKReplacer",
]

LRUK_REPLACER_K = 10
"""The look-back window for the LRU-K replacer."""

LRUK_REPLACER_REF_PERIOD = 5_000
"""Correlated reference period in milliseconds (Gray's five-second rule)."""

_INFINITE_DISTANCE = (1 << 63) - 1


@dataclass
class LruKConfig:
    """Configuration of an LRU-K replacer.

    ``ref_period`` is the correlated reference period in milliseconds:
    references to a page closer together than this are treated as one and do
    not change its backward k-distance. Zero treats every reference as
    uncorrelated.
    """

    capacity: int = 4096
    k: int = 2
    ref_period: int = 0


@dataclass
class _PageInfo:
    k: int
    refs: deque = field(init=False)
    last_ref: HlcTimestamp = field(default_factory=HlcTimestamp)
    evictable: bool = True

    def __post_init__(self) -> None:
        self.refs = deque(maxlen=max(self.k, 1))

    def touch(self, timestamp: HlcTimestamp, ref_period: int) -> None:
        """Record an access, updating history only for uncorrelated ones."""
        if ref_period == 0 or timestamp - self.last_ref > ref_period:
            if self.refs:
                # Close the previous correlated period by shifting history.
                shift = timestamp - self.refs[-1]
                if shift > 0:
                    self.refs = deque(
                        (ref.shifted(shift) for ref in self.refs),
                        maxlen=self.refs.maxlen,
                    )
            self.refs.append(timestamp)
        self.last_ref = timestamp


class LruKReplacer(EvictionPolicy):
    """The LRU-K page replacement policy. Safe to share between threads."""

    def __init__(
        self, capacity: int = LruKConfig.capacity, k: int = LruKConfig.k
    ) -> None:
        self._setup(LruKConfig(capacity=capacity, k=k))

    @classmethod
    def with_config(cls, config: LruKConfig) -> LruKReplacer:
        """Create a replacer from a full configuration."""
        replacer = cls.__new__(cls)
        replacer._setup(config)
        return replacer

    def _setup(self, config: LruKConfig) -> None:
        self._config = config
        self._size = 0
        self._pages: dict[Hashable, _PageInfo] = {}
        self._seq = HlcGenerator()
        self._lock = threading.RLock()

    @property
    def config(self) -> LruKConfig:
        """The configuration the replacer was created with."""
        return self._config

    def _find_victim(self) -> Optional[Hashable]:
        # Caller holds the lock.
        try:
            timestamp = self._seq.next_timestamp()
        except SequenceExhaustedError:
            return None

        ref_period = self._config.ref_period
        max_k_dist = 0
        victim = None
        for frame_id, page in self._pages.items():
            if not page.evictable:
                continue
            # Skip recently referenced pages to avoid early replacement.
            if ref_period > 0 and timestamp - page.last_ref <= ref_period:
                continue
            last_uncorrelated = page.refs[-1] if page.refs else HlcTimestamp()
            if len(page.refs) < self._config.k:
                k_dist = _INFINITE_DISTANCE - last_uncorrelated.as_int()
            else:
                k_dist = timestamp.as_int() - last_uncorrelated.as_int()
            if k_dist >= max_k_dist:
                max_k_dist = k_dist
                victim = frame_id
        return victim

    def evict(self) -> Optional[Hashable]:
        with self._lock:
            victim = self._find_victim()
            if victim is not None:
                del self._pages[victim]
                self._size -= 1
            return victim

    def peek(self) -> Optional[Hashable]:
        with self._lock:
            return self._find_victim()

    def touch(self, frame_id: Hashable) -> None:
        with self._lock:
            known = frame_id in self._pages
            if self._size >= self._config.capacity and not known:
                raise FrameReplacerFullError()
            timestamp = self._seq.next_timestamp()
            if not known:
                self._pages[frame_id] = _PageInfo(self._config.k)
                self._size += 1
            self._pages[frame_id].touch(timestamp, self._config.ref_period)

    def touch_with(self, frame_id: Hashable, access_type: AccessType) -> None:
        self.touch(frame_id)

    def _page(self, frame_id: Hashable) -> _PageInfo:
        try:
            return self._pages[frame_id]
        except KeyError:
            raise InvalidFrameIdError(frame_id) from None

    def pin(self, frame_id: Hashable) -> None:
        with self._lock:
            page = self._page(frame_id)
            if page.evictable:
                page.evictable = False
                self._size -= 1

    def unpin(self, frame_id: Hashable) -> None:
        with self._lock:
            page = self._page(frame_id)
            if not page.evictable:
                page.evictable = True
                self._size += 1

    def remove(self, frame_id: Hashable) -> None:
        with self._lock:
            page = self._pages.get(frame_id)
            if page is None:
                return
            if not page.evictable:
                raise PinnedFrameRemovalError(frame_id)
            del self._pages[frame_id]
            self._size -= 1

    def capacity(self) -> int:
        return self._config.capacity

    def size(self) -> int:
        with self._lock:
            return self._size