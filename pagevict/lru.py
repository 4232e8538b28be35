"""Least recently used frame replacement."""

from __future__ import annotations

import functools
import threading
from collections import OrderedDict
from collections.abc import Hashable

from .clock import HlcGenerator, HlcTimestamp
from .errors import FrameReplacerFullError, PinnedFrameRemovalError
from .policy import EvictionPolicy

__all__ = ["LruReplacer"]


def _locked(method):
    """Run the method while holding the replacer's lock."""

    @functools.wraps(method)
    def wrapper(self, *args):
        with self._lock:
            return method(self, *args)

    return wrapper


class LruReplacer(EvictionPolicy):
    """Evicts the frame whose last access is the oldest.

    Frames are kept in order of their most recent access timestamp; the
    least recently accessed one is evicted first. Safe to share between threads.
    Access types given to ``touch_with`` are ignored.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._frames: OrderedDict[Hashable, HlcTimestamp] = OrderedDict()
        self._seq = HlcGenerator()
        self._lock = threading.Lock()

    def _push(self, frame_id):
        # Caller holds the lock.
        if len(self._frames) >= self._capacity:
            raise FrameReplacerFullError()
        self._frames[frame_id] = self._seq.next_timestamp()
        self._frames.move_to_end(frame_id)

    @_locked
    def evict(self):
        if not self._frames:
            return None
        return self._frames.popitem(last=False)[0]

    @_locked
    def peek(self):
        return next(iter(self._frames), None)

    @_locked
    def touch(self, frame_id):
        self._push(frame_id)

    def touch_with(self, frame_id, access_type):
        """Record an access; the access type plays no part in LRU."""
        self.touch(frame_id)

    @_locked
    def pin(self, frame_id):
        self._frames.pop(frame_id, None)

    @_locked
    def unpin(self, frame_id):
        if frame_id not in self._frames:
            self._push(frame_id)

    @_locked
    def remove(self, frame_id):
        if self._frames.pop(frame_id, None) is None:
            raise PinnedFrameRemovalError(frame_id)

    def capacity(self):
        return self._capacity

    @_locked
    def size(self):
        return len(self._frames)