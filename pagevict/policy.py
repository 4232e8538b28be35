"""Common interface for page eviction policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Optional

__all__ = ["AccessType", "EvictionPolicy"]

FrameId = Hashable


class AccessType:
    """Marker base class describing the nature of a page access.

    Policies may distinguish, for example, a point lookup from a full scan.
    """


class EvictionPolicy(ABC):
    """A page replacement strategy over a fixed set of frames.

    Frames become evictable when they are first touched or unpinned; pinned
    frames are never chosen for eviction.
    """

    @abstractmethod
    def evict(self) -> Optional[FrameId]:
        """Remove and return the next frame to evict, or None if there is none."""

    @abstractmethod
    def peek(self) -> Optional[FrameId]:
        """Return the next frame to evict without removing it."""

    @abstractmethod
    def touch(self, frame_id: FrameId) -> None:
        """Record an access to the page held by the frame."""

    def touch_with(self, frame_id: FrameId, access_type: AccessType) -> None:
        """Record an access of the given type; by default the type is ignored."""
        self.touch(frame_id)

    @abstractmethod
    def pin(self, frame_id: FrameId) -> None:
        """Mark the frame as non-evictable."""

    @abstractmethod
    def unpin(self, frame_id: FrameId) -> None:
        """Mark the frame as evictable."""

    @abstractmethod
    def remove(self, frame_id: FrameId) -> None:
        """Remove an arbitrary evictable frame."""

    @abstractmethod
    def capacity(self) -> int:
        """Maximum number of frames that can be tracked."""

    @abstractmethod
    def size(self) -> int:
        """Number of evictable frames."""

    def __len__(self) -> int:
        return self.size()