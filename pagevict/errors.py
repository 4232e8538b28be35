"""Exceptions raised by page eviction policies."""

from __future__ import annotations

from typing import Any

__all__ = [
    "EvictError",
    "InvalidFrameIdError",
    "PinnedFrameRemovalError",
    "FrameReplacerFullError",
    "InvalidTimestampError",
    "NoFramesAvailableError",
    "SequenceExhaustedError",
]


class EvictError(Exception):
    """Base class for every page eviction error."""


class InvalidFrameIdError(EvictError, KeyError):
    """The frame id is not known to the replacer."""

    def __init__(self, frame_id: Any) -> None:
        self.frame_id = frame_id
        super().__init__(f"Invalid frame id: {frame_id}")

    def __str__(self) -> str:
        return str(self.args[0])


class PinnedFrameRemovalError(EvictError):
    """An attempt was made to remove a pinned frame."""

    def __init__(self, frame_id: Any) -> None:
        self.frame_id = frame_id
        super().__init__(f"Trying to remove pinned frame: {frame_id}")


class FrameReplacerFullError(EvictError):
    """No more frames can be added to the replacer."""

    def __init__(self) -> None:
        super().__init__("Frame replacer is full")


class InvalidTimestampError(EvictError):
    """A timestamp or sequence number is not valid."""

    def __init__(self) -> None:
        super().__init__("Invalid timestamp")


class NoFramesAvailableError(EvictError):
    """Neither the free list nor the replacer can provide a frame."""

    def __init__(self) -> None:
        super().__init__(
            "No free frames available (nor in free list nor in frame replacer)"
        )


class SequenceExhaustedError(EvictError):
    """The timestamp generator cannot produce any further values."""

    def __init__(self) -> None:
        super().__init__("Sequence generator exhausted")