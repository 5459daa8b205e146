from __future__ import annotations

"""
Single-slot, latest-wins handoff between the training thread and the display.
"""

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class FrameMailbox(Generic[T]):
    """
    Holds at most one frame. publish() overwrites an untaken frame, take()
    empties the slot; neither call waits on the other side.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._frame: T | None = None

    def publish(self, frame: T) -> None:
        if frame is None:
            raise ValueError("Cannot publish None; None means 'no new frame'.")
        with self._lock:
            self._frame = frame

    def take(self) -> T | None:
        """Remove and return the pending frame, or None if there is none."""
        with self._lock:
            frame, self._frame = self._frame, None
        return frame

    def peek(self) -> T | None:
        with self._lock:
            return self._frame

    @property
    def has_frame(self) -> bool:
        with self._lock:
            return self._frame is not None
