"""Mock door latch for testing and development without hardware."""

from __future__ import annotations

import logging
from typing import Optional

from .base import Door

logger = logging.getLogger(__name__)


class MockDoor(Door):
    """Mock door latch.

    Tracks open/closed and lock state in memory and counts every call so
    tests can verify how the controller drove the door.
    """

    def __init__(self, closed: bool = True, call_log: Optional[list[str]] = None) -> None:
        """Initialize mock door.

        Args:
            closed: Whether the door starts closed.
            call_log: Shared list that receives the name of every call.
        """
        self._closed = closed
        self._locked = False
        self._call_log = call_log if call_log is not None else []
        self.closed_calls = 0
        self.lock_calls = 0
        self.unlock_calls = 0

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def is_locked(self) -> bool:
        return self._locked

    def set_closed(self, closed: bool) -> None:
        """Open or close the door.

        Args:
            closed: True to close the door, False to open it.

        Raises:
            ValueError: If opening a locked door.
        """
        if not closed and self._locked:
            raise ValueError("Cannot open a locked door")
        self._closed = closed

    def closed(self) -> bool:
        self.closed_calls += 1
        self._call_log.append("door.closed")
        return self._closed

    def lock(self) -> None:
        self.lock_calls += 1
        self._call_log.append("door.lock")
        self._locked = True
        logger.debug("[MOCK] Door locked")

    def unlock(self) -> None:
        self.unlock_calls += 1
        self._call_log.append("door.unlock")
        self._locked = False
        logger.debug("[MOCK] Door unlocked")
