"""mailbox.py

Single-slot hand-off between the input side (button callbacks, possibly on
another thread) and the game loop, which is the only caller of the controller.
"""
from __future__ import annotations

import threading

from .state import Door


class PressMailbox:
    """Holds at most one undelivered door press.

    A newer press overwrites an undelivered one. Button numbers outside
    1..3 clear the slot instead of being stored.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._door: Door | None = None

    def post(self, button: int) -> None:
        """Record the latest press; called from the input context."""
        door = Door(button) if button in (Door.ONE, Door.TWO, Door.THREE) else None
        with self._lock:
            self._door = door

    def take(self) -> Door | None:
        """Return the pending press and empty the slot (``None`` if nothing is pending)."""
        with self._lock:
            door, self._door = self._door, None
        return door

    def __bool__(self) -> bool:
        with self._lock:
            return self._door is not None
