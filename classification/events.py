"""
Observer lists used by classifier nodes and the core to signal state changes.
"""

from typing import Callable, List

from loguru import logger


class Event:
    """A list of no-argument observers notified fire-and-forget."""

    def __init__(self, name: str):
        self.name = name
        self._observers: List[Callable[[], object]] = []

    def connect(self, observer: Callable[[], object]) -> None:
        self._observers.append(observer)

    def disconnect(self, observer: Callable[[], object]) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def fire_and_forget(self) -> None:
        """Call every observer; return values are ignored and failures only logged."""
        for observer in list(self._observers):
            try:
                observer()
            except Exception as e:
                logger.warning(f"Observer of '{self.name}' event failed: {e}")

    def __len__(self) -> int:
        return len(self._observers)


class NodeEvents:
    """Events published by a ClassifierNode."""

    def __init__(self):
        self.updated = Event("updated")
        self.deleted = Event("deleted")
