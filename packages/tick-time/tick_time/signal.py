"""In-process listener list with snapshot broadcast semantics."""
from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class Signal(Generic[T]):
    """Ordered listeners fired synchronously with a single value.

    Unlike a queued bus, ``fire`` dispatches immediately. Listeners are
    snapshotted before dispatch, so adding or removing listeners from inside
    a listener only affects the next broadcast.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener[T]] = []

    def add(self, listener: Listener[T]) -> None:
        self._listeners.append(listener)

    def remove(self, listener: Listener[T]) -> None:
        """Remove the first registration of ``listener``; unknown is a no-op."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def fire(self, value: T) -> None:
        for listener in list(self._listeners):
            listener(value)

    def __len__(self) -> int:
        return len(self._listeners)
