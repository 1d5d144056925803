"""Channels — one publish/subscribe unit per tracked model path.

A Channel fans a new value out to every Binding subscribed to its path,
in subscription order, on the calling thread. Subscriptions are never
de-duplicated and never removed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vmbind.binding import Binding

Path = tuple[str, ...]


class Channel:
    """Ordered subscriber list for one model path."""

    __slots__ = ("path", "_subscribers")

    def __init__(self, path: Path) -> None:
        self.path = tuple(path)
        self._subscribers: list[Binding] = []

    @property
    def key(self) -> str:
        """Leaf name of the path."""
        return self.path[-1]

    @property
    def subscribers(self) -> tuple[Binding, ...]:
        return tuple(self._subscribers)

    def subscribe(self, binding: Binding) -> None:
        """Append a binding. Subscribing twice means being notified twice."""
        self._subscribers.append(binding)

    def notify(self, value: object) -> None:
        """Call binding.update(path, value) on every subscriber, in order.

        An exception in one subscriber aborts the remaining ones and
        propagates to the caller.
        """
        for binding in list(self._subscribers):
            binding.update(self.path, value)

    def __len__(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"Channel({'.'.join(self.path)!r}, subscribers={len(self._subscribers)})"
