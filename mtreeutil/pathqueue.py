"""Deferred path updates, released most specific path first.

Directory modification times must be restored after everything inside
them has been touched, so updates are queued and popped in order of
decreasing path length; ``.`` comes out last.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

__all__ = ["PathUpdate", "PathUpdateQueue"]


@dataclass
class PathUpdate:
    """A pending attribute update for one path."""

    path: str
    entry: Any = None
    keyword: str = ""
    value: str = ""
    func: Callable[[str, str], Any] | None = None


@dataclass
class PathUpdateQueue:
    """Priority queue that yields the longest path first."""

    _heap: list = field(default_factory=list, init=False, repr=False)
    _counter: Iterator[int] = field(
        default_factory=itertools.count, init=False, repr=False
    )

    @classmethod
    def from_items(cls, items: Iterable[PathUpdate]) -> "PathUpdateQueue":
        """Build a queue holding ``items``."""
        queue = cls()
        for item in items:
            queue.push(item)
        return queue

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, item: PathUpdate) -> None:
        """Add an update to the queue."""
        heapq.heappush(self._heap, (-len(item.path), next(self._counter), item))

    def pop(self) -> PathUpdate:
        """Remove and return the update with the longest path.

        Raises :class:`IndexError` when the queue is empty.
        """
        if not self._heap:
            raise IndexError("pop from an empty path update queue")
        return heapq.heappop(self._heap)[2]

    def drain(self) -> Iterator[PathUpdate]:
        """Pop every update, longest path first."""
        while self._heap:
            yield self.pop()