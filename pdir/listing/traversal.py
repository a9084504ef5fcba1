"""FIFO queue of directories waiting to be listed."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from ..errors import EmptyQueueError

logger = logging.getLogger(__name__)


class TraversalQueue:
    """Pending directory paths, visited strictly in the order pushed.

    Draining one entry per loop iteration and pushing its subdirectories at
    the back gives level-order traversal without recursion.
    """

    def __init__(self, initial: Iterable[str] = ()) -> None:
        self._pending: deque[str] = deque()
        self.extend(initial)

    def push(self, path: str) -> None:
        self._pending.append(path)
        logger.debug("queued %r (%d pending)", path, len(self._pending))

    def extend(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.push(path)

    def pop(self) -> str:
        if not self._pending:
            raise EmptyQueueError("traversal queue is empty")
        path = self._pending.popleft()
        logger.debug("dequeued %r (%d pending)", path, len(self._pending))
        return path

    def __len__(self) -> int:
        return len(self._pending)


__all__ = ["TraversalQueue"]
