from __future__ import annotations

from collections import deque
from typing import Deque, Tuple


class ReadyQueue:
    """
    FIFO of process ids waiting for the CPU.

    ``peek_all`` returns the contents front-first so a snapshot can be taken
    before the front process is dispatched.
    """

    def __init__(self) -> None:
        self._items: Deque[int] = deque()

    def push_back(self, pid: int) -> None:
        if pid in self._items:
            raise ValueError(f"P{pid} is already queued")
        self._items.append(pid)

    def pop_front(self) -> int:
        if not self._items:
            raise IndexError("pop from an empty ready queue")
        return self._items.popleft()

    def peek_front(self) -> int:
        if not self._items:
            raise IndexError("peek into an empty ready queue")
        return self._items[0]

    def peek_all(self) -> Tuple[int, ...]:
        return tuple(self._items)

    def __contains__(self, pid: object) -> bool:
        return pid in self._items

    def __len__(self) -> int:
        return len(self._items)
