"""A recursive mutex that hands the lock to waiters in arrival order."""

import threading
from collections import deque


class FairRecursiveMutex:
    """Recursive lock; a releasing thread cannot jump ahead of waiting threads."""

    def __init__(self):
        self._m = threading.Lock()
        self._holding = None
        self._count = 0
        self._waiting = deque()

    def lock(self):
        me = threading.get_ident()
        with self._m:
            if self._holding == me:
                self._count += 1
                return
            if self._holding is not None or self._waiting:
                cond = threading.Condition(self._m)
                self._waiting.append(cond)
                cond.wait_for(lambda: self._count == 0 and self._waiting[0] is cond)
                self._waiting.popleft()
            self._holding = me
            self._count = 1

    def unlock(self):
        me = threading.get_ident()
        with self._m:
            if self._holding != me or self._count <= 0:
                raise RuntimeError("mutex released by a thread that does not hold it")
            self._count -= 1
            if self._count == 0:
                self._holding = None
                if self._waiting:
                    self._waiting[0].notify()

    def __enter__(self):
        self.lock()
        return self

    def __exit__(self, *args):
        self.unlock()
        return False