"""
Per item-code locks around stock check-then-mutate sections
"""
from contextlib import contextmanager
from typing import Dict, Iterator
import threading


class ItemLockRegistry:
    """Hands out one re-entrant lock per item code"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def _lock_for(self, code: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(code)
            if lock is None:
                lock = threading.RLock()
                self._locks[code] = lock
            return lock

    @contextmanager
    def hold(self, *codes: str) -> Iterator[None]:
        """Acquire the locks for all codes in sorted order (no lock-order inversion)"""
        locks = [self._lock_for(code) for code in sorted(set(codes))]
        for lock in locks:
            lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()


item_locks = ItemLockRegistry()
