"""Provides :class:`LockTable`, which hands out one lock per key."""

from contextlib import contextmanager
import threading
from typing import Hashable, Iterator
import weakref


class LockTable:
    """A process-wide map from keys (such as note names) to :class:`threading.Lock` instances.

    Locks are held weakly, so an entry disappears as soon as no thread is holding or waiting for it.
    That keeps the table from growing with every name ever touched.
    """
    def __init__(self):
        self._locks = weakref.WeakValueDictionary()
        self._guard = threading.Lock()

    def lock_for(self, key: Hashable) -> threading.Lock:
        """Returns the lock for the given key, creating it if necessary.

        Callers must keep a reference to the returned lock for as long as they use it.
        """
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Context manager that holds the key's lock for the duration of the block."""
        lock = self.lock_for(key)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
