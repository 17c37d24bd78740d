# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Reusable byte-buffer cache.

Bodies and attachments read from arbitrary streams are first drained into a
scratch ``io.BytesIO``. The pool keeps released buffers around so repeated
message assembly does not allocate a new scratch buffer every time.

The pool is unbounded and never evicts. A released buffer is always emptied
before it can be handed out again, so ``acquire()`` never returns stale data.

Example:
    Borrowing a buffer from the process-wide pool::

        from mail_compose import bufpool

        with bufpool.borrow() as buf:
            buf.write(b"scratch")
            data = buf.getvalue()
"""

from __future__ import annotations

import io
import threading
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager


class BufferPool:
    """Thread-safe pool of ``io.BytesIO`` scratch buffers.

    Attributes:
        lock: Lock guarding the free list.
    """

    def __init__(self):
        self._free: deque[io.BytesIO] = deque()
        self.lock = threading.Lock()

    def acquire(self) -> io.BytesIO:
        """Return an empty buffer, creating one when the pool is empty."""
        with self.lock:
            if self._free:
                return self._free.pop()
        return io.BytesIO()

    def release(self, buf: io.BytesIO) -> None:
        """Empty ``buf`` and return it to the pool."""
        buf.seek(0)
        buf.truncate(0)
        with self.lock:
            self._free.append(buf)

    @contextmanager
    def borrow(self) -> Iterator[io.BytesIO]:
        """Acquire a buffer for the duration of a ``with`` block."""
        buf = self.acquire()
        try:
            yield buf
        finally:
            self.release(buf)

    def __len__(self) -> int:
        with self.lock:
            return len(self._free)


_pool: BufferPool | None = None
_pool_lock = threading.Lock()


def get_pool() -> BufferPool:
    """Return the process-wide pool, creating it on first use."""
    global _pool
    if _pool is None:
        with _pool_lock:
            if _pool is None:
                _pool = BufferPool()
    return _pool


def acquire() -> io.BytesIO:
    return get_pool().acquire()


def release(buf: io.BytesIO) -> None:
    get_pool().release(buf)


def borrow():
    return get_pool().borrow()
