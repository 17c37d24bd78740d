"""Tests for the reusable byte-buffer pool."""

import io
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from mail_compose import bufpool
from mail_compose.bufpool import BufferPool


def test_acquire_creates_buffer_when_pool_empty():
    pool = BufferPool()
    buf = pool.acquire()

    assert isinstance(buf, io.BytesIO)
    assert buf.getvalue() == b""
    assert len(pool) == 0


def test_release_empties_and_reuses_buffer():
    pool = BufferPool()
    buf = pool.acquire()
    buf.write(b"leftover data")
    pool.release(buf)

    again = pool.acquire()
    assert again is buf
    assert again.getvalue() == b""
    assert again.tell() == 0


def test_borrow_releases_on_error():
    pool = BufferPool()

    with pytest.raises(RuntimeError):
        with pool.borrow() as buf:
            buf.write(b"partial")
            raise RuntimeError("boom")

    assert len(pool) == 1
    assert pool.acquire().getvalue() == b""


def test_process_pool_is_a_singleton():
    assert bufpool.get_pool() is bufpool.get_pool()


def test_process_pool_lazy_init_is_race_free(monkeypatch):
    monkeypatch.setattr(bufpool, "_pool", None)
    barrier = threading.Barrier(8)
    seen = []

    def grab():
        barrier.wait()
        seen.append(bufpool.get_pool())

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len({id(p) for p in seen}) == 1


def test_concurrent_acquire_never_returns_dirty_buffer():
    pool = BufferPool()
    dirty = []

    def work(i):
        for _ in range(50):
            buf = pool.acquire()
            if buf.getvalue() or buf.tell():
                dirty.append(i)
            buf.write(b"x" * (i + 1))
            pool.release(buf)

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(work, range(128)))

    assert dirty == []
    assert 1 <= len(pool) <= 128


def test_module_level_helpers_use_process_pool():
    buf = bufpool.acquire()
    buf.write(b"abc")
    bufpool.release(buf)

    with bufpool.borrow() as again:
        assert again.getvalue() == b""
