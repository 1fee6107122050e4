from __future__ import annotations

import pytest

from jwtexp.buffers import BufferPool, default_pool, reset_default_pool
from jwtexp.errors import InvariantError
from jwtexp.settings import ExtractorSettings


def test_acquire_returns_buffer_of_at_least_min_size() -> None:
    pool = BufferPool(max_buffers=2, min_size=64)
    buffer = pool.acquire(10)
    assert len(buffer) == 64
    assert pool.available == 0


def test_released_buffer_is_reused_and_grown() -> None:
    pool = BufferPool(max_buffers=2, min_size=16)
    first = pool.acquire(8)
    pool.release(first)
    assert pool.available == 1

    second = pool.acquire(100)
    assert second is first
    assert len(second) == 100


def test_release_drops_buffers_beyond_capacity() -> None:
    pool = BufferPool(max_buffers=1, min_size=4)
    a = pool.acquire(4)
    b = pool.acquire(4)
    pool.release(a)
    pool.release(b)
    assert pool.available == 1


def test_zero_capacity_pool_never_retains() -> None:
    pool = BufferPool(max_buffers=0)
    pool.release(pool.acquire(4))
    assert pool.available == 0


def test_double_release_is_an_invariant_violation() -> None:
    pool = BufferPool(max_buffers=2)
    buffer = pool.acquire(4)
    pool.release(buffer)
    with pytest.raises(InvariantError):
        pool.release(buffer)


def test_lease_releases_when_body_raises() -> None:
    pool = BufferPool(max_buffers=2)
    with pytest.raises(RuntimeError):
        with pool.lease(32) as buffer:
            assert len(buffer) >= 32
            raise RuntimeError("boom")
    assert pool.available == 1


def test_leases_in_flight_get_distinct_buffers() -> None:
    pool = BufferPool(max_buffers=2)
    pool.release(pool.acquire(4))
    with pool.lease(4) as outer, pool.lease(4) as inner:
        assert outer is not inner
    assert pool.available == 2


@pytest.mark.parametrize("kwargs", [{"max_buffers": -1}, {"min_size": 0}])
def test_invalid_pool_arguments(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        BufferPool(**kwargs)


def test_from_settings() -> None:
    pool = BufferPool.from_settings(ExtractorSettings(pool_max_buffers=3, pool_min_buffer_size=32))
    assert pool.max_buffers == 3
    assert pool.min_size == 32


def test_default_pool_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWTEXP_POOL_MAX_BUFFERS", "5")
    reset_default_pool()
    try:
        pool = default_pool()
        assert pool.max_buffers == 5
        assert default_pool() is pool
    finally:
        reset_default_pool()
