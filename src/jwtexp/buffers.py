"""Pooled scratch buffers for staging token segments before decoding."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from jwtexp.constants import DEFAULT_POOL_MAX_BUFFERS, DEFAULT_POOL_MIN_BUFFER_SIZE
from jwtexp.errors import ConfigError, InvariantError
from jwtexp.settings import ExtractorSettings, load_settings


class BufferPool:
    """Thread-safe pool of reusable ``bytearray`` buffers.

    A buffer returned by :meth:`acquire` belongs to the caller until it is handed
    back through :meth:`release`. Prefer :meth:`lease`, which releases on every
    exit path.
    """

    def __init__(
        self,
        max_buffers: int = DEFAULT_POOL_MAX_BUFFERS,
        min_size: int = DEFAULT_POOL_MIN_BUFFER_SIZE,
    ) -> None:
        if max_buffers < 0:
            raise ValueError("max_buffers must be >= 0")
        if min_size < 1:
            raise ValueError("min_size must be >= 1")
        self.max_buffers = max_buffers
        self.min_size = min_size
        self._idle: list[bytearray] = []
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: ExtractorSettings) -> BufferPool:
        return cls(max_buffers=settings.pool_max_buffers, min_size=settings.pool_min_buffer_size)

    @property
    def available(self) -> int:
        with self._lock:
            return len(self._idle)

    def acquire(self, size: int) -> bytearray:
        if size < 0:
            raise ValueError("size must be >= 0")
        with self._lock:
            buffer = self._idle.pop() if self._idle else None

        if buffer is None:
            return bytearray(max(size, self.min_size))
        if len(buffer) < size:
            buffer.extend(bytes(size - len(buffer)))
        return buffer

    def release(self, buffer: bytearray) -> None:
        with self._lock:
            if any(idle is buffer for idle in self._idle):
                raise InvariantError("buffer released to the pool twice")
            if len(self._idle) < self.max_buffers:
                self._idle.append(buffer)

    @contextmanager
    def lease(self, size: int) -> Iterator[bytearray]:
        buffer = self.acquire(size)
        try:
            yield buffer
        finally:
            self.release(buffer)


_default_pool: BufferPool | None = None
_default_pool_lock = threading.Lock()


def default_pool() -> BufferPool:
    """Return the process-wide pool, built once on first use.

    Pool sizes come from the environment when it validates; otherwise the
    built-in defaults apply, so configuration never blocks extraction.
    """

    global _default_pool
    with _default_pool_lock:
        if _default_pool is None:
            try:
                _default_pool = BufferPool.from_settings(load_settings())
            except ConfigError:
                _default_pool = BufferPool()
        return _default_pool


def reset_default_pool() -> None:
    global _default_pool
    with _default_pool_lock:
        _default_pool = None
