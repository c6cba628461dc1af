"""Seekable byte sources backing the lazy reader.

A source is one shared cursor: every read is a seek followed by a read, so
handles derived from the same source must not be used from several threads
at once unless the source is a `LockedReader`.
"""

import io
import threading
from typing import IO, Protocol

from .errors import RiffIOError


class ByteSource(Protocol):
    def read_at(self, offset: int, size: int) -> bytes:
        """Read up to `size` bytes at `offset`, short only at end of data."""
        ...

    def close(self) -> None:
        ...


class SharedReader(object):
    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream

    def read_at(self, offset: int, size: int) -> bytes:
        try:
            self._stream.seek(offset, io.SEEK_SET)
            return self._read(size)
        except OSError as exc:
            raise RiffIOError(offset, size, exc) from exc

    def _read(self, size: int) -> bytes:
        parts = []
        remaining = size
        while remaining > 0:
            part = self._stream.read(remaining)
            if not part:
                break
            parts.append(part)
            remaining -= len(part)
        return b''.join(parts)

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def close(self) -> None:
        self._stream.close()


class LockedReader(SharedReader):
    """SharedReader with each seek and read done under one lock."""

    def __init__(self, stream: IO[bytes]) -> None:
        super().__init__(stream)
        self._lock = threading.Lock()

    def read_at(self, offset: int, size: int) -> bytes:
        with self._lock:
            return super().read_at(offset, size)
