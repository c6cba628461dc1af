"""Structural rules shared by the readers and the builder.

A chunk is a FourCC id followed by a 32-bit little-endian payload length,
then the payload and, for odd lengths, one zero pad byte that is not counted
in the length. RIFF and LIST chunks are typed containers: the payload starts
with a FourCC form type followed by child chunks. seqt chunks are untyped
containers: the whole payload is child chunks. Any other id is a leaf.
"""

import abc
import enum
import struct
from typing import Iterator, NamedTuple, Optional, TypeVar

import deal

from .align import WORD_ALIGN, assert_zero, calc_align
from .errors import (
    NonZeroPaddingError,
    PayloadLenMismatch,
    RiffError,
    SizeOverflow,
    TooSmall,
    TooSmallForType,
)
from .fourcc import LIST_ID, RIFF_ID, SEQT_ID, FourCC
from .settings import ReadSetting, settings

HEADER_STRUCT = struct.Struct('<4sI')
HEADER_SIZE = HEADER_STRUCT.size
TYPE_SIZE = 4
MAX_PAYLOAD_LEN = 0xFFFFFFFF


class Classification(enum.Enum):
    TYPED_CONTAINER = 'typed'
    UNTYPED_CONTAINER = 'untyped'
    LEAF = 'leaf'

    @property
    def is_container(self) -> bool:
        return self is not Classification.LEAF


@deal.safe
def classify(etag: FourCC) -> Classification:
    if etag in (RIFF_ID, LIST_ID):
        return Classification.TYPED_CONTAINER
    if etag == SEQT_ID:
        return Classification.UNTYPED_CONTAINER
    return Classification.LEAF


@deal.chain(
    deal.ensure(lambda _: _.result in (HEADER_SIZE, HEADER_SIZE + TYPE_SIZE)),
    deal.safe,
)
def content_offset(classification: Classification) -> int:
    """Offset of the first content byte relative to the chunk start."""
    if classification is Classification.TYPED_CONTAINER:
        return HEADER_SIZE + TYPE_SIZE
    return HEADER_SIZE


class Bounds(NamedTuple):
    start: int
    end: int


@deal.chain(
    deal.pre(lambda _: _.pos >= 0),
    deal.pre(lambda _: _.payload_len >= 0),
    deal.ensure(lambda _: _.result.start == _.pos + content_offset(_.classification)),
    deal.safe,
)
def iteration_bounds(pos: int, payload_len: int, classification: Classification) -> Bounds:
    """Span of the child chunks of the chunk at `pos`.

    For typed containers `payload_len` includes the form type,
    which is already skipped by the content offset.
    """
    start = pos + content_offset(classification)
    if classification is Classification.TYPED_CONTAINER:
        return Bounds(start, start + payload_len - TYPE_SIZE)
    return Bounds(start, start + payload_len)


@deal.chain(
    deal.pre(lambda _: _.payload_len >= 0),
    deal.ensure(lambda _: _.result % WORD_ALIGN == 0),
    deal.ensure(lambda _: _.payload_len <= _.result <= _.payload_len + 1),
    deal.safe,
)
def padded_size(payload_len: int) -> int:
    return payload_len + calc_align(payload_len, WORD_ALIGN)


@deal.chain(
    deal.pre(lambda _: _.payload_len >= 0),
    deal.safe,
)
def encoded_size(payload_len: int) -> int:
    """Number of bytes a chunk occupies on the wire, header and pad included."""
    return HEADER_SIZE + padded_size(payload_len)


@deal.chain(
    deal.pre(lambda _: _.cursor >= 0),
    deal.pre(lambda _: _.payload_len >= 0),
    deal.ensure(lambda _: _.result == _.cursor + encoded_size(_.payload_len)),
    deal.safe,
)
def advance(cursor: int, payload_len: int) -> int:
    return cursor + HEADER_SIZE + payload_len + payload_len % 2


class ChunkHeader(NamedTuple):
    etag: FourCC
    size: int

    @property
    def classification(self) -> Classification:
        return classify(self.etag)

    @classmethod
    def unpack_from(cls, buffer: bytes, offset: int = 0) -> 'ChunkHeader':
        available = max(len(buffer) - offset, 0)
        if available < HEADER_SIZE:
            raise TooSmall(offset, available)
        etag, size = HEADER_STRUCT.unpack_from(buffer, offset)
        return cls(FourCC(etag), size)

    def pack(self) -> bytes:
        if self.size > MAX_PAYLOAD_LEN:
            raise SizeOverflow(self.etag.as_bytes(), self.size)
        return HEADER_STRUCT.pack(self.etag.as_bytes(), self.size)


class IterStatus(enum.Enum):
    ACTIVE = 'active'
    EXHAUSTED = 'exhausted'
    FAILED = 'failed'


_ChunkT = TypeVar('_ChunkT')


class ChildIterator(Iterator[_ChunkT]):
    """Iterate child chunks between `start` and `end`.

    The first structural error is raised once, then the iterator stays
    FAILED and stops. Call `children()` on the parent again for a fresh pass.
    """

    def __init__(
        self,
        bounds: Bounds,
        setting: ReadSetting = settings,
    ) -> None:
        self.cursor, self.end = bounds
        self.setting = setting
        self.status = IterStatus.ACTIVE
        self.error: Optional[RiffError] = None
        # typed container whose length cannot hold its form type
        self._truncated = self.end < self.cursor

    @abc.abstractmethod
    def _read_header(self, pos: int) -> ChunkHeader:
        ...

    @abc.abstractmethod
    def _read_pad(self, pos: int) -> bytes:
        """Return the pad byte at `pos`, or nothing past the end of data."""

    @abc.abstractmethod
    def _make_child(self, pos: int) -> _ChunkT:
        ...

    def __next__(self) -> _ChunkT:
        if self.status is not IterStatus.ACTIVE:
            raise StopIteration
        if self.cursor >= self.end and not self._truncated:
            self.status = IterStatus.EXHAUSTED
            raise StopIteration
        try:
            return self._step()
        except RiffError as exc:
            self.status = IterStatus.FAILED
            self.error = exc
            self.setting.logger.debug('stopped iteration at offset %d: %s', self.cursor, exc)
            raise

    def _step(self) -> _ChunkT:
        pos = self.cursor
        if self._truncated:
            chunk_pos = pos - HEADER_SIZE - TYPE_SIZE
            raise TooSmallForType(chunk_pos, self.end - chunk_pos - HEADER_SIZE)
        if pos + HEADER_SIZE > self.end:
            raise TooSmall(pos, self.end - pos)
        header = self._read_header(pos)
        data_end = pos + HEADER_SIZE + header.size
        if data_end > self.end:
            room = self.end - pos - HEADER_SIZE
            raise PayloadLenMismatch(pos, HEADER_SIZE, header.size, room)
        if header.size % 2 and data_end < self.end:
            self._check_pad(data_end)
        child = self._make_child(pos)
        self.cursor = advance(pos, header.size)
        return child

    def _check_pad(self, pos: int) -> None:
        try:
            assert_zero(self._read_pad(pos), pos)
        except NonZeroPaddingError as exc:
            if self.setting.strict:
                raise
            self.setting.logger.warning(exc)
