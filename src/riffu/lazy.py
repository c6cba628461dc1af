"""Lazy RIFF reader: chunks are offsets into a shared seekable source.

Nothing is cached; every field access reads the source again.
"""

from dataclasses import dataclass, field
from types import TracebackType
from typing import IO, Optional, Type

from .errors import (
    InvalidHeader,
    NotAContainer,
    PayloadLenMismatch,
    TooSmall,
    TooSmallForType,
)
from .fileio import PathLike, open_file
from .fourcc import RIFF_ID, FourCC
from .model import (
    HEADER_SIZE,
    TYPE_SIZE,
    Bounds,
    ChildIterator,
    ChunkHeader,
    Classification,
    content_offset,
    iteration_bounds,
)
from .settings import ReadSetting, settings
from .source import ByteSource, LockedReader, SharedReader


def read_header(source: ByteSource, pos: int) -> ChunkHeader:
    data = source.read_at(pos, HEADER_SIZE)
    if len(data) < HEADER_SIZE:
        raise TooSmall(pos, len(data))
    return ChunkHeader.unpack_from(data)


@dataclass(frozen=True, eq=False)
class ChunkDisk(object):
    source: ByteSource = field(repr=False)
    offset: int
    setting: ReadSetting = field(default=settings, repr=False)

    @property
    def header(self) -> ChunkHeader:
        return read_header(self.source, self.offset)

    @property
    def classification(self) -> Classification:
        return self.header.classification

    def id(self) -> FourCC:
        return self.header.etag

    def payload_len(self) -> int:
        return self.header.size

    def chunk_type(self) -> FourCC:
        header = self.header
        if header.classification is not Classification.TYPED_CONTAINER:
            raise NotAContainer(self.offset, header.etag.as_bytes())
        data = self.source.read_at(self.offset + HEADER_SIZE, TYPE_SIZE)
        if len(data) < TYPE_SIZE:
            raise TooSmallForType(self.offset, len(data))
        return FourCC(data)

    def raw_content(self) -> bytes:
        header = self.header
        start, end = iteration_bounds(self.offset, header.size, header.classification)
        if end < start:
            raise TooSmallForType(self.offset, header.size)
        data = self.source.read_at(start, end - start)
        if len(data) < end - start:
            raise PayloadLenMismatch(
                self.offset,
                content_offset(header.classification),
                header.size,
                len(data),
            )
        return data

    def children(self) -> 'ChunkDiskIter':
        header = self.header
        return ChunkDiskIter(
            self.source,
            iteration_bounds(self.offset, header.size, header.classification),
            self.setting,
        )

    def __repr__(self) -> str:
        return f'ChunkDisk@{self.offset}'


class ChunkDiskIter(ChildIterator[ChunkDisk]):
    def __init__(
        self,
        source: ByteSource,
        bounds: Bounds,
        setting: ReadSetting = settings,
    ) -> None:
        super().__init__(bounds, setting)
        self.source = source

    def _read_header(self, pos: int) -> ChunkHeader:
        return read_header(self.source, pos)

    def _read_pad(self, pos: int) -> bytes:
        return self.source.read_at(pos, 1)

    def _make_child(self, pos: int) -> ChunkDisk:
        return ChunkDisk(self.source, pos, self.setting)


class RiffDisk(object):
    """RIFF file read on demand from a seekable source.

    The root header is validated once at construction. Closing the root
    closes the source, invalidating every chunk derived from it.
    """

    def __init__(self, source: ByteSource, setting: ReadSetting = settings) -> None:
        header = read_header(source, 0)
        if header.etag != RIFF_ID:
            raise InvalidHeader(header.etag.as_bytes())
        setting.logger.debug('opened lazy RIFF, payload length %d', header.size)
        self.source = source
        self.setting = setting

    @classmethod
    def from_stream(
        cls,
        stream: IO[bytes],
        threadsafe: bool = False,
        setting: ReadSetting = settings,
    ) -> 'RiffDisk':
        source = LockedReader(stream) if threadsafe else SharedReader(stream)
        return cls(source, setting)

    @classmethod
    def from_path(
        cls,
        path: PathLike,
        threadsafe: bool = False,
        setting: ReadSetting = settings,
    ) -> 'RiffDisk':
        stream = open_file(path)
        try:
            return cls.from_stream(stream, threadsafe=threadsafe, setting=setting)
        except Exception:
            stream.close()
            raise

    def id(self) -> FourCC:
        return self.as_chunk().id()

    def payload_len(self) -> int:
        return self.as_chunk().payload_len()

    def as_chunk(self) -> ChunkDisk:
        return ChunkDisk(self.source, 0, self.setting)

    def children(self) -> ChunkDiskIter:
        return self.as_chunk().children()

    def close(self) -> None:
        self.source.close()

    def __enter__(self) -> 'RiffDisk':
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


open_lazy = RiffDisk.from_path
