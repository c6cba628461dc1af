"""Eager RIFF reader: the whole file lives in memory, chunks are views into it."""

from dataclasses import dataclass, field

from .buffer import BufferLike, UnexpectedBufferSize, available, readonly_view, splice
from .errors import InvalidHeader, NotAContainer, PayloadLenMismatch, TooSmallForType
from .fileio import PathLike, read_file
from .fourcc import RIFF_ID, FourCC
from .model import (
    HEADER_SIZE,
    TYPE_SIZE,
    Bounds,
    ChildIterator,
    ChunkHeader,
    Classification,
    content_offset,
    encoded_size,
    iteration_bounds,
)
from .settings import ReadSetting, settings


@dataclass(frozen=True, eq=False)
class ChunkRam(object):
    buffer: memoryview = field(repr=False)
    offset: int
    setting: ReadSetting = field(default=settings, repr=False)

    @classmethod
    def from_buffer(
        cls,
        buffer: BufferLike,
        offset: int = 0,
        setting: ReadSetting = settings,
    ) -> 'ChunkRam':
        view = readonly_view(buffer)
        # fails early when there is no room for a header
        ChunkHeader.unpack_from(view, offset)
        return cls(view, offset, setting)

    @property
    def header(self) -> ChunkHeader:
        return ChunkHeader.unpack_from(self.buffer, self.offset)

    @property
    def classification(self) -> Classification:
        return self.header.classification

    def id(self) -> FourCC:
        return self.header.etag

    def payload_len(self) -> int:
        return self.header.size

    def chunk_type(self) -> FourCC:
        """Form type of a RIFF or LIST chunk."""
        etag = self.id()
        if self.classification is not Classification.TYPED_CONTAINER:
            raise NotAContainer(self.offset, etag.as_bytes())
        try:
            return FourCC(splice(self.buffer, self.offset + HEADER_SIZE, TYPE_SIZE))
        except UnexpectedBufferSize as exc:
            raise TooSmallForType(
                self.offset,
                available(self.buffer, self.offset + HEADER_SIZE),
            ) from exc

    def raw_content(self) -> memoryview:
        """Payload bytes after the header, excluding the form type and the pad byte."""
        header = self.header
        start, end = iteration_bounds(self.offset, header.size, header.classification)
        if end < start:
            raise TooSmallForType(self.offset, header.size)
        try:
            return splice(self.buffer, start, end - start)
        except UnexpectedBufferSize as exc:
            raise PayloadLenMismatch(
                self.offset,
                content_offset(header.classification),
                header.size,
                exc.given,
            ) from exc

    def children(self) -> 'ChunkRamIter':
        header = self.header
        return ChunkRamIter(
            self.buffer,
            iteration_bounds(self.offset, header.size, header.classification),
            self.setting,
        )

    def __repr__(self) -> str:
        header = self.header
        return 'ChunkRam<{tag}>[{size}]@{offset}'.format(
            tag=header.etag.as_bytes().decode('latin-1'),
            size=header.size,
            offset=self.offset,
        )


class ChunkRamIter(ChildIterator[ChunkRam]):
    def __init__(
        self,
        buffer: memoryview,
        bounds: Bounds,
        setting: ReadSetting = settings,
    ) -> None:
        super().__init__(bounds, setting)
        self.buffer = buffer

    def _read_header(self, pos: int) -> ChunkHeader:
        return ChunkHeader.unpack_from(self.buffer, pos)

    def _read_pad(self, pos: int) -> bytes:
        return bytes(self.buffer[pos : pos + 1])

    def _make_child(self, pos: int) -> ChunkRam:
        return ChunkRam(self.buffer, pos, self.setting)


@dataclass(frozen=True, eq=False)
class RiffRam(object):
    """In-memory RIFF file, validated to start with a RIFF header."""

    data: memoryview = field(repr=False)
    setting: ReadSetting = field(default=settings, repr=False)

    @classmethod
    def load(cls, data: BufferLike, setting: ReadSetting = settings) -> 'RiffRam':
        view = readonly_view(data)
        header = ChunkHeader.unpack_from(view, 0)
        if header.etag != RIFF_ID:
            raise InvalidHeader(header.etag.as_bytes())
        _check_root_length(view, header, setting)
        return cls(view, setting)

    @classmethod
    def from_file(
        cls,
        path: PathLike,
        setting: ReadSetting = settings,
    ) -> 'RiffRam':
        return cls.load(read_file(path), setting)

    def id(self) -> FourCC:
        return self.as_chunk().id()

    def payload_len(self) -> int:
        return self.as_chunk().payload_len()

    def as_bytes(self) -> memoryview:
        return self.data

    def as_chunk(self) -> ChunkRam:
        return ChunkRam(self.data, 0, self.setting)

    def children(self) -> ChunkRamIter:
        return self.as_chunk().children()


def _check_root_length(view: memoryview, header: ChunkHeader, setting: ReadSetting) -> None:
    declared = HEADER_SIZE + header.size
    setting.logger.debug('loaded RIFF of %d bytes, payload length %d', len(view), header.size)
    if len(view) < declared:
        setting.logger.warning(
            'RIFF declares %d bytes but only %d available', declared, len(view),
        )
    elif len(view) > encoded_size(header.size):
        setting.logger.warning(
            'found %d trailing bytes after RIFF chunk', len(view) - encoded_size(header.size),
        )


open_eager = RiffRam.load
