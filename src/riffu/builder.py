"""Assemble a chunk tree bottom-up and serialize it.

Container payload lengths are derived from the current children whenever
they are read, so they stay equal to the encoded size of the contents after
any mutation of the tree, nested children included.
"""

import abc
import io
from typing import IO, Iterable, Iterator, List

from . import fileio
from .align import WORD_ALIGN, align_write
from .errors import InvalidChunkId, InvalidHeader, SizeOverflow
from .fourcc import RIFF_ID, FourCC, FourCCLike, fourcc
from .model import (
    MAX_PAYLOAD_LEN,
    TYPE_SIZE,
    ChunkHeader,
    Classification,
    classify,
    encoded_size,
)


class Node(abc.ABC):
    etag: FourCC

    @property
    @abc.abstractmethod
    def classification(self) -> Classification:
        ...

    @property
    @abc.abstractmethod
    def payload_len(self) -> int:
        ...

    @property
    def encoded_size(self) -> int:
        return encoded_size(self.payload_len)

    @property
    def header(self) -> ChunkHeader:
        return ChunkHeader(self.etag, self.payload_len)

    @abc.abstractmethod
    def _write_payload(self, stream: IO[bytes]) -> int:
        ...

    def write(self, stream: IO[bytes]) -> int:
        """Write the encoded chunk, depth-first, in one forward pass."""
        written = stream.write(self.header.pack())
        return written + self._write_payload(stream)

    def walk(self) -> Iterator['Node']:
        yield self

    def __bytes__(self) -> bytes:
        with io.BytesIO() as stream:
            self.write(stream)
            return stream.getvalue()


class Leaf(Node):
    def __init__(self, etag: FourCCLike, data: bytes) -> None:
        self.etag = fourcc(etag)
        if classify(self.etag) is not Classification.LEAF:
            raise InvalidChunkId(self.etag.as_bytes(), 'leaf')
        self._size = len(data)
        # stored already padded to the wire alignment
        self._data = align_write(data, WORD_ALIGN)

    @property
    def classification(self) -> Classification:
        return Classification.LEAF

    @property
    def payload_len(self) -> int:
        return self._size

    @property
    def data(self) -> bytes:
        return self._data[: self._size]

    def _write_payload(self, stream: IO[bytes]) -> int:
        return stream.write(self._data)

    def __repr__(self) -> str:
        return f'Leaf({self.etag!r}, size={self._size})'


class Container(Node):
    _overhead = 0

    def __init__(self, etag: FourCCLike, children: Iterable[Node] = ()) -> None:
        self.etag = fourcc(etag)
        if classify(self.etag) is not self.classification:
            raise InvalidChunkId(self.etag.as_bytes(), self.classification.value)
        self.children: List[Node] = []
        self.extend(children)

    @property
    def payload_len(self) -> int:
        return self._overhead + sum(child.encoded_size for child in self.children)

    def add_child(self, child: Node) -> 'Container':
        if any(node is self for node in child.walk()):
            raise ValueError(f'{child!r} already contains {self!r}')
        self.children.append(child)
        return self

    def extend(self, children: Iterable[Node]) -> 'Container':
        for child in children:
            self.add_child(child)
        return self

    def walk(self) -> Iterator[Node]:
        yield self
        for child in self.children:
            yield from child.walk()

    def _write_payload(self, stream: IO[bytes]) -> int:
        return sum(child.write(stream) for child in self.children)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.etag!r}, children={len(self.children)})'


class TypedContainer(Container):
    _overhead = TYPE_SIZE

    def __init__(
        self,
        etag: FourCCLike,
        form_type: FourCCLike,
        children: Iterable[Node] = (),
    ) -> None:
        self.form_type = fourcc(form_type)
        super().__init__(etag, children)

    @property
    def classification(self) -> Classification:
        return Classification.TYPED_CONTAINER

    def _write_payload(self, stream: IO[bytes]) -> int:
        return stream.write(self.form_type.as_bytes()) + super()._write_payload(stream)


class UntypedContainer(Container):
    @property
    def classification(self) -> Classification:
        return Classification.UNTYPED_CONTAINER


def leaf(etag: FourCCLike, data: bytes) -> Leaf:
    return Leaf(etag, data)


def typed_container(
    etag: FourCCLike,
    form_type: FourCCLike,
    children: Iterable[Node] = (),
) -> TypedContainer:
    return TypedContainer(etag, form_type, children)


def untyped_container(etag: FourCCLike, children: Iterable[Node] = ()) -> UntypedContainer:
    return UntypedContainer(etag, children)


def riff(form_type: FourCCLike, children: Iterable[Node] = ()) -> TypedContainer:
    return TypedContainer(RIFF_ID, form_type, children)


def write(stream: IO[bytes], root: Node) -> int:
    """Write a RIFF file to given stream.

    Sizes are checked before anything is written; the root payload bounds
    every nested payload.
    """
    if root.etag != RIFF_ID:
        raise InvalidHeader(root.etag.as_bytes())
    size = root.payload_len
    if size > MAX_PAYLOAD_LEN:
        raise SizeOverflow(root.etag.as_bytes(), size)
    return root.write(stream)


def serialize(root: Node) -> bytes:
    with io.BytesIO() as stream:
        write(stream, root)
        return stream.getvalue()


def write_file(path: fileio.PathLike, root: Node) -> int:
    return fileio.write_file(path, serialize(root))
