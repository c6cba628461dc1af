"""Read and write RIFF-family chunk containers (WAV, AVI, DLS, ...).

Two readers share one chunk model: `open_eager` loads a whole buffer and hands
out zero-copy views, `open_lazy` re-reads headers from a seekable file on
demand. The builder assembles a chunk tree and `serialize` encodes it.
"""

from .builder import (
    Leaf,
    TypedContainer,
    UntypedContainer,
    leaf,
    riff,
    serialize,
    typed_container,
    untyped_container,
)
from .eager import ChunkRam, RiffRam, open_eager
from .errors import (
    InvalidChunkId,
    InvalidHeader,
    LengthMismatch,
    NonZeroPaddingError,
    NotAContainer,
    PayloadLenMismatch,
    RiffError,
    RiffIOError,
    SizeOverflow,
    TooSmall,
    TooSmallForType,
    Utf8Error,
)
from .fourcc import LIST_ID, RIFF_ID, SEQT_ID, FourCC
from .lazy import ChunkDisk, RiffDisk, open_lazy
from .model import Classification, IterStatus
from .settings import ReadSetting, settings
from .tree import Element, read_tree

__all__ = [
    'ChunkDisk',
    'ChunkRam',
    'Classification',
    'Element',
    'FourCC',
    'InvalidChunkId',
    'InvalidHeader',
    'IterStatus',
    'LIST_ID',
    'Leaf',
    'LengthMismatch',
    'NonZeroPaddingError',
    'NotAContainer',
    'PayloadLenMismatch',
    'RIFF_ID',
    'ReadSetting',
    'RiffDisk',
    'RiffError',
    'RiffIOError',
    'RiffRam',
    'SEQT_ID',
    'SizeOverflow',
    'TooSmall',
    'TooSmallForType',
    'TypedContainer',
    'UntypedContainer',
    'Utf8Error',
    'leaf',
    'open_eager',
    'open_lazy',
    'read_tree',
    'riff',
    'serialize',
    'settings',
    'typed_container',
    'untyped_container',
]
