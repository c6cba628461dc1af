from dataclasses import dataclass
from typing import Union

from .errors import LengthMismatch, Utf8Error

FOURCC_SIZE = 4


@dataclass(frozen=True)
class FourCC(object):
    """4-byte identifier used for chunk ids and container form types.

    No text encoding is assumed at construction time, only the length is checked.
    """

    data: bytes

    def __post_init__(self) -> None:
        if isinstance(self.data, str):
            raise TypeError(
                f'FourCC expects bytes, got text {self.data!r}; '
                'use FourCC.from_text() or fourcc() for text ids',
            )
        if len(self.data) != FOURCC_SIZE:
            raise LengthMismatch(bytes(self.data))
        # normalize bytearray / memoryview input
        object.__setattr__(self, 'data', bytes(self.data))

    @classmethod
    def from_bytes(cls, data: bytes) -> 'FourCC':
        return cls(data)

    @classmethod
    def from_text(cls, text: str) -> 'FourCC':
        return cls(text.encode('utf-8'))

    def as_bytes(self) -> bytes:
        return self.data

    def as_text(self) -> str:
        try:
            return self.data.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise Utf8Error(self.data, exc.reason) from exc

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f'FourCC({self.data!r})'


FourCCLike = Union[FourCC, bytes, str]


def fourcc(value: FourCCLike) -> FourCC:
    """Coerce bytes or text into a FourCC."""
    if isinstance(value, FourCC):
        return value
    if isinstance(value, str):
        return FourCC.from_text(value)
    return FourCC.from_bytes(value)


RIFF_ID = FourCC(b'RIFF')
LIST_ID = FourCC(b'LIST')
SEQT_ID = FourCC(b'seqt')
