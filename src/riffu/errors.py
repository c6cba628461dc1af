from typing import Optional


class RiffError(Exception):
    """Base class for every error raised while reading or writing RIFF data."""


class LengthMismatch(RiffError, ValueError):
    def __init__(self, given: bytes) -> None:
        super().__init__(f'Expected FourCC of 4 bytes but got {len(given)}: {given!r}')
        self.given = given


class Utf8Error(RiffError, ValueError):
    def __init__(self, data: bytes, reason: str) -> None:
        super().__init__(f'FourCC {data!r} is not valid UTF-8: {reason}')
        self.data = data
        self.reason = reason


class TooSmall(RiffError, EOFError):
    """Fewer than 8 bytes are available where a chunk header is expected."""

    def __init__(self, pos: int, available: int) -> None:
        super().__init__(
            f'Expected chunk header of 8 bytes at offset {pos} but only {available} available',
        )
        self.pos = pos
        self.available = available


class TooSmallForType(RiffError, EOFError):
    def __init__(self, pos: int, available: int) -> None:
        super().__init__(
            f'Container chunk at offset {pos} lacks its 4 type bytes '
            f'(only {available} available)',
        )
        self.pos = pos
        self.available = available


class NotAContainer(RiffError, TypeError):
    def __init__(self, pos: int, etag: bytes) -> None:
        super().__init__(f'Chunk {etag!r} at offset {pos} does not carry a form type')
        self.pos = pos
        self.etag = etag


class PayloadLenMismatch(RiffError, ValueError):
    """Declared payload length exceeds the bytes actually available."""

    def __init__(self, pos: int, offset: int, payload_len: int, available: int) -> None:
        super().__init__(
            f'Chunk at offset {pos} declares {payload_len} payload bytes from '
            f'content offset {offset} but only {available} available',
        )
        self.pos = pos
        self.offset = offset
        self.payload_len = payload_len
        self.available = available


class InvalidHeader(RiffError, ValueError):
    def __init__(self, found: bytes) -> None:
        super().__init__(f'Expected RIFF header but found {found!r}')
        self.found = found


class RiffIOError(RiffError, OSError):
    def __init__(
        self,
        offset: int,
        size: int,
        cause: Optional[BaseException] = None,
        path: Optional[str] = None,
    ) -> None:
        if path is not None:
            message = f'Failed accessing {path}: {cause}'
        else:
            message = f'Failed reading {size} bytes at offset {offset}: {cause}'
        super().__init__(message)
        self.offset = offset
        self.size = size
        self.path = path


class SizeOverflow(RiffError, OverflowError):
    def __init__(self, etag: bytes, size: int) -> None:
        super().__init__(
            f'Payload of chunk {etag!r} is {size} bytes, exceeding the 32-bit length field',
        )
        self.etag = etag
        self.size = size


class InvalidChunkId(RiffError, ValueError):
    def __init__(self, etag: bytes, expected: str) -> None:
        super().__init__(f'Chunk id {etag!r} cannot be used for a {expected} chunk')
        self.etag = etag
        self.expected = expected


class NonZeroPaddingError(RiffError, ValueError):
    def __init__(self, pos: int, pad: bytes) -> None:
        super().__init__(f'non-zero padding at offset {pos}: {pad!r}')
        self.pos = pos
        self.pad = pad
