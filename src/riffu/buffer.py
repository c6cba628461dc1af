from typing import Union

import deal

BufferLike = Union[bytes, bytearray, memoryview]


class UnexpectedBufferSize(EOFError):
    def __init__(self, expected: int, given: int, offset: int) -> None:
        super().__init__(
            f'Expected buffer of size {expected} at offset {offset} but got size {given}',
        )
        self.expected = expected
        self.given = given
        self.offset = offset


@deal.chain(
    deal.pre(lambda _: _.offset >= 0),
    deal.ensure(lambda _: _.result >= 0),
    deal.safe,
)
def available(buffer: BufferLike, offset: int) -> int:
    """Number of bytes left in buffer from given offset."""
    return max(len(buffer) - offset, 0)


@deal.chain(
    deal.pre(lambda _: _.size >= 0),
    deal.pre(lambda _: _.offset >= 0),
    deal.raises(UnexpectedBufferSize),
    deal.reason(UnexpectedBufferSize, lambda _: _.offset + _.size > len(_.buffer)),
)
def splice(buffer: memoryview, offset: int, size: int) -> memoryview:
    """Zero-copy view of exactly `size` bytes at `offset`."""
    if offset + size > len(buffer):
        raise UnexpectedBufferSize(size, available(buffer, offset), offset)
    return buffer[offset : offset + size]


def readonly_view(buffer: BufferLike) -> memoryview:
    view = memoryview(buffer)
    return view if view.readonly else view.toreadonly()
