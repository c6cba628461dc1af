import deal

from .errors import NonZeroPaddingError

WORD_ALIGN = 2


@deal.chain(
    deal.raises(NonZeroPaddingError),
    deal.reason(NonZeroPaddingError, lambda _: bool(_.pad) and set(_.pad) != {0}),
)
def assert_zero(pad: bytes, pos: int = 0) -> bytes:
    if pad and set(pad) != {0}:
        raise NonZeroPaddingError(pos, bytes(pad))
    return pad


@deal.chain(
    deal.pre(lambda _: _.align >= 1),
    deal.pre(lambda _: _.offset >= 0),
    deal.ensure(lambda _: 0 <= _.result < _.align),
    deal.ensure(lambda _: (_.offset + _.result) % _.align == 0),
    deal.safe,
)
def calc_align(offset: int, align: int = WORD_ALIGN) -> int:
    """Calculate difference from given offset to next aligned offset."""
    return (align - offset) % align


@deal.chain(
    deal.pre(lambda _: _.align >= 1),
    deal.ensure(lambda _: _.result.startswith(bytes(_.buffer))),
    deal.ensure(lambda _: len(_.result) % _.align == 0),
    deal.ensure(lambda _: len(_.result) - len(_.buffer) < _.align),
    deal.safe,
)
def align_write(buffer: bytes, align: int = WORD_ALIGN) -> bytes:
    """Pad given buffer with zeros up to the next aligned size."""
    return bytes(buffer) + bytes(calc_align(len(buffer), align))
