import struct
from pathlib import Path
from typing import Callable

import pytest


def raw_chunk(etag: bytes, payload: bytes) -> bytes:
    """Encode one chunk by hand, pad byte included."""
    pad = b'\x00' if len(payload) % 2 else b''
    return etag + struct.pack('<I', len(payload)) + payload + pad


@pytest.fixture
def set_1() -> bytes:
    """RIFF 'smpl' holding one odd leaf."""
    return raw_chunk(b'RIFF', b'smpl' + raw_chunk(b'test', b'\xff'))


@pytest.fixture
def set_2() -> bytes:
    """RIFF 'smpl' holding two odd leaves."""
    return raw_chunk(
        b'RIFF',
        b'smpl' + raw_chunk(b'tst1', b'\xff') + raw_chunk(b'tst2', b'\xee'),
    )


@pytest.fixture
def set_3() -> bytes:
    """RIFF with a LIST of two even leaves and a seqt of one leaf."""
    return raw_chunk(
        b'RIFF',
        b'smpl'
        + raw_chunk(
            b'LIST',
            b'tst1'
            + raw_chunk(b'test', b'hey this is a test')
            + raw_chunk(b'test', b'hey this is another test'),
        )
        + raw_chunk(b'seqt', raw_chunk(b'test', b'final test')),
    )


@pytest.fixture
def set_4() -> bytes:
    """Same as set_3 but the second LIST leaf has odd length."""
    return raw_chunk(
        b'RIFF',
        b'smpl'
        + raw_chunk(
            b'LIST',
            b'tst1'
            + raw_chunk(b'test', b'hey this is a test')
            + raw_chunk(b'test', b'hey this is another test!'),
        )
        + raw_chunk(b'seqt', raw_chunk(b'test', b'final test')),
    )


@pytest.fixture
def write_asset(tmp_path: Path) -> Callable[[bytes], Path]:
    counter = iter(range(1_000))

    def _write(data: bytes) -> Path:
        path = tmp_path / f'asset_{next(counter)}.riff'
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def encode() -> Callable[[bytes, bytes], bytes]:
    return raw_chunk
