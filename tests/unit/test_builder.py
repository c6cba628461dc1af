"""Unit tests for building and serializing chunk trees."""

import struct
from pathlib import Path

import pytest

from riffu import (
    InvalidChunkId,
    InvalidHeader,
    Leaf,
    RiffRam,
    SizeOverflow,
    leaf,
    open_eager,
    riff,
    serialize,
    typed_container,
    untyped_container,
)
from riffu.builder import write_file
from riffu.model import MAX_PAYLOAD_LEN


class HugeLeaf(Leaf):
    """Leaf pretending to hold more than a 32-bit length can describe."""

    @property
    def payload_len(self) -> int:
        return MAX_PAYLOAD_LEN + 1


class TestReferenceFiles:
    def test_minimal(self, set_1: bytes) -> None:
        assert serialize(riff('smpl', [leaf('test', b'\xff')])) == set_1

    def test_two_children(self, set_2: bytes) -> None:
        root = riff('smpl').add_child(leaf('tst1', b'\xff')).add_child(leaf('tst2', b'\xee'))
        data = serialize(root)
        assert data == set_2
        pairs = [(c.id().as_text(), bytes(c.raw_content())) for c in open_eager(data).children()]
        assert pairs == [('tst1', b'\xff'), ('tst2', b'\xee')]

    @pytest.mark.parametrize('last', [b'hey this is another test', b'hey this is another test!'])
    def test_nested(self, set_3: bytes, set_4: bytes, last: bytes) -> None:
        root = riff(
            'smpl',
            [
                typed_container(
                    'LIST', 'tst1', [leaf('test', b'hey this is a test'), leaf('test', last)],
                ),
                untyped_container('seqt', [leaf('test', b'final test')]),
            ],
        )
        expected = set_4 if len(last) % 2 else set_3
        assert serialize(root) == expected
        assert root.payload_len == len(expected) - 8


class TestLeaf:
    def test_odd_content_gets_one_pad_byte(self) -> None:
        node = leaf('test', b'abc')
        assert node.payload_len == 3
        assert node.data == b'abc'
        assert bytes(node) == b'test' + struct.pack('<I', 3) + b'abc\x00'
        assert node.encoded_size == 12

    def test_even_content_is_not_padded(self) -> None:
        assert bytes(leaf('test', b'ab')) == b'test\x02\x00\x00\x00ab'

    def test_empty(self) -> None:
        assert bytes(leaf(b'JUNK', b'')) == b'JUNK\x00\x00\x00\x00'

    @pytest.mark.parametrize('etag', ['RIFF', 'LIST', 'seqt'])
    def test_reserved_id(self, etag: str) -> None:
        with pytest.raises(InvalidChunkId):
            leaf(etag, b'')


class TestContainer:
    def test_typed_payload_len(self) -> None:
        node = typed_container('LIST', 'INFO', [leaf('INAM', b'abc'), leaf('ICMT', b'')])
        assert node.payload_len == 4 + 12 + 8

    def test_untyped_payload_len(self) -> None:
        node = untyped_container('seqt', [leaf('test', b'x')])
        assert node.payload_len == 10
        assert bytes(node)[:8] == b'seqt\x0a\x00\x00\x00'

    def test_wrong_ids(self) -> None:
        with pytest.raises(InvalidChunkId):
            typed_container('seqt', 'tst1')
        with pytest.raises(InvalidChunkId):
            typed_container('test', 'tst1')
        with pytest.raises(InvalidChunkId):
            untyped_container('LIST')

    def test_add_child_rederives_length(self) -> None:
        root = riff('smpl')
        assert root.payload_len == 4
        root.add_child(leaf('test', b'\xff'))
        assert root.payload_len == 14

    def test_nested_mutation_after_attach(self) -> None:
        """Growing a nested list is reflected in every ancestor."""
        inner = typed_container('LIST', 'tst1')
        root = riff('smpl', [inner])
        assert root.payload_len == 16
        inner.add_child(leaf('test', b'abc'))
        assert inner.payload_len == 16
        assert root.payload_len == 28
        data = serialize(root)
        assert len(data) == 8 + root.payload_len
        assert open_eager(data).payload_len() == 28

    def test_rejects_cycles(self) -> None:
        inner = untyped_container('seqt')
        outer = typed_container('LIST', 'tst1', [inner])
        with pytest.raises(ValueError):
            inner.add_child(outer)
        with pytest.raises(ValueError):
            inner.add_child(inner)


class TestSerialize:
    def test_root_must_be_riff(self) -> None:
        with pytest.raises(InvalidHeader):
            serialize(typed_container('LIST', 'tst1'))

    def test_size_overflow(self) -> None:
        with pytest.raises(SizeOverflow):
            serialize(riff('smpl', [HugeLeaf('huge', b'')]))

    def test_write_file(self, set_2: bytes, tmp_path: Path) -> None:
        path = tmp_path / 'out.riff'
        root = riff('smpl', [leaf('tst1', b'\xff'), leaf('tst2', b'\xee')])
        assert write_file(path, root) == len(set_2)
        assert path.read_bytes() == set_2
        assert RiffRam.from_file(path).payload_len() == 24
