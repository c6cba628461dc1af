"""Unit tests for the FourCC identifier type."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from riffu import LIST_ID, RIFF_ID, SEQT_ID, FourCC, LengthMismatch, Utf8Error
from riffu.fourcc import fourcc


class TestConstruction:
    def test_from_bytes(self) -> None:
        assert FourCC.from_bytes(b'smpl').as_bytes() == b'smpl'

    def test_accepts_bytearray(self) -> None:
        assert FourCC(bytearray(b'data')) == FourCC(b'data')

    @pytest.mark.parametrize('data', [b'', b'abc', b'abcde'])
    def test_rejects_wrong_length(self, data: bytes) -> None:
        with pytest.raises(LengthMismatch):
            FourCC(data)

    @pytest.mark.parametrize('text', ['RIFF', 'abc'])
    def test_rejects_text(self, text: str) -> None:
        with pytest.raises(TypeError, match='from_text'):
            FourCC(text)

    def test_from_text(self) -> None:
        assert FourCC.from_text('fmt ') == FourCC(b'fmt ')

    def test_from_text_counts_encoded_bytes(self) -> None:
        """A 3 character string may still encode to 4 bytes."""
        assert FourCC.from_text('aéb').as_bytes() == b'a\xc3\xa9b'
        with pytest.raises(LengthMismatch):
            FourCC.from_text('ééé')

    @given(st.text(max_size=6))
    def test_from_text_fails_iff_not_4_bytes(self, text: str) -> None:
        if len(text.encode('utf-8')) == 4:
            assert FourCC.from_text(text).as_text() == text
        else:
            with pytest.raises(LengthMismatch):
                FourCC.from_text(text)

    def test_coerce(self) -> None:
        assert fourcc('LIST') is not LIST_ID
        assert fourcc('LIST') == LIST_ID
        assert fourcc(b'RIFF') == RIFF_ID
        assert fourcc(SEQT_ID) is SEQT_ID


class TestText:
    def test_as_text(self) -> None:
        assert RIFF_ID.as_text() == 'RIFF'

    def test_as_text_rejects_invalid_utf8(self) -> None:
        with pytest.raises(Utf8Error) as exc_info:
            FourCC(b'\xff\xfe\x00\x01').as_text()
        assert isinstance(exc_info.value, ValueError)

    @given(st.binary(min_size=4, max_size=4))
    def test_as_text_fails_iff_not_utf8(self, data: bytes) -> None:
        try:
            expected = data.decode('utf-8')
        except UnicodeDecodeError:
            with pytest.raises(Utf8Error):
                FourCC(data).as_text()
        else:
            assert FourCC(data).as_text() == expected


class TestEquality:
    def test_bytewise(self) -> None:
        assert FourCC(b'seqt') == SEQT_ID
        assert FourCC(b'SEQT') != SEQT_ID

    def test_hashable(self) -> None:
        assert {FourCC(b'LIST'), LIST_ID} == {LIST_ID}

    def test_bytes(self) -> None:
        assert bytes(FourCC(b'JUNK')) == b'JUNK'
