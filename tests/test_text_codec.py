import pytest

from mirsa.text_codec import decode, encode


def test_encode_hex_packing():
    assert encode(b"A") == 0x41
    assert encode(b"AB") == 0x4142
    assert encode(b"ABCD") == 0x41424344
    assert encode(b"\xff\xff\xff\xff") == 0xFFFFFFFF


def test_encode_empty_chunk():
    assert encode(b"") == 0


def test_encode_rejects_long_chunk():
    with pytest.raises(ValueError):
        encode(b"ABCDE")


@pytest.mark.parametrize("chunk", [b"a", b"hi", b"abc", b"wxyz", b"a\x00bc", b"\x80\x7f\x01"])
def test_decode_inverts_encode(chunk):
    assert decode(encode(chunk)) == chunk


def test_leading_nul_bytes_are_lost():
    assert decode(encode(b"\x00ab")) == b"ab"
    assert decode(encode(b"\x00\x00\x00z")) == b"z"


def test_trailing_padding_is_kept():
    assert decode(encode(b"ab\x00\x00")) == b"ab\x00\x00"


def test_decode_pads_odd_digit_count():
    assert decode(0x123) == b"\x01\x23"
    assert decode(0) == b"\x00"


def test_decode_rejects_negative():
    with pytest.raises(ValueError):
        decode(-1)
