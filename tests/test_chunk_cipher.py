import io

import pytest

from mirsa.chunk_cipher import (
    BLOCK_SIZE,
    decrypt_bytes,
    decrypt_int,
    decrypt_stream,
    encrypt_bytes,
    encrypt_int,
    encrypt_stream,
    iter_chunks,
)
from mirsa.errors import CipherFormatError, CipherIOError
from mirsa.keys import derive_keys
from mirsa.text_codec import decode


def test_textbook_message():
    pair = derive_keys(61, 53).pair
    c = encrypt_int(65, pair.public)
    assert c != 65
    assert decrypt_int(c, pair.private) == 65


def test_every_message_below_modulus_round_trips():
    pair = derive_keys(61, 53).pair
    for m in range(0, 3233, 7):
        assert decrypt_int(encrypt_int(m, pair.public), pair.private) == m


def test_iter_chunks_pads_last():
    assert list(iter_chunks(b"abcdefghij")) == [b"abcd", b"efgh", b"ij\x00\x00"]
    assert list(iter_chunks(b"abcd")) == [b"abcd"]
    assert list(iter_chunks(b"")) == []


def test_one_block_per_chunk(pair):
    cipher = encrypt_bytes(b"hello world", pair.public)
    assert len(cipher) == 3 * BLOCK_SIZE


def test_decrypt_recovers_text(pair):
    for text in [b"hello world", b"abcd", b"x", b"The quick brown fox\n"]:
        assert decrypt_bytes(encrypt_bytes(text, pair.public), pair.private) == text


def test_blocks_are_in_chunk_order(pair):
    cipher = encrypt_bytes(b"abcdefgh", pair.public)
    first = int.from_bytes(cipher[:BLOCK_SIZE], "little")
    second = int.from_bytes(cipher[BLOCK_SIZE:], "little")
    assert decode(decrypt_int(first, pair.private)) == b"abcd"
    assert decode(decrypt_int(second, pair.private)) == b"efgh"


def test_empty_input(pair):
    assert encrypt_bytes(b"", pair.public) == b""
    assert decrypt_bytes(b"", pair.private) == b""


def test_misaligned_cipher_rejected(pair):
    cipher = encrypt_bytes(b"hello", pair.public)
    with pytest.raises(CipherFormatError):
        decrypt_bytes(cipher[:-1], pair.private)
    assert issubclass(CipherFormatError, CipherIOError)


def test_stream_round_trip(pair):
    cipher = io.BytesIO()
    assert encrypt_stream(io.BytesIO(b"stream me"), cipher, pair.public) == 3
    cipher.seek(0)
    plain = io.BytesIO()
    assert decrypt_stream(cipher, plain, pair.private) == 3
    assert plain.getvalue() == b"stream me"


def test_stream_reads_one_buffer(pair):
    cipher = io.BytesIO()
    assert encrypt_stream(io.BytesIO(b"0123456789"), cipher, pair.public, buffer_size=6) == 2
    assert decrypt_bytes(cipher.getvalue(), pair.private) == b"012345"


def test_stream_truncated_block(pair):
    cipher = encrypt_bytes(b"abcdefgh", pair.public)
    with pytest.raises(CipherFormatError):
        decrypt_stream(io.BytesIO(cipher + b"\x01\x02"), io.BytesIO(), pair.private)
