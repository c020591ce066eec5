# mirsa/chunk_cipher.py
from __future__ import annotations

import struct
from typing import BinaryIO, Iterator, Optional

from mirsa import text_codec
from mirsa.errors import CipherFormatError
from mirsa.keys import Key
from mirsa.rsa_math import mod_pow
from mirsa.trace import Trace, emit

CHUNK_SIZE = 4
BLOCK = struct.Struct("<Q")
BLOCK_SIZE = BLOCK.size

# ===== Integer level =====

def encrypt_int(m: int, pub: Key, trace: Optional[Trace] = None) -> int:
    return mod_pow(m, pub.exponent, pub.modulus, trace=trace)


def decrypt_int(c: int, priv: Key, trace: Optional[Trace] = None) -> int:
    return mod_pow(c, priv.exponent, priv.modulus, trace=trace)


# ===== Chunking =====

def iter_chunks(data: bytes, size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Consecutive size-byte chunks; the last one is NUL padded to size."""
    for i in range(0, len(data), size):
        chunk = data[i:i + size]
        if len(chunk) < size:
            chunk += b"\x00" * (size - len(chunk))
        yield chunk


def _encrypt_chunk(chunk: bytes, pub: Key, trace: Optional[Trace]) -> bytes:
    code = text_codec.encode(chunk, trace=trace)
    return BLOCK.pack(encrypt_int(code, pub, trace=trace))


def _decrypt_block(block: bytes, priv: Key, trace: Optional[Trace]) -> bytes:
    (c,) = BLOCK.unpack(block)
    return text_codec.decode(decrypt_int(c, priv, trace=trace), trace=trace)


# ===== Bytes level =====

def encrypt_bytes(data: bytes, pub: Key, trace: Optional[Trace] = None) -> bytes:
    out = bytearray()
    for chunk in iter_chunks(data):
        out += _encrypt_chunk(chunk, pub, trace)
    return bytes(out)


def decrypt_bytes(data: bytes, priv: Key, trace: Optional[Trace] = None) -> bytes:
    if len(data) % BLOCK_SIZE != 0:
        raise CipherFormatError(
            f"cipher length {len(data)} is not a multiple of {BLOCK_SIZE}"
        )

    parts = [
        _decrypt_block(data[i:i + BLOCK_SIZE], priv, trace)
        for i in range(0, len(data), BLOCK_SIZE)
    ]
    if parts:
        # only the final chunk was padded
        parts[-1] = parts[-1].rstrip(b"\x00")
    return b"".join(parts)


# ===== Stream level =====

def iter_blocks(source: BinaryIO) -> Iterator[bytes]:
    """Reads the source strictly BLOCK_SIZE bytes at a time."""
    while True:
        block = source.read(BLOCK_SIZE)
        if not block:
            return
        if len(block) < BLOCK_SIZE:
            raise CipherFormatError(
                f"truncated cipher block: {len(block)} of {BLOCK_SIZE} bytes"
            )
        yield block


def encrypt_stream(
    source: BinaryIO,
    sink: BinaryIO,
    pub: Key,
    buffer_size: int = 1024,
    trace: Optional[Trace] = None,
) -> int:
    """
    Encrypts one buffer of plaintext (at most buffer_size bytes) from source.
    Returns the number of blocks written.
    """
    if buffer_size < 1:
        raise ValueError("buffer_size must be positive")

    data = source.read(buffer_size)
    emit(trace, "plaintext_read", bytes_read=len(data))

    count = 0
    for chunk in iter_chunks(data):
        sink.write(_encrypt_chunk(chunk, pub, trace))
        count += 1

    emit(trace, "encrypted", blocks=count)
    return count


def decrypt_stream(
    source: BinaryIO,
    sink: BinaryIO,
    priv: Key,
    trace: Optional[Trace] = None,
) -> int:
    """
    Decrypts every block of source into sink, in block order.
    Returns the number of blocks read.
    """
    count = 0
    pending: Optional[bytes] = None

    # one block of lookahead: the padding of the last block is dropped
    for block in iter_blocks(source):
        if pending is not None:
            sink.write(pending)
        pending = _decrypt_block(block, priv, trace)
        count += 1

    if pending is not None:
        sink.write(pending.rstrip(b"\x00"))

    emit(trace, "decrypted", blocks=count)
    return count
