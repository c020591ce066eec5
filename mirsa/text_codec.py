# mirsa/text_codec.py
from __future__ import annotations

from typing import Optional

from mirsa.trace import Trace, emit

MAX_CHUNK = 4


def encode(chunk: bytes, trace: Optional[Trace] = None) -> int:
    """
    Packs up to 4 bytes into one integer: each byte becomes two uppercase hex
    digits, the digits are concatenated and read back as base 16.
    """
    if len(chunk) > MAX_CHUNK:
        raise ValueError(f"chunk too long: {len(chunk)} bytes, max {MAX_CHUNK}")

    hex_st = "".join(f"{b:02X}" for b in chunk)
    code = int(hex_st, 16) if hex_st else 0
    emit(trace, "encode", chunk=bytes(chunk), hex=hex_st, code=code)
    return code


def decode(code: int, trace: Optional[Trace] = None) -> bytes:
    """
    Inverse of encode, driven only by the hex digits of code.

    No length is stored, so leading NUL bytes of the encoded chunk do not come
    back: decode(encode(b"\\x00ab")) == b"ab".
    """
    if code < 0:
        raise ValueError("code must be non-negative")

    hex_st = f"{code:X}"
    if len(hex_st) % 2:
        hex_st = "0" + hex_st
    decoded = bytes(int(hex_st[i:i + 2], 16) for i in range(0, len(hex_st), 2))
    emit(trace, "decode", code=code, hex=hex_st, decoded=decoded)
    return decoded
