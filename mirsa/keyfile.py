# mirsa/keyfile.py
from __future__ import annotations

import struct
from pathlib import Path
from typing import Optional

from mirsa.errors import KeyFileError
from mirsa.keys import Key
from mirsa.trace import Trace, emit

# [exponent:8][modulus:8], little-endian, no header
KEY_FORMAT = struct.Struct("<QQ")
KEY_SIZE = KEY_FORMAT.size

PUBLIC_SUFFIX = "pub"
PRIVATE_SUFFIX = "pvt"


def key_path(prefix: str | Path, kind: str) -> Path:
    if kind not in (PUBLIC_SUFFIX, PRIVATE_SUFFIX):
        raise ValueError(f"bad key kind: {kind}")
    return Path(f"{prefix}.{kind}")


def pack_key(key: Key) -> bytes:
    return KEY_FORMAT.pack(key.exponent, key.modulus)


def unpack_key(data: bytes) -> Key:
    if len(data) < KEY_SIZE:
        raise KeyFileError(f"key data too short: {len(data)} bytes, need {KEY_SIZE}")
    exponent, modulus = KEY_FORMAT.unpack(data[:KEY_SIZE])
    return Key(exponent=exponent, modulus=modulus)


def _write_key(path: Path, key: Key) -> None:
    try:
        with path.open("wb") as f:
            f.write(pack_key(key))
    except OSError as e:
        raise KeyFileError(f"cannot write key file {path}: {e.strerror or e}") from e


def write_key_pair(
    private: Key,
    public: Key,
    name_prefix: str | Path,
    trace: Optional[Trace] = None,
) -> tuple[Path, Path]:
    """
    Writes {prefix}.pvt and {prefix}.pub. Returns (private_path, public_path).
    """
    if private.modulus != public.modulus:
        raise ValueError("public and private keys must share the modulus")

    pvt_path = key_path(name_prefix, PRIVATE_SUFFIX)
    pub_path = key_path(name_prefix, PUBLIC_SUFFIX)
    _write_key(pvt_path, private)
    _write_key(pub_path, public)
    emit(trace, "keys_written", private=pvt_path, public=pub_path)
    return pvt_path, pub_path


def read_key(path: str | Path, trace: Optional[Trace] = None) -> Key:
    path = Path(path)
    try:
        with path.open("rb") as f:
            data = f.read(KEY_SIZE)
    except OSError as e:
        raise KeyFileError(f"cannot read key file {path}: {e.strerror or e}") from e

    if len(data) < KEY_SIZE:
        raise KeyFileError(f"key file {path} is truncated ({len(data)} of {KEY_SIZE} bytes)")

    key = unpack_key(data)
    emit(trace, "key_read", path=path, exponent=key.exponent, modulus=key.modulus)
    return key
