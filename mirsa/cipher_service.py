# mirsa/cipher_service.py
from __future__ import annotations

import random
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from mirsa.chunk_cipher import BLOCK_SIZE, decrypt_bytes, encrypt_bytes
from mirsa.errors import CipherIOError
from mirsa.keyfile import PRIVATE_SUFFIX, PUBLIC_SUFFIX, key_path, read_key
from mirsa.keygen import generate_keys
from mirsa.keys import Keyset
from mirsa.primes import read_primes_file
from mirsa.trace import Trace, emit


@contextmanager
def _open(
    path: Optional[str | Path],
    mode: str,
    fallback: Optional[BinaryIO],
    std: str,
) -> Iterator[BinaryIO]:
    """
    Opens path in binary mode. When path is None yields fallback, or the
    binary side of sys.<std>; that stream is never closed.
    """
    if path is None:
        yield fallback if fallback is not None else _std(std)
        return
    try:
        f = open(path, mode)
    except OSError as e:
        raise CipherIOError(f"{path}: {e.strerror or e}") from e
    with f:
        yield f


def _std(name: str) -> BinaryIO:
    return getattr(sys, name).buffer


def write_cipher(
    key_name: str | Path,
    cipherfile: str | Path,
    plainfile: Optional[str | Path] = None,
    buffer_size: int = 1024,
    stdin: Optional[BinaryIO] = None,
    trace: Optional[Trace] = None,
) -> int:
    """
    Encrypts plainfile (stdin when None) with {key_name}.pub into cipherfile.
    Returns the number of blocks written.
    """
    pub = read_key(key_path(key_name, PUBLIC_SUFFIX), trace=trace)

    with _open(plainfile, "rb", stdin, "stdin") as src:
        try:
            data = src.read(buffer_size)
        except OSError as e:
            raise CipherIOError(f"cannot read plaintext: {e}") from e
    emit(trace, "plaintext_read", bytes_read=len(data))

    cipher = encrypt_bytes(data, pub, trace=trace)
    emit(trace, "write_cipher", key=key_name, cipherfile=cipherfile, plainfile=plainfile)
    try:
        with open(cipherfile, "wb") as dst:
            dst.write(cipher)
    except OSError as e:
        raise CipherIOError(f"cannot write {cipherfile}: {e.strerror or e}") from e
    return len(cipher) // BLOCK_SIZE


def read_cipher(
    key_name: str | Path,
    cipherfile: str | Path,
    plainfile: Optional[str | Path] = None,
    stdout: Optional[BinaryIO] = None,
    trace: Optional[Trace] = None,
) -> int:
    """
    Decrypts cipherfile with {key_name}.pvt into plainfile (stdout when None).
    Returns the number of blocks read.
    """
    priv = read_key(key_path(key_name, PRIVATE_SUFFIX), trace=trace)

    try:
        with open(cipherfile, "rb") as src:
            cipher = src.read()
    except OSError as e:
        raise CipherIOError(f"cannot read {cipherfile}: {e.strerror or e}") from e

    # a misaligned cipher is rejected before plainfile is opened
    plain = decrypt_bytes(cipher, priv, trace=trace)

    emit(trace, "read_cipher", key=key_name, cipherfile=cipherfile, plainfile=plainfile)
    with _open(plainfile, "wb", stdout, "stdout") as dst:
        try:
            dst.write(plain)
            dst.flush()
        except OSError as e:
            raise CipherIOError(f"cannot write plaintext: {e}") from e
    return len(cipher) // BLOCK_SIZE


def genkeys(
    key_name: str | Path,
    primes_file: str | Path,
    seed: int,
    retries: int = 3,
    trace: Optional[Trace] = None,
) -> Keyset:
    primes = read_primes_file(primes_file)
    emit(trace, "genkeys", key=key_name, primes=len(primes), seed=seed)
    return generate_keys(primes, key_name, random.Random(seed), retries=retries, trace=trace)

