# mirsa/errors.py
from __future__ import annotations


class MirsaError(Exception):
    pass


# ===== Key derivation =====

class ModulusOverflowError(MirsaError):
    """p*q does not fit in 64 bits. Retry with another prime."""

    def __init__(self, p: int, q: int):
        super().__init__(f"overflow. no keyset for <{p}, {q}>")
        self.p = p
        self.q = q


class NoValidKeysetError(MirsaError):
    def __init__(self, p: int, q: int):
        super().__init__(f"no keyset for <{p}, {q}>")
        self.p = p
        self.q = q


class KeyGenerationError(MirsaError):
    pass


# ===== Files =====

class KeyFileError(MirsaError):
    pass


class CipherIOError(MirsaError):
    pass


class CipherFormatError(CipherIOError):
    pass


class PrimesFileError(MirsaError):
    pass
