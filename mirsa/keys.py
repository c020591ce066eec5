# mirsa/keys.py
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

from mirsa.errors import ModulusOverflowError, NoValidKeysetError
from mirsa.rsa_math import modular_inverse
from mirsa.trace import Trace, emit

U64_MAX = (1 << 64) - 1

# Candidate public exponents, smallest first.
PUBLIC_EXPONENTS = range(3, 10)


def _check_u64(name: str, value: int) -> None:
    if value < 0 or value > U64_MAX:
        raise ValueError(f"{name} out of u64 range: {value}")


@dataclass(frozen=True)
class Key:
    """(e, n) for a public key, (d, n) for a private one."""
    exponent: int
    modulus: int

    def __post_init__(self) -> None:
        _check_u64("exponent", self.exponent)
        _check_u64("modulus", self.modulus)


@dataclass(frozen=True)
class KeyPair:
    public: Key
    private: Key

    def __post_init__(self) -> None:
        if self.public.modulus != self.private.modulus:
            raise ValueError("public and private keys must share the modulus")


class Keyset(NamedTuple):
    public_exponent: int
    private_exponent: int
    modulus: int

    @property
    def pair(self) -> KeyPair:
        return KeyPair(
            public=Key(self.public_exponent, self.modulus),
            private=Key(self.private_exponent, self.modulus),
        )


def derive_keys(p: int, q: int, trace: Optional[Trace] = None) -> Keyset:
    """
    Public/private exponents and modulus for the primes p and q.

    Raises ModulusOverflowError when p*q does not fit in 64 bits (pick another
    prime and retry), NoValidKeysetError when no exponent in 3..9 is invertible
    modulo phi.
    """
    _check_u64("p", p)
    _check_u64("q", q)
    emit(trace, "primes", p=p, q=q)

    n = p * q
    if n > U64_MAX:
        emit(trace, "overflow", level="WARNING", p=p, q=q)
        raise ModulusOverflowError(p, q)

    phi = (p - 1) * (q - 1)
    for e in PUBLIC_EXPONENTS:
        d = modular_inverse(e, phi, trace=trace)
        emit(trace, "candidate", e=e, d=d)
        if d is not None:
            emit(trace, "keyset", e=e, d=d, n=n)
            return Keyset(public_exponent=e, private_exponent=d, modulus=n)

    emit(trace, "no_keyset", level="ERROR", p=p, q=q)
    raise NoValidKeysetError(p, q)
