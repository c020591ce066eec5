# mirsa/keygen.py
from __future__ import annotations

import random
from pathlib import Path
from typing import Optional, Sequence

from mirsa.errors import KeyGenerationError, ModulusOverflowError
from mirsa.keyfile import write_key_pair
from mirsa.keys import Keyset, derive_keys
from mirsa.primes import pick_prime
from mirsa.trace import Trace, emit


def make_keys(p: int, q: int, prefix: str | Path, trace: Optional[Trace] = None) -> Keyset:
    """Derives the keyset for (p, q) and writes {prefix}.pvt / {prefix}.pub."""
    keyset = derive_keys(p, q, trace=trace)
    pair = keyset.pair
    write_key_pair(pair.private, pair.public, prefix, trace=trace)
    return keyset


def generate_keys(
    primes: Sequence[int],
    prefix: str | Path,
    rng: random.Random,
    retries: int = 3,
    trace: Optional[Trace] = None,
) -> Keyset:
    """
    Picks p and q from primes and writes the key pair.

    On modulus overflow a new q is drawn, at most `retries` times. Any other
    failure propagates at once.
    """
    p = pick_prime(primes, rng)
    q = pick_prime(primes, rng)

    attempt = 0
    while True:
        try:
            return make_keys(p, q, prefix, trace=trace)
        except ModulusOverflowError as e:
            if attempt >= retries:
                raise KeyGenerationError("failed to generate keyset") from e
            attempt += 1
            q = pick_prime(primes, rng)
            emit(trace, "retry", level="WARNING", attempt=attempt, q=q)
