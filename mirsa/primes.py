# mirsa/primes.py
from __future__ import annotations

import random
from pathlib import Path
from typing import List, Sequence

from mirsa.errors import PrimesFileError


def _parse_int(token: str, what: str) -> int:
    token = token.strip()
    if not token.isdigit():
        raise PrimesFileError(f"primes file has invalid {what}: {token!r}")
    return int(token)


def read_primes_file(path: str | Path) -> List[int]:
    """
    First line: decimal count N. Then whitespace separated decimal primes,
    any number per line. Returns the first N values.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="ascii") as f:
            header = f.readline()
            body = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PrimesFileError(f"missing primes file: {path}") from e

    count = _parse_int(header, "count")
    if count == 0:
        raise PrimesFileError("primes file has invalid count: 0")

    primes = [_parse_int(tok, "prime") for tok in body.split()]
    if len(primes) < count:
        raise PrimesFileError(f"primes file lists {len(primes)} primes, expected {count}")
    return primes[:count]


def pick_prime(primes: Sequence[int], rng: random.Random) -> int:
    if not primes:
        raise PrimesFileError("no primes to choose from")
    return primes[rng.randrange(len(primes))]
