# mirsa/rsa_math.py
from __future__ import annotations

from typing import List, Optional

from mirsa.trace import Trace, emit


def modular_inverse(a: int, n: int, trace: Optional[Trace] = None) -> Optional[int]:
    """
    Extended Euclid. Returns t with (a * t) % n == 1, or None when gcd(a, n) != 1.

    None means "no inverse"; 0 is a valid answer (n == 1).
    """
    t, newt = 0, 1
    r, newr = n, a

    while newr != 0:
        quotient = r // newr
        t, newt = newt, t - quotient * newt
        r, newr = newr, r - quotient * newr
        emit(trace, "inverse_step", quotient=quotient, t=t, newt=newt, r=r, newr=newr)

    if r > 1:
        return None
    if t < 0:
        t += n
    return t


def mod_pow(base: int, exponent: int, modulus: int, trace: Optional[Trace] = None) -> int:
    """
    Square-and-multiply over a table of base^(2^i) % modulus.

    The table holds one entry per bit of the exponent; set bits are folded into
    the accumulator from the most significant one down.
    """
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    if exponent < 0:
        raise ValueError("exponent must be non-negative")

    if exponent == 0:
        return 1 % modulus

    mods: List[int] = [base % modulus]
    for _ in range(1, exponent.bit_length()):
        mods.append((mods[-1] * mods[-1]) % modulus)

    val = 1 % modulus
    for i in range(len(mods) - 1, -1, -1):
        if (exponent >> i) & 1:
            val = (val * mods[i]) % modulus
            emit(trace, "modpow_step", i=i, current=1 << i, val=val)

    emit(trace, "modpow", base=base, exponent=exponent, modulus=modulus, val=val)
    return val
