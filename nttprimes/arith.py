# nttprimes/arith.py
# Modular arithmetic on 64-bit operands.
# gmpy2 does the double-width work: products of two operands below 2^64
# live in an mpz, so nothing can wrap before the reduction.

from __future__ import annotations
from typing import Tuple

import gmpy2

from .errors import InvalidParameters

U64_LIMIT = 1 << 64
mpz = gmpy2.mpz

# ---------- argument checks ----------

def _check_operand(x: int, name: str) -> None:
    if x < 0 or x >= U64_LIMIT:
        raise InvalidParameters(f"{name}={x} is not a 64-bit unsigned value")

def _check_modulus(q: int) -> None:
    if q <= 1 or q >= U64_LIMIT:
        raise InvalidParameters(f"modulus must satisfy 1 < q < 2^64, got {q}")

# ---------- kernel ----------

def mul_mod(a: int, b: int, q: int) -> int:
    """(a*b) mod q, exact for any 64-bit a, b, q."""
    _check_modulus(q)
    _check_operand(a, "a"); _check_operand(b, "b")
    return int((mpz(a) * mpz(b)) % q)

def pow_mod(base: int, exp: int, q: int) -> int:
    """base^exp mod q by square-and-multiply (gmpy2.powmod)."""
    _check_modulus(q)
    _check_operand(base, "base"); _check_operand(exp, "exp")
    return int(gmpy2.powmod(base, exp, q))

def inv_mod(a: int, q: int) -> int:
    _check_modulus(q)
    _check_operand(a, "a")
    try:
        return int(gmpy2.invert(a, q))
    except ZeroDivisionError:
        raise InvalidParameters(f"{a} has no inverse modulo {q}") from None

def gcd(a: int, b: int) -> int:
    _check_operand(a, "a"); _check_operand(b, "b")
    return int(gmpy2.gcd(a, b))

# ---------- small helpers ----------

def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0

def two_adic_split(n: int) -> Tuple[int, int]:
    """Write n = 2^s * d with d odd; returns (s, d)."""
    if n <= 0:
        raise InvalidParameters(f"two_adic_split needs n > 0, got {n}")
    s = (n & -n).bit_length() - 1  # trailing zeros
    return s, n >> s
