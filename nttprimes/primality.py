# nttprimes/primality.py
# Exact primality for 64-bit integers:
# - small-prime sieve to drop most composites
# - Miller–Rabin with a base set proven deterministic below 2^64

from __future__ import annotations
from functools import lru_cache
from typing import Tuple

from .arith import U64_LIMIT, is_power_of_two, mul_mod, pow_mod, two_adic_split
from .errors import InvalidParameters

# Deterministic Miller–Rabin bases for n < 2^64
BASES_2_64 = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)

# small primes for quick filters
SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

def passes_sieve(n: int) -> bool:
    """False when a small prime properly divides n."""
    for p in SMALL_PRIMES:
        if n % p == 0:
            return n == p
    return True

def _strong_probable_prime(n: int, a: int, s: int, d: int) -> bool:
    """One strong Miller–Rabin round for base a (n odd, n-1 = 2^s * d)."""
    a %= n
    if a in (0, 1, n - 1):
        return True
    x = pow_mod(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = mul_mod(x, x, n)
        if x == n - 1:
            return True
    return False

def is_prime(n: int) -> bool:
    if n >= U64_LIMIT:
        raise InvalidParameters(f"is_prime covers n < 2^64, got {n.bit_length()} bits")
    if n < 2:
        return False
    if not passes_sieve(n):
        return False
    if n < SMALL_PRIMES[-1] ** 2:
        return True
    s, d = two_adic_split(n - 1)
    return all(_strong_probable_prime(n, a, s, d) for a in BASES_2_64)

def check_ring_dimension(n: int) -> None:
    if not is_power_of_two(n):
        raise InvalidParameters(f"ring dimension must be a power of two, got {n}")

def is_ntt_friendly(q: int, n: int) -> bool:
    """q is prime and q ≡ 1 (mod 2n)."""
    check_ring_dimension(n)
    return q % (2 * n) == 1 and is_prime(q)

# ---------- shared prime tables ----------

@lru_cache(maxsize=8)
def primes_below(bound: int) -> Tuple[int, ...]:
    """All primes p <= bound (Eratosthenes)."""
    if bound < 2:
        return ()
    sieve = bytearray([1]) * (bound + 1)
    sieve[0] = sieve[1] = 0
    for p in range(2, int(bound ** 0.5) + 1):
        if sieve[p]:
            sieve[p*p::p] = bytes(len(range(p*p, bound + 1, p)))
    return tuple(i for i, flag in enumerate(sieve) if flag)

def first_primes(count: int) -> Tuple[int, ...]:
    """The first `count` primes, used as witness bases."""
    bound = 64
    while True:
        ps = primes_below(bound)
        if len(ps) >= count:
            return ps[:count]
        bound *= 2
