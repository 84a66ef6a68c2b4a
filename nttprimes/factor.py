# nttprimes/factor.py
# Bounded factorization of group orders q-1 (< 2^64):
# - trial division by sieve primes
# - Pollard-ρ (Brent) with block-GCD and an iteration budget
# Nothing here promises success; callers decide what an unfactored
# remainder means.

from __future__ import annotations
import random
from typing import Dict, List, Optional, Tuple

import gmpy2

from .primality import is_prime, primes_below

mpz = gmpy2.mpz

# ---------- trial division ----------

def trial_divide(n: int, bound: int) -> Tuple[Dict[int, int], int]:
    """Strip every prime <= bound from n. Returns ({p: e}, cofactor)."""
    factors: Dict[int, int] = {}
    for p in primes_below(bound):
        if p * p > n:
            break
        if n % p:
            continue
        e = 0
        while n % p == 0:
            n //= p; e += 1
        factors[p] = e
    if n > 1 and n < bound * bound:
        factors[n] = factors.get(n, 0) + 1
        n = 1
    return factors, n

# ---------- Brent ρ with block-GCD ----------

def rho_brent(n: int, budget: int, rng: random.Random, m: int = 128) -> Tuple[Optional[int], int]:
    """Return (nontrivial factor or None, f() evaluations used)."""
    if n % 2 == 0:
        return 2, 0
    n_ = mpz(n)
    y = mpz(rng.randrange(1, n - 1))
    c = mpz(rng.randrange(1, n - 1))
    r, q, g = 1, mpz(1), mpz(1)
    x = ys = y
    used = 0

    while g == 1 and used < budget:
        x = y
        for _ in range(r):
            y = (y * y + c) % n_
        used += r
        k = 0
        while k < r and g == 1:
            ys = y
            for _ in range(min(m, r - k)):
                y = (y * y + c) % n_
                q = (q * abs(x - y)) % n_
            g = gmpy2.gcd(q, n_)
            k += m
        used += r
        r <<= 1

    if g == n_:  # block overshot; replay one step at a time
        g = mpz(1)
        while g == 1:
            ys = (ys * ys + c) % n_
            g = gmpy2.gcd(abs(x - ys), n_)

    if g == 1 or g == n_:
        return None, used
    return int(g), used

# ---------- orchestration ----------

def factorize(n: int, trial_bound: int, rho_iterations: int,
              seed: Optional[int] = None) -> Tuple[Dict[int, int], List[int]]:
    """
    Factor n as far as the budgets allow.
    Returns ({prime: exponent}, [composite pieces left unsplit]).
    """
    factors, rest = trial_divide(n, trial_bound)
    if rest == 1:
        return factors, []
    rng = random.Random(n ^ 0x9E3779B97F4A7C15 if seed is None else seed)
    budget = rho_iterations
    stack, stuck = [rest], []
    while stack:
        piece = stack.pop()
        if is_prime(piece):
            factors[piece] = factors.get(piece, 0) + 1
            continue
        root = gmpy2.iroot(mpz(piece), 2)
        if root[1]:
            stack += [int(root[0])] * 2
            continue
        d = None
        while d is None and budget > 0:
            d, used = rho_brent(piece, budget, rng)
            budget -= used
        if d is None:
            stuck.append(piece)
            continue
        stack += [d, piece // d]
    return factors, stuck
