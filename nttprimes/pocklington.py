# nttprimes/pocklington.py
# Pocklington–Lehmer certification from a partial factorization of q-1.
#
# q-1 = F*R with gcd(F, R) = 1 and F^2 > q-1. If for every prime p | F some
# base a has a^(q-1) ≡ 1 and gcd(a^((q-1)/p) - 1, q) = 1, then q is prime.
# F starts as the power of two in q-1 and grows by trial division of the
# odd part; if it never outgrows sqrt(q-1) the method is inconclusive.

from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from . import config
from .arith import gcd, pow_mod, two_adic_split
from .certificate import Certification, Method, PocklingtonCertificate, Verdict
from .errors import InvalidParameters
from .primality import first_primes, primes_below

log = logging.getLogger(__name__)

# primes_below sieves up to the bound; 2^24 already absorbs cofactors below 2^48
MAX_FACTOR_BOUND = 1 << 24

def check_factor_bound(factor_bound: int) -> None:
    if not 2 <= factor_bound <= MAX_FACTOR_BOUND:
        raise InvalidParameters(
            f"factor_bound must be in [2, {MAX_FACTOR_BOUND}], got {factor_bound}")

def _sufficient(F: int, q: int) -> bool:
    return F * F > q - 1

def accumulate_factors(q: int, factor_bound: int) -> Tuple[List[Tuple[int, int]], int]:
    """
    Factored portion of q-1 as [(2, m), (p, e), ...] plus what is left over.
    Stops as soon as the factored part is large enough for a proof.
    """
    m, r = two_adic_split(q - 1)
    factors: List[Tuple[int, int]] = [(2, m)] if m else []
    F = 1 << m
    if _sufficient(F, q) or r == 1:
        return factors, r
    for p in primes_below(factor_bound):
        if p == 2:
            continue
        if p * p > r:
            break
        if r % p:
            continue
        e = 0
        while r % p == 0:
            r //= p; e += 1
        factors.append((p, e))
        F *= p ** e
        if _sufficient(F, q) or r == 1:
            return factors, r
    # no prime <= min(bound, sqrt(r)) divides what is left, so a cofactor
    # below bound^2 is prime
    if r > 1 and r < factor_bound * factor_bound:
        factors.append((r, 1))
        r = 1
    return factors, r

def certify(q: int, factor_bound: Optional[int] = None,
            bases: Optional[int] = None) -> Certification:
    """Try to prove q prime; INCONCLUSIVE is the NotCertifiable outcome."""
    if q < 3 or q % 2 == 0:
        raise InvalidParameters(f"Pocklington needs an odd q > 2, got {q}")
    if factor_bound is None:
        factor_bound = config.FACTOR_BOUND
    check_factor_bound(factor_bound)
    if bases is None:
        bases = config.POCKLINGTON_BASES

    factors, rest = accumulate_factors(q, factor_bound)
    F = (q - 1) // rest
    if not _sufficient(F, q):
        return Certification(Verdict.INCONCLUSIVE, Method.POCKLINGTON,
                             detail=f"factored part {F} too small below bound {factor_bound}")

    witnesses: List[int] = []
    for p, _ in factors:
        for a in first_primes(bases):
            if a % q == 0:
                continue
            if pow_mod(a, q - 1, q) != 1:
                return Certification(Verdict.COMPOSITE, Method.POCKLINGTON,
                                     detail=f"Fermat test fails for base {a}")
            g = gcd((pow_mod(a, (q - 1) // p, q) - 1) % q, q)
            if g == 1:
                witnesses.append(a)
                break
            if g != q:
                return Certification(Verdict.COMPOSITE, Method.POCKLINGTON,
                                     detail=f"found divisor {g}")
        else:
            return Certification(Verdict.INCONCLUSIVE, Method.POCKLINGTON,
                                 detail=f"no witness for factor {p}")

    log.debug("pocklington: %d certified with factors %s", q, factors)
    return Certification(Verdict.PROVEN, Method.POCKLINGTON,
                         PocklingtonCertificate(factors=tuple(factors), bases=tuple(witnesses)))
