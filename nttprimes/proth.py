# nttprimes/proth.py
# Proth's theorem: for q = k*2^m + 1 with k odd and k < 2^m, q is prime
# iff some a has a^((q-1)/2) ≡ -1 (mod q).
# The proof is one-sided here: running out of bases proves nothing.

from __future__ import annotations
import logging
from typing import Optional

from . import config
from .arith import U64_LIMIT, pow_mod, two_adic_split
from .certificate import Certification, Method, ProthCertificate, Verdict
from .errors import InvalidParameters
from .primality import first_primes

log = logging.getLogger(__name__)

def is_proth_form(k: int, m: int) -> bool:
    return m >= 1 and k >= 1 and k % 2 == 1 and k < (1 << m)

def certify(k: int, m: int, bases: Optional[int] = None) -> Certification:
    """Try to prove q = k*2^m + 1 prime with the first `bases` primes as witnesses."""
    if not is_proth_form(k, m):
        raise InvalidParameters(f"k={k}, m={m} is not a Proth form (need k odd, 1 <= k < 2^m)")
    q = (k << m) + 1
    if q >= U64_LIMIT:
        raise InvalidParameters(f"k*2^m+1 = {q} does not fit in 64 bits")
    if bases is None:
        bases = config.PROTH_BASES

    half = (q - 1) // 2
    for a in first_primes(bases):
        if a % q == 0:
            continue
        x = pow_mod(a, half, q)
        if x == q - 1:
            log.debug("proth: %d certified with base %d", q, a)
            return Certification(Verdict.PROVEN, Method.PROTH,
                                 ProthCertificate(base=a, k=k, exponent=m))
        if x != 1:
            # Euler's criterion fails, so q cannot be prime
            return Certification(Verdict.COMPOSITE, Method.PROTH,
                                 detail=f"base {a} gives {x}")
    return Certification(Verdict.INCONCLUSIVE, Method.PROTH,
                         detail=f"no witness among first {bases} primes")

def certify_value(q: int, bases: Optional[int] = None) -> Certification:
    """Like certify(), starting from q itself; non-Proth q is INCONCLUSIVE."""
    if q < 3 or q % 2 == 0:
        return Certification(Verdict.INCONCLUSIVE, Method.PROTH, detail="q must be odd and > 2")
    m, k = two_adic_split(q - 1)
    if not is_proth_form(k, m):
        return Certification(Verdict.INCONCLUSIVE, Method.PROTH,
                             detail=f"q-1 = {k}*2^{m} is not a Proth form")
    return certify(k, m, bases)
