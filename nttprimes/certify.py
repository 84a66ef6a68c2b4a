# nttprimes/certify.py
# One entry point over the closed set of certification methods.

from __future__ import annotations
from typing import Optional

from . import pocklington, proth
from .certificate import Certification, Method, Verdict
from .primality import is_prime

def certify(q: int, method: Method = Method.PROBABLE,
            factor_bound: Optional[int] = None) -> Certification:
    if method is Method.PROBABLE:
        verdict = Verdict.PROBABLE if is_prime(q) else Verdict.COMPOSITE
        return Certification(verdict, Method.PROBABLE, detail="Miller-Rabin, 64-bit bases")
    if q < 3 or q % 2 == 0:
        verdict = Verdict.PROBABLE if q == 2 else Verdict.COMPOSITE
        return Certification(verdict, method, detail="even or too small")
    if method is Method.PROTH:
        return proth.certify_value(q)
    if method is Method.POCKLINGTON:
        return pocklington.certify(q, factor_bound)
    raise ValueError(f"unknown certification method {method!r}")

def strongest(q: int, factor_bound: Optional[int] = None) -> Certification:
    """Proth, then Pocklington, then the probable oracle; first PROVEN wins."""
    for method in (Method.PROTH, Method.POCKLINGTON):
        c = certify(q, method, factor_bound)
        if c.verdict in (Verdict.PROVEN, Verdict.COMPOSITE):
            return c
    return certify(q, Method.PROBABLE)
