# nttprimes/roots.py
# Roots of unity for a prime modulus q ≡ 1 (mod 2N):
#   1. factor q-1 (hint first, then bounded trial division and Pollard-ρ)
#   2. find a generator g of (Z/qZ)^*
#   3. psi = g^((q-1)/2N), omega = psi^2, both order-checked

from __future__ import annotations
import logging
from typing import Dict, Iterable, Optional, Tuple

from . import config
from .arith import mul_mod, pow_mod, two_adic_split
from .errors import InvalidParameters, InvariantViolation, RootNotFound
from .factor import factorize
from .modulus import Modulus, RootPair
from .primality import check_ring_dimension, is_prime

log = logging.getLogger(__name__)

def factor_group_order(q: int, hint: Iterable[Tuple[int, int]] = (),
                       trial_bound: Optional[int] = None,
                       rho_iterations: Optional[int] = None) -> Dict[int, int]:
    """Complete factorization {p: e} of q-1, or RootNotFound."""
    if trial_bound is None:
        trial_bound = config.TRIAL_BOUND
    if rho_iterations is None:
        rho_iterations = config.RHO_ITERATIONS

    s, rest = two_adic_split(q - 1)
    factors: Dict[int, int] = {2: s} if s else {}
    for p, _ in hint:
        if p == 2 or rest % p:
            continue
        e = 0
        while rest % p == 0:
            rest //= p; e += 1
        factors[p] = e
    if rest > 1:
        found, stuck = factorize(rest, trial_bound, rho_iterations)
        if stuck:
            raise RootNotFound(
                f"could not split {stuck} while factoring {q}-1 "
                f"(trial bound {trial_bound}, {rho_iterations} rho iterations)")
        for p, e in found.items():
            factors[p] = factors.get(p, 0) + e
    return dict(sorted(factors.items()))

def is_generator(g: int, q: int, primes: Iterable[int]) -> bool:
    return all(pow_mod(g, (q - 1) // p, q) != 1 for p in primes)

def find_generator(q: int, hint: Iterable[Tuple[int, int]] = (),
                   limit: Optional[int] = None, **budget) -> int:
    """Smallest g >= 2 generating (Z/qZ)^*."""
    if not is_prime(q):
        raise InvalidParameters(f"{q} is not prime")
    if q == 2:
        return 1
    if limit is None:
        limit = config.GENERATOR_LIMIT
    primes = list(factor_group_order(q, hint, **budget))
    for g in range(2, min(limit, q - 1) + 1):
        if is_generator(g, q, primes):
            return g
    raise RootNotFound(f"no generator of Z/{q}Z below {limit}")

def derive_roots(q: int, n: int, g: int) -> Tuple[int, int]:
    """(psi, omega) of orders exactly 2N and N, derived from generator g."""
    check_ring_dimension(n)
    two_n = 2 * n
    if (q - 1) % two_n:
        raise InvalidParameters(f"{q} is not 1 mod {two_n}")
    psi = pow_mod(g, (q - 1) // two_n, q)
    omega = mul_mod(psi, psi, q)
    # orders are powers of two, so checking the largest proper divisor suffices
    if pow_mod(psi, two_n, q) != 1 or pow_mod(psi, n, q) != q - 1:
        raise InvariantViolation(f"psi={psi} does not have order {two_n} mod {q}")
    if pow_mod(omega, n, q) != 1 or (n > 1 and pow_mod(omega, n // 2, q) != q - 1):
        raise InvariantViolation(f"omega={omega} does not have order {n} mod {q}")
    return psi, omega

# ---------- Modulus-level helpers ----------

def find_primitive_root(modulus: Modulus, **budget) -> int:
    return find_generator(modulus.value, modulus.factor_hint, **budget)

def roots_for(modulus: Modulus, n: Optional[int] = None, **budget) -> RootPair:
    """RootPair for `modulus` at ring dimension n (default: the one it was made for)."""
    if n is None:
        n = modulus.ring_dimension
    g = find_primitive_root(modulus, **budget)
    psi, omega = derive_roots(modulus.value, n, g)
    log.debug("roots_for: q=%d N=%d g=%d psi=%d", modulus.value, n, g, psi)
    return RootPair(modulus=modulus, psi=psi, omega=omega, generator=g)
