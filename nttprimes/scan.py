# nttprimes/scan.py
# Candidate scanners. Each call owns one SearchState and returns plain ints,
# so the same functions run in-process or inside a pool worker.
# `stop` is anything with is_set(); it is polled once per candidate.

from __future__ import annotations
import logging
import random
from typing import List, Optional, Tuple

from .errors import InvalidParameters
from .modulus import Direction, SearchState
from .primality import check_ring_dimension, is_prime, passes_sieve

log = logging.getLogger(__name__)

MAX_BITS = 64

# ---------- parameter checks ----------

def check_generation_params(n: int, bits: int) -> int:
    """Validate (N, bits) for a mod-2N search; returns 2N."""
    check_ring_dimension(n)
    if not 2 <= bits <= MAX_BITS:
        raise InvalidParameters(f"bit length must be in [2, {MAX_BITS}], got {bits}")
    two_n = 2 * n
    if two_n > 1 << (bits - 1):
        raise InvalidParameters(f"2N={two_n} leaves no {bits}-bit candidate ≡ 1 mod 2N")
    return two_n

def check_count(count: int, name: str = "count") -> None:
    if count < 1:
        raise InvalidParameters(f"{name} must be >= 1, got {count}")

def progression_range(two_n: int, bits: int) -> Tuple[int, int]:
    """Inclusive k range with k*2N + 1 in [2^(bits-1), 2^bits)."""
    lo = 1 << (bits - 1)
    return -(-(lo - 1) // two_n), ((1 << bits) - 2) // two_n

def top_candidate(two_n: int, bits: int) -> int:
    """Largest value <= 2^bits - 1 congruent to 1 mod 2N."""
    _, k_hi = progression_range(two_n, bits)
    return k_hi * two_n + 1

def bottom_candidate(two_n: int, bits: int) -> int:
    """Smallest value >= 2^(bits-1) congruent to 1 mod 2N."""
    k_lo, _ = progression_range(two_n, bits)
    return k_lo * two_n + 1

def _stopped(stop) -> bool:
    return stop is not None and stop.is_set()

# ---------- linear scans ----------

def scan_linear(start: int, step: int, direction: Direction, span: int,
                levels: int, stop=None) -> List[int]:
    """
    Walk `span` candidates from `start` in `direction`, collecting up to
    `levels` primes in visiting order.
    """
    state = SearchState(candidate=start, step=step, direction=direction, remaining=span)
    found: List[int] = []
    while not state.exhausted and len(found) < levels:
        if _stopped(stop):
            break
        q = state.candidate
        if passes_sieve(q) and is_prime(q):
            found.append(q)
        state.advance()
    return found

# ---------- random progression ----------

def draw_progression(two_n: int, bits: int, count: int, attempts: int,
                     seed: Optional[int] = None, stop=None,
                     odd_k: bool = True) -> List[int]:
    """
    Draw random k, test q = k*2N + 1, keep distinct primes.
    With odd_k the 2-part of q-1 is exactly 2N.
    """
    rng = random.Random(seed)
    k_lo, k_hi = progression_range(two_n, bits)
    if odd_k:
        k_lo |= 1
        if k_lo > k_hi:
            return []
    state = SearchState(candidate=0, step=two_n, direction=Direction.RANDOM, remaining=attempts)
    found: dict = {}
    while not state.exhausted and len(found) < count:
        if _stopped(stop):
            break
        k = rng.randrange(k_lo, k_hi + 1, 2 if odd_k else 1)
        state.candidate = q = k * two_n + 1
        if q not in found and passes_sieve(q) and is_prime(q):
            found[q] = None
        state.advance()
    log.debug("draw_progression: %d/%d primes, %d attempts left", len(found), count, state.remaining)
    return list(found)
