# nttprimes/search.py
# Candidate enumeration: five ways to find q prime with q ≡ 1 (mod 2N).
#
#   generate_primes         random arithmetic progression    (probable)
#   largest_primes          deterministic descent from 2^bits (probable)
#   proth_prime             k*2^m + 1, Proth certified        (proven)
#   pocklington_prime       random progression, Pocklington   (proven)
#   search_pseudo_mersenne  2^bits - c                        (probable)
#   goldilocks_prime        2^64 - 2^32 + 1                   (proven)

from __future__ import annotations
import enum
import logging
import random
from typing import List, Optional

from . import config, pocklington, proth
from .arith import is_power_of_two
from .certificate import PocklingtonCertificate, Verdict
from .errors import GenerationExhausted, InvalidParameters
from .modulus import Direction, Modulus
from .parallel import descending_shards, random_shards
from .primality import is_prime, passes_sieve
from .scan import (
    bottom_candidate,
    check_count,
    check_generation_params,
    draw_progression,
    progression_range,
    scan_linear,
    top_candidate,
)

log = logging.getLogger(__name__)

GOLDILOCKS = (1 << 64) - (1 << 32) + 1  # 18446744069414584321
# 2^64 - 2^32 = 2^32 * (2^32 - 1) = 2^32 * 3 * 5 * 17 * 257 * 65537
GOLDILOCKS_FACTORS = ((2, 32), (3, 1), (5, 1), (17, 1), (257, 1), (65537, 1))


class Strategy(enum.Enum):
    RANDOM_PROGRESSION = "random"
    DETERMINISTIC_DESCENDING = "descending"
    PROTH_FORM = "proth"
    POCKLINGTON_FORM = "pocklington"
    STRUCTURED_FORM = "structured"


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)

# ---------- random progression ----------

def generate_primes(n: int, bits: int, count: int, *, seed: Optional[int] = None,
                    max_attempts: Optional[int] = None,
                    workers: Optional[int] = None) -> List[Modulus]:
    """`count` distinct primes k*2N + 1 (k odd) of exactly `bits` bits."""
    two_n = check_generation_params(n, bits)
    check_count(count)
    attempts = config.MAX_ATTEMPTS if max_attempts is None else max_attempts
    workers = config.WORKERS if workers is None else workers
    check_count(workers, "workers")
    rng = _rng(seed)

    if workers > 1:
        values = random_shards(two_n, bits, count, attempts, workers, rng)
    else:
        values = draw_progression(two_n, bits, count, attempts, rng.getrandbits(64))
    if len(values) < count:
        log.warning("generate_primes: %d of %d primes for N=%d bits=%d after %d attempts",
                    len(values), count, n, bits, attempts)
        raise GenerationExhausted(
            f"found {len(values)} of {count} primes for N={n}, bits={bits} in {attempts} attempts")
    log.info("generate_primes: N=%d bits=%d -> %s", n, bits, values)
    return [Modulus(q, n) for q in values]

# ---------- deterministic descent ----------

def largest_primes(n: int, bits: int, levels: int, *,
                   workers: Optional[int] = None,
                   shard_size: Optional[int] = None) -> List[Modulus]:
    """The `levels` largest primes ≡ 1 mod 2N below 2^bits, strictly descending."""
    two_n = check_generation_params(n, bits)
    check_count(levels, "levels")
    workers = config.WORKERS if workers is None else workers
    shard_size = config.SHARD_SIZE if shard_size is None else shard_size
    check_count(workers, "workers")
    check_count(shard_size, "shard_size")
    top = top_candidate(two_n, bits)
    floor = 1 << (bits - 1)

    if workers > 1:
        values = descending_shards(top, floor, two_n, levels, workers, shard_size)
    else:
        span = (top - floor) // two_n + 1
        values = scan_linear(top, two_n, Direction.DESCENDING, span, levels)
    if len(values) < levels:
        raise GenerationExhausted(
            f"only {len(values)} primes ≡ 1 mod {two_n} in [2^{bits - 1}, 2^{bits})")
    return [Modulus(q, n) for q in values]

def smallest_primes(n: int, bits: int, levels: int) -> List[Modulus]:
    """The `levels` smallest `bits`-bit primes ≡ 1 mod 2N, strictly ascending."""
    two_n = check_generation_params(n, bits)
    check_count(levels, "levels")
    bottom = bottom_candidate(two_n, bits)
    span = (top_candidate(two_n, bits) - bottom) // two_n + 1
    values = scan_linear(bottom, two_n, Direction.ASCENDING, span, levels)
    if len(values) < levels:
        raise GenerationExhausted(
            f"only {len(values)} primes ≡ 1 mod {two_n} in [2^{bits - 1}, 2^{bits})")
    return [Modulus(q, n) for q in values]

# ---------- Proth form ----------

def proth_exponent(m: int, bits: int) -> int:
    """
    Power of two actually used for q = k*2^e + 1. Proth needs k < 2^e, so a
    `bits`-bit q forces e >= ceil(bits/2); m is the caller's minimum.
    """
    return max(m, (bits + 1) // 2)

def proth_prime(m: int, bits: int, n: Optional[int] = None, *,
                seed: Optional[int] = None,
                max_attempts: Optional[int] = None) -> Modulus:
    """A Proth-certified `bits`-bit prime q with 2^m | q-1."""
    if n is None:
        if m < 1:
            raise InvalidParameters(f"m must be >= 1, got {m}")
        n = 1 << (m - 1)
    two_n = check_generation_params(n, bits)
    if m < 1 or (1 << m) < two_n:
        raise InvalidParameters(f"2^m = 2^{m} must be a multiple of 2N = {two_n}")
    if m > bits - 1:
        raise InvalidParameters(f"m={m} leaves no room for a {bits}-bit k*2^m + 1")

    e = proth_exponent(m, bits)
    k_lo = ((1 << (bits - 1)) - 1 + (1 << e) - 1) >> e   # ceil((2^(bits-1) - 1) / 2^e)
    k_lo |= 1
    k_hi = min(((1 << bits) - 2) >> e, (1 << e) - 1)
    if k_lo > k_hi:
        raise InvalidParameters(f"no odd k < 2^{e} gives a {bits}-bit Proth number")

    attempts = config.MAX_ATTEMPTS if max_attempts is None else max_attempts
    rng = _rng(seed)
    for _ in range(attempts):
        k = rng.randrange(k_lo, k_hi + 1, 2)
        q = (k << e) + 1
        if not passes_sieve(q):
            continue
        cert = proth.certify(k, e)
        if cert.verdict is Verdict.PROVEN:
            log.info("proth_prime: %d = %d*2^%d + 1 (base %d)", q, k, e, cert.certificate.base)
            return Modulus(q, n, cert.certificate, ((2, e),))
    raise GenerationExhausted(f"no Proth prime k*2^{e}+1 with {bits} bits in {attempts} attempts")

# ---------- Pocklington form ----------

def pocklington_prime(n: int, bits: int, factor_bound: Optional[int] = None, *,
                      seed: Optional[int] = None,
                      max_attempts: Optional[int] = None) -> Modulus:
    """A Pocklington-certified `bits`-bit prime ≡ 1 mod 2N."""
    two_n = check_generation_params(n, bits)
    if factor_bound is None:
        factor_bound = config.FACTOR_BOUND
    pocklington.check_factor_bound(factor_bound)
    attempts = config.MAX_ATTEMPTS if max_attempts is None else max_attempts
    k_lo, k_hi = progression_range(two_n, bits)
    rng = _rng(seed)
    inconclusive = 0
    for _ in range(attempts):
        q = rng.randrange(k_lo, k_hi + 1) * two_n + 1
        if not (passes_sieve(q) and is_prime(q)):
            continue
        cert = pocklington.certify(q, factor_bound)
        if cert.verdict is Verdict.PROVEN:
            log.info("pocklington_prime: %d certified (%d inconclusive before it)", q, inconclusive)
            return Modulus(q, n, cert.certificate, cert.certificate.factors)
        inconclusive += 1
    raise GenerationExhausted(
        f"no Pocklington-certifiable {bits}-bit prime in {attempts} attempts "
        f"({inconclusive} primes not certifiable below {factor_bound})")

# ---------- structured forms ----------

def goldilocks_prime(n: Optional[int] = None) -> Modulus:
    """2^64 - 2^32 + 1, supporting any N with 2N | 2^32."""
    if n is None:
        n = 1 << 31
    if not is_power_of_two(n) or 2 * n > 1 << 32:
        raise InvalidParameters(f"Goldilocks supports power-of-two N <= 2^31, got {n}")
    cert = PocklingtonCertificate(factors=GOLDILOCKS_FACTORS, bases=(7, 7, 7, 7, 7, 7))
    return Modulus(GOLDILOCKS, n, cert, GOLDILOCKS_FACTORS)

def search_pseudo_mersenne(n: int, bits: int, *,
                           max_attempts: Optional[int] = None) -> Modulus:
    """The prime 2^bits - c with the smallest c ≡ -1 mod 2N."""
    two_n = check_generation_params(n, bits)
    if bits == 64 and (1 << 32) % two_n == 0:
        return goldilocks_prime(n)
    attempts = config.MAX_ATTEMPTS if max_attempts is None else max_attempts
    top = top_candidate(two_n, bits)
    span = min(attempts, (top - (1 << (bits - 1))) // two_n + 1)
    found = scan_linear(top, two_n, Direction.DESCENDING, span, 1)
    if not found:
        raise GenerationExhausted(f"no prime 2^{bits} - c with c < {span * two_n}")
    q = found[0]
    log.info("search_pseudo_mersenne: 2^%d - %d", bits, (1 << bits) - q)
    return Modulus(q, n)

# ---------- dispatch ----------

def enumerate_moduli(strategy: Strategy, **params) -> List[Modulus]:
    """Run one strategy by name; single-result strategies come back as a 1-list."""
    strategy = Strategy(strategy)
    if strategy is Strategy.RANDOM_PROGRESSION:
        return generate_primes(**params)
    if strategy is Strategy.DETERMINISTIC_DESCENDING:
        return largest_primes(**params)
    if strategy is Strategy.PROTH_FORM:
        return [proth_prime(**params)]
    if strategy is Strategy.POCKLINGTON_FORM:
        return [pocklington_prime(**params)]
    return [search_pseudo_mersenne(**params)]
