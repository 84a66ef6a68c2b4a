from .arith import gcd, inv_mod, mul_mod, pow_mod
from .certificate import (
    Certification,
    Method,
    PocklingtonCertificate,
    ProthCertificate,
    Verdict,
)
from .certify import certify
from .errors import (
    GenerationExhausted,
    InvalidParameters,
    InvariantViolation,
    NotCertifiable,
    NTTPrimeError,
    RootNotFound,
)
from .modulus import Modulus, RootPair
from .primality import is_ntt_friendly, is_prime
from .roots import derive_roots, find_generator, find_primitive_root, roots_for
from .search import (
    GOLDILOCKS,
    Strategy,
    enumerate_moduli,
    generate_primes,
    goldilocks_prime,
    largest_primes,
    pocklington_prime,
    proth_prime,
    search_pseudo_mersenne,
    smallest_primes,
)

__all__ = [
    "GOLDILOCKS", "Certification", "GenerationExhausted", "InvalidParameters",
    "InvariantViolation", "Method", "Modulus", "NTTPrimeError", "NotCertifiable",
    "PocklingtonCertificate", "ProthCertificate", "RootNotFound", "RootPair",
    "Strategy", "Verdict", "certify", "derive_roots", "enumerate_moduli",
    "find_generator", "find_primitive_root", "gcd", "generate_primes",
    "goldilocks_prime", "inv_mod", "is_ntt_friendly", "is_prime",
    "largest_primes", "mul_mod", "pocklington_prime", "pow_mod", "proth_prime",
    "roots_for", "search_pseudo_mersenne", "smallest_primes",
]
