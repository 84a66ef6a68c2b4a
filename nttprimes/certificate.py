# nttprimes/certificate.py
# Certification outcomes as a closed tagged variant.
#   Verdict      what a method concluded about a candidate
#   Certificate  the evidence behind a PROVEN verdict (Proth or Pocklington)

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .arith import gcd, pow_mod
from .errors import NotCertifiable
from .primality import is_prime


class Verdict(enum.Enum):
    PROVEN = "proven"              # certificate attached
    PROBABLE = "probable"          # oracle says prime, no certificate
    COMPOSITE = "composite"        # definitely not prime
    INCONCLUSIVE = "inconclusive"  # method could not decide


class Method(enum.Enum):
    PROBABLE = "probable"
    PROTH = "proth"
    POCKLINGTON = "pocklington"


@dataclass(frozen=True)
class ProthCertificate:
    """q = k*2^exponent + 1 and base^((q-1)/2) ≡ -1 (mod q)."""
    base: int
    k: int
    exponent: int

    kind = "proth"

    def verify(self, q: int) -> bool:
        k, e = self.k, self.exponent
        if q != (k << e) + 1 or k % 2 == 0 or k >= (1 << e):
            return False
        return pow_mod(self.base, (q - 1) // 2, q) == q - 1


@dataclass(frozen=True)
class PocklingtonCertificate:
    """
    Pocklington–Lehmer evidence. `factors` holds (p, e) for every certified
    prime power of q-1, the power of two first; `bases[i]` witnesses factors[i].
    """
    factors: Tuple[Tuple[int, int], ...]
    bases: Tuple[int, ...]

    kind = "pocklington"

    @property
    def factored_part(self) -> int:
        f = 1
        for p, e in self.factors:
            f *= p ** e
        return f

    def verify(self, q: int) -> bool:
        if len(self.factors) != len(self.bases):
            return False
        F = self.factored_part
        if (q - 1) % F or F * F <= q - 1:
            return False
        for (p, _), a in zip(self.factors, self.bases):
            if not is_prime(p):
                return False
            if pow_mod(a, q - 1, q) != 1:
                return False
            if gcd((pow_mod(a, (q - 1) // p, q) - 1) % q, q) != 1:
                return False
        return True


Certificate = Union[ProthCertificate, PocklingtonCertificate]


@dataclass(frozen=True)
class Certification:
    verdict: Verdict
    method: Method
    certificate: Optional[Certificate] = None
    detail: str = ""

    @property
    def proven(self) -> bool:
        return self.verdict is Verdict.PROVEN

    def unwrap(self) -> Certificate:
        """The certificate, or NotCertifiable for any other verdict."""
        if self.verdict is not Verdict.PROVEN or self.certificate is None:
            raise NotCertifiable(f"{self.method.value}: {self.verdict.value} ({self.detail})")
        return self.certificate
