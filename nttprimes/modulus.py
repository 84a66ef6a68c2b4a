# nttprimes/modulus.py
# Value records handed to callers, plus the per-call search cursor.

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Optional, Tuple

from .certificate import Certificate
from .errors import InvariantViolation


@dataclass(frozen=True)
class Modulus:
    """
    A prime q ≡ 1 (mod 2*ring_dimension).

    `factor_hint` lists prime powers of q-1 already known from generation
    (possibly incomplete); the root finder starts from it. `is_provable`
    is derived from `certificate`, so a probable prime can never be
    reported as proven.
    """
    value: int
    ring_dimension: int
    certificate: Optional[Certificate] = None
    factor_hint: Tuple[Tuple[int, int], ...] = ()

    def __post_init__(self):
        if self.value % (2 * self.ring_dimension) != 1:
            raise InvariantViolation(
                f"{self.value} is not 1 mod 2*{self.ring_dimension}")

    @property
    def bit_length(self) -> int:
        return self.value.bit_length()

    @property
    def is_provable(self) -> bool:
        return self.certificate is not None

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class RootPair:
    """psi has order exactly 2N modulo q; omega = psi^2 has order exactly N."""
    modulus: Modulus
    psi: int
    omega: int
    generator: int


class Direction(enum.Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"
    RANDOM = "random"


@dataclass
class SearchState:
    """Cursor owned by a single scanner call; discarded when it returns."""
    candidate: int
    step: int
    direction: Direction
    remaining: int

    def advance(self) -> None:
        if self.direction is Direction.DESCENDING:
            self.candidate -= self.step
        elif self.direction is Direction.ASCENDING:
            self.candidate += self.step
        self.remaining -= 1

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0
