# nttprimes/errors.py
# Failure taxonomy shared by every component.

class NTTPrimeError(Exception):
    """Base class for everything the library raises on purpose."""


class InvalidParameters(NTTPrimeError, ValueError):
    """Bad input detected before any search starts. Never retried."""


class GenerationExhausted(NTTPrimeError):
    """A search ran out of attempts or range without finding enough primes."""


class NotCertifiable(NTTPrimeError):
    """A provable-primality method could not reach a proof (inconclusive)."""


class RootNotFound(NTTPrimeError):
    """q-1 could not be factored, or no generator turned up, within budget."""


class InvariantViolation(NTTPrimeError, RuntimeError):
    """A derived value failed its own check. Indicates a bug, not bad luck."""
