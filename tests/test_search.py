"""The five enumeration strategies and their failure modes."""

import pytest
import sympy

from nttprimes import (
    GOLDILOCKS,
    GenerationExhausted,
    InvalidParameters,
    PocklingtonCertificate,
    ProthCertificate,
    Strategy,
    enumerate_moduli,
    generate_primes,
    goldilocks_prime,
    is_ntt_friendly,
    is_prime,
    largest_primes,
    pocklington_prime,
    proth_prime,
    search_pseudo_mersenne,
    smallest_primes,
)


def _check_ntt_prime(m, n, bits):
    assert m.ring_dimension == n
    assert m.value % (2 * n) == 1
    assert m.bit_length == bits
    assert sympy.isprime(m.value)


# ------------------ random progression ------------------

def test_generate_primes_scenario():
    moduli = generate_primes(2048, 60, 4, seed=1)
    values = [m.value for m in moduli]
    assert len(set(values)) == 4
    for m in moduli:
        _check_ntt_prime(m, 2048, 60)
        assert 2 ** 59 <= m.value < 2 ** 60
        assert ((m.value - 1) // 4096) % 2 == 1   # odd k
        assert not m.is_provable and m.certificate is None


def test_generate_primes_is_reproducible_with_seed():
    a = [m.value for m in generate_primes(1024, 40, 3, seed=99)]
    b = [m.value for m in generate_primes(1024, 40, 3, seed=99)]
    assert a == b


def test_generate_primes_in_parallel():
    moduli = generate_primes(1024, 50, 6, seed=3, workers=2)
    assert len({m.value for m in moduli}) == 6
    for m in moduli:
        _check_ntt_prime(m, 1024, 50)


def test_generate_primes_runs_out_of_attempts():
    with pytest.raises(GenerationExhausted):
        generate_primes(2048, 60, 4, seed=1, max_attempts=1)


def test_generate_primes_cannot_find_more_than_exist():
    # 12-bit, 2N = 2048: the only candidate is 2049 = 3 * 683
    with pytest.raises(GenerationExhausted):
        generate_primes(1024, 12, 1, max_attempts=50)


@pytest.mark.parametrize("n, bits, count", [
    (3, 60, 1),        # N not a power of two
    (0, 60, 1),
    (2048, 65, 1),     # wider than 64 bits
    (2048, 1, 1),
    (1024, 11, 1),     # 2N = 2^11 leaves no 11-bit candidate
    (2048, 60, 0),
])
def test_generate_primes_invalid_parameters(n, bits, count):
    with pytest.raises(InvalidParameters):
        generate_primes(n, bits, count)


# ------------------ deterministic descent ------------------

def test_largest_prime_for_30_bits():
    assert largest_primes(1024, 30, 1)[0].value == 1073707009


def test_largest_primes_match_exhaustive_descent():
    assert [m.value for m in largest_primes(8, 31, 2)] == [2147483489, 2147483249]


def test_largest_primes_descending_and_deterministic():
    first = [m.value for m in largest_primes(2048, 60, 5)]
    again = [m.value for m in largest_primes(2048, 60, 5)]
    assert first == again
    assert first == sorted(first, reverse=True) and len(set(first)) == 5
    top = first[0]
    # nothing skipped between consecutive levels
    for hi, lo in zip(first, first[1:]):
        assert not any(sympy.isprime(c) for c in range(lo + 4096, hi, 4096))
    assert not any(sympy.isprime(c) for c in range(top + 4096, 2 ** 60, 4096))


@pytest.mark.parametrize("shard_size", [1, 3, 64])
def test_largest_primes_parallel_matches_serial(shard_size):
    serial = [m.value for m in largest_primes(1024, 40, 7)]
    parallel = [m.value for m in largest_primes(1024, 40, 7, workers=3, shard_size=shard_size)]
    assert parallel == serial


def test_largest_primes_exhausts_range():
    with pytest.raises(GenerationExhausted):
        largest_primes(1024, 12, 1)
    with pytest.raises(GenerationExhausted):
        largest_primes(1024, 12, 1, workers=2, shard_size=1)
    with pytest.raises(GenerationExhausted):
        largest_primes(4, 5, 5)   # 17 is the only 5-bit prime ≡ 1 mod 8


@pytest.mark.parametrize("workers, shard_size", [(2, 0), (2, -1), (0, 16), (-3, 16)])
def test_largest_primes_rejects_bad_pool_settings(workers, shard_size):
    with pytest.raises(InvalidParameters):
        largest_primes(1024, 40, 1, workers=workers, shard_size=shard_size)


def test_generate_primes_rejects_zero_workers():
    with pytest.raises(InvalidParameters):
        generate_primes(1024, 40, 1, seed=1, workers=0)


def test_smallest_primes_ascending():
    values = [m.value for m in smallest_primes(1024, 40, 3)]
    assert values == sorted(values) and len(set(values)) == 3
    assert not any(sympy.isprime(c) for c in range(2 ** 39 + 1, values[0], 2048))
    for v in values:
        assert is_ntt_friendly(v, 1024)


# ------------------ Proth ------------------

def test_proth_prime_scenario():
    m = proth_prime(20, 59, 2048, seed=2)
    _check_ntt_prime(m, 2048, 59)
    assert isinstance(m.certificate, ProthCertificate)
    assert m.is_provable
    assert m.certificate.verify(m.value)
    assert (m.value - 1) % (1 << 20) == 0
    assert is_prime(m.value)


def test_proth_prime_default_ring_dimension():
    m = proth_prime(12, 20, seed=4)
    assert m.ring_dimension == 2048
    assert m.certificate.exponent == 12
    assert m.certificate.k < 2 ** 12


@pytest.mark.parametrize("m, bits, n", [
    (10, 59, 2048),    # 2^10 < 2N
    (0, 20, None),
    (20, 20, None),    # no room for k
    (12, 20, 3),
])
def test_proth_prime_invalid_parameters(m, bits, n):
    with pytest.raises(InvalidParameters):
        proth_prime(m, bits, n)


def test_proth_prime_exhausted():
    with pytest.raises(GenerationExhausted):
        proth_prime(20, 59, 2048, seed=2, max_attempts=0)


# ------------------ Pocklington ------------------

def test_pocklington_prime():
    m = pocklington_prime(1024, 48, 1 << 12, seed=8)
    _check_ntt_prime(m, 1024, 48)
    cert = m.certificate
    assert isinstance(cert, PocklingtonCertificate)
    assert cert.verify(m.value)
    assert cert.factored_part ** 2 > m.value - 1
    assert m.factor_hint == cert.factors


def test_pocklington_prime_exhausted():
    with pytest.raises(GenerationExhausted):
        pocklington_prime(1024, 48, 1 << 12, seed=8, max_attempts=0)


def test_pocklington_prime_bad_bound():
    with pytest.raises(InvalidParameters):
        pocklington_prime(1024, 48, 1)
    with pytest.raises(InvalidParameters):
        pocklington_prime(1024, 48, 10 ** 10)


# ------------------ structured ------------------

def test_goldilocks_constant():
    m = goldilocks_prime()
    assert m.value == GOLDILOCKS == 18446744069414584321
    assert goldilocks_prime().value == m.value
    assert is_ntt_friendly(m.value, 8192)
    assert m.is_provable and m.certificate.verify(m.value)
    assert m.bit_length == 64


def test_goldilocks_ring_limits():
    assert goldilocks_prime(1 << 31).ring_dimension == 1 << 31
    with pytest.raises(InvalidParameters):
        goldilocks_prime(1 << 32)
    with pytest.raises(InvalidParameters):
        goldilocks_prime(12)


def test_pseudo_mersenne_returns_goldilocks_for_64_bits():
    m = search_pseudo_mersenne(4096, 64)
    assert m.value == GOLDILOCKS
    assert m.ring_dimension == 4096


def test_pseudo_mersenne_search():
    m = search_pseudo_mersenne(8, 31)
    assert m.value == 2147483489          # 2^31 - 159
    assert not m.is_provable
    big = search_pseudo_mersenne(1 << 32, 64)   # 2N does not divide 2^32
    assert big.value != GOLDILOCKS
    _check_ntt_prime(big, 1 << 32, 64)


def test_pseudo_mersenne_exhausted():
    with pytest.raises(GenerationExhausted):
        search_pseudo_mersenne(1024, 12)


# ------------------ dispatch ------------------

def test_enumerate_moduli_dispatch():
    assert [m.value for m in enumerate_moduli("descending", n=8, bits=31, levels=2)] == \
        [2147483489, 2147483249]
    assert enumerate_moduli(Strategy.STRUCTURED_FORM, n=8, bits=31)[0].value == 2147483489
    (p,) = enumerate_moduli(Strategy.PROTH_FORM, m=12, bits=20, seed=1)
    assert p.is_provable
    with pytest.raises(ValueError):
        enumerate_moduli("nope", n=8, bits=31)
