import pytest
from flask import Flask

from nttprimes.api import ntt_bp


@pytest.fixture
def client():
    app = Flask(__name__)
    app.register_blueprint(ntt_bp)
    return app.test_client()


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json()["ok"] is True


def test_check_friendly_prime(client):
    r = client.get("/api/check", query_string={"q": "72057594037616641", "n": "8192"})
    body = r.get_json()
    assert r.status_code == 200
    assert body["ntt_friendly"] is True
    assert body["q"] == "72057594037616641"
    assert body["verdict"] in ("proven", "probable")


def test_check_not_friendly(client):
    body = client.get("/api/check?q=4097&n=1024").get_json()
    assert body["ntt_friendly"] is False
    assert body["verdict"] is None


@pytest.mark.parametrize("qs", ["q=12289&n=3", "q=abc&n=2", "n=2", "q=18446744073709551616&n=2"])
def test_check_bad_params(client, qs):
    r = client.get("/api/check?" + qs)
    assert r.status_code == 400
    assert r.get_json()["kind"] == "invalid_parameters"


def test_goldilocks(client):
    body = client.get("/api/goldilocks").get_json()
    assert body["q"] == "18446744069414584321"
    assert body["provable"] is True
    assert body["certificate"]["kind"] == "pocklington"


def test_descending_primes(client):
    r = client.post("/api/primes", json={"strategy": "descending", "n": 8, "bits": 31, "levels": 2})
    assert r.status_code == 200
    assert [m["q"] for m in r.get_json()["moduli"]] == ["2147483489", "2147483249"]


def test_proth_with_roots(client):
    r = client.post("/api/primes", json={"strategy": "proth", "m": 12, "bits": 20, "seed": 3, "roots": True})
    assert r.status_code == 200
    (m,) = r.get_json()["moduli"]
    q, n, psi = int(m["q"]), m["n"], int(m["psi"])
    assert m["certificate"]["kind"] == "proth"
    assert pow(psi, n, q) == q - 1
    assert int(m["omega"]) == psi * psi % q


def test_random_primes(client):
    r = client.post("/api/primes", json={"n": 2048, "bits": 60, "count": 4, "seed": 1})
    moduli = r.get_json()["moduli"]
    assert len({m["q"] for m in moduli}) == 4
    assert all(m["provable"] is False for m in moduli)


def test_exhausted_search_is_422(client):
    r = client.post("/api/primes", json={"strategy": "descending", "n": 1024, "bits": 12})
    assert r.status_code == 422
    assert r.get_json()["kind"] == "GenerationExhausted"


@pytest.mark.parametrize("payload", [
    {"strategy": "random", "n": 3, "bits": 60},
    {"strategy": "bogus", "n": 8, "bits": 31},
    {"strategy": "proth", "bits": 20},
    {"strategy": "random", "bits": 20},
    {"strategy": "random", "n": 8},
])
def test_bad_requests(client, payload):
    r = client.post("/api/primes", json=payload)
    assert r.status_code == 400


@pytest.mark.parametrize("body", [[1, 2, 3], 42, "descending"])
def test_primes_body_must_be_an_object(client, body):
    r = client.post("/api/primes", json=body)
    assert r.status_code == 400
    assert r.get_json()["kind"] == "invalid_parameters"
