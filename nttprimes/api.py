# nttprimes/api.py
# JSON endpoints over the generation core.
# Big integers go out as decimal strings; JSON clients lose precision past 2^53.

from __future__ import annotations
import time

from flask import Blueprint, jsonify, request

from .certificate import PocklingtonCertificate, ProthCertificate
from .certify import strongest
from .errors import (
    GenerationExhausted,
    InvalidParameters,
    InvariantViolation,
    NotCertifiable,
    RootNotFound,
)
from .modulus import Modulus
from .primality import is_ntt_friendly
from .roots import roots_for
from .search import Strategy, enumerate_moduli, goldilocks_prime

ntt_bp = Blueprint("ntt_bp", __name__)

# ------------------ helpers ------------------
def _certificate_dict(cert) -> dict | None:
    if isinstance(cert, ProthCertificate):
        return {"kind": cert.kind, "base": cert.base, "k": str(cert.k), "exponent": cert.exponent}
    if isinstance(cert, PocklingtonCertificate):
        return {"kind": cert.kind,
                "factors": [[str(p), e] for p, e in cert.factors],
                "bases": list(cert.bases)}
    return None

def _modulus_dict(m: Modulus, with_roots: bool = False) -> dict:
    d = {
        "q": str(m.value),
        "bits": m.bit_length,
        "n": m.ring_dimension,
        "provable": m.is_provable,
        "certificate": _certificate_dict(m.certificate),
    }
    if with_roots:
        rp = roots_for(m)
        d.update(generator=rp.generator, psi=str(rp.psi), omega=str(rp.omega))
    return d

def _int_arg(data: dict, key: str, default=None):
    v = data.get(key, default)
    if v is None:
        return None
    try:
        return int(str(v).strip())
    except ValueError:
        raise InvalidParameters(f"{key} must be an integer") from None

@ntt_bp.errorhandler(InvalidParameters)
def _bad_params(e):
    return jsonify({"error": str(e), "kind": "invalid_parameters"}), 400

@ntt_bp.errorhandler(GenerationExhausted)
@ntt_bp.errorhandler(NotCertifiable)
@ntt_bp.errorhandler(RootNotFound)
def _unprocessable(e):
    return jsonify({"error": str(e), "kind": type(e).__name__}), 422

@ntt_bp.errorhandler(InvariantViolation)
def _internal(e):
    return jsonify({"error": str(e), "kind": "invariant_violation"}), 500

# ------------------ API ------------------
@ntt_bp.get("/api/health")
def health():
    return jsonify({"ok": True, "time": int(time.time())})

@ntt_bp.get("/api/check")
def check():
    q = _int_arg(request.args, "q")
    n = _int_arg(request.args, "n")
    if q is None or n is None:
        raise InvalidParameters("provide q and n as integers")
    if not 0 <= q < 1 << 64:
        raise InvalidParameters("q must be a 64-bit unsigned integer (0..2^64-1)")
    ok = is_ntt_friendly(q, n)
    c = strongest(q) if ok else None
    return jsonify({
        "q": str(q), "n": n, "ntt_friendly": ok,
        "verdict": c.verdict.value if c else None,
        "certificate": _certificate_dict(c.certificate) if c else None,
    })

@ntt_bp.get("/api/goldilocks")
def goldilocks():
    return jsonify(_modulus_dict(goldilocks_prime()))

@ntt_bp.post("/api/primes")
def primes():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidParameters("request body must be a JSON object")
    try:
        strategy = Strategy(str(data.get("strategy", "random")))
    except ValueError:
        raise InvalidParameters(f"unknown strategy {data.get('strategy')!r}") from None
    n, bits = _int_arg(data, "n"), _int_arg(data, "bits")
    if bits is None:
        raise InvalidParameters("bits is required")

    if strategy is Strategy.PROTH_FORM:
        params = {"m": _int_arg(data, "m"), "bits": bits, "n": n, "seed": _int_arg(data, "seed")}
        if params["m"] is None:
            raise InvalidParameters("m is required for the proth strategy")
    else:
        if n is None:
            raise InvalidParameters("n is required")
        params = {"n": n, "bits": bits}
        if strategy is Strategy.RANDOM_PROGRESSION:
            params.update(count=_int_arg(data, "count", 1), seed=_int_arg(data, "seed"))
        elif strategy is Strategy.DETERMINISTIC_DESCENDING:
            params.update(levels=_int_arg(data, "levels", 1))
        elif strategy is Strategy.POCKLINGTON_FORM:
            params.update(factor_bound=_int_arg(data, "factor_bound"), seed=_int_arg(data, "seed"))

    t0 = time.perf_counter()
    moduli = enumerate_moduli(strategy, **params)
    with_roots = bool(data.get("roots", False))
    out = [_modulus_dict(m, with_roots) for m in moduli]
    return jsonify({"strategy": strategy.value, "moduli": out,
                    "duration_ms": int((time.perf_counter() - t0) * 1000)})
