"""
dlogproof: non-interactive Schnorr proof of knowledge of a discrete log.

Proves knowledge of *x* with  y = x·G  on secp256k1, made
non-interactive by Fiat-Shamir with domain separation over a session id
and a participant id.

Quick start
-----------
::

    from dlogproof import DLogProof, Scalar, G, proof_to_json, proof_from_json

    x = Scalar.random()
    y = x * G
    proof = DLogProof.prove("sid", 1, x, y, G)
    assert proof.verify("sid", 1, y, G)

    restored = proof_from_json(proof_to_json(proof))
    assert restored == proof
"""

__version__ = "0.1.0"

# ── group provider ──────────────────────────────────────────────────────
from .curve import (
    Scalar, Point, G, ORDER, SCALAR_BYTES, COMPRESSED_BYTES,
    RandomSource, SystemRandom,
)

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    DLogProofError,
    ChallengeDerivationFailed,
    InvalidHexEncoding,
    InvalidPointEncoding,
    InvalidScalarLength,
    InvalidScalarValue,
    InvalidProofEncoding,
    InvalidSessionId,
)

# ── challenge hashing ───────────────────────────────────────────────────
from .hash import DOMAIN_SEPARATOR, hash_points

# ── proof engine ────────────────────────────────────────────────────────
from .proofs import DLogProof, PROOF_BYTES

# ── codec ───────────────────────────────────────────────────────────────
from .serialization import (
    point_to_hex,
    point_from_hex,
    scalar_to_hex,
    scalar_from_hex,
    proof_to_dict,
    proof_from_dict,
    proof_to_json,
    proof_from_json,
    proof_to_uncompressed_dict,
)

__all__ = [
    # version
    "__version__",
    # group
    "Scalar", "Point", "G", "ORDER", "SCALAR_BYTES", "COMPRESSED_BYTES",
    "RandomSource", "SystemRandom",
    # errors
    "DLogProofError", "ChallengeDerivationFailed", "InvalidHexEncoding",
    "InvalidPointEncoding", "InvalidScalarLength", "InvalidScalarValue",
    "InvalidProofEncoding", "InvalidSessionId",
    # hashing
    "DOMAIN_SEPARATOR", "hash_points",
    # proofs
    "DLogProof", "PROOF_BYTES",
    # codec
    "point_to_hex", "point_from_hex", "scalar_to_hex", "scalar_from_hex",
    "proof_to_dict", "proof_from_dict", "proof_to_json", "proof_from_json",
    "proof_to_uncompressed_dict",
]
