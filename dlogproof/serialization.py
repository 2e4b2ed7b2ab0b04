"""
Canonical text encoding of ``DLogProof`` for storage and interchange.

Wire record::

    {"t": "<66 hex chars>", "s": "<64 hex chars>"}

``t`` is the compressed SEC 1 point (02/03 parity prefix ‖ x) and ``s``
the 32-byte big-endian scalar, both lowercase hex.  The point bytes are
exactly the bytes the challenge hash consumes, so a proof decoded from
text re-derives the prover's challenge.

Decoders never fall back to a default value; every malformed input
raises a subclass of ``DLogProofError``.
"""

from __future__ import annotations

import binascii
import json
from typing import Any, Dict, Mapping

from .curve import Scalar, Point, COMPRESSED_BYTES
from .errors import InvalidHexEncoding, InvalidPointEncoding, InvalidProofEncoding
from .proofs import DLogProof


def _unhex(text: str) -> bytes:
    if not isinstance(text, str):
        raise InvalidHexEncoding(f"expected str, got {type(text).__name__}")
    # unhexlify, unlike bytes.fromhex, rejects embedded whitespace
    try:
        return binascii.unhexlify(text)
    except (ValueError, binascii.Error) as exc:
        raise InvalidHexEncoding(f"invalid hex: {text[:16]!r}") from exc


# ── points ──────────────────────────────────────────────────────────────

def point_to_hex(point: Point, *, allow_infinity: bool = False) -> str:
    """Compressed point as lowercase hex; the identity is ``"00" * 33``."""
    if point.is_inf() and not allow_infinity:
        raise InvalidPointEncoding("point at infinity has no compressed encoding")
    return point.to_bytes().hex()


def point_from_hex(text: str, *, allow_infinity: bool = False) -> Point:
    """
    Decode a compressed point.

    Rejects anything but 33 bytes with a 02/03 prefix and an x on the
    curve.  The identity (33 zero bytes) only passes with
    ``allow_infinity``; honest proving never produces it.
    """
    data = _unhex(text)
    if len(data) != COMPRESSED_BYTES:
        raise InvalidPointEncoding(
            f"need {COMPRESSED_BYTES} bytes, got {len(data)}"
        )
    return Point.from_bytes(data, allow_infinity=allow_infinity)


# ── scalars ─────────────────────────────────────────────────────────────

def scalar_to_hex(scalar: Scalar) -> str:
    return scalar.to_bytes().hex()


def scalar_from_hex(text: str) -> Scalar:
    return Scalar.from_bytes(_unhex(text))


# ── proof records ───────────────────────────────────────────────────────

def proof_to_dict(proof: DLogProof) -> Dict[str, str]:
    return {"t": point_to_hex(proof.t), "s": scalar_to_hex(proof.s)}


def proof_from_dict(data: Mapping[str, Any]) -> DLogProof:
    if not isinstance(data, Mapping):
        raise InvalidProofEncoding(f"expected a mapping, got {type(data).__name__}")
    missing = [k for k in ("t", "s") if k not in data]
    if missing:
        raise InvalidProofEncoding(f"missing field(s): {', '.join(missing)}")
    for k in ("t", "s"):
        if not isinstance(data[k], str):
            raise InvalidProofEncoding(f"field {k!r} must be a hex string")
    return DLogProof(t=point_from_hex(data["t"]), s=scalar_from_hex(data["s"]))


def proof_to_json(proof: DLogProof, **kwargs: Any) -> str:
    return json.dumps(proof_to_dict(proof), **kwargs)


def proof_from_json(text: str) -> DLogProof:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise InvalidProofEncoding("proof is not valid JSON") from exc
    return proof_from_dict(data)


def proof_to_uncompressed_dict(proof: DLogProof) -> Dict[str, Any]:
    """
    Both affine coordinates of ``t``, ``0x``-prefixed, for human eyes.

    Not part of the wire format and has no decoder.
    """
    raw = proof.t.to_bytes_uncompressed()
    return {
        "t": {"x": "0x" + raw[1:33].hex(), "y": "0x" + raw[33:65].hex()},
        "s": "0x" + scalar_to_hex(proof.s),
    }


__all__ = [
    "point_to_hex",
    "point_from_hex",
    "scalar_to_hex",
    "scalar_from_hex",
    "proof_to_dict",
    "proof_from_dict",
    "proof_to_json",
    "proof_from_json",
    "proof_to_uncompressed_dict",
]
