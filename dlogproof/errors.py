"""
Typed failures raised by the proof engine and the codec.

All of them derive from ``ValueError``: each one describes input that
cannot be turned into a challenge, a point, a scalar or a proof.  An
invalid proof is *not* an error; ``DLogProof.verify`` returns ``False``.
"""

from __future__ import annotations


class DLogProofError(ValueError):
    """Base class for every dlogproof failure."""


class ChallengeDerivationFailed(DLogProofError):
    """The challenge digest is not a canonical scalar (digest ≥ q)."""


class InvalidHexEncoding(DLogProofError):
    """Text is not valid hexadecimal."""


class InvalidPointEncoding(DLogProofError):
    """Bytes do not encode a usable secp256k1 point."""


class InvalidScalarLength(DLogProofError):
    """Scalar bytes are not exactly ``SCALAR_BYTES`` long."""


class InvalidScalarValue(DLogProofError):
    """Scalar integer is not below the group order."""


class InvalidSessionId(DLogProofError):
    """Session id text cannot be encoded as UTF-8."""


class InvalidProofEncoding(DLogProofError):
    """A serialised proof record is malformed as a whole."""


__all__ = [
    "DLogProofError",
    "ChallengeDerivationFailed",
    "InvalidHexEncoding",
    "InvalidPointEncoding",
    "InvalidScalarLength",
    "InvalidScalarValue",
    "InvalidProofEncoding",
    "InvalidSessionId",
]
