"""
Fiat-Shamir challenge derivation for the discrete-log proof.

The hash input is part of the wire contract between provers and
verifiers.  It is fed to SHA-256 in this exact order, with no length
prefixes:

    tag  ‖  sid  ‖  LE32(pid)  ‖  enc(P_1)  ‖ … ‖  enc(P_n)

where ``enc`` is the 33-byte compressed SEC 1 encoding returned by
``Point.to_bytes()`` (the identity encodes as 33 zero bytes).  The
32-byte digest is read big-endian and must already be a canonical
scalar: a digest ≥ q raises ``ChallengeDerivationFailed`` instead of
being reduced or resampled.

Any change to this layout breaks interoperability and must be
versioned through ``DOMAIN_SEPARATOR``.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Sequence, Union

from .curve import Scalar, Point, ORDER
from .errors import ChallengeDerivationFailed, InvalidSessionId

logger = logging.getLogger(__name__)


# ── domain tags ─────────────────────────────────────────────────────────
DOMAIN_SEPARATOR = b"SCHNORR_PROOF"

PID_BYTES = 4
_PID_LIMIT = 1 << (8 * PID_BYTES)


# ── internal helpers ────────────────────────────────────────────────────
def _encode_sid(sid: Union[str, bytes]) -> bytes:
    if isinstance(sid, str):
        try:
            return sid.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidSessionId("sid is not encodable as UTF-8") from exc
    if isinstance(sid, (bytes, bytearray)):
        return bytes(sid)
    raise TypeError(f"sid must be str or bytes, got {type(sid).__name__}")


def _encode_pid(pid: int) -> bytes:
    if isinstance(pid, bool) or not isinstance(pid, int):
        raise TypeError(f"pid must be int, got {type(pid).__name__}")
    if not 0 <= pid < _PID_LIMIT:
        raise ValueError(f"pid {pid} does not fit in {PID_BYTES} bytes")
    return pid.to_bytes(PID_BYTES, "little")


def _digest_to_scalar(digest: bytes) -> Scalar:
    v = int.from_bytes(digest, "big")
    if v >= ORDER:
        logger.debug("challenge digest %s is not below the group order", digest.hex())
        raise ChallengeDerivationFailed("challenge digest is not a canonical scalar")
    return Scalar(v)


# ── public hash function ────────────────────────────────────────────────

def hash_points(
    domain_tag: bytes,
    sid: Union[str, bytes],
    pid: int,
    points: Sequence[Point],
) -> Scalar:
    r"""
    Challenge  c = H(tag, sid, pid, P_1, …, P_n).

    Pure: identical inputs always give the identical scalar.

    Raises
    ------
    ChallengeDerivationFailed
        The digest, read as an integer, is ≥ q (probability ≈ 2^-128).
    ValueError
        ``pid`` is outside ``[0, 2**32)``.
    InvalidSessionId
        A ``str`` sid cannot be UTF-8 encoded.
    """
    h = hashlib.sha256()
    h.update(domain_tag)
    h.update(_encode_sid(sid))
    h.update(_encode_pid(pid))
    for p in points:
        h.update(p.to_bytes())
    return _digest_to_scalar(h.digest())


__all__ = ["DOMAIN_SEPARATOR", "PID_BYTES", "hash_points"]
