"""
Non-interactive Schnorr proof of knowledge of a discrete logarithm.

Proves knowledge of  x  such that  Y = x·G  without revealing x:

    r ←$ Z_q
    t  = r·G
    c  = H(tag, sid, pid, G, Y, t)
    s  = r + c·x

Verification:  s·G  ==  t + c·Y.

The session id *sid* and participant id *pid* are not stored in the
proof; the verifier supplies them again and they must match exactly.

References
----------
- Schnorr (1989). "Efficient Identification and Signatures for Smart
  Cards."  CRYPTO 1989.
- Fiat & Shamir (1986). "How to Prove Yourself."  CRYPTO 1986.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .curve import Scalar, Point, G, COMPRESSED_BYTES, SCALAR_BYTES
from .curve import RandomSource, SystemRandom
from .errors import InvalidPointEncoding, InvalidProofEncoding
from .hash import DOMAIN_SEPARATOR, hash_points

logger = logging.getLogger(__name__)

PROOF_BYTES = COMPRESSED_BYTES + SCALAR_BYTES

_DEFAULT_RNG = SystemRandom()


@dataclass
class _Nonce:
    """Ephemeral  r:  used for exactly one proof, then erased."""

    r: Scalar

    def clear(self) -> None:
        """Overwrite the secret (best-effort in Python)."""
        self.r = Scalar.zero()


@dataclass(frozen=True)
class DLogProof:
    """
    Proof transcript  (t, s)  with  t = r·G  and  s = r + c·x.

    Holds no reference to x, r, sid or pid.  ``t`` is never the identity,
    so every proof has a compressed encoding.
    """

    t: Point
    s: Scalar

    def __post_init__(self) -> None:
        if not isinstance(self.t, Point):
            raise TypeError(f"t must be a Point, got {type(self.t).__name__}")
        if not isinstance(self.s, Scalar):
            raise TypeError(f"s must be a Scalar, got {type(self.s).__name__}")
        if self.t.is_inf():
            raise InvalidPointEncoding("commitment t is the point at infinity")

    @staticmethod
    def prove(
        sid: Union[str, bytes],
        pid: int,
        x: Scalar,
        y: Point,
        base_point: Point = G,
        rng: Optional[RandomSource] = None,
    ) -> DLogProof:
        """
        Produce a proof for  (x, y = x·base_point).

        The caller guarantees ``y == x * base_point``; it is not
        re-checked here.  A failed challenge derivation propagates and is
        not retried with a fresh nonce.

        Parameters
        ----------
        sid : str or bytes
            Session identifier bound into the challenge.
        pid : int
            Participant identifier, 0 ≤ pid < 2**32.
        x : Scalar
            The witness.
        y : Point
            The statement.
        base_point : Point
            Generator, secp256k1 *G* by default.
        rng : RandomSource, optional
            Nonce source; the OS CSPRNG unless a test substitutes one.
            A zero nonce gives t = O and raises ``InvalidPointEncoding``.
        """
        nonce = _Nonce((rng or _DEFAULT_RNG).random_scalar())
        try:
            t = nonce.r * base_point
            # order G, Y, t is part of the wire contract
            c = hash_points(DOMAIN_SEPARATOR, sid, pid, [base_point, y, t])
            s = nonce.r + c * x
        finally:
            nonce.clear()
            del nonce
        return DLogProof(t=t, s=s)

    def verify(
        self,
        sid: Union[str, bytes],
        pid: int,
        y: Point,
        base_point: Point = G,
    ) -> bool:
        """
        Check  s·G  ==  t + c·Y  for the given sid / pid / statement.

        Returns ``False`` for a proof that does not verify; raises only
        when the challenge itself cannot be derived.
        """
        c = hash_points(DOMAIN_SEPARATOR, sid, pid, [base_point, y, self.t])
        lhs = self.s * base_point
        rhs = self.t + (c * y)
        ok = lhs.ct_eq(rhs)
        logger.debug("dlog proof for pid %d: %s", pid, "valid" if ok else "invalid")
        return ok

    def to_bytes(self) -> bytes:
        """Serialise to 65 bytes: compressed t (33) + s (32)."""
        return self.t.to_bytes_compressed() + self.s.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> DLogProof:
        if len(data) != PROOF_BYTES:
            raise InvalidProofEncoding(
                f"expected {PROOF_BYTES} bytes, got {len(data)}"
            )
        t = Point.from_bytes(data[:COMPRESSED_BYTES])
        s = Scalar.from_bytes(data[COMPRESSED_BYTES:])
        return cls(t=t, s=s)


__all__ = ["DLogProof", "PROOF_BYTES"]
