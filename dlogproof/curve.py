"""
Elliptic curve arithmetic on secp256k1 via libsecp256k1.

Group operations (scalar multiplication, point addition, SEC 1 parsing)
are delegated to the C library ``coincurve``, which wraps Bitcoin Core's
libsecp256k1.  Parsing through the library also gives us the curve
membership check for free; secp256k1 has cofactor 1, so every point on
the curve lies in the prime-order group.

Install
-------
    pip install coincurve>=18.0.0

References
----------
- SEC 1 v2 §2.3.3-2.3.4  point encoding / decoding
- SEC 2 v2 §2.4.1        secp256k1 domain parameters
"""

from __future__ import annotations

import hmac
import secrets
from typing import Optional, Protocol

from coincurve import PrivateKey as _SK, PublicKey as _PK

from .errors import InvalidPointEncoding, InvalidScalarLength, InvalidScalarValue

# ── secp256k1 constants ─────────────────────────────────────────────────
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
SCALAR_BYTES = 32
COMPRESSED_BYTES = 33
UNCOMPRESSED_BYTES = 65

_IDENTITY_BYTES = b"\x00" * COMPRESSED_BYTES


# ── Scalar  (Z_q arithmetic, pure Python — field ops are fast) ──────────
class Scalar:
    """Element of the scalar field  Z_q  where *q* = ``ORDER``."""

    __slots__ = ("_v",)

    def __init__(self, value: int) -> None:
        self._v = value % ORDER

    # constructors -----------------------------------------------------------
    @classmethod
    def zero(cls) -> Scalar:
        return cls(0)

    @classmethod
    def one(cls) -> Scalar:
        return cls(1)

    @classmethod
    def random(cls) -> Scalar:
        """Uniform in [1, q-1] via rejection sampling."""
        while True:
            c = int.from_bytes(secrets.token_bytes(SCALAR_BYTES), "big")
            if 0 < c < ORDER:
                return cls(c)

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:
        """Strict decode: exactly 32 big-endian bytes encoding a value < q."""
        if len(data) != SCALAR_BYTES:
            raise InvalidScalarLength(
                f"need {SCALAR_BYTES} bytes, got {len(data)}"
            )
        v = int.from_bytes(data, "big")
        if v >= ORDER:
            raise InvalidScalarValue("scalar out of range")
        return cls(v)

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._v.to_bytes(SCALAR_BYTES, "big")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    # arithmetic -------------------------------------------------------------
    def __add__(self, o: Scalar) -> Scalar:
        if not isinstance(o, Scalar):
            return NotImplemented
        return Scalar(self._v + o._v)

    def __sub__(self, o: Scalar) -> Scalar:
        if not isinstance(o, Scalar):
            return NotImplemented
        return Scalar(self._v - o._v)

    def __mul__(self, o):
        if isinstance(o, Scalar):
            return Scalar(self._v * o._v)
        if isinstance(o, Point):
            return o._smul(self)
        return NotImplemented

    def __rmul__(self, o):
        if isinstance(o, int):
            return Scalar(o * self._v)
        return NotImplemented

    def __neg__(self) -> Scalar:
        return Scalar(-self._v)

    # comparison -------------------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, Scalar):
            return self._v == o._v
        if isinstance(o, int):
            return self._v == o % ORDER
        return False

    def __repr__(self) -> str:
        h = hex(self._v)
        return f"Scalar(0x{h[2:10]}…)" if len(h) > 14 else f"Scalar({h})"


# ── Point  (secp256k1 group element via libsecp256k1) ───────────────────
class Point:
    """
    Point on secp256k1.

    The identity (point at infinity) is represented by a flag rather than
    a ``coincurve.PublicKey``; libsecp256k1 cannot hold the identity in a
    public key object.  Its byte encoding is 33 zero bytes, the same
    convention other secp256k1 libraries use for ``to_bytes()`` of the
    identity, so transcripts hash identically.
    """

    __slots__ = ("_pk", "_inf")

    def __init__(self, *, pk: Optional[_PK] = None, infinity: bool = False):
        self._pk: Optional[_PK] = pk
        self._inf: bool = infinity

    # constructors -----------------------------------------------------------
    @classmethod
    def generator(cls) -> Point:
        """Standard base point *G*."""
        return cls(pk=_SK(b"\x00" * 31 + b"\x01").public_key)

    @classmethod
    def identity(cls) -> Point:
        """Point at infinity — additive identity."""
        return cls(infinity=True)

    @classmethod
    def from_bytes(cls, data: bytes, *, allow_infinity: bool = False) -> Point:
        """
        Deserialise SEC 1 compressed (33 B) or uncompressed (65 B).

        libsecp256k1 rejects x-coordinates with no matching y and
        uncompressed pairs that miss the curve equation.  The identity is
        only accepted as 33 zero bytes, and only with ``allow_infinity``.
        """
        if data == _IDENTITY_BYTES:
            if allow_infinity:
                return cls.identity()
            raise InvalidPointEncoding("point at infinity not permitted")
        if len(data) == COMPRESSED_BYTES:
            if data[0] not in (0x02, 0x03):
                raise InvalidPointEncoding(
                    f"bad compressed prefix 0x{data[0]:02x}"
                )
        elif len(data) == UNCOMPRESSED_BYTES:
            if data[0] != 0x04:
                raise InvalidPointEncoding(
                    f"bad uncompressed prefix 0x{data[0]:02x}"
                )
        else:
            raise InvalidPointEncoding(
                f"need {COMPRESSED_BYTES} or {UNCOMPRESSED_BYTES} bytes, "
                f"got {len(data)}"
            )
        try:
            pk = _PK(bytes(data))
        except ValueError as exc:
            raise InvalidPointEncoding("point is not on secp256k1") from exc
        return cls(pk=pk)

    # serialisation ----------------------------------------------------------
    def to_bytes_compressed(self) -> bytes:
        if self._inf:
            return _IDENTITY_BYTES
        return self._pk.format(compressed=True)  # type: ignore[union-attr]

    def to_bytes(self) -> bytes:
        """Canonical encoding: compressed SEC 1, also fed to the challenge hash."""
        return self.to_bytes_compressed()

    def to_bytes_uncompressed(self) -> bytes:
        if self._inf:
            raise InvalidPointEncoding("identity has no affine coordinates")
        return self._pk.format(compressed=False)  # type: ignore[union-attr]

    @property
    def x(self) -> int:
        if self._inf:
            return 0
        raw = self._pk.format(compressed=False)  # type: ignore[union-attr]
        return int.from_bytes(raw[1:33], "big")

    @property
    def y(self) -> int:
        if self._inf:
            return 0
        raw = self._pk.format(compressed=False)  # type: ignore[union-attr]
        return int.from_bytes(raw[33:65], "big")

    def is_inf(self) -> bool:
        return self._inf

    # group operations -------------------------------------------------------
    def _smul(self, s: Scalar) -> Point:
        """Scalar multiplication  s · self  (C speed)."""
        if self._inf or s.is_zero():
            return Point.identity()
        copy = _PK(self._pk.format())  # type: ignore[union-attr]
        return Point(pk=copy.multiply(s.to_bytes()))

    def __neg__(self) -> Point:
        if self._inf:
            return self
        raw = bytearray(self._pk.format(compressed=True))  # type: ignore
        raw[0] ^= 0x01            # 0x02 ↔ 0x03 flip parity
        return Point(pk=_PK(bytes(raw)))

    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        if self._inf:
            return o
        if o._inf:
            return self
        # check for P + (-P) = O
        if self._pk.format() == (-o)._pk.format():  # type: ignore
            return Point.identity()
        return Point(pk=_PK.combine_keys(
            [self._pk, o._pk]))  # type: ignore[list-item]

    def __sub__(self, o: Point) -> Point:
        return self + (-o)

    def __rmul__(self, s) -> Point:
        if isinstance(s, Scalar):
            return self._smul(s)
        if isinstance(s, int):
            return self._smul(Scalar(s))
        return NotImplemented

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        if self._inf and o._inf:
            return True
        if self._inf or o._inf:
            return False
        return self._pk.format() == o._pk.format()  # type: ignore

    def ct_eq(self, o: Point) -> bool:
        """Constant-time equality over the canonical 33-byte encodings."""
        return hmac.compare_digest(self.to_bytes(), o.to_bytes())

    def __repr__(self) -> str:
        if self._inf:
            return "Point(∞)"
        return f"Point(0x{self.x:064x})"[:42] + "…)"


# ── randomness capability ───────────────────────────────────────────────
class RandomSource(Protocol):
    """Anything able to hand out a fresh uniformly random scalar."""

    def random_scalar(self) -> Scalar:
        ...


class SystemRandom:
    """
    Production source backed by the OS CSPRNG (``secrets``).

    Stateless, so one instance may be shared between threads.
    """

    def random_scalar(self) -> Scalar:
        return Scalar.random()


# ── module-level generator ──────────────────────────────────────────────
G = Point.generator()
