"""
Tests for the hex / JSON codec.

Covers:
- field and record round-trips, canonical lowercase output
- typed rejection of malformed hex, points and scalars
- identity between the codec's point bytes and the challenge input
"""

import json

import pytest

from dlogproof.curve import Scalar, Point, G, ORDER, FIELD_PRIME
from dlogproof.errors import (
    DLogProofError,
    InvalidHexEncoding,
    InvalidPointEncoding,
    InvalidProofEncoding,
    InvalidScalarLength,
    InvalidScalarValue,
)
from dlogproof.hash import DOMAIN_SEPARATOR, hash_points
from dlogproof.proofs import DLogProof
from dlogproof.serialization import (
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

G_HEX = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


def _off_curve_hex() -> str:
    x = 1
    while True:
        rhs = (pow(x, 3, FIELD_PRIME) + 7) % FIELD_PRIME
        if pow(rhs, (FIELD_PRIME - 1) // 2, FIELD_PRIME) != 1:
            return "02" + x.to_bytes(32, "big").hex()
        x += 1


# ─────────────────────────────────────────────────────────────────────
# Points
# ─────────────────────────────────────────────────────────────────────

class TestPointHex:

    def test_generator_vector(self):
        assert point_to_hex(G) == G_HEX
        assert point_from_hex(G_HEX) == G

    def test_odd_y_prefix(self):
        assert point_to_hex(-G) == "03" + G_HEX[2:]

    def test_round_trip(self):
        for k in (1, 2, 3, 0xABCDEF, ORDER - 1):
            P = Scalar(k) * G
            text = point_to_hex(P)
            assert len(text) == 66
            assert text == text.lower()
            assert point_from_hex(text) == P

    def test_uppercase_accepted(self):
        assert point_from_hex(G_HEX.upper()) == G

    def test_matches_hash_input_encoding(self):
        P = Scalar(42) * G
        assert point_to_hex(P) == P.to_bytes().hex()

    @pytest.mark.parametrize("text", ["0", "02zz", "0x" + G_HEX, G_HEX[:10] + " " + G_HEX[10:], "é"])
    def test_invalid_hex(self, text):
        with pytest.raises(InvalidHexEncoding):
            point_from_hex(text)

    def test_non_string(self):
        with pytest.raises(InvalidHexEncoding):
            point_from_hex(bytes.fromhex(G_HEX))

    @pytest.mark.parametrize("text", [
        G_HEX[:-2],                                  # 32 bytes
        G_HEX + "00",                                # 34 bytes
        "04" + G_HEX[2:],                            # uncompressed prefix
        "05" + G_HEX[2:],
        "",
    ])
    def test_invalid_point_bytes(self, text):
        with pytest.raises(InvalidPointEncoding):
            point_from_hex(text)

    def test_uncompressed_form_rejected(self):
        with pytest.raises(InvalidPointEncoding):
            point_from_hex(G.to_bytes_uncompressed().hex())

    def test_off_curve(self):
        with pytest.raises(InvalidPointEncoding):
            point_from_hex(_off_curve_hex())

    def test_x_not_below_field_prime(self):
        with pytest.raises(InvalidPointEncoding):
            point_from_hex("02" + FIELD_PRIME.to_bytes(32, "big").hex())

    def test_infinity_policy(self):
        zeros = "00" * 33
        with pytest.raises(InvalidPointEncoding):
            point_from_hex(zeros)
        assert point_from_hex(zeros, allow_infinity=True).is_inf()
        with pytest.raises(InvalidPointEncoding):
            point_to_hex(Point.identity())

    def test_infinity_round_trips_when_permitted(self):
        zeros = "00" * 33
        O = point_from_hex(zeros, allow_infinity=True)
        assert point_to_hex(O, allow_infinity=True) == zeros
        assert point_from_hex(point_to_hex(O, allow_infinity=True), allow_infinity=True) == O


# ─────────────────────────────────────────────────────────────────────
# Scalars
# ─────────────────────────────────────────────────────────────────────

class TestScalarHex:

    def test_fixed_width(self):
        assert scalar_to_hex(Scalar(1)) == "00" * 31 + "01"
        assert scalar_to_hex(Scalar(ORDER - 1)) == f"{ORDER - 1:064x}"

    def test_round_trip(self):
        s = Scalar.random()
        assert scalar_from_hex(scalar_to_hex(s)) == s

    def test_zero_is_valid(self):
        assert scalar_from_hex("00" * 32) == Scalar.zero()

    def test_odd_length(self):
        with pytest.raises(InvalidHexEncoding):
            scalar_from_hex("0" * 63)

    @pytest.mark.parametrize("nbytes", [0, 1, 31, 33, 64])
    def test_wrong_length(self, nbytes):
        with pytest.raises(InvalidScalarLength):
            scalar_from_hex("01" * nbytes)

    @pytest.mark.parametrize("value", [ORDER, ORDER + 1, 2**256 - 1])
    def test_not_below_order(self, value):
        with pytest.raises(InvalidScalarValue):
            scalar_from_hex(f"{value:064x}")

    def test_error_hierarchy(self):
        with pytest.raises(DLogProofError):
            scalar_from_hex("xyz")
        with pytest.raises(ValueError):
            scalar_from_hex(f"{ORDER:064x}")


# ─────────────────────────────────────────────────────────────────────
# Proof records
# ─────────────────────────────────────────────────────────────────────

class TestProofRecord:

    def test_dict_round_trip(self, proof):
        record = proof_to_dict(proof)
        assert set(record) == {"t", "s"}
        assert len(record["t"]) == 66
        assert len(record["s"]) == 64
        assert proof_from_dict(record) == proof

    def test_json_round_trip(self, proof):
        text = proof_to_json(proof)
        assert json.loads(text) == proof_to_dict(proof)
        restored = proof_from_json(text)
        assert restored.t == proof.t
        assert restored.s == proof.s

    def test_decoded_proof_verifies(self, keypair, proof):
        _, y = keypair
        restored = proof_from_json(proof_to_json(proof))
        assert restored.verify("sid", 1, y, G)

    def test_decoded_proof_reproduces_challenge(self, keypair, proof):
        _, y = keypair
        restored = proof_from_json(proof_to_json(proof))
        assert hash_points(DOMAIN_SEPARATOR, "sid", 1, [G, y, restored.t]) == \
            hash_points(DOMAIN_SEPARATOR, "sid", 1, [G, y, proof.t])

    def test_known_vector(self):
        proof = DLogProof(t=G, s=Scalar(1))
        assert proof_to_json(proof) == json.dumps({"t": G_HEX, "s": "00" * 31 + "01"})

    @pytest.mark.parametrize("text", ["", "not json", "[1, 2]", "{\"t\": 1, \"s\": 2}", "{\"t\": \"00\"}"])
    def test_malformed_record(self, text):
        with pytest.raises(InvalidProofEncoding):
            proof_from_json(text)

    def test_field_errors_surface(self, proof):
        record = proof_to_dict(proof)
        with pytest.raises(InvalidPointEncoding):
            proof_from_dict({"t": _off_curve_hex(), "s": record["s"]})
        with pytest.raises(InvalidScalarValue):
            proof_from_dict({"t": record["t"], "s": f"{ORDER:064x}"})
        with pytest.raises(InvalidHexEncoding):
            proof_from_dict({"t": record["t"], "s": "g" * 64})

    def test_uncompressed_dict(self, proof):
        view = proof_to_uncompressed_dict(proof)
        assert view["t"]["x"] == f"0x{proof.t.x:064x}"
        assert view["t"]["y"] == f"0x{proof.t.y:064x}"
        assert view["s"] == "0x" + scalar_to_hex(proof.s)
