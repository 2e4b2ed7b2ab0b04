import pytest

from dlogproof.curve import Scalar, G
from dlogproof.proofs import DLogProof


class FixedRandom:
    """Deterministic ``RandomSource`` handing out a fixed list of scalars."""

    def __init__(self, *values: int) -> None:
        self._values = [Scalar(v) for v in values]
        self.calls = 0

    def random_scalar(self) -> Scalar:
        v = self._values[self.calls % len(self._values)]
        self.calls += 1
        return v


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def keypair():
    """Random witness and statement  (x, y = x·G)."""
    x = Scalar.random()
    return x, x * G


@pytest.fixture
def proof(keypair):
    x, y = keypair
    return DLogProof.prove("sid", 1, x, y, G)
