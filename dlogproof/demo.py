"""
Demonstration entry point.

Generates a random secret, proves and verifies knowledge of it, then
prints the proof in several forms and checks that the compressed JSON
form parses back to the same proof.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import List, Optional

from .curve import Scalar, G
from .proofs import DLogProof
from .serialization import (
    proof_from_json,
    proof_to_json,
    proof_to_uncompressed_dict,
    scalar_to_hex,
)

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def print_proof_in_multiple_formats(proof: DLogProof) -> None:
    print("Printing proof...")

    print("-----Original-----")
    print(f"DLogProof {{ t: Point(0x{proof.t.to_bytes().hex()}), "
          f"s: Scalar(0x{scalar_to_hex(proof.s)}) }}")

    print("-----Affine-----")
    print(f"t: ({proof.t.x:#066x}, {proof.t.y:#066x})")

    print("-----HEX-----")
    raw = proof.t.to_bytes_uncompressed()
    print(f"t.x: 0x{raw[1:33].hex()}")
    print(f"t.y: 0x{raw[33:65].hex()}")
    print(f"s: 0x{scalar_to_hex(proof.s)}")

    print_proof_json(proof)


def print_proof_json(proof: DLogProof) -> None:
    print("-----JSON-----")
    # compressed: 02 (even y) / 03 (odd y) prefix + x-coordinate
    text = proof_to_json(proof)
    print(f"Compressed JSON (standard): {text}")

    uncompressed = proof_to_uncompressed_dict(proof)
    print("Uncompressed JSON (with both coordinates):")
    print(f"compact: {json.dumps(uncompressed)}")
    print(f"pretty: {json.dumps(uncompressed, indent=2)}")

    parsed = proof_from_json(text)
    print(f"Parsed proof from JSON: \n{parsed}")
    if parsed != proof:
        raise AssertionError("Parsed proof doesn't match original")
    print("✅ DLog proof recovered successfully!")


def run(sid: str, pid: int) -> bool:
    x = Scalar.random()
    y = x * G

    start = time.perf_counter()
    proof = DLogProof.prove(sid, pid, x, y, G)
    print(f"Proof computation time: {(time.perf_counter() - start) * 1000:.3f} ms")

    start = time.perf_counter()
    ok = proof.verify(sid, pid, y, G)
    print(f"Verify computation time: {(time.perf_counter() - start) * 1000:.3f} ms")

    if ok:
        print("✅ DLOG proof is correct")
    else:
        print("❌ DLOG proof is not correct")

    print_proof_in_multiple_formats(proof)
    return ok


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Schnorr discrete-log proof demonstration")
    parser.add_argument('--sid', type=str, default="sid",
                        help='Session identifier bound into the challenge')
    parser.add_argument('--pid', type=int, default=1,
                        help='Participant identifier (unsigned 32-bit)')
    parser.add_argument('--log-level', type=str, default="WARNING",
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        ok = run(args.sid, args.pid)
    except (ValueError, AssertionError) as exc:
        logger.error("demo failed: %s", exc)
        return 1
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
