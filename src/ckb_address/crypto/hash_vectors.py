"""CKB hash test vector generators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .blake2b import blake160, blake2b_256


@dataclass
class HashVector:
    name: str
    description: Optional[str]
    input_hex: str
    input_ascii: Optional[str]
    input_length: int
    expected_hex: str


def _inputs() -> List[tuple[str, Optional[str], bytes]]:
    return [
        ("empty_string", None, b""),
        ("abc", None, b"abc"),
        ("hello_world", None, b"Hello, world!"),
        ("127_bytes_a", "One byte short of a BLAKE2b block", bytes([0x61] * 127)),
        ("128_bytes_a", "Exactly one BLAKE2b block (128 bytes)", bytes([0x61] * 128)),
        ("129_bytes_a", "Requires two blocks (129 bytes)", bytes([0x61] * 129)),
        ("all_bytes", "All byte values 0x00-0xFF", bytes(range(0, 256))),
        (
            "compressed_pubkey",
            "33-byte compressed secp256k1 public key (generator point)",
            bytes.fromhex(
                "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
            ),
        ),
    ]


def _ascii(data: bytes) -> Optional[str]:
    if data and all(0x20 <= b < 0x7F for b in data) and len(data) < 64:
        return data.decode("ascii")
    return "" if not data else None


def _vectors(hash_fn) -> List[HashVector]:
    vectors: List[HashVector] = []
    for name, description, input_data in _inputs():
        vectors.append(
            HashVector(
                name=name,
                description=description,
                input_hex=input_data.hex(),
                input_ascii=_ascii(input_data),
                input_length=len(input_data),
                expected_hex=hash_fn(input_data).hex(),
            )
        )
    return vectors


def blake2b_256_vectors() -> Dict[str, Any]:
    return {
        "algorithm": "BLAKE2b-256",
        "personalization": "ckb-default-hash",
        "output_size": 32,
        "block_size": 128,
        "test_vectors": [v.__dict__ for v in _vectors(blake2b_256)],
    }


def blake160_vectors() -> Dict[str, Any]:
    return {
        "algorithm": "BLAKE160",
        "personalization": "ckb-default-hash",
        "output_size": 20,
        "block_size": 128,
        "test_vectors": [v.__dict__ for v in _vectors(blake160)],
    }
