"""Address test vectors (RFC 0021 examples plus negative payloads)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from . import text_codec
from .address import Address, AddressBuilder
from .errors import AddressError, ErrorCode
from .types import CodeHashIndex, CodeHashType, Network

SECP256K1_BLAKE160_TYPE_HASH = bytes.fromhex(
    "9bd7e06f3ecf4be0f2fcd2188b23f1b9fcc88e5d4b65a8637b17723bbda3cce8"
)

SHORT_KEY_HASH = bytes.fromhex("13e41d6f9292555916f17b4882a5477c01270142")
FULL_TYPE_ARG = bytes.fromhex("b39bbc0b3673c7d36450bc14cfcdad2d559c6c64")

MULTISIG_MEMBERS = (
    bytes.fromhex("bd07d9f32bce34d27152a6a0391d324f79aab854"),
    bytes.fromhex("094ee28566dff02a012a66505822a2fd67d668fb"),
    bytes.fromhex("4643c241e59e81b7876527ebff23dfb24cf16482"),
)
MULTISIG_COMMITMENT = bytes.fromhex("4fb2be2e5d0c1a3b8694f832350a33c1685d477a")

SHORT_ADDRESS = "ckb1qyqp8eqad7ffy42ezmchkjyz54rhcqf8q9pqrn323p"
FULL_TYPE_ADDRESS = (
    "ckb1qjda0cr08m85hc8jlnfp3zer7xulejywt49kt2rr0vthywaa50xw3vumhs9nvu786dj9p0q5elx66t24n3kxgj53qks"
)
MULTISIG_ADDRESS = "ckb1qyq5lv479ewscx3ms620sv34pgeuz6zagaaqklhtgg"


@dataclass
class AddressVector:
    name: str
    description: Optional[str]
    address: Address
    expected: str


@dataclass
class NegativeVector:
    name: str
    description: str
    text: str
    error: ErrorCode


def short_address() -> Address:
    return AddressBuilder().args_simple(SHORT_KEY_HASH).build()


def full_type_address() -> Address:
    return (
        AddressBuilder()
        .code_hash_by_data(CodeHashType.TYPE, SECP256K1_BLAKE160_TYPE_HASH)
        .args_simple(FULL_TYPE_ARG)
        .build()
    )


def multisig_address() -> Address:
    return (
        AddressBuilder()
        .code_hash_by_index(CodeHashIndex.SECP256K1_MULTISIG)
        .args_multisig(first_n_required=1, threshold=2, contents=MULTISIG_MEMBERS)
        .build()
    )


def address_vectors() -> List[AddressVector]:
    return [
        AddressVector(
            name="short_secp256k1_blake160",
            description="Mainnet short format, single key hash",
            address=short_address(),
            expected=SHORT_ADDRESS,
        ),
        AddressVector(
            name="full_type_secp256k1_blake160",
            description="Mainnet full format with a type code hash",
            address=full_type_address(),
            expected=FULL_TYPE_ADDRESS,
        ),
        AddressVector(
            name="short_secp256k1_multisig",
            description="Mainnet short format, 2-of-3 multisig with the first member required",
            address=multisig_address(),
            expected=MULTISIG_ADDRESS,
        ),
    ]


def _encode(payload: bytes, prefix: str = Network.MAIN.prefix) -> str:
    return text_codec.encode(prefix, payload)


def negative_vectors() -> List[NegativeVector]:
    short_payload = bytes([0x01, 0x00]) + SHORT_KEY_HASH
    return [
        NegativeVector(
            name="truncated_checksum",
            description="Last character dropped",
            text=SHORT_ADDRESS[:-1],
            error=ErrorCode.BECH32,
        ),
        NegativeVector(
            name="unknown_prefix",
            description="Valid checksum under a foreign prefix",
            text=_encode(short_payload, prefix="bc"),
            error=ErrorCode.UNKNOWN_NETWORK,
        ),
        NegativeVector(
            name="empty_payload",
            description="No format byte",
            text=_encode(b""),
            error=ErrorCode.INVALID_DATA_SINCE,
        ),
        NegativeVector(
            name="unknown_payload_format",
            description="Format tag 0x03",
            text=_encode(bytes([0x03]) + short_payload[1:]),
            error=ErrorCode.UNKNOWN_PAYLOAD_FORMAT,
        ),
        NegativeVector(
            name="unknown_code_hash_index",
            description="Index 0x7f is not registered",
            text=_encode(bytes([0x01, 0x7F]) + SHORT_KEY_HASH),
            error=ErrorCode.UNKNOWN_CODE_HASH_INDEX,
        ),
        NegativeVector(
            name="short_missing_index",
            description="Short format tag without an index byte",
            text=_encode(bytes([0x01])),
            error=ErrorCode.INVALID_DATA_SINCE,
        ),
        NegativeVector(
            name="short_args_too_short",
            description="19-byte short format args",
            text=_encode(short_payload[:-1]),
            error=ErrorCode.SHORT_FORMAT_ARGS,
        ),
        NegativeVector(
            name="short_args_too_long",
            description="21-byte short format args",
            text=_encode(short_payload + b"\x00"),
            error=ErrorCode.SHORT_FORMAT_ARGS,
        ),
        NegativeVector(
            name="full_truncated_code_hash",
            description="Full format with a 31-byte code hash",
            text=_encode(bytes([0x04]) + SECP256K1_BLAKE160_TYPE_HASH[:-1]),
            error=ErrorCode.INVALID_DATA_SINCE,
        ),
    ]


def address_vectors_json() -> Dict[str, Any]:
    out: List[Dict[str, Any]] = []
    for v in address_vectors():
        out.append(
            {
                "name": v.name,
                "description": v.description,
                "input": v.address.describe(),
                "payload_hex": v.address.payload().hex(),
                "expected": v.expected,
            }
        )
    for n in negative_vectors():
        try:
            Address.parse(n.text)
        except AddressError as exc:
            actual = exc.code.name
        else:
            actual = None
        out.append(
            {
                "name": n.name,
                "description": n.description,
                "input": n.text,
                "expected_error": n.error.name,
                "actual_error": actual,
            }
        )
    return {"format": "ckb-address", "test_vectors": out}
